#!/usr/bin/env python3
"""
JSON web interface for the proof kernel.

- POST /api/verify        proof JSON {given, goal, steps} or {"proof": "<plain text>"}
- POST /api/parse         {"formula"} -> canonical and ASCII forms
- POST /api/infer         {given, steps, step} -> conclusion and normalized step
- POST /api/axiom         {"axiom": n, "alpha", "beta", "gamma"?} -> instance
- POST /api/tautology     {"formula"}
- POST /api/entails       {"premises": [...], "conclusion"}
- POST /api/truth-table   {"formulas": [...]}

Every endpoint is stateless; nothing is stored between requests.
"""
from flask import Flask, jsonify, request

from .checker import check_proof, check_refutation, derived_lines
from .codec import (entailment_to_dict, justification_from_dict, justification_to_dict,
                    proof_from_dict, proof_from_text, result_to_dict, truth_table_to_dict)
from .config import Config
from .errors import CodecError, KernelError, MissingInstantiation, ParseError
from .formula import parse, show, to_ascii
from .log import get_logger
from .rules import infer_step
from .schema import axiom_instance
from .semantics import entails, is_tautology, truth_table

logger = get_logger(__name__)

app = Flask(__name__)


def _payload() -> dict:
    data = request.get_json(force=True, silent=True)
    if not isinstance(data, dict):
        raise KernelError("request body must be a JSON object")
    return data


def _formula(value, name: str):
    if not isinstance(value, str):
        raise CodecError(f"{name} must be formula text")
    return parse(value)


def _formulas(values, name: str) -> list:
    if not isinstance(values, list):
        raise CodecError(f"{name} must be a list of formula texts")
    return [_formula(v, name) for v in values]


@app.errorhandler(KernelError)
def kernel_error(e: KernelError):
    body = {"error": str(e), "kind": type(e).__name__}
    if isinstance(e, ParseError) and e.position is not None:
        body["position"] = e.position
    logger.info("rejected request: %s", e)
    return jsonify(body), 400


@app.route("/api/verify", methods=["POST"])
def api_verify():
    data = _payload()
    if "proof" in data:
        steps, goal, given = proof_from_text(data["proof"])
    else:
        steps, goal, given = proof_from_dict(data)
    if data.get("goalMode") == "contradiction":
        result = check_refutation(steps, given)
    else:
        result = check_proof(steps, goal, given)
    return jsonify(result_to_dict(result))


@app.route("/api/parse", methods=["POST"])
def api_parse():
    text = show(_formula(_payload().get("formula"), "formula"))
    return jsonify({"formula": text, "ascii": to_ascii(text)})


@app.route("/api/infer", methods=["POST"])
def api_infer():
    data = _payload()
    steps, _, given = proof_from_dict(data)
    lines = derived_lines(steps, given)
    if any(f is None for f in lines):
        raise KernelError("the proof so far contains unparsable lines")
    step = data.get("step")
    j, conclusion = infer_step(justification_from_dict({} if step is None else step), lines)
    return jsonify({"formula": show(conclusion), "line": len(lines) + 1,
                    "step": justification_to_dict(j)})


@app.route("/api/axiom", methods=["POST"])
def api_axiom():
    data = _payload()
    n = data.get("axiom")
    if n not in (1, 2, 3):
        raise KernelError("axiom must be 1, 2 or 3")
    bindings = {k: data.get(k) for k in ("alpha", "beta", "gamma")}
    for k, v in bindings.items():
        if v is not None and not isinstance(v, str):
            raise CodecError(f"{k} must be formula text")
    try:
        f = axiom_instance(n, **bindings)
    except MissingInstantiation as e:
        raise KernelError(f"A{n}: {e}") from e
    return jsonify({"formula": show(f), "rule": "AX", "axiom": n})


@app.route("/api/tautology", methods=["POST"])
def api_tautology():
    f = _formula(_payload().get("formula"), "formula")
    return jsonify({"formula": show(f), "tautology": is_tautology(f)})


@app.route("/api/entails", methods=["POST"])
def api_entails():
    data = _payload()
    premises = _formulas(data.get("premises", []), "premises")
    conclusion = _formula(data.get("conclusion"), "conclusion")
    return jsonify(entailment_to_dict(entails(premises, conclusion)))


@app.route("/api/truth-table", methods=["POST"])
def api_truth_table():
    formulas = _formulas(_payload().get("formulas", []), "formulas")
    return jsonify(truth_table_to_dict(truth_table(formulas)))


def main():
    app.run(host=Config.HOST, port=Config.PORT, debug=Config.DEBUG)


if __name__ == "__main__":
    main()
