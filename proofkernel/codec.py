"""
JSON shapes exchanged with front ends.

A step looks like ``{"line": 3, "formula": "B", "rule": "MP", "refs": [1, 2]}``;
SIMP adds ``"pick": "left"|"right"``, IFF adds ``"dir": "L->R"|"R->L"`` and AX
carries ``"axiom": n`` (``"rule": "A2"`` is accepted as shorthand).
"""

from __future__ import annotations
import re
from typing import Any, Dict, List, Sequence

from .checker import CheckResult, Step
from .errors import CodecError
from .rules import (ADJ, AX, DS, HS, IFF, MP, MT, RULES, SIMP, Direction,
                    Justification, Side)
from .semantics import Entailment, TruthTable

ARITY = {"MP": 2, "MT": 2, "HS": 2, "ADJ": 2, "DS": 2, "SIMP": 1, "IFF": 1}

SIDES = {"left": Side.LEFT, "l": Side.LEFT, "right": Side.RIGHT, "r": Side.RIGHT}
DIRECTIONS = {"l->r": Direction.LTR, "ltr": Direction.LTR, "l→r": Direction.LTR,
              "r->l": Direction.RTL, "rtl": Direction.RTL, "r→l": Direction.RTL}


def _refs(data: Dict[str, Any], rule: str) -> List[int]:
    refs = data.get("refs", [])
    if not isinstance(refs, list) or not all(isinstance(r, int) and not isinstance(r, bool) for r in refs):
        raise CodecError(f"{rule}: refs must be a list of line numbers")
    if len(refs) != ARITY[rule]:
        raise CodecError(f"{rule} cites {ARITY[rule]} line(s), got {len(refs)}")
    return refs


def justification_from_dict(data: Dict[str, Any]) -> Justification:
    if not isinstance(data, dict):
        raise CodecError("a justification must be a JSON object")
    rule =str(data.get("rule", "")).strip().upper()
    if rule in ("A1", "A2", "A3"):
        return AX(int(rule[1]))
    if rule not in RULES:
        raise CodecError(f"unknown rule {data.get('rule')!r}")
    if rule == "AX":
        axiom = data.get("axiom")
        if axiom not in (1, 2, 3):
            raise CodecError("AX needs \"axiom\": 1, 2 or 3")
        return AX(axiom)
    refs = _refs(data, rule)
    if rule == "MP":
        return MP(*refs)
    if rule == "MT":
        return MT(*refs)
    if rule == "HS":
        return HS(*refs)
    if rule == "ADJ":
        return ADJ(*refs)
    if rule == "DS":
        return DS(*refs)
    if rule == "SIMP":
        pick = SIDES.get(str(data.get("pick", "")).lower())
        if pick is None:
            raise CodecError("SIMP needs \"pick\": \"left\" or \"right\"")
        return SIMP(refs[0], pick)
    direction = DIRECTIONS.get(str(data.get("dir", "")).replace(" ", "").lower())
    if direction is None:
        raise CodecError("IFF needs \"dir\": \"L->R\" or \"R->L\"")
    return IFF(refs[0], direction)


def justification_to_dict(j: Justification) -> Dict[str, Any]:
    if isinstance(j, AX):
        return {"rule": "AX", "axiom": j.axiom}
    out: Dict[str, Any] = {"rule": j.rule, "refs": list(j.references)}
    if isinstance(j, SIMP):
        out["pick"] = j.pick.value
    if isinstance(j, IFF):
        out["dir"] = j.direction.value
    return out


def step_from_dict(data: Dict[str, Any], default_line: int) -> Step:
    if not isinstance(data, dict):
        raise CodecError("a step must be a JSON object")
    formula = data.get("formula")
    if not isinstance(formula, str):
        raise CodecError(f"step {default_line}: missing formula text")
    line = data.get("line", default_line)
    if not isinstance(line, int) or isinstance(line, bool):
        raise CodecError(f"step {default_line}: line must be an integer")
    return Step(line=line, formula=formula, justification=justification_from_dict(data))


def step_to_dict(step: Step) -> Dict[str, Any]:
    out: Dict[str, Any] = {"line": step.line, "formula": step.formula}
    out.update(justification_to_dict(step.justification))
    return out


def steps_from_list(items: Sequence[Dict[str, Any]], given_count: int = 0) -> List[Step]:
    """Decode steps; a step without "line" gets the next line after the givens."""
    if not isinstance(items, list):
        raise CodecError("steps must be a JSON list")
    return [step_from_dict(item, given_count + k + 1) for k, item in enumerate(items)]


def proof_from_dict(data: Dict[str, Any]):
    """Return (steps, goal, given) from ``{"given": [...], "goal": "...", "steps": [...]}``."""
    given = data.get("given", [])
    if not isinstance(given, list) or not all(isinstance(g, str) for g in given):
        raise CodecError("given must be a list of formula texts")
    goal = data.get("goal")
    if goal is not None and not isinstance(goal, str):
        raise CodecError("goal must be formula text")
    return steps_from_list(data.get("steps", []), len(given)), goal, given


def result_to_dict(result: CheckResult) -> Dict[str, Any]:
    return {
        "ok": result.ok,
        "errors": [{"line": e.line, "message": e.message, "kind": e.kind} for e in result.errors],
    }


def entailment_to_dict(result: Entailment) -> Dict[str, Any]:
    return {
        "valid": result.valid,
        "exhaustive": result.exhaustive,
        "countermodels": [dict(m) for m in result.countermodels],
    }


def truth_table_to_dict(table: TruthTable) -> Dict[str, Any]:
    return {
        "vars": list(table.variables),
        "rows": [{"valuation": dict(r.valuation), "values": list(r.values)} for r in table.rows],
    }

# =========================
# Plain-text proofs
# =========================

_TAG = re.compile(
    r"^(?P<rule>[A-Za-z]+)\s*(?P<n>\d+)?"
    r"(?:\s*[,\s]\s*(?P<m>\d+))?"
    r"(?:\s*[.\s]\s*(?P<side>[LRlr]))?"
    r"(?:\s+(?P<dir>[LRlr]\s*(?:->|→)\s*[LRlr]))?\s*$")


def justification_from_tag(tag: str) -> Justification:
    """Read the short form printed by Justification.tag(), e.g. "MP 1,2", "SIMP 3.L"."""
    m = _TAG.match(tag.strip())
    if not m:
        raise CodecError(f"cannot read justification {tag!r}")
    rule = m["rule"].upper()
    if rule in ("A", "AX") and m["n"]:
        rule = f"A{m['n']}"
    data: Dict[str, Any] = {"rule": rule, "refs": [int(x) for x in (m["n"], m["m"]) if x]}
    if m["side"]:
        data["pick"] = m["side"]
    if m["dir"]:
        data["dir"] = m["dir"].replace("→", "->")
    return justification_from_dict(data)


_STEP_LINE = re.compile(r"^(?:(?P<line>\d+)\.\s*)?(?P<formula>.+?)\s*\[(?P<tag>[^\]]+)\]\s*$")
_HEADER = re.compile(r"^(?P<key>Given|Premise|Goal)\s*:\s*(?P<text>.+)$", re.I)


def proof_from_text(text: str):
    """Return (steps, goal, given) from a plain-text proof.

        Given: A
        Given: A->B
        Goal: B
        B  [MP 1,2]
    """
    if not isinstance(text, str):
        raise CodecError("a plain-text proof must be a string")
    given: List[str] = []
    goal = None
    rows = []
    for raw in text.splitlines():
        ln = raw.strip()
        if not ln or ln.startswith("#"):
            continue
        h = _HEADER.match(ln)
        if h:
            if h["key"].lower() == "goal":
                goal = h["text"].strip()
            else:
                given.append(h["text"].strip())
            continue
        m = _STEP_LINE.match(ln)
        if not m:
            raise CodecError(f"cannot read proof line {ln!r}")
        rows.append(m)
    steps = []
    for k, m in enumerate(rows):
        line = int(m["line"]) if m["line"] else len(given) + k + 1
        steps.append(Step(line, m["formula"], justification_from_tag(m["tag"])))
    return steps, goal, given
