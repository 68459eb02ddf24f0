"""
Command-line front end.

  proofkernel check [proof.json]         verify a proof (built-in demo without a file)
  proofkernel show FORMULA [--ascii]     canonical form
  proofkernel taut FORMULA               tautology test
  proofkernel entails P... -c C          entailment with countermodels
  proofkernel table FORMULA...           truth table
  proofkernel axiom N --alpha A ...      axiom instance
  proofkernel exercise FILE ID proof.json
"""

import argparse
import json
import pathlib
import sys
from typing import Any, Dict, Optional, Sequence

from .checker import check_proof
from .codec import (entailment_to_dict, proof_from_dict, result_to_dict,
                    steps_from_list, truth_table_to_dict)
from .errors import CodecError, KernelError, ParseError
from .exercises import find_exercise, load_exercises, verify_exercise
from .formula import parse, show, to_ascii
from .schema import axiom_instance
from .semantics import entails, is_tautology, truth_table

DEMO: Dict[str, Any] = {
    "given": ["A", "(A->B)"],
    "goal": "B",
    "steps": [
        {"line": 3, "formula": "B", "rule": "MP", "refs": [1, 2]}
    ],
}


def _read_json(path: str) -> Any:
    return json.loads(pathlib.Path(path).read_text(encoding="utf-8"))


def _emit(data: Any) -> None:
    print(json.dumps(data, ensure_ascii=False, indent=2))


def handle_check(args) -> int:
    data = _read_json(args.file) if args.file else DEMO
    steps, goal, given = proof_from_dict(data)
    result = check_proof(steps, goal, given)
    print("=== Verification Report ===")
    _emit(result_to_dict(result))
    return 0 if result.ok else 1


def handle_show(args) -> int:
    text = show(parse(args.formula))
    print(to_ascii(text) if args.ascii else text)
    return 0


def handle_taut(args) -> int:
    f = parse(args.formula)
    ok = is_tautology(f)
    print(f"{show(f)}: {'tautology' if ok else 'not a tautology'}")
    return 0 if ok else 1


def handle_entails(args) -> int:
    result = entails([parse(p) for p in args.premises], parse(args.conclusion))
    _emit(entailment_to_dict(result))
    return 0 if result.valid else 1


def handle_table(args) -> int:
    _emit(truth_table_to_dict(truth_table([parse(f) for f in args.formulas])))
    return 0


def handle_axiom(args) -> int:
    f = axiom_instance(args.n, alpha=args.alpha, beta=args.beta, gamma=args.gamma)
    print(show(f))
    return 0


def handle_exercise(args) -> int:
    exercise = find_exercise(load_exercises(args.catalog), args.id)
    data = _read_json(args.proof)
    items = data.get("steps", []) if isinstance(data, dict) else data
    result = verify_exercise(exercise, steps_from_list(items, len(exercise.given)))
    _emit(result_to_dict(result))
    return 0 if result.ok else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="proofkernel",
                                     description="Propositional proof kernel")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("check", help="verify a proof given as JSON")
    p.add_argument("file", nargs="?", help="proof JSON (given, goal, steps)")
    p.set_defaults(func=handle_check)

    p = sub.add_parser("show", help="print the canonical form of a formula")
    p.add_argument("formula")
    p.add_argument("--ascii", action="store_true", help="use ASCII connectives")
    p.set_defaults(func=handle_show)

    p = sub.add_parser("taut", help="test whether a formula is a tautology")
    p.add_argument("formula")
    p.set_defaults(func=handle_taut)

    p = sub.add_parser("entails", help="test premises |= conclusion")
    p.add_argument("premises", nargs="*")
    p.add_argument("-c", "--conclusion", required=True)
    p.set_defaults(func=handle_entails)

    p = sub.add_parser("table", help="print a truth table")
    p.add_argument("formulas", nargs="+")
    p.set_defaults(func=handle_table)

    p = sub.add_parser("axiom", help="instantiate axiom schema A1, A2 or A3")
    p.add_argument("n", type=int, choices=[1, 2, 3])
    p.add_argument("--alpha", required=True)
    p.add_argument("--beta", required=True)
    p.add_argument("--gamma")
    p.set_defaults(func=handle_axiom)

    p = sub.add_parser("exercise", help="verify a proof against an exercise")
    p.add_argument("catalog", help="exercise catalog JSON")
    p.add_argument("id", help="exercise id")
    p.add_argument("proof", help="steps JSON (a list, or an object with \"steps\")")
    p.set_defaults(func=handle_exercise)
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return args.func(args)
    except ParseError as e:
        print(f"parse error: {e}", file=sys.stderr)
        return 2
    except KeyError as e:
        print(f"not found: {e}", file=sys.stderr)
        return 2
    except CodecError as e:
        print(f"bad input: {e}", file=sys.stderr)
        return 2
    except KernelError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    except (OSError, json.JSONDecodeError) as e:
        print(f"cannot read input: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
