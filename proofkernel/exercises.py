"""
Exercise catalog and rule allow-lists.

The kernel itself is rule-set agnostic. Exercises restrict which rules and
axioms a student may use; that gate runs here, before a proof ever reaches
check_proof.
"""

from __future__ import annotations
import json
import pathlib
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, Tuple

from .checker import CheckResult, LineError, Step, check_proof, check_refutation
from .errors import CodecError
from .rules import AX

CONTRADICTION = "contradiction"


@dataclass(frozen=True)
class Exercise:
    id: str
    title: str
    goal: str = ""
    given: Tuple[str, ...] = ()
    goal_mode: str = "formula"
    rules: Tuple[str, ...] = ("MP",)
    axioms: Tuple[int, ...] = (1, 2, 3)
    hints: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def refutation(self) -> bool:
        return self.goal_mode == CONTRADICTION


def exercise_from_dict(data: Dict[str, Any]) -> Exercise:
    try:
        allowed = data.get("allowed") or {}
        return Exercise(
            id=str(data["id"]),
            title=str(data.get("title", data["id"])),
            goal=data.get("goal", ""),
            given=tuple(data.get("given") or ()),
            goal_mode=data.get("goalMode", "formula"),
            rules=tuple(r.upper() for r in allowed.get("rules", ["MP"])),
            axioms=tuple(int(a) for a in allowed.get("axioms", [1, 2, 3])),
            hints=tuple(data.get("hints") or ()),
        )
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise CodecError(f"malformed exercise: {e}") from e


def load_exercises(path) -> List[Exercise]:
    data = json.loads(pathlib.Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise CodecError("an exercise file holds a JSON list")
    return [exercise_from_dict(d) for d in data]


def find_exercise(exercises: Sequence[Exercise], exercise_id: str) -> Exercise:
    for ex in exercises:
        if ex.id == exercise_id:
            return ex
    raise KeyError(exercise_id)


def disallowed_steps(exercise: Exercise, steps: Sequence[Step]) -> List[LineError]:
    errors: List[LineError] = []
    for step in steps:
        j = step.justification
        if isinstance(j, AX):
            if j.axiom not in exercise.axioms:
                errors.append(LineError(step.line, f"A{j.axiom} is not allowed in this exercise", "NotAllowed"))
        elif j.rule not in exercise.rules:
            errors.append(LineError(step.line, f"rule {j.rule} is not allowed in this exercise", "NotAllowed"))
    return errors


def verify_exercise(exercise: Exercise, steps: Sequence[Step]) -> CheckResult:
    gated = disallowed_steps(exercise, steps)
    if gated:
        return CheckResult.from_errors(gated)
    if exercise.refutation:
        return check_refutation(steps, exercise.given)
    return check_proof(steps, exercise.goal, exercise.given)
