"""
Line-referenced proof checking.

The checker makes one forward pass over the steps and never stops early: a
proof with three mistakes yields three diagnostics. Given premises occupy
lines 1..len(given); step k (0-based) is line len(given) + k + 1. A line whose
text fails to parse is kept as a poisoned placeholder so that later line
numbers stay aligned; any step citing it fails too.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .errors import CheckError, GoalMismatch, ParseError
from .formula import And, Formula, Neg, parse, show
from .log import get_logger
from .rules import Justification, Lines, validate

logger = get_logger(__name__)

# =========================
# Proof data structures
# =========================

@dataclass(frozen=True)
class Step:
    line: int
    formula: str
    justification: Justification

@dataclass(frozen=True)
class LineError:
    line: int
    message: str
    kind: str = "RuleViolation"
    def __str__(self) -> str: return f"L{self.line}: {self.message}"

@dataclass(frozen=True)
class CheckResult:
    ok: bool
    errors: Tuple[LineError, ...] = ()

    @classmethod
    def from_errors(cls, errors: Sequence[LineError]) -> "CheckResult":
        return cls(ok=len(errors) == 0, errors=tuple(errors))

    def summary(self) -> str:
        if self.ok:
            return "valid proof"
        return " | ".join(str(e) for e in self.errors)


def _record(errors: List[LineError], line: int, exc: Exception) -> None:
    message = exc.message if isinstance(exc, ParseError) else str(exc)
    errors.append(LineError(line, message, getattr(exc, "kind", type(exc).__name__)))
    logger.debug("[ERR] line %d: %s", line, message)

# =========================
# Verification runner
# =========================

def _derive(steps: Sequence[Step], given: Sequence[str]
            ) -> Tuple[List[Optional[Formula]], List[LineError]]:
    formulas: List[Optional[Formula]] = []
    errors: List[LineError] = []
    lines = Lines(formulas)

    for i, text in enumerate(given, start=1):
        try:
            formulas.append(parse(text))
        except ParseError as e:
            _record(errors, i, e)
            formulas.append(None)

    for step in steps:
        try:
            f = parse(step.formula)
        except ParseError as e:
            _record(errors, step.line, e)
            formulas.append(None)
            continue
        try:
            validate(step.justification, f, lines)
            logger.debug("[OK] line %d: %s => %s", step.line, step.justification.tag(), show(f))
        except CheckError as e:
            _record(errors, step.line, e)
        # a wrong line still counts as written so later references line up
        formulas.append(f)

    return formulas, errors


def derived_lines(steps: Sequence[Step], given: Sequence[str] = ()) -> List[Optional[Formula]]:
    """Every line of the proof as a formula, None where the text did not parse."""
    return _derive(steps, given)[0]


def _last_line(steps: Sequence[Step], given: Sequence[str]) -> int:
    return steps[-1].line if steps else len(given)


def check_proof(steps: Sequence[Step], goal: Optional[str],
                given: Sequence[str] = ()) -> CheckResult:
    """Validate ``steps`` against ``given`` premises and ``goal``.

    Never raises for problems in the proof itself; every problem found is
    reported as a LineError. With ``goal=None`` only the steps are checked.
    """
    formulas, errors = _derive(steps, given)
    if goal is not None:
        at = _last_line(steps, given)
        try:
            target = parse(goal)
        except ParseError as e:
            _record(errors, at, ParseError(f"goal: {e.message}", e.position))
        else:
            if not formulas or formulas[-1] != target:
                _record(errors, at, GoalMismatch(
                    f"the last line does not match the goal {show(target)}"))
    result = CheckResult.from_errors(errors)
    logger.info("checked %d step(s): %s", len(steps), "ok" if result.ok else f"{len(errors)} error(s)")
    return result

# =========================
# Contradiction mode
# =========================

def find_contradiction(formulas: Sequence[Optional[Formula]]) -> Optional[Tuple[int, int]]:
    """1-based lines witnessing a contradiction, or None.

    A single line ``X∧¬X`` (either side negated) is reported as (i, i); two
    lines ``X`` and ``¬X`` as (i, j) with i < j.
    """
    for i, f in enumerate(formulas, start=1):
        if isinstance(f, And):
            if isinstance(f.left, Neg) and f.left.inner == f.right:
                return i, i
            if isinstance(f.right, Neg) and f.right.inner == f.left:
                return i, i
    for i, a in enumerate(formulas, start=1):
        if a is None:
            continue
        for j in range(i + 1, len(formulas) + 1):
            b = formulas[j - 1]
            if b is None:
                continue
            if isinstance(a, Neg) and a.inner == b:
                return i, j
            if isinstance(b, Neg) and b.inner == a:
                return i, j
    return None


def check_refutation(steps: Sequence[Step], given: Sequence[str] = ()) -> CheckResult:
    """Check a "derive a contradiction" proof: valid steps ending in X and ¬X."""
    formulas, errors = _derive(steps, given)
    if not errors and find_contradiction(formulas) is None:
        _record(errors, _last_line(steps, given), GoalMismatch("no contradiction was derived"))
    return CheckResult.from_errors(errors)
