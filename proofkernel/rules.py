"""
Justifications and the inference rules they name.

Each justification is a frozen dataclass carrying the 1-based line numbers it
cites. ``conclusions`` computes what a rule yields from the cited lines;
``validate`` compares that against the formula a step claims. Both raise
CheckError subclasses, which the checker turns into per-line diagnostics.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Callable, ClassVar, List, Optional, Sequence, Tuple

from .errors import LineReferenceError, RuleViolation, SchemaMismatch
from .formula import And, Formula, Iff, Imp, Neg, Or, show
from .schema import AXIOMS, match_schema


class Side(Enum):
    LEFT = "left"
    RIGHT = "right"


class Direction(Enum):
    LTR = "L->R"
    RTL = "R->L"

# =========================
# Justifications
# =========================

@dataclass(frozen=True)
class Justification:
    rule: ClassVar[str] = ""

    @property
    def references(self) -> Tuple[int, ...]:
        return ()

    def tag(self) -> str:
        refs = ",".join(str(r) for r in self.references)
        return f"{self.rule} {refs}" if refs else self.rule

@dataclass(frozen=True)
class AX(Justification):
    """Instance of Hilbert axiom schema A1, A2 or A3."""
    axiom: int
    rule: ClassVar[str] = "AX"
    def tag(self) -> str: return f"A{self.axiom}"

@dataclass(frozen=True)
class MP(Justification):
    """Modus ponens: X (antecedent), X->Y (implication) |- Y."""
    antecedent: int
    implication: int
    rule: ClassVar[str] = "MP"
    @property
    def references(self) -> Tuple[int, ...]: return (self.antecedent, self.implication)

@dataclass(frozen=True)
class MT(Justification):
    """Modus tollens: X->Y, ¬Y |- ¬X."""
    implication: int
    negation: int
    rule: ClassVar[str] = "MT"
    @property
    def references(self) -> Tuple[int, ...]: return (self.implication, self.negation)

@dataclass(frozen=True)
class HS(Justification):
    """Hypothetical syllogism: X->Y, Y->Z |- X->Z."""
    left: int
    right: int
    rule: ClassVar[str] = "HS"
    @property
    def references(self) -> Tuple[int, ...]: return (self.left, self.right)

@dataclass(frozen=True)
class ADJ(Justification):
    """Adjunction: X, Y |- X∧Y."""
    left: int
    right: int
    rule: ClassVar[str] = "ADJ"
    @property
    def references(self) -> Tuple[int, ...]: return (self.left, self.right)

@dataclass(frozen=True)
class SIMP(Justification):
    """Simplification: X∧Y |- X (pick left) or Y (pick right)."""
    source: int
    pick: Side
    rule: ClassVar[str] = "SIMP"
    @property
    def references(self) -> Tuple[int, ...]: return (self.source,)
    def tag(self) -> str: return f"SIMP {self.source}.{'L' if self.pick is Side.LEFT else 'R'}"

@dataclass(frozen=True)
class DS(Justification):
    """Disjunctive syllogism: X∨Y, ¬X |- Y (and symmetrically)."""
    disjunction: int
    negation: int
    rule: ClassVar[str] = "DS"
    @property
    def references(self) -> Tuple[int, ...]: return (self.disjunction, self.negation)

@dataclass(frozen=True)
class IFF(Justification):
    """Biconditional elimination: X↔Y |- X->Y (L->R) or Y->X (R->L)."""
    source: int
    direction: Direction
    rule: ClassVar[str] = "IFF"
    @property
    def references(self) -> Tuple[int, ...]: return (self.source,)
    def tag(self) -> str: return f"IFF {self.source} {self.direction.value}"


RULES = {cls.rule: cls for cls in (AX, MP, MT, HS, ADJ, SIMP, DS, IFF)}

# =========================
# Line lookup
# =========================

class Lines:
    """Read-only 1-based view of the formulas established so far.

    ``None`` entries are lines whose text failed to parse; citing one fails
    the citing step as well.
    """

    def __init__(self, formulas: Sequence[Optional[Formula]]):
        self._formulas = formulas

    def __len__(self) -> int:
        return len(self._formulas)

    def at(self, n: int) -> Formula:
        if not isinstance(n, int) or n < 1 or n > len(self._formulas):
            raise LineReferenceError(f"line {n} has no formula to cite")
        f = self._formulas[n - 1]
        if f is None:
            raise LineReferenceError(f"line {n} holds no well-formed formula")
        return f

# =========================
# Rule implementations
# =========================

def _expect_imp(f: Formula, n: int) -> Imp:
    if not isinstance(f, Imp):
        raise RuleViolation(f"line {n} is not an implication")
    return f

def _expect_neg(f: Formula, n: int) -> Neg:
    if not isinstance(f, Neg):
        raise RuleViolation(f"line {n} is not a negation")
    return f


def _mp(j: MP, lines: Lines) -> List[Formula]:
    a = lines.at(j.antecedent)
    imp = _expect_imp(lines.at(j.implication), j.implication)
    if imp.left != a:
        raise RuleViolation(
            f"antecedent of line {j.implication} is {show(imp.left)}, "
            f"but line {j.antecedent} is {show(a)}")
    return [imp.right]

def _mt(j: MT, lines: Lines) -> List[Formula]:
    imp = _expect_imp(lines.at(j.implication), j.implication)
    neg = _expect_neg(lines.at(j.negation), j.negation)
    if imp.right != neg.inner:
        raise RuleViolation(
            f"line {j.negation} must negate the consequent {show(imp.right)} "
            f"of line {j.implication}")
    return [Neg(imp.left)]

def _hs_pair(l: int, r: int, lines: Lines) -> Formula:
    first = _expect_imp(lines.at(l), l)
    second = _expect_imp(lines.at(r), r)
    if first.right != second.left:
        raise RuleViolation(
            f"consequent of line {l} ({show(first.right)}) does not match "
            f"antecedent of line {r} ({show(second.left)})")
    return Imp(first.left, second.right)

def _adj_pair(l: int, r: int, lines: Lines) -> Formula:
    return And(lines.at(l), lines.at(r))

def _ds_pair(d: int, n: int, lines: Lines) -> Formula:
    disj = lines.at(d)
    if not isinstance(disj, Or):
        raise RuleViolation(f"line {d} is not a disjunction")
    neg = _expect_neg(lines.at(n), n)
    if neg.inner == disj.left:
        return disj.right
    if neg.inner == disj.right:
        return disj.left
    raise RuleViolation(f"line {n} negates neither disjunct of line {d}")

def _either_order(pair: Callable[[int, int, Lines], Formula],
                  a: int, b: int, lines: Lines) -> List[Formula]:
    """Try the stored order, then the swapped one; keep every valid conclusion."""
    found: List[Formula] = []
    first_error: Optional[RuleViolation] = None
    for x, y in ((a, b), (b, a)):
        try:
            found.append(pair(x, y, lines))
        except RuleViolation as e:
            if first_error is None:
                first_error = e
    if not found:
        raise first_error
    return found

def _simp(j: SIMP, lines: Lines) -> List[Formula]:
    conj = lines.at(j.source)
    if not isinstance(conj, And):
        raise RuleViolation(f"line {j.source} is not a conjunction")
    return [conj.left if j.pick is Side.LEFT else conj.right]

def _iff(j: IFF, lines: Lines) -> List[Formula]:
    bicond = lines.at(j.source)
    if not isinstance(bicond, Iff):
        raise RuleViolation(f"line {j.source} is not a biconditional")
    if j.direction is Direction.LTR:
        return [Imp(bicond.left, bicond.right)]
    return [Imp(bicond.right, bicond.left)]


def conclusions(j: Justification, lines: Lines) -> List[Formula]:
    """Formulas the rule licenses from the cited lines, preferred first."""
    if isinstance(j, MP):
        return _mp(j, lines)
    if isinstance(j, MT):
        return _mt(j, lines)
    if isinstance(j, HS):
        return _either_order(_hs_pair, j.left, j.right, lines)
    if isinstance(j, ADJ):
        return _either_order(_adj_pair, j.left, j.right, lines)
    if isinstance(j, SIMP):
        return _simp(j, lines)
    if isinstance(j, DS):
        return _either_order(_ds_pair, j.disjunction, j.negation, lines)
    if isinstance(j, IFF):
        return _iff(j, lines)
    if isinstance(j, AX):
        raise RuleViolation("axiom instances are chosen, not inferred")
    raise RuleViolation(f"unknown justification {j!r}")


def validate(j: Justification, formula: Formula, lines: Lines) -> None:
    """Raise a CheckError unless ``formula`` follows by ``j`` from ``lines``."""
    if isinstance(j, AX):
        schema = AXIOMS.get(j.axiom)
        if schema is None:
            raise SchemaMismatch(f"there is no axiom A{j.axiom}")
        if match_schema(schema, formula) is None:
            raise SchemaMismatch(
                f"{show(formula)} is not an instance of axiom A{j.axiom} ({show(schema)})")
        return
    candidates = conclusions(j, lines)
    if formula not in candidates:
        raise RuleViolation(
            f"{j.rule} does not yield {show(formula)}; the conclusion should be "
            f"{show(candidates[0])}")


def infer_step(j: Justification, formulas: Sequence[Formula]) -> Tuple[Justification, Formula]:
    """Apply ``j`` to an established 1-based line list.

    Lines picked for MP or MT in the wrong order are swapped; the returned
    justification cites them in rule order. The checker never does this.
    """
    lines = Lines(formulas)
    try:
        return j, conclusions(j, lines)[0]
    except RuleViolation as e:
        if not isinstance(j, (MP, MT)):
            raise
        swapped = type(j)(*reversed(j.references))
        try:
            return swapped, conclusions(swapped, lines)[0]
        except RuleViolation:
            raise e from None


def infer(j: Justification, formulas: Sequence[Formula]) -> Formula:
    """Conclusion of applying ``j`` to an established 1-based line list."""
    return infer_step(j, formulas)[1]
