"""
Truth-table semantics by brute force.

Tautology and entailment checks enumerate valuations, so they carry explicit
explosion guards (see Config). Results produced past a guard are
approximations:

* is_tautology answers False for more than TAUTOLOGY_VAR_LIMIT variables
  without looking; that is not a proof of non-tautology.
* entails samples ENTAILMENT_SAMPLES valuations for more than
  ENTAILMENT_EXACT_LIMIT variables; a "valid" answer then only means no
  countermodel was sampled (``exhaustive`` is False).
"""

from __future__ import annotations
import itertools
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from .config import Config
from .errors import UnboundVariable
from .formula import And, Formula, Iff, Imp, Neg, Or, Var
from .log import get_logger

logger = get_logger(__name__)

Valuation = Dict[str, bool]


def collect_vars(f: Formula, acc: Optional[Dict[str, None]] = None) -> List[str]:
    """Variable names of ``f`` in order of first occurrence."""
    if acc is None:
        acc = {}
    if isinstance(f, Var):
        acc.setdefault(f.name, None)
    elif isinstance(f, Neg):
        collect_vars(f.inner, acc)
    else:
        collect_vars(f.left, acc)
        collect_vars(f.right, acc)
    return list(acc)


def _collect_all(formulas: Iterable[Formula]) -> List[str]:
    acc: Dict[str, None] = {}
    for f in formulas:
        collect_vars(f, acc)
    return list(acc)


def evaluate(f: Formula, valuation: Valuation) -> bool:
    if isinstance(f, Var):
        if f.name not in valuation:
            raise UnboundVariable(f.name)
        return bool(valuation[f.name])
    if isinstance(f, Neg):
        return not evaluate(f.inner, valuation)
    if isinstance(f, And):
        return evaluate(f.left, valuation) and evaluate(f.right, valuation)
    if isinstance(f, Or):
        return evaluate(f.left, valuation) or evaluate(f.right, valuation)
    if isinstance(f, Imp):
        return (not evaluate(f.left, valuation)) or evaluate(f.right, valuation)
    if isinstance(f, Iff):
        return evaluate(f.left, valuation) == evaluate(f.right, valuation)
    raise TypeError(f"not a formula: {f!r}")


def valuations(variables: Sequence[str]) -> Iterator[Valuation]:
    """All 2^n valuations; the first variable is the most significant bit."""
    for bits in itertools.product((False, True), repeat=len(variables)):
        yield dict(zip(variables, bits))


def _sampled_valuations(variables: Sequence[str], samples: int, width: int) -> Iterator[Valuation]:
    # variable i reads bit (i mod width) of the sample index
    for mask in range(samples):
        yield {v: bool((mask >> (i % width)) & 1) for i, v in enumerate(variables)}


def is_tautology(f: Formula) -> bool:
    variables = collect_vars(f)
    if len(variables) > Config.TAUTOLOGY_VAR_LIMIT:
        logger.warning("tautology check skipped: %d variables exceed the limit of %d",
                       len(variables), Config.TAUTOLOGY_VAR_LIMIT)
        return False
    return all(evaluate(f, rho) for rho in valuations(variables))


@dataclass(frozen=True)
class Entailment:
    valid: bool
    countermodels: Tuple[Valuation, ...] = ()
    exhaustive: bool = True


def entails(premises: Sequence[Formula], conclusion: Formula) -> Entailment:
    """Search for valuations satisfying every premise but not the conclusion."""
    variables = _collect_all(list(premises) + [conclusion])
    exhaustive = len(variables) <= Config.ENTAILMENT_EXACT_LIMIT
    if exhaustive:
        space = valuations(variables)
    else:
        logger.info("entailment over %d variables: sampling %d valuations",
                    len(variables), Config.ENTAILMENT_SAMPLES)
        space = _sampled_valuations(variables, Config.ENTAILMENT_SAMPLES,
                                    Config.ENTAILMENT_EXACT_LIMIT)

    found: List[Valuation] = []
    for rho in space:
        if all(evaluate(p, rho) for p in premises) and not evaluate(conclusion, rho):
            found.append(rho)
            if len(found) >= Config.MAX_COUNTERMODELS:
                break
    if not found:
        return Entailment(valid=True, exhaustive=exhaustive)
    return Entailment(valid=False, countermodels=tuple(found), exhaustive=exhaustive)


@dataclass(frozen=True)
class TruthRow:
    valuation: Valuation
    values: Tuple[bool, ...]

@dataclass(frozen=True)
class TruthTable:
    variables: Tuple[str, ...]
    rows: Tuple[TruthRow, ...] = field(default_factory=tuple)


def truth_table(formulas: Sequence[Formula]) -> TruthTable:
    """Full table over the sorted variables of ``formulas``. No size guard."""
    variables = sorted(_collect_all(formulas))
    rows = tuple(TruthRow(rho, tuple(evaluate(f, rho) for f in formulas))
                 for rho in valuations(variables))
    return TruthTable(tuple(variables), rows)
