"""
Hilbert axiom schemas: structural matching and instantiation.

A schema is an ordinary Formula whose leaves may be metavariables (names
starting with a Greek letter). Matching threads an immutable substitution:
every new binding produces a fresh mapping, so a failed branch can never
leak partial bindings into a retry.
"""

from __future__ import annotations
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

from .errors import MissingInstantiation
from .formula import BINARY, Formula, Neg, Var, is_metavariable, parse

Substitution = Mapping[str, Formula]

EMPTY: Substitution = MappingProxyType({})

AXIOM_TEXT = {
    1: "α->(β->α)",
    2: "(α->(β->γ))->((α->β)->(α->γ))",
    3: "(¬β->¬α)->((¬β->α)->β)",
}

AXIOMS: Mapping[int, Formula] = MappingProxyType(
    {n: parse(text) for n, text in AXIOM_TEXT.items()})


def _bind(subst: Substitution, name: str, target: Formula) -> Substitution:
    extended: Dict[str, Formula] = dict(subst)
    extended[name] = target
    return MappingProxyType(extended)


def match_schema(schema: Formula, target: Formula,
                 substitution: Optional[Substitution] = None) -> Optional[Substitution]:
    """Return the substitution making ``schema`` equal to ``target``, or None.

    A metavariable binds on first sight and must be rebound to a structurally
    equal formula on every later occurrence. Ordinary variables match only
    themselves; connectives match only the same connective.
    """
    subst = EMPTY if substitution is None else substitution
    if isinstance(schema, Var) and is_metavariable(schema.name):
        bound = subst.get(schema.name)
        if bound is None:
            return _bind(subst, schema.name, target)
        return subst if bound == target else None
    if type(schema) is not type(target):
        return None
    if isinstance(schema, Var):
        return subst if schema.name == target.name else None
    if isinstance(schema, Neg):
        return match_schema(schema.inner, target.inner, subst)
    if isinstance(schema, BINARY):
        left = match_schema(schema.left, target.left, subst)
        if left is None:
            return None
        return match_schema(schema.right, target.right, left)
    raise TypeError(f"not a formula: {schema!r}")


def instantiate(schema: Formula, substitution: Substitution) -> Formula:
    """Replace every metavariable leaf by its binding."""
    if isinstance(schema, Var):
        if not is_metavariable(schema.name):
            return Var(schema.name)
        if schema.name not in substitution:
            raise MissingInstantiation(schema.name)
        return substitution[schema.name]
    if isinstance(schema, Neg):
        return Neg(instantiate(schema.inner, substitution))
    if isinstance(schema, BINARY):
        return type(schema)(instantiate(schema.left, substitution),
                            instantiate(schema.right, substitution))
    raise TypeError(f"not a formula: {schema!r}")


def metavariables(schema: Formula) -> List[str]:
    """Metavariable names in order of first occurrence."""
    seen: Dict[str, None] = {}

    def walk(f: Formula) -> None:
        if isinstance(f, Var):
            if is_metavariable(f.name):
                seen.setdefault(f.name, None)
        elif isinstance(f, Neg):
            walk(f.inner)
        else:
            walk(f.left)
            walk(f.right)

    walk(schema)
    return list(seen)


GREEK_NAMES = {"alpha": "α", "beta": "β", "gamma": "γ"}

def axiom_instance(n: int, **bindings: str) -> Formula:
    """Instantiate axiom ``n`` from formula texts, e.g. alpha="A", beta="B->C"."""
    if n not in AXIOMS:
        raise KeyError(f"no axiom A{n}")
    subst = {GREEK_NAMES.get(k, k): parse(v) for k, v in bindings.items() if v is not None}
    return instantiate(AXIOMS[n], subst)
