"""Tests for truth-table semantics"""

import pytest

from proofkernel.config import Config
from proofkernel.errors import UnboundVariable
from proofkernel.formula import Var, parse
from proofkernel.schema import AXIOMS, instantiate
from proofkernel.semantics import (collect_vars, entails, evaluate, is_tautology,
                                   truth_table, valuations)


def excluded_middles(n, prefix="P"):
    return "∨".join(f"({prefix}{i}∨¬{prefix}{i})" for i in range(1, n + 1))


def test_collect_vars():
    assert collect_vars(parse("A->(B∧A)")) == ["A", "B"]
    assert set(collect_vars(parse("¬(C↔D)∨C"))) == {"C", "D"}


@pytest.mark.parametrize("text, a, b, expected", [
    ("¬A", True, False, False),
    ("A∧B", True, False, False),
    ("A∨B", False, True, True),
    ("A->B", True, False, False),
    ("A->B", False, False, True),
    ("A↔B", False, False, True),
    ("A↔B", True, False, False),
])
def test_evaluate_connectives(text, a, b, expected):
    assert evaluate(parse(text), {"A": a, "B": b}) is expected


def test_evaluate_needs_every_variable():
    with pytest.raises(UnboundVariable):
        evaluate(parse("A∧B"), {"A": True})


def test_valuation_order_starts_all_false():
    rows = list(valuations(["A", "B"]))
    assert rows == [
        {"A": False, "B": False},
        {"A": False, "B": True},
        {"A": True, "B": False},
        {"A": True, "B": True},
    ]


def test_axioms_are_tautologies():
    assert is_tautology(parse("A->(B->A)"))
    assert is_tautology(instantiate(AXIOMS[2], {"α": Var("A"), "β": Var("B"), "γ": Var("C")}))
    assert is_tautology(instantiate(AXIOMS[3], {"α": Var("A"), "β": Var("B")}))


def test_non_tautology():
    assert not is_tautology(parse("A->B"))
    assert not is_tautology(parse("(A->B)->A"))
    assert is_tautology(parse("((A->B)->A)->A"))


def test_tautology_guard_is_an_approximation():
    assert is_tautology(parse(excluded_middles(10)))
    # eleven variables: answered False without looking
    assert not is_tautology(parse(excluded_middles(11)))


def test_tautology_guard_follows_config(monkeypatch):
    monkeypatch.setattr(Config, "TAUTOLOGY_VAR_LIMIT", 1)
    assert not is_tautology(parse("A∨¬A∨B"))


def test_modus_ponens_entailment():
    result = entails([parse("A"), parse("A->B")], parse("B"))
    assert result.valid
    assert result.countermodels == ()
    assert result.exhaustive


def test_countermodel():
    result = entails([parse("A")], parse("B"))
    assert not result.valid
    assert {"A": True, "B": False} in result.countermodels


def test_countermodels_are_capped():
    result = entails([], parse("A∧B∧C"))
    assert not result.valid
    assert len(result.countermodels) == 3


def test_large_entailment_is_sampled():
    tautology = entails([], parse(excluded_middles(13)))
    assert tautology.valid
    assert not tautology.exhaustive

    conjunction = "∧".join(f"P{i}" for i in range(1, 14))
    refuted = entails([], parse(conjunction))
    assert not refuted.valid
    assert not refuted.exhaustive
    assert all(len(m) == 13 for m in refuted.countermodels)


def test_truth_table():
    table = truth_table([parse("A->B"), parse("B∧A")])
    assert table.variables == ("A", "B")
    assert len(table.rows) == 4
    assert table.rows[0].valuation == {"A": False, "B": False}
    assert table.rows[0].values == (True, False)
    assert table.rows[2].values == (False, False)
    assert table.rows[3].values == (True, True)


def test_truth_table_sorts_variables():
    assert truth_table([parse("C∧B"), parse("A")]).variables == ("A", "B", "C")


def test_twelve_variables_are_still_exhaustive():
    tautology = entails([], parse(excluded_middles(12)))
    assert tautology.valid
    assert tautology.exhaustive

    conjunction = "∧".join(f"P{i}" for i in range(1, 13))
    refuted = entails([], parse(conjunction))
    assert not refuted.valid
    assert refuted.exhaustive
    assert refuted.countermodels[0] == {f"P{i}": False for i in range(1, 13)}
