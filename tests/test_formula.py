"""Tests for the formula grammar and canonical printer"""

import dataclasses

import pytest

from proofkernel.errors import ParseError
from proofkernel.formula import (And, Iff, Imp, Neg, Or, Var, depth, is_metavariable, parse,
                                 show, to_ascii)

A, B, C, D, E = (Var(n) for n in "ABCDE")


def test_implication_is_right_associative():
    assert parse("A->B->C") == Imp(A, Imp(B, C))


def test_conjunction_and_disjunction_are_left_associative():
    assert parse("A∧B∧C") == And(And(A, B), C)
    assert parse("A∨B∨C") == Or(Or(A, B), C)


def test_precedence_ladder():
    expected = Iff(Imp(Or(And(Neg(A), B), C), D), E)
    assert parse("¬A∧B∨C→D↔E") == expected
    assert parse("~A ^ B v C -> D <-> E") == expected
    assert parse("~A & B || C -> D <=> E") == expected


def test_biconditional_is_right_associative():
    assert parse("A<->B<->C") == Iff(A, Iff(B, C))


def test_parentheses_override_precedence():
    assert parse("(A->B)->C") == Imp(Imp(A, B), C)
    assert parse("¬(A∧B)") == Neg(And(A, B))


def test_identifiers():
    assert parse("A1_B") == Var("A1_B")
    assert parse("PQ") == Var("PQ")
    assert parse("α->β") == Imp(Var("α"), Var("β"))


def test_lowercase_v_is_never_part_of_a_name():
    assert parse("AvB") == Or(A, B)
    assert parse("A v B") == Or(A, B)


def test_metavariables_are_greek():
    assert is_metavariable("α")
    assert is_metavariable("Γ1")
    assert not is_metavariable("A")


@pytest.mark.parametrize("text, position", [
    ("A $ B", 2),
    ("(A->B", 5),
    ("A->B)", 4),
    ("a", 0),
    ("A B", 2),
    ("", 0),
    ("A->", 3),
    ("->A", 0),
    ("A - B", 2),
])
def test_parse_errors_carry_position(text, position):
    with pytest.raises(ParseError) as info:
        parse(text)
    assert info.value.position == position
    assert f"position {position}" in str(info.value)


def test_unbalanced_parentheses_are_named():
    with pytest.raises(ParseError, match="unbalanced"):
        parse("((A)")
    with pytest.raises(ParseError, match="unbalanced"):
        parse("A)")


@pytest.mark.parametrize("text", [
    "(" * 400 + "A" + ")" * 400,
    "¬" * 1200 + "A",
    "∧".join(["A"] * 600),
])
def test_runaway_nesting_is_a_parse_error(text):
    with pytest.raises(ParseError, match="nested too deeply"):
        parse(text)


def test_moderate_nesting_parses():
    f = parse("(" * 30 + "¬" * 30 + "A" + ")" * 30)
    assert depth(f) == 31
    assert show(f) == "¬" * 30 + "A"


@pytest.mark.parametrize("text, canonical", [
    ("A->(B->C)", "A->B->C"),
    ("(A->B)->C", "(A->B)->C"),
    ("¬(A∧B)", "¬(A∧B)"),
    ("¬¬A", "¬¬A"),
    ("(A∧B)∧C", "A∧B∧C"),
    ("A∧(B∧C)", "A∧(B∧C)"),
    ("(A∨B)∧C", "(A∨B)∧C"),
    ("A∨B∧C", "A∨B∧C"),
    ("A<->(B<->C)", "A↔B↔C"),
    ("(A<->B)->C", "(A↔B)->C"),
    ("A->(B<->C)", "A->(B↔C)"),
    ("( A -> B )", "A->B"),
])
def test_show_uses_minimal_parentheses(text, canonical):
    assert show(parse(text)) == canonical


@pytest.mark.parametrize("text", [
    "A", "¬A", "A->B->C", "(A->B)->C", "¬(A->B)", "A∧B∨C", "A∧(B∨C)",
    "(A∨B)∨(C∨D)", "¬(A↔B)↔¬C", "((A->B)->A)->A", "(¬β->¬α)->((¬β->α)->β)",
    "A∨B->C∧D↔E",
])
def test_round_trip(text):
    f = parse(text)
    assert parse(show(f)) == f


def test_ascii_display_still_parses():
    f = parse("¬A∧B∨C<->D")
    text = to_ascii(show(f))
    assert text == "~A^BvC<->D"
    assert parse(text) == f


def test_formulas_are_immutable_and_hashable():
    f = parse("A->B")
    with pytest.raises(dataclasses.FrozenInstanceError):
        f.left = B
    assert {f, parse("A -> B")} == {f}
    assert str(f) == "A->B"
