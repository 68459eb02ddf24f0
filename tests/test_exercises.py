"""Tests for exercise loading and rule allow-lists"""

import json

import pytest

from proofkernel.checker import Step
from proofkernel.errors import CodecError
from proofkernel.exercises import (disallowed_steps, exercise_from_dict, find_exercise,
                                   load_exercises, verify_exercise)
from proofkernel.rules import ADJ, AX, MP

CATALOG = [
    {
        "id": "mp-intro",
        "title": "Intro MP: A, (A->B) |- B",
        "given": ["A", "(A->B)"],
        "goal": "B",
        "allowed": {"axioms": [], "rules": ["MP"]},
        "hints": ["Use MP on lines 1 and 2."],
    },
    {
        "id": "absurd",
        "title": "Derive a contradiction",
        "given": ["A->B", "A", "¬B"],
        "goalMode": "contradiction",
        "allowed": {"rules": ["MP", "MT"]},
    },
]


@pytest.fixture
def catalog_file(tmp_path):
    path = tmp_path / "exercises.json"
    path.write_text(json.dumps(CATALOG), encoding="utf-8")
    return path


def test_load_exercises(catalog_file):
    exercises = load_exercises(catalog_file)
    assert [e.id for e in exercises] == ["mp-intro", "absurd"]
    intro = find_exercise(exercises, "mp-intro")
    assert intro.given == ("A", "(A->B)")
    assert intro.axioms == ()
    assert intro.hints == ("Use MP on lines 1 and 2.",)
    absurd = find_exercise(exercises, "absurd")
    assert absurd.refutation
    assert absurd.axioms == (1, 2, 3)
    with pytest.raises(KeyError):
        find_exercise(exercises, "missing")


def test_malformed_exercise():
    with pytest.raises(CodecError):
        exercise_from_dict({"title": "no id"})


def test_allow_list_gate():
    intro = exercise_from_dict(CATALOG[0])
    steps = [Step(3, "A->(B->A)", AX(1)), Step(4, "A∧B", ADJ(1, 2))]
    errors = disallowed_steps(intro, steps)
    assert [(e.line, e.kind) for e in errors] == [(3, "NotAllowed"), (4, "NotAllowed")]
    assert "A1" in errors[0].message


def test_verify_exercise_checks_after_gating():
    intro = exercise_from_dict(CATALOG[0])
    assert verify_exercise(intro, [Step(3, "B", MP(1, 2))]).ok
    gated = verify_exercise(intro, [Step(3, "A∧(A->B)", ADJ(1, 2))])
    assert not gated.ok
    assert gated.errors[0].kind == "NotAllowed"


def test_verify_contradiction_exercise():
    absurd = exercise_from_dict(CATALOG[1])
    assert verify_exercise(absurd, [Step(4, "B", MP(2, 1))]).ok
    assert not verify_exercise(absurd, []).ok
