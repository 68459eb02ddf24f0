"""Tests for the JSON and plain-text proof formats"""

import pytest

from proofkernel.checker import Step, check_proof
from proofkernel.codec import (justification_from_dict, justification_from_tag,
                               justification_to_dict, proof_from_dict, proof_from_text,
                               result_to_dict, step_to_dict, steps_from_list)
from proofkernel.errors import CodecError
from proofkernel.rules import ADJ, AX, DS, HS, IFF, MP, MT, SIMP, Direction, Side


@pytest.mark.parametrize("data, expected", [
    ({"rule": "MP", "refs": [1, 2]}, MP(1, 2)),
    ({"rule": "mt", "refs": [2, 1]}, MT(2, 1)),
    ({"rule": "AX", "axiom": 3}, AX(3)),
    ({"rule": "A2"}, AX(2)),
    ({"rule": "SIMP", "refs": [4], "pick": "right"}, SIMP(4, Side.RIGHT)),
    ({"rule": "IFF", "refs": [1], "dir": "R->L"}, IFF(1, Direction.RTL)),
    ({"rule": "IFF", "refs": [1], "dir": "L→R"}, IFF(1, Direction.LTR)),
])
def test_justification_from_dict(data, expected):
    assert justification_from_dict(data) == expected


@pytest.mark.parametrize("data", [
    {"rule": "XX", "refs": [1]},
    {"rule": "MP", "refs": [1]},
    {"rule": "MP", "refs": ["1", 2]},
    {"rule": "SIMP", "refs": [1]},
    {"rule": "IFF", "refs": [1], "dir": "sideways"},
    {"rule": "AX", "axiom": 7},
])
def test_malformed_justifications(data):
    with pytest.raises(CodecError):
        justification_from_dict(data)


@pytest.mark.parametrize("j", [
    AX(1), MP(1, 2), MT(3, 4), HS(1, 2), ADJ(2, 1), SIMP(5, Side.LEFT),
    DS(1, 2), IFF(3, Direction.RTL),
])
def test_dict_and_tag_forms_agree(j):
    assert justification_from_dict(justification_to_dict(j)) == j
    assert justification_from_tag(j.tag()) == j


def test_steps_default_to_next_line():
    steps = steps_from_list([{"formula": "B", "rule": "MP", "refs": [1, 2]}], given_count=2)
    assert steps == [Step(3, "B", MP(1, 2))]
    assert step_to_dict(steps[0]) == {"line": 3, "formula": "B", "rule": "MP", "refs": [1, 2]}


def test_proof_from_dict_feeds_the_checker():
    steps, goal, given = proof_from_dict({
        "given": ["A", "A->B"],
        "goal": "B",
        "steps": [{"line": 3, "formula": "B", "rule": "MP", "refs": [1, 2]}],
    })
    assert result_to_dict(check_proof(steps, goal, given)) == {"ok": True, "errors": []}


def test_proof_from_dict_rejects_bad_shapes():
    with pytest.raises(CodecError):
        proof_from_dict({"given": "A", "steps": []})
    with pytest.raises(CodecError):
        proof_from_dict({"given": [], "steps": [{"rule": "MP", "refs": [1, 2]}]})


def test_plain_text_proof():
    text = """
    # modus ponens then adjunction
    Given: A
    Given: A -> B
    Goal: A ∧ B
    B        [MP 1,2]
    5. A∧B   [ADJ 1,3]
    """
    steps, goal, given = proof_from_text(text)
    assert given == ["A", "A -> B"]
    assert goal == "A ∧ B"
    assert steps == [Step(3, "B", MP(1, 2)), Step(5, "A∧B", ADJ(1, 3))]


def test_plain_text_rejects_untagged_lines():
    with pytest.raises(CodecError):
        proof_from_text("Given: A\nB")


@pytest.mark.parametrize("line", ["x", True, 2.5])
def test_step_line_must_be_an_integer(line):
    with pytest.raises(CodecError):
        proof_from_dict({"given": ["A"], "steps": [{"line": line, "formula": "A", "rule": "A1"}]})


def test_justification_must_be_an_object():
    with pytest.raises(CodecError):
        justification_from_dict(["MP", 1, 2])


def test_plain_text_proof_must_be_text():
    with pytest.raises(CodecError):
        proof_from_text(5)
