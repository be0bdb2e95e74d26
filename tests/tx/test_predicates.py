"""
Claim predicate parsing and compilation.
"""

import pytest

from stellar_txbuild.runtime.errors import InvalidPredicate
from stellar_txbuild.tx.predicates import (
    And, BeforeAbsoluteTime, BeforeRelativeTime, Not, Or, Unconditional,
    compile_predicate, decompile_predicate, parse_predicate, predicate_to_dict,
)


@pytest.mark.parametrize("value,expected", [
    ("unconditional", Unconditional()),
    ({"unconditional": True}, Unconditional()),
    ({"before_relative_time": 3600}, BeforeRelativeTime(3600)),
    ({"beforeAbsoluteTime": "1700000000"}, BeforeAbsoluteTime(1700000000)),
    ({"conditional": {"time": {"relative": 60}}}, BeforeRelativeTime(60)),
    ({"time": {"absolute": 5}}, BeforeAbsoluteTime(5)),
    ({"not": "unconditional"}, Not(Unconditional())),
    ({"and": [{"relative": 1}, {"absolute": 2}]},
     And((BeforeRelativeTime(1), BeforeAbsoluteTime(2)))),
])
def test_parse(value, expected):
    assert parse_predicate(value) == expected


def test_parse_returns_variants_unchanged():
    tree = Or((Unconditional(), Not(BeforeRelativeTime(10))))
    assert parse_predicate(tree) is tree


@pytest.mark.parametrize("value,match", [
    ({"and": []}, "at least one child"),
    ({"or": None}, "at least one child"),
    ({"not": None}, "needs a child"),
    ({"before_relative_time": "soon"}, "must be an integer"),
    ({"before_absolute_time": True}, "must be an integer"),
    ({"before_absolute_time": 1.5}, "must be an integer"),
    ({"sometime": 1}, "Unknown predicate tag"),
    ({"and": ["unconditional"], "or": ["unconditional"]}, "exactly one tag"),
    ({}, "exactly one tag"),
    (None, "exactly one tag"),
])
def test_parse_rejects(value, match):
    with pytest.raises(InvalidPredicate, match=match):
        parse_predicate(value)


def test_compile_preserves_structure():
    value = {"or": [
        {"and": [{"not": {"before_relative_time": 60}}, "unconditional"]},
        {"before_absolute_time": 1700000000},
    ]}
    assert compile_predicate(value) == value


def test_compile_unwraps_form_shapes():
    value = {"conditional": {"and": [{"time": {"relative": "30"}}, {"unconditional": True}]}}
    assert compile_predicate(value) == {"and": [{"before_relative_time": 30}, "unconditional"]}


def test_compiled_tree_encodes(codec):
    node = compile_predicate({"not": {"or": ["unconditional", {"absolute": 9}]}})
    assert codec.unpack("ClaimPredicate", codec.pack("ClaimPredicate", node)) == node


def test_decompile_inverts_compile():
    tree = And((Not(BeforeAbsoluteTime(9)), Or((Unconditional(), BeforeRelativeTime(4)))))
    assert decompile_predicate(compile_predicate(tree)) == tree
    assert predicate_to_dict(tree) == compile_predicate(tree)


def test_decompile_rejects_empty_not():
    with pytest.raises(InvalidPredicate):
        decompile_predicate({"not": None})
