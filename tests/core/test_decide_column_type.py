from itertools import product

import pytest

from tablemerge.core.decide import Match, Mismatch, decide_column_type
from tablemerge.core.grammar import ColumnType


def test_every_ordered_pair_agrees_with_tag_identity() -> None:
    for a, b in product(ColumnType, ColumnType):
        decision = decide_column_type(a, b)
        if a is b:
            assert isinstance(decision, Match)
            assert decision.left is a and decision.right is b
        else:
            assert isinstance(decision, Mismatch)
            assert not decision


def test_decider_is_not_constant() -> None:
    outcomes = {bool(decide_column_type(a, b)) for a, b in product(ColumnType, ColumnType)}
    assert outcomes == {True, False}


def test_match_cannot_be_forged() -> None:
    with pytest.raises(TypeError):
        Match(ColumnType.I64, ColumnType.STR)


def test_non_tag_operands_raise_type_error() -> None:
    with pytest.raises(TypeError):
        decide_column_type("i64", ColumnType.I64)  # type: ignore[arg-type]


def test_match_cannot_be_copied_onto_other_operands() -> None:
    import dataclasses

    real = decide_column_type(ColumnType.I64, ColumnType.I64)
    with pytest.raises(TypeError):
        dataclasses.replace(real, right=ColumnType.STR)
