"""
Decision procedures for column type and schema equality.

Deciders return witnesses instead of raising: a Match (the two inputs are structurally
identical) or a Mismatch (they are not). Schema-level mismatches pinpoint the first
divergence so callers can produce precise diagnostics.

Responsibilities
- decide_column_type: explicit decision over every ordered pair of ColumnType tags.
- decide_schema: position-by-position comparison with early exit on the first divergence.
- Witness types: Match, Mismatch, SchemaMismatch (TagMismatch, LengthMismatch).

Witness discipline
- Match can only be constructed inside this module. The merge engine requires a Match
  that covers the exact schemas it is combining, so an unchecked merge is not reachable.
- Match is truthy and every Mismatch is falsy, so ``if decide_schema(a, b):`` reads
  naturally at call sites.

Positions
- Positions are zero-based absolute column indexes.
- A TagMismatch at p means positions < p hold equal tags and position p differs.
- A LengthMismatch at p means positions < p hold equal tags and one schema has exactly
  p columns. The longer side's tag at p is reported; the exhausted side reports None.

Examples
--------
>>> from tablemerge.core.decide import decide_schema
>>> from tablemerge.core.grammar import ColumnType as T
>>> bool(decide_schema([T.I64, T.STR], [T.I64, T.STR]))
True
>>> decide_schema([T.I64, T.STR], [T.I64, T.BOOLEAN]).position
1
>>> decide_schema([T.I64], [T.I64, T.F64]).describe()
'schemas diverge at column 1: left has no column, right has f64 (lengths 1 vs 2)'
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from itertools import product
from typing import Final, Union

from .grammar import ALL_COLUMN_TYPES, ColumnType, ensure_closed_over

__all__ = [
    "Match",
    "Mismatch",
    "SchemaMismatch",
    "TagMismatch",
    "LengthMismatch",
    "Decision",
    "decide_column_type",
    "decide_schema",
    "is_match",
]

# Capability token; only this module can mint Match witnesses.
_WITNESS_KEY: Final = object()


@dataclass(frozen=True)
class Match:
    """
    Positive witness: the compared inputs are structurally identical.

    Attributes:
        left: The left input as compared (a ColumnType, or a tuple of them for schemas).
        right: The right input as compared.
    """

    left: ColumnType | tuple[ColumnType, ...]
    right: ColumnType | tuple[ColumnType, ...]
    _key: object = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        # Every construction path through __init__ (including dataclasses.replace) is refused.
        raise TypeError("Match witnesses are produced by the deciders only")

    @classmethod
    def _mint(
        cls,
        left: ColumnType | tuple[ColumnType, ...],
        right: ColumnType | tuple[ColumnType, ...],
    ) -> Match:
        witness = object.__new__(cls)
        object.__setattr__(witness, "left", left)
        object.__setattr__(witness, "right", right)
        object.__setattr__(witness, "_key", _WITNESS_KEY)
        return witness

    def is_genuine(self) -> bool:
        return self._key is _WITNESS_KEY

    def __bool__(self) -> bool:
        return True

    def covers(self, left: Sequence[ColumnType], right: Sequence[ColumnType]) -> bool:
        """Return True if this witness was produced for exactly these two schemas."""
        return self.left == tuple(left) and self.right == tuple(right)


@dataclass(frozen=True)
class Mismatch:
    """Negative witness for atomic inputs; carries no payload."""

    def __bool__(self) -> bool:
        return False


@dataclass(frozen=True)
class SchemaMismatch(Mismatch):
    """
    Negative witness for schemas, pinpointing the leftmost divergence.

    Attributes:
        position (int): Zero-based index of the first divergence.
        left (ColumnType | None): Left tag at position, None if the left schema ran out.
        right (ColumnType | None): Right tag at position, None if the right schema ran out.
    """

    position: int
    left: ColumnType | None
    right: ColumnType | None

    def flipped(self) -> SchemaMismatch:
        """Return the witness for the same comparison with the operands swapped."""
        return TagMismatch(self.position, self.right, self.left)

    def describe(self) -> str:
        return (
            f"schemas diverge at column {self.position}: "
            f"left has {_tag_text(self.left)}, right has {_tag_text(self.right)}"
        )


@dataclass(frozen=True)
class TagMismatch(SchemaMismatch):
    """Both schemas have a column at position and the tags differ."""


@dataclass(frozen=True)
class LengthMismatch(SchemaMismatch):
    """
    One schema ran out at position while the other continues.

    Attributes:
        left_length (int): Column count of the left schema.
        right_length (int): Column count of the right schema.
    """

    left_length: int
    right_length: int

    def flipped(self) -> LengthMismatch:
        return LengthMismatch(
            self.position, self.right, self.left, self.right_length, self.left_length
        )

    def describe(self) -> str:
        return f"{super().describe()} (lengths {self.left_length} vs {self.right_length})"


Decision = Union[Match, Mismatch]


def _tag_text(tag: ColumnType | None) -> str:
    return "no column" if tag is None else tag.value


def is_match(decision: Decision) -> bool:
    return isinstance(decision, Match)


# ----------------------------------------------------------------------------
# Column type decider
# ----------------------------------------------------------------------------

_I64, _STR, _BOOLEAN, _F64 = ColumnType.I64, ColumnType.STR, ColumnType.BOOLEAN, ColumnType.F64

# Every ordered pair is listed; no fallback entry.
_COLUMN_DECISIONS: Final[dict[tuple[ColumnType, ColumnType], bool]] = {
    (_I64, _I64): True,
    (_I64, _STR): False,
    (_I64, _BOOLEAN): False,
    (_I64, _F64): False,
    (_STR, _I64): False,
    (_STR, _STR): True,
    (_STR, _BOOLEAN): False,
    (_STR, _F64): False,
    (_BOOLEAN, _I64): False,
    (_BOOLEAN, _STR): False,
    (_BOOLEAN, _BOOLEAN): True,
    (_BOOLEAN, _F64): False,
    (_F64, _I64): False,
    (_F64, _STR): False,
    (_F64, _BOOLEAN): False,
    (_F64, _F64): True,
}

ensure_closed_over(
    _COLUMN_DECISIONS.keys(),
    product(ALL_COLUMN_TYPES, ALL_COLUMN_TYPES),
    "column type decision table",
)

_COLUMN_MISMATCH: Final = Mismatch()


def decide_column_type(a: ColumnType, b: ColumnType) -> Match | Mismatch:
    """
    Decide whether two column tags are the same tag.

    Args:
        a (ColumnType): Left tag.
        b (ColumnType): Right tag.

    Returns:
        Match | Mismatch: Match if a and b are the identical tag, otherwise Mismatch.

    Raises:
        TypeError: If either argument is not a ColumnType.
    """
    try:
        same = _COLUMN_DECISIONS[(a, b)]
    except KeyError:
        raise TypeError(f"expected ColumnType operands, got {a!r} and {b!r}") from None
    if same:
        return Match._mint(a, b)
    return _COLUMN_MISMATCH


# ----------------------------------------------------------------------------
# Schema decider
# ----------------------------------------------------------------------------


def decide_schema(a: Sequence[ColumnType], b: Sequence[ColumnType]) -> Match | SchemaMismatch:
    """
    Decide structural equality of two schemas.

    Walks both schemas from the left, deciding each pair of heads before moving on to
    the tails. The first tag mismatch stops the walk. If the common prefix matches and
    one schema is longer, the result is a LengthMismatch at the shorter length.

    Args:
        a (Sequence[ColumnType]): Left schema (Schema, tuple or list of tags).
        b (Sequence[ColumnType]): Right schema.

    Returns:
        Match | SchemaMismatch: Match covering (a, b), or the leftmost divergence.

    Notes:
        - Order- and length-sensitive: permutations of the same tags do not match.
        - Performs at most min(len(a), len(b)) column decisions.
    """
    left = tuple(a)
    right = tuple(b)
    for position, (l_tag, r_tag) in enumerate(zip(left, right)):
        if not decide_column_type(l_tag, r_tag):
            return TagMismatch(position, l_tag, r_tag)
    if len(left) != len(right):
        p = min(len(left), len(right))
        return LengthMismatch(
            p,
            left[p] if p < len(left) else None,
            right[p] if p < len(right) else None,
            len(left),
            len(right),
        )
    return Match._mint(left, right)
