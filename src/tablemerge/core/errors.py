"""
Core exception types raised by grammar parsing, table construction, and guarded merges.

Provides typed exceptions for core-domain failures:
- GrammarError for unknown or malformed column type tags.
- SchemaError for schema-level constraints (base class).
- RowShapeError when rows do not fit their table's schema at construction.
- SchemaMismatchError when a concat is refused because schemas diverge.
- RowCountMismatchError when a column zip is refused because row counts differ.

Notes:
    - Deciders in tablemerge.core.decide never raise; they return witnesses.
      Only the merge engine turns a Mismatch into SchemaMismatchError.
    - All merge refusals derive from TableMergeError so callers can catch them together.

Examples:
    >>> from tablemerge import Schema, Table, concat_tables
    >>> from tablemerge.core.errors import SchemaMismatchError
    >>> a = Table(Schema.of("i64", "str"), [(1, "a")])
    >>> b = Table(Schema.of("i64", "boolean"), [(2, True)])
    >>> try:
    ...     concat_tables(a, b)
    ... except SchemaMismatchError as e:
    ...     e.position
    1
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .decide import SchemaMismatch
    from .grammar import ColumnType

__all__ = [
    "GrammarError",
    "SchemaError",
    "RowShapeError",
    "TableMergeError",
    "SchemaMismatchError",
    "RowCountMismatchError",
]


class GrammarError(ValueError):
    """Unknown column type tag or tag not in lower_snake form."""


class SchemaError(ValueError):
    """Schema-level validation failure (shape, constraints)."""


class RowShapeError(SchemaError):
    """A row's arity or a cell's value kind does not match the table schema."""


class TableMergeError(Exception):
    """Base class for refused merges (concat/zip)."""


class SchemaMismatchError(TableMergeError, SchemaError):
    """
    Concatenation refused: the two schemas are not structurally identical.

    Attributes:
        mismatch (SchemaMismatch): Witness pinpointing the first divergence.
        table_index (int | None): Index of the offending operand when raised from
            concat_all; None for a plain two-table concat.
    """

    def __init__(self, mismatch: SchemaMismatch, table_index: int | None = None) -> None:
        self.mismatch = mismatch
        self.table_index = table_index
        msg = mismatch.describe()
        if table_index is not None:
            msg = f"table {table_index}: {msg}"
        super().__init__(msg)

    @property
    def position(self) -> int:
        return self.mismatch.position

    @property
    def left(self) -> ColumnType | None:
        return self.mismatch.left

    @property
    def right(self) -> ColumnType | None:
        return self.mismatch.right


class RowCountMismatchError(TableMergeError):
    """Column zip refused: the tables have different row counts."""

    def __init__(self, left_rows: int, right_rows: int) -> None:
        self.left_rows = left_rows
        self.right_rows = right_rows
        super().__init__(
            f"cannot zip columns of tables with different row counts "
            f"(left has {left_rows}, right has {right_rows})"
        )
