"""
Frozen schemas and invariant-checked tables.

Notes:
    - A Schema is an ordered, finite, immutable sequence of ColumnType tags. Column names
      are not part of a schema; structural equality is over tags only.
    - A Table owns a Schema and a tuple of row tuples. Every row has one value per column
      and each value has the runtime kind of its column's tag (see core.grammar).
    - The public constructor validates every row. Merge results are assembled by
      tablemerge.core.merge through the private ``_trusted`` constructor, which skips
      re-validation because the merge already holds a Match witness or builds rows
      positionally from validated operands.
    - Core is zero-IO; tablemerge.io converts tables to and from polars frames.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, overload

from .constants import COERCE_INTS
from .errors import RowShapeError
from .grammar import ColumnType, column_type_from_value, describe_tags, value_matches

__all__ = [
    "Schema",
    "Table",
    "Row",
]

Row = tuple[Any, ...]


@dataclass(frozen=True)
class Schema:
    """
    Ordered sequence of column type tags describing a table's columns.

    Attributes:
        columns (tuple[ColumnType, ...]): Tags in column order. Strings are accepted at
            construction and normalized via column_type_from_value.

    Raises:
        GrammarError: If any tag string names no known ColumnType.

    Examples:
        >>> from tablemerge.core.tables import Schema
        >>> s = Schema.of("i64", "str")
        >>> len(s), s[1].value
        (2, 'str')
        >>> (s + Schema.of("f64")).values()
        ('i64', 'str', 'f64')
    """

    columns: tuple[ColumnType, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "columns", tuple(column_type_from_value(c) for c in self.columns)
        )

    @classmethod
    def of(cls, *tags: ColumnType | str) -> Schema:
        return cls(tuple(tags))  # type: ignore[arg-type]

    def __len__(self) -> int:
        return len(self.columns)

    def __iter__(self) -> Iterator[ColumnType]:
        return iter(self.columns)

    @overload
    def __getitem__(self, index: int) -> ColumnType: ...

    @overload
    def __getitem__(self, index: slice) -> Schema: ...

    def __getitem__(self, index: int | slice) -> ColumnType | Schema:
        if isinstance(index, slice):
            return Schema(self.columns[index])
        return self.columns[index]

    def __add__(self, other: Schema) -> Schema:
        if not isinstance(other, Schema):
            return NotImplemented
        return Schema(self.columns + other.columns)

    def __str__(self) -> str:
        return describe_tags(self.columns)

    def values(self) -> tuple[str, ...]:
        """Serialized (lower_snake) tag values in column order."""
        return tuple(c.value for c in self.columns)


def _promote(tag: ColumnType, value: Any) -> Any:
    if tag is ColumnType.F64 and type(value) is int:
        return float(value)
    return value


def _check_rows(schema: Schema, rows: Iterable[Sequence[Any]], coerce_ints: bool) -> tuple[Row, ...]:
    width = len(schema)
    checked: list[Row] = []
    for i, row in enumerate(rows):
        if isinstance(row, (str, bytes, bytearray, Mapping)):
            raise RowShapeError(
                f"row {i} must be a sequence of cell values, got {type(row).__name__}"
            )
        try:
            cells = tuple(row)
        except TypeError:
            raise RowShapeError(
                f"row {i} must be a sequence of cell values, got {type(row).__name__}"
            ) from None
        if len(cells) != width:
            raise RowShapeError(
                f"row {i} has {len(cells)} values but schema {schema} has {width} columns"
            )
        if coerce_ints:
            cells = tuple(_promote(tag, v) for tag, v in zip(schema, cells))
        for j, (tag, value) in enumerate(zip(schema, cells)):
            if not value_matches(tag, value):
                raise RowShapeError(
                    f"row {i}, column {j}: expected {tag.value} value, "
                    f"got {type(value).__name__} {value!r}"
                )
        checked.append(cells)
    return tuple(checked)


class Table:
    """
    Immutable rectangular table: a Schema plus rows that conform to it.

    Args:
        schema (Schema | Sequence[ColumnType | str]): Column tags.
        rows (Iterable[Sequence[Any]]): Row values; each row is copied into a tuple.
        coerce_ints (bool): Promote int cells in f64 columns to float before checking.

    Raises:
        RowShapeError: If a row has the wrong arity or a cell has the wrong kind.

    Examples:
        >>> from tablemerge.core.tables import Schema, Table
        >>> t = Table(Schema.of("i64", "str"), [(1, "a"), (2, "b")])
        >>> t.row_count, t.column(1)
        (2, ('a', 'b'))
    """

    __slots__ = ("_schema", "_rows")

    _schema: Schema
    _rows: tuple[Row, ...]

    def __init__(
        self,
        schema: Schema | Sequence[ColumnType | str],
        rows: Iterable[Sequence[Any]] = (),
        *,
        coerce_ints: bool = COERCE_INTS,
    ) -> None:
        if not isinstance(schema, Schema):
            schema = Schema(tuple(schema))  # type: ignore[arg-type]
        self._schema = schema
        self._rows = _check_rows(schema, rows, coerce_ints)

    @classmethod
    def _trusted(cls, schema: Schema, rows: tuple[Row, ...]) -> Table:
        # Callers guarantee rows already conform to schema.
        table = cls.__new__(cls)
        table._schema = schema
        table._rows = rows
        return table

    @classmethod
    def empty(cls, schema: Schema | Sequence[ColumnType | str]) -> Table:
        return cls(schema, ())

    @property
    def schema(self) -> Schema:
        return self._schema

    @property
    def rows(self) -> tuple[Row, ...]:
        return self._rows

    @property
    def row_count(self) -> int:
        return len(self._rows)

    @property
    def width(self) -> int:
        return len(self._schema)

    def column(self, index: int) -> tuple[Any, ...]:
        """Return the values of one column, top to bottom."""
        if not -self.width <= index < self.width:
            raise IndexError(f"column index {index} out of range for width {self.width}")
        return tuple(row[index] for row in self._rows)

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[Row]:
        return iter(self._rows)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Table):
            return NotImplemented
        return self._schema == other._schema and self._rows == other._rows

    def __hash__(self) -> int:
        return hash((self._schema, self._rows))

    def __setattr__(self, name: str, value: Any) -> None:
        if hasattr(self, name):
            raise AttributeError(f"Table is immutable; cannot set {name!r}")
        object.__setattr__(self, name, value)

    def __repr__(self) -> str:
        return f"Table(schema={self._schema}, rows={self.row_count})"
