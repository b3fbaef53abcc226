"""
Polars bridge for tablemerge tables.

Purpose
- Derive a Schema from a polars DataFrame and check frames against expected schemas.
- Convert DataFrames to invariant-checked Tables and back.
- Merge frames through the guarded core merges (concat_frames, zip_frames).

Dtype mapping
- pl.Int64 -> i64, pl.String (pl.Utf8) -> str, pl.Boolean -> boolean, pl.Float64 -> f64.
- With IoSettings.cast_scalars: Int8/16/32 and UInt8/16/32 cast to Int64, Float32 to
  Float64. These casts are lossless. UInt64 and other dtypes are rejected.
- Null cells are rejected; tables have no nullable columns.

Notes
- Tables carry no column names. Exports use explicit names or
  f"{IoSettings.column_prefix}{i}".
- Depends on polars and tablemerge.core only.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Final

import polars as pl

from tablemerge.core.decide import Match, SchemaMismatch, decide_schema
from tablemerge.core.errors import RowShapeError, SchemaMismatchError
from tablemerge.core.grammar import ALL_COLUMN_TYPES, ColumnType, ensure_closed_over
from tablemerge.core.merge import concat_tables, zip_columns
from tablemerge.core.tables import Schema, Table

from .config import IoSettings
from .errors import IoSchemaError

__all__ = [
    "column_type_for_dtype",
    "schema_from_frame",
    "validate_frame_against_schema",
    "table_from_frame",
    "table_to_frame",
    "concat_frames",
    "zip_frames",
]

logger = logging.getLogger(__name__)

# Polars exposes dtype classes (e.g., pl.Int64); keep this mapping loosely typed.
_DTYPE_MAP: Final[dict[ColumnType, object]] = {
    ColumnType.I64: pl.Int64,
    ColumnType.STR: pl.String,
    ColumnType.BOOLEAN: pl.Boolean,
    ColumnType.F64: pl.Float64,
}

ensure_closed_over(_DTYPE_MAP.keys(), ALL_COLUMN_TYPES, "polars dtype map")

_WIDENING: Final[tuple[tuple[object, ColumnType], ...]] = (
    (pl.Int8, ColumnType.I64),
    (pl.Int16, ColumnType.I64),
    (pl.Int32, ColumnType.I64),
    (pl.UInt8, ColumnType.I64),
    (pl.UInt16, ColumnType.I64),
    (pl.UInt32, ColumnType.I64),
    (pl.Float32, ColumnType.F64),
)


def column_type_for_dtype(dtype: pl.DataType, *, cast_scalars: bool = True) -> ColumnType:
    """
    Map a polars dtype to a ColumnType.

    Args:
        dtype (pl.DataType): Frame column dtype.
        cast_scalars (bool): Accept narrower integer and Float32 dtypes as widened tags.

    Raises:
        IoSchemaError: If the dtype has no ColumnType counterpart.
    """
    for tag, exact in _DTYPE_MAP.items():
        if dtype == exact:
            return tag
    if cast_scalars:
        for narrow, tag in _WIDENING:
            if dtype == narrow:
                return tag
    raise IoSchemaError(f"unsupported column dtype {dtype}")


def _frame_tags(df: pl.DataFrame, settings: IoSettings) -> list[ColumnType]:
    tags: list[ColumnType] = []
    for name, dtype in df.schema.items():
        try:
            tags.append(column_type_for_dtype(dtype, cast_scalars=settings.cast_scalars))
        except IoSchemaError as exc:
            raise IoSchemaError(f"column {name!r}: {exc}") from exc
    return tags


def schema_from_frame(df: pl.DataFrame, settings: IoSettings | None = None) -> Schema:
    """
    Derive the Schema of a frame from its column dtypes, in column order.

    Raises:
        IoSchemaError: If any column has an unsupported dtype.
    """
    return Schema(tuple(_frame_tags(df, settings or IoSettings())))


def validate_frame_against_schema(
    df: pl.DataFrame,
    schema: Schema,
    settings: IoSettings | None = None,
) -> Match:
    """
    Check that a frame's columns line up with an expected schema.

    Args:
        df (pl.DataFrame): Frame to check.
        schema (Schema): Expected schema.
        settings (IoSettings | None): strict_schema=False ignores trailing extra columns.

    Returns:
        Match: Witness covering the (possibly truncated) frame schema and schema.

    Raises:
        IoSchemaError: If a dtype is unsupported or the schemas diverge. Divergence
            messages include the first divergent column index and name.
    """
    s = settings or IoSettings()
    frame_schema = schema_from_frame(df, s)
    if not s.strict_schema and len(frame_schema) > len(schema):
        frame_schema = frame_schema[: len(schema)]
    decision = decide_schema(frame_schema, schema)
    if isinstance(decision, SchemaMismatch):
        names = df.columns
        where = f" ({names[decision.position]!r})" if decision.position < len(names) else ""
        raise IoSchemaError(
            f"frame does not match schema{where}: {decision.describe()}"
        ) from SchemaMismatchError(decision)
    return decision


def table_from_frame(df: pl.DataFrame, settings: IoSettings | None = None) -> Table:
    """
    Convert a frame into an invariant-checked Table.

    Raises:
        IoSchemaError: On unsupported dtypes, null cells, or cells that do not fit.
    """
    s = settings or IoSettings()
    tags = _frame_tags(df, s)
    nulls = [name for name in df.columns if df.get_column(name).null_count()]
    if nulls:
        raise IoSchemaError(f"columns contain nulls: {nulls!r}")
    casts = [
        pl.col(name).cast(_DTYPE_MAP[tag])  # type: ignore[arg-type]
        for name, tag in zip(df.columns, tags)
        if df.schema[name] != _DTYPE_MAP[tag]
    ]
    if casts:
        df = df.with_columns(casts)
    try:
        return Table(Schema(tuple(tags)), df.rows(), coerce_ints=s.coerce_ints)
    except RowShapeError as exc:  # pragma: no cover - dtype mapping guarantees kinds
        raise IoSchemaError(str(exc)) from exc


def _column_names(table: Table, names: Sequence[str] | None, settings: IoSettings) -> list[str]:
    if names is None:
        return [f"{settings.column_prefix}{i}" for i in range(table.width)]
    out = list(names)
    if len(out) != table.width:
        raise IoSchemaError(f"expected {table.width} column names, got {len(out)}")
    if len(set(out)) != len(out):
        raise IoSchemaError(f"duplicate column names: {out!r}")
    return out


def table_to_frame(
    table: Table,
    names: Sequence[str] | None = None,
    settings: IoSettings | None = None,
) -> pl.DataFrame:
    """
    Export a Table to a polars DataFrame with exact dtypes per column tag.

    Args:
        table (Table): Table to export.
        names (Sequence[str] | None): Column names; defaults to prefixed indexes.
        settings (IoSettings | None): Supplies column_prefix.

    Raises:
        IoSchemaError: If names has the wrong length or contains duplicates.
    """
    s = settings or IoSettings()
    cols = _column_names(table, names, s)
    frame_schema = {name: _DTYPE_MAP[tag] for name, tag in zip(cols, table.schema)}
    return pl.DataFrame(list(table.rows), schema=frame_schema, orient="row")  # type: ignore[arg-type]


def concat_frames(
    a: pl.DataFrame,
    b: pl.DataFrame,
    settings: IoSettings | None = None,
) -> pl.DataFrame:
    """
    Stack two frames through concat_tables; the result keeps a's column names.

    Column names of b are not compared; only the column type tags must line up.

    Raises:
        IoSchemaError: If either frame cannot be converted.
        SchemaMismatchError: If the frames' schemas diverge.
    """
    s = settings or IoSettings()
    merged = concat_tables(table_from_frame(a, s), table_from_frame(b, s))
    logger.debug("concat_frames produced %d rows", merged.row_count)
    return table_to_frame(merged, a.columns, s)


def zip_frames(
    a: pl.DataFrame,
    b: pl.DataFrame,
    settings: IoSettings | None = None,
) -> pl.DataFrame:
    """
    Join two frames column-wise through zip_columns; names are a's followed by b's.

    Raises:
        IoSchemaError: If either frame cannot be converted or names collide.
        RowCountMismatchError: If the row counts differ.
    """
    s = settings or IoSettings()
    merged = zip_columns(table_from_frame(a, s), table_from_frame(b, s))
    return table_to_frame(merged, [*a.columns, *b.columns], s)
