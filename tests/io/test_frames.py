from __future__ import annotations

import polars as pl
import pytest

from tablemerge.core.decide import Match
from tablemerge.core.errors import RowCountMismatchError, SchemaMismatchError
from tablemerge.core.grammar import ColumnType
from tablemerge.core.tables import Schema, Table
from tablemerge.io.config import IoSettings
from tablemerge.io.errors import IoSchemaError
from tablemerge.io.frames import (
    column_type_for_dtype,
    concat_frames,
    schema_from_frame,
    table_from_frame,
    table_to_frame,
    validate_frame_against_schema,
    zip_frames,
)


def _frame() -> pl.DataFrame:
    return pl.DataFrame(
        {
            "id": pl.Series([1, 2], dtype=pl.Int64),
            "name": ["a", "b"],
            "active": [True, False],
            "score": [0.5, 1.5],
        }
    )


def test_schema_from_frame_maps_dtypes_in_order() -> None:
    assert schema_from_frame(_frame()) == Schema.of("i64", "str", "boolean", "f64")


def test_narrow_dtypes_are_widened_only_when_casting() -> None:
    assert column_type_for_dtype(pl.Int32()) is ColumnType.I64
    assert column_type_for_dtype(pl.Float32()) is ColumnType.F64
    with pytest.raises(IoSchemaError):
        column_type_for_dtype(pl.Int32(), cast_scalars=False)
    with pytest.raises(IoSchemaError):
        column_type_for_dtype(pl.UInt64())


def test_unsupported_dtype_names_column() -> None:
    df = pl.DataFrame({"when": pl.Series([1], dtype=pl.Int64)}).with_columns(
        pl.col("when").cast(pl.Datetime)
    )
    with pytest.raises(IoSchemaError, match="'when'"):
        schema_from_frame(df)


def test_table_from_frame_casts_and_builds_rows() -> None:
    df = pl.DataFrame({"n": pl.Series([1, 2], dtype=pl.Int16), "x": pl.Series([0.5, 2.0], dtype=pl.Float32)})
    table = table_from_frame(df)
    assert table.schema == Schema.of("i64", "f64")
    assert table.rows == ((1, 0.5), (2, 2.0))


def test_table_from_frame_rejects_nulls() -> None:
    df = pl.DataFrame({"name": ["a", None]})
    with pytest.raises(IoSchemaError, match="nulls"):
        table_from_frame(df)


def test_table_to_frame_uses_prefix_and_exact_dtypes() -> None:
    table = Table(Schema.of("i64", "str"), [(1, "a")])
    df = table_to_frame(table, settings=IoSettings(column_prefix="c"))
    assert df.columns == ["c0", "c1"]
    assert df.schema["c0"] == pl.Int64
    assert df.schema["c1"] == pl.String
    assert table_from_frame(df) == table


def test_table_to_frame_empty_table_keeps_dtypes() -> None:
    df = table_to_frame(Table.empty(Schema.of("boolean", "f64")), names=["b", "f"])
    assert df.height == 0
    assert schema_from_frame(df) == Schema.of("boolean", "f64")


def test_table_to_frame_validates_names() -> None:
    table = Table(Schema.of("i64", "str"), [])
    with pytest.raises(IoSchemaError):
        table_to_frame(table, names=["only_one"])
    with pytest.raises(IoSchemaError):
        table_to_frame(table, names=["dup", "dup"])


def test_validate_frame_against_schema() -> None:
    df = _frame()
    witness = validate_frame_against_schema(df, Schema.of("i64", "str", "boolean", "f64"))
    assert isinstance(witness, Match)

    with pytest.raises(IoSchemaError, match="'active'") as info:
        validate_frame_against_schema(df, Schema.of("i64", "str", "f64", "f64"))
    assert isinstance(info.value.__cause__, SchemaMismatchError)
    assert info.value.__cause__.position == 2


def test_validate_frame_lenient_ignores_trailing_columns() -> None:
    df = _frame()
    prefix = Schema.of("i64", "str")
    with pytest.raises(IoSchemaError):
        validate_frame_against_schema(df, prefix)
    assert validate_frame_against_schema(df, prefix, IoSettings(strict_schema=False))


def test_concat_frames_keeps_left_names() -> None:
    a = pl.DataFrame({"id": [1, 2], "name": ["a", "b"]})
    b = pl.DataFrame({"key": [3], "label": ["c"]})
    out = concat_frames(a, b)
    assert out.columns == ["id", "name"]
    assert out.rows() == [(1, "a"), (2, "b"), (3, "c")]


def test_concat_frames_rejects_divergent_schema() -> None:
    a = pl.DataFrame({"id": [1], "name": ["a"]})
    b = pl.DataFrame({"id": [2], "flag": [True]})
    with pytest.raises(SchemaMismatchError) as info:
        concat_frames(a, b)
    assert info.value.position == 1


def test_zip_frames() -> None:
    a = pl.DataFrame({"id": [1, 2, 3]})
    b = pl.DataFrame({"name": ["x", "y", "z"]})
    out = zip_frames(a, b)
    assert out.columns == ["id", "name"]
    assert out.rows() == [(1, "x"), (2, "y"), (3, "z")]

    with pytest.raises(RowCountMismatchError):
        zip_frames(a, b.head(2))
    with pytest.raises(IoSchemaError):
        zip_frames(a, a)
