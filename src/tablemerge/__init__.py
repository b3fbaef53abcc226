"""
tablemerge - decidable schema equality and guarded table merges.

## Public API
- ColumnType - closed enumeration of column tags (i64, str, boolean, f64).
- Schema, Table - immutable schema and invariant-checked table values.
- decide_column_type, decide_schema - deciders returning Match / Mismatch witnesses.
- concat_tables, concat_all, zip_columns - merges gated by the deciders.
- SchemaMismatchError, RowCountMismatchError - recoverable merge refusals.

## Layers
- tablemerge.core - zero-IO contracts (stdlib + pydantic).
- tablemerge.io - polars bridge and settings.
"""

from __future__ import annotations

from .core.decide import (
    LengthMismatch,
    Match,
    Mismatch,
    SchemaMismatch,
    TagMismatch,
    decide_column_type,
    decide_schema,
)
from .core.errors import (
    GrammarError,
    RowCountMismatchError,
    RowShapeError,
    SchemaError,
    SchemaMismatchError,
    TableMergeError,
)
from .core.grammar import ColumnType
from .core.merge import concat_all, concat_tables, require_same_schema, zip_columns
from .core.tables import Schema, Table

__all__ = [
    "ColumnType",
    "Schema",
    "Table",
    "Match",
    "Mismatch",
    "SchemaMismatch",
    "TagMismatch",
    "LengthMismatch",
    "decide_column_type",
    "decide_schema",
    "concat_tables",
    "concat_all",
    "zip_columns",
    "require_same_schema",
    "GrammarError",
    "SchemaError",
    "RowShapeError",
    "TableMergeError",
    "SchemaMismatchError",
    "RowCountMismatchError",
]
