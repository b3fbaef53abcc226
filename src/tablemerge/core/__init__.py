"""
Core package aggregator for tablemerge contracts (grammar, deciders, tables, merges, models).

## Contracts (single source of truth)
- Grammar - ColumnType enum, tag normalization, value-kind checks.
- Decide - decide_column_type / decide_schema and their witnesses.
- Tables - Schema and invariant-checked Table.
- Merge - concat_tables / zip_columns gated by the deciders.
- Models - pydantic specs and MismatchReport.

## Notes
- Zero-IO policy: stdlib + pydantic only; no file/network IO.
- Naming policy: enum `.value` strings are lower_snake.
- Deciders never raise on ColumnType inputs; merge refusals raise TableMergeError subclasses.

## Downstream usage
- tablemerge.io - converts polars frames to Tables and checks frames against Schemas.

## Examples
```python
from tablemerge.core.tables import Schema, Table
from tablemerge.core.merge import concat_tables, zip_columns

ids = Table(Schema.of("i64"), [(1,), (2,), (3,)])
names = Table(Schema.of("str"), [("a",), ("b",), ("c",)])
zip_columns(ids, names).schema.values()  # ('i64', 'str')
concat_tables(ids, ids).row_count  # 6
```
"""
