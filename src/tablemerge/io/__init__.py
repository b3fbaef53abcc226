"""
tablemerge.io - polars bridge and runtime settings.

## Responsibilities
- Convert polars DataFrames to invariant-checked Tables and back.
- Check frames against expected Schemas using the core decider.
- Merge frames through the guarded core merges.
- Load IoSettings with precedence env > TOML > defaults.

## Import DAG discipline
- Depends only on stdlib, polars, and tablemerge.core.*.

## Examples
```python
import polars as pl
from tablemerge.io import IoSettings, concat_frames

a = pl.DataFrame({"id": [1, 2], "name": ["a", "b"]})
b = pl.DataFrame({"id": [3], "name": ["c"]})
concat_frames(a, b, IoSettings.load()).height  # 3
```
"""

from __future__ import annotations

from .config import IoSettings
from .errors import IoConfigError, IoError, IoSchemaError
from .frames import (
    column_type_for_dtype,
    concat_frames,
    schema_from_frame,
    table_from_frame,
    table_to_frame,
    validate_frame_against_schema,
    zip_frames,
)

__all__ = [
    "IoSettings",
    "IoError",
    "IoConfigError",
    "IoSchemaError",
    "column_type_for_dtype",
    "schema_from_frame",
    "validate_frame_against_schema",
    "table_from_frame",
    "table_to_frame",
    "concat_frames",
    "zip_frames",
]
