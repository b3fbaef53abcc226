"""
Pydantic v2 models for schema and table specifications and merge failure reports.

Responsibilities
- SchemaSpec / TableSpec: validated, JSON-friendly descriptions of schemas and tables
  (e.g., from a config file or an API payload) that build core Schema/Table values.
- MismatchReport: serializable explanation of a refused merge, suitable for logs,
  dashboards, or API responses.

Style
- Zero-IO (stdlib + pydantic only).
- Validators normalize tag strings to canonical lower_snake via grammar helpers.
- Invalid specs surface as pydantic.ValidationError wrapping GrammarError / RowShapeError.

Examples
--------
>>> from tablemerge.core.models import SchemaSpec, TableSpec
>>> SchemaSpec(columns=["I64", "bool"]).columns
['i64', 'boolean']
>>> TableSpec(columns=["i64", "str"], rows=[[1, "a"]]).to_table().row_count
1
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .decide import LengthMismatch, SchemaMismatch
from .errors import RowCountMismatchError, SchemaMismatchError, TableMergeError
from .grammar import column_type_from_value
from .tables import Schema, Table

__all__ = [
    "SchemaSpec",
    "TableSpec",
    "MismatchReport",
]


def _normalize_columns(v: Any) -> Any:
    # GrammarError (a ValueError) surfaces as pydantic.ValidationError.
    if not isinstance(v, (list, tuple)):
        return v
    return [column_type_from_value(c).value for c in v]


class SchemaSpec(BaseModel):
    """
    Serializable schema description.

    Attributes:
        columns (list[str]): Column tags in order, normalized to lower_snake values.

    Raises:
        pydantic.ValidationError: If any tag is unknown.
    """

    model_config = ConfigDict(extra="forbid")

    columns: list[str] = Field(default_factory=list)

    @field_validator("columns", mode="before")
    @classmethod
    def _normalize(cls, v: Any) -> Any:
        return _normalize_columns(v)

    def to_schema(self) -> Schema:
        return Schema(tuple(self.columns))  # type: ignore[arg-type]

    @classmethod
    def from_schema(cls, schema: Schema) -> SchemaSpec:
        return cls(columns=list(schema.values()))


class TableSpec(BaseModel):
    """
    Serializable table description: column tags plus row values.

    Attributes:
        columns (list[str]): Column tags in order.
        rows (list[list[Any]]): Row values; must satisfy the Table invariant.
        coerce_ints (bool): Promote int cells in f64 columns to float (JSON writers
            often emit 1 for 1.0).

    Raises:
        pydantic.ValidationError: If a tag is unknown or a row does not fit the schema.
    """

    model_config = ConfigDict(extra="forbid")

    columns: list[str] = Field(default_factory=list)
    rows: list[list[Any]] = Field(default_factory=list)
    coerce_ints: bool = False

    @field_validator("columns", mode="before")
    @classmethod
    def _normalize(cls, v: Any) -> Any:
        return _normalize_columns(v)

    @model_validator(mode="after")
    def _check_rows(self) -> TableSpec:
        # Raises RowShapeError, which pydantic reports as a ValidationError.
        self.to_table()
        return self

    def to_table(self) -> Table:
        return Table(
            Schema(tuple(self.columns)),  # type: ignore[arg-type]
            self.rows,
            coerce_ints=self.coerce_ints,
        )

    @classmethod
    def from_table(cls, table: Table) -> TableSpec:
        return cls(columns=list(table.schema.values()), rows=[list(r) for r in table.rows])


class MismatchReport(BaseModel):
    """
    Explanation of a refused merge.

    Attributes:
        kind: "tag_mismatch", "length_mismatch" or "row_count_mismatch".
        position (int | None): First divergent column (schema mismatches only).
        left (str | None): Left tag at position; None if the left schema ran out.
        right (str | None): Right tag at position; None if the right schema ran out.
        left_count (int | None): Left column count (length mismatch) or row count (row
            count mismatch).
        right_count (int | None): Right counterpart of left_count.
        message (str): Human-readable explanation including the position.

    Examples:
        >>> from tablemerge.core.decide import decide_schema
        >>> from tablemerge.core.tables import Schema
        >>> r = MismatchReport.from_mismatch(decide_schema(Schema.of("i64", "str"), Schema.of("i64", "f64")))
        >>> r.kind, r.position, r.left, r.right
        ('tag_mismatch', 1, 'str', 'f64')
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["tag_mismatch", "length_mismatch", "row_count_mismatch"]
    position: int | None = None
    left: str | None = None
    right: str | None = None
    left_count: int | None = None
    right_count: int | None = None
    message: str

    @classmethod
    def from_mismatch(cls, mismatch: SchemaMismatch) -> MismatchReport:
        common: dict[str, Any] = {
            "position": mismatch.position,
            "left": mismatch.left.value if mismatch.left is not None else None,
            "right": mismatch.right.value if mismatch.right is not None else None,
            "message": mismatch.describe(),
        }
        if isinstance(mismatch, LengthMismatch):
            return cls(
                kind="length_mismatch",
                left_count=mismatch.left_length,
                right_count=mismatch.right_length,
                **common,
            )
        return cls(kind="tag_mismatch", **common)

    @classmethod
    def from_error(cls, error: TableMergeError) -> MismatchReport:
        if isinstance(error, SchemaMismatchError):
            report = cls.from_mismatch(error.mismatch)
            return report.model_copy(update={"message": str(error)})
        if isinstance(error, RowCountMismatchError):
            return cls(
                kind="row_count_mismatch",
                left_count=error.left_rows,
                right_count=error.right_rows,
                message=str(error),
            )
        raise TypeError(f"unsupported merge error type: {type(error).__name__}")
