"""
Guarded table merges.

Two operations combine tables without ever breaking the Table invariant:

- concat_tables stacks rows. It is gated by decide_schema: only a Match witness
  covering both schemas lets rows be copied.
- zip_columns joins columns side by side. It is gated by an explicit row count check;
  the result schema is the left schema followed by the right schema.

Inputs are never mutated. Row tuples are shared between operands and results since
both are immutable.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .decide import Match, SchemaMismatch, decide_schema
from .errors import RowCountMismatchError, SchemaMismatchError
from .tables import Row, Table

__all__ = [
    "concat_tables",
    "concat_all",
    "zip_columns",
    "require_same_schema",
]

logger = logging.getLogger(__name__)


def require_same_schema(a: Table, b: Table) -> Match:
    """
    Decide schema equality of two tables, raising on divergence.

    Returns:
        Match: Witness covering (a.schema, b.schema).

    Raises:
        SchemaMismatchError: If the schemas differ in length or at some position.
    """
    decision = decide_schema(a.schema, b.schema)
    if isinstance(decision, SchemaMismatch):
        logger.info("schema check refused: %s", decision.describe())
        raise SchemaMismatchError(decision)
    return decision


def _concat_rows(witness: Match, a: Table, b: Table) -> Table:
    if (
        not isinstance(witness, Match)
        or not witness.is_genuine()
        or not witness.covers(a.schema, b.schema)
    ):
        raise TypeError("concatenation requires a Match witness for both table schemas")
    return Table._trusted(a.schema, a.rows + b.rows)


def concat_tables(a: Table, b: Table) -> Table:
    """
    Stack the rows of b under the rows of a.

    Args:
        a (Table): Upper table.
        b (Table): Lower table; must have a structurally identical schema.

    Returns:
        Table: Shared schema; a.row_count + b.row_count rows, rows of a first.

    Raises:
        SchemaMismatchError: If the schemas diverge. The error carries the first
            divergence position and the tags found there.

    Examples:
        >>> from tablemerge import Schema, Table, concat_tables
        >>> s = Schema.of("i64", "str")
        >>> concat_tables(Table(s, [(1, "a")]), Table(s, [(2, "b")])).rows
        ((1, 'a'), (2, 'b'))
    """
    witness = require_same_schema(a, b)
    merged = _concat_rows(witness, a, b)
    logger.debug(
        "concatenated %d + %d rows with schema %s", a.row_count, b.row_count, a.schema
    )
    return merged


def concat_all(tables: Iterable[Table]) -> Table:
    """
    Concatenate one or more tables in order.

    Raises:
        ValueError: If no tables are given.
        SchemaMismatchError: If any table's schema diverges from the first one's;
            ``table_index`` names the offending table.
    """
    it = iter(tables)
    try:
        acc = next(it)
    except StopIteration:
        raise ValueError("concat_all requires at least one table") from None
    for index, table in enumerate(it, start=1):
        decision = decide_schema(acc.schema, table.schema)
        if isinstance(decision, SchemaMismatch):
            logger.info("concat_all refused table %d: %s", index, decision.describe())
            raise SchemaMismatchError(decision, table_index=index)
        acc = _concat_rows(decision, acc, table)
    return acc


def zip_columns(a: Table, b: Table) -> Table:
    """
    Join the columns of b to the right of the columns of a, row by row.

    Args:
        a (Table): Left table.
        b (Table): Right table; must have the same row count as a.

    Returns:
        Table: Schema a.schema + b.schema; row i is a.rows[i] + b.rows[i].

    Raises:
        RowCountMismatchError: If the row counts differ.

    Notes:
        Schemas are not compared; any two schemas can be zipped.
    """
    if a.row_count != b.row_count:
        logger.info("zip refused: row counts %d vs %d", a.row_count, b.row_count)
        raise RowCountMismatchError(a.row_count, b.row_count)
    rows: tuple[Row, ...] = tuple(left + right for left, right in zip(a.rows, b.rows))
    logger.debug("zipped %d rows: %s + %s", len(rows), a.schema, b.schema)
    return Table._trusted(a.schema + b.schema, rows)
