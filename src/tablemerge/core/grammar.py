"""
Column type grammar for tablemerge schemas.

Defines the closed ColumnType enumeration and zero-IO helpers to parse, serialize, and
check values against column tags.

Responsibilities
- Define the ColumnType tags and their lower_snake serialized values.
- Normalize free-form tag strings (including a few common aliases) into ColumnType.
- Map each tag to the Python runtime kind its cell values must have.

Design principles
-----------------
1) One naming standard:
   - Enum classes: PascalCase
   - Enum member names: UPPER_SNAKE (Python constants)
   - Enum serialized values (wire/config/frames): lower_snake

2) Closed world:
   - Every per-tag table in this package enumerates ColumnType explicitly.
     Tables are checked against the enumeration at import time, so adding a
     tag without revisiting them fails on import rather than at call time.

Tag-to-value mapping
--------------------

| Tag      | Serialized | Python value kind                       |
|----------|------------|-----------------------------------------|
| I64      | i64        | int (bool excluded), within [-2**63, 2**63 - 1] |
| STR      | str        | str                                     |
| BOOLEAN  | boolean    | bool                                    |
| F64      | f64        | float                                   |

Examples
--------
>>> from tablemerge.core.grammar import ColumnType, column_type_from_value, value_matches
>>> column_type_from_value("I64") is ColumnType.I64
True
>>> column_type_from_value("bool") is ColumnType.BOOLEAN
True
>>> value_matches(ColumnType.I64, True)
False
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from enum import Enum
from typing import Any, Final

from .constants import I64_MAX, I64_MIN
from .errors import GrammarError

__all__ = [
    "ColumnType",
    "ALL_COLUMN_TYPES",
    "is_lower_snake",
    "assert_lower_snake",
    "column_type_value",
    "column_type_from_value",
    "value_matches",
    "describe_tags",
    "ensure_all_enum_values_lower_snake",
    "ensure_closed_over",
]


# ============================================================================
# COLUMN TYPES
# ============================================================================


class ColumnType(Enum):
    """
    Atomic column kinds a schema position may carry.

    Serialized values appear in:
      - SchemaSpec.columns / TableSpec.columns (core.models)
      - MismatchReport.left / MismatchReport.right
      - frame dtype mapping in tablemerge.io.frames
    """

    I64 = "i64"
    STR = "str"
    BOOLEAN = "boolean"
    F64 = "f64"

    def __str__(self) -> str:
        return self.value


ALL_COLUMN_TYPES: Final[tuple[ColumnType, ...]] = tuple(ColumnType)

_ALIASES: Final[dict[str, ColumnType]] = {
    "int": ColumnType.I64,
    "int64": ColumnType.I64,
    "string": ColumnType.STR,
    "utf8": ColumnType.STR,
    "bool": ColumnType.BOOLEAN,
    "float": ColumnType.F64,
    "float64": ColumnType.F64,
}


# ============================================================================
# Helpers & Validators (zero I/O)
# ============================================================================

_LOWER_SNAKE_RE: Final[re.Pattern[str]] = re.compile(r"^[a-z0-9]+(?:_[a-z0-9]+)*$")


def is_lower_snake(value: str) -> bool:
    """
    Check whether a string is lower_snake.

    Args:
      value (str): Candidate string to validate.

    Returns:
      bool: True if value matches lower_snake (e.g., "i64"), False otherwise.

    Examples:
      >>> is_lower_snake("f64")
      True
      >>> is_lower_snake("Float64")
      False
    """
    return bool(_LOWER_SNAKE_RE.match(value or ""))


def assert_lower_snake(value: str, what: str = "value") -> None:
    """
    Validate that a string is lower_snake.

    Raises:
      GrammarError: If value is not lower_snake.
    """
    if not is_lower_snake(value):
        raise GrammarError(f"{what} must be lower_snake (got: {value!r})")


def column_type_value(tag: ColumnType) -> str:
    """Get the serialized (lower_snake) value for a ColumnType."""
    return tag.value


def column_type_from_value(s: str | ColumnType) -> ColumnType:
    """
    Parse a column tag string into a ColumnType.

    Matching is case-insensitive and ignores surrounding whitespace. The aliases
    int/int64, string/utf8, bool and float/float64 are accepted.

    Args:
      s (str | ColumnType): Tag string, or a ColumnType (returned unchanged).

    Returns:
      ColumnType: Parsed tag.

    Raises:
      GrammarError: If s is not a string or names no known tag.
    """
    if isinstance(s, ColumnType):
        return s
    if not isinstance(s, str):
        raise GrammarError(f"column type must be a string, got {type(s).__name__}")
    token = s.strip().lower()
    if token in _ALIASES:
        return _ALIASES[token]
    assert_lower_snake(token, "column type")
    try:
        return ColumnType(token)
    except ValueError as exc:
        allowed = ", ".join(t.value for t in ColumnType)
        raise GrammarError(f"unknown column type {s!r} (allowed: {allowed})") from exc


def _is_i64(value: Any) -> bool:
    return type(value) is int and I64_MIN <= value <= I64_MAX


def _is_str(value: Any) -> bool:
    return isinstance(value, str)


def _is_boolean(value: Any) -> bool:
    return isinstance(value, bool)


def _is_f64(value: Any) -> bool:
    return isinstance(value, float)


_VALUE_CHECKS: Final = {
    ColumnType.I64: _is_i64,
    ColumnType.STR: _is_str,
    ColumnType.BOOLEAN: _is_boolean,
    ColumnType.F64: _is_f64,
}


def value_matches(tag: ColumnType, value: Any) -> bool:
    """
    Check whether a cell value has the runtime kind required by a column tag.

    Notes:
      - bool is a subclass of int in Python; I64 columns reject bools explicitly.
      - F64 columns accept floats only. Integer promotion happens at Table
        construction when coerce_ints is enabled.
    """
    return _VALUE_CHECKS[tag](value)


def ensure_all_enum_values_lower_snake(enums: Iterable[type[Enum]]) -> None:
    """
    Assert that every enum member's value is lower_snake.

    Raises:
      AssertionError: If any enum member has a non-lower_snake value.

    Examples:
      >>> ensure_all_enum_values_lower_snake([ColumnType])
    """
    for E in enums:
        for m in E:
            if not is_lower_snake(m.value):
                raise AssertionError(
                    f"{E.__name__}.{m.name} has non-lower_snake value: {m.value!r}"
                )


def ensure_closed_over(keys: Iterable[Any], expected: Iterable[Any], what: str) -> None:
    """
    Assert that a per-tag table enumerates exactly the expected keys.

    Used at import time by modules that dispatch on ColumnType so a new tag cannot
    slip through without an explicit entry.

    Raises:
      AssertionError: If any expected key is missing or any unexpected key is present.
    """
    have = list(keys)
    want = set(expected)
    missing = [k for k in want if k not in have]
    extra = [k for k in have if k not in want]
    if missing or extra or len(have) != len(set(have)):
        raise AssertionError(
            f"{what} is not closed over its domain (missing={missing!r}, extra={extra!r})"
        )


ensure_all_enum_values_lower_snake([ColumnType])
ensure_closed_over(_VALUE_CHECKS.keys(), ALL_COLUMN_TYPES, "value check table")


def describe_tags(tags: Iterable[ColumnType]) -> str:
    """Render tags as a compact bracketed list, e.g. ``[i64, str]``."""
    return "[" + ", ".join(t.value for t in tags) + "]"
