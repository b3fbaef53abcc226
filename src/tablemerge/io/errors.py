"""
Custom exceptions for the tablemerge.io module.

Purpose
- Provide IO-layer error types distinct from tablemerge.core errors.
- Keep tablemerge.core as the source of truth for grammar/schema/merge errors.

Source of truth and boundaries
- tablemerge.core.errors.GrammarError / RowShapeError are raised by core constructors.
- tablemerge.core.errors.SchemaMismatchError / RowCountMismatchError are raised by merges.
- tablemerge.io raises Io* errors for settings and frame conversion concerns:
  - IoConfigError: invalid configuration values.
  - IoSchemaError: a polars frame cannot be represented as, or does not match, a Schema.

Notes
- These exceptions perform no IO and are stdlib-only.
"""

from __future__ import annotations


class IoError(Exception):
    """
    Base class for IO-related errors in tablemerge.io.

    Notes:
        Use this as a catch-all for IO-layer failures, distinct from tablemerge.core errors.
    """


class IoConfigError(IoError):
    """
    Raised when IO configuration is invalid.

    Examples:
        - Empty column prefix
        - Unknown log level name
    """


class IoSchemaError(IoError):
    """
    Raised when a frame cannot be converted to a Table or fails a schema check.

    Notes:
        Unsupported dtypes, null cells, duplicate column names, and schema divergence
        all surface as IoSchemaError. For divergence, the underlying
        SchemaMismatchError is chained as ``__cause__``.
    """
