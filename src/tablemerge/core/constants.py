"""
tablemerge core defaults.

Defines value ranges and IO-facing defaults consumed by core tables and the downstream IO
layer. This module is zero-IO and uses only the Python standard library.

Notes:
    - I64 cells must lie within the signed 64-bit range.
    - tablemerge.io.config.IoSettings sources its defaults from here; change defaults in this
      module rather than in the settings class.
"""

from __future__ import annotations

__all__ = [
    "I64_MIN",
    "I64_MAX",
    "COLUMN_PREFIX",
    "CAST_SCALARS",
    "COERCE_INTS",
    "LOG_LEVEL",
]

I64_MIN: int = -(2**63)
I64_MAX: int = 2**63 - 1

# Column names generated when exporting a Table (which carries no names) to a frame.
COLUMN_PREFIX: str = "column_"

# Safe-cast narrower integer/float frame dtypes to i64/f64 when importing frames.
CAST_SCALARS: bool = True

# Promote int cells in f64 columns to float at Table construction.
COERCE_INTS: bool = False

LOG_LEVEL: str = "WARNING"
