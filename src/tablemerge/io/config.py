"""
Configuration for the tablemerge.io module.

Defines IoSettings, a frozen dataclass carrying runtime configuration for frame conversion
and logging. Defaults are sourced from tablemerge.core.constants (the single source of truth).

Source of truth
- tablemerge.core.constants.COLUMN_PREFIX, CAST_SCALARS, COERCE_INTS, LOG_LEVEL

Import DAG discipline
- Depends only on stdlib and tablemerge.core.constants.

Notes
- Loading precedence is env > TOML > defaults (see IoSettings.load).
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from tablemerge.core.constants import CAST_SCALARS as CORE_CAST_SCALARS
from tablemerge.core.constants import COERCE_INTS as CORE_COERCE_INTS
from tablemerge.core.constants import COLUMN_PREFIX as CORE_COLUMN_PREFIX
from tablemerge.core.constants import LOG_LEVEL as CORE_LOG_LEVEL

from .errors import IoConfigError

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET")


def _bool(v: Any) -> bool:
    if isinstance(v, bool):
        return v
    if isinstance(v, (int, float)):
        return bool(v)
    if isinstance(v, str):
        return v.strip().lower() in {"1", "true", "t", "yes", "y", "on"}
    return False


@dataclass(frozen=True)
class IoSettings:
    """
    Runtime settings for the tablemerge.io layer.

    Attributes:
        column_prefix (str): Prefix for generated column names when exporting a Table
            to a frame without explicit names ("column_0", "column_1", ...).
        cast_scalars (bool): Safely cast narrower integer dtypes to i64 and Float32 to f64
            when importing frames. When False those dtypes raise IoSchemaError.
        coerce_ints (bool): Promote int cells in f64 columns to float at Table construction.
        strict_schema (bool): When checking a frame against an expected schema, require
            the exact column count. When False, trailing extra frame columns are ignored.
        log_level (str): Level applied by tablemerge.logging_config.setup_logging.

    Raises:
        IoConfigError: If column_prefix is empty or log_level is not a logging level name.

    Examples:
        >>> from tablemerge.io import IoSettings
        >>> IoSettings(column_prefix="c")  # doctest: +ELLIPSIS
        IoSettings(...)
    """

    column_prefix: str = CORE_COLUMN_PREFIX
    cast_scalars: bool = CORE_CAST_SCALARS
    coerce_ints: bool = CORE_COERCE_INTS
    strict_schema: bool = True
    log_level: str = CORE_LOG_LEVEL

    def __post_init__(self) -> None:
        if not self.column_prefix:
            raise IoConfigError("column_prefix must be a non-empty string")
        level = str(self.log_level).strip().upper()
        if level not in _LOG_LEVELS:
            raise IoConfigError(f"log_level must be one of {_LOG_LEVELS}, got {self.log_level!r}")
        object.__setattr__(self, "log_level", level)

    @property
    def log_level_number(self) -> int:
        return logging.getLevelName(self.log_level)

    # Configuration loaders (env/TOML) with precedence: env > TOML > defaults.

    @classmethod
    def _apply_mapping(cls, base: IoSettings, cfg: dict[str, Any] | None) -> IoSettings:
        """Apply a loose config mapping onto IoSettings, returning a new instance."""
        if not isinstance(cfg, dict):
            return base

        s = base

        if "column_prefix" in cfg and isinstance(cfg["column_prefix"], str):
            s = replace(s, column_prefix=cfg["column_prefix"])

        for flag in ("cast_scalars", "coerce_ints", "strict_schema"):
            if flag in cfg:
                s = replace(s, **{flag: _bool(cfg[flag])})

        if "log_level" in cfg and isinstance(cfg["log_level"], str):
            s = replace(s, log_level=cfg["log_level"])

        return s

    @classmethod
    def from_env(cls, base: IoSettings | None = None, prefix: str = "TABLEMERGE_IO_") -> IoSettings:
        """
        Build IoSettings from environment variables. Precedence is env > base (if provided) > defaults.

        Recognized variables:
            - TABLEMERGE_IO_COLUMN_PREFIX
            - TABLEMERGE_IO_CAST_SCALARS (1/0/true/false/yes/no/on/off)
            - TABLEMERGE_IO_COERCE_INTS
            - TABLEMERGE_IO_STRICT_SCHEMA
            - TABLEMERGE_IO_LOG_LEVEL
        """
        s = base or cls()

        mapping: dict[str, Any] = {}
        for key in ("column_prefix", "cast_scalars", "coerce_ints", "strict_schema", "log_level"):
            v = os.getenv(prefix + key.upper())
            if v:
                mapping[key] = v

        return cls._apply_mapping(s, mapping)

    @classmethod
    def from_toml(cls, path: str | os.PathLike[str] | None = None) -> IoSettings:
        """
        Build IoSettings from a TOML file.

        Search order when `path` is None:
            1) ./tablemerge.toml (with either top-level [io] or direct keys)
            2) ./pyproject.toml under [tool.tablemerge.io]

        Returns defaults if no file is present or none of them carries settings.

        Raises:
            IoConfigError: If an explicitly given path does not exist or is not valid TOML.
        """
        s = cls()

        def _load_toml(p: Path) -> dict[str, Any]:
            try:
                with p.open("rb") as fh:
                    return tomllib.load(fh)
            except tomllib.TOMLDecodeError as exc:
                raise IoConfigError(f"invalid TOML in {p}: {exc}") from exc

        cand: list[Path] = []
        if path is not None:
            explicit = Path(path)
            if not explicit.exists():
                raise IoConfigError(f"config file not found: {explicit}")
            cand.append(explicit)
        else:
            cand.append(Path.cwd() / "tablemerge.toml")
            cand.append(Path.cwd() / "pyproject.toml")

        cfg: dict[str, Any] | None = None
        for p in cand:
            if not p.exists():
                continue
            data = _load_toml(p)
            if p.name == "pyproject.toml":
                tool = data.get("tool", {})
                cfg = tool.get("tablemerge", {}).get("io") if isinstance(tool, dict) else None
            else:
                # tablemerge.toml - accept either [io] table or top-level keys
                cfg = data["io"] if isinstance(data.get("io"), dict) else data
            if cfg:
                break

        return cls._apply_mapping(s, cfg)

    @classmethod
    def load(cls, path: str | os.PathLike[str] | None = None) -> IoSettings:
        """
        Load IoSettings applying precedence: environment > TOML > defaults.

        Args:
            path: Optional explicit TOML path. If None, search defaults
                (tablemerge.toml, pyproject.toml).
        """
        s = cls.from_toml(path)
        s = cls.from_env(base=s)
        return s
