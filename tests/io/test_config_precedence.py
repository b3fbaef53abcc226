from __future__ import annotations

from pathlib import Path

import pytest

from tablemerge.io.config import IoSettings
from tablemerge.io.errors import IoConfigError

_ENV_KEYS = [
    "TABLEMERGE_IO_COLUMN_PREFIX",
    "TABLEMERGE_IO_CAST_SCALARS",
    "TABLEMERGE_IO_COERCE_INTS",
    "TABLEMERGE_IO_STRICT_SCHEMA",
    "TABLEMERGE_IO_LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch) -> None:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def _write_toml(tmp: Path, name: str, content: str) -> Path:
    p = tmp / name
    p.write_text(content)
    return p


def test_io_settings_precedence_env_over_toml(tmp_path: Path, monkeypatch) -> None:
    # Arrange TOML
    _write_toml(
        tmp_path,
        "tablemerge.toml",
        """
        [io]
        column_prefix = "toml_"
        coerce_ints = true
        log_level = "info"
        """.strip(),
    )
    monkeypatch.chdir(tmp_path)
    # Arrange ENV that should override TOML
    monkeypatch.setenv("TABLEMERGE_IO_COLUMN_PREFIX", "env_")
    monkeypatch.setenv("TABLEMERGE_IO_LOG_LEVEL", "debug")

    s = IoSettings.load()

    assert s.column_prefix == "env_"
    assert s.log_level == "DEBUG"
    assert s.coerce_ints is True  # from TOML, not overridden


def test_io_settings_from_toml_top_level_keys(tmp_path: Path, monkeypatch) -> None:
    _write_toml(tmp_path, "tablemerge.toml", 'cast_scalars = false\nstrict_schema = "no"\n')
    monkeypatch.chdir(tmp_path)

    s = IoSettings.load()

    assert s.cast_scalars is False
    assert s.strict_schema is False


def test_io_settings_from_pyproject(tmp_path: Path, monkeypatch) -> None:
    _write_toml(
        tmp_path,
        "pyproject.toml",
        """
        [project]
        name = "demo"

        [tool.tablemerge.io]
        column_prefix = "col"
        """.strip(),
    )
    monkeypatch.chdir(tmp_path)

    assert IoSettings.load().column_prefix == "col"


def test_io_settings_defaults_when_no_config(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)

    s = IoSettings.load()

    # Defaults from IoSettings / tablemerge.core.constants
    assert s == IoSettings()
    assert s.column_prefix == "column_"
    assert s.cast_scalars is True
    assert s.coerce_ints is False
    assert s.log_level == "WARNING"


def test_io_settings_explicit_path(tmp_path: Path, monkeypatch) -> None:
    p = _write_toml(tmp_path, "custom.toml", '[io]\nlog_level = "error"\n')
    monkeypatch.chdir(tmp_path)

    assert IoSettings.load(p).log_level == "ERROR"
    with pytest.raises(IoConfigError):
        IoSettings.load(tmp_path / "missing.toml")


def test_io_settings_invalid_values_raise(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    with pytest.raises(IoConfigError):
        IoSettings(column_prefix="")
    monkeypatch.setenv("TABLEMERGE_IO_LOG_LEVEL", "chatty")
    with pytest.raises(IoConfigError):
        IoSettings.load()


def test_io_settings_invalid_toml_raises(tmp_path: Path, monkeypatch) -> None:
    _write_toml(tmp_path, "tablemerge.toml", "[io\ncolumn_prefix = ")
    monkeypatch.chdir(tmp_path)
    with pytest.raises(IoConfigError):
        IoSettings.load()
