"""Tests for apidesign.config -- XDG paths, atomic writes, precedence."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest

from apidesign.config import (
    _atomic_write,
    build_parser_config,
    get_config_dir,
    get_data_dir,
    global_config_path,
    load_global_config,
    load_project_config,
    resolve_config,
    save_global_config,
)
from apidesign.exceptions import ConfigError
from apidesign.models import ExtractConfig, GlobalConfig, OutputConfig, ParserConfig


def _write_json(path: Path, data: Any) -> None:
    """Write a dict as JSON to *path*, creating parent dirs."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


# ---------------------------------------------------------------------------
# XDG path resolution
# ---------------------------------------------------------------------------


class TestXDGPaths:
    """Directory layout on XDG and non-XDG platforms."""

    def test_config_dir_xdg_default(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("apidesign.config._is_xdg_platform", lambda: True)
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

        result = get_config_dir()
        assert result == tmp_path / ".config" / "apidesign"
        assert result.is_dir()

    def test_config_dir_xdg_custom(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        custom = tmp_path / "custom_config"
        monkeypatch.setattr("apidesign.config._is_xdg_platform", lambda: True)
        monkeypatch.setenv("XDG_CONFIG_HOME", str(custom))

        assert get_config_dir() == custom / "apidesign"

    def test_data_dir_xdg_default(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("apidesign.config._is_xdg_platform", lambda: True)
        monkeypatch.delenv("XDG_DATA_HOME", raising=False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

        result = get_data_dir()
        assert result == tmp_path / ".local" / "share" / "apidesign"
        assert result.is_dir()

    def test_fallback_dirs(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("apidesign.config._is_xdg_platform", lambda: False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

        assert get_config_dir() == tmp_path / ".apidesign"
        assert get_data_dir() == tmp_path / ".apidesign" / "logs"


# ---------------------------------------------------------------------------
# Atomic writes
# ---------------------------------------------------------------------------


class TestAtomicWrite:
    """Temp-file-then-rename writes."""

    def test_writes_content(self, tmp_path: Path) -> None:
        target = tmp_path / "nested" / "file.json"
        _atomic_write(target, '{"a": 1}\n')
        assert target.read_text(encoding="utf-8") == '{"a": 1}\n'

    def test_failure_leaves_no_temp_file(self, tmp_path: Path) -> None:
        target = tmp_path / "file.json"
        target.write_text("old", encoding="utf-8")
        with patch("apidesign.config.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(OSError):
                _atomic_write(target, "new")
        assert target.read_text(encoding="utf-8") == "old"
        assert [p.name for p in tmp_path.iterdir()] == ["file.json"]


# ---------------------------------------------------------------------------
# Global config
# ---------------------------------------------------------------------------


class TestGlobalConfigFile:
    """Loading and saving the user-wide config file."""

    def test_missing_file_gives_defaults(self, isolated_config: Path) -> None:
        assert load_global_config() == GlobalConfig()

    def test_save_then_load(self, isolated_config: Path) -> None:
        config = GlobalConfig(
            output=OutputConfig(format="json"),
            extract=ExtractConfig(strip_content=True),
        )
        save_global_config(config)
        assert global_config_path().is_file()
        assert load_global_config() == config

    def test_invalid_json_raises(self, isolated_config: Path) -> None:
        global_config_path().write_text("{broken", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid global config"):
            load_global_config()

    def test_invalid_field_raises(self, isolated_config: Path) -> None:
        _write_json(global_config_path(), {"extract": {"strip_content": "maybe"}})
        with pytest.raises(ConfigError):
            load_global_config()


# ---------------------------------------------------------------------------
# Project config
# ---------------------------------------------------------------------------


class TestProjectConfig:
    """``./apidesign.json`` in the working directory."""

    def test_missing_returns_none(self, isolated_config: Path) -> None:
        assert load_project_config() is None

    def test_loads_object(self, isolated_config: Path) -> None:
        _write_json(isolated_config / "apidesign.json", {"output": {"format": "plain"}})
        assert load_project_config() == {"output": {"format": "plain"}}

    def test_non_object_raises(self, isolated_config: Path) -> None:
        _write_json(isolated_config / "apidesign.json", ["plain"])
        with pytest.raises(ConfigError, match="JSON object"):
            load_project_config()

    def test_invalid_json_raises(self, isolated_config: Path) -> None:
        (isolated_config / "apidesign.json").write_text("nope", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid project config"):
            load_project_config()


# ---------------------------------------------------------------------------
# Precedence resolution
# ---------------------------------------------------------------------------


class TestResolveConfig:
    """CLI > env > project > global > defaults."""

    def test_defaults(self, isolated_config: Path) -> None:
        assert resolve_config() == GlobalConfig()

    def test_global_layer(self, isolated_config: Path) -> None:
        save_global_config(GlobalConfig(output=OutputConfig(format="json")))
        assert resolve_config().output.format == "json"

    def test_project_overrides_global(self, isolated_config: Path) -> None:
        save_global_config(
            GlobalConfig(
                output=OutputConfig(format="json"),
                extract=ExtractConfig(strip_content=True),
            )
        )
        _write_json(isolated_config / "apidesign.json", {"output": {"format": "plain"}})

        config = resolve_config()
        assert config.output.format == "plain"
        # Keys the project file does not mention keep their global value.
        assert config.extract.strip_content is True

    def test_invalid_project_layer_raises(self, isolated_config: Path) -> None:
        _write_json(isolated_config / "apidesign.json", {"output": "json"})
        with pytest.raises(ConfigError, match="project config"):
            resolve_config()

    def test_env_overrides_project(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        _write_json(isolated_config / "apidesign.json", {"output": {"format": "plain"}})
        monkeypatch.setenv("APIDESIGN_OUTPUT", "rich")
        monkeypatch.setenv("APIDESIGN_STRIP", "yes")

        config = resolve_config()
        assert config.output.format == "rich"
        assert config.extract.strip_content is True

    def test_env_strip_false(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        save_global_config(GlobalConfig(extract=ExtractConfig(strip_content=True)))
        monkeypatch.setenv("APIDESIGN_STRIP", "0")
        assert resolve_config().extract.strip_content is False

    def test_cli_overrides_env(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("APIDESIGN_OUTPUT", "rich")
        monkeypatch.setenv("APIDESIGN_STRIP", "true")

        config = resolve_config(cli_format="json", cli_strip=False)
        assert config.output.format == "json"
        assert config.extract.strip_content is False


class TestBuildParserConfig:
    """Translation into the immutable parser configuration."""

    def test_default(self) -> None:
        assert build_parser_config(GlobalConfig()) == ParserConfig()

    def test_strict(self) -> None:
        config = GlobalConfig(extract=ExtractConfig(ignore_unknown_fields=False))
        assert build_parser_config(config).ignore_unknown_fields is False
