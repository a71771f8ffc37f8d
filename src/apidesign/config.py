"""Where apidesign keeps its settings, and how the effective settings are chosen.

Settings live in ``config.json`` under the user's config directory
(``$XDG_CONFIG_HOME/apidesign`` on Linux and the BSDs, ``~/.apidesign``
elsewhere). A project may override any subset of them in ``./apidesign.json``,
the ``APIDESIGN_OUTPUT`` / ``APIDESIGN_STRIP`` environment variables override
both files, and CLI flags override everything (:func:`resolve_config`).

The extractor never sees :class:`~apidesign.models.GlobalConfig` directly;
:func:`build_parser_config` reduces it to a frozen
:class:`~apidesign.models.ParserConfig`.
"""

from __future__ import annotations

import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from apidesign.exceptions import ConfigError
from apidesign.models import GlobalConfig, ParserConfig

_APP_NAME = "apidesign"
_CONFIG_FILENAME = "config.json"
_PROJECT_CONFIG_FILENAME = "apidesign.json"

_ENV_OUTPUT = "APIDESIGN_OUTPUT"
_ENV_STRIP = "APIDESIGN_STRIP"
_TRUTHY = ("1", "true", "yes", "on")


# --- Directories ---


def _is_xdg_platform() -> bool:
    system = platform.system()
    return system == "Linux" or system.endswith("BSD")


def _app_dir(xdg_var: str, xdg_default: Path, fallback: Path) -> Path:
    if _is_xdg_platform():
        root = os.environ.get(xdg_var) or xdg_default
        path = Path(root) / _APP_NAME
    else:
        path = fallback
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_config_dir() -> Path:
    """Directory holding ``config.json``; created on first use."""
    home = Path.home()
    return _app_dir("XDG_CONFIG_HOME", home / ".config", home / f".{_APP_NAME}")


def get_data_dir() -> Path:
    """Directory for crash logs; created on first use."""
    home = Path.home()
    return _app_dir(
        "XDG_DATA_HOME",
        home / ".local" / "share",
        home / f".{_APP_NAME}" / "logs",
    )


def _atomic_write(path: Path, data: str) -> None:
    """Replace *path* with *data* via a sibling temp file and ``os.replace``.

    A failed write leaves the previous file untouched and removes the temp
    file.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = tempfile.NamedTemporaryFile(
        mode="w",
        dir=path.parent,
        prefix=f".{path.name}.",
        suffix=".tmp",
        delete=False,
        encoding="utf-8",
    )
    try:
        with tmp:
            tmp.write(data)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp.name, path)
    except BaseException:
        Path(tmp.name).unlink(missing_ok=True)
        raise


# --- Config files ---


def global_config_path() -> Path:
    return get_config_dir() / _CONFIG_FILENAME


def load_global_config() -> GlobalConfig:
    """Read the user's config file, or return defaults when there is none.

    Raises:
        ConfigError: The file is not JSON or does not validate.
    """
    path = global_config_path()
    if not path.is_file():
        return GlobalConfig()
    try:
        return GlobalConfig.model_validate(json.loads(path.read_text(encoding="utf-8")))
    except (json.JSONDecodeError, ValidationError) as exc:
        raise ConfigError(f"Invalid global config at {path}: {exc}") from exc


def save_global_config(config: GlobalConfig) -> None:
    text = json.dumps(config.model_dump(mode="json"), indent=2) + "\n"
    _atomic_write(global_config_path(), text)


def load_project_config() -> Optional[dict[str, Any]]:
    """Return the partial settings in ``./apidesign.json``, if that file exists.

    Raises:
        ConfigError: The file is not a JSON object.
    """
    path = Path.cwd() / _PROJECT_CONFIG_FILENAME
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid project config at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Project config at {path} must be a JSON object")
    return data


# --- Effective config ---


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def resolve_config(
    cli_format: Optional[str] = None,
    cli_strip: Optional[bool] = None,
) -> GlobalConfig:
    """Combine every settings layer into the config a command runs with.

    Later layers win: defaults, user file, ``./apidesign.json``, environment,
    then *cli_format* / *cli_strip* when they are not ``None``.

    Raises:
        ConfigError: A layer is malformed or the result does not validate.
    """
    data = load_global_config().model_dump(mode="json")

    project = load_project_config()
    if project is not None:
        try:
            data = GlobalConfig.model_validate(_merge(data, project)).model_dump(mode="json")
        except ValidationError as exc:
            raise ConfigError(f"Invalid project config: {exc}") from exc

    overrides: dict[str, dict[str, Any]] = {"output": {}, "extract": {}}
    if os.environ.get(_ENV_OUTPUT):
        overrides["output"]["format"] = os.environ[_ENV_OUTPUT]
    if os.environ.get(_ENV_STRIP):
        overrides["extract"]["strip_content"] = os.environ[_ENV_STRIP].lower() in _TRUTHY
    if cli_format is not None:
        overrides["output"]["format"] = cli_format
    if cli_strip is not None:
        overrides["extract"]["strip_content"] = cli_strip

    try:
        return GlobalConfig.model_validate(_merge(data, overrides))
    except ValidationError as exc:
        raise ConfigError(f"Invalid effective configuration: {exc}") from exc


def build_parser_config(config: GlobalConfig) -> ParserConfig:
    return ParserConfig(ignore_unknown_fields=config.extract.ignore_unknown_fields)
