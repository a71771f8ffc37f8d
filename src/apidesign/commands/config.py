"""Config commands -- view and modify global configuration.

Provides the ``apidesign config`` sub-command group for reading, updating,
and resetting the user's global configuration file
(:class:`~apidesign.models.GlobalConfig`).
"""

from __future__ import annotations

from typing import Any

import typer
from pydantic import ValidationError

from apidesign.exceptions import ApiDesignError, ConfigError, InvalidUsageError
from apidesign.output import error, format_response, get_output, info, success


config_app = typer.Typer(no_args_is_help=True)


@config_app.command("show")
def config_show() -> None:
    """Show the persisted global configuration.

    Example::

        apidesign config show
        apidesign --json config show
    """
    from apidesign.config import get_config_dir, load_global_config

    try:
        config = load_global_config()
    except ConfigError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
    info(f"Config directory: {get_config_dir()}")
    format_response(config.model_dump(mode="json"))


@config_app.command("path")
def config_path() -> None:
    """Print the path of the global config file."""
    from apidesign.config import global_config_path

    get_output().print_data(str(global_config_path()))


def _apply_setting(data: dict[str, Any], key: str, value: str) -> object:
    """Set dotted *key* in *data*, coercing *value* to the existing field's type."""
    keys = key.split(".")
    target = data
    for k in keys[:-1]:
        if k not in target or not isinstance(target[k], dict):
            raise InvalidUsageError(f"Invalid config key: {key}")
        target = target[k]

    final_key = keys[-1]
    if final_key not in target or isinstance(target[final_key], dict):
        raise InvalidUsageError(f"Unknown config key: {key}")

    if isinstance(target[final_key], bool):
        coerced: object = value.lower() in ("true", "1", "yes", "on")
    else:
        coerced = value
    target[final_key] = coerced
    return coerced


@config_app.command("set")
def config_set(
    key: str = typer.Argument(
        help="Config key (dot notation, e.g., 'extract.strip_content')."
    ),
    value: str = typer.Argument(help="Value to set."),
) -> None:
    """Set a configuration value.

    The value is coerced to the type of the existing field (bool or str) and
    the updated config is validated before saving.

    Example::

        apidesign config set output.format json
        apidesign config set extract.strip_content true
    """
    from apidesign.config import load_global_config, save_global_config
    from apidesign.models import GlobalConfig

    try:
        data = load_global_config().model_dump(mode="json")
        coerced = _apply_setting(data, key, value)
        try:
            new_config = GlobalConfig.model_validate(data)
        except ValidationError as exc:
            raise InvalidUsageError(f"Validation error: {exc}") from exc
    except ApiDesignError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    save_global_config(new_config)
    success(f"Set {key} = {coerced}")


@config_app.command("reset")
def config_reset(ctx: typer.Context) -> None:
    """Reset configuration to defaults.

    Asks for confirmation unless ``--force`` is active.

    Example::

        apidesign config reset
        apidesign --force config reset
    """
    from apidesign.config import save_global_config
    from apidesign.models import GlobalConfig

    force = ctx.obj.get("force", False) if ctx.obj else False
    if not force:
        confirmed = typer.confirm("Reset all config to defaults?")
        if not confirmed:
            info("Cancelled.")
            raise typer.Exit()

    save_global_config(GlobalConfig())
    success("Configuration reset to defaults.")
