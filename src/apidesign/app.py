"""Typer application factory and CLI entry point for apidesign.

This module wires together the top-level Typer application and registers
the built-in commands (``extract``, ``detect``, ``tags``, ``config``).

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. It installs signal handlers, registers commands, and
invokes the Typer app. Unhandled exceptions are written to a crash log under
the data directory.

See Also:
    :mod:`apidesign.config`: Configuration resolution.
    :mod:`apidesign.output`: Output formatting initialised in :func:`main_callback`.
"""

from __future__ import annotations

import logging
import signal
import sys
import traceback
from datetime import datetime
from typing import Any, Optional

import typer

from apidesign import __version__
from apidesign.exit_codes import EXIT_GENERIC_FAILURE


app = typer.Typer(
    name="apidesign",
    help="Extract resource info from OpenAPI design documents.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"apidesign {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool, console: Any) -> None:  # noqa: ANN401
    """Route library log records to stderr through Rich when verbose."""
    if not verbose:
        return
    from rich.logging import RichHandler

    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(
        False, "--json", help="JSON output format."
    ),
    plain_output: bool = typer.Option(
        False, "--plain", help="Plain text output."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
    force: bool = typer.Option(
        False, "--force", "-f", help="Skip confirmations."
    ),
    output_file: Optional[str] = typer.Option(
        None, "-o", "--output", help="Output file path."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Resolves the effective configuration, initialises the global
    :class:`~apidesign.output.OutputManager`, and stores shared options in
    the Typer context (``ctx.obj``).
    """
    from apidesign.config import resolve_config
    from apidesign.exceptions import ConfigError
    from apidesign.output import (
        OutputFormat,
        OutputManager,
        error,
        reset_output,
        set_output,
        warning,
    )

    # Errors raised before the new manager exists must use the current streams.
    reset_output()

    cli_format: Optional[str] = None
    if json_output:
        cli_format = OutputFormat.JSON.value
    elif plain_output:
        cli_format = OutputFormat.PLAIN.value

    try:
        config = resolve_config(cli_format=cli_format)
    except ConfigError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    try:
        fmt = OutputFormat(config.output.format)
        bad_format = False
    except ValueError:
        fmt = OutputFormat.AUTO
        bad_format = True

    output = OutputManager(
        format=fmt,
        no_color=no_color,
        quiet=quiet,
        verbose=verbose,
        output_file=output_file,
    )
    set_output(output)
    if bad_format:
        warning(f"Unknown output format '{config.output.format}', using auto.")
    _configure_logging(verbose, output.stderr_console)

    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["force"] = force
    ctx.obj["verbose"] = verbose


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write a crash traceback to disk and return the log file path."""
    from apidesign.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(
        "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    )
    return str(log_path)


def register_commands() -> None:
    """Attach the built-in commands to :data:`app`."""
    from apidesign.commands.config import config_app
    from apidesign.commands.extract import detect_command, extract_command, tags_command

    app.command("extract")(extract_command)
    app.command("detect")(detect_command)
    app.command("tags")(tags_command)
    app.add_typer(config_app, name="config", help="Configuration management.")


register_commands()


def main() -> None:
    """CLI entry point invoked by the ``apidesign`` console script.

    Unhandled :class:`~apidesign.exceptions.ApiDesignError` instances cause
    a clean exit with the error's ``exit_code``. All other exceptions produce
    a crash log and a generic failure exit.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from apidesign.exceptions import ApiDesignError
        from apidesign.output import error

        if isinstance(exc, ApiDesignError):
            error(str(exc))
            sys.exit(exc.exit_code)
        else:
            log_path = _write_crash_log(exc)
            error(f"Unexpected error. Debug log: {log_path}")
            sys.exit(EXIT_GENERIC_FAILURE)
