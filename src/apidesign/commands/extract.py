"""Extraction commands -- read an API design document and report on it.

Provides the ``apidesign extract``, ``apidesign detect`` and
``apidesign tags`` commands. Each one loads the document from a file path,
URL, or stdin (``-``), optionally strips surrounding whitespace, and runs
the extractor configured from the effective
:class:`~apidesign.models.GlobalConfig`.
"""

from __future__ import annotations

from typing import Optional

import typer

from apidesign.exceptions import ApiDesignError
from apidesign.models import FormatType, GlobalConfig, ResourceInfo
from apidesign.output import debug, error, format_response, get_output, print_document


def _effective_config(ctx: typer.Context) -> GlobalConfig:
    """Return the config resolved by the root callback, or resolve it now."""
    if ctx.obj and ctx.obj.get("config") is not None:
        return ctx.obj["config"]
    from apidesign.config import resolve_config

    config = resolve_config()
    ctx.ensure_object(dict)["config"] = config
    return config


def _read_content(ctx: typer.Context, source: str, strip: Optional[bool]) -> str:
    """Load *source* and apply the effective strip setting."""
    from apidesign.parser import load_content

    config = _effective_config(ctx)
    if strip is None:
        strip = config.extract.strip_content

    content = load_content(source)
    if strip:
        content = content.strip()
    debug(f"Loaded {len(content)} characters from {source} (strip={strip})")
    return content


def _extract(ctx: typer.Context, source: str, strip: Optional[bool]) -> ResourceInfo:
    """Load *source* and extract its resource info, exiting on failure."""
    from apidesign.config import build_parser_config
    from apidesign.parser import extract_resource_info

    try:
        content = _read_content(ctx, source, strip)
        parser_config = build_parser_config(_effective_config(ctx))
        return extract_resource_info(content, parser_config)
    except ApiDesignError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None


def extract_command(
    ctx: typer.Context,
    source: str = typer.Argument(help="File path, http(s) URL, or '-' for stdin."),
    strip: Optional[bool] = typer.Option(
        None,
        "--strip/--no-strip",
        help="Strip surrounding whitespace before format detection.",
    ),
    as_yaml: bool = typer.Option(
        False, "--yaml", help="Emit the result as YAML instead of structured output."
    ),
) -> None:
    """Extract name, description, tags, and format from an API design document.

    Example::

        apidesign extract openapi.yaml
        apidesign --json extract https://example.com/openapi.json
        cat openapi.json | apidesign extract - --yaml
    """
    from apidesign.config import build_parser_config
    from apidesign.parser import dump_resource_info, resource_info_to_dict

    resource = _extract(ctx, source, strip)
    parser_config = build_parser_config(_effective_config(ctx))

    if as_yaml:
        text = dump_resource_info(resource, FormatType.YAML, parser_config)
        print_document(text, "yaml")
        return

    format_response(resource_info_to_dict(resource, parser_config))


def detect_command(
    ctx: typer.Context,
    source: str = typer.Argument(help="File path, http(s) URL, or '-' for stdin."),
    strip: Optional[bool] = typer.Option(
        None,
        "--strip/--no-strip",
        help="Strip surrounding whitespace before format detection.",
    ),
) -> None:
    """Print the format (json or yaml) the document would be parsed as.

    Detection only looks at the first character; the document is not parsed.

    Example::

        apidesign detect openapi.json
    """
    from apidesign.parser import detect_format

    try:
        content = _read_content(ctx, source, strip)
    except ApiDesignError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    get_output().print_data(detect_format(content).value)


def tags_command(
    ctx: typer.Context,
    source: str = typer.Argument(help="File path, http(s) URL, or '-' for stdin."),
    strip: Optional[bool] = typer.Option(
        None,
        "--strip/--no-strip",
        help="Strip surrounding whitespace before format detection.",
    ),
) -> None:
    """List the tag names declared by an API design document, sorted.

    Example::

        apidesign tags openapi.yaml
    """
    resource = _extract(ctx, source, strip)
    rows = [[tag] for tag in sorted(resource.tags)]
    title = f"{resource.name or 'API'} -- Tags ({len(rows)})"
    get_output().print_table(["Tag"], rows, title=title)
