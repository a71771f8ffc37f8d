"""apidesign -- Extract resource info from OpenAPI design documents.

Given the raw content of an API design document (JSON or YAML), this package
detects the serialization format, parses the document, and projects its
title, description, and tag names into a :class:`~apidesign.models.ResourceInfo`.

Typical usage::

    from apidesign import extract_resource_info

    info = extract_resource_info(content)
    print(info.name, info.format.value, sorted(info.tags))

The ``apidesign`` console script wraps the same extraction for files, URLs,
and stdin.

Modules:
    app: Typer application factory and CLI entry point.
    models: Pydantic models shared across the entire package.
    config: XDG-aware configuration management.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.1.0"

from apidesign.models import FormatType, ParserConfig, ResourceInfo  # noqa: E402
from apidesign.parser.extractor import (  # noqa: E402
    ResourceInfoExtractor,
    detect_format,
    extract_resource_info,
)

__all__ = [
    "FormatType",
    "ParserConfig",
    "ResourceInfo",
    "ResourceInfoExtractor",
    "detect_format",
    "extract_resource_info",
]
