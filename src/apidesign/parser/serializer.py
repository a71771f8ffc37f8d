"""Render :class:`~apidesign.models.ResourceInfo` values as JSON or YAML.

Absent fields are left out of the output (``omit_none``) and YAML scalars are
quoted only where YAML requires it (``minimize_quotes``), both controlled by
:class:`~apidesign.models.ParserConfig`. Tags are emitted sorted so that the
output is stable across runs.
"""

from __future__ import annotations

import json
from typing import Any, Optional

import yaml

from apidesign.models import (
    DEFAULT_PARSER_CONFIG,
    FormatType,
    ParserConfig,
    ResourceInfo,
)


def resource_info_to_dict(
    info: ResourceInfo, config: Optional[ParserConfig] = None
) -> dict[str, Any]:
    """Convert *info* into a JSON-compatible dictionary.

    Keys appear in the order ``name``, ``description``, ``tags``, ``format``.
    """
    config = config if config is not None else DEFAULT_PARSER_CONFIG
    data = info.model_dump(mode="json", exclude_none=config.omit_none)
    data["tags"] = sorted(info.tags)
    return data


def dump_resource_info(
    info: ResourceInfo,
    fmt: Optional[FormatType] = None,
    config: Optional[ParserConfig] = None,
) -> str:
    """Serialize *info* as JSON or YAML text.

    Args:
        info: The value to serialize.
        fmt: Target syntax. Defaults to the format the info was parsed from.
        config: Emitter settings. Defaults to
            :data:`~apidesign.models.DEFAULT_PARSER_CONFIG`.

    Returns:
        The serialized text, terminated by a newline.
    """
    config = config if config is not None else DEFAULT_PARSER_CONFIG
    fmt = fmt if fmt is not None else info.format
    data = resource_info_to_dict(info, config)

    if fmt == FormatType.JSON:
        return json.dumps(data, indent=2, ensure_ascii=False) + "\n"

    return yaml.safe_dump(
        data,
        default_flow_style=False,
        default_style=None if config.minimize_quotes else '"',
        sort_keys=False,
        allow_unicode=True,
    )
