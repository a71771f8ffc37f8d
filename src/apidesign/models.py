"""Canonical Pydantic models shared across all apidesign modules.

The models fall into three groups:

**Parsed document shape** -- the minimal structural view of an OpenAPI
document that extraction needs:
    :class:`OpenApiInfo`, :class:`OpenApiTag`, and :class:`OpenApiDocument`.
Everything else in the source document is ignored unless the active
:class:`ParserConfig` asks for strict decoding.

**Extraction output** -- :class:`FormatType` and :class:`ResourceInfo`, the
value object handed back to callers.

**Configuration models** -- :class:`ParserConfig` (immutable decoder and
emitter settings shared by every extraction) and the user-facing
:class:`OutputConfig`, :class:`ExtractConfig`, and :class:`GlobalConfig`
persisted as JSON in the user's config directory.
"""

from __future__ import annotations

import datetime
import enum
from typing import Any, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
    model_validator,
)


class FormatType(str, enum.Enum):
    """Serialization syntax of an API design document."""

    JSON = "json"
    YAML = "yaml"


# --- Parser Config ---


class ParserConfig(BaseModel):
    """Decoder and emitter settings, built once and shared read-only.

    Instances are frozen: an extractor holding a ``ParserConfig`` can be used
    from any number of threads without coordination. The package-wide default
    lives in :data:`DEFAULT_PARSER_CONFIG`; callers needing different behaviour
    construct their own instance and inject it into
    :class:`~apidesign.parser.extractor.ResourceInfoExtractor`.
    """

    model_config = ConfigDict(frozen=True)

    ignore_unknown_fields: bool = Field(
        default=True,
        description="Ignore properties the document model does not declare",
    )
    omit_none: bool = Field(
        default=True, description="Leave absent fields out of serialized output"
    )
    minimize_quotes: bool = Field(
        default=True, description="Quote YAML scalars only where required"
    )


DEFAULT_PARSER_CONFIG = ParserConfig()
"""Process-wide default configuration. Never mutated (the model is frozen)."""


# --- Parsed Document Shape ---


def _scalar_to_text(value: Any) -> Any:  # noqa: ANN401
    """Render a JSON boolean as its literal, or an explicitly tagged YAML scalar as text.

    Plain numbers, YAML booleans and timestamps already arrive as the source
    text; see :func:`apidesign.parser.extractor._decode`.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float, datetime.date)):
        return str(value)
    return value


class _DocumentNode(BaseModel):
    """Base for parsed document objects.

    Unknown properties are dropped. When validation runs with a context of
    ``{"ignore_unknown_fields": False}`` they are rejected instead; the
    context propagates to nested objects.
    """

    model_config = ConfigDict(extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _check_unknown_fields(cls, data: Any, info: ValidationInfo) -> Any:  # noqa: ANN401
        if not isinstance(data, dict):
            return data
        context = info.context or {}
        if context.get("ignore_unknown_fields", True):
            return data
        unknown = sorted(str(key) for key in data if key not in cls.model_fields)
        if unknown:
            raise ValueError(f"unknown field(s): {', '.join(unknown)}")
        return data


class OpenApiInfo(_DocumentNode):
    """The document's *Info Object*, reduced to what extraction reads."""

    title: Optional[str] = None
    description: Optional[str] = None

    @field_validator("title", "description", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Any:  # noqa: ANN401
        return _scalar_to_text(value)


class OpenApiTag(_DocumentNode):
    """A single entry of the top-level ``tags`` list."""

    name: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Any:  # noqa: ANN401
        return _scalar_to_text(value)


class OpenApiDocument(_DocumentNode):
    """Root of a parsed API design document.

    Only ``info`` and ``tags`` are modelled. Null entries inside ``tags`` are
    accepted so that extraction can skip them.
    """

    info: Optional[OpenApiInfo] = None
    tags: Optional[list[Optional[OpenApiTag]]] = None


# --- Extraction Output ---


class ResourceInfo(BaseModel):
    """Basic information extracted from an API design resource.

    ``name`` and ``description`` are ``None`` when the document does not
    declare them. ``tags`` holds every declared tag name once. ``format``
    records the syntax that was used to parse the content.

    Example::

        ResourceInfo(name="My API", tags={"pets"}, format=FormatType.JSON)
    """

    name: Optional[str] = None
    description: Optional[str] = None
    tags: set[str] = Field(default_factory=set)
    format: FormatType

    @classmethod
    def from_content(cls, content: str) -> ResourceInfo:
        """Extract resource info from raw document content.

        Shortcut for :func:`~apidesign.parser.extractor.extract_resource_info`
        with the default parser configuration.

        Raises:
            ParseError: If the content cannot be parsed.
        """
        from apidesign.parser.extractor import extract_resource_info

        return extract_resource_info(content)


# --- User Config ---


class OutputConfig(BaseModel):
    """Default output format preferences stored in :class:`GlobalConfig`."""

    format: str = Field(
        default="auto", description="Output format: auto, json, plain, rich"
    )


class ExtractConfig(BaseModel):
    """Extraction preferences stored in :class:`GlobalConfig`."""

    strip_content: bool = Field(
        default=False,
        description="Strip leading/trailing whitespace before format detection",
    )
    ignore_unknown_fields: bool = Field(
        default=True, description="Ignore undeclared document properties"
    )


class GlobalConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/apidesign/config.json``.

    Loaded and saved by :func:`~apidesign.config.load_global_config` and
    :func:`~apidesign.config.save_global_config`. See
    :func:`~apidesign.config.resolve_config` for the precedence chain.
    """

    output: OutputConfig = Field(default_factory=OutputConfig)
    extract: ExtractConfig = Field(default_factory=ExtractConfig)
