"""Extract resource info from the raw content of an API design document.

Extraction runs in three steps:

1. :func:`detect_format` -- classify the content as JSON or YAML by looking
   at its first character.
2. :func:`parse_document` -- decode the content with the matching parser and
   validate it into an :class:`~apidesign.models.OpenApiDocument`.
3. :meth:`ResourceInfoExtractor.extract` -- project ``info.title``,
   ``info.description`` and ``tags[].name`` into a
   :class:`~apidesign.models.ResourceInfo`.

Format detection is deliberately a one-character check. Content with leading
whitespace or a byte-order mark is classified as YAML; callers that want
tolerance for that must strip the content first.
"""

from __future__ import annotations

import json
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from apidesign.exceptions import ParseError
from apidesign.models import (
    DEFAULT_PARSER_CONFIG,
    FormatType,
    OpenApiDocument,
    ParserConfig,
    ResourceInfo,
)


def detect_format(content: str) -> FormatType:
    """Classify *content* as JSON when it starts with ``{``, otherwise YAML."""
    if content.startswith("{"):
        return FormatType.JSON
    return FormatType.YAML


_VERBATIM_TAGS = frozenset(
    {
        "tag:yaml.org,2002:bool",
        "tag:yaml.org,2002:int",
        "tag:yaml.org,2002:float",
        "tag:yaml.org,2002:timestamp",
    }
)


class _VerbatimLoader(yaml.SafeLoader):
    """SafeLoader that keeps plain scalars as written; only nulls are resolved."""


_VerbatimLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag not in _VERBATIM_TAGS]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def _reject_constant(name: str) -> Any:  # noqa: ANN401
    raise ValueError(f"non-standard constant {name} is not allowed")


def _decode(content: str, fmt: FormatType) -> Any:  # noqa: ANN401
    """Decode *content* into plain Python data using the parser for *fmt*.

    Numbers and YAML booleans/timestamps stay strings holding their source
    text, so ``1.10`` is read as ``"1.10"`` and ``yes`` as ``"yes"``.
    """
    if fmt == FormatType.JSON:
        try:
            return json.loads(
                content,
                parse_int=str,
                parse_float=str,
                parse_constant=_reject_constant,
            )
        except ValueError as exc:
            raise ParseError(f"Invalid JSON: {exc}") from exc

    try:
        return yaml.load(content, Loader=_VerbatimLoader)  # noqa: S506
    except yaml.YAMLError as exc:
        raise ParseError(f"Invalid YAML: {exc}") from exc


def parse_document(
    content: str,
    fmt: FormatType,
    config: ParserConfig = DEFAULT_PARSER_CONFIG,
) -> OpenApiDocument:
    """Parse *content* as *fmt* into the minimal document shape.

    Args:
        content: Raw document text.
        fmt: The syntax to decode with. No fallback to the other syntax is
            attempted.
        config: Decoder settings; ``ignore_unknown_fields`` controls whether
            undeclared properties are dropped or rejected.

    Returns:
        The validated :class:`~apidesign.models.OpenApiDocument`.

    Raises:
        ParseError: If the text is not valid *fmt* syntax, the root is not
            an object, or the structure does not match the document shape.
    """
    data = _decode(content, fmt)
    if not isinstance(data, dict):
        kind = type(data).__name__ if data is not None else "empty document"
        raise ParseError(
            f"API design document must be a {fmt.value.upper()} object (got {kind})"
        )

    try:
        return OpenApiDocument.model_validate(
            data,
            context={"ignore_unknown_fields": config.ignore_unknown_fields},
        )
    except ValidationError as exc:
        raise ParseError(
            f"Unexpected {fmt.value.upper()} document structure: {exc}"
        ) from exc


class ResourceInfoExtractor:
    """Turns raw API design content into :class:`~apidesign.models.ResourceInfo`.

    The extractor holds nothing but an immutable
    :class:`~apidesign.models.ParserConfig`, so a single instance can be
    shared across threads.

    Args:
        config: Parser configuration. Defaults to
            :data:`~apidesign.models.DEFAULT_PARSER_CONFIG`.

    Example::

        extractor = ResourceInfoExtractor()
        info = extractor.extract('{"info": {"title": "Pets"}}')
        assert info.name == "Pets"
    """

    def __init__(self, config: Optional[ParserConfig] = None) -> None:
        self._config = config if config is not None else DEFAULT_PARSER_CONFIG

    @property
    def config(self) -> ParserConfig:
        """The parser configuration used by this extractor."""
        return self._config

    def extract(self, content: str) -> ResourceInfo:
        """Detect the format of *content*, parse it, and extract resource info.

        Raises:
            ParseError: If the content cannot be parsed in the detected
                format. No partial result is produced.
        """
        fmt = detect_format(content)
        document = parse_document(content, fmt, self._config)

        name: Optional[str] = None
        description: Optional[str] = None
        if document.info is not None:
            if document.info.title is not None:
                name = document.info.title
            if document.info.description is not None:
                description = document.info.description

        tags: set[str] = set()
        for tag in document.tags or []:
            if tag is not None and tag.name is not None:
                tags.add(tag.name)

        return ResourceInfo(
            name=name,
            description=description,
            tags=tags,
            format=fmt,
        )


_default_extractor = ResourceInfoExtractor()


def extract_resource_info(
    content: str, config: Optional[ParserConfig] = None
) -> ResourceInfo:
    """Extract resource info from *content*.

    Uses a shared default extractor unless *config* is given.

    Args:
        content: Raw API design document text (JSON or YAML).
        config: Optional parser configuration override.

    Returns:
        A freshly constructed :class:`~apidesign.models.ResourceInfo`.

    Raises:
        ParseError: If the content cannot be parsed.
    """
    if config is None:
        return _default_extractor.extract(content)
    return ResourceInfoExtractor(config).extract(content)
