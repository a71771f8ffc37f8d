"""API design document parser -- load, detect, parse, and extract.

Typical usage::

    from apidesign.parser import load_content, extract_resource_info

    content = load_content("openapi.yaml")
    info = extract_resource_info(content)

Sub-modules:

* :mod:`~apidesign.parser.loader` -- I/O layer (URL, file, stdin).
* :mod:`~apidesign.parser.extractor` -- Format detection, parsing, and
  projection into :class:`~apidesign.models.ResourceInfo`.
* :mod:`~apidesign.parser.serializer` -- JSON/YAML rendering of
  :class:`~apidesign.models.ResourceInfo`.
"""

from apidesign.parser.extractor import (
    ResourceInfoExtractor,
    detect_format,
    extract_resource_info,
    parse_document,
)
from apidesign.parser.loader import load_content
from apidesign.parser.serializer import dump_resource_info, resource_info_to_dict

__all__ = [
    "ResourceInfoExtractor",
    "detect_format",
    "extract_resource_info",
    "parse_document",
    "load_content",
    "dump_resource_info",
    "resource_info_to_dict",
]
