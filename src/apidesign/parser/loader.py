"""Load raw API design content from a URL, local file, or stdin.

This module handles all I/O for fetching documents. It returns the content
exactly as read: no parsing, no trimming, and no format detection happen
here. Pass the result to
:func:`~apidesign.parser.extractor.extract_resource_info`.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import httpx

from apidesign.exceptions import SourceError

logger = logging.getLogger(__name__)

_FETCH_TIMEOUT = 30.0


def load_content(source: str) -> str:
    """Load document content from URL, file path, or stdin ('-').

    Args:
        source: A URL (http/https), file path, or '-' for stdin.

    Returns:
        The raw document text.

    Raises:
        SourceError: If the source cannot be read.
    """
    if source == "-":
        return _load_from_stdin()
    elif source.startswith(("http://", "https://")):
        return _load_from_url(source)
    else:
        return _load_from_file(source)


def _load_from_stdin() -> str:
    """Read all available input from stdin.

    Raises:
        SourceError: If stdin cannot be read or is empty.
    """
    try:
        content = sys.stdin.read()
    except Exception as exc:
        raise SourceError(f"Failed to read from stdin: {exc}") from exc

    if not content:
        raise SourceError("No input received from stdin")

    logger.debug("Read %d characters from stdin", len(content))
    return content


def _load_from_url(url: str) -> str:
    """Fetch document content from an HTTP(S) URL.

    Raises:
        SourceError: If the URL cannot be fetched.
    """
    logger.debug("Fetching %s", url)
    try:
        response = httpx.get(url, timeout=_FETCH_TIMEOUT, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise SourceError(
            f"HTTP {exc.response.status_code} fetching document from {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise SourceError(f"Failed to fetch document from {url}: {exc}") from exc

    logger.debug(
        "Fetched %d characters (%s)",
        len(response.text),
        response.headers.get("content-type", "unknown content type"),
    )
    return response.text


def _load_from_file(path: str) -> str:
    """Read document content from a local UTF-8 file.

    Raises:
        SourceError: If the file does not exist or cannot be read.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise SourceError(f"Document file not found: {path}")

    try:
        content = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceError(f"Failed to read document file {path}: {exc}") from exc

    logger.debug("Read %d characters from %s", len(content), file_path)
    return content
