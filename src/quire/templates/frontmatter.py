"""YAML front matter splitting for source files.

A front matter block is recognised only when the file starts with a ``---``
line. Anything else, including ``+++`` blocks or a ``---`` further down the
file, leaves the content untouched.
"""

import logging
from typing import Any

import yaml

from quire.errors import FrontMatterNotClosedError, InvalidMetadataError

logger = logging.getLogger(__name__)

DELIMITER = b"---"

_LINE_ENDINGS = (b"\r\n", b"\n")


def _opening_length(raw: bytes) -> int:
    """Return the length of the opening delimiter line, or 0 if absent."""
    for ending in _LINE_ENDINGS:
        if raw.startswith(DELIMITER + ending):
            return len(DELIMITER) + len(ending)
    return 0


def _is_delimiter_line(line: bytes) -> bool:
    return line.rstrip(b"\r\n") == DELIMITER and (
        line == DELIMITER or line.endswith(b"\n")
    )


def load_metadata(document: bytes) -> dict[str, Any]:
    """Parse the text between the delimiters as a YAML mapping.

    Args:
        document: Raw bytes of the front matter block

    Returns:
        Parsed mapping (empty for a blank block)

    Raises:
        InvalidMetadataError: If the block is not UTF-8, not valid YAML,
            or does not hold a mapping
    """
    try:
        text = document.decode("utf-8")
    except UnicodeDecodeError as e:
        raise InvalidMetadataError(str(e)) from e

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise InvalidMetadataError(str(e)) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidMetadataError(
            f"front matter must be a mapping, got {type(data).__name__}"
        )
    return data


def split_front_matter(raw: bytes) -> tuple[dict[str, Any] | None, bytes]:
    """Separate the metadata block from the body.

    Args:
        raw: Full file contents

    Returns:
        ``(metadata, body)``. ``metadata`` is None when the file has no
        front matter, in which case ``body`` is ``raw`` unchanged.

    Raises:
        FrontMatterNotClosedError: If the block is opened but never closed
        InvalidMetadataError: If the block does not parse as a YAML mapping
    """
    start = _opening_length(raw)
    if not start:
        return None, raw

    offset = start
    for line in raw[start:].splitlines(keepends=True):
        if _is_delimiter_line(line):
            metadata = load_metadata(raw[start:offset])
            body = raw[offset + len(line):]
            logger.debug("Front matter parsed (%d keys)", len(metadata))
            return metadata, body
        offset += len(line)

    raise FrontMatterNotClosedError()
