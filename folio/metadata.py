"""Front matter reading and validation for Folio.

Every document starts with a YAML block delimited by ``---`` lines::

    ---
    layout: post
    title: Hello World
    tags: [python, web]
    ---
    Body text...

The block is validated against a fixed schema and either yields a complete
record or fails with MetadataError. ``layout`` names a template symbolically,
so it must be written as a plain YAML scalar; ``layout: "post"`` is rejected.
"""

from __future__ import annotations

import io
from collections.abc import Callable
from datetime import date
from pathlib import Path
from typing import IO, Any

import yaml

from .errors import MetadataError

DELIMITER = "---"

REQUIRED_KEYS = ("layout", "title")


def _is_str(value: Any) -> bool:
    return isinstance(value, str)


def _is_bool(value: Any) -> bool:
    return isinstance(value, bool)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_str_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(item, str) for item in value)


def _is_date(value: Any) -> bool:
    # datetime is a subclass of date
    return isinstance(value, (date, str))


SCHEMA: dict[str, tuple[Callable[[Any], bool], str]] = {
    "layout": (_is_str, "a symbolic name"),
    "title": (_is_str, "a string"),
    "tags": (_is_str_list, "a list of strings"),
    "author": (_is_str, "a string"),
    "date": (_is_date, "a date"),
    "draft": (_is_bool, "a boolean"),
    "toc": (_is_bool, "a boolean"),
    "page-index": (_is_int, "an integer"),
    "navbar": (_is_bool, "a boolean"),
    "home": (_is_bool, "a boolean"),
    "description": (_is_str, "a string"),
    "uri": (_is_str, "a string"),
}


def _read_block(stream: IO[str], source: Path | None) -> str:
    """Read the raw text between the front matter delimiters.

    Leaves the stream positioned on the first line after the closing delimiter.
    """
    first = stream.readline()
    if first.strip() != DELIMITER:
        raise MetadataError("Document does not start with a '---' front matter block", source)
    lines: list[str] = []
    for line in iter(stream.readline, ""):
        if line.strip() == DELIMITER:
            return "".join(lines)
        lines.append(line)
    raise MetadataError("Front matter block is never closed with '---'", source)


def _check_symbolic_layout(node: yaml.MappingNode, source: Path | None) -> None:
    """Reject a ``layout`` value written as a quoted string or a collection."""
    for key_node, value_node in node.value:
        if not isinstance(key_node, yaml.ScalarNode) or key_node.value != "layout":
            continue
        if not isinstance(value_node, yaml.ScalarNode):
            raise MetadataError("'layout' must be a symbolic name, not a collection", source)
        if value_node.style is not None:
            raise MetadataError(
                f"'layout' must be a symbolic name such as 'layout: {value_node.value}', "
                "not a quoted string",
                source,
            )


def validate(meta: dict[str, Any], source: Path | None = None) -> dict[str, Any]:
    """Validate a metadata mapping against the schema.

    Args:
        meta: Loaded front matter.
        source: Path of the document, used in error messages.

    Returns:
        The same mapping when valid.

    Raises:
        MetadataError: If a required key is missing or a known key has the wrong shape.
    """
    missing = [key for key in REQUIRED_KEYS if key not in meta]
    if missing:
        raise MetadataError(f"Missing required key(s): {', '.join(missing)}", source)
    for key, (check, expected) in SCHEMA.items():
        if key in meta and not check(meta[key]):
            raise MetadataError(
                f"'{key}' must be {expected}, got {type(meta[key]).__name__} {meta[key]!r}",
                source,
            )
    return meta


def parse_block(text: str, source: Path | None = None) -> dict[str, Any]:
    """Parse and validate the YAML text of a front matter block.

    Args:
        text: YAML source between the delimiters.
        source: Path of the document, used in error messages.

    Returns:
        The metadata record with every supplied key.

    Raises:
        MetadataError: If the YAML is invalid or violates the schema.
    """
    try:
        node = yaml.compose(text, Loader=yaml.SafeLoader)
        data = yaml.safe_load(text)
    except (yaml.YAMLError, ValueError) as exc:
        # Out-of-range timestamps such as 2024-13-45 surface as ValueError.
        raise MetadataError(f"Invalid YAML in front matter: {exc}", source) from exc
    if not isinstance(node, yaml.MappingNode) or not isinstance(data, dict):
        raise MetadataError("Front matter must be a mapping of keys to values", source)
    _check_symbolic_layout(node, source)
    return validate(data, source)


def read_metadata(stream: IO[str], source: Path | None = None) -> dict[str, Any]:
    """Read the front matter block at the head of a document stream.

    Args:
        stream: Text stream positioned at the start of the document.
        source: Path of the document, used in error messages.

    Returns:
        The validated metadata record. The stream is left at the body.

    Raises:
        MetadataError: If the block is missing, unclosed, or invalid.
    """
    return parse_block(_read_block(stream, source), source)


def split_document(text: str, source: Path | None = None) -> tuple[dict[str, Any], str]:
    """Split a document into its metadata record and body.

    Args:
        text: Full document text.
        source: Path of the document, used in error messages.

    Returns:
        Tuple of (metadata, body).
    """
    stream = io.StringIO(text)
    meta = read_metadata(stream, source)
    return meta, stream.read()
