"""Utility functions for Folio.

Key functions:
    slugify: Convert file names to URL slugs.
    strip_date_prefix: Drop a leading YYYY-MM-DD from a file name.
    extract_date_from_name: Parse the leading date of a file name.
    ensure_clean_dir: Ensure a directory exists and is empty.
"""

from __future__ import annotations

import re
import shutil
from datetime import datetime
from pathlib import Path

_DATE_PREFIX_RE = re.compile(r"^(\d{4}-\d{2}-\d{2})(?:-|$)")


def slugify(name: str) -> str:
    """Convert a file name stem to a slug.

    Args:
        name: File name without extension.

    Returns:
        URL-friendly slug.

    Examples:
        >>> slugify("Hello World!")
        'hello-world'
    """
    cleaned = re.sub(r"[^a-zA-Z0-9]+", "-", name)
    cleaned = cleaned.strip("-").lower()
    return cleaned or "index"


def strip_date_prefix(name: str) -> str:
    """Remove a leading ``YYYY-MM-DD-`` from a file name stem."""
    match = _DATE_PREFIX_RE.match(name)
    if not match:
        return name
    return name[match.end() :] or name


def extract_date_from_name(name: str, date_format: str = "%Y-%m-%d") -> datetime | None:
    """Extract the date a file name starts with.

    Args:
        name: File name, with or without extension.
        date_format: strptime format of the prefix.

    Returns:
        datetime if the name starts with a valid date, None otherwise.

    Examples:
        >>> extract_date_from_name("2024-01-15-hello-world.md")
        datetime.datetime(2024, 1, 15, 0, 0)
    """
    # Formatting a sample date tells how many characters the prefix takes.
    width = len(datetime(2000, 12, 31).strftime(date_format))
    try:
        return datetime.strptime(name[:width], date_format)
    except ValueError:
        return None


def ensure_clean_dir(path: Path) -> None:
    """Ensure a directory exists and is empty.

    Args:
        path: Directory path to clean or create.
    """
    if path.exists():
        shutil.rmtree(str(path))
    path.mkdir(parents=True, exist_ok=True)
