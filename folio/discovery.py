"""Content discovery for Folio.

Documents live either in the flat layout ``content/<root>`` or in the layout
owned by their markup, ``content/<markup.dir>/<root>``. Both locations are
searched and the results merged, so a site can mix the two.

Key functions:
- find_entries: Find documents of a markup under a configured root.
- find_pages: Find page documents for a markup.
- find_posts: Find post documents for a markup.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from .markup import matches_exts
from .protocols import Markup

logger = logging.getLogger(__name__)

CONTENT_DIR = "content"

DEFAULT_IGNORED_FILES = (r"\.#.*", r".*\.swp$")


def content_dirs(root: str, markup: Markup, project_root: Path) -> list[Path]:
    """Return the two content directories searched for a root.

    Args:
        root: Configured root directory name (e.g. 'posts').
        markup: Markup whose own subdirectory is searched as well.
        project_root: Directory containing ``content/``.

    Returns:
        The flat directory followed by the markup-specific one.
    """
    content = project_root / CONTENT_DIR
    return [content / root, content / markup.dir / root]


def is_ignored(path: Path, patterns: Iterable[str]) -> bool:
    """Check if a file name matches one of the ignore patterns."""
    return any(re.match(pattern, path.name) for pattern in patterns)


def iter_files(directory: Path, ignored: Iterable[str] = ()) -> list[Path]:
    """List every regular file below a directory, skipping ignored names.

    Args:
        directory: Directory to walk recursively.
        ignored: Regular expressions matched against file names.

    Returns:
        Sorted list of file paths; empty if the directory does not exist.
    """
    if not directory.is_dir():
        return []
    patterns = list(ignored)
    files: list[Path] = []
    for path in sorted(directory.rglob("*")):
        if path.is_dir():
            continue
        if is_ignored(path, patterns):
            continue
        files.append(path)
    return files


def find_entries(
    root: str,
    markup: Markup,
    project_root: Path | None = None,
    ignored: Iterable[str] = DEFAULT_IGNORED_FILES,
) -> list[Path]:
    """Find documents of a markup under a content root.

    Args:
        root: Root directory name below ``content/``.
        markup: Markup whose extensions select documents.
        project_root: Project directory, the current directory by default.
        ignored: File name patterns to skip.

    Returns:
        Absolute paths without duplicates, in discovery order.
    """
    project_root = (project_root or Path.cwd()).resolve()
    patterns = list(ignored)
    entries: list[Path] = []
    for directory in content_dirs(root, markup, project_root):
        for path in iter_files(directory, patterns):
            if not matches_exts(path, markup.exts):
                continue
            path = path.absolute()
            if path not in entries:
                entries.append(path)
    logger.debug("Found %d %s entries in %r", len(entries), markup.dir, root)
    return entries


def find_pages(
    config: Mapping[str, Any], markup: Markup, project_root: Path | None = None
) -> list[Path]:
    """Find page documents of a markup.

    Args:
        config: Site configuration, uses ``page_root`` and ``ignored_files``.
        markup: Markup to search for.
        project_root: Project directory, the current directory by default.

    Returns:
        Absolute paths of discovered pages.
    """
    return find_entries(
        config["page_root"],
        markup,
        project_root,
        config.get("ignored_files", DEFAULT_IGNORED_FILES),
    )


def find_posts(
    config: Mapping[str, Any], markup: Markup, project_root: Path | None = None
) -> list[Path]:
    """Find post documents of a markup.

    Args:
        config: Site configuration, uses ``post_root`` and ``ignored_files``.
        markup: Markup to search for.
        project_root: Project directory, the current directory by default.

    Returns:
        Absolute paths of discovered posts.
    """
    return find_entries(
        config["post_root"],
        markup,
        project_root,
        config.get("ignored_files", DEFAULT_IGNORED_FILES),
    )
