"""Resource copying for Folio.

Images, downloads and other files kept next to pages and posts are published
alongside them. For every active markup, each content root is mirrored from
both the flat layout and the markup's own layout into
``public/<blog_prefix>/<root>/``, leaving out the documents themselves.

A content root that does not exist produces no output directory. Below the
root, directories left empty once documents are skipped are not published.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Callable, Iterable, Mapping
from pathlib import Path
from typing import Any

from .discovery import DEFAULT_IGNORED_FILES, content_dirs, is_ignored
from .markup import MarkupRegistry, default_registry, matches_exts

logger = logging.getLogger(__name__)

PUBLIC_DIR = "public"


def public_dir(config: Mapping[str, Any], project_root: Path) -> Path:
    """Return the output directory for the configured blog prefix."""
    prefix = str(config.get("blog_prefix") or "").strip("/")
    target = project_root / PUBLIC_DIR
    return target / prefix if prefix else target


def _ignore_documents(
    document_exts: Iterable[str], ignored: Iterable[str]
) -> Callable[[str, list[str]], set[str]]:
    """Build a ``shutil.copytree`` ignore callback skipping documents."""
    exts = tuple(document_exts)
    patterns = list(ignored)

    def ignore(directory: str, names: list[str]) -> set[str]:
        skipped = set()
        for name in names:
            candidate = Path(directory) / name
            if candidate.is_dir():
                continue
            if matches_exts(candidate, exts) or is_ignored(candidate, patterns):
                skipped.add(name)
        return skipped

    return ignore


def _prune_empty_dirs(root: Path) -> None:
    """Remove empty directories below ``root``, deepest first, keeping ``root``."""
    nested = sorted(
        (p for p in root.rglob("*") if p.is_dir()), key=lambda p: len(p.parts), reverse=True
    )
    for directory in nested:
        if not any(directory.iterdir()):
            directory.rmdir()


def copy_resources_from_markup_folders(
    config: Mapping[str, Any],
    project_root: Path | None = None,
    registry: MarkupRegistry | None = None,
) -> list[Path]:
    """Copy non-document files from the content roots into the public tree.

    Args:
        config: Site configuration, uses ``page_root``, ``post_root``,
            ``blog_prefix`` and ``ignored_files``.
        project_root: Project directory, the current directory by default.
        registry: Registry of active markups, the default registry if omitted.

    Returns:
        Output directories written to, without duplicates.
    """
    project_root = project_root or Path.cwd()
    registry = registry if registry is not None else default_registry
    ignore = _ignore_documents(
        registry.document_exts(), config.get("ignored_files", DEFAULT_IGNORED_FILES)
    )
    target_root = public_dir(config, project_root)

    written: list[Path] = []
    for markup in registry.markups():
        for root in (config["page_root"], config["post_root"]):
            for source_dir in content_dirs(root, markup, project_root):
                if not source_dir.is_dir():
                    continue
                dest = target_root / root
                shutil.copytree(source_dir, dest, ignore=ignore, dirs_exist_ok=True)
                logger.debug("Copied resources %s -> %s", source_dir, dest)
                if dest not in written:
                    written.append(dest)
    for dest in written:
        _prune_empty_dirs(dest)
    return written
