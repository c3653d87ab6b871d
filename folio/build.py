"""Site compilation for Folio.

This module drives the content-compilation core for one build: it loads the
configuration, activates the markups, reads pages and posts, builds the tag,
author and preview indexes and copies resources into the public tree.

Key functions:
- compile_site: Run the compile step for a project.
- load_config: Load site configuration from folio.yaml.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .collections import (
    TaxonomyGroup,
    add_prev_next,
    group_for_archive,
    group_for_author,
    tag_posts,
)
from .content import Page, Post, read_pages, read_posts
from .discovery import DEFAULT_IGNORED_FILES
from .errors import FolioError
from .markup import MarkupRegistry, default_markups, default_registry
from .preview import PreviewPage, create_previews
from .protocols import Markup
from .resources import PUBLIC_DIR, copy_resources_from_markup_folders
from .utils import ensure_clean_dir

logger = logging.getLogger(__name__)

CONFIG_FILE = "folio.yaml"

DEFAULT_CONFIG: dict[str, Any] = {
    "page_root": "pages",
    "post_root": "posts",
    "blog_prefix": "",
    "page_root_uri": "pages",
    "post_root_uri": "posts",
    "tag_root_uri": "tags",
    "author_root_uri": "authors",
    "clean_urls": "trailing-slash",
    "post_date_format": "%Y-%m-%d",
    "posts_per_page": 5,
    "blocks_per_preview": 2,
    "ignored_files": list(DEFAULT_IGNORED_FILES),
    "include_drafts": False,
}


class ConfigError(FolioError):
    """Error raised when folio.yaml cannot be used."""


@dataclass
class CompileResult:
    """Result of a compile run.

    Attributes:
        pages: Published pages.
        posts: Published posts, newest first and linked to their neighbours.
        tags: Posts grouped by tag.
        authors: Posts grouped by author.
        archive: Posts grouped by month.
        previews: Paginated post previews.
        resources: Output directories resources were copied to.
        config: The configuration the build ran with.
    """

    pages: list[Page]
    posts: list[Post]
    tags: list[TaxonomyGroup] = field(default_factory=list)
    authors: list[TaxonomyGroup] = field(default_factory=list)
    archive: list[tuple[str, list[Post]]] = field(default_factory=list)
    previews: list[PreviewPage] = field(default_factory=list)
    resources: list[Path] = field(default_factory=list)
    config: dict[str, Any] = field(default_factory=dict)


def load_config(project_root: Path) -> dict[str, Any]:
    """Load site configuration from folio.yaml.

    Args:
        project_root: Root directory of the project.

    Returns:
        Dictionary containing configuration values, with defaults applied.

    Raises:
        ConfigError: If the file is not valid YAML or not a mapping.
    """
    config_path = project_root / CONFIG_FILE
    config = DEFAULT_CONFIG.copy()
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            try:
                loaded = yaml.safe_load(f) or {}
            except yaml.YAMLError as exc:
                raise ConfigError(f"{config_path}: invalid YAML: {exc}") from exc
        if not isinstance(loaded, dict):
            raise ConfigError(f"{config_path}: expected a mapping of settings")
        config.update(loaded)
    return config


def compile_site(
    project_root: Path,
    markups: Iterable[Markup] | None = None,
    include_drafts: bool | None = None,
    clean_output: bool = True,
    registry: MarkupRegistry | None = None,
) -> CompileResult:
    """Compile the content of a project.

    Args:
        project_root: Root directory of the project.
        markups: Markups to activate, the built-in ones by default.
        include_drafts: Overrides the ``include_drafts`` setting when given.
        clean_output: Whether to wipe the public directory first.
        registry: Registry to activate the markups in, the default one if omitted.

    Returns:
        CompileResult with the records and indexes of the site.
    """
    config = load_config(project_root)
    if include_drafts is not None:
        config["include_drafts"] = include_drafts
    if clean_output:
        ensure_clean_dir(project_root / PUBLIC_DIR)

    registry = registry if registry is not None else default_registry
    active = list(markups) if markups is not None else default_markups()
    with registry.activated(*active):
        pages = read_pages(config, registry, project_root)
        posts = read_posts(config, registry, project_root)
        add_prev_next(posts)
        resources = copy_resources_from_markup_folders(config, project_root, registry)

    logger.info("Compiled %d page(s) and %d post(s)", len(pages), len(posts))
    return CompileResult(
        pages=pages,
        posts=posts,
        tags=tag_posts(posts, config),
        authors=group_for_author(posts, config),
        archive=group_for_archive(posts),
        previews=create_previews(posts, config),
        resources=resources,
        config=config,
    )
