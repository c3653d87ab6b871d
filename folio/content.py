"""Page and post records for Folio.

This module turns discovered source files into records the template layer
consumes: front matter is read and validated, the body is rendered with the
file's markup, and addresses and dates are derived.

Key classes:
- Page: A standalone page (about, contact...).
- Post: A dated blog post.

Key functions:
- parse_page / parse_post: Build a record from one source file.
- read_pages / read_posts: Discover and build records for every active markup.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any

from .discovery import find_pages, find_posts
from .errors import ContentError, MetadataError
from .markup import MarkupRegistry, default_registry
from .metadata import read_metadata
from .protocols import Markup
from .uris import page_uri, post_uri
from .utils import extract_date_from_name, slugify, strip_date_prefix

logger = logging.getLogger(__name__)


@dataclass
class Page:
    """A rendered page with its metadata.

    Attributes:
        title: Page title from the front matter.
        layout: Symbolic layout name.
        content: Rendered HTML body.
        uri: Address of the page.
        slug: URL-friendly slug derived from the file name.
        source: Path of the source file.
        markup: Directory name of the markup that rendered the page.
        tags: Tags from the front matter.
        author: Author name, if any.
        draft: Whether the page is a draft.
        toc: Whether a table of contents was requested.
        page_index: Position in navigation menus.
        navbar: Whether the page appears in the navbar.
        meta: The full front matter, including unknown keys.
    """

    title: str
    layout: str
    content: str
    uri: str
    slug: str
    source: Path
    markup: str
    tags: list[str] = field(default_factory=list)
    author: str | None = None
    draft: bool = False
    toc: bool = False
    page_index: int = 0
    navbar: bool = False
    meta: dict[str, Any] = field(default_factory=dict)


@dataclass
class Post(Page):
    """A dated blog post.

    Attributes:
        date: Publication date.
        prev: The newer neighbouring post, set by ``add_prev_next``.
        next: The older neighbouring post, set by ``add_prev_next``.
    """

    date: datetime = field(default_factory=datetime.now)
    prev: Post | None = field(default=None, repr=False)
    next: Post | None = field(default=None, repr=False)


def parse_post_date(path: Path, config: Mapping[str, Any]) -> datetime:
    """Parse the publication date from a post file name.

    Args:
        path: Post source file, named like ``2024-01-15-title.md``.
        config: Site configuration, uses ``post_date_format``.

    Returns:
        The parsed date.

    Raises:
        ContentError: If the file name does not start with a date.
    """
    date_format = config.get("post_date_format", "%Y-%m-%d")
    parsed = extract_date_from_name(path.name, date_format)
    if parsed is None:
        raise ContentError(
            path, f"Post file name must start with a date in the format {date_format}"
        )
    return parsed


def _naive_utc(value: datetime) -> datetime:
    # File name dates are naive, so offsets are folded into UTC.
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def _coerce_date(value: Any, path: Path) -> datetime:
    if isinstance(value, datetime):
        return _naive_utc(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    try:
        return _naive_utc(datetime.fromisoformat(str(value)))
    except ValueError as exc:
        raise ContentError(path, f"Invalid date {value!r}", exc) from exc


def _read_source(path: Path, markup: Markup) -> tuple[dict[str, Any], str]:
    """Read and validate metadata, then render the body.

    Raises:
        ContentError: If the file is not UTF-8 text or the metadata block is invalid.
    """
    try:
        with open(path, encoding="utf-8") as f:
            meta = read_metadata(f, path)
            body = f.read()
    except UnicodeDecodeError as exc:
        raise ContentError(path, f"File is not valid UTF-8: {exc}", exc) from exc
    except MetadataError as exc:
        raise ContentError(path, exc.message, exc) from exc
    return meta, markup.render(body)


def _common_fields(path: Path, markup: Markup, meta: dict[str, Any], html: str) -> dict[str, Any]:
    return {
        "title": meta["title"],
        "layout": meta["layout"],
        "content": html,
        "source": path,
        "markup": markup.dir,
        "tags": list(meta.get("tags", [])),
        "author": meta.get("author"),
        "draft": meta.get("draft", False),
        "toc": meta.get("toc", False),
        "page_index": meta.get("page-index", 0),
        "navbar": meta.get("navbar", False),
        "meta": meta,
    }


def parse_page(path: Path, config: Mapping[str, Any], markup: Markup) -> Page:
    """Build a Page from a source file.

    The address comes from the front matter ``uri`` key when present,
    otherwise from the file name under ``page_root_uri``.

    Args:
        path: Page source file.
        config: Site configuration.
        markup: Markup that renders the file.

    Returns:
        Page record.
    """
    meta, html = _read_source(path, markup)
    stem = path.name[: -len(path.suffix)] if path.suffix else path.name
    slug = slugify(stem)
    uri = meta.get("uri") or page_uri(f"{slug}.html", "page_root_uri", config)
    return Page(uri=uri, slug=slug, **_common_fields(path, markup, meta, html))


def parse_post(path: Path, config: Mapping[str, Any], markup: Markup) -> Post:
    """Build a Post from a source file.

    The date comes from the front matter ``date`` key when present, otherwise
    from the file name prefix.

    Args:
        path: Post source file.
        config: Site configuration.
        markup: Markup that renders the file.

    Returns:
        Post record.
    """
    meta, html = _read_source(path, markup)
    if "date" in meta:
        published = _coerce_date(meta["date"], path)
    else:
        published = parse_post_date(path, config)
    stem = path.name[: -len(path.suffix)] if path.suffix else path.name
    return Post(
        uri=meta.get("uri") or post_uri(path.name, config),
        slug=slugify(strip_date_prefix(stem)),
        date=published,
        **_common_fields(path, markup, meta, html),
    )


def _published(records: list, config: Mapping[str, Any]) -> list:
    if config.get("include_drafts"):
        return records
    kept = []
    for record in records:
        if record.draft:
            logger.info("Skipping draft %s", record.source)
            continue
        kept.append(record)
    return kept


def read_pages(
    config: Mapping[str, Any],
    registry: MarkupRegistry | None = None,
    project_root: Path | None = None,
) -> list[Page]:
    """Discover and parse the pages of every active markup.

    Returns:
        Pages ordered by ``page-index``, drafts dropped unless
        ``include_drafts`` is set.
    """
    registry = registry if registry is not None else default_registry
    pages = [
        parse_page(path, config, markup)
        for markup in registry.markups()
        for path in find_pages(config, markup, project_root)
        if registry.markup_for(path) is markup
    ]
    return sorted(_published(pages, config), key=lambda p: p.page_index)


def read_posts(
    config: Mapping[str, Any],
    registry: MarkupRegistry | None = None,
    project_root: Path | None = None,
) -> list[Post]:
    """Discover and parse the posts of every active markup.

    Returns:
        Posts newest first, drafts dropped unless ``include_drafts`` is set.
    """
    registry = registry if registry is not None else default_registry
    posts = [
        parse_post(path, config, markup)
        for markup in registry.markups()
        for path in find_posts(config, markup, project_root)
        if registry.markup_for(path) is markup
    ]
    return sorted(_published(posts, config), key=lambda p: p.date, reverse=True)
