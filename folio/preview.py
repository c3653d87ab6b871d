"""Preview extraction for Folio.

Authors mark where a post's preview ends with an HTML comment::

    <p>Shown on the index page.</p>
    <!--more-->
    <p>Only shown on the post page.</p>

The marker may sit at any depth. Truncation works on the parsed tree: the
marker and everything after it is removed at every nesting level, so the
enclosing tags stay balanced.

Key functions:
- content_until_more_marker: Truncate a parsed document at the marker.
- create_preview: Preview HTML for a rendered document.
- create_previews: Paginate posts into preview pages.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from bs4 import BeautifulSoup
from bs4.element import Comment, PageElement, Tag

from .uris import clean_uri, clean_urls_mode, path

if TYPE_CHECKING:
    from .content import Post

MORE_MARKER = "more"


def is_more_marker(node: PageElement) -> bool:
    """Check if a node is the ``<!--more-->`` comment."""
    return isinstance(node, Comment) and node.strip() == MORE_MARKER


def find_more_marker(document: Tag) -> Comment | None:
    """Return the first more marker in document order, or None."""
    for node in document.descendants:
        if is_more_marker(node):
            return node
    return None


def content_until_more_marker(document: Tag) -> Tag | None:
    """Truncate a parsed document at the more marker.

    The input is left untouched. The result holds every node that precedes the
    marker; each ancestor of the marker keeps its tag and loses only the
    children that follow the marker's branch.

    Args:
        document: Parsed document, e.g. ``BeautifulSoup(html, "html.parser")``.

    Returns:
        A new truncated tree, or None if the document has no marker.
    """
    if find_more_marker(document) is None:
        return None
    preview = copy.copy(document)
    marker = find_more_marker(preview)
    node: PageElement | None = marker
    while node is not None and node is not preview:
        for sibling in list(node.next_siblings):
            sibling.extract()
        node = node.parent
    marker.extract()
    return preview


def create_preview(html: str, blocks_per_preview: int | None = None) -> str:
    """Build the preview HTML of a rendered document.

    Args:
        html: Rendered document HTML.
        blocks_per_preview: Number of top-level elements kept when the
            document has no marker. None keeps the whole document.

    Returns:
        Preview HTML.
    """
    document = BeautifulSoup(html, "html.parser")
    truncated = content_until_more_marker(document)
    if truncated is not None:
        return str(truncated)
    if not blocks_per_preview:
        return html
    blocks = [child for child in document.children if isinstance(child, Tag)]
    return "\n".join(str(block) for block in blocks[:blocks_per_preview])


@dataclass
class Preview:
    """A post together with its preview HTML."""

    post: Post
    content: str


@dataclass
class PreviewPage:
    """One page of the paginated post index.

    Attributes:
        index: 1-based page number.
        previews: Posts shown on this page with their previews.
        uri: Address of this page.
        prev_uri: Address of the page with newer posts, if any.
        next_uri: Address of the page with older posts, if any.
    """

    index: int
    previews: list[Preview] = field(default_factory=list)
    uri: str = "/"
    prev_uri: str | None = None
    next_uri: str | None = None


def preview_page_uri(index: int, config: Mapping[str, Any]) -> str:
    """Return the address of a preview page.

    Page 1 is the blog root, later pages live under ``p/<index>``.
    """
    name = "index.html" if index == 1 else f"p/{index}.html"
    return path("/", config.get("blog_prefix"), clean_uri(name, clean_urls_mode(config)))


def create_previews(posts: Sequence[Post], config: Mapping[str, Any]) -> list[PreviewPage]:
    """Paginate posts into preview pages.

    Args:
        posts: Posts in display order, newest first.
        config: Site configuration, uses ``posts_per_page`` and
            ``blocks_per_preview``.

    Returns:
        Preview pages linked to their neighbours.
    """
    per_page = max(int(config.get("posts_per_page") or 1), 1)
    blocks = config.get("blocks_per_preview")
    chunks = [posts[i : i + per_page] for i in range(0, len(posts), per_page)]
    pages: list[PreviewPage] = []
    for index, chunk in enumerate(chunks, start=1):
        previews = [Preview(post, create_preview(post.content, blocks)) for post in chunk]
        pages.append(PreviewPage(index, previews, preview_page_uri(index, config)))
    for newer, older in zip(pages, pages[1:]):
        newer.next_uri = older.uri
        older.prev_uri = newer.uri
    return pages
