"""Grouping helpers for posts and pages.

These build the indexes list views are rendered from: posts per tag, posts per
author, a monthly archive and navigation menus.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from .content import Page, Post
from .uris import TaxonomyInfo, author_info, tag_info


@dataclass
class TaxonomyGroup:
    """Posts sharing a tag or an author, with the listing address."""

    info: TaxonomyInfo
    posts: list[Post] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.info.name


def _group_by(posts: Iterable[Post], keys) -> dict[str, list[Post]]:
    groups: dict[str, list[Post]] = {}
    for post in posts:
        for key in keys(post):
            groups.setdefault(key, []).append(post)
    return groups


def tag_posts(posts: Iterable[Post], config: Mapping[str, Any]) -> list[TaxonomyGroup]:
    """Group posts by tag.

    Args:
        posts: Posts in display order.
        config: Site configuration, for the tag addresses.

    Returns:
        One group per tag, sorted by tag name (case-insensitive).
    """
    groups = _group_by(posts, lambda post: post.tags)
    return [
        TaxonomyGroup(tag_info(config, tag), tagged)
        for tag, tagged in sorted(groups.items(), key=lambda item: item[0].lower())
    ]


def group_for_author(posts: Iterable[Post], config: Mapping[str, Any]) -> list[TaxonomyGroup]:
    """Group posts by author, skipping posts without one.

    Returns:
        One group per author, sorted by name.
    """
    groups = _group_by(posts, lambda post: [post.author] if post.author else [])
    return [
        TaxonomyGroup(author_info(config, author), written)
        for author, written in sorted(groups.items())
    ]


def group_for_archive(posts: Iterable[Post]) -> list[tuple[str, list[Post]]]:
    """Group posts by publication month, newest month first.

    Returns:
        List of ``("YYYY-MM", posts)`` pairs.
    """
    groups = _group_by(posts, lambda post: [post.date.strftime("%Y-%m")])
    return sorted(groups.items(), reverse=True)


def add_prev_next(posts: Sequence[Post]) -> Sequence[Post]:
    """Link each post to its neighbours.

    Args:
        posts: Posts newest first.

    Returns:
        The same posts; ``prev`` points at the newer post and ``next`` at the
        older one.
    """
    for newer, older in zip(posts, posts[1:]):
        newer.next = older
        older.prev = newer
    return posts


def navbar_pages(pages: Iterable[Page]) -> list[Page]:
    """Return pages flagged for the navbar, ordered by ``page_index``."""
    return sorted((p for p in pages if p.navbar), key=lambda p: p.page_index)


def sidebar_pages(pages: Iterable[Page]) -> list[Page]:
    """Return pages not in the navbar, ordered by ``page_index``."""
    return sorted((p for p in pages if not p.navbar), key=lambda p: p.page_index)
