"""Markup formats and the markup registry for Folio.

This module contains the built-in markup capabilities and the registry that
holds the markups active for a build.

Key classes:
- MarkdownMarkup: Renders Markdown to HTML with mistune.
- HTMLMarkup: Passes HTML documents through unchanged.
- MarkupRegistry: Ordered set of active markups with scoped activation.

The module-level ``default_registry`` is shared process state. Open it with
``activated()`` so it is always cleared when the build ends, including when the
build raises.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import mistune

from .errors import RegistryError
from .protocols import Markup

logger = logging.getLogger(__name__)


def _generate_heading_id(text: str) -> str:
    """Generate a URL-friendly ID from heading text.

    Args:
        text: The heading text.

    Returns:
        URL-friendly slug suitable for anchor links.
    """
    slug = text.lower().strip()
    slug = re.sub(r"[^\w\s-]", "", slug)
    slug = re.sub(r"[-\s]+", "-", slug)
    return slug.strip("-")


def matches_exts(path: Path, exts) -> bool:
    """Check whether a file name ends with one of the given suffixes."""
    return path.name.endswith(tuple(exts))


class _AnchoredRenderer(mistune.HTMLRenderer):
    """Markdown renderer that gives every heading a unique anchor id."""

    def __init__(self):
        super().__init__(escape=False)
        self._heading_id_counts: dict[str, int] = {}

    def heading(self, text: str, level: int, **attrs) -> str:
        base_id = _generate_heading_id(text)

        if base_id in self._heading_id_counts:
            self._heading_id_counts[base_id] += 1
            heading_id = f"{base_id}-{self._heading_id_counts[base_id]}"
        else:
            self._heading_id_counts[base_id] = 0
            heading_id = base_id

        return f'<h{level} id="{heading_id}">{text}</h{level}>\n'


class MarkdownMarkup:
    """Markdown documents stored under ``content/md``.

    Raw HTML inside the Markdown source, including the ``<!--more-->`` preview
    marker, is preserved in the output.
    """

    @property
    def dir(self) -> str:
        return "md"

    @property
    def exts(self) -> frozenset[str]:
        return frozenset({".md", ".markdown"})

    def render(self, text: str) -> str:
        """Render Markdown source to HTML.

        Args:
            text: Markdown source content.

        Returns:
            Rendered HTML.
        """
        markdown = mistune.create_markdown(
            renderer=_AnchoredRenderer(),
            plugins=["strikethrough", "footnotes", "table", "url"],
        )
        return markdown(text)

    def __repr__(self) -> str:
        return "MarkdownMarkup()"


class HTMLMarkup:
    """Hand-written HTML documents stored under ``content/html``."""

    @property
    def dir(self) -> str:
        return "html"

    @property
    def exts(self) -> frozenset[str]:
        return frozenset({".html", ".htm"})

    def render(self, text: str) -> str:
        return text

    def __repr__(self) -> str:
        return "HTMLMarkup()"


class MarkupRegistry:
    """Registry of the markups active for a build.

    Markups are kept in registration order. When two markups claim the same
    extension, the one registered first wins lookups.
    """

    def __init__(self):
        self._markups: list[Markup] = []

    def register(self, markup: Markup) -> None:
        """Register a markup; registering the same object twice is a no-op.

        Args:
            markup: A Markup implementation.
        """
        if markup in self._markups:
            return
        logger.debug("Registering markup %r (%s)", markup, ", ".join(sorted(markup.exts)))
        self._markups.append(markup)

    def markups(self) -> tuple[Markup, ...]:
        """Return the active markups in registration order."""
        return tuple(self._markups)

    def clear(self) -> None:
        """Remove every registered markup."""
        self._markups.clear()

    def markup_for(self, path: Path) -> Markup | None:
        """Get the markup responsible for a file.

        Args:
            path: Path to the source file.

        Returns:
            The first registered markup claiming the file's suffix, or None.
        """
        for markup in self._markups:
            if matches_exts(path, markup.exts):
                return markup
        return None

    def document_exts(self) -> frozenset[str]:
        """Return the union of every active markup's extensions."""
        exts: set[str] = set()
        for markup in self._markups:
            exts.update(markup.exts)
        return frozenset(exts)

    @contextmanager
    def activated(self, *markups: Markup) -> Iterator[MarkupRegistry]:
        """Register markups for the duration of a ``with`` block.

        The registry is cleared when the block exits, whether it returns or
        raises.

        Args:
            *markups: Markups to activate.

        Raises:
            RegistryError: If the registry already holds markups.
        """
        if self._markups:
            raise RegistryError(
                "Markup registry is already active; nested build scopes are not supported"
            )
        try:
            for markup in markups:
                self.register(markup)
            yield self
        finally:
            self.clear()

    def __len__(self) -> int:
        return len(self._markups)

    def __repr__(self) -> str:  # pragma: no cover - for debugging
        return f"MarkupRegistry({list(self._markups)!r})"


def default_markups() -> list[Markup]:
    """Return fresh instances of the built-in markups."""
    return [MarkdownMarkup(), HTMLMarkup()]


# Default registry instance
default_registry = MarkupRegistry()


def register_markup(markup: Markup) -> None:
    """Register a markup with the default registry."""
    default_registry.register(markup)


def markups() -> tuple[Markup, ...]:
    """Return the markups active in the default registry."""
    return default_registry.markups()


def clear_registry() -> None:
    """Clear the default registry."""
    default_registry.clear()
