"""Protocol definitions for Folio.

This module defines the interface markup plugins implement. Discovery, the
resource copier and the content reader depend only on this protocol, so new
document formats can be added without modifying the core.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Protocol, runtime_checkable


@runtime_checkable
class Markup(Protocol):
    """Protocol for a supported document format.

    A markup names the content subdirectory it owns, the file suffixes it
    recognizes and how its source text turns into HTML.
    """

    @property
    @abstractmethod
    def dir(self) -> str:
        """Return the subdirectory convention for this format (e.g. 'md')."""
        ...

    @property
    @abstractmethod
    def exts(self) -> frozenset[str]:
        """Return the file suffixes this format recognizes (e.g. {'.md'})."""
        ...

    @abstractmethod
    def render(self, text: str) -> str:
        """Convert source text to HTML.

        Args:
            text: Document body without its front matter.

        Returns:
            Rendered HTML.
        """
        ...
