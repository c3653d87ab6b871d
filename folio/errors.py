"""Exception types raised by Folio.

All errors derive from FolioError so callers such as the CLI can report any
compile failure with a single handler.
"""

from __future__ import annotations

from pathlib import Path


class FolioError(Exception):
    """Base class for Folio errors."""


class RegistryError(FolioError):
    """Error raised when a markup registry scope is opened twice."""


class MetadataError(FolioError):
    """Error raised when a front matter block is missing or malformed.

    Attributes:
        source: Path of the document being read, if known.
        message: Human-readable description of the violation.
    """

    def __init__(self, message: str, source: Path | None = None):
        self.source = source
        self.message = message
        prefix = f"{source}: " if source is not None else ""
        super().__init__(f"{prefix}{message}")


class ContentError(FolioError):
    """Error while turning a source file into a page or post.

    Attributes:
        source_path: Path to the source file that caused the error.
        message: Human-readable error message.
        original_error: The original exception that was caught.
    """

    def __init__(
        self,
        source_path: Path,
        message: str,
        original_error: Exception | None = None,
    ):
        self.source_path = source_path
        self.message = message
        self.original_error = original_error
        super().__init__(f"{source_path}: {message}")
