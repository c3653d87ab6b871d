"""Folio static site compiler.

This package contains the content-compilation core of a static site generator.
It discovers source documents for pluggable markup formats, reads and validates
their YAML front matter, extracts previews for list views, copies resources into
the publish tree and builds URL-safe addresses for tags and authors.

The main entry point is the CLI module, which wraps the compile step exposed by
the build module.

Architecture:
- Markups are small capabilities (directory name, extensions, renderer) kept in
  an explicit registry whose lifetime is bounded by a build scope.
- Discovery, resource copying and URI generation are plain functions driven by a
  configuration mapping.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
