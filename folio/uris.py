"""URI generation for Folio.

Every generated address is built from the blog prefix, the configured root for
the kind of page, and a file name ending in ``.html``. The ``clean_urls``
setting then decides how that file name is exposed:

- ``trailing-slash``: ``tags/python.html`` becomes ``tags/python/``
- ``no-trailing-slash``: ``tags/python.html`` becomes ``tags/python``
- ``dirty`` (or anything else): the ``.html`` suffix is kept

Taxonomy names (tags, authors) are user text, so their ``uri`` is
percent-encoded while their ``file_path`` keeps the literal characters for
writing to the local filesystem.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

from .utils import slugify, strip_date_prefix

_SLASHES_RE = re.compile(r"/+")
_INDEX_RE = re.compile(r"(^|/)index\.html$")
_HTML_RE = re.compile(r"\.html$")

TRAILING_SLASH = "trailing-slash"
NO_TRAILING_SLASH = "no-trailing-slash"


@dataclass(frozen=True)
class TaxonomyInfo:
    """Address of a tag or author listing.

    Attributes:
        name: The raw tag or author name.
        uri: Percent-encoded address used in links.
        file_path: Same address with literal characters, used for output files.
    """

    name: str
    uri: str
    file_path: str


def path(*parts: str | None) -> str:
    """Join path parts with '/', skipping empty parts and collapsing slashes.

    Examples:
        >>> path("/", "/blog", "tags", "python/")
        '/blog/tags/python/'
    """
    joined = "/".join(part for part in parts if part)
    return _SLASHES_RE.sub("/", joined)


def clean_urls_mode(config: Mapping[str, Any]) -> str:
    """Return the configured clean URL convention.

    A leading colon is accepted, so ``:trailing-slash`` and ``trailing-slash``
    are equivalent.
    """
    return str(config.get("clean_urls") or "dirty").lstrip(":")


def clean_uri(uri: str, mode: str) -> str:
    """Apply the clean URL convention to a file name or relative path.

    Args:
        uri: Relative address, usually ending in ``.html``.
        mode: Clean URL convention.

    Returns:
        The rewritten address.
    """
    if mode not in (TRAILING_SLASH, NO_TRAILING_SLASH):
        return uri
    ending = "/" if mode == TRAILING_SLASH else ""
    match = _INDEX_RE.search(uri)
    if match:
        base = uri[: match.start()]
    else:
        base = _HTML_RE.sub("", uri)
    if base.endswith("/"):
        return base if ending else base.rstrip("/")
    return f"{base}{ending}"


def page_uri(uri: str, uri_type: str, config: Mapping[str, Any]) -> str:
    """Build the absolute address of a page.

    Args:
        uri: File name or relative path of the page, e.g. ``about.html``.
        uri_type: Config key naming the root, e.g. ``tag_root_uri``.
        config: Site configuration.

    Returns:
        Address starting with '/' and the blog prefix.
    """
    tail = clean_uri(uri, clean_urls_mode(config))
    return path("/", config.get("blog_prefix"), config.get(uri_type), tail)


def _strip_html(name: str) -> str:
    return _HTML_RE.sub("", name)


def _segment_tail(segment: str, mode: str) -> str:
    # A taxonomy name is one segment, so "index" is never collapsed to the root.
    if mode == TRAILING_SLASH:
        return f"{segment}/"
    if mode == NO_TRAILING_SLASH:
        return segment
    return f"{segment}.html"


def taxonomy_info(name: str, uri_type: str, config: Mapping[str, Any]) -> TaxonomyInfo:
    """Build the address pair for a taxonomy listing page.

    The name always occupies a single path segment. ``uri`` percent-encodes
    it; ``file_path`` keeps it literal except for ``/``, which is written as
    ``%2F`` so both addresses have the same segments.

    Args:
        name: Raw tag or author name.
        uri_type: Config key naming the root (``tag_root_uri``, ``author_root_uri``).
        config: Site configuration.

    Returns:
        TaxonomyInfo with encoded ``uri`` and literal ``file_path``.
    """
    mode = clean_urls_mode(config)
    root = ("/", config.get("blog_prefix"), config.get(uri_type))
    return TaxonomyInfo(
        name=name,
        uri=path(*root, _segment_tail(quote(name, safe=""), mode)),
        file_path=path(*root, _segment_tail(name.replace("/", "%2F"), mode)),
    )


def tag_info(config: Mapping[str, Any], tag: str) -> TaxonomyInfo:
    """Build the address pair for a tag listing.

    Examples:
        With ``blog_prefix`` '/blog', ``tag_root_uri`` 'tags-output' and
        trailing slashes, the tag 'c#' has uri '/blog/tags-output/c%23/' and
        file path '/blog/tags-output/c#/'.
    """
    return taxonomy_info(tag, "tag_root_uri", config)


def author_info(config: Mapping[str, Any], author: str) -> TaxonomyInfo:
    """Build the address pair for an author listing.

    ``author`` may be a listing file name; a trailing ``.html`` is dropped.
    """
    return taxonomy_info(_strip_html(author), "author_root_uri", config)


def page_address(name: str, uri_type: str, config: Mapping[str, Any]) -> str:
    """Return the encoded address of a taxonomy page from its file name.

    Examples:
        >>> page_address("Joe Smith.html", "author_root_uri", config)
        '/blog/author-output/Joe%20Smith/'
    """
    return taxonomy_info(_strip_html(name), uri_type, config).uri


def post_uri(file_name: str, config: Mapping[str, Any]) -> str:
    """Build the address of a post from its source file name.

    The date prefix and extension are dropped and the rest slugified, so
    ``2024-01-15-Hello World.md`` is addressed as ``hello-world``.
    """
    stem = file_name.rsplit(".", 1)[0] if "." in file_name else file_name
    slug = slugify(strip_date_prefix(stem))
    return page_uri(f"{slug}.html", "post_root_uri", config)
