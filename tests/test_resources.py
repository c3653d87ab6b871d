from pathlib import Path

import pytest

from folio.markup import MarkupRegistry, default_registry
from folio.resources import copy_resources_from_markup_folders

CONFIG = {"post_root": "posts", "page_root": "pages", "blog_prefix": "/blog"}


def create_entry(directory: Path, name: str, text: str = "") -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / name
    path.write_text(text, encoding="utf-8")
    return path


def test_nothing_to_copy(tmp_path):
    (tmp_path / "content").mkdir()
    copied = copy_resources_from_markup_folders(
        {"post_root": "pages", "page_root": "posts", "blog_prefix": "/blog"}, tmp_path
    )
    assert copied == []
    assert not (tmp_path / "public/blog/pages").is_dir()
    assert not (tmp_path / "public/blog/posts").is_dir()


@pytest.mark.parametrize("with_dir", [True, False])
@pytest.mark.parametrize("markup_name", ["markdown", "asciidoc"])
def test_copy_from_markup_folders(tmp_path, request, markup_name, with_dir):
    markup = request.getfixturevalue(markup_name)
    for root in ("pages", "posts"):
        for ext in markup.exts:
            base = f"{markup.dir}/{root}" if with_dir else root
            create_entry(tmp_path / "content" / base, f"entry{ext}")
    with default_registry.activated(markup):
        copy_resources_from_markup_folders(CONFIG, tmp_path)
    for root in ("pages", "posts"):
        assert (tmp_path / "public/blog" / root).is_dir()
        # documents themselves are not published as resources
        assert list((tmp_path / "public/blog" / root).iterdir()) == []


def test_copies_resources_preserving_layout(tmp_path, markdown, asciidoc):
    create_entry(tmp_path / "content/posts", "2024-01-01-post.md")
    create_entry(tmp_path / "content/posts", "2024-01-02-post.asc")
    create_entry(tmp_path / "content/posts/img", "photo.png", "png")
    create_entry(tmp_path / "content/md/pages/files", "doc.pdf", "pdf")
    create_entry(tmp_path / "content/md/pages", ".#page.md")

    registry = MarkupRegistry()
    with registry.activated(markdown, asciidoc):
        written = copy_resources_from_markup_folders(CONFIG, tmp_path, registry)

    public = tmp_path / "public/blog"
    assert (public / "posts/img/photo.png").read_text(encoding="utf-8") == "png"
    assert (public / "pages/files/doc.pdf").read_text(encoding="utf-8") == "pdf"
    assert not (public / "posts/2024-01-01-post.md").exists()
    assert not (public / "posts/2024-01-02-post.asc").exists()
    assert not (public / "pages/.#page.md").exists()
    assert set(written) == {public / "posts", public / "pages"}


def test_no_markups_is_noop(tmp_path):
    create_entry(tmp_path / "content/posts", "image.png")
    assert copy_resources_from_markup_folders(CONFIG, tmp_path, MarkupRegistry()) == []
    assert not (tmp_path / "public").exists()


def test_without_prefix(tmp_path, markdown):
    create_entry(tmp_path / "content/pages", "logo.svg")
    registry = MarkupRegistry()
    registry.register(markdown)
    copy_resources_from_markup_folders(dict(CONFIG, blog_prefix=""), tmp_path, registry)
    assert (tmp_path / "public/pages/logo.svg").exists()


def test_document_only_subdirectories_are_not_published(tmp_path, markdown):
    create_entry(tmp_path / "content/posts/nested", "2024-01-01-post.md")
    create_entry(tmp_path / "content/posts/nested/deeper", "2024-01-02-post.md")
    create_entry(tmp_path / "content/posts/img", "photo.png", "png")
    registry = MarkupRegistry()
    with registry.activated(markdown):
        copy_resources_from_markup_folders(CONFIG, tmp_path, registry)
    public = tmp_path / "public/blog/posts"
    assert public.is_dir()
    assert (public / "img/photo.png").exists()
    assert not (public / "nested").exists()
