import pytest

from folio.uris import (
    author_info,
    clean_uri,
    page_address,
    page_uri,
    path,
    post_uri,
    tag_info,
)

TAG_CONFIG = {"tag_root_uri": "tags-output", "blog_prefix": "/blog", "clean_urls": ":trailing-slash"}
AUTHOR_CONFIG = {"author_root_uri": "author-output", "blog_prefix": "/blog", "clean_urls": ":trailing-slash"}


@pytest.mark.parametrize(
    "tag, uri, file_path",
    [
        ("a-tag", "/blog/tags-output/a-tag/", "/blog/tags-output/a-tag/"),
        ("c#", "/blog/tags-output/c%23/", "/blog/tags-output/c#/"),
        ("why?", "/blog/tags-output/why%3F/", "/blog/tags-output/why?/"),
        ("with a space", "/blog/tags-output/with%20a%20space/", "/blog/tags-output/with a space/"),
    ],
)
def test_tags_are_url_encoded(tag, uri, file_path):
    info = tag_info(TAG_CONFIG, tag)
    assert info.name == tag
    assert info.uri == uri
    assert info.file_path == file_path


@pytest.mark.parametrize(
    "author, expected",
    [
        ("Joe Smith.html", "/blog/author-output/Joe%20Smith/"),
        ("Dr. Joe Smith.html", "/blog/author-output/Dr.%20Joe%20Smith/"),
        ("Joe Smith Jr..html", "/blog/author-output/Joe%20Smith%20Jr./"),
        ("John H. Doe Jr.html", "/blog/author-output/John%20H.%20Doe%20Jr/"),
    ],
)
def test_authors_are_url_encoded(author, expected):
    assert page_address(author, "author_root_uri", AUTHOR_CONFIG) == expected


def test_author_info_without_suffix():
    info = author_info(AUTHOR_CONFIG, "Joe Smith")
    assert info.uri == "/blog/author-output/Joe%20Smith/"
    assert info.file_path == "/blog/author-output/Joe Smith/"


def test_clean_url_conventions():
    assert clean_uri("python.html", "trailing-slash") == "python/"
    assert clean_uri("python.html", "no-trailing-slash") == "python"
    assert clean_uri("python.html", "dirty") == "python.html"
    assert clean_uri("docs/index.html", "trailing-slash") == "docs/"
    assert clean_uri("docs/index.html", "no-trailing-slash") == "docs"
    assert clean_uri("index.html", "trailing-slash") == "/"


@pytest.mark.parametrize(
    "clean_urls, expected",
    [
        ("trailing-slash", "/blog/tags-output/c%23/"),
        ("no-trailing-slash", "/blog/tags-output/c%23"),
        ("dirty", "/blog/tags-output/c%23.html"),
        (None, "/blog/tags-output/c%23.html"),
    ],
)
def test_tag_uri_follows_clean_urls(clean_urls, expected):
    config = dict(TAG_CONFIG, clean_urls=clean_urls)
    info = tag_info(config, "c#")
    assert info.uri == expected
    assert info.file_path == expected.replace("%23", "#")


def test_path_and_page_uri():
    assert path("/", "/blog/", "tags", "python/") == "/blog/tags/python/"
    assert path("/", None, "", "about.html") == "/about.html"
    config = {"blog_prefix": "", "page_root_uri": "pages", "clean_urls": "trailing-slash"}
    assert page_uri("about.html", "page_root_uri", config) == "/pages/about/"


def test_post_uri_drops_date_and_extension():
    config = {"blog_prefix": "/blog", "post_root_uri": "posts", "clean_urls": "trailing-slash"}
    assert post_uri("2024-01-15-Hello World.md", config) == "/blog/posts/hello-world/"


@pytest.mark.parametrize(
    "tag, uri, file_path",
    [
        ("index", "/blog/tags-output/index/", "/blog/tags-output/index/"),
        ("a/b", "/blog/tags-output/a%2Fb/", "/blog/tags-output/a%2Fb/"),
        ("notes.html", "/blog/tags-output/notes.html/", "/blog/tags-output/notes.html/"),
    ],
)
def test_tag_names_stay_one_segment(tag, uri, file_path):
    info = tag_info(TAG_CONFIG, tag)
    assert info.name == tag
    assert info.uri == uri
    assert info.file_path == file_path


def test_index_tag_with_dirty_urls():
    config = dict(TAG_CONFIG, clean_urls="dirty")
    assert tag_info(config, "index").uri == "/blog/tags-output/index.html"
