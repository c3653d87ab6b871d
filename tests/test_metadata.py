import io
from datetime import date
from pathlib import Path

import pytest

from folio.errors import MetadataError
from folio.metadata import parse_block, read_metadata, split_document, validate


def reader(text):
    return io.StringIO(text)


def test_symbolic_layout_is_accepted():
    stream = reader("---\nlayout: post\ntitle: Hello World\n---\nBody\n")
    meta = read_metadata(stream)
    assert meta == {"layout": "post", "title": "Hello World"}
    # stream is left at the body
    assert stream.read() == "Body\n"


@pytest.mark.parametrize("layout", ['"post"', "'post'"])
def test_quoted_layout_is_rejected(layout):
    with pytest.raises(MetadataError) as excinfo:
        read_metadata(reader(f"---\nlayout: {layout}\ntitle: Hello World\n---\n"))
    assert "layout" in str(excinfo.value)


def test_record_keeps_every_supplied_key():
    meta = read_metadata(
        reader(
            "---\n"
            "layout: post\n"
            "title: Tags\n"
            "tags: [python, c#]\n"
            "author: Joe Smith\n"
            "date: 2024-01-15\n"
            "draft: false\n"
            "page-index: 3\n"
            "custom: anything\n"
            "---\n"
        )
    )
    assert meta["tags"] == ["python", "c#"]
    assert meta["date"] == date(2024, 1, 15)
    assert meta["page-index"] == 3
    assert meta["custom"] == "anything"


@pytest.mark.parametrize(
    "block, key",
    [
        ("layout: post\ntitle: 42\n", "title"),
        ("layout: post\ntitle: T\ntags: python\n", "tags"),
        ("layout: post\ntitle: T\ntags: [1, 2]\n", "tags"),
        ("layout: post\ntitle: T\ndraft: maybe\n", "draft"),
        ("layout: post\ntitle: T\npage-index: first\n", "page-index"),
        ("layout: 12\ntitle: T\n", "layout"),
        ("layout: [post]\ntitle: T\n", "layout"),
    ],
)
def test_wrong_shapes_reject_whole_record(block, key):
    with pytest.raises(MetadataError) as excinfo:
        parse_block(block)
    assert key in excinfo.value.message


def test_missing_required_keys():
    with pytest.raises(MetadataError, match="title"):
        parse_block("layout: post\n")


def test_invalid_yaml_and_non_mapping():
    with pytest.raises(MetadataError) as excinfo:
        parse_block("layout: post\ntitle: [unclosed\n")
    assert excinfo.value.__cause__ is not None
    with pytest.raises(MetadataError):
        parse_block("- just\n- a list\n")
    with pytest.raises(MetadataError):
        parse_block("")


def test_out_of_range_date_is_a_metadata_error():
    source = Path("content/posts/2024-01-01-bad-date.md")
    with pytest.raises(MetadataError) as excinfo:
        read_metadata(reader("---\nlayout: post\ntitle: T\ndate: 2024-13-45\n---\n"), source)
    assert excinfo.value.source == source
    assert isinstance(excinfo.value.__cause__, ValueError)


def test_missing_or_unclosed_block():
    with pytest.raises(MetadataError, match="does not start"):
        read_metadata(reader("layout: post\n"))
    with pytest.raises(MetadataError, match="never closed"):
        read_metadata(reader("---\nlayout: post\ntitle: T\n"))


def test_error_names_source():
    source = Path("content/posts/bad.md")
    with pytest.raises(MetadataError) as excinfo:
        read_metadata(reader('---\nlayout: "post"\ntitle: T\n---\n'), source)
    assert excinfo.value.source == source
    assert str(excinfo.value).startswith(str(source))


def test_split_document():
    meta, body = split_document("---\nlayout: page\ntitle: About\n---\n# About\n")
    assert meta["layout"] == "page"
    assert body == "# About\n"


def test_validate_returns_mapping():
    meta = {"layout": "post", "title": "T"}
    assert validate(meta) is meta
