import pytest

from folio.markup import default_registry


class FakeMarkup:
    def __init__(self, dir, exts):
        self._dir = dir
        self._exts = frozenset(exts)

    @property
    def dir(self):
        return self._dir

    @property
    def exts(self):
        return self._exts

    def render(self, text):
        return f"<p>{text.strip()}</p>"


@pytest.fixture
def make_markup():
    return FakeMarkup


@pytest.fixture
def markdown():
    return FakeMarkup("md", {".md"})


@pytest.fixture
def asciidoc():
    return FakeMarkup("asc", {".asc"})


@pytest.fixture(autouse=True)
def clean_default_registry():
    default_registry.clear()
    yield
    default_registry.clear()

