import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from siteindex.config import IndexOptions, SiteConfig
from siteindex.models import ContentIndex, Document
from tests.factories import make_entry, utc


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    monkeypatch.delenv("SITEINDEX_CONFIG", raising=False)
    monkeypatch.delenv("SITEINDEX_BASE_URL", raising=False)


@pytest.fixture
def site() -> SiteConfig:
    return SiteConfig(base_url="example.com", page_title="Garden & Notes")


@pytest.fixture
def options() -> IndexOptions:
    return IndexOptions()


@pytest.fixture
def make_document():
    def _make(slug: str, **kwargs) -> Document:
        kwargs.setdefault("text", f"Body of {slug}")
        kwargs.setdefault("file_path", f"{slug}.md")
        return Document(slug=slug, **kwargs)

    return _make


@pytest.fixture
def abc_index() -> ContentIndex:
    """A(2023-03-01), B(2023-01-01), C(undated, "Zeta"), inserted C, B, A."""
    return ContentIndex([
        make_entry("notes/c", title="Zeta"),
        make_entry("notes/b", title="Beta", date=utc(2023, 1, 1)),
        make_entry("notes/a", title="Alpha", date=utc(2023, 3, 1)),
    ])
