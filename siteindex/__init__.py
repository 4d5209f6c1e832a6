"""siteindex - content index, sitemap and RSS feed for note collections.

Example:
    from pathlib import Path

    from siteindex import ContentIndexEmitter, IndexOptions, SiteConfig
    from siteindex.sources import load_documents

    site = SiteConfig(base_url="example.com", page_title="My Notes")
    emitter = ContentIndexEmitter(site, IndexOptions(rss_limit=20))
    written = emitter.emit(load_documents(Path("notes")), Path("public"))
"""

from siteindex.config import IndexOptions, SiteConfig
from siteindex.emitter import ContentIndexEmitter
from siteindex.models import ContentIndex, Document, IndexEntry

__all__ = [
    "ContentIndex",
    "ContentIndexEmitter",
    "Document",
    "IndexEntry",
    "IndexOptions",
    "SiteConfig",
]
