"""Content index construction and the artifacts derived from it.

- `build_content_index`: documents -> ContentIndex
- `generate_sitemap`: ContentIndex -> sitemap 0.9 XML
- `generate_rss_feed`: ContentIndex -> RSS 2.0 XML
- `serialize_content_index`: ContentIndex -> client JSON
"""

from siteindex.index.builder import build_content_index, project_entry
from siteindex.index.feed import generate_rss_feed, sort_feed_entries
from siteindex.index.serializer import serialize_content_index, simplify_index
from siteindex.index.sitemap import generate_sitemap

__all__ = [
    "build_content_index",
    "generate_rss_feed",
    "generate_sitemap",
    "project_entry",
    "serialize_content_index",
    "simplify_index",
    "sort_feed_entries",
]
