"""Sitemap 0.9 generation."""

from __future__ import annotations

from siteindex.config import SiteConfig
from siteindex.core.timestamps import format_iso8601
from siteindex.index.templates import get_environment
from siteindex.models import ContentIndex
from siteindex.slugs import absolute_url


def generate_sitemap(site: SiteConfig, index: ContentIndex) -> str:
    """Render one ``<url>`` per entry, in index order.

    ``<lastmod>`` is only emitted for entries that carry a date.
    """
    urls = [
        {
            "loc": absolute_url(site.base_url, slug),
            "lastmod": format_iso8601(entry.date) if entry.date is not None else None,
        }
        for slug, entry in index.items()
    ]
    return get_environment().get_template("sitemap.xml").render(urls=urls)


__all__ = ["generate_sitemap"]
