"""RSS 2.0 feed generation.

Entries are ordered newest first. Undated entries follow all dated ones
and are ordered by title, so the feed order is total and repeatable.
"""

from __future__ import annotations

import unicodedata
from collections.abc import Iterable

from siteindex.config import IndexOptions, SiteConfig
from siteindex.core.timestamps import format_rfc822, to_utc
from siteindex.index.templates import get_environment
from siteindex.models import ContentIndex, IndexEntry
from siteindex.slugs import absolute_url, join_segments
from siteindex.version import GENERATOR

TitleKey = tuple[str, str, tuple[bool, ...], str]

_NO_TITLE_KEY: TitleKey = ("", "", (), "")


def _strip_marks(text: str) -> str:
    return "".join(ch for ch in text if not unicodedata.combining(ch))


def title_collation_key(title: str) -> TitleKey:
    """Sort key for titles, compared level by level like a root-locale collator.

    1. Base letters, ignoring accents and case ("Éclair" sorts with "eclair")
    2. Accents ("e" before "é")
    3. Case, lowercase first ("apple" before "Apple")
    4. The raw title, so distinct titles never tie
    """
    decomposed = unicodedata.normalize("NFKD", title)
    unmarked = _strip_marks(decomposed)
    return (
        unmarked.casefold(),
        decomposed.casefold(),
        tuple(ch.isupper() for ch in unmarked),
        title,
    )


def _feed_sort_key(entry: IndexEntry) -> tuple[int, float, TitleKey]:
    if entry.date is not None:
        return (0, -to_utc(entry.date).timestamp(), _NO_TITLE_KEY)
    return (1, 0.0, title_collation_key(entry.title))


def sort_feed_entries(entries: Iterable[IndexEntry]) -> list[IndexEntry]:
    """Sort entries for the feed: dated (newest first), then undated by title."""
    return sorted(entries, key=_feed_sort_key)


def limit_entries(entries: list[IndexEntry], limit: int | None) -> list[IndexEntry]:
    if limit is None:
        return entries
    return entries[: max(limit, 0)]


def channel_description(site: SiteConfig, options: IndexOptions, limit: int | None) -> str:
    phrase = options.rss_last_few_notes_text(limit) if limit else options.rss_recent_notes_text
    return f"{phrase} on {site.page_title}"


def generate_rss_feed(
    site: SiteConfig,
    index: ContentIndex,
    options: IndexOptions,
    limit: int | None = None,
) -> str:
    """Render the RSS 2.0 feed for the index.

    Args:
        site: Site configuration (base URL and title)
        index: Content index to publish
        options: Emitter options (full HTML mode, channel phrasing)
        limit: Maximum number of items; None publishes every entry

    Returns:
        RSS document as a string
    """
    items = []
    for entry in limit_entries(sort_feed_entries(index.values()), limit):
        body = entry.rich_content if options.rss_full_html else entry.description
        items.append({
            "title": entry.title,
            "link": absolute_url(site.base_url, entry.slug),
            "body": body or "",
            "pub_date": format_rfc822(entry.date) if entry.date is not None else None,
        })

    return get_environment().get_template("rss.xml").render(
        title=site.page_title,
        link="https://" + join_segments(site.base_url),
        description=channel_description(site, options, limit),
        generator=GENERATOR,
        items=items,
    )


__all__ = [
    "channel_description",
    "generate_rss_feed",
    "limit_entries",
    "sort_feed_entries",
    "title_collation_key",
]
