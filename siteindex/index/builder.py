"""Project documents into a ContentIndex."""

from __future__ import annotations

import html
from collections.abc import Iterable
from datetime import datetime

from markdown_it import MarkdownIt
from markdown_it.token import Token

from siteindex.config import IndexOptions, SiteConfig
from siteindex.core.timestamps import utc_now
from siteindex.lib.log import get_logger
from siteindex.models import ContentIndex, Document, IndexEntry

logger = get_logger(__name__)


def _html_renderer() -> MarkdownIt:
    # Raw HTML embedded in notes passes through to the rendered body.
    return MarkdownIt("commonmark", {"html": True}).enable("table")


def render_rich_content(tree: list[Token] | None, md: MarkdownIt | None = None) -> str:
    """Render a parsed token tree to HTML, then escape it for the feed body."""
    if not tree:
        return ""
    md = md or _html_renderer()
    return html.escape(md.renderer.render(tree, md.options, {}))


def project_entry(
    document: Document,
    site: SiteConfig,
    *,
    fallback_date: datetime,
    md: MarkdownIt | None = None,
) -> IndexEntry:
    """Build the index entry for one document.

    ``md`` is only passed when full-content feeds are enabled; without it
    ``rich_content`` stays unset.
    """
    return IndexEntry(
        slug=document.slug,
        file_path=document.file_path,
        title=document.title,
        links=document.links,
        tags=document.tags,
        content=document.text or "",
        rich_content=render_rich_content(document.tree, md) if md is not None else None,
        date=document.dates.get(site.default_date_type, fallback_date),
        description=document.description or "",
    )


def build_content_index(
    documents: Iterable[Document],
    site: SiteConfig,
    options: IndexOptions,
    *,
    now: datetime | None = None,
) -> ContentIndex:
    """Build a fresh ContentIndex from the full document collection.

    Args:
        documents: Processed documents in processing order
        site: Site configuration (date field used for ``date``)
        options: Emitter options (empty-file filtering, full HTML mode)
        now: Date used for documents without one; defaults to current UTC time

    Returns:
        ContentIndex keyed by slug, in document order
    """
    fallback_date = now or utc_now()
    md = _html_renderer() if options.rss_full_html else None

    index = ContentIndex()
    skipped = 0
    for document in documents:
        if not options.include_empty_files and document.is_empty:
            logger.debug("Skipping empty document %s (%s)", document.slug, document.file_path)
            skipped += 1
            continue
        if document.slug in index:
            logger.debug("Duplicate slug %s, keeping %s", document.slug, document.file_path)
        index.add(project_entry(document, site, fallback_date=fallback_date, md=md))

    logger.info("Built content index: %d entries, %d skipped", len(index), skipped)
    return index


__all__ = ["build_content_index", "project_entry", "render_rich_content"]
