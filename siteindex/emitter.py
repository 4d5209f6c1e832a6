"""Emit the sitemap, RSS feed and client content index for a document set."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from pathlib import Path

from siteindex.config import IndexOptions, SiteConfig
from siteindex.index import (
    build_content_index,
    generate_rss_feed,
    generate_sitemap,
    serialize_content_index,
)
from siteindex.lib.log import emission_context, get_logger
from siteindex.models import ContentIndex, Document
from siteindex.slugs import join_segments
from siteindex.writer import write_output

logger = get_logger(__name__)

SITEMAP_SLUG = "sitemap"
CONTENT_INDEX_SLUG = join_segments("static", "contentIndex")


class ContentIndexEmitter:
    """Build the content index and write the artifacts derived from it.

    Writes:
    - sitemap.xml: every indexed page (when ``enable_sitemap``)
    - {rss_slug}.xml: the RSS feed (when ``enable_rss``)
    - static/contentIndex.json: reduced index for client-side search
    """

    name = "ContentIndex"

    def __init__(
        self,
        site: SiteConfig | None = None,
        options: IndexOptions | None = None,
    ) -> None:
        self.site = site or SiteConfig()
        self.options = options or IndexOptions()

    def build_index(self, documents: Iterable[Document], *, now: datetime | None = None) -> ContentIndex:
        return build_content_index(documents, self.site, self.options, now=now)

    def emit(
        self,
        documents: Iterable[Document],
        output_dir: Path,
        *,
        now: datetime | None = None,
    ) -> list[Path]:
        """Rebuild the whole index and write every enabled artifact.

        Returns:
            Paths written, in emission order
        """
        output_dir = Path(output_dir)
        rss_slug = self.options.rss_slug or "index"
        with emission_context(output_dir, rss_slug if self.options.enable_rss else None):
            index = self.build_index(documents, now=now)

            outputs: list[Path] = []
            if self.options.enable_sitemap:
                outputs.append(
                    write_output(output_dir, SITEMAP_SLUG, ".xml", generate_sitemap(self.site, index))
                )

            if self.options.enable_rss:
                feed = generate_rss_feed(self.site, index, self.options, self.options.rss_limit)
                outputs.append(write_output(output_dir, rss_slug, ".xml", feed))

            outputs.append(
                write_output(output_dir, CONTENT_INDEX_SLUG, ".json", serialize_content_index(index))
            )

            logger.info("Emitted %d content index artifacts", len(outputs))
        return outputs

    def partial_emit(
        self,
        documents: Iterable[Document],
        output_dir: Path,
        *,
        now: datetime | None = None,
    ) -> list[Path]:
        """Same as `emit`: the index is always rebuilt from every document."""
        return self.emit(documents, output_dir, now=now)


__all__ = ["ContentIndexEmitter", "SITEMAP_SLUG", "CONTENT_INDEX_SLUG"]
