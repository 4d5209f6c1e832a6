"""Tests for RSS feed generation."""

from __future__ import annotations

import xml.etree.ElementTree as ET

import pytest

from siteindex.config import IndexOptions, SiteConfig, notes_text_template
from siteindex.index.feed import (
    channel_description,
    generate_rss_feed,
    limit_entries,
    sort_feed_entries,
    title_collation_key,
)
from siteindex.models import ContentIndex

from tests.factories import make_entry, utc


def _parse(xml: str) -> ET.Element:
    return ET.fromstring(xml.encode("utf-8"))


def _items(xml: str) -> list[ET.Element]:
    return _parse(xml).findall("channel/item")


class TestSortFeedEntries:
    """Test sort_feed_entries function."""
    def test_example_order(self, abc_index):
        """Dated newest first, then undated."""
        assert [e.slug for e in sort_feed_entries(abc_index.values())] == ["notes/a", "notes/b", "notes/c"]

    def test_dated_before_undated(self):
        """Any dated entry precedes any undated one."""
        entries = [
            make_entry("u1", title="Aardvark"),
            make_entry("d1", date=utc(1999, 1, 1)),
        ]
        assert [e.slug for e in sort_feed_entries(entries)] == ["d1", "u1"]

    def test_undated_by_title(self):
        """Undated entries sort by title regardless of case."""
        entries = [
            make_entry("z", title="zeta"),
            make_entry("b", title="Beta"),
            make_entry("a", title="alpha"),
        ]
        assert [e.slug for e in sort_feed_entries(entries)] == ["a", "b", "z"]

    def test_accented_title_sorts_with_base_letter(self):
        """Accented initials sort with their base letter."""
        entries = [make_entry("z", title="Zeta"), make_entry("e", title="Éclair")]
        assert [e.slug for e in sort_feed_entries(entries)] == ["e", "z"]

    def test_lowercase_before_uppercase_on_case_tie(self):
        """Titles differing only in case put lowercase first."""
        entries = [make_entry("up", title="Apple"), make_entry("low", title="apple")]
        assert [e.slug for e in sort_feed_entries(entries)] == ["low", "up"]

    def test_unaccented_before_accented_on_base_tie(self):
        """Titles differing only in accents put the plain one first."""
        entries = [make_entry("accent", title="résumé"), make_entry("plain", title="resume")]
        assert [e.slug for e in sort_feed_entries(entries)] == ["plain", "accent"]

    def test_mixed_timezones_compare_by_instant(self):
        """Dates compare by instant, not wall time."""
        from datetime import datetime, timedelta, timezone

        early = datetime(2023, 1, 1, 10, tzinfo=timezone(timedelta(hours=5)))  # 05:00 UTC
        late = datetime(2023, 1, 1, 6, tzinfo=timezone.utc)
        entries = [make_entry("early", date=early), make_entry("late", date=late)]
        assert [e.slug for e in sort_feed_entries(entries)] == ["late", "early"]

    def test_deterministic(self, abc_index):
        """Input order does not change the result."""
        first = [e.slug for e in sort_feed_entries(abc_index.values())]
        second = [e.slug for e in sort_feed_entries(reversed(abc_index.entries()))]
        assert first == second


class TestTitleCollationKey:
    """Test title_collation_key function."""
    def test_base_letters_compared_first(self):
        """Base letters decide before accents or case."""
        assert title_collation_key("éclair") < title_collation_key("Zeta")
        assert title_collation_key("Ångström") < title_collation_key("Beta")

    def test_distinct_titles_never_tie(self):
        """Different titles get different keys."""
        assert title_collation_key("Apple") != title_collation_key("apple")


class TestLimitEntries:
    """Test limit_entries function."""
    @pytest.mark.parametrize(("limit", "expected"), [(None, 3), (2, 2), (10, 3), (0, 0), (-1, 0)])
    def test_limit(self, abc_index, limit, expected):
        """None keeps all, non-positive keeps none."""
        assert len(limit_entries(abc_index.entries(), limit)) == expected


class TestChannelDescription:
    """Test channel_description function."""
    def test_unlimited_uses_recent_notes(self, site):
        """No limit uses the recent-notes phrase."""
        assert channel_description(site, IndexOptions(), None) == "Recent notes on Garden & Notes"

    def test_limited_uses_last_few(self, site):
        """A limit uses the last-few phrase with the limit."""
        assert channel_description(site, IndexOptions(), 5) == "Last 5 notes on Garden & Notes"

    def test_custom_phrases(self, site):
        """Configured phrases replace the defaults."""
        options = IndexOptions(
            rss_recent_notes_text="Fresh",
            rss_last_few_notes_text=notes_text_template("Newest {count}"),
        )
        assert channel_description(site, options, None) == "Fresh on Garden & Notes"
        assert channel_description(site, options, 3) == "Newest 3 on Garden & Notes"

    def test_injected_function(self, site):
        """Any callable works as the last-few phrase."""
        options = IndexOptions(rss_last_few_notes_text=lambda n: f"{n} latest")
        assert channel_description(site, options, 2) == "2 latest on Garden & Notes"


class TestGenerateRssFeed:
    """Test generate_rss_feed function."""
    def test_example_order_and_limit(self, site, options, abc_index):
        """Items follow feed order and stop at the limit."""
        titles = [i.findtext("title") for i in _items(generate_rss_feed(site, abc_index, options, None))]
        assert titles == ["Alpha", "Beta", "Zeta"]
        limited = [i.findtext("title") for i in _items(generate_rss_feed(site, abc_index, options, 2))]
        assert limited == ["Alpha", "Beta"]

    def test_link_and_guid_match_sitemap_url(self, site, options):
        """link and guid equal the absolute page URL."""
        index = ContentIndex([make_entry("notes/foo", date=utc(2023, 1, 1))])
        (item,) = _items(generate_rss_feed(site, index, options, None))
        assert item.findtext("link") == "https://example.com/notes/foo"
        assert item.findtext("guid") == "https://example.com/notes/foo"

    def test_pub_date_rfc822_and_absent_when_undated(self, site, options, abc_index):
        """pubDate is RFC 822 and omitted without a date."""
        items = _items(generate_rss_feed(site, abc_index, options, None))
        assert items[0].findtext("pubDate") == "Wed, 01 Mar 2023 00:00:00 GMT"
        assert items[2].find("pubDate") is None

    def test_title_escaped(self, site, options):
        """Item titles are XML-escaped."""
        index = ContentIndex([make_entry("a", title="Tom & <Jerry>")])
        xml = generate_rss_feed(site, index, options, None)
        assert "<title>Tom &amp; &lt;Jerry&gt;</title>" in xml
        assert _items(xml)[0].findtext("title") == "Tom & <Jerry>"

    def test_description_is_cdata_of_plain_description(self, site, options):
        """Item description carries the entry description."""
        index = ContentIndex([make_entry("a", description="<em>markup</em> stays")])
        xml = generate_rss_feed(site, index, options, None)
        assert "<![CDATA[ <em>markup</em> stays ]]>" in xml
        assert _items(xml)[0].findtext("description").strip() == "<em>markup</em> stays"

    def test_cdata_terminator_split(self, site, options):
        """A literal ]]> cannot close the CDATA section early."""
        index = ContentIndex([make_entry("a", description="a ]]> b")])
        xml = generate_rss_feed(site, index, options, None)
        assert _items(xml)[0].findtext("description").strip() == "a ]]> b"

    def test_full_html_uses_rich_content(self, site):
        """Full HTML mode publishes rich content."""
        index = ContentIndex([make_entry("a", rich_content="&lt;p&gt;full&lt;/p&gt;", description="short")])
        xml = generate_rss_feed(site, index, IndexOptions(rss_full_html=True), None)
        assert _items(xml)[0].findtext("description").strip() == "&lt;p&gt;full&lt;/p&gt;"
        plain = generate_rss_feed(site, index, IndexOptions(rss_full_html=False), None)
        assert _items(plain)[0].findtext("description").strip() == "short"

    def test_channel_fields(self, site, options, abc_index):
        """Channel title, link, description and generator."""
        channel = _parse(generate_rss_feed(site, abc_index, options, 2)).find("channel")
        assert channel.findtext("title") == "Garden & Notes"
        assert channel.findtext("link") == "https://example.com"
        assert channel.findtext("description") == "Last 2 notes on Garden & Notes"
        assert channel.findtext("generator").startswith("siteindex")

    def test_rss_root(self, site, options, abc_index):
        """Root element is rss version 2.0."""
        root = _parse(generate_rss_feed(site, abc_index, options, None))
        assert root.tag == "rss"
        assert root.get("version") == "2.0"

    def test_limit_larger_than_index(self, site, options, abc_index):
        """A large limit publishes every entry."""
        assert len(_items(generate_rss_feed(site, abc_index, options, 100))) == 3

    def test_empty_index(self, options):
        """An empty index renders a channel with no items."""
        xml = generate_rss_feed(SiteConfig(), ContentIndex(), options, 10)
        assert _items(xml) == []
