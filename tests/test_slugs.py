"""Tests for slug helpers."""

import pytest

from siteindex.slugs import absolute_url, encode_uri, join_segments, simplify_slug, slugify_path


class TestSimplifySlug:
    """Test simplify_slug function."""
    @pytest.mark.parametrize(
        ("slug", "expected"),
        [
            ("notes/foo", "notes/foo"),
            ("notes/index", "notes/"),
            ("index", "/"),
            ("/leading", "leading"),
            ("reindex", "reindex"),
        ],
    )
    def test_simplify(self, slug, expected):
        """Trailing index segments are removed."""
        assert simplify_slug(slug) == expected


class TestJoinSegments:
    """Test join_segments function."""
    def test_basic(self):
        """Segments join with slashes."""
        assert join_segments("example.com", "notes/foo") == "example.com/notes/foo"

    def test_drops_root_and_empty(self):
        """Empty and root segments are skipped."""
        assert join_segments("example.com", "/") == "example.com/"
        assert join_segments("example.com", "") == "example.com"

    def test_collapses_slashes_at_joins(self):
        """Slashes at joins collapse to one."""
        assert join_segments("example.com/", "/notes") == "example.com/notes"

    def test_keeps_outer_slashes(self):
        """Leading and trailing slashes survive."""
        assert join_segments("/a", "b/") == "/a/b/"

    def test_empty(self):
        """No segments gives an empty string."""
        assert join_segments() == ""


class TestEncodeUri:
    """Test encode_uri function."""
    def test_space_and_unicode(self):
        """Spaces and non-ASCII are percent-encoded."""
        assert encode_uri("notes/my note") == "notes/my%20note"
        assert encode_uri("café") == "caf%C3%A9"

    def test_reserved_kept(self):
        """Reserved URI characters are left alone."""
        assert encode_uri("a/b?c=d&e#f") == "a/b?c=d&e#f"


class TestAbsoluteUrl:
    """Test absolute_url function."""
    def test_example(self):
        """Base and slug form an https URL."""
        assert absolute_url("example.com", "notes/foo") == "https://example.com/notes/foo"

    def test_folder_index(self):
        """Folder index pages link to the folder."""
        assert absolute_url("example.com", "notes/index") == "https://example.com/notes/"

    def test_base_with_path(self):
        """A base URL with a path keeps it."""
        assert absolute_url("example.com/garden", "a b") == "https://example.com/garden/a%20b"


class TestSlugifyPath:
    """Test slugify_path function."""
    def test_drops_markdown_extension(self):
        """The .md extension is removed."""
        assert slugify_path("notes/foo.md") == "notes/foo"

    def test_special_characters(self):
        """Spaces and unsafe characters become dashes."""
        assert slugify_path("Q&A 100%?.md") == "Q-and-A-100-percent"

    def test_non_markdown_suffix_kept(self):
        """Other suffixes stay in the slug."""
        assert slugify_path("img/cat.png") == "img/cat.png"
