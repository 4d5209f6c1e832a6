"""Client-side JSON projection of the content index."""

from __future__ import annotations

from typing import Any

from siteindex.lib import json as jsonlib
from siteindex.models import ContentIndex, IndexEntry

# Feed-only fields, left out of the payload shipped to browsers.
CLIENT_EXCLUDED_FIELDS = frozenset({"date", "description"})


def simplify_entry(entry: IndexEntry) -> dict[str, Any]:
    """Return a new dict for ``entry`` without the feed-only fields."""
    return entry.model_dump(
        mode="json",
        by_alias=True,
        exclude=set(CLIENT_EXCLUDED_FIELDS),
        exclude_none=True,
    )


def simplify_index(index: ContentIndex) -> dict[str, dict[str, Any]]:
    return {slug: simplify_entry(entry) for slug, entry in index.items()}


def serialize_content_index(index: ContentIndex) -> str:
    """Encode the reduced index as one JSON object keyed by slug."""
    return jsonlib.dumps(simplify_index(index))


__all__ = ["CLIENT_EXCLUDED_FIELDS", "simplify_entry", "simplify_index", "serialize_content_index"]
