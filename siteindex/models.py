"""Domain models for content indexing.

- `Document`: the typed descriptor handed over by the upstream pipeline.
  Every field the index consumes is named and defaulted here, so the
  builder never reads loosely-shaped metadata.

- `IndexEntry`: one frozen record per indexed document.

- `ContentIndex`: ordered ``slug -> IndexEntry`` mapping built fresh on
  every emission.

The JSON field names (``filePath``, ``richContent``) are what the
client-side search and link resolution read, so entries serialize by alias.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from datetime import datetime
from typing import Any

from markdown_it.token import Token
from pydantic import BaseModel, ConfigDict, Field, field_validator

from siteindex.core.timestamps import parse_timestamp


def _string_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value else []
    return [str(item) for item in value if item is not None]


class Document(BaseModel):
    """A processed source document, ready to be indexed."""

    slug: str = Field(min_length=1)
    file_path: str = ""
    title: str = ""
    tags: list[str] = Field(default_factory=list)
    dates: dict[str, datetime] = Field(default_factory=dict)
    links: list[str] = Field(default_factory=list)
    text: str | None = None
    description: str | None = None
    # markdown-it token stream; only read for full-content feeds
    tree: list[Any] | None = None

    @field_validator("title", mode="before")
    @classmethod
    def _coerce_title(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("tags", "links", mode="before")
    @classmethod
    def _coerce_lists(cls, value: Any) -> list[str]:
        return _string_list(value)

    @field_validator("dates", mode="before")
    @classmethod
    def _coerce_dates(cls, value: Any) -> dict[str, datetime]:
        if not value:
            return {}
        parsed = {str(kind): parse_timestamp(raw) for kind, raw in dict(value).items()}
        return {kind: ts for kind, ts in parsed.items() if ts is not None}

    @field_validator("tree")
    @classmethod
    def _check_tree(cls, value: list[Any] | None) -> list[Token] | None:
        if value is not None and not all(isinstance(token, Token) for token in value):
            raise ValueError("tree must be a list of markdown-it tokens")
        return value

    @property
    def is_empty(self) -> bool:
        return not self.text


class IndexEntry(BaseModel):
    """Index record for one document."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    slug: str
    file_path: str = Field(default="", alias="filePath")
    title: str = ""
    links: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()
    content: str = ""
    rich_content: str | None = Field(default=None, alias="richContent")
    date: datetime | None = None
    description: str | None = None

    @field_validator("tags", mode="before")
    @classmethod
    def _dedupe_tags(cls, value: Any) -> tuple[str, ...]:
        # dict.fromkeys keeps first-seen order
        return tuple(dict.fromkeys(_string_list(value)))


class ContentIndex(Mapping[str, IndexEntry]):
    """Ordered mapping of slug to entry, in document-processing order.

    Adding an entry whose slug is already present replaces the earlier one.
    """

    def __init__(self, entries: Iterable[IndexEntry] = ()) -> None:
        self._entries: dict[str, IndexEntry] = {}
        for entry in entries:
            self.add(entry)

    def add(self, entry: IndexEntry) -> None:
        self._entries[entry.slug] = entry

    def __getitem__(self, slug: str) -> IndexEntry:
        return self._entries[slug]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def entries(self) -> list[IndexEntry]:
        return list(self._entries.values())

    def __repr__(self) -> str:
        return f"ContentIndex({len(self)} entries)"


__all__ = ["Document", "IndexEntry", "ContentIndex"]
