"""Load a directory of Markdown notes into Documents.

This is a small stand-in for a full content pipeline: it reads YAML front
matter, parses the body with markdown-it-py, and pulls out the plain text
and outbound links the index needs.
"""

from __future__ import annotations

import posixpath
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any
from urllib.parse import unquote, urlsplit

import frontmatter
import yaml
from markdown_it import MarkdownIt
from markdown_it.token import Token

from siteindex.core.timestamps import parse_timestamp
from siteindex.errors import DocumentLoadError
from siteindex.lib.log import get_logger
from siteindex.models import Document
from siteindex.slugs import simplify_slug, slugify_path

logger = get_logger(__name__)

MARKDOWN_SUFFIXES = (".md", ".markdown")
DESCRIPTION_LENGTH = 200

_WIKILINK_RE = re.compile(r"\[\[([^\]|#]+)(?:#[^\]|]*)?(?:\|[^\]]*)?\]\]")
_WHITESPACE_RE = re.compile(r"[ \t]+")

# Front matter keys accepted for each date kind, first match wins.
_DATE_KEYS: dict[str, tuple[str, ...]] = {
    "created": ("created", "date"),
    "modified": ("modified", "updated", "lastmod"),
    "published": ("published", "publishDate"),
}


def markdown_parser() -> MarkdownIt:
    return MarkdownIt("commonmark", {"html": True}).enable("table")


def _inline_text(token: Token) -> str:
    parts: list[str] = []
    for child in token.children or []:
        if child.type in ("text", "code_inline"):
            parts.append(child.content)
        elif child.type in ("softbreak", "hardbreak"):
            parts.append(" ")
    return _WHITESPACE_RE.sub(" ", "".join(parts)).strip()


def extract_text(tokens: list[Token]) -> str:
    """Plain text of a token stream, one line per block."""
    blocks: list[str] = []
    for token in tokens:
        if token.type == "inline":
            text = _inline_text(token)
        elif token.type in ("fence", "code_block"):
            text = token.content.rstrip("\n")
        else:
            continue
        if text:
            blocks.append(text)
    return "\n".join(blocks)


def _resolve_href(href: str | None, source_slug: str) -> str | None:
    if not href or href.startswith(("#", "//")):
        return None
    parts = urlsplit(href)
    if parts.scheme or parts.netloc or not parts.path:
        return None
    target = unquote(parts.path)
    if target.startswith("/"):
        resolved = posixpath.normpath(target.lstrip("/"))
    else:
        resolved = posixpath.normpath(posixpath.join(posixpath.dirname(source_slug), target))
    if resolved.startswith(".."):
        return None
    if resolved == ".":
        resolved = "index"
    return simplify_slug(slugify_path(resolved))


def extract_links(tokens: list[Token], source_slug: str) -> list[str]:
    """Simplified slugs of relative links and ``[[wikilinks]]``, first-seen order."""
    links: list[str] = []
    for token in tokens:
        if token.type != "inline":
            continue
        text_parts: list[str] = []
        for child in token.children or []:
            if child.type == "link_open":
                resolved = _resolve_href(child.attrGet("href"), source_slug)  # type: ignore[arg-type]
                if resolved:
                    links.append(resolved)
            elif child.type == "text":
                text_parts.append(child.content)
        for match in _WIKILINK_RE.finditer("".join(text_parts)):
            links.append(simplify_slug(slugify_path(match.group(1).strip())))
    return list(dict.fromkeys(links))


def _front_matter_dates(metadata: dict[str, Any]) -> dict[str, datetime]:
    """Parsed front matter dates; unparseable values count as absent."""
    dates: dict[str, datetime] = {}
    for kind, keys in _DATE_KEYS.items():
        for key in keys:
            parsed = parse_timestamp(metadata.get(key))
            if parsed is not None:
                dates[kind] = parsed
                break
    return dates


def _summarize(text: str) -> str:
    flat = " ".join(text.split())
    if len(flat) <= DESCRIPTION_LENGTH:
        return flat
    cut = flat[:DESCRIPTION_LENGTH].rsplit(" ", 1)[0]
    return cut + "..."


def load_document(path: Path, root: Path, md: MarkdownIt | None = None) -> Document:
    """Read one Markdown note into a Document.

    Raises:
        DocumentLoadError: If the front matter is not valid YAML
        OSError: If the file cannot be read
    """
    md = md or markdown_parser()
    relative = path.relative_to(root).as_posix()
    slug = slugify_path(relative)

    try:
        post = frontmatter.loads(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise DocumentLoadError(f"Invalid front matter in {relative}: {exc}") from exc
    metadata = dict(post.metadata)

    tokens = md.parse(post.content)
    text = extract_text(tokens)

    dates = _front_matter_dates(metadata)
    if "modified" not in dates:
        dates["modified"] = datetime.fromtimestamp(path.stat().st_mtime, tz=timezone.utc)

    description = metadata.get("description")
    return Document(
        slug=slug,
        file_path=relative,
        title=metadata.get("title") or path.stem,
        tags=metadata.get("tags") or metadata.get("tag"),
        dates=dates,
        links=extract_links(tokens, slug),
        text=text,
        description=str(description) if description is not None else _summarize(text),
        tree=tokens,
    )


def iter_markdown_files(root: Path) -> list[Path]:
    """Markdown files under root, sorted, skipping hidden directories."""
    files = []
    for path in sorted(root.rglob("*")):
        relative = path.relative_to(root)
        if any(part.startswith(".") for part in relative.parts):
            continue
        if path.is_file() and path.suffix.lower() in MARKDOWN_SUFFIXES:
            files.append(path)
    return files


def load_documents(root: Path) -> list[Document]:
    root = Path(root)
    md = markdown_parser()
    documents = [load_document(path, root, md) for path in iter_markdown_files(root)]
    logger.info("Loaded %d documents from %s", len(documents), root)
    return documents


__all__ = [
    "extract_links",
    "extract_text",
    "iter_markdown_files",
    "load_document",
    "load_documents",
    "markdown_parser",
]
