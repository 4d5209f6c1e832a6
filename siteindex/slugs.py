"""Slug helpers shared by the loader and the generators."""

from __future__ import annotations

import re
from pathlib import PurePosixPath
from urllib.parse import quote

# Characters ECMAScript's encodeURI leaves untouched, beyond alphanumerics and "_.-~".
_URI_SAFE = ";,/?:@&=+$!*'()#"

_SLUG_REPLACEMENTS = (
    (re.compile(r"\s"), "-"),
    (re.compile(r"&"), "-and-"),
    (re.compile(r"%"), "-percent"),
    (re.compile(r"[?#]"), ""),
)


def _strip_slashes(value: str, *, only_prefix: bool = False) -> str:
    if value.startswith("/"):
        value = value[1:]
    if not only_prefix and value.endswith("/"):
        value = value[:-1]
    return value


def _trim_suffix(value: str, suffix: str) -> str:
    if value == suffix or value.endswith("/" + suffix):
        return value[: -len(suffix)]
    return value


def simplify_slug(slug: str) -> str:
    """Return the URL-ready form of a slug.

    A trailing ``index`` segment is dropped, so ``notes/index`` becomes
    ``notes/`` and the root ``index`` becomes ``/``.
    """
    result = _strip_slashes(_trim_suffix(slug, "index"), only_prefix=True)
    return result or "/"


def join_segments(*segments: str) -> str:
    """Join path segments with single slashes.

    Empty and ``/`` segments are dropped; a leading slash on the first
    segment and a trailing slash on the last one survive.
    """
    if not segments:
        return ""
    joined = "/".join(_strip_slashes(s) for s in segments if s not in ("", "/"))
    if segments[0].startswith("/"):
        joined = "/" + joined
    if segments[-1].endswith("/"):
        joined = joined + "/"
    return joined


def encode_uri(value: str) -> str:
    """Percent-encode like encodeURI: reserved URI characters are kept."""
    return quote(value, safe=_URI_SAFE)


def absolute_url(base_url: str, slug: str) -> str:
    """``https://{base}/{encoded simplified slug}``."""
    return "https://" + join_segments(base_url, encode_uri(simplify_slug(slug)))


def slugify_path(relative_path: str | PurePosixPath) -> str:
    """Turn a relative Markdown file path into a slug."""
    path = PurePosixPath(relative_path)
    stem = str(path.with_suffix("")) if path.suffix.lower() in (".md", ".markdown") else str(path)
    slug = stem
    for pattern, replacement in _SLUG_REPLACEMENTS:
        slug = pattern.sub(replacement, slug)
    return slug


__all__ = [
    "absolute_url",
    "encode_uri",
    "join_segments",
    "simplify_slug",
    "slugify_path",
]
