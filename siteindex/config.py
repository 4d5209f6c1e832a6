from __future__ import annotations

import os
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Tuple

from .errors import ConfigError
from .lib import json as jsonlib

DEFAULT_DATE_TYPE = "modified"
DEFAULT_RSS_LIMIT = 10
DEFAULT_RECENT_NOTES_TEXT = "Recent notes"
DEFAULT_LAST_FEW_NOTES_TEXT = "Last {count} notes"

_ALLOWED_TOP_LEVEL_KEYS = {"site", "options"}
_ALLOWED_SITE_KEYS = {"baseUrl", "pageTitle", "defaultDateType"}
_ALLOWED_OPTION_KEYS = {
    "enableSiteMap",
    "enableRSS",
    "rssLimit",
    "rssFullHtml",
    "rssSlug",
    "includeEmptyFiles",
    "rssRecentNotesText",
    "rssLastFewNotesText",
}
_BOOL_OPTIONS = {
    "enableSiteMap": "enable_sitemap",
    "enableRSS": "enable_rss",
    "rssFullHtml": "rss_full_html",
    "includeEmptyFiles": "include_empty_files",
}


def notes_text_template(template: str) -> Callable[[int], str]:
    """Build a "last N notes" formatter from a ``{count}`` template."""

    def _format(count: int) -> str:
        return template.format(count=count)

    _format.template = template  # type: ignore[attr-defined]
    return _format


default_last_few_notes_text = notes_text_template(DEFAULT_LAST_FEW_NOTES_TEXT)


@dataclass
class SiteConfig:
    """Site-wide settings every generator receives explicitly."""

    base_url: str = ""
    page_title: str = ""
    default_date_type: str = DEFAULT_DATE_TYPE

    def as_dict(self) -> dict:
        return {
            "baseUrl": self.base_url,
            "pageTitle": self.page_title,
            "defaultDateType": self.default_date_type,
        }


@dataclass
class IndexOptions:
    """Options for the content index emitter."""

    enable_sitemap: bool = True
    enable_rss: bool = True
    rss_limit: Optional[int] = DEFAULT_RSS_LIMIT
    rss_full_html: bool = False
    rss_slug: str = "index"
    include_empty_files: bool = True
    rss_recent_notes_text: str = DEFAULT_RECENT_NOTES_TEXT
    rss_last_few_notes_text: Callable[[int], str] = field(default=default_last_few_notes_text)

    def as_dict(self) -> dict:
        return {
            "enableSiteMap": self.enable_sitemap,
            "enableRSS": self.enable_rss,
            "rssLimit": self.rss_limit,
            "rssFullHtml": self.rss_full_html,
            "rssSlug": self.rss_slug,
            "includeEmptyFiles": self.include_empty_files,
            "rssRecentNotesText": self.rss_recent_notes_text,
            "rssLastFewNotesText": getattr(
                self.rss_last_few_notes_text, "template", DEFAULT_LAST_FEW_NOTES_TEXT
            ),
        }


def _config_path(explicit: Optional[Path] = None) -> Optional[Path]:
    if explicit:
        return explicit.expanduser()
    env_path = os.environ.get("SITEINDEX_CONFIG")
    if env_path:
        return Path(env_path).expanduser()
    return None


def _ensure_keys(data: dict, *, allowed: set[str], context: str) -> None:
    unknown = set(data.keys()) - allowed
    if unknown:
        keys = ", ".join(sorted(unknown))
        raise ConfigError(f"Unknown {context} key(s): {keys}")


def _require_str(raw: dict, key: str, default: str, context: str) -> str:
    value = raw.get(key, default)
    if not isinstance(value, str):
        raise ConfigError(f"{context} '{key}' must be a string")
    return value


def _parse_site(raw: Any) -> SiteConfig:
    if not isinstance(raw, dict):
        raise ConfigError("Config 'site' must be an object")
    _ensure_keys(raw, allowed=_ALLOWED_SITE_KEYS, context="site")
    default_date_type = _require_str(raw, "defaultDateType", DEFAULT_DATE_TYPE, "Site")
    if not default_date_type.strip():
        raise ConfigError("Site 'defaultDateType' must be a non-empty string")
    return SiteConfig(
        base_url=_require_str(raw, "baseUrl", "", "Site").strip(),
        page_title=_require_str(raw, "pageTitle", "", "Site"),
        default_date_type=default_date_type.strip(),
    )


def _parse_options(raw: Any) -> IndexOptions:
    if not isinstance(raw, dict):
        raise ConfigError("Config 'options' must be an object")
    _ensure_keys(raw, allowed=_ALLOWED_OPTION_KEYS, context="options")
    kwargs: dict[str, Any] = {}
    for key, attr in _BOOL_OPTIONS.items():
        if key in raw:
            if not isinstance(raw[key], bool):
                raise ConfigError(f"Option '{key}' must be true or false")
            kwargs[attr] = raw[key]
    if "rssLimit" in raw:
        limit = raw["rssLimit"]
        # bool is an int subclass
        if limit is not None and (isinstance(limit, bool) or not isinstance(limit, int)):
            raise ConfigError("Option 'rssLimit' must be an integer or null")
        kwargs["rss_limit"] = limit
    if "rssSlug" in raw:
        slug = _require_str(raw, "rssSlug", "index", "Option")
        if not slug.strip():
            raise ConfigError("Option 'rssSlug' must be a non-empty string")
        kwargs["rss_slug"] = slug.strip()
    if "rssRecentNotesText" in raw:
        kwargs["rss_recent_notes_text"] = _require_str(
            raw, "rssRecentNotesText", DEFAULT_RECENT_NOTES_TEXT, "Option"
        )
    if "rssLastFewNotesText" in raw:
        template = _require_str(raw, "rssLastFewNotesText", DEFAULT_LAST_FEW_NOTES_TEXT, "Option")
        try:
            template.format(count=0)
        except (KeyError, IndexError, ValueError, TypeError, AttributeError) as exc:
            raise ConfigError(
                f"Option 'rssLastFewNotesText' must be a template using only {{count}}: {exc}"
            ) from exc
        kwargs["rss_last_few_notes_text"] = notes_text_template(template)
    return IndexOptions(**kwargs)


def default_config() -> Tuple[SiteConfig, IndexOptions]:
    site = SiteConfig()
    env_base = os.environ.get("SITEINDEX_BASE_URL")
    if env_base:
        site.base_url = env_base.strip()
    return site, IndexOptions()


def load_config(path: Optional[Path] = None) -> Tuple[SiteConfig, IndexOptions]:
    """Load site configuration and index options from a JSON file.

    Without an explicit path or ``SITEINDEX_CONFIG`` the defaults are returned.
    ``SITEINDEX_BASE_URL`` overrides the configured base URL.
    """
    config_path = _config_path(path)
    if config_path is None:
        return default_config()
    if not config_path.exists():
        raise ConfigError(f"Config not found: {config_path}")
    try:
        raw = jsonlib.loads(config_path.read_bytes())
    except jsonlib.JSONDecodeError as exc:
        raise ConfigError(f"Config {config_path} is not valid JSON: {exc}") from exc
    if not isinstance(raw, dict):
        raise ConfigError("Config payload must be a JSON object")
    _ensure_keys(raw, allowed=_ALLOWED_TOP_LEVEL_KEYS, context="config")

    site = _parse_site(raw.get("site", {}))
    options = _parse_options(raw.get("options", {}))

    env_base = os.environ.get("SITEINDEX_BASE_URL")
    if env_base:
        site.base_url = env_base.strip()
    return site, options


__all__ = [
    "IndexOptions",
    "SiteConfig",
    "default_config",
    "default_last_few_notes_text",
    "load_config",
    "notes_text_template",
]
