"""siteindex error hierarchy.

All project exceptions inherit from SiteIndexError, enabling
``except SiteIndexError`` at the CLI boundary.

Hierarchy:
    SiteIndexError
    ├── ConfigError          # config file problems
    ├── DocumentLoadError    # unreadable front matter in a source note
    └── OutputPathError      # output slug escapes the output directory

Filesystem errors raised while writing artifacts are not wrapped; they
propagate as ``OSError``.
"""

from __future__ import annotations


class SiteIndexError(Exception):
    """Base class for all siteindex errors."""


class ConfigError(SiteIndexError):
    """Invalid or missing configuration."""


class DocumentLoadError(SiteIndexError):
    """A source note could not be turned into a Document."""


class OutputPathError(SiteIndexError):
    """An artifact path resolves outside the output directory."""


__all__ = ["SiteIndexError", "ConfigError", "DocumentLoadError", "OutputPathError"]
