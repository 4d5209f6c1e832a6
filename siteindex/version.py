from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version as metadata_version


def _resolve_version() -> str:
    """Resolve the siteindex version from installed package metadata."""
    try:
        return metadata_version("siteindex")
    except PackageNotFoundError:
        return "0.0.0+unknown"


SITEINDEX_VERSION = _resolve_version()
GENERATOR = f"siteindex {SITEINDEX_VERSION}"

__all__ = ["SITEINDEX_VERSION", "GENERATOR"]
