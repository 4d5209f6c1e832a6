"""Persist generated artifacts under the output directory."""

from __future__ import annotations

from pathlib import Path

from siteindex.errors import OutputPathError
from siteindex.lib.log import get_logger

logger = get_logger(__name__)


def is_within_root(path: Path, root: Path) -> bool:
    """Return True if path resolves within root."""
    try:
        path.resolve(strict=False).relative_to(root.resolve(strict=False))
    except ValueError:
        return False
    return True


def write_output(output_dir: Path, slug: str, ext: str, content: str) -> Path:
    """Write ``content`` to ``output_dir/<slug><ext>``.

    Raises:
        OutputPathError: If the slug points outside ``output_dir``
        OSError: Filesystem failures propagate unchanged
    """
    root = Path(output_dir)
    target = root / f"{slug}{ext}"
    if not is_within_root(target, root):
        raise OutputPathError(f"Refusing to write {target}: outside {root}")
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(content, encoding="utf-8")
    logger.debug("Wrote %s (%d bytes)", target, len(content))
    return target


__all__ = ["is_within_root", "write_output"]
