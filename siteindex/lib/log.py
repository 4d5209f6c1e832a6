"""Logging for index builds.

Records go to stderr so stdout stays free for the list of written paths.
Every record logged while an emission runs carries that emission's
``output_dir`` and ``rss_slug`` (see `emission_context`).
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any, TextIO

import structlog
from structlog.types import Processor


class _StderrProxy:
    """Writes to whatever sys.stderr is at call time.

    click's CliRunner and pytest's capsys both replace sys.stderr per test.
    """

    def write(self, s: str) -> int:
        return sys.stderr.write(s)

    def flush(self) -> None:
        sys.stderr.flush()

    def isatty(self) -> bool:
        return sys.stderr.isatty()

    def fileno(self) -> int:
        return sys.stderr.fileno()


_stderr_proxy: TextIO = _StderrProxy()  # type: ignore[assignment]


def configure_logging(verbose: bool = False, json_logs: bool = False) -> None:
    """Route structlog output to stderr.

    Args:
        verbose: Emit debug records (skipped and replaced documents)
        json_logs: One JSON object per line instead of console formatting
    """
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.JSONRenderer() if json_logs
        else structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG if verbose else logging.INFO),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=_stderr_proxy),
        # configure_logging may run again (one CLI invocation per test)
        cache_logger_on_first_use=False,
    )


@contextmanager
def emission_context(output_dir: Path, rss_slug: str | None) -> Iterator[None]:
    """Bind the emission target to every record logged inside the block."""
    with structlog.contextvars.bound_contextvars(output_dir=str(output_dir), rss_slug=rss_slug):
        yield


def get_logger(name: str | None = None) -> Any:
    return structlog.get_logger(name)


__all__ = ["configure_logging", "emission_context", "get_logger"]
