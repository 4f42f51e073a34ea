"""Logging helpers for descriptor generation."""
from __future__ import annotations

import logging
from contextlib import contextmanager
from time import monotonic
from typing import Dict, Iterator, Optional

LOG_FORMAT = "%(levelname)s:%(name)s:%(message)s"


def configure_root(level: int = logging.INFO) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)
    # uvicorn installs its own handlers; keep its access log at our level.
    logging.getLogger("uvicorn.access").setLevel(level)


@contextmanager
def scoped_timer(
    logger: logging.Logger, message: str, *, extra: Optional[Dict[str, object]] = None
) -> Iterator[None]:
    """Log how long the block took; a failing block is logged as ``<message>.failed`` and re-raised."""

    start = monotonic()
    payload = dict(extra or {})
    try:
        yield
    except Exception as exc:
        logger.error(
            "%s.failed",
            message,
            extra={**payload, "duration_s": monotonic() - start, "error": type(exc).__name__},
        )
        raise
    logger.debug("%s", message, extra={**payload, "duration_s": monotonic() - start})


__all__ = ["LOG_FORMAT", "configure_root", "scoped_timer"]
