"""Context manager for latency instrumentation."""

from __future__ import annotations

import contextlib
import time
from collections.abc import Generator

from view_chats.observability.logging import get_logger

logger = get_logger(__name__)


@contextlib.contextmanager
def timed(component: str, **fields: object) -> Generator[None, None, None]:
    """Context manager to measure and log elapsed time per component.

    Usage:
        with timed("chat_list", limit=50):
            ...

    Logs a ``component_latency`` entry with ``component``, ``elapsed_ms`` and
    any extra ``fields`` given by the caller.
    """
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "component_latency",
            extra={
                **fields,
                "component": component,
                "elapsed_ms": round(elapsed_ms, 2),
            },
        )
