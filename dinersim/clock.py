"""Millisecond wall-clock helpers and polling sleeps."""

from __future__ import annotations

import time
from typing import Callable

_POLL_SECONDS = 0.0001


def now_ms() -> int:
    """Current wall-clock time in whole milliseconds."""
    return time.time_ns() // 1_000_000


def sleep_ms(ms: int) -> None:
    """Sleep for at least ``ms`` milliseconds by polling the clock."""
    start = now_ms()
    while now_ms() - start < ms:
        time.sleep(_POLL_SECONDS)


def sleep_while(condition: Callable[[], bool], ms: int) -> bool:
    """Sleep up to ``ms`` milliseconds, stopping early once ``condition`` fails.

    Returns ``True`` if the full duration passed, ``False`` if stopped early.
    """
    start = now_ms()
    while condition():
        if now_ms() - start >= ms:
            return True
        time.sleep(_POLL_SECONDS)
    return False