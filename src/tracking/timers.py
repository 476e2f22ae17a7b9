# src/tracking/timers.py — v1
"""Timer collection and duration measurement for dispatched commands.

measure_duration() wraps an awaitable factory, records a TimerEntry in
the supplied TimerLog whether the call returns or raises, and re-raises
the original exception untouched.
"""

from __future__ import annotations

import logging
import re
import time
from typing import Awaitable, Callable, TypeVar

from buildcore.tracking.models import TimerEntry

logger = logging.getLogger(__name__)

T = TypeVar("T")

_INVALID_TIMER_CHARS = re.compile(r"[^a-z0-9_]+")


def normalize_timer_name(name: str) -> str:
    """Turn a plugin package name into a timer tag.

    '@netlify/plugin-sitemap' -> 'netlify_plugin_sitemap'
    """
    return _INVALID_TIMER_CHARS.sub("_", name.lower()).strip("_")


class TimerLog:
    """Accumulates TimerEntry records for one dispatched command."""

    def __init__(self) -> None:
        self._entries: list[TimerEntry] = []

    def record(
        self,
        stage_tag: str,
        duration_ns: int,
        parent_tag: str | None = None,
        category: str | None = None,
    ) -> TimerEntry:
        entry = TimerEntry(
            stage_tag=stage_tag,
            parent_tag=parent_tag,
            category=category,
            duration_ns=duration_ns,
        )
        self._entries.append(entry)
        return entry

    @property
    def entries(self) -> tuple[TimerEntry, ...]:
        return tuple(self._entries)

    @property
    def last(self) -> TimerEntry | None:
        return self._entries[-1] if self._entries else None


async def measure_duration(
    func: Callable[[], Awaitable[T]],
    stage_tag: str,
    *,
    timers: TimerLog,
    parent_tag: str | None = None,
    category: str | None = None,
) -> tuple[T, int]:
    """Await ``func()`` and measure its wall-clock duration.

    Args:
        func: Zero-argument coroutine factory.
        stage_tag: Timer name (e.g. 'build_command', 'onBuild').
        timers: Log receiving the TimerEntry, also on failure.
        parent_tag: Optional parent node in the timer tree.
        category: Optional timer category (e.g. 'pluginEvent').

    Returns:
        Tuple of (result, duration_ns).
    """
    start_ns = time.monotonic_ns()
    try:
        result = await func()
    except Exception:
        duration_ns = time.monotonic_ns() - start_ns
        timers.record(stage_tag, duration_ns, parent_tag=parent_tag, category=category)
        logger.debug("Timer '%s' stopped by exception after %dns", stage_tag, duration_ns)
        raise
    duration_ns = time.monotonic_ns() - start_ns
    timers.record(stage_tag, duration_ns, parent_tag=parent_tag, category=category)
    return result, duration_ns
