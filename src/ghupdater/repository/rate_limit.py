"""Process-wide GitHub API rate-limit tracking.

A single `RATE_LIMITER` instance records the Unix timestamp at which the
current quota window resets. Every API call consults it first; every
rate-limited response updates it. The updater is single-threaded, so the
read-check-write in `rate_limited_now` is not locked.
"""
from __future__ import annotations

import logging
import time
from typing import Any, Callable, Mapping, Optional

from ghupdater.common.logging_utils import extra_context

logger = logging.getLogger(__name__)

RESET_HEADER = "x-ratelimit-reset"
REMAINING_HEADER = "x-ratelimit-remaining"


def header_value(headers: Optional[Mapping[str, Any]], name: str) -> Optional[str]:
    """Case-insensitive header lookup tolerant of any mapping type."""
    if not headers:
        return None
    wanted = name.lower()
    for key, value in headers.items():
        if str(key).lower() == wanted:
            return None if value is None else str(value)
    return None


def format_wait(seconds: float) -> str:
    """Render a wait duration for humans, e.g. '42 seconds' or '12 minutes'."""
    seconds = max(0, int(seconds))
    if seconds < 60:
        unit, amount = "second", seconds
    elif seconds < 3600:
        unit, amount = "minute", round(seconds / 60)
    else:
        unit, amount = "hour", round(seconds / 3600)
    return f"{amount} {unit}{'' if amount == 1 else 's'}"


class RateLimiter:
    """Tracks when the API quota window resets.

    Args:
        clock: Callable returning the current Unix time; defaults to time.time.
    """

    def __init__(self, clock: Callable[[], float] = time.time):
        self.clock = clock
        self.reset_at: Optional[int] = None

    def rate_limited_now(self) -> bool:
        """Return True while the recorded reset time lies in the future.

        Once the clock passes the reset time the state clears itself.
        """
        if self.reset_at is None:
            return False
        if self.clock() < self.reset_at:
            return True
        self.reset_at = None
        return False

    def record_rate_limit_headers(self, headers: Optional[Mapping[str, Any]]) -> int:
        """Store the reset timestamp from a rate-limited response.

        A missing or non-integer reset header is logged and stored as 0, which
        makes the next call eligible immediately.
        """
        raw = header_value(headers, RESET_HEADER)
        reset = 0
        if raw is None:
            logger.warning(
                "Rate-limited response carries no %s header",
                RESET_HEADER,
                extra=extra_context(event="rate_limit", component="rate_limit", outcome="missing_reset"),
            )
        else:
            try:
                reset = int(raw.strip())
            except ValueError:
                logger.warning(
                    "Unparseable %s header value %r",
                    RESET_HEADER,
                    raw,
                    extra=extra_context(event="rate_limit", component="rate_limit", outcome="bad_reset"),
                )
        self.reset_at = reset
        return reset

    def seconds_until_reset(self) -> int:
        if self.reset_at is None:
            return 0
        return max(0, int(self.reset_at - self.clock()))

    def clear(self) -> None:
        self.reset_at = None


RATE_LIMITER = RateLimiter()


def rate_limited_now() -> bool:
    """Module-level shortcut onto the shared limiter."""
    return RATE_LIMITER.rate_limited_now()


def record_rate_limit_headers(headers: Optional[Mapping[str, Any]]) -> int:
    """Module-level shortcut onto the shared limiter."""
    return RATE_LIMITER.record_rate_limit_headers(headers)
