"""
Per-Caller Rate Limiter

Fixed-window request quota keyed by caller identity (network address).
Built once at startup from the RATE_LIMIT setting and handed to the
ingress middleware, so tests can swap in their own limiter.

Quota notation follows the `limits` library:
    "10/second"        - small burst, replenished every second
    "100/15 minutes"   - larger window, usually paired with RATE_LIMIT_HEADERS

Usage:
    limiter = RateLimiter("10/second")
    if not limiter.admit("203.0.113.7"):
        ...  # respond 429
"""

import math
import time

from limits import parse
from limits.storage import MemoryStorage
from limits.strategies import FixedWindowRateLimiter
from pydantic import BaseModel, Field


class RateLimitWindow(BaseModel):
    """Snapshot of a caller's current quota window."""

    limit: int = Field(..., description="Requests allowed per window")
    remaining: int = Field(..., description="Requests left in the current window")
    reset_after: int = Field(..., description="Seconds until the window resets")


class RateLimiter:
    """
    In-memory fixed-window limiter.

    The window for a caller starts at its first admitted request and the
    counter resets once the window has elapsed. The underlying storage
    serializes increments, so two concurrent requests cannot both take the
    last unit of quota.

    Counting and reset_after both follow the wall clock used by the
    `limits` storage. Tests that need to control admission inject their
    own object with admit() and window() instead.

    Args:
        rate: Quota string, e.g. "10/second"
    """

    def __init__(self, rate: str):
        self.rate = rate
        self.item = parse(rate)
        self._storage = MemoryStorage()
        self._strategy = FixedWindowRateLimiter(self._storage)

    @property
    def limit(self) -> int:
        return self.item.amount

    def admit(self, caller_key: str) -> bool:
        """Consume one unit of quota; False if the caller has none left."""
        return self._strategy.hit(self.item, caller_key)

    def window(self, caller_key: str) -> RateLimitWindow:
        stats = self._strategy.get_window_stats(self.item, caller_key)
        reset_after = max(0, math.ceil(stats.reset_time - time.time()))
        return RateLimitWindow(
            limit=self.limit,
            remaining=max(0, stats.remaining),
            reset_after=reset_after,
        )

    def reset(self) -> None:
        """Drop every caller's counter."""
        self._storage.reset()
