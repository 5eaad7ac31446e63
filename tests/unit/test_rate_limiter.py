"""
Unit Tests for the per-caller rate limiter

Run with:
    pytest tests/unit/test_rate_limiter.py -v
"""

import asyncio

import pytest

from core.rate_limiter import RateLimiter


class TestAdmit:

    def test_admits_up_to_quota_then_rejects(self):
        limiter = RateLimiter("3/minute")

        results = [limiter.admit("10.0.0.1") for _ in range(4)]

        assert results == [True, True, True, False]

    def test_callers_are_counted_separately(self):
        limiter = RateLimiter("1/minute")

        assert limiter.admit("10.0.0.1") is True
        assert limiter.admit("10.0.0.1") is False
        assert limiter.admit("10.0.0.2") is True

    @pytest.mark.asyncio
    async def test_quota_replenishes_after_window(self):
        """quota+1 requests in a window: last is rejected; after reset, admitted again"""
        limiter = RateLimiter("2/second")

        assert limiter.admit("10.0.0.1")
        assert limiter.admit("10.0.0.1")
        assert not limiter.admit("10.0.0.1")

        await asyncio.sleep(1.1)

        assert limiter.admit("10.0.0.1")

    def test_reset_clears_all_counters(self):
        limiter = RateLimiter("1/hour")
        limiter.admit("10.0.0.1")

        limiter.reset()

        assert limiter.admit("10.0.0.1") is True


class TestWindow:

    def test_window_reports_limit_and_remaining(self):
        limiter = RateLimiter("100/15 minutes")
        limiter.admit("10.0.0.1")
        limiter.admit("10.0.0.1")

        window = limiter.window("10.0.0.1")

        assert window.limit == 100
        assert window.remaining == 98
        assert 0 < window.reset_after <= 15 * 60

    @pytest.mark.asyncio
    async def test_reset_after_matches_when_quota_returns(self):
        """The advertised reset is when the caller is actually admitted again"""
        limiter = RateLimiter("1/second")
        limiter.admit("10.0.0.1")

        reset_after = limiter.window("10.0.0.1").reset_after
        assert reset_after == 1
        assert not limiter.admit("10.0.0.1")

        await asyncio.sleep(reset_after + 0.1)

        assert limiter.admit("10.0.0.1")

    def test_remaining_never_negative(self):
        limiter = RateLimiter("1/minute")
        for _ in range(3):
            limiter.admit("10.0.0.1")

        assert limiter.window("10.0.0.1").remaining == 0


class TestConcurrency:

    @pytest.mark.asyncio
    async def test_concurrent_hits_cannot_share_last_unit(self):
        limiter = RateLimiter("1/minute")

        async def hit():
            return limiter.admit("10.0.0.1")

        results = await asyncio.gather(*[hit() for _ in range(20)])

        assert results.count(True) == 1
