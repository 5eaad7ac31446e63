"""
Unit Tests for Binance API Client

These tests verify that the BinanceAPIClient:
- Targets the documented Binance Futures endpoints
- Applies the documented parameter defaults
- Hands the request to the shared UpstreamClient unchanged

Run with:
    pytest tests/unit/test_binance_api_client.py -v
"""

import pytest
from unittest.mock import AsyncMock

from exchanges.binance.api_client import BinanceAPIClient
from core.upstream import UpstreamResponse


# ============================================
# Fixtures
# ============================================

@pytest.fixture
def upstream():
    """UpstreamClient stand-in returning a canned reply"""
    mock = AsyncMock()
    mock.get.return_value = UpstreamResponse(status_code=200, content=b"[]", media_type="application/json")
    return mock


@pytest.fixture
def api_client(upstream):
    return BinanceAPIClient(upstream)


# ============================================
# Tests for Funding Rate
# ============================================

class TestFundingRateTarget:
    """Tests for funding_rate_target"""

    def test_targets_funding_rate_endpoint(self, api_client):
        target = api_client.funding_rate_target("ETHUSDT", "10")

        assert target.url == "https://fapi.binance.com/fapi/v1/fundingRate"
        assert target.params == [("symbol", "ETHUSDT"), ("limit", "10")]
        assert target.upstream == "binance"

    def test_defaults_symbol_and_limit(self, api_client):
        target = api_client.funding_rate_target()

        assert dict(target.params) == {"symbol": "BTCUSDT", "limit": "100"}

    def test_empty_strings_fall_back_to_defaults(self, api_client):
        target = api_client.funding_rate_target("", "")

        assert dict(target.params) == {"symbol": "BTCUSDT", "limit": "100"}

    def test_values_are_not_normalized(self, api_client):
        """Symbols are forwarded as given; Binance decides what is valid"""
        target = api_client.funding_rate_target("ethusdt", "abc")

        assert dict(target.params) == {"symbol": "ethusdt", "limit": "abc"}


class TestGetFundingRate:

    @pytest.mark.asyncio
    async def test_sends_target_through_upstream(self, api_client, upstream):
        result = await api_client.get_funding_rate("SOLUSDT")

        sent = upstream.get.await_args.args[0]
        assert sent.url.endswith("/fapi/v1/fundingRate")
        assert dict(sent.params) == {"symbol": "SOLUSDT", "limit": "100"}
        assert result.status_code == 200


# ============================================
# Tests for Open Interest
# ============================================

class TestOpenInterest:

    def test_targets_open_interest_endpoint(self, api_client):
        target = api_client.open_interest_target("ETHUSDT")

        assert target.url == "https://fapi.binance.com/fapi/v1/openInterest"
        assert target.params == [("symbol", "ETHUSDT")]

    def test_defaults_symbol(self, api_client):
        assert api_client.open_interest_target().params == [("symbol", "BTCUSDT")]

    @pytest.mark.asyncio
    async def test_returns_upstream_reply_unchanged(self, api_client, upstream):
        reply = UpstreamResponse(status_code=418, content=b"teapot")
        upstream.get.return_value = reply

        assert await api_client.get_open_interest() is reply
