"""
Unit Tests for Bybit API Client

Run with:
    pytest tests/unit/test_bybit_api_client.py -v
"""

import pytest
from unittest.mock import AsyncMock

from exchanges.bybit.api_client import BybitAPIClient
from core.upstream import UpstreamResponse


@pytest.fixture
def upstream():
    mock = AsyncMock()
    mock.get.return_value = UpstreamResponse(status_code=200, content=b"{}", media_type="application/json")
    return mock


class TestFundingRate:

    def test_targets_history_funding_rate_endpoint(self, upstream):
        target = BybitAPIClient(upstream).funding_rate_target("ETHUSDT", "20")

        assert target.url == "https://api.bybit.com/derivatives/v3/public/funding/history-funding-rate"
        assert target.params == [("category", "linear"), ("symbol", "ETHUSDT"), ("limit", "20")]
        assert target.upstream == "bybit"

    def test_defaults_symbol_and_limit(self, upstream):
        target = BybitAPIClient(upstream).funding_rate_target()

        assert dict(target.params) == {"category": "linear", "symbol": "BTCUSDT", "limit": "50"}

    @pytest.mark.asyncio
    async def test_sends_target_through_upstream(self, upstream):
        result = await BybitAPIClient(upstream).get_funding_rate(limit="5")

        sent = upstream.get.await_args.args[0]
        assert dict(sent.params) == {"category": "linear", "symbol": "BTCUSDT", "limit": "5"}
        assert result.content == b"{}"
