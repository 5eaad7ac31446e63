"""
Bybit REST Proxy Client

Builds upstream requests for the Bybit public derivatives endpoint this proxy
exposes and sends them through the shared UpstreamClient.

API Documentation:
    https://bybit-exchange.github.io/docs/derivatives/public/history-fund-rate

Usage:
    client = BybitAPIClient(upstream)
    response = await client.get_funding_rate("ETHUSDT", limit="20")
"""

from typing import Optional
from core.logging import get_logger
from core.upstream import UpstreamClient, UpstreamResponse, UpstreamTarget


DEFAULT_SYMBOL = "BTCUSDT"
DEFAULT_FUNDING_LIMIT = "50"


class BybitAPIClient:
    """
    Bybit request builder.

    Attributes:
        BASE_URL: Bybit API base URL
        CATEGORY: Product category sent with every request (USDT perpetuals)
    """

    BASE_URL = "https://api.bybit.com"
    FUNDING_RATE_PATH = "/derivatives/v3/public/funding/history-funding-rate"
    CATEGORY = "linear"

    def __init__(self, upstream: UpstreamClient):
        self.upstream = upstream
        self.logger = get_logger(__name__)

    def funding_rate_target(self, symbol: Optional[str] = None, limit: Optional[str] = None) -> UpstreamTarget:
        return UpstreamTarget(
            url=f"{self.BASE_URL}{self.FUNDING_RATE_PATH}",
            params=[
                ("category", self.CATEGORY),
                ("symbol", symbol or DEFAULT_SYMBOL),
                ("limit", limit or DEFAULT_FUNDING_LIMIT),
            ],
            upstream="bybit",
        )

    async def get_funding_rate(self, symbol: Optional[str] = None, limit: Optional[str] = None) -> UpstreamResponse:
        """
        Fetch funding rate history for a linear perpetual.

        Args:
            symbol: Trading pair (default BTCUSDT)
            limit: Number of records (default 50)

        Raises:
            UpstreamError: If Bybit could not be reached

        Bybit Endpoint:
            GET /derivatives/v3/public/funding/history-funding-rate?category=linear&symbol=BTCUSDT&limit=50
        """
        target = self.funding_rate_target(symbol, limit)
        self.logger.info(f"Fetching funding rate: {dict(target.params)}")
        return await self.upstream.get(target)
