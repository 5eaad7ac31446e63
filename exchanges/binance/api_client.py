"""
Binance Futures REST Proxy Client

Builds upstream requests for the Binance Futures (USD-M) public endpoints
this proxy exposes and sends them through the shared UpstreamClient.

API Documentation:
    https://binance-docs.github.io/apidocs/futures/en/

Endpoints Used:
    - GET /fapi/v1/fundingRate   - Funding rate history
    - GET /fapi/v1/openInterest  - Current open interest

Responses are returned untouched (status + raw body); this client does not
parse or normalize Binance payloads.

Usage:
    client = BinanceAPIClient(upstream)
    response = await client.get_open_interest("ETHUSDT")
"""

from typing import Optional
from core.logging import get_logger
from core.upstream import UpstreamClient, UpstreamResponse, UpstreamTarget


DEFAULT_SYMBOL = "BTCUSDT"
DEFAULT_FUNDING_LIMIT = "100"


class BinanceAPIClient:
    """
    Binance Futures request builder.

    Attributes:
        BASE_URL: Binance Futures API base URL
        upstream: Shared UpstreamClient performing the HTTP call

    Notes:
        - Empty or missing parameters fall back to the documented defaults
        - Values are forwarded as given (no case folding, no range checks)
    """

    BASE_URL = "https://fapi.binance.com"
    FUNDING_RATE_PATH = "/fapi/v1/fundingRate"
    OPEN_INTEREST_PATH = "/fapi/v1/openInterest"

    def __init__(self, upstream: UpstreamClient):
        self.upstream = upstream
        self.logger = get_logger(__name__)

    def funding_rate_target(self, symbol: Optional[str] = None, limit: Optional[str] = None) -> UpstreamTarget:
        return UpstreamTarget(
            url=f"{self.BASE_URL}{self.FUNDING_RATE_PATH}",
            params=[
                ("symbol", symbol or DEFAULT_SYMBOL),
                ("limit", limit or DEFAULT_FUNDING_LIMIT),
            ],
            upstream="binance",
        )

    def open_interest_target(self, symbol: Optional[str] = None) -> UpstreamTarget:
        return UpstreamTarget(
            url=f"{self.BASE_URL}{self.OPEN_INTEREST_PATH}",
            params=[("symbol", symbol or DEFAULT_SYMBOL)],
            upstream="binance",
        )

    async def get_funding_rate(self, symbol: Optional[str] = None, limit: Optional[str] = None) -> UpstreamResponse:
        """
        Fetch funding rate history.

        Args:
            symbol: Trading pair (default BTCUSDT)
            limit: Number of records (default 100)

        Raises:
            UpstreamError: If Binance could not be reached

        Binance Endpoint:
            GET /fapi/v1/fundingRate?symbol=BTCUSDT&limit=100
        """
        target = self.funding_rate_target(symbol, limit)
        self.logger.info(f"Fetching funding rate: {dict(target.params)}")
        return await self.upstream.get(target)

    async def get_open_interest(self, symbol: Optional[str] = None) -> UpstreamResponse:
        """
        Fetch current open interest.

        Binance Endpoint:
            GET /fapi/v1/openInterest?symbol=BTCUSDT

        Response Format:
            {
              "openInterest": "10659.509",
              "symbol": "BTCUSDT",
              "time": 1589437530011
            }
        """
        target = self.open_interest_target(symbol)
        self.logger.info(f"Fetching open interest: {dict(target.params)}")
        return await self.upstream.get(target)
