"""
Proxy Routes

REST Endpoints:
    - GET /health                         - Liveness probe (never authenticated)
    - GET /proxy/binance/funding-rate     - Binance funding rate history
    - GET /proxy/binance/open-interest    - Binance open interest
    - GET /proxy/bybit/funding-rate       - Bybit funding rate history
    - GET /api/binance/fundingRate        - Alias of /proxy/binance/funding-rate
    - GET /api/binance/openInterest       - Alias of /proxy/binance/open-interest
    - GET /api/forward?url=...            - Relay to an arbitrary URL

Upstream replies are relayed with their exact status and body. Every handler
returns a response even when the upstream call or the handler itself fails.
"""

from typing import Awaitable, Callable, Optional

from fastapi import APIRouter, Query, Request, Response

from core.errors import URL_REQUIRED, error_response, internal_error, proxy_error, relay
from core.logging import logger
from core.schemas import HealthResponse
from core.upstream import UpstreamClient, UpstreamError, UpstreamResponse, UpstreamTarget
from exchanges.binance import BinanceAPIClient
from exchanges.bybit import BybitAPIClient


router = APIRouter()

BINANCE_ERROR = "Failed to fetch from Binance API"
BYBIT_ERROR = "Failed to fetch from Bybit API"
FORWARD_ERROR = "Failed to forward request"


def get_upstream(request: Request) -> UpstreamClient:
    return request.app.state.upstream


async def _proxy(error_message: str, fetch: Callable[[], Awaitable[UpstreamResponse]]) -> Response:
    """Run an upstream call and translate its outcome into a response."""
    try:
        return relay(await fetch())
    except UpstreamError as e:
        logger.error(f"{error_message}: {e.message}")
        return proxy_error(error_message, e)
    except Exception as e:
        logger.exception(f"Unexpected proxy error: {e}")
        return internal_error(e)


# ============================================
# System Endpoints
# ============================================

@router.get("/health", response_model=HealthResponse, tags=["System"])
async def health_check():
    """Liveness probe. Does not touch any upstream."""
    return HealthResponse(status="ok")


# ============================================
# Binance Endpoints
# ============================================

@router.get("/proxy/binance/funding-rate", tags=["Binance Proxy"])
@router.get("/api/binance/fundingRate", tags=["Binance Proxy"])
async def binance_funding_rate(
    request: Request,
    symbol: Optional[str] = Query(default=None, description="Trading pair (default BTCUSDT)"),
    limit: Optional[str] = Query(default=None, description="Number of records (default 100)")
):
    """
    Relay Binance funding rate history.

    Example:
        GET /proxy/binance/funding-rate?symbol=ETHUSDT&limit=10
    """
    client = BinanceAPIClient(get_upstream(request))
    return await _proxy(BINANCE_ERROR, lambda: client.get_funding_rate(symbol, limit))


@router.get("/proxy/binance/open-interest", tags=["Binance Proxy"])
@router.get("/api/binance/openInterest", tags=["Binance Proxy"])
async def binance_open_interest(
    request: Request,
    symbol: Optional[str] = Query(default=None, description="Trading pair (default BTCUSDT)")
):
    """
    Relay Binance open interest.

    Example:
        GET /proxy/binance/open-interest?symbol=ETHUSDT
    """
    client = BinanceAPIClient(get_upstream(request))
    return await _proxy(BINANCE_ERROR, lambda: client.get_open_interest(symbol))


# ============================================
# Bybit Endpoints
# ============================================

@router.get("/proxy/bybit/funding-rate", tags=["Bybit Proxy"])
async def bybit_funding_rate(
    request: Request,
    symbol: Optional[str] = Query(default=None, description="Trading pair (default BTCUSDT)"),
    limit: Optional[str] = Query(default=None, description="Number of records (default 50)")
):
    """Relay Bybit linear funding rate history."""
    client = BybitAPIClient(get_upstream(request))
    return await _proxy(BYBIT_ERROR, lambda: client.get_funding_rate(symbol, limit))


# ============================================
# Generic Forwarding
# ============================================

@router.get("/api/forward", tags=["Forward"])
async def forward(
    request: Request,
    url: Optional[str] = Query(default=None, description="Absolute upstream URL (required)")
):
    """
    Relay a GET to an arbitrary URL.

    All query parameters other than `url` are passed through verbatim,
    repeated keys included.

    Example:
        GET /api/forward?url=https://api.bybit.com/v5/market/tickers&category=linear
    """
    if not url:
        return error_response(400, URL_REQUIRED)

    params = [(key, value) for key, value in request.query_params.multi_items() if key != "url"]
    target = UpstreamTarget(url=url, params=params, upstream="forward")
    upstream = get_upstream(request)
    return await _proxy(FORWARD_ERROR, lambda: upstream.get(target))
