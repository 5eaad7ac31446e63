"""
Binance Futures (USD-M) proxy targets.

Endpoints Used:
    - GET /fapi/v1/fundingRate
    - GET /fapi/v1/openInterest
"""

from .api_client import BinanceAPIClient

__all__ = ["BinanceAPIClient"]
