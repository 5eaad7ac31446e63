"""
Bybit derivatives proxy targets.

Endpoints Used:
    - GET /derivatives/v3/public/funding/history-funding-rate
"""

from .api_client import BybitAPIClient

__all__ = ["BybitAPIClient"]
