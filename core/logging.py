"""
Unified Logging Configuration

This module sets up a centralized logging system for the proxy.
All modules should import and use the logger from this module instead of
using print() statements.

Usage:
    from core.logging import logger

    logger.info("General informational messages")
    logger.error("Error messages for serious problems")

Configuration:
    Log level is controlled by the LOG_LEVEL setting in .env file.
"""

import logging
import sys
from typing import Any


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s %(message)s"


def setup_logging(log_level: str = "INFO") -> logging.Logger:
    """
    Configure and return the application logger.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Returns:
        logging.Logger: Configured logger instance

    Example:
        >>> logger = setup_logging(log_level="DEBUG")
        >>> logger.info("Proxy started")
        2024-01-01 12:00:00 [INFO] cryptoproxy Proxy started
    """
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True  # Override any existing configuration
    )

    logger = logging.getLogger("cryptoproxy")
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    return logger


# ============================================
# Initialize Logger with Settings
# ============================================

try:
    from core.config import settings
    log_level = settings.log_level
except ImportError:
    log_level = "INFO"

logger = setup_logging(log_level=log_level)


# ============================================
# Convenience Functions
# ============================================

def get_logger(name: str) -> logging.Logger:
    """
    Get a child logger for a specific module.

    Example:
        from core.logging import get_logger
        logger = get_logger(__name__)  # "cryptoproxy.core.upstream"
    """
    return logging.getLogger(f"cryptoproxy.{name}")


# ============================================
# Log Helper Functions
# ============================================

def log_upstream_request(upstream: str, url: str, params: Any = None) -> None:
    """
    Log an outbound upstream request with consistent formatting.

    Example:
        >>> log_upstream_request("binance", "https://fapi.binance.com/fapi/v1/openInterest", [("symbol", "BTCUSDT")])
        [DEBUG] Upstream Request: binance https://fapi.binance.com/fapi/v1/openInterest | Params: [('symbol', 'BTCUSDT')]
    """
    if params:
        logger.debug(f"Upstream Request: {upstream} {url} | Params: {params}")
    else:
        logger.debug(f"Upstream Request: {upstream} {url}")


def log_upstream_response(upstream: str, url: str, status: int, response_time: float = None) -> None:
    """
    Log an upstream response with status and timing information.

    Example:
        >>> log_upstream_response("bybit", "https://api.bybit.com/...", 200, 0.342)
        [DEBUG] Upstream Response: bybit https://api.bybit.com/... | Status: 200 | Time: 0.342s
    """
    time_str = f" | Time: {response_time:.3f}s" if response_time else ""
    logger.debug(f"Upstream Response: {upstream} {url} | Status: {status}{time_str}")


logger.debug("Logging system initialized")
