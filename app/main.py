"""
FastAPI Application - Crypto Exchange API Proxy

Forwards GET requests to Binance and Bybit public REST APIs (or to any URL via
/api/forward), adding rate limiting, optional API-key auth, CORS restriction
and hardening headers. Upstream status and body are relayed unchanged.

Usage:
    uvicorn app.main:app --host 0.0.0.0 --port 3000

Docs:
    - Swagger: http://localhost:3000/docs
    - ReDoc: http://localhost:3000/redoc
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.middleware import build_middleware
from app.routes import router
from core.config import Settings, settings as default_settings, validate_configuration
from core.errors import NOT_FOUND, error_response
from core.logging import logger
from core.rate_limiter import RateLimiter
from core.upstream import UpstreamClient


def create_app(
    settings: Optional[Settings] = None,
    rate_limiter: Optional[RateLimiter] = None,
    upstream: Optional[UpstreamClient] = None,
) -> FastAPI:
    """
    Build the proxy application.

    Args:
        settings: Configuration (defaults to the global settings)
        rate_limiter: Per-caller limiter (defaults to one built from RATE_LIMIT)
        upstream: Outbound HTTP client (defaults to one using REQUEST_TIMEOUT)

    Configuration is validated before anything is built from it, so a bad
    value fails here with ValueError. The ingress stages are fixed once from
    configuration; the authenticator is only installed when an API key is
    configured.
    """
    config = settings or default_settings
    validate_configuration(config)
    limiter = rate_limiter or RateLimiter(config.rate_limit)
    client = upstream or UpstreamClient(timeout=config.request_timeout)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Handle application startup and shutdown."""
        logger.info("=== Application Starting ===")
        logger.info(f"Crypto API Proxy server running on port {config.port}")

        yield

        logger.info("=== Shutting Down ===")
        try:
            await client.aclose()
        except Exception as e:
            logger.error(f"Shutdown error: {e}")

    app = FastAPI(
        title="Crypto Exchange API Proxy",
        description=(
            "Rate-limited relay for Binance and Bybit public REST APIs.\n\n"
            "## REST Endpoints\n"
            "- `GET /health` - Health check\n"
            "- `GET /proxy/binance/funding-rate` - Binance funding rate history\n"
            "- `GET /proxy/binance/open-interest` - Binance open interest\n"
            "- `GET /proxy/bybit/funding-rate` - Bybit funding rate history\n"
            "- `GET /api/binance/fundingRate` - Binance funding rate history\n"
            "- `GET /api/binance/openInterest` - Binance open interest\n"
            "- `GET /api/forward?url=...` - Relay to an arbitrary URL\n"
        ),
        version="1.0.0",
        lifespan=lifespan,
        middleware=build_middleware(config, limiter),
        docs_url="/docs",
        redoc_url="/redoc"
    )

    app.state.settings = config
    app.state.rate_limiter = limiter
    app.state.upstream = client

    app.include_router(router)

    @app.exception_handler(404)
    async def not_found_handler(request, exc):
        """Handle unmatched routes."""
        return error_response(404, NOT_FOUND)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request, exc):
        """Keep framework-generated errors in the {"error": ...} envelope."""
        return error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))

    return app


app = create_app()
