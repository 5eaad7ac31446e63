"""
Shared fixtures for the proxy test suite.

Apps are built in-process with create_app() and driven through
httpx.ASGITransport, so no server or network is involved. Settings are
constructed explicitly (no .env) to keep tests independent of the host.
"""

from contextlib import asynccontextmanager

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.main import create_app
from core.config import Settings
from core.rate_limiter import RateLimitWindow


def make_settings(**overrides) -> Settings:
    """Settings with a generous quota and auth off unless overridden."""
    values = {
        "api_key": "",
        "allowed_origin": "*",
        "allowed_methods": "GET",
        "rate_limit": "1000/second",
        "rate_limit_headers": False,
        "request_timeout": 30,
        "log_level": "INFO",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@asynccontextmanager
async def proxy_client(app):
    """AsyncClient bound to an app; closes the app's upstream client afterwards."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://proxy.test") as client:
        yield client
    await app.state.upstream.aclose()


class FakeLimiter:
    """Limiter stand-in that admits or rejects on command and records callers."""

    def __init__(self, allowed: bool = True):
        self.allowed = allowed
        self.callers = []

    def admit(self, caller_key: str) -> bool:
        self.callers.append(caller_key)
        return self.allowed

    def window(self, caller_key: str) -> RateLimitWindow:
        return RateLimitWindow(limit=100, remaining=0 if not self.allowed else 99, reset_after=900)

    def reset(self) -> None:
        self.callers.clear()


@pytest.fixture
def settings():
    return make_settings()


@pytest_asyncio.fixture
async def client(settings):
    """Client for an app with default test settings (no auth)."""
    async with proxy_client(create_app(settings)) as ac:
        yield ac


@pytest_asyncio.fixture
async def auth_client():
    """Client for an app with API_KEY=secret-key."""
    async with proxy_client(create_app(make_settings(api_key="secret-key"))) as ac:
        yield ac
