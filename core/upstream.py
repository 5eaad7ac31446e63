"""
Upstream HTTP Client

Performs the outbound call for every proxied route. A single pooled
httpx.AsyncClient is shared across requests and closed at shutdown.

Contract:
    - Any upstream reply (2xx or not) comes back as an UpstreamResponse
      carrying the exact status, body bytes and content type.
    - No reply at all (timeout, DNS failure, refused connection, bad URL)
      raises UpstreamError without a status.
    - A reply whose status line arrived but whose body could not be read
      raises UpstreamError carrying that status.

There are no retries: a single failure is surfaced immediately.

Usage:
    upstream = UpstreamClient(timeout=30)
    target = UpstreamTarget(url="https://fapi.binance.com/fapi/v1/openInterest",
                            params=[("symbol", "BTCUSDT")])
    response = await upstream.get(target)
"""

import asyncio
import time
from typing import List, Optional, Tuple

import httpx
from pydantic import BaseModel, Field

from core.logging import get_logger, log_upstream_request, log_upstream_response


class UpstreamTarget(BaseModel):
    """
    Where to send an outbound request.

    Params are an ordered list of (key, value) pairs so that repeated
    passthrough keys (e.g. ?id=1&id=2) survive forwarding.
    """

    url: str = Field(..., description="Absolute upstream URL")
    params: List[Tuple[str, str]] = Field(default_factory=list, description="Query parameters")
    upstream: str = Field(default="forward", description="Label used in logs", examples=["binance", "bybit"])


class UpstreamResponse(BaseModel):
    """Status, raw body and content type exactly as the upstream sent them."""

    status_code: int
    content: bytes = b""
    media_type: Optional[str] = None


class UpstreamError(Exception):
    """
    The upstream call produced no usable reply.

    Attributes:
        message: Human-readable cause (e.g. "timeout of 30s exceeded")
        status_code: Upstream status when one was captured, otherwise None
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _describe(exc: Exception) -> str:
    # httpx timeouts often stringify to ""
    return str(exc) or exc.__class__.__name__


class UpstreamClient:
    """
    Async wrapper around a shared httpx.AsyncClient.

    Args:
        timeout: Bound on the whole call (connect + headers + body), in seconds
        client: Optional preconfigured httpx.AsyncClient
    """

    def __init__(self, timeout: float = 30.0, client: Optional[httpx.AsyncClient] = None):
        self.timeout = timeout
        self.client = client or httpx.AsyncClient(timeout=httpx.Timeout(timeout))
        self.logger = get_logger(__name__)

    async def get(self, target: UpstreamTarget) -> UpstreamResponse:
        """
        Issue GET target.url with target.params.

        Raises:
            UpstreamError: when no complete reply was obtained in time
        """
        log_upstream_request(target.upstream, target.url, target.params)
        started = time.perf_counter()

        try:
            response = await asyncio.wait_for(self._send(target), timeout=self.timeout)
        except asyncio.TimeoutError:
            raise UpstreamError(f"timeout of {self.timeout:g}s exceeded") from None

        log_upstream_response(
            target.upstream, target.url, response.status_code, time.perf_counter() - started
        )
        return response

    @staticmethod
    def _merged_url(target: UpstreamTarget) -> httpx.URL:
        """Append target.params after any query string already in target.url."""
        url = httpx.URL(target.url)
        if not target.params:
            return url
        params = list(url.params.multi_items()) + list(target.params)
        return url.copy_with(params=httpx.QueryParams(params))

    async def _send(self, target: UpstreamTarget) -> UpstreamResponse:
        try:
            request = self.client.build_request("GET", self._merged_url(target))
            response = await self.client.send(request, stream=True)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise UpstreamError(_describe(e)) from e

        try:
            content = await response.aread()
        except httpx.HTTPError as e:
            raise UpstreamError(_describe(e), status_code=response.status_code) from e
        finally:
            await response.aclose()

        return UpstreamResponse(
            status_code=response.status_code,
            content=content,
            media_type=response.headers.get("content-type"),
        )

    async def aclose(self) -> None:
        await self.client.aclose()
        self.logger.debug("Upstream HTTP client closed")
