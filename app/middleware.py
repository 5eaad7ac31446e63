"""
Ingress Middleware

Every inbound request passes through these stages before reaching a route:

    SecurityHeaders -> CORS -> RateLimit -> APIKey (only if API_KEY is set)

The stage list is assembled once at startup by build_middleware() from the
settings, so an unconfigured stage is simply absent from the stack.
"""

import hmac
from typing import Iterable, List

from fastapi import Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware import Middleware
from starlette.middleware.base import BaseHTTPMiddleware

from core.config import Settings
from core.errors import TOO_MANY_REQUESTS, UNAUTHORIZED, error_response
from core.logging import get_logger
from core.rate_limiter import RateLimiter

logger = get_logger(__name__)


SECURITY_HEADERS = {
    "Content-Security-Policy": "default-src 'self';base-uri 'self';frame-ancestors 'self';object-src 'none'",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Origin-Agent-Cluster": "?1",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Frame-Options": "SAMEORIGIN",
    "X-Permitted-Cross-Domain-Policies": "none",
    "X-XSS-Protection": "0",
}


def client_address(request: Request) -> str:
    """Caller identity used for rate limiting."""
    return request.client.host if request.client else "unknown"


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Attach static hardening headers to every response."""

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Reject callers that have used up their quota with 429.

    When send_headers is on, admitted and rejected responses carry
    RateLimit-Limit / RateLimit-Remaining / RateLimit-Reset, and 429s also
    carry Retry-After.
    """

    def __init__(self, app, limiter: RateLimiter, send_headers: bool = False) -> None:
        super().__init__(app)
        self.limiter = limiter
        self.send_headers = send_headers

    def _headers(self, caller: str) -> dict:
        window = self.limiter.window(caller)
        return {
            "RateLimit-Limit": str(window.limit),
            "RateLimit-Remaining": str(window.remaining),
            "RateLimit-Reset": str(window.reset_after),
        }

    async def dispatch(self, request: Request, call_next):
        caller = client_address(request)

        if not self.limiter.admit(caller):
            logger.warning(f"Rate limit exceeded for {caller} on {request.url.path}")
            headers = None
            if self.send_headers:
                headers = self._headers(caller)
                headers["Retry-After"] = headers["RateLimit-Reset"]
            return error_response(429, TOO_MANY_REQUESTS, headers=headers)

        headers = self._headers(caller) if self.send_headers else {}
        response = await call_next(request)
        response.headers.update(headers)
        return response


class APIKeyMiddleware(BaseHTTPMiddleware):
    """Require the shared API key on every path except the exempt ones."""

    def __init__(
        self,
        app,
        api_key: str,
        header_name: str = "x-api-key",
        exempt_paths: Iterable[str] = ("/health",),
    ) -> None:
        super().__init__(app)
        self.api_key = api_key.encode()
        self.header_name = header_name
        self.exempt_paths = frozenset(exempt_paths)

    async def dispatch(self, request: Request, call_next):
        if request.url.path in self.exempt_paths:
            return await call_next(request)

        supplied = request.headers.get(self.header_name)
        if not supplied or not hmac.compare_digest(supplied.encode(), self.api_key):
            logger.warning(f"Unauthorized request to {request.url.path} from {client_address(request)}")
            return error_response(401, UNAUTHORIZED)

        return await call_next(request)


def build_middleware(config: Settings, limiter: RateLimiter) -> List[Middleware]:
    """
    Assemble the ingress stages, outermost first.

    Security headers wrap everything so 401/429 responses get them too;
    CORS sits outside the limiter and the authenticator so preflights and
    rejections still carry the CORS grant.
    """
    stack = [
        Middleware(SecurityHeadersMiddleware),
        Middleware(
            CORSMiddleware,
            allow_origins=config.allowed_origins_list,
            allow_methods=config.allowed_methods_list,
            allow_headers=["*"],
        ),
        Middleware(RateLimitMiddleware, limiter=limiter, send_headers=config.rate_limit_headers),
    ]

    if config.auth_enabled:
        stack.append(
            Middleware(APIKeyMiddleware, api_key=config.api_key, header_name=config.api_key_header)
        )

    return stack
