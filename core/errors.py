"""
Response / Error Translation

Turns upstream outcomes into outbound responses:
    - relay():        upstream replied (any status) -> same status, same bytes
    - proxy_error():  no usable reply -> captured status or 500 with
                      {"error": <proxy message>, "details": <cause>}
    - error_response(): local failures (400/401/404/429) -> {"error": <message>}

The "details" field only ever appears on proxy-side failures, which keeps
them distinguishable from a relayed upstream error body.
"""

from fastapi import Response
from fastapi.responses import JSONResponse

from core.schemas import ErrorResponse
from core.upstream import UpstreamError, UpstreamResponse


NOT_FOUND = "Not found"
UNAUTHORIZED = "Unauthorized"
TOO_MANY_REQUESTS = "Too many requests, please try again later"
URL_REQUIRED = "URL parameter is required"
INTERNAL_ERROR = "Internal server error"


def relay(upstream: UpstreamResponse) -> Response:
    """Pass the upstream reply through unchanged."""
    # media_type= would append a charset to text/* types
    headers = {"content-type": upstream.media_type} if upstream.media_type else None
    return Response(
        content=upstream.content,
        status_code=upstream.status_code,
        headers=headers,
    )


def error_response(status_code: int, message: str, headers: dict = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(exclude_none=True),
        headers=headers,
    )


def proxy_error(message: str, exc: UpstreamError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code or 500,
        content=ErrorResponse(error=message, details=exc.message).model_dump(),
    )


def internal_error(exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(error=INTERNAL_ERROR, details=str(exc)).model_dump(),
    )
