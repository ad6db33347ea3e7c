"""Map proxy results to inbound HTTP responses.

GET wraps upstream data in an envelope; POST passes the upstream status and
body through as-is. Both shapes are kept for compatibility with existing
clients.
"""

from fastapi import Response
from fastapi.responses import JSONResponse

from core.request_types import (
    InternalFailure,
    ProxyResult,
    Rejected,
    Success,
    UpstreamFailure,
)


def render_get(result: ProxyResult, target_url: str | None) -> Response:
    """Render the result of a proxied GET."""
    if isinstance(result, Success):
        return JSONResponse({"success": True, "data": result.body, "proxiedFrom": target_url})
    if isinstance(result, UpstreamFailure):
        return _target_error(result)
    return _render_failure(result)


def render_post(result: ProxyResult) -> Response:
    """Render the result of a proxied POST."""
    if isinstance(result, Success):
        return JSONResponse(result.body, status_code=result.status_code)
    if isinstance(result, UpstreamFailure):
        if forbids_body(result.status_code):
            return _target_error(result)
        return Response(
            content=result.content,
            status_code=result.status_code,
            media_type=result.media_type,
        )
    return _render_failure(result)


def internal_error(message: str) -> JSONResponse:
    return JSONResponse(
        {"error": "Internal server error", "message": message},
        status_code=500,
    )


def forbids_body(status_code: int) -> bool:
    """Statuses that cannot carry a response body."""
    return status_code < 200 or status_code in (204, 304)


def _target_error(result: UpstreamFailure) -> JSONResponse:
    # Body-less upstream statuses are reported as a bad gateway.
    status_code = 502 if forbids_body(result.status_code) else result.status_code
    return JSONResponse(
        {
            "error": "Target server error",
            "status": result.status_code,
            "statusText": result.status_text,
        },
        status_code=status_code,
    )


def _render_failure(result: Rejected | InternalFailure) -> Response:
    if isinstance(result, Rejected):
        return JSONResponse(result.error.to_dict(), status_code=result.error.status_code)
    return internal_error(result.message)
