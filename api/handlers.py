"""FastAPI route handlers."""

import json
from datetime import UTC, datetime
from json import JSONDecodeError
from typing import Any

from fastapi import Request, Response
from fastapi.responses import JSONResponse

from api.responses import render_get, render_post
from core.config import Config
from core.exceptions import InvalidJSON, RequestTooLarge, URLValidationError
from core.request_types import InternalFailure, Method, ProxyRequest, ProxyResult, Rejected

PROXY_USAGE = "/proxy?url=YOUR_API_URL"
PROXY_EXAMPLE = "/proxy?url=https://jsonplaceholder.typicode.com/posts/1"


def handle_health() -> dict[str, str]:
    """Liveness check; never fails."""
    return {
        "status": "OK",
        "message": "Proxy server is running",
        "timestamp": _utc_timestamp(),
        "usage": f"Use {PROXY_USAGE}",
    }


def handle_root() -> dict[str, Any]:
    """List the available endpoints."""
    return {
        "message": "Render Proxy Server is working! 🎉",
        "endpoints": {
            "health": "/health",
            "proxy": PROXY_USAGE,
            "example": PROXY_EXAMPLE,
        },
        "status": "active",
    }


async def handle_proxy_get(request: Request) -> Response:
    """Validate the ``url`` parameter and relay a GET."""
    target_url = request.query_params.get("url")
    result = await _proxy(request, "GET", target_url, None)
    return render_get(result, target_url)


async def handle_proxy_post(request: Request, config: Config) -> Response:
    """Validate the ``url`` parameter and relay the JSON body as a POST."""
    try:
        body = await _read_json_body(request, config.forward.max_body_size)
    except RequestTooLarge:
        return JSONResponse({"error": "Request body too large"}, status_code=413)
    except InvalidJSON as e:
        return JSONResponse({"error": "Invalid JSON", "message": str(e)}, status_code=400)

    result = await _proxy(request, "POST", request.query_params.get("url"), body)
    return render_post(result)


async def _proxy(
    request: Request,
    method: Method,
    target_url: str | None,
    body: bytes | None,
) -> ProxyResult:
    try:
        request.app.state.validator.validate(target_url)
        return await request.app.state.forwarder.forward(
            ProxyRequest(target_url, method, body, dict(request.headers))
        )
    except URLValidationError as e:
        return Rejected(e)
    except Exception as e:
        return InternalFailure(str(e) or type(e).__name__)


async def _read_json_body(request: Request, max_size: int) -> bytes:
    """Parse the inbound body as JSON and re-serialize it compactly.

    Only ``application/json`` bodies are read, and only objects or arrays
    are accepted. Anything else, including an empty body, is sent upstream
    as ``{}``.
    """
    media_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    if media_type != "application/json":
        return b"{}"

    raw_body = await request.body()
    if len(raw_body) > max_size:
        raise RequestTooLarge(f"Request body exceeds {max_size} bytes")
    if not raw_body.strip():
        return b"{}"

    try:
        body = json.loads(raw_body)
    except (JSONDecodeError, UnicodeDecodeError) as e:
        raise InvalidJSON(str(e)) from e
    if not isinstance(body, (dict, list)):
        raise InvalidJSON("JSON body must be an object or array")
    return json.dumps(body, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def _utc_timestamp() -> str:
    now = datetime.now(UTC)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"
