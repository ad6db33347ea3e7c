"""Relay validated requests to their upstream targets."""

import asyncio

import httpx

from core.headers import HeaderBuilder
from core.protocols import RequestLogger
from core.request_types import (
    InternalFailure,
    ProxyRequest,
    ProxyResult,
    Success,
    UpstreamFailure,
)


class Forwarder:
    """Issue exactly one outbound request per inbound request.

    There are no retries. Every failure is returned as a result, never raised.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        header_builder: HeaderBuilder,
        logger: RequestLogger,
        timeout: float = 15.0,
    ) -> None:
        self._client = client
        self._headers = header_builder
        self._logger = logger
        self._timeout = timeout

    async def forward(self, request: ProxyRequest) -> ProxyResult:
        """Send ``request`` upstream and map the outcome to a ProxyResult."""
        route = f"{request.method} /proxy"
        try:
            response = await asyncio.wait_for(self._send(request), timeout=self._timeout)
        except (TimeoutError, httpx.TimeoutException):
            message = f"network timeout at: {request.target_url}"
            self._logger.log_error(route, 500, message)
            return InternalFailure(message)
        except (httpx.RequestError, httpx.InvalidURL) as e:
            message = str(e) or type(e).__name__
            self._logger.log_error(route, 500, message)
            return InternalFailure(message)

        self._logger.log_forwarded(request.method, request.target_url, response.status_code)

        if not response.is_success:
            self._logger.log_error(route, response.status_code, response.reason_phrase)
            return UpstreamFailure(
                status_code=response.status_code,
                status_text=response.reason_phrase,
                content=response.content,
                media_type=response.headers.get("content-type", "application/json"),
            )

        try:
            data = response.json()
        except ValueError as e:
            message = f"invalid json response body at {request.target_url}: {e}"
            self._logger.log_error(route, 500, message)
            return InternalFailure(message)

        return Success(status_code=response.status_code, body=data)

    async def _send(self, request: ProxyRequest) -> httpx.Response:
        if request.method == "POST":
            return await self._client.post(
                request.target_url,
                content=request.body or b"",
                headers=self._headers.build_post_headers(),
            )
        return await self._client.get(
            request.target_url,
            headers=self._headers.build_get_headers(),
        )
