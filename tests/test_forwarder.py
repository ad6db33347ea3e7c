import asyncio
import json

import httpx
import pytest

from core.headers import HeaderBuilder
from core.request_types import (
    InternalFailure,
    ProxyRequest,
    Success,
    UpstreamFailure,
)
from services.forwarder import Forwarder

URL = "https://jsonplaceholder.typicode.com/posts/1"


def make_forwarder(handler, logger, timeout=15.0):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return Forwarder(client, HeaderBuilder("Render-Proxy/1.0"), logger, timeout=timeout)


@pytest.mark.asyncio
async def test_get_sends_fixed_headers_and_parses_json(logger):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"id": 1})

    result = await make_forwarder(handler, logger).forward(ProxyRequest(URL, "GET"))

    assert result == Success(status_code=200, body={"id": 1})
    assert seen[0].method == "GET"
    assert seen[0].headers["User-Agent"] == "Render-Proxy/1.0"
    assert seen[0].headers["Accept"] == "application/json"
    assert seen[0].content == b""
    assert logger.forwarded == [("GET", URL, 200)]


@pytest.mark.asyncio
async def test_inbound_headers_are_not_forwarded(logger):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={})

    request = ProxyRequest(URL, "GET", headers={"authorization": "Bearer secret"})
    await make_forwarder(handler, logger).forward(request)

    assert "authorization" not in seen[0].headers


@pytest.mark.asyncio
async def test_post_sends_body_verbatim(logger):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(201, json=json.loads(request.content))

    result = await make_forwarder(handler, logger).forward(
        ProxyRequest(URL, "POST", body=b'{"a":1}')
    )

    assert result == Success(status_code=201, body={"a": 1})
    assert seen[0].content == b'{"a":1}'
    assert seen[0].headers["Content-Type"] == "application/json"


@pytest.mark.asyncio
async def test_non_2xx_is_upstream_failure(logger):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"message": "Not Found"})

    result = await make_forwarder(handler, logger).forward(ProxyRequest(URL, "GET"))

    assert isinstance(result, UpstreamFailure)
    assert result.status_code == 404
    assert result.status_text == "Not Found"
    assert json.loads(result.content) == {"message": "Not Found"}
    assert logger.errors == [("GET /proxy", 404, "Not Found")]


@pytest.mark.asyncio
async def test_redirect_is_not_followed(logger):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(302, headers={"Location": "https://evil.com/"})

    result = await make_forwarder(handler, logger).forward(ProxyRequest(URL, "GET"))

    assert isinstance(result, UpstreamFailure)
    assert result.status_code == 302


@pytest.mark.asyncio
async def test_invalid_json_is_internal_failure(logger):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>nope</html>")

    result = await make_forwarder(handler, logger).forward(ProxyRequest(URL, "GET"))

    assert isinstance(result, InternalFailure)
    assert "invalid json" in result.message


@pytest.mark.asyncio
async def test_connection_error_is_internal_failure(logger):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    result = await make_forwarder(handler, logger).forward(ProxyRequest(URL, "GET"))

    assert result == InternalFailure("Connection refused")
    assert logger.errors[0][1] == 500


@pytest.mark.asyncio
async def test_transport_timeout_is_internal_failure(logger):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    result = await make_forwarder(handler, logger).forward(ProxyRequest(URL, "GET"))

    assert result == InternalFailure(f"network timeout at: {URL}")


@pytest.mark.asyncio
async def test_wall_clock_timeout_is_internal_failure(logger):
    async def handler(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(5)
        return httpx.Response(200, json={})

    forwarder = make_forwarder(handler, logger, timeout=0.05)
    result = await asyncio.wait_for(forwarder.forward(ProxyRequest(URL, "GET")), timeout=2)

    assert result == InternalFailure(f"network timeout at: {URL}")
