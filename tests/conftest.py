from collections.abc import Callable

import httpx
import pytest
from fastapi.testclient import TestClient

from app import create_app
from core.config import Config, ForwardSettings


class RecordingLogger:
    """Collects logger calls for assertions."""

    def __init__(self):
        self.decisions: list[tuple[str | None, bool, str]] = []
        self.forwarded: list[tuple[str, str, int]] = []
        self.errors: list[tuple[str, int, str]] = []

    def log_decision(self, hostname, *, allowed, reason):
        self.decisions.append((hostname, allowed, reason))

    def log_forwarded(self, method, url, status):
        self.forwarded.append((method, url, status))

    def log_error(self, route, status, message):
        self.errors.append((route, status, message))


@pytest.fixture
def logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def upstream_requests() -> list[httpx.Request]:
    return []


@pytest.fixture
def make_client(logger, upstream_requests):
    """Build a TestClient whose upstream calls go to ``handler``."""
    clients: list[TestClient] = []

    def factory(
        handler: Callable[[httpx.Request], httpx.Response],
        timeout: float = 15.0,
    ) -> TestClient:
        def recording_handler(request: httpx.Request):
            upstream_requests.append(request)
            return handler(request)

        config = Config(forward=ForwardSettings(timeout=timeout))
        app = create_app(config, logger, transport=httpx.MockTransport(recording_handler))
        client = TestClient(app)
        client.__enter__()
        clients.append(client)
        return client

    yield factory

    for client in clients:
        client.__exit__(None, None, None)
