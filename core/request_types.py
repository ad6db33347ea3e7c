"""Shared request and result data types."""

from dataclasses import dataclass, field
from typing import Any, Literal

from core.exceptions import URLValidationError

Method = Literal["GET", "POST"]


@dataclass(frozen=True)
class ProxyRequest:
    """A single inbound request to relay."""

    target_url: str
    method: Method
    body: bytes | None = None
    headers: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Success:
    """Upstream answered 2xx with a JSON body."""

    status_code: int
    body: Any


@dataclass(frozen=True)
class UpstreamFailure:
    """Upstream answered with a non-2xx status."""

    status_code: int
    status_text: str
    content: bytes = b""
    media_type: str = "application/json"


@dataclass(frozen=True)
class Rejected:
    """Target URL failed validation; nothing was sent upstream."""

    error: URLValidationError


@dataclass(frozen=True)
class InternalFailure:
    """Network failure, timeout or unreadable upstream body."""

    message: str


ProxyResult = Success | UpstreamFailure | Rejected | InternalFailure
