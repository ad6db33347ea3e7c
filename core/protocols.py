"""Shared protocol definitions."""

from typing import Protocol


class RequestLogger(Protocol):
    """Protocol for request logging (Dashboard or plain console)."""

    def log_decision(self, hostname: str | None, *, allowed: bool, reason: str) -> None: ...
    def log_forwarded(self, method: str, url: str, status: int) -> None: ...
    def log_error(self, route: str, status: int, message: str) -> None: ...
