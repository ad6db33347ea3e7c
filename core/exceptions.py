"""Custom exception hierarchy for the proxy."""

from typing import Any


class ProxyError(Exception):
    """Base exception for all proxy errors."""


class ConfigurationError(ProxyError):
    """Raised when configuration is missing or invalid."""


class URLValidationError(ProxyError):
    """Raised when a target URL is rejected before forwarding.

    Attributes:
        status_code: HTTP status returned to the caller
        kind: Short machine-readable rejection reason
    """

    status_code = 400
    kind = "invalid"

    def to_dict(self) -> dict[str, Any]:
        return {"error": str(self)}


class MissingURLParameter(URLValidationError):
    """The ``url`` query parameter is absent or empty."""

    kind = "missing_parameter"

    def __init__(self) -> None:
        super().__init__("Missing URL parameter")

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": str(self),
            "example": "/proxy?url=https://api.example.com/data",
        }


class MalformedURL(URLValidationError):
    """The target is not an absolute http(s) URL with a hostname."""

    kind = "malformed_url"

    def __init__(self, raw_url: str) -> None:
        super().__init__("Invalid URL format")
        self.raw_url = raw_url

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": str(self),
            "message": "Please provide a valid URL with http:// or https://",
        }


class DomainNotAllowed(URLValidationError):
    """The target hostname is not on the allow-list.

    Attributes:
        requested_host: Hostname parsed from the target URL
        allowed: Every hostname on the allow-list
    """

    status_code = 403
    kind = "domain_not_allowed"

    def __init__(self, requested_host: str, allowed: tuple[str, ...]) -> None:
        super().__init__("Domain not allowed")
        self.requested_host = requested_host
        self.allowed = allowed

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": str(self),
            "requested": self.requested_host,
            "allowed": list(self.allowed),
            "message": "Contact administrator to add this domain to allowed list",
        }


class RequestTooLarge(ProxyError):
    """Request body exceeds size limit."""


class InvalidJSON(ProxyError):
    """Request body is not valid JSON."""
