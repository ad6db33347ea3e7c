"""Target URL validation against the static domain allow-list."""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from urllib.parse import urlsplit

from core.exceptions import DomainNotAllowed, MalformedURL, MissingURLParameter
from core.protocols import RequestLogger

ALLOWED_SCHEMES = ("http", "https")


@dataclass(frozen=True)
class AllowList:
    """Ordered set of hostnames the proxy may reach.

    Matching is literal string equality: no wildcards and no subdomains.
    """

    domains: tuple[str, ...]

    @classmethod
    def of(cls, domains: Iterable[str]) -> "AllowList":
        return cls(tuple(dict.fromkeys(domains)))

    def __contains__(self, hostname: object) -> bool:
        return hostname in self.domains

    def __iter__(self) -> Iterator[str]:
        return iter(self.domains)

    def __len__(self) -> int:
        return len(self.domains)


class DomainValidator:
    """Admit or reject target URLs."""

    def __init__(self, allow_list: AllowList, logger: RequestLogger) -> None:
        self._allow_list = allow_list
        self._logger = logger

    @property
    def allow_list(self) -> AllowList:
        return self._allow_list

    def validate(self, raw_url: str | None) -> str:
        """Return the hostname of ``raw_url`` if it may be proxied.

        Raises:
            MissingURLParameter: ``raw_url`` is absent or empty.
            MalformedURL: ``raw_url`` is not an absolute http(s) URL.
            DomainNotAllowed: the hostname is not on the allow-list.
        """
        if not raw_url:
            self._logger.log_decision(None, allowed=False, reason="Missing URL parameter")
            raise MissingURLParameter()

        hostname = parse_hostname(raw_url)
        if hostname is None:
            self._logger.log_decision(None, allowed=False, reason=f"Invalid URL format: {raw_url}")
            raise MalformedURL(raw_url)

        if hostname not in self._allow_list:
            self._logger.log_decision(hostname, allowed=False, reason="Domain not allowed")
            raise DomainNotAllowed(hostname, self._allow_list.domains)

        self._logger.log_decision(hostname, allowed=True, reason="Domain allowed")
        return hostname


def parse_hostname(raw_url: str) -> str | None:
    """Extract the hostname from an absolute http(s) URL, or None."""
    if raw_url != raw_url.strip() or _has_control_chars(raw_url):
        return None
    try:
        parts = urlsplit(raw_url)
        # Accessing .port validates it.
        _ = parts.port
    except ValueError:
        return None

    if parts.scheme not in ALLOWED_SCHEMES or not parts.netloc:
        return None
    hostname = parts.hostname
    if not hostname or any(ch.isspace() for ch in hostname):
        return None
    return hostname


def _has_control_chars(value: str) -> bool:
    # urlsplit drops tab/CR/LF silently; the HTTP client rejects them.
    return any(ord(ch) < 0x20 or ord(ch) == 0x7F for ch in value)
