"""Header construction for upstream requests."""


class HeaderBuilder:
    """Build the fixed outbound header sets.

    Inbound headers are never passed through.
    """

    def __init__(self, user_agent: str) -> None:
        self._user_agent = user_agent

    def build_get_headers(self) -> dict[str, str]:
        return {
            "User-Agent": self._user_agent,
            "Accept": "application/json",
        }

    def build_post_headers(self) -> dict[str, str]:
        return {
            "User-Agent": self._user_agent,
            "Content-Type": "application/json",
        }
