"""Configuration models and loading."""

import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from core.exceptions import ConfigurationError

# Only these hosts can be reached through the proxy.
DEFAULT_ALLOWED_DOMAINS: tuple[str, ...] = (
    "jsonplaceholder.typicode.com",
    "api.github.com",
    "api.example.com",
)


class ProxySettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    host: str = "0.0.0.0"
    port: int = Field(default=3000, ge=1, le=65535)


class ForwardSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    timeout: float = Field(default=15.0, gt=0)
    user_agent: str = "Render-Proxy/1.0"
    max_body_size: int = 100 * 1024


class Config(BaseModel):
    model_config = ConfigDict(frozen=True)

    proxy: ProxySettings = Field(default_factory=ProxySettings)
    forward: ForwardSettings = Field(default_factory=ForwardSettings)
    allowed_domains: tuple[str, ...] = DEFAULT_ALLOWED_DOMAINS


def load_config(environ: Mapping[str, str] | None = None) -> Config:
    """Build configuration from the environment and compiled-in defaults.

    Only ``PORT`` and ``HOST`` are read from the environment. The allow-list
    is fixed at build time.
    """
    environ = os.environ if environ is None else environ
    proxy: dict[str, str] = {}
    if environ.get("PORT"):
        proxy["port"] = environ["PORT"]
    if environ.get("HOST"):
        proxy["host"] = environ["HOST"]

    try:
        return Config(proxy=ProxySettings.model_validate(proxy))
    except ValidationError as e:
        raise ConfigurationError(f"Invalid proxy settings: {e}") from e
