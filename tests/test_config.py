import pytest
from pydantic import ValidationError

from core.config import DEFAULT_ALLOWED_DOMAINS, Config, load_config
from core.exceptions import ConfigurationError


def test_defaults():
    config = load_config({})

    assert config.proxy.port == 3000
    assert config.proxy.host == "0.0.0.0"
    assert config.forward.timeout == 15.0
    assert config.forward.user_agent == "Render-Proxy/1.0"
    assert config.forward.max_body_size == 100 * 1024
    assert config.allowed_domains == DEFAULT_ALLOWED_DOMAINS


def test_port_from_environment():
    config = load_config({"PORT": "10000", "HOST": "127.0.0.1"})

    assert config.proxy.port == 10000
    assert config.proxy.host == "127.0.0.1"


@pytest.mark.parametrize("port", ["abc", "0", "70000"])
def test_invalid_port(port):
    with pytest.raises(ConfigurationError):
        load_config({"PORT": port})


def test_allow_list_is_not_read_from_environment():
    config = load_config({"ALLOWED_DOMAINS": "evil.com"})

    assert "evil.com" not in config.allowed_domains


def test_config_is_frozen():
    config = Config()

    with pytest.raises(ValidationError):
        config.allowed_domains = ("evil.com",)
