"""Tests for ClientConfig domain resolution."""

import httpx
import pydantic
import pytest

from appointedd import config


@pytest.fixture
def no_domain_env(monkeypatch):
    monkeypatch.delenv(config.DOMAIN_ENV_VAR, raising=False)


def test_default_domain_used_without_override(no_domain_env):
    """The compiled-in domain is used when nothing overrides it."""
    cfg = config.ClientConfig()
    assert cfg.domain == config.DEFAULT_DOMAIN


def test_environment_overrides_default(monkeypatch):
    """APPOINTEDD_DOMAIN replaces the compiled-in domain."""
    monkeypatch.setenv(config.DOMAIN_ENV_VAR, "https://staging.example.test")
    cfg = config.ClientConfig()
    assert cfg.domain == "https://staging.example.test"


def test_explicit_domain_beats_environment(monkeypatch):
    """An explicit domain wins over the environment."""
    monkeypatch.setenv(config.DOMAIN_ENV_VAR, "https://staging.example.test")
    cfg = config.ClientConfig(domain="https://api.example.test")
    assert cfg.domain == "https://api.example.test"


def test_urls_share_domain():
    """All endpoint URLs derive from the one domain; trailing slash dropped."""
    cfg = config.ClientConfig(domain="https://api.example.test/")

    assert cfg.api_url == "https://api.example.test"
    assert cfg.authorize_url == "https://api.example.test/oauth/authorise"
    assert cfg.access_token_url == "https://api.example.test/oauth/access_token"


@pytest.mark.parametrize("domain", ["", "  ", "/"])
def test_empty_domain_rejected(domain):
    """A blank domain fails validation."""
    with pytest.raises(pydantic.ValidationError, match="domain cannot be empty"):
        config.ClientConfig(domain=domain)


def test_config_is_frozen():
    """Configuration cannot change after construction."""
    cfg = config.ClientConfig(domain="https://api.example.test")
    with pytest.raises(pydantic.ValidationError):
        cfg.domain = "https://other.example.test"


def test_default_transport_is_httpx_client():
    """The default factory builds an httpx.Client asking for JSON."""
    transport = config.default_transport()
    try:
        assert isinstance(transport, httpx.Client)
        assert transport.headers["Accept"] == "application/json"
    finally:
        transport.close()
