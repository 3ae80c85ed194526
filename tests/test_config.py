"""Tests for connection settings."""

import pytest

from workq_client.config import ClientSettings


def test_defaults():
    settings = ClientSettings()
    assert settings.address == "localhost:9922"
    assert settings.connect_timeout == 5.0


def test_from_env(monkeypatch):
    monkeypatch.setenv("WORKQ_HOST", "queue.internal")
    monkeypatch.setenv("WORKQ_PORT", "9000")
    monkeypatch.setenv("WORKQ_CONNECT_TIMEOUT", "1.5")
    settings = ClientSettings.from_env()
    assert settings.host == "queue.internal"
    assert settings.port == 9000
    assert settings.connect_timeout == 1.5


def test_from_env_defaults(monkeypatch):
    for var in ("WORKQ_HOST", "WORKQ_PORT", "WORKQ_CONNECT_TIMEOUT"):
        monkeypatch.delenv(var, raising=False)
    assert ClientSettings.from_env() == ClientSettings()


def test_from_addr():
    settings = ClientSettings.from_addr("127.0.0.1:9944")
    assert settings.host == "127.0.0.1"
    assert settings.port == 9944


def test_from_addr_ipv6():
    assert ClientSettings.from_addr("[::1]:9922").host == "::1"


@pytest.mark.parametrize("addr", ["localhost", "localhost:", "localhost:abc"])
def test_from_addr_invalid(addr):
    with pytest.raises(ValueError):
        ClientSettings.from_addr(addr)
