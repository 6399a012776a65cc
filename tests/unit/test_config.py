"""Unit tests for ServerConfig and the HF token lookup."""
import pytest

from core.config import ServerConfig, get_hf_token


def test_defaults(monkeypatch):
    for name in ("MCP_SERVER_NAME", "MCP_TRANSPORT", "MCP_HOST", "MCP_PORT", "LOG_LEVEL", "HTTP_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
    config = ServerConfig.from_env()
    assert config.transport == "stdio"
    assert config.port == 8000
    assert config.user_agent == "multitool-mcp/1.0.0"


def test_from_env(monkeypatch):
    monkeypatch.setenv("MCP_TRANSPORT", "HTTP")
    monkeypatch.setenv("MCP_PORT", "9100")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("HTTP_TIMEOUT", "2.5")
    config = ServerConfig.from_env()
    assert config.transport == "http"
    assert config.port == 9100
    assert config.log_level == "DEBUG"
    assert config.http_timeout == 2.5


def test_rejects_unknown_transport(monkeypatch):
    monkeypatch.setenv("MCP_TRANSPORT", "carrier-pigeon")
    with pytest.raises(ValueError):
        ServerConfig.from_env()


def test_hf_token(monkeypatch):
    assert get_hf_token() is None
    monkeypatch.setenv("HF_TOKEN", "")
    assert get_hf_token() is None
    monkeypatch.setenv("HF_TOKEN", "hf_abc")
    assert get_hf_token() == "hf_abc"
