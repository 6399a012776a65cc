# =============================================================================
# core/config.py  —  Process configuration from environment variables
# =============================================================================
#
# main.py calls load_dotenv() first, so everything here may come from a
# .env file as well as from the real environment.
#
# HF_TOKEN is NOT part of ServerConfig: the image tool reads it
# on every call, and a missing token is reported by that tool instead of
# stopping the server.
# =============================================================================

from dataclasses import dataclass
import os
from typing import Optional

SERVER_VERSION = "1.0.0"
SERVER_DESCRIPTION = "Python MCP server with greeting, calculator, clock, geocoding, weather and image tools"

HF_TOKEN_ENV = "HF_TOKEN"

_TRANSPORTS = ("stdio", "http")


@dataclass(frozen=True)
class ServerConfig:
    name: str = "multitool-mcp"
    version: str = SERVER_VERSION
    transport: str = "stdio"
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "INFO"
    http_timeout: float = 10.0

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """Build the config from MCP_* / LOG_LEVEL / HTTP_TIMEOUT variables."""
        transport = os.environ.get("MCP_TRANSPORT", cls.transport).lower()
        if transport not in _TRANSPORTS:
            raise ValueError(f"MCP_TRANSPORT must be one of {_TRANSPORTS}, got '{transport}'")

        return cls(
            name=os.environ.get("MCP_SERVER_NAME", cls.name),
            transport=transport,
            host=os.environ.get("MCP_HOST", cls.host),
            port=int(os.environ.get("MCP_PORT", cls.port)),
            log_level=os.environ.get("LOG_LEVEL", cls.log_level).upper(),
            http_timeout=float(os.environ.get("HTTP_TIMEOUT", cls.http_timeout)),
        )

    @property
    def user_agent(self) -> str:
        # Nominatim rejects anonymous clients.
        return f"{self.name}/{self.version}"


def get_hf_token() -> Optional[str]:
    """Return the Hugging Face token, or None when unset or empty."""
    return os.environ.get(HF_TOKEN_ENV) or None
