# =============================================================================
# core/server_info.py  —  The `info://server` resource
# =============================================================================
# Recomputed on every read: identity, tool list, runtime facts and uptime
# since PROCESS_STARTED_AT.  Nothing is stored.
# =============================================================================

from datetime import datetime, timezone
import json
import platform
import sys
from typing import Iterable, Optional

from core.config import SERVER_DESCRIPTION, ServerConfig
from core.models import ToolDefinition

SERVER_INFO_URI = "info://server"

PROCESS_STARTED_AT = datetime.now(timezone.utc)


def format_uptime(seconds: float) -> str:
    """3725.9 -> "1h 2m 5s" (fractions of a second are dropped)."""
    total = max(int(seconds), 0)
    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)
    return f"{hours}h {minutes}m {secs}s"


def build_server_info(
    config: ServerConfig,
    tools: Iterable[ToolDefinition],
    started_at: datetime = PROCESS_STARTED_AT,
    now: Optional[datetime] = None,
) -> dict:
    now = now or datetime.now(timezone.utc)
    return {
        "server": {
            "name": config.name,
            "version": config.version,
            "description": SERVER_DESCRIPTION,
        },
        "tools": [f"{tool.name} - {tool.description}" for tool in tools],
        "runtime": {
            "platform": sys.platform,
            "arch": platform.machine(),
            "pythonVersion": platform.python_version(),
            "uptime": format_uptime((now - started_at).total_seconds()),
        },
        "timestamp": now.isoformat(),
    }


def render_server_info(
    config: ServerConfig,
    tools: Iterable[ToolDefinition],
    started_at: datetime = PROCESS_STARTED_AT,
    now: Optional[datetime] = None,
) -> str:
    return json.dumps(build_server_info(config, tools, started_at, now), indent=2, ensure_ascii=False)
