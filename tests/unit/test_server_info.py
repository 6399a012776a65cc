"""Unit tests for the info://server resource."""
from datetime import datetime, timedelta, timezone
import json

from core.catalog import build_registry
from core.config import ServerConfig
from core.server_info import build_server_info, format_uptime, render_server_info

STARTED = datetime(2025, 1, 1, 0, 0, 0, tzinfo=timezone.utc)


def test_format_uptime():
    assert format_uptime(0) == "0h 0m 0s"
    assert format_uptime(3725.9) == "1h 2m 5s"
    assert format_uptime(90061) == "25h 1m 1s"


def test_info_document():
    config = ServerConfig(name="test-server")
    registry = build_registry(config)
    now = STARTED + timedelta(hours=2, minutes=3, seconds=4)

    info = build_server_info(config, registry.definitions(), started_at=STARTED, now=now)

    assert info["server"]["name"] == "test-server"
    assert info["server"]["version"] == "1.0.0"
    assert len(info["tools"]) == 6
    assert info["tools"][0].startswith("greet - ")
    assert info["runtime"]["uptime"] == "2h 3m 4s"
    assert info["runtime"]["pythonVersion"]
    assert info["timestamp"] == now.isoformat()


def test_rendered_as_json_and_recomputed_per_read():
    config = ServerConfig()
    tools = build_registry(config).definitions()

    first = json.loads(render_server_info(config, tools, started_at=STARTED, now=STARTED + timedelta(seconds=1)))
    second = json.loads(render_server_info(config, tools, started_at=STARTED, now=STARTED + timedelta(seconds=61)))

    assert first["runtime"]["uptime"] == "0h 0m 1s"
    assert second["runtime"]["uptime"] == "0h 1m 1s"
