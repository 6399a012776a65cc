"""Pytest config: PYTHONPATH and env for tests."""
import os
import sys
from pathlib import Path

import pytest

root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(root))
os.environ.setdefault("MCP_TRANSPORT", "stdio")
os.environ.setdefault("LOG_LEVEL", "WARNING")


@pytest.fixture(autouse=True)
def _no_hf_token(monkeypatch):
    """Tests opt in to a token explicitly."""
    monkeypatch.delenv("HF_TOKEN", raising=False)


@pytest.fixture
def weather_payload():
    """A trimmed Open-Meteo /v1/forecast response for three days."""
    return {
        "latitude": 37.55,
        "longitude": 126.98,
        "timezone": "Asia/Seoul",
        "current_units": {
            "time": "iso8601",
            "temperature_2m": "°C",
            "relative_humidity_2m": "%",
            "apparent_temperature": "°C",
            "weather_code": "wmo code",
            "wind_speed_10m": "km/h",
            "wind_direction_10m": "°",
            "precipitation": "mm",
        },
        "current": {
            "time": "2025-05-01T14:00",
            "temperature_2m": 21.4,
            "relative_humidity_2m": 48,
            "apparent_temperature": 20.1,
            "weather_code": 2,
            "wind_speed_10m": 9.7,
            "wind_direction_10m": 250,
            "precipitation": 0.0,
        },
        "daily_units": {
            "time": "iso8601",
            "weather_code": "wmo code",
            "temperature_2m_max": "°C",
            "temperature_2m_min": "°C",
            "precipitation_sum": "mm",
            "precipitation_probability_max": "%",
            "wind_speed_10m_max": "km/h",
        },
        "daily": {
            "time": ["2025-05-01", "2025-05-02", "2025-05-03"],
            "weather_code": [2, 61, 42],
            "temperature_2m_max": [23.1, 19.5, 24.0],
            "temperature_2m_min": [12.3, 13.0, 11.8],
            "precipitation_sum": [0.0, 6.2, 0.0],
            "precipitation_probability_max": [5, 80, 10],
            "wind_speed_10m_max": [14.2, 22.5, 11.0],
        },
    }
