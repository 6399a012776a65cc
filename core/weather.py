# =============================================================================
# core/weather.py  —  Current weather & daily forecast (Open-Meteo)
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Fetches current conditions plus an N-day forecast for a coordinate pair
#   from the Open-Meteo API and renders them as a text report.
#
# WHY OPEN-METEO?
#   - Completely free, no API key required
#   - Provides up to 16 days of forecast data (hence forecast_days <= 16)
#   - `timezone=auto` resolves the local timezone from the coordinates
#
# THE SEPARATION OF "FETCH" AND "FORMAT":
#   - fetch_weather() returns a WeatherReport (validated upstream data)
#   - format_report() turns it into text
#   The formatter can be tested without any network at all.
#
# FAILURE POLICY:
#   One request, no retries.  A bad status, a network error or a response
#   that does not match the expected shape ends up as
#   "Error: could not fetch weather data - <reason>".
# =============================================================================

import logging
from typing import Optional

import httpx
from pydantic import BaseModel, ValidationError, model_validator

from core.errors import UpstreamError
from core.http import DEFAULT_TIMEOUT, get_json, http_client
from core.models import CurrentConditions, DailyForecast, ToolResult, WeatherReport
from core.text import describe_error, format_number

logger = logging.getLogger(__name__)

OPEN_METEO_FORECAST_URL = "https://api.open-meteo.com/v1/forecast"

CURRENT_FIELDS = (
    "temperature_2m",
    "relative_humidity_2m",
    "apparent_temperature",
    "weather_code",
    "wind_speed_10m",
    "wind_direction_10m",
    "precipitation",
)

DAILY_FIELDS = (
    "weather_code",
    "temperature_2m_max",
    "temperature_2m_min",
    "precipitation_sum",
    "precipitation_probability_max",
    "wind_speed_10m_max",
)


# =============================================================================
# WMO Weather Code Mapping
# =============================================================================
# The Open-Meteo API returns WMO (World Meteorological Organization) weather
# codes instead of human-readable strings.  Codes missing from this table are
# shown as "unknown (<code>)".
# =============================================================================
WMO_WEATHER_CODES: dict[int, str] = {
    0: "Clear sky ☀️",
    1: "Mainly clear 🌤️",
    2: "Partly cloudy ⛅",
    3: "Overcast ☁️",
    45: "Fog 🌫️",
    48: "Depositing rime fog 🌫️",
    51: "Light drizzle 🌦️",
    53: "Drizzle 🌦️",
    55: "Dense drizzle 🌦️",
    56: "Light freezing drizzle 🌧️",
    57: "Dense freezing drizzle 🌧️",
    61: "Slight rain 🌧️",
    63: "Rain 🌧️",
    65: "Heavy rain 🌧️",
    66: "Light freezing rain 🌧️",
    67: "Heavy freezing rain 🌧️",
    71: "Slight snow 🌨️",
    73: "Snow 🌨️",
    75: "Heavy snow 🌨️",
    77: "Snow grains 🌨️",
    80: "Slight rain showers 🌦️",
    81: "Rain showers 🌦️",
    82: "Violent rain showers 🌦️",
    85: "Slight snow showers 🌨️",
    86: "Heavy snow showers 🌨️",
    95: "Thunderstorm ⛈️",
    96: "Thunderstorm with slight hail ⛈️",
    99: "Thunderstorm with heavy hail ⛈️",
}


def describe_weather_code(code: Optional[int]) -> str:
    if code is None:
        return "unknown (n/a)"
    return WMO_WEATHER_CODES.get(code, f"unknown ({code})")


# -----------------------------------------------------------------------------
# Upstream payload (only the parts we read)
# -----------------------------------------------------------------------------
class _Current(BaseModel):
    time: str
    temperature_2m: float
    relative_humidity_2m: float
    apparent_temperature: float
    weather_code: int
    wind_speed_10m: float
    wind_direction_10m: float
    precipitation: float


class _Daily(BaseModel):
    time: list[str]
    weather_code: list[Optional[int]]
    temperature_2m_max: list[Optional[float]]
    temperature_2m_min: list[Optional[float]]
    precipitation_sum: list[Optional[float]]
    precipitation_probability_max: list[Optional[float]]
    wind_speed_10m_max: list[Optional[float]]

    @model_validator(mode="after")
    def _same_length(self):
        expected = len(self.time)
        for name in DAILY_FIELDS:
            if len(getattr(self, name)) != expected:
                raise ValueError(f"daily.{name} has {len(getattr(self, name))} values, expected {expected}")
        return self


class _ForecastPayload(BaseModel):
    timezone: str
    current: _Current
    current_units: dict[str, str]
    daily: _Daily
    daily_units: dict[str, str]


def build_report(latitude: float, longitude: float, data: dict) -> WeatherReport:
    """Validate a raw Open-Meteo response and flatten it into a WeatherReport."""
    try:
        payload = _ForecastPayload.model_validate(data)
    except ValidationError as e:
        raise UpstreamError(f"unexpected response format: {e.error_count()} invalid field(s)") from e

    c = payload.current
    d = payload.daily
    daily = [
        DailyForecast(
            date=d.time[i],
            weather_code=d.weather_code[i],
            temp_min=d.temperature_2m_min[i],
            temp_max=d.temperature_2m_max[i],
            precipitation_sum=d.precipitation_sum[i],
            precipitation_probability=d.precipitation_probability_max[i],
            wind_speed_max=d.wind_speed_10m_max[i],
        )
        for i in range(len(d.time))
    ]

    return WeatherReport(
        latitude=latitude,
        longitude=longitude,
        timezone=payload.timezone,
        current=CurrentConditions(
            time=c.time,
            temperature=c.temperature_2m,
            humidity=c.relative_humidity_2m,
            apparent_temperature=c.apparent_temperature,
            weather_code=c.weather_code,
            wind_speed=c.wind_speed_10m,
            wind_direction=c.wind_direction_10m,
            precipitation=c.precipitation,
        ),
        current_units=payload.current_units,
        daily=daily,
        daily_units=payload.daily_units,
    )


async def fetch_weather(
    latitude: float,
    longitude: float,
    forecast_days: int,
    client: httpx.AsyncClient,
) -> WeatherReport:
    data = await get_json(
        client,
        OPEN_METEO_FORECAST_URL,
        params={
            "latitude": latitude,
            "longitude": longitude,
            "current": ",".join(CURRENT_FIELDS),
            "daily": ",".join(DAILY_FIELDS),
            "forecast_days": forecast_days,
            "timezone": "auto",
        },
    )
    return build_report(latitude, longitude, data)


def _n(value: Optional[float]) -> str:
    return "n/a" if value is None else format_number(value)


def format_report(report: WeatherReport, forecast_days: int) -> str:
    """Render the report: header, current block, one line per forecast day."""
    c = report.current
    cu = report.current_units
    du = report.daily_units

    lines = [
        f"📍 Coordinates: {_n(report.latitude)}, {_n(report.longitude)} ({report.timezone})",
        "",
        f"🌡️ Current weather ({c.time})",
        f"  Condition: {describe_weather_code(c.weather_code)}",
        f"  Temperature: {_n(c.temperature)}{cu.get('temperature_2m', '')}"
        f" (feels like {_n(c.apparent_temperature)}{cu.get('apparent_temperature', '')})",
        f"  Humidity: {_n(c.humidity)}{cu.get('relative_humidity_2m', '')}",
        f"  Wind: {_n(c.wind_speed)}{cu.get('wind_speed_10m', '')} ({_n(c.wind_direction)}°)",
        f"  Precipitation: {_n(c.precipitation)}{cu.get('precipitation', '')}",
        "",
        f"📅 {forecast_days}-day forecast:",
    ]

    # Upstream order is chronological already; keep it as-is.
    for day in report.daily:
        lines.append(
            f"  {day.date} | {describe_weather_code(day.weather_code)}"
            f" | {_n(day.temp_min)}~{_n(day.temp_max)}{du.get('temperature_2m_max', '')}"
            f" | precip {_n(day.precipitation_sum)}{du.get('precipitation_sum', '')}"
            f" ({_n(day.precipitation_probability)}%)"
            f" | max wind {_n(day.wind_speed_max)}{du.get('wind_speed_10m_max', '')}"
        )

    return "\n".join(lines)


async def handle_get_weather(
    args,
    client: Optional[httpx.AsyncClient] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> ToolResult:
    try:
        async with http_client(client, timeout) as http:
            report = await fetch_weather(args.latitude, args.longitude, args.forecast_days, http)
    except Exception as e:
        logger.warning("Weather lookup failed for (%s, %s): %s", args.latitude, args.longitude, e)
        return ToolResult.error(f"could not fetch weather data - {describe_error(e)}")

    return ToolResult.text(format_report(report, args.forecast_days))
