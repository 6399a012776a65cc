# =============================================================================
# core/geocoding.py  —  Place name → coordinates (Nominatim / OpenStreetMap)
# =============================================================================
#
# One search request, `limit=1`, and only the first record is ever used.
# Nominatim's usage policy requires an identifying User-Agent; requests
# without one are refused.
#
# OUTCOMES:
#   - one or more records  → "📍 name / Latitude / Longitude" block
#   - zero records         → "No results found for '<query>'." (not an error)
#   - anything else        → "Error: geocoding failed - <reason>"
# =============================================================================

import logging
from typing import Optional

import httpx
from pydantic import BaseModel, ValidationError

from core.config import ServerConfig
from core.errors import UpstreamError
from core.http import DEFAULT_TIMEOUT, get_json, http_client
from core.models import GeocodeResult, ToolResult
from core.text import describe_error

logger = logging.getLogger(__name__)

NOMINATIM_SEARCH_URL = "https://nominatim.openstreetmap.org/search"
DEFAULT_USER_AGENT = ServerConfig().user_agent


class _Place(BaseModel):
    """The fields we read from one Nominatim record (lat/lon arrive as strings)."""

    display_name: str
    lat: str
    lon: str


async def search_place(
    query: str,
    client: httpx.AsyncClient,
    user_agent: str = DEFAULT_USER_AGENT,
) -> Optional[GeocodeResult]:
    """Return the best match for `query`, or None when nothing matched."""
    data = await get_json(
        client,
        NOMINATIM_SEARCH_URL,
        params={"q": query, "format": "json", "limit": 1, "addressdetails": 1},
        headers={"User-Agent": user_agent},
    )
    if not isinstance(data, list):
        raise UpstreamError(f"unexpected response type: {type(data).__name__}")
    if not data:
        return None

    try:
        place = _Place.model_validate(data[0])
    except ValidationError as e:
        raise UpstreamError(f"unexpected response format: {e.error_count()} invalid field(s)") from e
    return GeocodeResult(display_name=place.display_name, latitude=place.lat, longitude=place.lon)


def format_place(result: GeocodeResult) -> str:
    return "\n".join([
        f"📍 {result.display_name}",
        f"Latitude: {result.latitude}",
        f"Longitude: {result.longitude}",
    ])


async def handle_geocode(
    args,
    client: Optional[httpx.AsyncClient] = None,
    user_agent: str = DEFAULT_USER_AGENT,
    timeout: float = DEFAULT_TIMEOUT,
) -> ToolResult:
    try:
        async with http_client(client, timeout) as http:
            result = await search_place(args.query, http, user_agent)
    except Exception as e:
        logger.warning("Geocoding failed for %r: %s", args.query, e)
        return ToolResult.error(f"geocoding failed - {describe_error(e)}")

    if result is None:
        return ToolResult.text(f"No results found for '{args.query}'.")
    return ToolResult.text(format_place(result))
