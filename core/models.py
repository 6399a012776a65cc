# =============================================================================
# core/models.py  —  Data Models (the "nouns" of the system)
# =============================================================================
#
# These dataclasses define the *shape* of every piece of information that
# flows between the registry, the handlers, and the MCP layer.  They carry
# almost no behavior.
#
# THE RESPONSE ENVELOPE:
#   Every tool answers with a ToolResult: an ordered, non-empty sequence of
#   content items.  An item is either text or a base64-encoded image.
#   Failures that the handler can explain (bad timezone, upstream 500, ...)
#   are ALSO a ToolResult, with a single text item starting with "Error: ".
#   To a caller, a failed weather lookup has the same shape as a good one.
# =============================================================================

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Optional, Union

from pydantic import BaseModel

ERROR_PREFIX = "Error: "


# -----------------------------------------------------------------------------
# Content items — the tagged variant inside a ToolResult
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class TextItem:
    """A plain text content item."""

    text: str
    kind: str = field(default="text", init=False)

    def to_dict(self) -> dict:
        return {"type": self.kind, "text": self.text}


@dataclass(frozen=True)
class ImageItem:
    """An image content item; `data` is already base64-encoded."""

    data: str
    mime_type: str = "image/png"
    kind: str = field(default="image", init=False)

    def to_dict(self) -> dict:
        return {"type": self.kind, "data": self.data, "mimeType": self.mime_type}


ContentItem = Union[TextItem, ImageItem]


@dataclass(frozen=True)
class ToolResult:
    """What every tool returns: `{content: [item, ...]}` with at least one item."""

    content: tuple[ContentItem, ...]

    def __post_init__(self):
        if not self.content:
            raise ValueError("ToolResult content must contain at least one item")

    @classmethod
    def text(cls, text: str) -> "ToolResult":
        return cls(content=(TextItem(text),))

    @classmethod
    def error(cls, message: str) -> "ToolResult":
        """A handled failure, reported as ordinary text output."""
        return cls(content=(TextItem(f"{ERROR_PREFIX}{message}"),))

    @classmethod
    def image(cls, data: str, mime_type: str = "image/png") -> "ToolResult":
        return cls(content=(ImageItem(data=data, mime_type=mime_type),))

    @property
    def is_error(self) -> bool:
        first = self.content[0]
        return isinstance(first, TextItem) and first.text.startswith(ERROR_PREFIX)

    def to_dict(self) -> dict:
        return {"content": [item.to_dict() for item in self.content]}


Handler = Callable[[Any], Union[ToolResult, Awaitable[ToolResult]]]


# -----------------------------------------------------------------------------
# ToolDefinition — one registry entry
# -----------------------------------------------------------------------------
# Created once at startup by core/catalog.py and never mutated afterwards.
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ToolDefinition:
    """A named tool: its input/output models and the function that runs it."""

    name: str
    description: str
    input_model: type[BaseModel]
    handler: Handler
    output_model: Optional[type[BaseModel]] = None


# -----------------------------------------------------------------------------
# GeocodeResult — first match of a place search
# -----------------------------------------------------------------------------
@dataclass
class GeocodeResult:
    display_name: str
    latitude: str                      # Nominatim sends coordinates as strings
    longitude: str


# -----------------------------------------------------------------------------
# Weather — one upstream forecast response, flattened for formatting
# -----------------------------------------------------------------------------
@dataclass
class CurrentConditions:
    time: str
    temperature: float
    humidity: float
    apparent_temperature: float
    weather_code: int
    wind_speed: float
    wind_direction: float
    precipitation: float


@dataclass
class DailyForecast:
    date: str                          # ISO format: "2025-07-15"
    weather_code: Optional[int]        # null when the service has no code for the day
    temp_min: Optional[float]
    temp_max: Optional[float]
    precipitation_sum: Optional[float]
    precipitation_probability: Optional[float]
    wind_speed_max: Optional[float]


@dataclass
class WeatherReport:
    """Everything the weather tool prints, in upstream order."""

    latitude: float                    # as requested, not as snapped by the API
    longitude: float
    timezone: str                      # resolved by the service ("timezone=auto")
    current: CurrentConditions
    current_units: dict[str, str]
    daily: list[DailyForecast] = field(default_factory=list)
    daily_units: dict[str, str] = field(default_factory=dict)
