# =============================================================================
# core/catalog.py  —  The six tools: input schemas + registration
# =============================================================================
#
# Each tool's arguments are a pydantic model.  The registry validates raw
# arguments against it, so:
#   - declared defaults (language="en", timezone="UTC", forecast_days=3,
#     num_inference_steps=4) are filled in before the handler runs
#   - out-of-range or unknown values never reach a handler
#
# The text tools also declare TextOutput as their output contract; the image
# tool does not, because it answers with an image item on success.
# =============================================================================

from functools import partial
from typing import Literal

from pydantic import BaseModel, Field

from core.calculator import handle_calc
from core.clock import handle_now
from core.config import ServerConfig
from core.geocoding import handle_geocode
from core.greeting import handle_greet
from core.images import handle_generate_image
from core.models import ToolDefinition
from core.registry import ToolRegistry
from core.weather import handle_get_weather

Language = Literal["ko", "en", "ja", "zh", "es", "fr", "de"]
Operator = Literal["+", "-", "*", "/"]


# -----------------------------------------------------------------------------
# Input models
# -----------------------------------------------------------------------------
class GreetInput(BaseModel):
    name: str = Field(description="Name of the person to greet")
    language: Language = Field(
        default="en",
        description="Greeting language: ko, en, ja, zh, es, fr, de (default: en)",
    )


class CalcInput(BaseModel):
    a: float = Field(description="First number")
    b: float = Field(description="Second number")
    operator: Operator = Field(description="Operator: +, -, *, /")


class NowInput(BaseModel):
    timezone: str = Field(
        default="UTC",
        description="IANA timezone (e.g. Asia/Seoul, America/New_York, Europe/London, UTC)",
    )


class GeocodeInput(BaseModel):
    query: str = Field(description="City name or address to look up (e.g. Seoul, 1600 Amphitheatre Parkway)")


class WeatherInput(BaseModel):
    latitude: float = Field(description="Latitude (e.g. 37.5665)")
    longitude: float = Field(description="Longitude (e.g. 126.978)")
    forecast_days: int = Field(default=3, ge=1, le=16, description="Forecast length in days (1-16, default: 3)")


class ImageInput(BaseModel):
    prompt: str = Field(description="Text prompt describing the image")
    num_inference_steps: int = Field(default=4, ge=1, le=10, description="Inference steps (1-10, default: 4)")


# -----------------------------------------------------------------------------
# Output contract for text-only tools
# -----------------------------------------------------------------------------
class TextContentOut(BaseModel):
    type: Literal["text"]
    text: str


class TextOutput(BaseModel):
    content: list[TextContentOut] = Field(min_length=1)


def build_registry(config: ServerConfig) -> ToolRegistry:
    """Create the registry with every tool this server exposes."""
    registry = ToolRegistry()

    registry.register(ToolDefinition(
        name="greet",
        description="Multilingual greeting (ko, en, ja, zh, es, fr, de)",
        input_model=GreetInput,
        output_model=TextOutput,
        handler=handle_greet,
    ))
    registry.register(ToolDefinition(
        name="calc",
        description="Four-operation calculator (+, -, *, /)",
        input_model=CalcInput,
        output_model=TextOutput,
        handler=handle_calc,
    ))
    registry.register(ToolDefinition(
        name="now",
        description="Current time in a given IANA timezone",
        input_model=NowInput,
        output_model=TextOutput,
        handler=handle_now,
    ))
    registry.register(ToolDefinition(
        name="geocode",
        description="Address or city name to latitude/longitude (Nominatim API)",
        input_model=GeocodeInput,
        output_model=TextOutput,
        handler=partial(handle_geocode, user_agent=config.user_agent, timeout=config.http_timeout),
    ))
    registry.register(ToolDefinition(
        name="get-weather",
        description="Current weather and forecast for a latitude/longitude (Open-Meteo API)",
        input_model=WeatherInput,
        output_model=TextOutput,
        handler=partial(handle_get_weather, timeout=config.http_timeout),
    ))
    registry.register(ToolDefinition(
        name="generate-image",
        description="Generate an image from a text prompt (Hugging Face Inference API)",
        input_model=ImageInput,
        handler=handle_generate_image,
    ))

    return registry
