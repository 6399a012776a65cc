# =============================================================================
# tools/mcp_server.py  —  FastMCP Tool Server (ALL tools in one place)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Exposes the tool registry from core/ over MCP, plus one resource
#   (info://server) and one prompt (code-review).  Each tool below is a
#   thin wrapper: its signature is the schema MCP clients see, and its body
#   hands the arguments to ToolRegistry.dispatch().
#
# HOW IT WORKS (the flow):
#   1. A client calls a tool by name (e.g. "get-weather")
#   2. FastMCP checks the arguments against the wrapper's signature
#   3. The wrapper calls registry.dispatch(), which validates again, fills
#      defaults and runs the core/ handler
#   4. The ToolResult is converted to MCP text/image content and returned
#
# SIGNATURES vs. core/catalog.py:
#   Argument descriptions are read from the catalog's input models.  Types,
#   defaults and bounds are written out here and must match those models;
#   tests/unit/test_mcp_server.py compares the two schemas field by field.
#
# STRUCTURED OUTPUT:
#   Tools whose definition declares an output model (the five text tools)
#   advertise it as their MCP outputSchema and also return the envelope as
#   structuredContent: {"content": [{"type": "text", "text": ...}]}.
#
# ERRORS:
#   Handlers never raise; their failures arrive as "Error: ..." text.
#   Only registry errors (unknown tool, invalid arguments, broken output
#   contract) are turned into an MCP ToolError.
#
# RUNNING THIS SERVER:
#   a) Via the entry point:  python main.py [--transport http]
#   b) Standalone:           python -m tools.mcp_server   (stdio)
# =============================================================================

import json
import logging
import sys
from typing import Annotated, Optional

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.tools.tool import ToolResult as MCPToolResult
from mcp.types import ImageContent, TextContent
from pydantic import BaseModel, Field

from core.catalog import Language, Operator, build_registry
from core.config import ServerConfig
from core.errors import ToolServerError
from core.models import ImageItem, ToolResult
from core.prompts import CODE_REVIEW_PROMPT_NAME, code_review_prompt
from core.server_info import SERVER_INFO_URI, render_server_info

# =============================================================================
# Logging Setup
# =============================================================================
# We log to STDERR because, with the stdio transport, STDOUT carries the MCP
# JSON-RPC stream.  A stray log line on stdout would corrupt the protocol.
#
# ANSI COLOR CODES:
#     - CYAN for incoming requests (tool name + parameters)
#     - GREEN for responses
#     - YELLOW for intermediate status messages
# =============================================================================

_CYAN = "\033[36m"     # Requests (tool calls with params)
_GREEN = "\033[32m"    # Responses
_YELLOW = "\033[33m"   # Status/progress messages
_RESET = "\033[0m"     # Reset to default terminal color

CONFIG = ServerConfig.from_env()

logging.basicConfig(
    level=CONFIG.log_level,
    format="%(asctime)s [MCP] %(message)s",
    datefmt="%H:%M:%S",
    stream=sys.stderr,
)


def _log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logging.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logging.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, result: ToolResult) -> None:
    """Log the response in GREEN; image payloads are logged by size only."""
    summary = []
    for item in result.to_dict()["content"]:
        if item["type"] == "image":
            item = {**item, "data": f"<{len(item['data'])} base64 chars>"}
        summary.append(item)
    logging.info(
        f"{_GREEN}  ← {tool_name} response: "
        f"{json.dumps({'content': summary}, ensure_ascii=False, separators=(',', ':'))}{_RESET}"
    )


# =============================================================================
# Server + registry
# =============================================================================
mcp = FastMCP(CONFIG.name)
registry = build_registry(CONFIG)


def inline_json_schema(model: type[BaseModel]) -> dict:
    """JSON schema of `model` with every local $ref replaced by its definition."""
    schema = model.model_json_schema()
    definitions = schema.pop("$defs", {})

    def resolve(node):
        if isinstance(node, dict):
            if "$ref" in node:
                return resolve(definitions[node["$ref"].rsplit("/", 1)[-1]])
            return {key: resolve(value) for key, value in node.items()}
        if isinstance(node, list):
            return [resolve(value) for value in node]
        return node

    return resolve(schema)


def output_schema(tool_name: str) -> Optional[dict]:
    model = registry.get(tool_name).output_model
    return inline_json_schema(model) if model is not None else None


def to_mcp_content(result: ToolResult) -> list[TextContent | ImageContent]:
    content = []
    for item in result.content:
        if isinstance(item, ImageItem):
            content.append(ImageContent(type="image", data=item.data, mimeType=item.mime_type))
        else:
            content.append(TextContent(type="text", text=item.text))
    return content


async def call_tool(tool_name: str, **arguments) -> MCPToolResult:
    """Dispatch through the registry and convert the result for MCP."""
    _log_request(tool_name, **arguments)
    try:
        result = await registry.dispatch(tool_name, arguments)
    except ToolServerError as e:
        _log_status(f"{type(e).__name__}: {e}")
        raise ToolError(str(e)) from e

    if result.is_error:
        _log_status("Handled failure reported as text")
    _log_response(tool_name, result)

    structured = result.to_dict() if registry.get(tool_name).output_model is not None else None
    return MCPToolResult(content=to_mcp_content(result), structured_content=structured)


def _description(name: str) -> str:
    return registry.get(name).description


def _arg(tool_name: str, field: str) -> str:
    """The argument description declared on the catalog's input model."""
    return registry.get(tool_name).input_model.model_fields[field].description


# =============================================================================
# TOOL 1: greet
# =============================================================================
@mcp.tool(name="greet", description=_description("greet"), output_schema=output_schema("greet"))
async def greet(
    name: Annotated[str, Field(description=_arg("greet", "name"))],
    language: Annotated[Language, Field(description=_arg("greet", "language"))] = "en",
) -> MCPToolResult:
    """Greet someone in one of seven languages.

    Args:
        name: Inserted into the greeting exactly as given.
        language: ko, en, ja, zh, es, fr or de (default: en).

    Returns:
        One text item with the greeting.
    """
    return await call_tool("greet", name=name, language=language)


# =============================================================================
# TOOL 2: calc
# =============================================================================
@mcp.tool(name="calc", description=_description("calc"), output_schema=output_schema("calc"))
async def calc(
    a: Annotated[float, Field(description=_arg("calc", "a"))],
    b: Annotated[float, Field(description=_arg("calc", "b"))],
    operator: Annotated[Operator, Field(description=_arg("calc", "operator"))],
) -> MCPToolResult:
    """Apply +, -, * or / to two numbers.

    Args:
        a: First operand.
        b: Second operand.
        operator: One of +, -, *, /.

    Returns:
        One text item "a op b = result", or "Error: cannot divide by zero."
    """
    return await call_tool("calc", a=a, b=b, operator=operator)


# =============================================================================
# TOOL 3: now
# =============================================================================
@mcp.tool(name="now", description=_description("now"), output_schema=output_schema("now"))
async def now(
    timezone: Annotated[str, Field(description=_arg("now", "timezone"))] = "UTC",
) -> MCPToolResult:
    """Current time in an IANA timezone, 24-hour "YYYY-MM-DD HH:MM:SS".

    Args:
        timezone: e.g. "Asia/Seoul".  Unknown names produce an "Error: ..."
            text naming the value, not a protocol error.

    Returns:
        One text item "[timezone] current time: ...".
    """
    return await call_tool("now", timezone=timezone)


# =============================================================================
# TOOL 4: geocode
# =============================================================================
@mcp.tool(name="geocode", description=_description("geocode"), output_schema=output_schema("geocode"))
async def geocode(
    query: Annotated[str, Field(description=_arg("geocode", "query"))],
) -> MCPToolResult:
    """Look up a place name or address with Nominatim (first match only).

    Args:
        query: Free-form search text, e.g. "Seoul" or a street address.

    Returns:
        Three text lines (name, latitude, longitude), a "No results found"
        line, or "Error: geocoding failed - <reason>".
    """
    return await call_tool("geocode", query=query)


# =============================================================================
# TOOL 5: get-weather
# =============================================================================
@mcp.tool(name="get-weather", description=_description("get-weather"), output_schema=output_schema("get-weather"))
async def get_weather(
    latitude: Annotated[float, Field(description=_arg("get-weather", "latitude"))],
    longitude: Annotated[float, Field(description=_arg("get-weather", "longitude"))],
    forecast_days: Annotated[int, Field(ge=1, le=16, description=_arg("get-weather", "forecast_days"))] = 3,
) -> MCPToolResult:
    """Current weather plus a daily forecast from Open-Meteo.

    WHEN TO CALL THIS: once you have coordinates (call geocode first if you
    only have a place name).

    Args:
        latitude: Decimal degrees.
        longitude: Decimal degrees.
        forecast_days: 1-16, default 3.

    Returns:
        A text report: coordinates and resolved timezone, current
        conditions, then one line per day in the service's order.
    """
    return await call_tool("get-weather", latitude=latitude, longitude=longitude, forecast_days=forecast_days)


# =============================================================================
# TOOL 6: generate-image
# =============================================================================
# No output schema: on success the content is an image, not text.
# =============================================================================
@mcp.tool(
    name="generate-image",
    description=_description("generate-image"),
    output_schema=output_schema("generate-image"),
)
async def generate_image(
    prompt: Annotated[str, Field(description=_arg("generate-image", "prompt"))],
    num_inference_steps: Annotated[
        int, Field(ge=1, le=10, description=_arg("generate-image", "num_inference_steps"))
    ] = 4,
) -> MCPToolResult:
    """Generate an image with FLUX.1-schnell through the Hugging Face Inference API.

    Needs HF_TOKEN in the server's environment.

    Args:
        prompt: What to draw.
        num_inference_steps: 1-10, default 4.  More steps, slower image.

    Returns:
        One base64 PNG image item, or one "Error: ..." text item when the
        token is missing or the provider fails.
    """
    return await call_tool("generate-image", prompt=prompt, num_inference_steps=num_inference_steps)


# =============================================================================
# RESOURCE: server info
# =============================================================================
@mcp.resource(
    SERVER_INFO_URI,
    name="server-info",
    description="Basic information about this MCP server",
    mime_type="application/json",
)
def server_info() -> str:
    """Server identity, registered tools, runtime and uptime as JSON."""
    _log_request("server-info")
    return render_server_info(CONFIG, registry.definitions())


# =============================================================================
# PROMPT: code review
# =============================================================================
@mcp.prompt(
    name=CODE_REVIEW_PROMPT_NAME,
    description="Wrap code in our team's code review checklist",
)
def code_review(code: Annotated[str, Field(description="Code to review")]) -> str:
    _log_request(CODE_REVIEW_PROMPT_NAME, code=f"<{len(code)} chars>")
    return code_review_prompt(code)


# =============================================================================
# Server entry point
# =============================================================================
if __name__ == "__main__":
    mcp.run()
