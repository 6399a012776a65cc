# =============================================================================
# core/registry.py  —  Tool Registry & Dispatcher
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Holds the name → ToolDefinition mapping and runs a single tool call:
#
#     dispatch("get-weather", {"latitude": 37.5, "longitude": 127.0})
#       1. look the name up            → UnknownToolError if missing
#       2. validate + apply defaults   → InvalidArgumentsError if invalid
#       3. call the handler            (sync or async)
#       4. check the output contract   → OutputContractError if violated
#
# THE CONTRACT WITH HANDLERS:
#   A handler only ever sees a validated pydantic model with defaults filled
#   in.  It must return a ToolResult and must not raise: anything it can
#   explain is returned as ToolResult.error(...).
#
# The registry is filled once at startup and only read afterwards, so
# concurrent dispatches need no locking.
# =============================================================================

import inspect
import logging
from typing import Any, Optional

from pydantic import ValidationError

from core.errors import (
    DuplicateToolError,
    InvalidArgumentsError,
    OutputContractError,
    UnknownToolError,
)
from core.models import ToolDefinition, ToolResult

logger = logging.getLogger(__name__)


def _field_messages(error: ValidationError) -> list[str]:
    """Flatten pydantic errors into "field: message" strings."""
    messages = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "arguments"
        messages.append(f"{location}: {item['msg']}")
    return messages


class ToolRegistry:
    """Process-wide table of tools, keyed by name."""

    def __init__(self):
        self._tools: dict[str, ToolDefinition] = {}

    def register(self, definition: ToolDefinition) -> ToolDefinition:
        if definition.name in self._tools:
            raise DuplicateToolError(definition.name)
        self._tools[definition.name] = definition
        return definition

    def get(self, name: str) -> ToolDefinition:
        try:
            return self._tools[name]
        except KeyError:
            raise UnknownToolError(name) from None

    def names(self) -> list[str]:
        return list(self._tools)

    def definitions(self) -> list[ToolDefinition]:
        return list(self._tools.values())

    async def dispatch(self, name: str, raw_args: Optional[dict[str, Any]] = None) -> ToolResult:
        """Validate `raw_args`, run the named tool and return its result."""
        definition = self.get(name)

        try:
            arguments = definition.input_model.model_validate(raw_args or {})
        except ValidationError as e:
            messages = _field_messages(e)
            logger.info("Rejected arguments for %s: %s", name, messages)
            raise InvalidArgumentsError(name, messages) from None

        logger.debug("Dispatching %s with %r", name, arguments)
        result = definition.handler(arguments)
        if inspect.isawaitable(result):
            result = await result

        if not isinstance(result, ToolResult):
            raise OutputContractError(name, f"expected ToolResult, got {type(result).__name__}")

        if definition.output_model is not None:
            try:
                definition.output_model.model_validate(result.to_dict())
            except ValidationError as e:
                raise OutputContractError(name, "; ".join(_field_messages(e))) from e

        return result
