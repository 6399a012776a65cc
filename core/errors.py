# =============================================================================
# core/errors.py  —  Exception hierarchy
# =============================================================================
#
# Only the registry's own errors ever leave core/:
#   - UnknownToolError / InvalidArgumentsError: the caller sent a bad request
#   - DuplicateToolError / OutputContractError: the server itself is wrong
#
# UpstreamError is raised by the HTTP clients and caught by the handler that
# owns the call.  It becomes a "Error: ..." text result, never a protocol
# failure.
# =============================================================================


class ToolServerError(Exception):
    """Base class for everything this package raises on purpose."""


class UnknownToolError(ToolServerError):
    def __init__(self, name: str):
        super().__init__(f"Unknown tool: '{name}'")
        self.name = name


class DuplicateToolError(ToolServerError):
    def __init__(self, name: str):
        super().__init__(f"Tool '{name}' is already registered")
        self.name = name


class InvalidArgumentsError(ToolServerError):
    """Arguments failed schema validation; the handler never ran."""

    def __init__(self, tool: str, messages: list[str]):
        self.tool = tool
        self.messages = list(messages)
        super().__init__(f"Invalid arguments for '{tool}': " + "; ".join(self.messages))


class OutputContractError(ToolServerError):
    """A handler produced a result that does not match its declared output model."""

    def __init__(self, tool: str, detail: str):
        super().__init__(f"Tool '{tool}' returned a result that violates its output schema: {detail}")
        self.tool = tool
        self.detail = detail


class UpstreamError(ToolServerError):
    """An outbound service answered with a failure or an unusable body."""
