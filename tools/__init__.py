# =============================================================================
# tools/__init__.py
# =============================================================================
# This package contains the FastMCP server.
#
# ARCHITECTURAL ROLE:
#   tools/ is the "translation layer" between MCP and the core logic.  It:
#     1. Declares each tool's MCP-visible signature
#     2. Forwards calls to core.registry.ToolRegistry.dispatch()
#     3. Converts core ToolResults into MCP text/image content
#     4. Logs every request and response to stderr
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT contain tool logic (that's in core/)
#   - They do NOT catch handler failures (handlers report those as text)
# =============================================================================
