# =============================================================================
# core/__init__.py
# =============================================================================
# This package contains ALL tool logic: the registry, the handlers, the
# resource and prompt builders.
#
# CRITICAL ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP or the MCP SDK.  The handlers
#   talk to the outside world only through httpx and huggingface_hub, and
#   both are replaceable in tests.
# =============================================================================
