# =============================================================================
# main.py  —  Entry Point for the Multitool MCP Server
# =============================================================================
#
# HOW TO RUN:
#   uv run python main.py                       # stdio (MCP desktop clients)
#   uv run python main.py --transport http      # streamable HTTP on :8000
#
# WHAT HAPPENS:
#   1. Loads .env (HF_TOKEN, MCP_TRANSPORT, LOG_LEVEL, ...)
#   2. Imports the FastMCP server, which builds the tool registry
#   3. Runs the server on the chosen transport until interrupted
#
# Command-line flags override the MCP_TRANSPORT / MCP_HOST / MCP_PORT
# environment variables.
# =============================================================================

import argparse

from dotenv import load_dotenv

# Load environment variables from .env BEFORE importing the server: the
# server module reads its configuration at import time.
load_dotenv()

from tools.mcp_server import CONFIG, mcp


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the multitool MCP server.")
    parser.add_argument("--transport", choices=("stdio", "http"), default=CONFIG.transport)
    parser.add_argument("--host", default=CONFIG.host)
    parser.add_argument("--port", type=int, default=CONFIG.port)
    return parser.parse_args(argv)


def main(argv=None) -> None:
    args = parse_args(argv)
    if args.transport == "http":
        mcp.run(transport="http", host=args.host, port=args.port)
    else:
        mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
