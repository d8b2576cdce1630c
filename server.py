#!/usr/bin/env python3
"""Thin runner for the MCP server; delegates to `mcp_vision.server.start()`.

Provides `python server.py` for local development and MCP client configs
that point at a script instead of the `mcp-vision` console script.
"""
import sys
from mcp_vision.server import start


def main() -> None:
    try:
        start()
    except KeyboardInterrupt:
        pass
    except Exception as e:
        print(f"Failed to start MCP Vision server: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
