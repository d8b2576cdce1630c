#!/usr/bin/env python3
"""Thin runner for the command line analyzer; delegates to `mcp_vision.cli.main()`."""
from mcp_vision.cli import main


if __name__ == "__main__":
    main()
