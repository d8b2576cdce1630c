"""MCP stdio server exposing the `vision.analyze` tool."""
from typing import Any, Dict, List, Optional
import asyncio
import logging

import mcp.types as types
from mcp.server import Server
from mcp.server.stdio import stdio_server

from . import __version__
from .config import Settings, load_config, setup_logging
from .errors import VisionError
from .json_api import handle_json_request

logger = logging.getLogger(__name__)

SERVER_NAME = "mcp-vision"
TOOL_NAME = "vision.analyze"

TOOL_DESCRIPTION = (
    "Send images + an instruction to Gemini Flash-Lite; returns raw text. "
    "Accepts images as URLs (https://...), file URLs (file://...), absolute paths (/path/to/img), "
    "or data URIs (data:image/...;base64,...). "
    "HTTP(S) URLs are fetched and validated. All images are validated as real images and "
    "auto-resized if needed (default max 2048px). "
    "Pass a natural language instruction and get back the model's text response. "
    "For structured output, request JSON format in your instruction "
    "(e.g., 'Return JSON with {overlap: boolean, examples: [...]}'). "
    "Examples: 'Do any borders overlap text?', 'Rate whitespace 0-1 and suggest one fix', "
    "'Extract all button labels as JSON array'."
)


def tool_input_schema(max_images: int) -> Dict[str, Any]:
    return {
        "type": "object",
        "properties": {
            "images": {
                "oneOf": [
                    {"type": "string"},
                    {
                        "type": "array",
                        "items": {"type": "string"},
                        "minItems": 1,
                        "maxItems": max_images,
                    },
                ],
                "description": "One or more images as URLs, file paths, file:// URLs, or data URIs",
            },
            "instruction": {
                "type": "string",
                "minLength": 1,
                "description": (
                    "Natural language task for the screenshot(s). "
                    "Request JSON format if you need structured output."
                ),
            },
        },
        "required": ["images", "instruction"],
        "additionalProperties": False,
    }


def create_server(settings: Settings) -> Server:
    server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def list_tools() -> List[types.Tool]:
        return [
            types.Tool(
                name=TOOL_NAME,
                description=TOOL_DESCRIPTION,
                inputSchema=tool_input_schema(settings.max_images),
            )
        ]

    @server.call_tool()
    async def call_tool(name: str, arguments: Optional[Dict[str, Any]]) -> List[types.TextContent]:
        return await run_tool(name, arguments, settings)

    return server


async def run_tool(name: str, arguments: Optional[Dict[str, Any]], settings: Settings) -> List[types.TextContent]:
    """Run one tool call; raising makes the SDK report it as a tool error."""
    if name != TOOL_NAME:
        raise VisionError(f"Unknown tool: {name}")
    args = arguments or {}
    req = {"action": "analyze", "images": args.get("images"), "instruction": args.get("instruction")}
    # the pipeline does blocking network and file I/O
    resp = await asyncio.to_thread(handle_json_request, req, settings)
    if not resp["ok"]:
        raise VisionError("; ".join(resp["errors"]))
    return [types.TextContent(type="text", text=resp["text"])]


async def serve(settings: Settings) -> None:
    server = create_server(settings)
    async with stdio_server() as (read_stream, write_stream):
        logger.info("MCP Vision server running on stdio (provider=%s)", settings.provider)
        await server.run(read_stream, write_stream, server.create_initialization_options())


def start() -> None:
    settings = load_config()
    setup_logging(settings.log_level)
    asyncio.run(serve(settings))
