"""
MCP server exposing the generator tools over stdio.

Envelope rules for ``tools/call``:

- success: one text block holding the result JSON, ``isError`` false. A
  NotFound outcome is a success whose JSON is ``{"error": ...}``.
- unknown tool, invalid arguments, or an unavailable table: one text block
  holding ``{"error": <message>}``, ``isError`` true.
"""

from __future__ import annotations

import json
from typing import Any

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from gmtools.config.logging import get_logger
from gmtools.config.settings import ServerSettings, Settings
from gmtools.data.fetcher import DataUnavailable, HttpTableFetcher
from gmtools.tools.base import InvalidArgumentsError, ToolAdapter, UnknownToolError
from gmtools.tools.generator_tool import GeneratorToolAdapter

logger = get_logger(__name__)


def build_call_result(payload: dict[str, Any], is_error: bool = False) -> types.CallToolResult:
    """Wrap a JSON payload in an MCP tool result."""
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=json.dumps(payload, indent=2))],
        isError=is_error,
    )


async def dispatch_tool_call(
    adapter: ToolAdapter, name: str, arguments: dict[str, Any] | None
) -> types.CallToolResult:
    """Run one tool call and wrap its outcome in the MCP envelope."""
    try:
        payload = await adapter.call(name, arguments or {})
    except UnknownToolError as e:
        return build_call_result({"error": str(e)}, is_error=True)
    except (InvalidArgumentsError, DataUnavailable) as e:
        logger.warning(f"Tool {name!r} failed: {e}")
        return build_call_result({"error": str(e)}, is_error=True)
    return build_call_result(payload)


def mcp_tools(adapter: ToolAdapter) -> list[types.Tool]:
    """Convert the adapter's tool schemas to MCP Tool definitions."""
    return [
        types.Tool(
            name=tool["name"],
            description=tool["description"],
            inputSchema=tool["input_schema"],
        )
        for tool in adapter.list_tools()
    ]


def create_server(adapter: ToolAdapter, settings: ServerSettings) -> Server:
    """
    Build an MCP server bound to a tool adapter.

    The adapter must already be initialized; the server does not own it.
    """
    server = Server(settings.name, version=settings.version)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return mcp_tools(adapter)

    # Enums and ranges in the schemas are advisory, so the SDK's own
    # jsonschema check is switched off; the adapter validates types.
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: dict[str, Any]) -> types.CallToolResult:
        return await dispatch_tool_call(adapter, name, arguments)

    return server


async def serve(settings: Settings) -> None:
    """Serve the generator tools over stdio until the client disconnects."""
    fetcher = HttpTableFetcher(settings.data)
    async with GeneratorToolAdapter(fetcher) as adapter:
        server = create_server(adapter, settings.server)
        logger.info(
            f"Starting MCP server {settings.server.name} {settings.server.version} "
            f"(data: {settings.data.base_url})"
        )
        async with stdio_server() as (read_stream, write_stream):
            await server.run(
                read_stream,
                write_stream,
                server.create_initialization_options(),
            )
