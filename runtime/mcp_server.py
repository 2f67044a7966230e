"""Telegram MCP server — exposes the tool catalog over stdio transport."""

from __future__ import annotations

from typing import Any

import anyio
import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from runtime.mcp_helpers import init_server
from runtime.server import TelegramMCPServer

# ── Initialisation ────────────────────────────────────────────────────

_server: TelegramMCPServer | None = None

app: Server = Server("telegram")


def _get_server() -> TelegramMCPServer:
    """Return the initialised server, lazily loading on first access."""
    global _server  # noqa: PLW0603
    if _server is None:
        _server = init_server()
    return _server


# ── MCP handlers ──────────────────────────────────────────────────────


@app.list_tools()
async def list_tools() -> list[types.Tool]:
    return [
        types.Tool(
            name=descriptor.name,
            description=descriptor.description,
            inputSchema=descriptor.input_schema,
        )
        for descriptor in _get_server().get_tools()
    ]


# Handlers check their own arguments; int64 ids may arrive as decimal strings.
@app.call_tool(validate_input=False)
async def call_tool(name: str, arguments: dict[str, Any] | None) -> list[types.TextContent]:
    return await _get_server().execute_tool(name, arguments or {})


# ── Entry point ───────────────────────────────────────────────────────


async def serve() -> None:
    """Start the Telegram client and serve MCP over stdin/stdout until EOF."""
    server = _get_server()
    await server.start()
    try:
        async with stdio_server() as (read_stream, write_stream):
            await app.run(read_stream, write_stream, app.create_initialization_options())
    finally:
        await server.stop()


def main() -> None:
    anyio.run(serve)


if __name__ == "__main__":
    main()
