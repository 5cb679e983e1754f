"""MCP time server over stdio.

Runs the low-level MCP server from the ``mcp`` SDK, which owns the JSON-RPC
framing, the initialize handshake and protocol-level errors. This module only
maps tools/list and tools/call onto the ToolRegistry.
"""

import asyncio
import logging
import sys
from typing import Any

from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from meridian.config import Config, ServerConfig
from meridian.exceptions import ToolError
from meridian.tools import ToolRegistry
from meridian.utils.logging_utils import configure_logging

logger = logging.getLogger(__name__)


def create_server(registry: ToolRegistry | None = None, server_config: ServerConfig | None = None) -> Server:
    """Build an MCP server exposing the registry's tools.

    Args:
        registry: Tool registry to serve. Defaults to the built-in time tools on the system clock.
        server_config: Name and version reported in the handshake.

    Returns:
        The configured, not yet running, server.
    """
    registry = registry or ToolRegistry()
    server_config = server_config or ServerConfig()
    server: Server = Server(server_config.name, version=server_config.version)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return [
            types.Tool(name=descriptor.name, description=descriptor.description, inputSchema=descriptor.input_schema)
            for descriptor in registry.descriptors()
        ]

    # Arguments are validated by the registry's models, not the SDK's jsonschema check
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: dict[str, Any]) -> list[types.TextContent]:
        result = registry.call(name, arguments)
        if result.is_error:
            # The SDK reports exceptions from tool handlers as isError results
            raise ToolError(result.text)
        return [types.TextContent(type="text", text=block.text or "") for block in result.content]

    return server


async def serve(server: Server) -> None:
    """Serve requests on stdin/stdout until the input stream closes."""
    async with stdio_server() as (read_stream, write_stream):
        logger.info("MCP Time Server started")
        await server.run(read_stream, write_stream, server.create_initialization_options())
    logger.info("MCP Time Server stopped")


def main() -> None:
    """Run the MCP time server on stdio."""
    config = Config()
    configure_logging(config.data.logging.level)

    server = create_server(server_config=config.data.server)
    try:
        asyncio.run(serve(server))
    except KeyboardInterrupt:
        pass
    except Exception:
        logger.exception("Server error")
        sys.exit(1)


if __name__ == "__main__":
    main()
