"""Drive the time server end to end and print what it returns.

Usage:
    python -m meridian.client.demo                # runs `python -m meridian.server`
    python -m meridian.client.demo node index.js  # any other stdio server
"""

import asyncio
import logging
import sys

from meridian.client.base import BaseClient
from meridian.client.stdio import StdioClient
from meridian.config import Config
from meridian.utils.logging_utils import configure_logging

logger = logging.getLogger(__name__)


def default_server_command() -> list[str]:
    return [sys.executable, "-m", "meridian.server"]


async def run_demo(client: BaseClient) -> None:
    """List the tools and exercise both of them on a connected client."""
    tools = await client.list_tools()
    print("\nAvailable tools:")
    for tool in tools:
        print(f"  • {tool.name}: {tool.description}")

    print("\n--- Testing get_current_time ---")

    iso_time = await client.call_tool("get_current_time", {})
    print("Default (ISO):", iso_time.text)

    unix_time = await client.call_tool("get_current_time", {"format": "unix"})
    print("Unix timestamp:", unix_time.text)

    ny_time = await client.call_tool("get_current_time", {"format": "locale", "timezone": "America/New_York"})
    print("NY locale:", ny_time.text)

    print("\n--- Testing get_timezone_offset ---")

    for timezone in ("America/New_York", "Europe/London", "Asia/Tokyo"):
        offset = await client.call_tool("get_timezone_offset", {"timezone": timezone})
        print(offset.text)

    print("\n✓ All tests passed!")


async def _main(command: list[str]) -> None:
    client_config = Config().data.client
    client = StdioClient(
        client_name=client_config.name,
        client_version=client_config.version,
        protocol_version=client_config.protocol_version,
    )
    try:
        await client.connect(command[0], command[1:])
        print("Connected to MCP server")
        await run_demo(client)
    finally:
        await client.close()


def main() -> None:
    """Entry point for the demo client."""
    configure_logging(Config().data.logging.level)
    command = sys.argv[1:] or default_server_command()

    try:
        asyncio.run(_main(command))
    except Exception as e:
        logger.error(f"Error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
