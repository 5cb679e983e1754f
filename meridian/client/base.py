import abc
from typing import Any

from meridian.exceptions import RpcError
from meridian.tools.models import ToolDescriptor, ToolResult


class BaseClient(abc.ABC):
    """Abstract base class for MCP clients."""

    @abc.abstractmethod
    async def connect(self, command: str, args: list[str] | None = None) -> dict[str, Any]:
        """Start the server and perform the initialize handshake.

        Args:
            command: The command to execute
            args: List of arguments for the command

        Returns:
            The raw initialize response
        """
        pass

    @abc.abstractmethod
    async def request(self, method: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        """Send a JSON-RPC request and wait for its response.

        Args:
            method: JSON-RPC method name
            params: Request parameters

        Returns:
            The raw response object
        """
        pass

    @abc.abstractmethod
    async def close(self) -> None:
        """Stop the server process/connection."""
        pass

    @abc.abstractmethod
    def is_alive(self) -> bool:
        """Check if the server connection/process is alive."""
        pass

    async def call_tool(self, name: str, arguments: dict[str, Any] | None = None) -> ToolResult:
        """Invoke a tool by name.

        Args:
            name: Tool name
            arguments: Tool arguments

        Returns:
            The tool result envelope
        """
        response = await self.request("tools/call", {"name": name, "arguments": arguments or {}})
        return ToolResult.model_validate(self._result_of(response))

    async def list_tools(self) -> list[ToolDescriptor]:
        """List the tools advertised by the server."""
        response = await self.request("tools/list")
        tools = self._result_of(response).get("tools", [])
        return [ToolDescriptor.model_validate(tool) for tool in tools]

    def _result_of(self, response: dict[str, Any]) -> dict[str, Any]:
        """Return the result member of a response, raising RpcError for error responses."""
        error = response.get("error")
        if isinstance(error, dict):
            raise RpcError(error.get("code", 0), error.get("message", "Unknown error"), error.get("data"))
        result = response.get("result")
        return result if isinstance(result, dict) else {}
