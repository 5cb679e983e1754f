"""Tool registry: descriptor listing and validated dispatch."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ValidationError

from meridian.clock import Clock, SystemClock
from meridian.exceptions import ToolError
from meridian.tools import time_tools
from meridian.tools.models import GetCurrentTimeArgs, GetTimezoneOffsetArgs, ToolDescriptor, ToolResult

logger = logging.getLogger(__name__)

ToolHandler = Callable[[Any, Clock], str]

_REQUIRED_ERROR_TYPES = {"missing", "string_too_short"}


@dataclass(frozen=True)
class RegisteredTool:
    """A tool descriptor bound to its argument model and handler."""

    descriptor: ToolDescriptor
    args_model: type[BaseModel]
    handler: ToolHandler


def default_tools() -> list[RegisteredTool]:
    """Return the built-in time tools."""
    return [
        RegisteredTool(time_tools.GET_CURRENT_TIME, GetCurrentTimeArgs, time_tools.get_current_time),
        RegisteredTool(time_tools.GET_TIMEZONE_OFFSET, GetTimezoneOffsetArgs, time_tools.get_timezone_offset),
    ]


def describe_validation_error(tool_name: str, error: ValidationError) -> str:
    """Turn a pydantic ValidationError into a tool-level error message.

    A missing required field reads "Error: Timezone parameter is required";
    anything else names the field and pydantic's reason.
    """
    first = error.errors()[0]
    field = ".".join(str(part) for part in first["loc"]) or "arguments"
    if first["type"] in _REQUIRED_ERROR_TYPES:
        return f"Error: {field.capitalize()} parameter is required"
    return f"Error: Invalid arguments for {tool_name}: {field}: {first['msg']}"


class ToolRegistry:
    """Holds the static tool catalog and dispatches calls to handlers."""

    def __init__(self, clock: Clock | None = None, tools: list[RegisteredTool] | None = None):
        """
        Initialize the registry.

        Args:
            clock: Time and zone provider passed to every handler. Defaults to SystemClock.
            tools: Tools to register. Defaults to the built-in time tools.
        """
        self._clock = clock or SystemClock()
        self._tools = {tool.descriptor.name: tool for tool in (tools or default_tools())}

    @property
    def clock(self) -> Clock:
        return self._clock

    def descriptors(self) -> list[ToolDescriptor]:
        """Return the descriptors of all registered tools, in registration order."""
        return [tool.descriptor for tool in self._tools.values()]

    def call(self, name: str, arguments: dict[str, Any] | None = None) -> ToolResult:
        """Validate arguments and run a tool.

        Tool-level failures (unknown tool, invalid arguments, ToolError raised
        by a handler) come back as results with is_error set. Any other
        exception raised by a handler propagates.

        Args:
            name: Tool name.
            arguments: Raw argument mapping from the request.

        Returns:
            The tool result envelope.
        """
        tool = self._tools.get(name)
        if tool is None:
            logger.warning(f"Call to unknown tool: {name}")
            return ToolResult.failure(f"Error: Unknown tool: {name}")

        try:
            args = tool.args_model.model_validate(arguments or {})
        except ValidationError as e:
            return ToolResult.failure(describe_validation_error(name, e))

        try:
            text = tool.handler(args, self._clock)
        except ToolError as e:
            return ToolResult.failure(str(e))

        return ToolResult.success(text)
