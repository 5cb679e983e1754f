"""Time tools exposed by the Meridian server."""

from .models import ToolDescriptor, ToolResult
from .registry import RegisteredTool, ToolRegistry, default_tools

__all__ = ["ToolDescriptor", "ToolResult", "ToolRegistry", "RegisteredTool", "default_tools"]
