"""Stdio test client for MCP servers."""

from .base import BaseClient
from .stdio import REQUEST_TIMEOUT_SECONDS, StdioClient

__all__ = ["BaseClient", "StdioClient", "REQUEST_TIMEOUT_SECONDS"]
