"""Meridian: an MCP time tool server and its stdio test client."""

__version__ = "1.0.0"
