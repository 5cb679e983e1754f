"""Utility modules for Meridian."""

from .logging_utils import configure_logging, log_tool_call

__all__ = ["configure_logging", "log_tool_call"]
