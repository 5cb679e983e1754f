"""Configuration module for Meridian.

This module provides global access to the optional YAML configuration with
environment variable resolution.
"""

from .config import ClientConfig, Config, ConfigData, LoggingConfig, ServerConfig

__all__ = ["Config", "ConfigData", "ServerConfig", "ClientConfig", "LoggingConfig"]
