"""Configuration loader for Meridian.

Loads an optional YAML file with support for environment variable resolution
(values prefixed with 'env.'). Every setting has a default, so the server and
client run without any configuration file.
"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

DEFAULT_CONFIG_FILE = "meridian.yaml"
CONFIG_PATH_ENV = "MERIDIAN_CONFIG"


class ServerConfig(BaseModel):
    """Identity the tool server reports during the handshake."""

    name: str = Field(default="mcp-time-server", description="Server name")
    version: str = Field(default="1.0.0", description="Server version")


class ClientConfig(BaseModel):
    """Identity and protocol version the test client sends on initialize."""

    name: str = Field(default="working-client", description="Client name")
    version: str = Field(default="1.0.0", description="Client version")
    protocol_version: str = Field(default="2024-11-05", description="MCP protocol version")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", description="Root log level")


class ConfigData(BaseModel):
    """Complete configuration data structure."""

    server: ServerConfig = Field(default_factory=ServerConfig)
    client: ClientConfig = Field(default_factory=ClientConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


class Config:
    """Global configuration singleton for Meridian.

    The file is looked up from the explicit path, then the MERIDIAN_CONFIG
    environment variable, then ./meridian.yaml. Values prefixed with 'env.'
    are resolved from environment variables.

    Example:
        logging:
          level: env.MERIDIAN_LOG_LEVEL  # Loads from os.getenv("MERIDIAN_LOG_LEVEL")

    Usage:
        from meridian.config import Config

        config = Config()
        print(config.data.server.name)
    """

    _instance: "Config | None" = None

    def __new__(cls, config_path: str | None = None) -> "Config":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_path: str | None = None) -> None:
        """Initialize the configuration (only runs once).

        Args:
            config_path: Path to a YAML file. Ignored after first init.
        """
        if self._initialized:
            return

        self._explicit = config_path is not None or os.getenv(CONFIG_PATH_ENV) is not None
        self._config_file = Path(self._resolve_config_path(config_path))
        self._raw_config: dict[str, Any] = {}
        self._data: ConfigData | None = None

        self._load()
        self._initialized = True

    def _resolve_config_path(self, config_path: str | None) -> str:
        if config_path is not None:
            return config_path

        env_path = os.getenv(CONFIG_PATH_ENV)
        if env_path is not None:
            return env_path

        return DEFAULT_CONFIG_FILE

    def _load(self) -> None:
        """Load and parse the configuration file, falling back to defaults."""
        if not self._config_file.exists():
            if self._explicit:
                raise FileNotFoundError(f"Configuration file not found: {self._config_file}")
            self._raw_config = {}
            self._data = ConfigData()
            return

        with open(self._config_file, encoding="utf-8") as f:
            self._raw_config = yaml.safe_load(f) or {}

        resolved_config = self._resolve_env_values(self._raw_config)
        self._data = ConfigData.model_validate(resolved_config)

    def _resolve_env_values(self, data: Any) -> Any:
        """Recursively resolve 'env.' references; unset variables become None."""
        if isinstance(data, dict):
            return {
                key: resolved
                for key, value in data.items()
                if (resolved := self._resolve_env_values(value)) is not None
            }

        if isinstance(data, list):
            return [self._resolve_env_values(item) for item in data]

        if isinstance(data, str) and data.startswith("env."):
            return os.getenv(data[4:])

        return data

    @property
    def data(self) -> ConfigData:
        """Get the parsed configuration data.

        Raises:
            RuntimeError: If configuration hasn't been loaded.
        """
        if self._data is None:
            raise RuntimeError("Configuration not loaded")
        return self._data

    @property
    def config_file(self) -> Path:
        return self._config_file

    def reload(self) -> None:
        """Reload the configuration from disk."""
        self._load()

    @classmethod
    def reset_instance(cls) -> None:
        """Reset the singleton instance (mainly for testing)."""
        cls._instance = None
