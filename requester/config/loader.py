"""Configuration loader for requester.

Loads the YAML defaults shipped next to this module and provides a singleton
config object for easy access throughout the package.
"""

from pathlib import Path
from typing import Any, cast

import yaml

from ..exceptions import ConfigurationError

CONFIG_FILES = {
    "http": "http_config.yaml",
    "context": "context_config.yaml",
}


class Config:
    """Configuration manager that loads and provides access to all config files."""

    def __init__(self, config_dict: dict[str, Any] | None = None, config_dir: Path | None = None):
        """
        Initialize the configuration manager.

        Args:
            config_dict: Optional dictionary of config values for testing.
                        If provided, config files won't be loaded from disk.
            config_dir: Directory holding the YAML files (defaults to this package)
        """
        self._configs: dict[str, Any]
        self._config_dir: Path | None

        if config_dict is not None:
            # Testing mode: use provided config
            self._configs = config_dict
            self._config_dir = None
        else:
            self._configs = {}
            self._config_dir = config_dir or Path(__file__).resolve().parent
            self._load_all_configs()

    def _load_all_configs(self):
        """Load all YAML configuration files from the config directory."""
        if self._config_dir is None:
            return

        for key, filename in CONFIG_FILES.items():
            config_path = self._config_dir / filename
            if not config_path.exists():
                self._configs[key] = {}
                continue

            with open(config_path, encoding="utf-8") as f:
                loaded_config = yaml.safe_load(f)

            if not isinstance(loaded_config, dict):
                raise ConfigurationError(
                    f"{filename} must contain a dictionary, got {type(loaded_config).__name__}",
                    config_key=key,
                )
            self._configs[key] = loaded_config

    def get(self, path: str, default: Any = None) -> Any:
        """Get a configuration value using dot notation.

        Args:
            path: Dot-separated path to the config value (e.g., "http.timeout_seconds")
            default: Default value to return if path is not found

        Returns:
            The configuration value or default if not found

        Example:
            >>> config.get("http.timeout_seconds")
            60
        """
        parts = path.split(".")
        value = self._configs

        for part in parts:
            if isinstance(value, dict) and part in value:
                value = value[part]
            else:
                return default

        return value

    def get_required(self, path: str) -> Any:
        """Get a configuration value that must be present.

        Raises:
            ConfigurationError: If the path is missing or set to null
        """
        value = self.get(path)
        if value is None:
            raise ConfigurationError("required value is missing", config_key=path)
        return value

    @property
    def http(self) -> dict[str, Any]:
        """Get HTTP transport configuration."""
        return cast(dict[str, Any], self._configs.get("http", {}))

    @property
    def context(self) -> dict[str, Any]:
        """Get context configuration."""
        return cast(dict[str, Any], self._configs.get("context", {}))

    def reload(self):
        """Reload all configuration files."""
        self._configs.clear()
        self._load_all_configs()


# Create a singleton instance
config = Config()
