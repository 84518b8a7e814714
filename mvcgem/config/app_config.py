"""
Application configuration component.
YAML file first, environment overrides on top, dotted lookups on the way out.
"""

import copy
import os
from typing import Any, Dict, Optional

import yaml

from mvcgem.logger import create_logger

ENV_OVERRIDE_PREFIX = "MVCGEM_CFG__"


class AppConfig:
    """Nested application configuration exposed to the container's Config role."""

    def __init__(self, config_file: Optional[str] = None, data: Optional[Dict[str, Any]] = None):
        self.config_file = config_file or os.getenv("MVCGEM_CONFIG_FILE", "mvcgem.yml")
        self.logger = create_logger("AppConfig")
        self._data: Dict[str, Any] = {}

        if data is not None:
            self._data = copy.deepcopy(data)
        else:
            self.load_config()

    def load_config(self) -> None:
        """Load configuration from file and environment."""
        config_data: Dict[str, Any] = {}

        if os.path.exists(self.config_file):
            with open(self.config_file, "r", encoding="utf-8") as f:
                config_data = yaml.safe_load(f) or {}
            if not isinstance(config_data, dict):
                raise ValueError(f"Config file '{self.config_file}' must contain a mapping")
            self.logger.info("Loaded application config", file=self.config_file)
        else:
            self.logger.debug("No application config file found", file=self.config_file)

        self._apply_env_overrides(config_data)
        self._data = config_data

    def _apply_env_overrides(self, config_data: Dict[str, Any]) -> None:
        """MVCGEM_CFG__router__prefix=/api sets config_data["router"]["prefix"]."""
        for env_var, raw in os.environ.items():
            if not env_var.startswith(ENV_OVERRIDE_PREFIX):
                continue
            path = env_var[len(ENV_OVERRIDE_PREFIX):].lower().replace("__", ".")
            if not path:
                continue
            self._set_nested(config_data, path, yaml.safe_load(raw))

    @staticmethod
    def _set_nested(config: Dict[str, Any], path: str, value: Any) -> None:
        """Set nested configuration value."""
        keys = path.split(".")
        current = config

        for key in keys[:-1]:
            if not isinstance(current.get(key), dict):
                current[key] = {}
            current = current[key]

        current[keys[-1]] = value

    def get_config(self, key: Optional[str] = None, default: Any = None) -> Any:
        """
        Return the value under a dotted key ("router.prefix"),
        the whole tree when key is None, default when any segment is missing.
        """
        if key is None:
            return self._data

        current: Any = self._data
        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                return default
            current = current[part]
        return current

    def set_config(self, key: str, value: Any) -> None:
        self._set_nested(self._data, key, value)

    def __contains__(self, key: str) -> bool:
        marker = object()
        return self.get_config(key, marker) is not marker
