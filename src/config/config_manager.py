"""
Configuration manager with environment-based loading.

Loads, in order (later overrides earlier):
1. base.yaml — shared defaults (required)
2. {env}.yaml — environment address book (optional)

The environment defaults to the ENVIRONMENT variable, then "development".
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from src.config.settings import DEFAULT_ENVIRONMENT, HelperConfig
from src.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class ConfigManager:
    def __init__(self, config_dir: str | Path = "config", env: Optional[str] = None):
        self.config_dir = Path(config_dir)
        self.env = env or os.environ.get("ENVIRONMENT", DEFAULT_ENVIRONMENT)
        self.config: Dict[str, Any] = {}

    def load(self) -> HelperConfig:
        """
        Load and validate configuration.

        Raises:
            FileNotFoundError: If base.yaml is missing.
            ConfigurationError: If YAML is malformed or values are invalid.
        """
        base_path = self.config_dir / "base.yaml"
        if not base_path.exists():
            raise FileNotFoundError(f"Base config not found: {base_path}")

        self.config = self._load_yaml(base_path)

        env_path = self.config_dir / f"{self.env}.yaml"
        if env_path.exists():
            self.config = self._deep_merge(self.config, self._load_yaml(env_path))
            logger.info("Loaded %s config overlay from %s", self.env, env_path)
        else:
            logger.debug("No overlay for environment %s at %s", self.env, env_path)

        self.config["environment"] = self.env

        try:
            return HelperConfig(**self.config)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration for {self.env}: {e}") from e

    def _load_yaml(self, path: Path) -> Dict[str, Any]:
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Malformed YAML in {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Config root must be a mapping: {path}")
        return data

    def _deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        result = dict(base)
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value
        return result
