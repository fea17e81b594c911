"""Configuration — адресные книги окружений (YAML → pydantic)."""

from .config_manager import ConfigManager
from .settings import DEFAULT_ENVIRONMENT, HelperConfig

__all__ = [
    "ConfigManager",
    "DEFAULT_ENVIRONMENT",
    "HelperConfig",
]
