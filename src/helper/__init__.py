"""Helper — состояние и командная поверхность."""

from .morpho_helper import ClientFactories, MorphoHelper
from .state import STATE_SCHEMA_VERSION, HelperState

__all__ = [
    "ClientFactories",
    "MorphoHelper",
    "HelperState",
    "STATE_SCHEMA_VERSION",
]
