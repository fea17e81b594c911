"""Governance — авторизация upgrade-ов реализации."""

from .upgrade import UpgradeAuthorization, UpgradeGovernor

__all__ = [
    "UpgradeAuthorization",
    "UpgradeGovernor",
]
