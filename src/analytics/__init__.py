"""Analytics — read-only метрики рынков и позиций."""

from .reader import (
    AnalyticsReader,
    compute_collateral_value,
    compute_health_factor,
    compute_supply_rate,
    compute_utilization,
)

__all__ = [
    "AnalyticsReader",
    "compute_collateral_value",
    "compute_health_factor",
    "compute_supply_rate",
    "compute_utilization",
]
