"""
Domain models and value objects.

Contains ledger market descriptors, move instructions, allocation batches,
flow caps and analytics snapshots.
"""

from src.core.domain.allocation import (
    ABSORB_ALL,
    FlowCaps,
    FlowCapsConfig,
    MarketAllocation,
    MoveInstruction,
    MoveInstructionById,
)
from src.core.domain.market import (
    MarketBalances,
    MarketParams,
    MarketState,
    PositionState,
    checksum_address,
    market_id_for,
    normalize_market_id,
)
from src.core.domain.snapshots import MarketData, PositionData

__all__ = [
    # Market model
    "MarketParams",
    "MarketState",
    "PositionState",
    "MarketBalances",
    "checksum_address",
    "market_id_for",
    "normalize_market_id",
    # Allocation model
    "ABSORB_ALL",
    "MoveInstruction",
    "MoveInstructionById",
    "MarketAllocation",
    "FlowCaps",
    "FlowCapsConfig",
    # Snapshots
    "MarketData",
    "PositionData",
]
