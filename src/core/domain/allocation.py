"""
Allocation — Модели инструкций перераспределения

- MoveInstruction / MoveInstructionById — "сдвинуть amount из рынка"
  (amount > 0 — withdraw, amount < 0 — deposit)
- MarketAllocation — элемент батча для vault: абсолютная целевая позиция
- FlowCaps / FlowCapsConfig — лимиты public-reallocation facility

Инструкции не сохраняются: создаются на вызов и потребляются сразу.
"""

from typing import Final

from pydantic import BaseModel, Field, field_validator

from src.core.domain.market import MarketParams, normalize_market_id
from src.core.math.fixed_point import MAX_UINT128, MAX_UINT256
from src.core.math.numerical_safeguards import INT256_MAX, INT256_MIN

# =============================================================================
# CONSTANTS
# =============================================================================

# Sentinel целевой позиции: "забрать всё, что осталось"
ABSORB_ALL: Final[int] = MAX_UINT256


# =============================================================================
# MOVE INSTRUCTIONS
# =============================================================================


class MoveInstruction(BaseModel):
    """Инструкция по рынку-источнику, заданному descriptor-ом."""

    market: MarketParams = Field(..., description="Рынок-источник")
    amount: int = Field(
        ..., ge=INT256_MIN, le=INT256_MAX, description="> 0 withdraw, < 0 deposit"
    )

    model_config = {"frozen": True}


class MoveInstructionById(BaseModel):
    """Инструкция по рынку-источнику, заданному market id."""

    market_id: str = Field(..., description="Market id (32 bytes hex)")
    amount: int = Field(
        ..., ge=INT256_MIN, le=INT256_MAX, description="> 0 withdraw, < 0 deposit"
    )

    model_config = {"frozen": True}

    @field_validator("market_id")
    @classmethod
    def validate_market_id(cls, v: str) -> str:
        return normalize_market_id(v)


# =============================================================================
# ALLOCATION BATCH
# =============================================================================


class MarketAllocation(BaseModel):
    """
    Элемент батча, отправляемого в vault.

    assets — абсолютная целевая позиция vault-а в рынке,
    либо ABSORB_ALL для рынка-получателя.
    """

    market: MarketParams
    assets: int = Field(..., ge=0, le=MAX_UINT256)

    model_config = {"frozen": True}

    @property
    def absorbs_all(self) -> bool:
        return self.assets == ABSORB_ALL


# =============================================================================
# FLOW CAPS (PUBLIC ALLOCATOR)
# =============================================================================


class FlowCaps(BaseModel):
    """Лимиты притока/оттока рынка для public reallocation."""

    max_in: int = Field(..., ge=0, le=MAX_UINT128)
    max_out: int = Field(..., ge=0, le=MAX_UINT128)

    model_config = {"frozen": True}


class FlowCapsConfig(BaseModel):
    """Конфиг flow caps одного рынка vault-а."""

    market_id: str
    caps: FlowCaps

    model_config = {"frozen": True}

    @field_validator("market_id")
    @classmethod
    def validate_market_id(cls, v: str) -> str:
        return normalize_market_id(v)
