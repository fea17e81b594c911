"""
Snapshots — производные метрики рынка и позиции

MarketData / PositionData вычисляются на каждый вызов Analytics Reader
из живого состояния ledger + oracle + IRM. Никогда не кэшируются:
начисление процентов и цена oracle меняются каждый блок.

Все доли в WAD (1e18 == 1.0), суммы в base units loan token.
"""

from typing import Any, Dict

from pydantic import BaseModel, Field

from src.core.domain.market import MarketParams
from src.core.math.fixed_point import MAX_UINT256, wad_to_float


class MarketData(BaseModel):
    """Снапшот рынка."""

    market_id: str
    params: MarketParams

    total_supply_assets: int = Field(..., ge=0)
    total_borrow_assets: int = Field(..., ge=0)
    fee: int = Field(..., ge=0, description="Доля протокола (WAD)")

    utilization: int = Field(..., ge=0, description="borrow / supply (WAD)")
    borrow_rate: int = Field(..., ge=0, description="Годовая ставка заёмщика (WAD)")
    supply_rate: int = Field(..., ge=0, description="Годовая ставка поставщика (WAD)")

    model_config = {"frozen": True}

    def to_contract(self) -> Dict[str, Any]:
        """JSON-документ по контракту market_data."""
        return {
            "market_id": self.market_id,
            "params": self.params.model_dump(),
            "total_supply_assets": self.total_supply_assets,
            "total_borrow_assets": self.total_borrow_assets,
            "fee": self.fee,
            "utilization": self.utilization,
            "borrow_rate": self.borrow_rate,
            "supply_rate": self.supply_rate,
        }

    def summary(self) -> str:
        return (
            f"market={self.market_id} utilization={wad_to_float(self.utilization):.4f} "
            f"borrow_apr={wad_to_float(self.borrow_rate):.4%} "
            f"supply_apr={wad_to_float(self.supply_rate):.4%}"
        )


class PositionData(BaseModel):
    """
    Снапшот позиции аккаунта.

    health_factor == MAX_UINT256 для позиции без долга;
    ltv == 0 при нулевой стоимости залога (guard, а не утверждение).
    """

    market_id: str
    account: str

    supply_shares: int = Field(..., ge=0)
    borrow_shares: int = Field(..., ge=0)
    collateral: int = Field(..., ge=0)

    price: int = Field(..., ge=0, description="Цена oracle (scale 1e36)")
    collateral_value: int = Field(..., ge=0, description="Залог в loan assets")
    supplied_assets: int = Field(..., ge=0)
    borrowed_assets: int = Field(..., ge=0)

    ltv: int = Field(..., ge=0, description="borrowed / collateral_value (WAD)")
    max_borrow: int = Field(..., ge=0, description="collateral_value * lltv")
    health_factor: int = Field(..., ge=0, le=MAX_UINT256, description="WAD")

    model_config = {"frozen": True}

    @property
    def is_debt_free(self) -> bool:
        return self.borrowed_assets == 0

    def to_contract(self) -> Dict[str, Any]:
        """JSON-документ по контракту position_data."""
        return self.model_dump()
