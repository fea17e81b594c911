"""
Интерфейсы внешних контрактов.

Ядро не владеет балансами и не пересчитывает учёт ledger-а: оно только
читает состояние и отправляет инструкции через эти протоколы.
Реализации поднимают ExternalCallError при отказе контракта.
"""

from typing import Callable, Protocol, Sequence

from src.core.domain.allocation import FlowCapsConfig, MarketAllocation
from src.core.domain.market import (
    MarketBalances,
    MarketParams,
    MarketState,
    PositionState,
)


class LedgerClient(Protocol):
    """Read-only фасад над lending ledger."""

    def id_to_market_params(self, market_id: str) -> MarketParams:
        ...

    def market(self, market_id: str) -> MarketState:
        ...

    def position(self, market_id: str, account: str) -> PositionState:
        ...

    def expected_market_balances(self, params: MarketParams) -> MarketBalances:
        ...

    def expected_supply_assets(self, params: MarketParams, account: str) -> int:
        ...

    def expected_borrow_assets(self, params: MarketParams, account: str) -> int:
        ...


class VaultClient(Protocol):
    """Vault: атомарное применение батча целевых позиций."""

    def reallocate(self, allocations: Sequence[MarketAllocation]) -> None:
        ...


class FacilityClient(Protocol):
    """Public reallocation facility (public allocator)."""

    def set_flow_caps(self, vault: str, configs: Sequence[FlowCapsConfig]) -> None:
        ...

    def set_fee(self, vault: str, fee: int) -> None:
        ...

    def transfer_fee(self, vault: str, recipient: str) -> None:
        ...

    def set_admin(self, vault: str, new_admin: str) -> None:
        ...


class Oracle(Protocol):
    def price(self) -> int:
        """Цена collateral в loan assets, масштаб ORACLE_PRICE_SCALE."""
        ...


class RateModel(Protocol):
    def borrow_rate_view(self, params: MarketParams, state: MarketState) -> int:
        """Посекундная ставка заёмщика (WAD)."""
        ...


# Фабрики клиентов: адрес контракта -> клиент
LedgerFactory = Callable[[str], LedgerClient]
VaultFactory = Callable[[str], VaultClient]
FacilityFactory = Callable[[str], FacilityClient]
OracleFactory = Callable[[str], Oracle]
RateModelFactory = Callable[[str], RateModel]
