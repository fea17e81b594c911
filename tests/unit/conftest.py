"""
Общие fixtures и in-memory реализации внешних контрактов.

- InMemoryLedger — рынки, позиции и projected значения задаются тестом
- RecordingVault / RecordingFacility — записывают вызовы
- FixedOracle / FixedRateModel — константные ответы
"""

from types import SimpleNamespace
from typing import Dict, List, Optional, Sequence, Tuple

import pytest

from src.core.domain import (
    FlowCapsConfig,
    MarketAllocation,
    MarketBalances,
    MarketParams,
    MarketState,
    PositionState,
    checksum_address,
)
from src.core.exceptions import ExternalCallError
from src.core.math import ZERO_ADDRESS
from src.gatekeeper import Role
from src.helper import ClientFactories, MorphoHelper


# =============================================================================
# FAKES
# =============================================================================


class InMemoryLedger:
    def __init__(self, address: str = "0x" + "bb" * 20):
        self.address = address
        self._params: Dict[str, MarketParams] = {}
        self._states: Dict[str, MarketState] = {}
        self._balances: Dict[str, MarketBalances] = {}
        self._positions: Dict[Tuple[str, str], PositionState] = {}
        self._supply: Dict[Tuple[str, str], int] = {}
        self._borrow: Dict[Tuple[str, str], int] = {}
        self.supply_reads: List[Tuple[str, str]] = []

    def add_market(
        self,
        params: MarketParams,
        state: Optional[MarketState] = None,
        balances: Optional[MarketBalances] = None,
    ) -> str:
        market_id = params.id
        self._params[market_id] = params
        self._states[market_id] = state or MarketState(
            total_supply_assets=0,
            total_supply_shares=0,
            total_borrow_assets=0,
            total_borrow_shares=0,
        )
        if balances is not None:
            self._balances[market_id] = balances
        return market_id

    def set_supply(self, params: MarketParams, account: str, assets: int) -> None:
        self._supply[(params.id, account.lower())] = assets

    def set_borrow(self, params: MarketParams, account: str, assets: int) -> None:
        self._borrow[(params.id, account.lower())] = assets

    def set_position(self, params: MarketParams, account: str, position: PositionState) -> None:
        self._positions[(params.id, account.lower())] = position

    # LedgerClient

    def id_to_market_params(self, market_id: str) -> MarketParams:
        if market_id not in self._params:
            raise ExternalCallError(self.address, "idToMarketParams", f"unknown market {market_id}")
        return self._params[market_id]

    def market(self, market_id: str) -> MarketState:
        if market_id not in self._states:
            raise ExternalCallError(self.address, "market", f"unknown market {market_id}")
        return self._states[market_id]

    def position(self, market_id: str, account: str) -> PositionState:
        return self._positions.get((market_id, account.lower()), PositionState())

    def expected_market_balances(self, params: MarketParams) -> MarketBalances:
        if params.id in self._balances:
            return self._balances[params.id]
        state = self._states[params.id]
        return MarketBalances(
            total_supply_assets=state.total_supply_assets,
            total_supply_shares=state.total_supply_shares,
            total_borrow_assets=state.total_borrow_assets,
            total_borrow_shares=state.total_borrow_shares,
        )

    def expected_supply_assets(self, params: MarketParams, account: str) -> int:
        self.supply_reads.append((params.id, account))
        return self._supply.get((params.id, account.lower()), 0)

    def expected_borrow_assets(self, params: MarketParams, account: str) -> int:
        return self._borrow.get((params.id, account.lower()), 0)


class RecordingVault:
    def __init__(self, address: str):
        self.address = address
        self.batches: List[List[MarketAllocation]] = []
        self.reject_with: Optional[str] = None

    def reallocate(self, allocations: Sequence[MarketAllocation]) -> None:
        if self.reject_with:
            raise ExternalCallError(self.address, "reallocate", self.reject_with)
        self.batches.append(list(allocations))


class RecordingFacility:
    def __init__(self, address: str):
        self.address = address
        self.calls: List[tuple] = []

    def set_flow_caps(self, vault: str, configs: Sequence[FlowCapsConfig]) -> None:
        self.calls.append(("set_flow_caps", vault, list(configs)))

    def set_fee(self, vault: str, fee: int) -> None:
        self.calls.append(("set_fee", vault, fee))

    def transfer_fee(self, vault: str, recipient: str) -> None:
        self.calls.append(("transfer_fee", vault, recipient))

    def set_admin(self, vault: str, new_admin: str) -> None:
        self.calls.append(("set_admin", vault, new_admin))


class FixedOracle:
    def __init__(self, price: int):
        self._price = price

    def price(self) -> int:
        return self._price


class FixedRateModel:
    def __init__(self, rate_per_second: int):
        self.rate_per_second = rate_per_second
        self.calls: List[Tuple[MarketParams, MarketState]] = []

    def borrow_rate_view(self, params: MarketParams, state: MarketState) -> int:
        self.calls.append((params, state))
        return self.rate_per_second


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def accounts():
    """Аккаунты с фиксированными адресами (EIP-55 checksum форма)."""
    return SimpleNamespace(
        admin="0x1111111111111111111111111111111111111111",
        operator="0x2222222222222222222222222222222222222222",
        upgrader="0x3333333333333333333333333333333333333333",
        stranger="0x4444444444444444444444444444444444444444",
        vault="0x5555555555555555555555555555555555555555",
        recipient="0x6666666666666666666666666666666666666666",
    )


def _params(collateral: str, oracle: str = "0x" + "0c" * 20, irm: str = "0x" + "0d" * 20, lltv: int = 86 * 10**16):
    return MarketParams(
        loan_token="0x" + "0a" * 20,
        collateral_token=collateral,
        oracle=oracle,
        irm=irm,
        lltv=lltv,
    )


@pytest.fixture
def market_a():
    return _params("0x" + "a1" * 20)


@pytest.fixture
def market_b():
    return _params("0x" + "b1" * 20)


@pytest.fixture
def market_c():
    return _params("0x" + "c1" * 20)


@pytest.fixture
def idle_market():
    """Idle рынок: без collateral, oracle и IRM."""
    return MarketParams(
        loan_token="0x" + "0a" * 20,
        collateral_token=ZERO_ADDRESS,
        oracle=ZERO_ADDRESS,
        irm=ZERO_ADDRESS,
        lltv=0,
    )


@pytest.fixture
def ledger(market_a, market_b, market_c, idle_market):
    ledger = InMemoryLedger()
    for params in (market_a, market_b, market_c, idle_market):
        ledger.add_market(params)
    return ledger


@pytest.fixture
def vaults():
    """Реестр vault-ов по адресу (создаются при первом обращении)."""
    return {}


@pytest.fixture
def facilities():
    return {}


@pytest.fixture
def oracle():
    return FixedOracle(price=2 * 10**36)


@pytest.fixture
def rate_model():
    # ~10% APR посекундно
    return FixedRateModel(rate_per_second=3170979198)


@pytest.fixture
def factories(ledger, vaults, facilities, oracle, rate_model):
    ledgers = {ledger.address.lower(): ledger}

    def ledger_factory(address: str):
        return ledgers.setdefault(address.lower(), InMemoryLedger(address))

    def vault_factory(address: str):
        address = checksum_address(address)
        return vaults.setdefault(address, RecordingVault(address))

    def facility_factory(address: str):
        address = checksum_address(address)
        return facilities.setdefault(address, RecordingFacility(address))

    return ClientFactories(
        ledger=ledger_factory,
        vault=vault_factory,
        facility=facility_factory,
        oracle=lambda address: oracle,
        rate_model=lambda address: rate_model,
    )


@pytest.fixture
def helper(accounts, ledger, factories):
    """Helper с выданными OPERATOR и UPGRADER."""
    helper = MorphoHelper.initialize(
        initial_admin=accounts.admin,
        morpho=ledger.address,
        public_allocator="0x" + "fa" * 20,
        factories=factories,
        implementation="0x" + "e1" * 20,
    )
    helper.grant_role(accounts.admin, Role.UPGRADER, accounts.upgrader)
    helper.grant_role(accounts.admin, Role.OPERATOR, accounts.operator)
    return helper


@pytest.fixture
def make_market():
    """Фабрика произвольных MarketParams."""
    return _params


@pytest.fixture
def make_ledger():
    """Фабрика пустых InMemoryLedger."""
    return InMemoryLedger


@pytest.fixture
def facility(factories):
    """Facility текущего public allocator helper fixture."""
    return factories.facility("0x" + "fa" * 20)
