"""MorphoHelper — командная поверхность helper-а.

Владеет состоянием (роли, адреса ledger/facility, реализация) и собирает
компоненты:
- RoleRegistry — роли и guard
- Reallocator — move / move_by_id / move_many / move_many_by_id (OPERATOR)
- FacilityConfigurator — flow caps, fee, fee sweep (OPERATOR), admin (UPGRADER)
- AnalyticsReader — get_market_data / get_position (без ограничений)
- UpgradeGovernor — upgrade_to (UPGRADER)

Адреса ledger/facility передаются в фабрики клиентов явно при создании и при
каждой переконфигурации (set_morpho / set_public_allocator, UPGRADER).
Клиенты vault/oracle/IRM создаются на вызов по адресу.

ADMIN неявно удовлетворяет любой роли.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from src.analytics.reader import AnalyticsReader
from src.config.settings import HelperConfig
from src.core.contracts.interfaces import (
    FacilityClient,
    FacilityFactory,
    LedgerClient,
    LedgerFactory,
    OracleFactory,
    RateModelFactory,
    VaultFactory,
)
from src.core.domain.allocation import (
    FlowCapsConfig,
    MarketAllocation,
    MoveInstruction,
    MoveInstructionById,
)
from src.core.domain.market import MarketParams, checksum_address, market_id_for
from src.core.domain.snapshots import MarketData, PositionData
from src.core.math.fixed_point import ZERO_ADDRESS
from src.gatekeeper.role_registry import RoleRegistry
from src.gatekeeper.roles import Role
from src.governance.upgrade import UpgradeAuthorization, UpgradeGovernor
from src.helper.state import HelperState
from src.orchestration.facility import FacilityConfigurator
from src.orchestration.reallocator import Reallocator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClientFactories:
    """Фабрики клиентов внешних контрактов (адрес -> клиент)."""

    ledger: LedgerFactory
    vault: VaultFactory
    facility: FacilityFactory
    oracle: OracleFactory
    rate_model: RateModelFactory


class MorphoHelper:
    def __init__(self, state: HelperState, factories: ClientFactories):
        self._factories = factories
        self._morpho = state.morpho
        self._public_allocator = state.public_allocator

        self._registry = RoleRegistry.from_assignments(state.roles)
        self._governor = UpgradeGovernor(
            self._registry, state.implementation, state.implementation_history
        )

        self._wire_ledger(factories.ledger(self._morpho))
        self._wire_facility(factories.facility(self._public_allocator))

    # -------------------------------------------------------------------------
    # CONSTRUCTION
    # -------------------------------------------------------------------------

    @classmethod
    def initialize(
        cls,
        initial_admin: str,
        morpho: str,
        public_allocator: str,
        factories: ClientFactories,
        implementation: Optional[str] = None,
    ) -> "MorphoHelper":
        """Новое состояние: initial_admin получает ADMIN."""
        state = HelperState(
            morpho=morpho,
            public_allocator=public_allocator,
            implementation=implementation,
            implementation_history=[implementation] if implementation else [],
            roles={Role.ADMIN.value: [initial_admin]},
        )
        logger.info(
            "Helper initialized: admin=%s morpho=%s public_allocator=%s",
            checksum_address(initial_admin),
            state.morpho,
            state.public_allocator,
        )
        return cls(state, factories)

    @classmethod
    def from_config(cls, config: HelperConfig, factories: ClientFactories) -> "MorphoHelper":
        return cls.initialize(
            initial_admin=config.initial_admin,
            morpho=config.morpho,
            public_allocator=config.public_allocator,
            factories=factories,
            implementation=config.implementation,
        )

    @classmethod
    def restore(cls, document: Dict[str, Any], factories: ClientFactories) -> "MorphoHelper":
        """Восстановление из документа состояния (например, после upgrade-а)."""
        return cls(HelperState.from_document(document), factories)

    def export_state(self) -> Dict[str, Any]:
        return self._state().to_document()

    def _state(self) -> HelperState:
        return HelperState(
            morpho=self._morpho,
            public_allocator=self._public_allocator,
            implementation=self._governor.implementation,
            implementation_history=list(self._governor.history),
            roles=self._registry.to_assignments(),
        )

    def _wire_ledger(self, ledger: LedgerClient) -> None:
        self._reallocator = Reallocator(self._registry, ledger, self._factories.vault)
        self._reader = AnalyticsReader(
            ledger, self._factories.oracle, self._factories.rate_model
        )

    def _wire_facility(self, facility: FacilityClient) -> None:
        self._configurator = FacilityConfigurator(self._registry, facility)

    # -------------------------------------------------------------------------
    # CONFIGURATION (UPGRADER)
    # -------------------------------------------------------------------------

    @property
    def morpho(self) -> str:
        return self._morpho

    @property
    def public_allocator(self) -> str:
        return self._public_allocator

    @property
    def implementation(self) -> Optional[str]:
        return self._governor.implementation

    def set_morpho(self, caller: str, morpho: str) -> None:
        self._registry.require(Role.UPGRADER, caller)
        morpho = self._require_nonzero(morpho, "morpho")

        # Адрес меняется только после успешного подключения
        self._wire_ledger(self._factories.ledger(morpho))
        previous, self._morpho = self._morpho, morpho
        logger.info("Ledger address changed: %s -> %s", previous, morpho)

    def set_public_allocator(self, caller: str, public_allocator: str) -> None:
        self._registry.require(Role.UPGRADER, caller)
        public_allocator = self._require_nonzero(public_allocator, "public_allocator")

        self._wire_facility(self._factories.facility(public_allocator))
        previous, self._public_allocator = self._public_allocator, public_allocator
        logger.info("Public allocator address changed: %s -> %s", previous, public_allocator)

    def upgrade_to(self, caller: str, new_implementation: str) -> UpgradeAuthorization:
        return self._governor.authorize_upgrade(caller, new_implementation)

    @staticmethod
    def _require_nonzero(address: str, name: str) -> str:
        address = checksum_address(address)
        if address == ZERO_ADDRESS:
            raise ValueError(f"{name} cannot be the zero address")
        return address

    # -------------------------------------------------------------------------
    # ROLES
    # -------------------------------------------------------------------------

    def has_role(self, role: Role, account: str) -> bool:
        return self._registry.has_role(role, account)

    def grant_role(self, caller: str, role: Role, account: str) -> bool:
        return self._registry.grant_role(caller, role, account)

    def revoke_role(self, caller: str, role: Role, account: str) -> bool:
        return self._registry.revoke_role(caller, role, account)

    def renounce_role(self, caller: str, role: Role, account: str) -> bool:
        return self._registry.renounce_role(caller, role, account)

    def describe(self, account: str) -> Dict[str, Any]:
        """Сводка адресов, role id и ролей аккаунта."""
        account = checksum_address(account)
        return {
            "morpho": self._morpho,
            "public_allocator": self._public_allocator,
            "implementation": self._governor.implementation,
            "roles": {role.value: role.role_id for role in Role},
            "account": {
                "address": account,
                **{
                    f"has_{name.lower()}_role": granted
                    for name, granted in self._registry.describe(account).items()
                },
            },
        }

    # -------------------------------------------------------------------------
    # REALLOCATION (OPERATOR)
    # -------------------------------------------------------------------------

    def move(
        self,
        caller: str,
        vault: str,
        source: MarketParams,
        destination: MarketParams,
        amount: int,
    ) -> List[MarketAllocation]:
        return self._reallocator.move(caller, vault, source, destination, amount)

    def move_by_id(
        self,
        caller: str,
        vault: str,
        source_id: str,
        destination_id: str,
        amount: int,
    ) -> List[MarketAllocation]:
        return self._reallocator.move_by_id(caller, vault, source_id, destination_id, amount)

    def move_many(
        self,
        caller: str,
        vault: str,
        withdrawals: Sequence[MoveInstruction],
        destination: MarketParams,
    ) -> List[MarketAllocation]:
        return self._reallocator.move_many(caller, vault, withdrawals, destination)

    def move_many_by_id(
        self,
        caller: str,
        vault: str,
        withdrawals: Sequence[MoveInstructionById],
        destination_id: str,
    ) -> List[MarketAllocation]:
        return self._reallocator.move_many_by_id(caller, vault, withdrawals, destination_id)

    def vault_position(self, vault: str, market: MarketParams) -> int:
        return self._reallocator.vault_position(vault, market)

    # -------------------------------------------------------------------------
    # PUBLIC ALLOCATOR
    # -------------------------------------------------------------------------

    def set_flow_caps(self, caller: str, vault: str, configs: Sequence[FlowCapsConfig]) -> None:
        self._configurator.set_flow_caps(caller, vault, configs)

    def set_fee(self, caller: str, vault: str, fee: int) -> None:
        self._configurator.set_fee(caller, vault, fee)

    def transfer_fee(self, caller: str, vault: str, recipient: str) -> None:
        self._configurator.transfer_fee(caller, vault, recipient)

    def set_facility_admin(self, caller: str, vault: str, new_admin: str) -> None:
        self._configurator.set_facility_admin(caller, vault, new_admin)

    # -------------------------------------------------------------------------
    # ANALYTICS
    # -------------------------------------------------------------------------

    def get_market_data(self, market_id: str) -> MarketData:
        return self._reader.get_market_data(market_id)

    def get_position(self, market_id: str, account: str) -> PositionData:
        return self._reader.get_position(market_id, account)

    @staticmethod
    def market_id_for(params: MarketParams) -> str:
        return market_id_for(params)
