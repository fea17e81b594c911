"""Public-Facility Configurator — настройка public allocator для vault-ов.

Тонкий pass-through после проверки роли, локального состояния нет:
- set_flow_caps / set_fee / transfer_fee — OPERATOR или ADMIN
- set_facility_admin — UPGRADER или ADMIN (передаёт контроль над facility)
"""

import logging
from typing import Sequence

from src.core.contracts.interfaces import FacilityClient
from src.core.domain.allocation import FlowCapsConfig
from src.core.domain.market import checksum_address
from src.core.math.numerical_safeguards import validate_uint256
from src.gatekeeper.role_registry import RoleRegistry
from src.gatekeeper.roles import Role

logger = logging.getLogger(__name__)


class FacilityConfigurator:
    def __init__(self, registry: RoleRegistry, facility: FacilityClient):
        self._registry = registry
        self._facility = facility

    def set_flow_caps(
        self, caller: str, vault: str, configs: Sequence[FlowCapsConfig]
    ) -> None:
        self._registry.require(Role.OPERATOR, caller)
        vault = checksum_address(vault)
        configs = list(configs)

        self._facility.set_flow_caps(vault, configs)
        logger.info("Flow caps set: vault=%s markets=%d", vault, len(configs))

    def set_fee(self, caller: str, vault: str, fee: int) -> None:
        self._registry.require(Role.OPERATOR, caller)
        vault = checksum_address(vault)
        validate_uint256(fee, "fee")

        self._facility.set_fee(vault, fee)
        logger.info("Facility fee set: vault=%s fee=%d", vault, fee)

    def transfer_fee(self, caller: str, vault: str, recipient: str) -> None:
        self._registry.require(Role.OPERATOR, caller)
        vault = checksum_address(vault)
        recipient = checksum_address(recipient)

        self._facility.transfer_fee(vault, recipient)
        logger.info("Facility fee transferred: vault=%s recipient=%s", vault, recipient)

    def set_facility_admin(self, caller: str, vault: str, new_admin: str) -> None:
        self._registry.require(Role.UPGRADER, caller)
        vault = checksum_address(vault)
        new_admin = checksum_address(new_admin)

        self._facility.set_admin(vault, new_admin)
        logger.info("Facility admin set: vault=%s admin=%s", vault, new_admin)
