"""Upgrade Governor — авторизация смены реализации.

Наблюдаемый контракт upgrade-а:
- только UPGRADER (или ADMIN) может сменить реализацию
- состояние (роли, адреса) переживает смену реализации

Механика делегирования (proxy) вне ядра: здесь только проверка роли
и учёт текущей реализации с историей.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from src.core.domain.market import checksum_address
from src.core.math.fixed_point import ZERO_ADDRESS
from src.gatekeeper.role_registry import RoleRegistry
from src.gatekeeper.roles import Role

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpgradeAuthorization:
    """Результат авторизованного upgrade-а."""

    previous_implementation: Optional[str]
    new_implementation: str
    authorized_by: str
    via_admin: bool


class UpgradeGovernor:
    def __init__(
        self,
        registry: RoleRegistry,
        implementation: Optional[str] = None,
        history: Iterable[str] = (),
    ):
        self._registry = registry
        self._implementation = checksum_address(implementation) if implementation else None
        self._history: List[str] = [checksum_address(a) for a in history]

    @property
    def implementation(self) -> Optional[str]:
        return self._implementation

    @property
    def history(self) -> Tuple[str, ...]:
        """Все реализации в порядке установки (включая текущую)."""
        return tuple(self._history)

    def authorize_upgrade(self, caller: str, new_implementation: str) -> UpgradeAuthorization:
        """
        Авторизация смены реализации.

        Raises:
            AuthorizationError: caller не UPGRADER и не ADMIN
            ValueError: new_implementation — не адрес или нулевой адрес
        """
        decision = self._registry.require(Role.UPGRADER, caller)

        new_implementation = checksum_address(new_implementation)
        if new_implementation == ZERO_ADDRESS:
            raise ValueError("new implementation cannot be the zero address")

        authorization = UpgradeAuthorization(
            previous_implementation=self._implementation,
            new_implementation=new_implementation,
            authorized_by=decision.account,
            via_admin=decision.via_admin,
        )

        self._implementation = new_implementation
        self._history.append(new_implementation)

        logger.info(
            "Upgrade authorized: %s -> %s by %s",
            authorization.previous_implementation,
            new_implementation,
            decision.account,
        )
        return authorization
