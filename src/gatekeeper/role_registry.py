"""Role Registry — реестр ролей и guard для мутирующих операций.

Правила:
- satisfies(role, account): account держит role ИЛИ держит ADMIN
- grant/revoke role разрешены только тем, кто удовлетворяет role_admin(role):
  OPERATOR выдают/отзывают UPGRADER или ADMIN; ADMIN и UPGRADER — только ADMIN
- grant/revoke идемпотентны: повторная выдача или отзыв отсутствующей
  роли — no-op, не ошибка
- отказ происходит до любых side effects

check() возвращает AccessDecision (для диагностики), require() поднимает
AuthorizationError. require() — единственный guard, вызываемый в начале
каждой мутирующей операции.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Set

from src.core.domain.market import checksum_address
from src.core.exceptions import AuthorizationError
from src.gatekeeper.roles import Role, role_admin

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccessDecision:
    """Результат проверки доступа."""

    allowed: bool
    block_reason: str

    role: Role
    account: str
    via_admin: bool  # роль удовлетворена через ADMIN

    details: str


class RoleRegistry:
    """Реестр {role, account} -> granted."""

    def __init__(self, assignments: Mapping[Role, Iterable[str]] | None = None):
        self._members: Dict[Role, Set[str]] = {role: set() for role in Role}
        for role, accounts in (assignments or {}).items():
            for account in accounts:
                self._members[Role(role)].add(checksum_address(account))

    # -------------------------------------------------------------------------
    # QUERIES
    # -------------------------------------------------------------------------

    def has_role(self, role: Role, account: str) -> bool:
        """Прямое членство, без учёта ADMIN."""
        return checksum_address(account) in self._members[role]

    def satisfies(self, role: Role, account: str) -> bool:
        """account держит role или ADMIN."""
        return self.has_role(role, account) or self.has_role(Role.ADMIN, account)

    def check(self, role: Role, account: str) -> AccessDecision:
        """Проверка доступа без исключения."""
        account = checksum_address(account)

        if self.has_role(role, account):
            return AccessDecision(
                allowed=True,
                block_reason="",
                role=role,
                account=account,
                via_admin=False,
                details=f"PASS: {account} holds {role.value}",
            )

        if self.has_role(Role.ADMIN, account):
            return AccessDecision(
                allowed=True,
                block_reason="",
                role=role,
                account=account,
                via_admin=True,
                details=f"PASS: {account} holds ADMIN (satisfies {role.value})",
            )

        return AccessDecision(
            allowed=False,
            block_reason=f"missing_role_{role.value.lower()}",
            role=role,
            account=account,
            via_admin=False,
            details=f"BLOCK: {account} holds neither {role.value} nor ADMIN",
        )

    def require(self, role: Role, account: str) -> AccessDecision:
        """
        Guard мутирующей операции.

        Raises:
            AuthorizationError: если account не удовлетворяет role
        """
        decision = self.check(role, account)
        if not decision.allowed:
            logger.warning("Access denied: %s", decision.details)
            raise AuthorizationError(role.value, decision.account, decision.block_reason)
        return decision

    def members(self, role: Role) -> List[str]:
        return sorted(self._members[role])

    def describe(self, account: str) -> Dict[str, bool]:
        """Флаги всех ролей аккаунта (прямое членство)."""
        return {role.value: self.has_role(role, account) for role in Role}

    # -------------------------------------------------------------------------
    # MUTATIONS
    # -------------------------------------------------------------------------

    def grant_role(self, caller: str, role: Role, account: str) -> bool:
        """
        Выдача роли.

        Returns:
            True если членство изменилось, False если роль уже была выдана

        Raises:
            AuthorizationError: caller не удовлетворяет role_admin(role)
        """
        self.require(role_admin(role), caller)
        account = checksum_address(account)

        if account in self._members[role]:
            return False

        self._members[role].add(account)
        logger.info("Role %s granted to %s by %s", role.value, account, checksum_address(caller))
        return True

    def revoke_role(self, caller: str, role: Role, account: str) -> bool:
        """
        Отзыв роли.

        Returns:
            True если членство изменилось, False если роли не было
        """
        self.require(role_admin(role), caller)
        account = checksum_address(account)

        if account not in self._members[role]:
            return False

        self._members[role].discard(account)
        logger.info("Role %s revoked from %s by %s", role.value, account, checksum_address(caller))
        return True

    def renounce_role(self, caller: str, role: Role, account: str) -> bool:
        """
        Отказ аккаунта от собственной роли.

        Raises:
            AuthorizationError: caller != account
        """
        caller = checksum_address(caller)
        account = checksum_address(account)

        if caller != account:
            raise AuthorizationError(role.value, caller, "can only renounce roles for self")

        if account not in self._members[role]:
            return False

        self._members[role].discard(account)
        logger.info("Role %s renounced by %s", role.value, account)
        return True

    # -------------------------------------------------------------------------
    # PERSISTENCE
    # -------------------------------------------------------------------------

    def to_assignments(self) -> Dict[str, List[str]]:
        return {role.value: self.members(role) for role in Role}

    @classmethod
    def from_assignments(cls, assignments: Mapping[str, Iterable[str]]) -> "RoleRegistry":
        return cls({Role(name): accounts for name, accounts in assignments.items()})
