"""Роли доступа.

- ADMIN — корневая роль, неявно удовлетворяет проверке любой другой роли
- UPGRADER — upgrade реализации, переконфигурация адресов, toggling OPERATOR
- OPERATOR — перераспределение капитала и настройка public allocator

Role id совпадают с on-chain константами: ADMIN — нулевой хэш,
остальные — keccak256 от имени роли.
"""

from enum import Enum
from typing import Dict

from eth_utils import encode_hex, keccak


class Role(str, Enum):
    """Роль в реестре."""

    ADMIN = "ADMIN"
    OPERATOR = "OPERATOR"
    UPGRADER = "UPGRADER"

    @property
    def role_id(self) -> str:
        """On-chain идентификатор роли (bytes32 hex)."""
        return ROLE_IDS[self]


ROLE_IDS: Dict[Role, str] = {
    Role.ADMIN: "0x" + "00" * 32,
    Role.OPERATOR: encode_hex(keccak(text="OPERATOR_ROLE")),
    Role.UPGRADER: encode_hex(keccak(text="UPGRADER_ROLE")),
}

# Роль, которая управляет выдачей/отзывом данной роли
ROLE_ADMINS: Dict[Role, Role] = {
    Role.ADMIN: Role.ADMIN,
    Role.UPGRADER: Role.ADMIN,
    Role.OPERATOR: Role.UPGRADER,
}


def role_admin(role: Role) -> Role:
    """Роль-администратор для role."""
    return ROLE_ADMINS[role]
