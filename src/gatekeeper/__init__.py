"""Gatekeeper — контроль доступа к мутирующим операциям.

- Три роли: ADMIN, UPGRADER, OPERATOR
- ADMIN неявно удовлетворяет проверке любой роли
- Проверка выполняется до любых side effects
"""

from .role_registry import AccessDecision, RoleRegistry
from .roles import ROLE_ADMINS, ROLE_IDS, Role, role_admin

__all__ = [
    "AccessDecision",
    "RoleRegistry",
    "Role",
    "ROLE_IDS",
    "ROLE_ADMINS",
    "role_admin",
]
