"""Unit тесты для Role Registry.

Coverage:
- Role id совпадают с on-chain константами
- ADMIN неявно удовлетворяет любой роли
- Политика role admin: OPERATOR ← UPGRADER/ADMIN, UPGRADER/ADMIN ← ADMIN
- Идемпотентность grant/revoke
- renounce только для себя
- Отказ без side effects
"""

import pytest
from eth_utils import encode_hex, keccak

from src.core.exceptions import AuthorizationError
from src.gatekeeper import ROLE_IDS, Role, RoleRegistry, role_admin


@pytest.fixture
def registry(accounts):
    registry = RoleRegistry({Role.ADMIN: [accounts.admin]})
    registry.grant_role(accounts.admin, Role.UPGRADER, accounts.upgrader)
    registry.grant_role(accounts.admin, Role.OPERATOR, accounts.operator)
    return registry


# =============================================================================
# ROLE IDS
# =============================================================================


def test_role_ids_match_onchain_constants():
    assert Role.ADMIN.role_id == "0x" + "00" * 32
    assert Role.OPERATOR.role_id == encode_hex(keccak(text="OPERATOR_ROLE"))
    assert Role.UPGRADER.role_id == encode_hex(keccak(text="UPGRADER_ROLE"))
    assert len(set(ROLE_IDS.values())) == 3


def test_role_admin_policy():
    assert role_admin(Role.OPERATOR) == Role.UPGRADER
    assert role_admin(Role.UPGRADER) == Role.ADMIN
    assert role_admin(Role.ADMIN) == Role.ADMIN


# =============================================================================
# CHECKS
# =============================================================================


def test_admin_satisfies_every_role(registry, accounts):
    for role in Role:
        assert registry.satisfies(role, accounts.admin) is True

    decision = registry.check(Role.OPERATOR, accounts.admin)
    assert decision.allowed is True
    assert decision.via_admin is True


def test_operator_and_upgrader_are_independent(registry, accounts):
    assert registry.satisfies(Role.OPERATOR, accounts.operator) is True
    assert registry.satisfies(Role.UPGRADER, accounts.operator) is False
    assert registry.satisfies(Role.UPGRADER, accounts.upgrader) is True
    assert registry.satisfies(Role.OPERATOR, accounts.upgrader) is False


def test_check_blocks_stranger(registry, accounts):
    decision = registry.check(Role.OPERATOR, accounts.stranger)

    assert decision.allowed is False
    assert decision.block_reason == "missing_role_operator"
    assert "BLOCK" in decision.details


def test_require_raises_authorization_error(registry, accounts):
    with pytest.raises(AuthorizationError) as exc_info:
        registry.require(Role.OPERATOR, accounts.stranger)

    assert exc_info.value.role == "OPERATOR"
    assert exc_info.value.account == accounts.stranger


def test_has_role_accepts_lowercase_addresses(registry, accounts):
    assert registry.has_role(Role.ADMIN, accounts.admin.lower()) is True


# =============================================================================
# GRANT / REVOKE
# =============================================================================


def test_upgrader_toggles_operator(registry, accounts):
    assert registry.grant_role(accounts.upgrader, Role.OPERATOR, accounts.stranger) is True
    assert registry.has_role(Role.OPERATOR, accounts.stranger) is True

    assert registry.revoke_role(accounts.upgrader, Role.OPERATOR, accounts.stranger) is True
    assert registry.has_role(Role.OPERATOR, accounts.stranger) is False


def test_operator_cannot_toggle_operator(registry, accounts):
    with pytest.raises(AuthorizationError):
        registry.grant_role(accounts.operator, Role.OPERATOR, accounts.stranger)

    assert registry.has_role(Role.OPERATOR, accounts.stranger) is False


def test_upgrader_cannot_grant_root_roles(registry, accounts):
    with pytest.raises(AuthorizationError):
        registry.grant_role(accounts.upgrader, Role.UPGRADER, accounts.stranger)
    with pytest.raises(AuthorizationError):
        registry.grant_role(accounts.upgrader, Role.ADMIN, accounts.stranger)

    assert registry.describe(accounts.stranger) == {
        "ADMIN": False,
        "OPERATOR": False,
        "UPGRADER": False,
    }


def test_failed_revoke_has_no_side_effect(registry, accounts):
    with pytest.raises(AuthorizationError):
        registry.revoke_role(accounts.stranger, Role.OPERATOR, accounts.operator)

    assert registry.has_role(Role.OPERATOR, accounts.operator) is True


def test_grant_and_revoke_are_idempotent(registry, accounts):
    assert registry.grant_role(accounts.admin, Role.OPERATOR, accounts.operator) is False
    assert registry.members(Role.OPERATOR) == [accounts.operator]

    assert registry.revoke_role(accounts.admin, Role.OPERATOR, accounts.stranger) is False
    assert registry.members(Role.OPERATOR) == [accounts.operator]


# =============================================================================
# RENOUNCE
# =============================================================================


def test_renounce_own_role(registry, accounts):
    assert registry.renounce_role(accounts.operator, Role.OPERATOR, accounts.operator) is True
    assert registry.has_role(Role.OPERATOR, accounts.operator) is False

    # Повторный отказ — no-op
    assert registry.renounce_role(accounts.operator, Role.OPERATOR, accounts.operator) is False


def test_renounce_for_other_account_rejected(registry, accounts):
    with pytest.raises(AuthorizationError, match="self"):
        registry.renounce_role(accounts.admin, Role.OPERATOR, accounts.operator)

    assert registry.has_role(Role.OPERATOR, accounts.operator) is True


# =============================================================================
# PERSISTENCE
# =============================================================================


def test_assignments_round_trip(registry, accounts):
    assignments = registry.to_assignments()
    restored = RoleRegistry.from_assignments(assignments)

    assert assignments == {
        "ADMIN": [accounts.admin],
        "OPERATOR": [accounts.operator],
        "UPGRADER": [accounts.upgrader],
    }
    assert restored.to_assignments() == assignments
