"""Reallocation Orchestrator — перемещение капитала vault-а между рынками.

Превращает инструкции "сдвинуть N из рынка A в рынок B" в батч абсолютных
целевых позиций для vault-а:

    [{source_1, target_1}, ..., {source_n, target_n}, {destination, ABSORB_ALL}]

Правило целевой позиции источника (compute_target):
- amount < 0 → current + |amount| (deposit, точно, без clamp)
- amount >= 0 → max(current - amount, 0) (withdraw, clamp в ноль)

Clamp — политика, а не ошибка: запрос вывести больше, чем размещено,
деградирует до "вывести всё доступное".

Инварианты батча:
- рынок-получатель всегда последний и всегда ABSORB_ALL
- источники в порядке вызывающего, каждый считается независимо
  от собственной текущей позиции (не кумулятивно)
- батч отправляется одним вызовом: vault применяет его атомарно

Ошибки ledger/vault пропагируют без изменений, ретраев нет.
"""

import logging
from typing import List, Sequence

from src.core.contracts.interfaces import LedgerClient, VaultFactory
from src.core.domain.allocation import (
    ABSORB_ALL,
    MarketAllocation,
    MoveInstruction,
    MoveInstructionById,
)
from src.core.domain.market import MarketParams, checksum_address, normalize_market_id
from src.core.math.fixed_point import zero_floor_sub
from src.core.math.numerical_safeguards import validate_int256, validate_uint256
from src.gatekeeper.role_registry import RoleRegistry
from src.gatekeeper.roles import Role

logger = logging.getLogger(__name__)


def compute_target(current_position: int, amount: int) -> int:
    """
    Новая целевая позиция рынка-источника.

    Args:
        current_position: Текущая позиция vault-а в рынке (assets)
        amount: > 0 withdraw, < 0 deposit

    Returns:
        Абсолютная целевая позиция (>= 0)

    Raises:
        ValueError: deposit выводит цель за uint256 или на ABSORB_ALL

    Examples:
        >>> compute_target(500, 200)
        300
        >>> compute_target(100, 250)
        0
        >>> compute_target(100, -50)
        150
    """
    validate_uint256(current_position, "current_position")
    validate_int256(amount, "amount")

    if amount < 0:
        target = validate_uint256(current_position - amount, "target")
        if target == ABSORB_ALL:
            raise ValueError(
                f"deposit target must be below uint256 max (ABSORB_ALL), got {target}"
            )
        return target

    return zero_floor_sub(current_position, amount)


class Reallocator:
    """Командная поверхность перераспределения (OPERATOR или ADMIN)."""

    def __init__(
        self,
        registry: RoleRegistry,
        ledger: LedgerClient,
        vault_factory: VaultFactory,
    ):
        self._registry = registry
        self._ledger = ledger
        self._vault_factory = vault_factory

    # -------------------------------------------------------------------------
    # READS
    # -------------------------------------------------------------------------

    def vault_position(self, vault: str, market: MarketParams) -> int:
        """Текущая позиция vault-а в рынке (ledger projected supply)."""
        return self._ledger.expected_supply_assets(market, checksum_address(vault))

    # -------------------------------------------------------------------------
    # MOVES
    # -------------------------------------------------------------------------

    def move(
        self,
        caller: str,
        vault: str,
        source: MarketParams,
        destination: MarketParams,
        amount: int,
    ) -> List[MarketAllocation]:
        """
        Перемещение между парой рынков.

        Returns:
            Отправленный батч
        """
        self._registry.require(Role.OPERATOR, caller)

        return self._reallocate(
            vault, [MoveInstruction(market=source, amount=amount)], destination
        )

    def move_by_id(
        self,
        caller: str,
        vault: str,
        source_id: str,
        destination_id: str,
        amount: int,
    ) -> List[MarketAllocation]:
        """move() с рынками, заданными market id."""
        self._registry.require(Role.OPERATOR, caller)

        source = self._ledger.id_to_market_params(normalize_market_id(source_id))
        destination = self._ledger.id_to_market_params(normalize_market_id(destination_id))
        return self.move(caller, vault, source, destination, amount)

    def move_many(
        self,
        caller: str,
        vault: str,
        withdrawals: Sequence[MoveInstruction],
        destination: MarketParams,
    ) -> List[MarketAllocation]:
        """N источников, один получатель."""
        self._registry.require(Role.OPERATOR, caller)

        return self._reallocate(vault, withdrawals, destination)

    def move_many_by_id(
        self,
        caller: str,
        vault: str,
        withdrawals: Sequence[MoveInstructionById],
        destination_id: str,
    ) -> List[MarketAllocation]:
        """move_many() с рынками, заданными market id."""
        self._registry.require(Role.OPERATOR, caller)

        resolved = [
            MoveInstruction(
                market=self._ledger.id_to_market_params(w.market_id), amount=w.amount
            )
            for w in withdrawals
        ]
        destination = self._ledger.id_to_market_params(normalize_market_id(destination_id))
        return self._reallocate(vault, resolved, destination)

    # -------------------------------------------------------------------------
    # INTERNALS
    # -------------------------------------------------------------------------

    def _reallocate(
        self,
        vault: str,
        withdrawals: Sequence[MoveInstruction],
        destination: MarketParams,
    ) -> List[MarketAllocation]:
        vault = checksum_address(vault)
        batch: List[MarketAllocation] = []

        for withdrawal in withdrawals:
            current = self.vault_position(vault, withdrawal.market)
            target = compute_target(current, withdrawal.amount)

            if withdrawal.amount > current:
                logger.warning(
                    "Withdrawal clamped to zero: vault=%s market=%s current=%d requested=%d",
                    vault,
                    withdrawal.market.id,
                    current,
                    withdrawal.amount,
                )

            batch.append(MarketAllocation(market=withdrawal.market, assets=target))

        batch.append(MarketAllocation(market=destination, assets=ABSORB_ALL))

        self._vault_factory(vault).reallocate(batch)

        logger.info(
            "Reallocation submitted: vault=%s sources=%d destination=%s",
            vault,
            len(batch) - 1,
            destination.id,
        )
        return batch
