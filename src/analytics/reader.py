"""
Analytics Reader — производные метрики рынка и позиции

Всё пересчитывается из живого состояния на каждый вызов, без кэша.

ФОРМУЛЫ (WAD, 1e18 == 1.0):
    utilization      = total_borrow / total_supply            (0 при supply == 0)
    borrow_rate      = taylor_compounded(irm_rate, 1 year)    (0 без IRM)
    supply_rate      = borrow_rate * (1 - fee) * utilization

    collateral_value = collateral * price / ORACLE_PRICE_SCALE (price = 0 без oracle)
    ltv              = borrowed / collateral_value            (0 при collateral_value == 0)
    max_borrow       = collateral_value * lltv
    health_factor    = max_borrow / borrowed                  (MAX_UINT256 без долга)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Пустой рынок или позиция без долга никогда не приводят к ошибке чтения
2. Отсутствие oracle/IRM — валидное состояние (нулевой адрес)
3. Учёт ledger-а (shares → assets, начисление процентов) не пересчитывается,
   используются projected значения ledger-а
"""

import logging

from src.core.contracts.interfaces import LedgerClient, OracleFactory, RateModelFactory
from src.core.domain.market import MarketParams, checksum_address, normalize_market_id
from src.core.domain.snapshots import MarketData, PositionData
from src.core.math.compounding import annualize_rate
from src.core.math.fixed_point import (
    MAX_UINT256,
    ORACLE_PRICE_SCALE,
    WAD,
    ZERO_ADDRESS,
    mul_div_down,
    w_mul_down,
)
from src.core.math.numerical_safeguards import safe_w_div_down

logger = logging.getLogger(__name__)


# =============================================================================
# PURE FORMULAS
# =============================================================================


def compute_utilization(total_borrow_assets: int, total_supply_assets: int) -> int:
    """
    Доля занятых assets (WAD).

    Examples:
        >>> compute_utilization(500, 1000)
        500000000000000000
        >>> compute_utilization(0, 0)
        0
    """
    return safe_w_div_down(total_borrow_assets, total_supply_assets, fallback=0)


def compute_supply_rate(borrow_rate: int, fee: int, utilization: int) -> int:
    """
    Ставка поставщика: borrow_rate * (1 - fee) * utilization.

    Examples:
        >>> compute_supply_rate(10**17, 0, 5 * 10**17)  # 10% * 50%
        50000000000000000
    """
    return w_mul_down(w_mul_down(borrow_rate, WAD - fee), utilization)


def compute_collateral_value(collateral: int, price: int) -> int:
    """Залог в loan assets."""
    return mul_div_down(collateral, price, ORACLE_PRICE_SCALE)


def compute_health_factor(max_borrow: int, borrowed_assets: int) -> int:
    """
    max_borrow / borrowed (WAD); позиция без долга максимально здорова.

    Examples:
        >>> compute_health_factor(0, 0) == MAX_UINT256
        True
    """
    return safe_w_div_down(max_borrow, borrowed_assets, fallback=MAX_UINT256)


# =============================================================================
# READER
# =============================================================================


class AnalyticsReader:
    """Read-only отчётность по рынкам и позициям."""

    def __init__(
        self,
        ledger: LedgerClient,
        oracle_factory: OracleFactory,
        rate_model_factory: RateModelFactory,
    ):
        self._ledger = ledger
        self._oracle_factory = oracle_factory
        self._rate_model_factory = rate_model_factory

    def get_market_data(self, market_id: str) -> MarketData:
        market_id = normalize_market_id(market_id)
        params = self._ledger.id_to_market_params(market_id)
        state = self._ledger.market(market_id)
        balances = self._ledger.expected_market_balances(params)

        utilization = compute_utilization(
            balances.total_borrow_assets, balances.total_supply_assets
        )

        borrow_rate = 0
        if params.irm != ZERO_ADDRESS:
            rate_per_second = self._rate_model_factory(params.irm).borrow_rate_view(
                params, state
            )
            borrow_rate = annualize_rate(rate_per_second)

        supply_rate = compute_supply_rate(borrow_rate, state.fee, utilization)

        data = MarketData(
            market_id=market_id,
            params=params,
            total_supply_assets=balances.total_supply_assets,
            total_borrow_assets=balances.total_borrow_assets,
            fee=state.fee,
            utilization=utilization,
            borrow_rate=borrow_rate,
            supply_rate=supply_rate,
        )
        logger.debug("Market data: %s", data.summary())
        return data

    def get_position(self, market_id: str, account: str) -> PositionData:
        market_id = normalize_market_id(market_id)
        account = checksum_address(account)

        params = self._ledger.id_to_market_params(market_id)
        position = self._ledger.position(market_id, account)
        price = self._oracle_price(params)

        collateral_value = compute_collateral_value(position.collateral, price)
        borrowed_assets = self._ledger.expected_borrow_assets(params, account)
        supplied_assets = self._ledger.expected_supply_assets(params, account)

        ltv = safe_w_div_down(borrowed_assets, collateral_value, fallback=0)
        max_borrow = w_mul_down(collateral_value, params.lltv)

        return PositionData(
            market_id=market_id,
            account=account,
            supply_shares=position.supply_shares,
            borrow_shares=position.borrow_shares,
            collateral=position.collateral,
            price=price,
            collateral_value=collateral_value,
            supplied_assets=supplied_assets,
            borrowed_assets=borrowed_assets,
            ltv=ltv,
            max_borrow=max_borrow,
            health_factor=compute_health_factor(max_borrow, borrowed_assets),
        )

    def _oracle_price(self, params: MarketParams) -> int:
        # Рынок без oracle: цена 0 → collateral_value и ltv равны 0
        if params.oracle == ZERO_ADDRESS:
            return 0
        return self._oracle_factory(params.oracle).price()
