"""
Fixed Point — WAD арифметика uint256

Все суммы ledger-а — целые числа в base units токена (uint256).
Все доли (utilization, rate, fee, lltv, ltv) — WAD fixed point: 1e18 == 1.0.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Только целочисленная арифметика, float не участвует в расчётах
2. Округление явное: *_down — к нулю (как в ledger-е)
3. Результаты совпадают побитово с on-chain вычислениями ledger-а
"""

from typing import Final

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# 1.0 в WAD представлении
WAD: Final[int] = 10**18

# Масштаб цены oracle: price * collateral / ORACLE_PRICE_SCALE = loan assets
ORACLE_PRICE_SCALE: Final[int] = 10**36

# Максимальные значения беззнаковых типов
MAX_UINT128: Final[int] = 2**128 - 1
MAX_UINT256: Final[int] = 2**256 - 1

# Нулевой адрес — "не сконфигурировано" для oracle / IRM
ZERO_ADDRESS: Final[str] = "0x" + "00" * 20


# =============================================================================
# БАЗОВЫЕ ОПЕРАЦИИ
# =============================================================================


def mul_div_down(x: int, y: int, d: int) -> int:
    """
    (x * y) / d с округлением вниз.

    Raises:
        ZeroDivisionError: если d == 0
    """
    return (x * y) // d


def w_mul_down(x: int, y: int) -> int:
    """
    Произведение двух WAD чисел с округлением вниз.

    Examples:
        >>> w_mul_down(5 * 10**17, 2 * 10**18)
        1000000000000000000
    """
    return mul_div_down(x, y, WAD)


def w_div_down(x: int, y: int) -> int:
    """
    Частное x / y в WAD с округлением вниз.

    Examples:
        >>> w_div_down(500, 1000)
        500000000000000000
    """
    return mul_div_down(x, WAD, y)


def zero_floor_sub(x: int, y: int) -> int:
    """
    max(x - y, 0) — вычитание с насыщением в ноль.

    Examples:
        >>> zero_floor_sub(500, 200)
        300
        >>> zero_floor_sub(100, 250)
        0
    """
    return x - y if x > y else 0


def wad_to_float(value: int) -> float:
    """Конверсия WAD в float — только для отображения и логов."""
    return value / WAD
