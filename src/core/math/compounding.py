"""
Compounding — годовая ставка из посекундной

Ledger начисляет проценты непрерывно; rate model отдаёт посекундную ставку
в WAD. Годовая ставка = e^(r*T) - 1, аппроксимированная тремя членами
ряда Тейлора — ровно так, как это делает ledger при начислении процентов.

ФОРМУЛЫ:
    x = r * T
    e^x - 1 ≈ x + x^2/2 + x^3/6

    first_term  = x
    second_term = first_term^2 / (2 * WAD)
    third_term  = second_term * first_term / (3 * WAD)
"""

from typing import Final

from src.core.math.fixed_point import WAD, mul_div_down

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Горизонт годовой ставки (365 дней)
SECONDS_PER_YEAR: Final[int] = 365 * 24 * 60 * 60


# =============================================================================
# TAYLOR COMPOUNDING
# =============================================================================


def w_taylor_compounded(x: int, n: int) -> int:
    """
    e^(x*n) - 1 в WAD через три члена ряда Тейлора.

    Args:
        x: Посекундная ставка (WAD)
        n: Количество секунд

    Returns:
        Сложная ставка за период (WAD), всегда >= x*n

    Examples:
        >>> w_taylor_compounded(0, 31536000)
        0
        >>> w_taylor_compounded(10**18, 1)  # 1 + 1/2 + 1/6
        1666666666666666666
    """
    if x < 0 or n < 0:
        raise ValueError(f"rate and period must be non-negative, got x={x}, n={n}")

    first_term = x * n
    second_term = mul_div_down(first_term, first_term, 2 * WAD)
    third_term = mul_div_down(second_term, first_term, 3 * WAD)

    return first_term + second_term + third_term


def annualize_rate(rate_per_second: int, period: int = SECONDS_PER_YEAR) -> int:
    """
    Годовая сложная ставка из посекундной (WAD).

    Examples:
        >>> annualize_rate(0)
        0
    """
    return w_taylor_compounded(rate_per_second, period)

