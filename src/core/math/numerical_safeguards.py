"""
Numerical Safeguards — Division Guards & Range Validation

Модуль обеспечивает детерминированное поведение всех отношений:
- Безопасное WAD-деление с явным результатом при нулевом знаменателе
- Валидация диапазонов uint256 / int256 для сумм

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Деление на ноль никогда не происходит (возвращается fallback)
2. Аналитические чтения никогда не падают из-за пустого рынка или позиции без долга
3. Суммы вне домена uint256 отклоняются до отправки во внешние контракты
"""

from typing import Final

from src.core.math.fixed_point import MAX_UINT256, w_div_down

# =============================================================================
# ДИАПАЗОНЫ
# =============================================================================

INT256_MIN: Final[int] = -(2**255)
INT256_MAX: Final[int] = 2**255 - 1


# =============================================================================
# БЕЗОПАСНОЕ ДЕЛЕНИЕ
# =============================================================================


def safe_w_div_down(numerator: int, denominator: int, fallback: int = 0) -> int:
    """
    WAD-деление numerator / denominator с защитой от деления на ноль.

    Args:
        numerator: Числитель (base units)
        denominator: Знаменатель (base units)
        fallback: Значение при denominator == 0 (default: 0)

    Returns:
        numerator / denominator в WAD или fallback

    Examples:
        >>> safe_w_div_down(500, 1000)
        500000000000000000
        >>> safe_w_div_down(500, 0)
        0
        >>> safe_w_div_down(0, 0, fallback=MAX_UINT256) == MAX_UINT256
        True
    """
    if denominator == 0:
        return fallback

    return w_div_down(numerator, denominator)


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def _validate_int(value: int, name: str) -> None:
    # bool — подкласс int, но суммой не является
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {type(value).__name__}")


def validate_uint256(value: int, name: str) -> int:
    """
    Валидация, что значение укладывается в uint256.

    Raises:
        ValueError: Если value не int или вне [0, 2**256 - 1]
    """
    _validate_int(value, name)

    if value < 0 or value > MAX_UINT256:
        raise ValueError(f"{name} must be within uint256, got {value}")

    return value


def validate_int256(value: int, name: str) -> int:
    """
    Валидация знаковой суммы (move amount).

    Raises:
        ValueError: Если value не int или вне [-2**255, 2**255 - 1]
    """
    _validate_int(value, name)

    if value < INT256_MIN or value > INT256_MAX:
        raise ValueError(f"{name} must be within int256, got {value}")

    return value
