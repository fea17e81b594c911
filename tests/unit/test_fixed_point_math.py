"""
Тесты для core math: fixed point, numerical safeguards, compounding

Проверяет:
1. WAD умножение/деление и округление вниз
2. Насыщающее вычитание (clamp в ноль)
3. Division guards с явным fallback
4. Валидацию диапазонов uint256/int256
5. Taylor compounding годовой ставки
"""

import pytest

from src.core.math import (
    INT256_MAX,
    INT256_MIN,
    MAX_UINT256,
    SECONDS_PER_YEAR,
    WAD,
    annualize_rate,
    mul_div_down,
    safe_w_div_down,
    validate_int256,
    validate_uint256,
    w_div_down,
    w_mul_down,
    w_taylor_compounded,
    wad_to_float,
    zero_floor_sub,
)

# =============================================================================
# FIXED POINT
# =============================================================================


class TestFixedPoint:
    """Тесты WAD арифметики"""

    def test_w_mul_down_half_of_two(self) -> None:
        assert w_mul_down(WAD // 2, 2 * WAD) == WAD

    def test_w_div_down_ratio(self) -> None:
        assert w_div_down(500, 1000) == WAD // 2

    def test_rounds_down(self) -> None:
        """1/3 и 7/2 усекаются к нулю"""
        assert w_div_down(1, 3) == 333333333333333333
        assert mul_div_down(7, 1, 2) == 3

    def test_mul_div_by_zero_raises(self) -> None:
        with pytest.raises(ZeroDivisionError):
            mul_div_down(1, 1, 0)

    def test_zero_floor_sub(self) -> None:
        assert zero_floor_sub(500, 200) == 300
        assert zero_floor_sub(100, 250) == 0
        assert zero_floor_sub(100, 100) == 0

    def test_wad_to_float(self) -> None:
        assert wad_to_float(WAD // 4) == 0.25


# =============================================================================
# NUMERICAL SAFEGUARDS
# =============================================================================


class TestSafeWDivDown:
    """Тесты division guard"""

    def test_regular_division(self) -> None:
        assert safe_w_div_down(500, 1000) == 5 * 10**17

    def test_zero_denominator_returns_zero(self) -> None:
        assert safe_w_div_down(500, 0) == 0

    def test_zero_denominator_custom_fallback(self) -> None:
        assert safe_w_div_down(0, 0, fallback=MAX_UINT256) == MAX_UINT256

    def test_zero_numerator(self) -> None:
        assert safe_w_div_down(0, 1000) == 0


class TestValidation:
    """Тесты валидации диапазонов"""

    def test_uint256_bounds(self) -> None:
        assert validate_uint256(0, "x") == 0
        assert validate_uint256(MAX_UINT256, "x") == MAX_UINT256

        with pytest.raises(ValueError, match="uint256"):
            validate_uint256(-1, "x")
        with pytest.raises(ValueError, match="uint256"):
            validate_uint256(MAX_UINT256 + 1, "x")

    def test_int256_bounds(self) -> None:
        assert validate_int256(INT256_MIN, "amount") == INT256_MIN
        assert validate_int256(INT256_MAX, "amount") == INT256_MAX

        with pytest.raises(ValueError, match="int256"):
            validate_int256(INT256_MAX + 1, "amount")

    def test_rejects_non_integers(self) -> None:
        with pytest.raises(ValueError, match="integer"):
            validate_uint256(1.5, "x")  # type: ignore[arg-type]
        with pytest.raises(ValueError, match="integer"):
            validate_int256(True, "amount")


# =============================================================================
# COMPOUNDING
# =============================================================================


class TestTaylorCompounding:
    """Тесты годовой ставки из посекундной"""

    def test_zero_rate(self) -> None:
        assert w_taylor_compounded(0, SECONDS_PER_YEAR) == 0
        assert annualize_rate(0) == 0

    def test_three_terms(self) -> None:
        """x = 1: 1 + 1/2 + 1/6"""
        assert w_taylor_compounded(WAD, 1) == 1666666666666666666

    def test_annualize_uses_one_year(self) -> None:
        rate = 3170979198
        assert annualize_rate(rate) == w_taylor_compounded(rate, SECONDS_PER_YEAR)

    def test_compounded_exceeds_linear(self) -> None:
        rate = 3170979198  # ~10% APR
        linear = rate * SECONDS_PER_YEAR
        compounded = annualize_rate(rate)

        assert compounded > linear

    def test_close_to_ten_percent_apy(self) -> None:
        """e^0.1 - 1 ≈ 0.10517"""
        approx = wad_to_float(annualize_rate(3170979198))

        assert approx == pytest.approx(0.10517, rel=1e-3)

    def test_negative_inputs_rejected(self) -> None:
        with pytest.raises(ValueError):
            w_taylor_compounded(-1, SECONDS_PER_YEAR)
