"""
Core math modules для morpho-helper

Целочисленная WAD арифметика, division guards и compounding ставок.
"""

# Fixed Point (WAD, uint256)
from src.core.math.fixed_point import (
    MAX_UINT128,
    MAX_UINT256,
    ORACLE_PRICE_SCALE,
    WAD,
    ZERO_ADDRESS,
    mul_div_down,
    w_div_down,
    w_mul_down,
    wad_to_float,
    zero_floor_sub,
)

# Numerical Safeguards
from src.core.math.numerical_safeguards import (
    INT256_MAX,
    INT256_MIN,
    safe_w_div_down,
    validate_int256,
    validate_uint256,
)

# Compounding
from src.core.math.compounding import (
    SECONDS_PER_YEAR,
    annualize_rate,
    w_taylor_compounded,
)

__all__ = [
    # Fixed Point — Constants
    "MAX_UINT128",
    "MAX_UINT256",
    "ORACLE_PRICE_SCALE",
    "WAD",
    "ZERO_ADDRESS",
    # Fixed Point — Functions
    "mul_div_down",
    "w_div_down",
    "w_mul_down",
    "wad_to_float",
    "zero_floor_sub",
    # Numerical Safeguards
    "INT256_MAX",
    "INT256_MIN",
    "safe_w_div_down",
    "validate_int256",
    "validate_uint256",
    # Compounding
    "SECONDS_PER_YEAR",
    "annualize_rate",
    "w_taylor_compounded",
]
