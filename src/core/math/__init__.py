"""
Core math modules

Целочисленные примитивы и алгоритм затухания fee index.
"""

# Integer Safeguards
from src.core.math.int_safeguards import (
    UINT256_MAX,
    UINT512_MAX,
    checked_add,
    checked_sub,
    is_uint256,
    mul_div,
    validate_non_negative,
    validate_uint256,
)

# Decay
from src.core.math.decay import (
    ANNUALIZATION_PERIOD_DAYS,
    DECAY_RATIO_DENOMINATOR,
    FIXED_POINT_SCALE,
    INITIAL_FEE_INDEX,
    MAX_BPS,
    MAX_FEE_RATE,
    annualized_decay_fraction,
    calculate_compound_decay,
    calculate_decay_iterative,
    decay_factor,
    fixed_point_pow,
)

__all__ = [
    # Integer Safeguards — Bounds
    "UINT256_MAX",
    "UINT512_MAX",
    # Integer Safeguards — Arithmetic
    "checked_add",
    "checked_sub",
    "mul_div",
    # Integer Safeguards — Validation
    "is_uint256",
    "validate_non_negative",
    "validate_uint256",
    # Decay — Constants
    "ANNUALIZATION_PERIOD_DAYS",
    "DECAY_RATIO_DENOMINATOR",
    "FIXED_POINT_SCALE",
    "INITIAL_FEE_INDEX",
    "MAX_BPS",
    "MAX_FEE_RATE",
    # Decay — Functions
    "annualized_decay_fraction",
    "calculate_compound_decay",
    "calculate_decay_iterative",
    "decay_factor",
    "fixed_point_pow",
]
