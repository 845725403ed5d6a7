"""
Тесты для Decay — Compound Fee Decay

Проверяемые инварианты:
1. rate == 0 или days == 0 → index без изменений
2. Результат не больше index и не возрастает по days
3. Композиция decay(decay(i, a), b) ≈ decay(i, a + b) (±2 единицы) и
   никогда не превышает decay(i, a + b)
4. Сверка с итеративной формой: 0 ≤ iterative - compound ≤ days + 1
5. Overflow индекса → FeeArithmeticError
"""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from src.core.errors import FeeArithmeticError, InvalidParameterError
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
from src.core.math.int_safeguards import UINT256_MAX

# Стратегии
indices = st.integers(min_value=0, max_value=INITIAL_FEE_INDEX)
rates = st.integers(min_value=0, max_value=MAX_FEE_RATE)
day_counts = st.integers(min_value=0, max_value=5 * ANNUALIZATION_PERIOD_DAYS)


# =============================================================================
# ТЕСТЫ: Константы
# =============================================================================


class TestConstants:
    def test_denominator(self):
        assert DECAY_RATIO_DENOMINATOR == MAX_BPS * ANNUALIZATION_PERIOD_DAYS == 3_660_000

    def test_initial_index_is_uint128_max(self):
        assert INITIAL_FEE_INDEX == 2**128 - 1

    def test_max_fee_rate(self):
        assert MAX_FEE_RATE == 400


# =============================================================================
# ТЕСТЫ: Fixed-point power
# =============================================================================


class TestFixedPointPow:
    def test_zero_exponent_is_one(self):
        assert fixed_point_pow(FIXED_POINT_SCALE // 3, 0) == FIXED_POINT_SCALE

    def test_one_stays_one(self):
        assert fixed_point_pow(FIXED_POINT_SCALE, 1000) == FIXED_POINT_SCALE

    def test_half_squared(self):
        half = FIXED_POINT_SCALE // 2
        assert fixed_point_pow(half, 2) == FIXED_POINT_SCALE // 4
        assert fixed_point_pow(half, 3) == FIXED_POINT_SCALE // 8

    def test_small_scale(self):
        """С масштабом 100: 0.9^2 = 0.81."""
        assert fixed_point_pow(90, 2, scale=100) == 81

    def test_negative_exponent_rejected(self):
        with pytest.raises(InvalidParameterError):
            fixed_point_pow(FIXED_POINT_SCALE, -1)


# =============================================================================
# ТЕСТЫ: Decay factor
# =============================================================================


class TestDecayFactor:
    def test_identity_cases(self):
        assert decay_factor(0, 100) == FIXED_POINT_SCALE
        assert decay_factor(400, 0) == FIXED_POINT_SCALE

    def test_one_day(self):
        expected = FIXED_POINT_SCALE * (DECAY_RATIO_DENOMINATOR - 400) // DECAY_RATIO_DENOMINATOR
        assert decay_factor(400, 1) == expected

    def test_full_rate_zeroes_factor(self):
        assert decay_factor(DECAY_RATIO_DENOMINATOR, 1) == 0

    def test_rate_above_denominator_rejected(self):
        with pytest.raises(InvalidParameterError):
            decay_factor(DECAY_RATIO_DENOMINATOR + 1, 1)


# =============================================================================
# ТЕСТЫ: calculate_compound_decay
# =============================================================================


class TestCompoundDecay:
    def test_known_one_day_value(self):
        assert calculate_compound_decay(10**18, 400, 1) == 999890710382513661

    def test_known_iterative_value(self):
        assert calculate_decay_iterative(10**18, 400, 1) == 999890710382513662

    def test_zero_days_identity(self):
        assert calculate_compound_decay(INITIAL_FEE_INDEX, MAX_FEE_RATE, 0) == INITIAL_FEE_INDEX

    def test_zero_rate_identity(self):
        assert calculate_compound_decay(INITIAL_FEE_INDEX, 0, 10_000) == INITIAL_FEE_INDEX

    def test_zero_index(self):
        assert calculate_compound_decay(0, 400, 30) == 0

    def test_max_index_accepted(self):
        result = calculate_compound_decay(UINT256_MAX, MAX_FEE_RATE, 366)
        assert 0 < result < UINT256_MAX

    def test_index_overflow(self):
        with pytest.raises(FeeArithmeticError) as exc_info:
            calculate_compound_decay(UINT256_MAX + 1, 400, 1)
        assert exc_info.value.code == "overflow"

    def test_negative_arguments_rejected(self):
        with pytest.raises(InvalidParameterError):
            calculate_compound_decay(-1, 400, 1)
        with pytest.raises(InvalidParameterError):
            calculate_compound_decay(10**18, -1, 1)
        with pytest.raises(InvalidParameterError):
            calculate_compound_decay(10**18, 400, -1)

    def test_large_day_count_is_logarithmic(self):
        """Миллион дней считается за ~20 умножений и уводит индекс к нулю."""
        assert calculate_compound_decay(INITIAL_FEE_INDEX, MAX_FEE_RATE, 1_000_000) == 0

    def test_annualized_fraction_below_nominal(self):
        """Ежедневный compounding даёт чуть меньше 4% за период."""
        fraction = annualized_decay_fraction(400)
        assert round(fraction, 6) == 0.039213
        assert fraction < 400 / MAX_BPS
        assert annualized_decay_fraction(0) == 0.0


# =============================================================================
# ТЕСТЫ: Свойства (hypothesis)
# =============================================================================


class TestDecayProperties:
    @given(index=indices, rate=rates, days=day_counts)
    def test_never_exceeds_index(self, index, rate, days):
        assert calculate_compound_decay(index, rate, days) <= index

    @given(index=st.integers(min_value=0, max_value=UINT256_MAX), rate=rates, days=day_counts)
    def test_non_increasing_in_days(self, index, rate, days):
        assert calculate_compound_decay(index, rate, days + 1) <= calculate_compound_decay(
            index, rate, days
        )

    @given(
        index=indices,
        rate=rates,
        a=st.integers(min_value=0, max_value=2 * ANNUALIZATION_PERIOD_DAYS),
        b=st.integers(min_value=0, max_value=2 * ANNUALIZATION_PERIOD_DAYS),
    )
    def test_composability(self, index, rate, a, b):
        stepped = calculate_compound_decay(calculate_compound_decay(index, rate, a), rate, b)
        direct = calculate_compound_decay(index, rate, a + b)
        assert abs(stepped - direct) <= 2

    @given(
        index=indices,
        rate=rates,
        a=st.integers(min_value=0, max_value=2 * ANNUALIZATION_PERIOD_DAYS),
        b=st.integers(min_value=0, max_value=2 * ANNUALIZATION_PERIOD_DAYS),
    )
    def test_stepped_never_exceeds_direct(self, index, rate, a, b):
        """Два коммита подряд не начисляют держателю больше, чем один общий."""
        stepped = calculate_compound_decay(calculate_compound_decay(index, rate, a), rate, b)
        assert stepped <= calculate_compound_decay(index, rate, a + b)

    @settings(max_examples=50)
    @given(
        index=indices,
        rate=rates,
        days=st.integers(min_value=1, max_value=5 * ANNUALIZATION_PERIOD_DAYS),
    )
    def test_agrees_with_iterative(self, index, rate, days):
        compound = calculate_compound_decay(index, rate, days)
        iterative = calculate_decay_iterative(index, rate, days)
        assert 0 <= iterative - compound <= days + 1
