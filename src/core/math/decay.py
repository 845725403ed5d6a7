"""
Decay — Compound Fee Decay of the Fee Index

Модуль вычисляет ежедневное сложное затухание fee index:
- Fixed-point арифметика с FIXED_POINT_SCALE (48 десятичных знаков)
- Возведение в степень повторным возведением в квадрат (O(log days))
- Каждое промежуточное умножение округляется вниз (floor)
- Эталонная итеративная форма (по одному дню) для сверки

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. rate_bps == 0 или days == 0 → index без изменений
2. Результат никогда не превышает index (factor ∈ [0, 1])
3. Результат не возрастает по days при фиксированном rate
4. Стоимость не зависит линейно от days
5. index вне uint256 → FeeArithmeticError (overflow)

ФОРМУЛЫ:
    D = MAX_BPS × ANNUALIZATION_PERIOD_DAYS = 10000 × 366
    factor_day = floor(SCALE × (D - rate_bps) / D)
    factor(days) = factor_day ^ days           (fixed-point, floor на каждом шаге)
    decay(index, rate_bps, days) = floor(index × factor(days) / SCALE)

    Итеративная форма:
    index_{k+1} = index_k - floor(index_k × rate_bps / D)
"""

from typing import Final

from src.core.errors import InvalidParameterError
from src.core.math.int_safeguards import (
    mul_div,
    validate_non_negative,
    validate_uint256,
)

# =============================================================================
# ПАРАМЕТРЫ FEE RATE
# =============================================================================

# Базис-пункты: 10000 bps = 100%
MAX_BPS: Final[int] = 10_000

# Период аннуализации в днях (fee rate задаётся за 366 дней)
ANNUALIZATION_PERIOD_DAYS: Final[int] = 366

# Знаменатель дневного затухания
DECAY_RATIO_DENOMINATOR: Final[int] = MAX_BPS * ANNUALIZATION_PERIOD_DAYS

# Максимальный fee rate: 4% за период аннуализации
MAX_FEE_RATE: Final[int] = 400

# Начальный fee index — верх диапазона uint128, чтобы тысячи дней затухания
# не съедали разрешение индекса
INITIAL_FEE_INDEX: Final[int] = (1 << 128) - 1

# Fixed-point масштаб: 48 дробных десятичных знаков
FIXED_POINT_SCALE: Final[int] = 10**48


# =============================================================================
# FIXED-POINT POWER
# =============================================================================


def fixed_point_pow(base: int, exponent: int, scale: int = FIXED_POINT_SCALE) -> int:
    """
    base^exponent в fixed-point с масштабом scale.

    Возведение в квадрат: O(log2(exponent)) умножений, каждое с floor.

    Args:
        base: Основание в fixed-point (base / scale — реальное значение)
        exponent: Неотрицательная степень
        scale: Fixed-point масштаб

    Returns:
        floor-аппроксимация scale × (base / scale)^exponent

    Examples:
        >>> fixed_point_pow(10**48, 1000) == FIXED_POINT_SCALE
        True
        >>> fixed_point_pow(5 * 10**47, 2) == 25 * 10**46
        True
    """
    validate_non_negative(exponent, "exponent")

    result = scale
    while exponent > 0:
        if exponent & 1:
            result = mul_div(result, base, scale)
        exponent >>= 1
        if exponent:
            base = mul_div(base, base, scale)

    return result


def decay_factor(rate_bps: int, days: int) -> int:
    """
    Fixed-point множитель затухания за days дней.

    Returns:
        FIXED_POINT_SCALE × (1 - rate_bps / D)^days, округлённый вниз
    """
    _validate_rate(rate_bps)
    validate_non_negative(days, "days")

    if rate_bps == 0 or days == 0:
        return FIXED_POINT_SCALE

    daily_factor = mul_div(
        FIXED_POINT_SCALE,
        DECAY_RATIO_DENOMINATOR - rate_bps,
        DECAY_RATIO_DENOMINATOR,
    )
    return fixed_point_pow(daily_factor, days)


# =============================================================================
# COMPOUND DECAY
# =============================================================================


def calculate_compound_decay(index: int, rate_bps: int, days: int) -> int:
    """
    Сложное затухание index за days дней при дневной ставке rate_bps / D.

    Чистая функция, без side effects.

    Args:
        index: Текущий fee index (uint256)
        rate_bps: Годовой fee rate в bps
        days: Количество прошедших дней

    Returns:
        floor(index × (1 - rate_bps / D)^days), не больше index

    Raises:
        InvalidParameterError: отрицательные аргументы, rate_bps > D
        FeeArithmeticError: index вне uint256

    Examples:
        >>> calculate_compound_decay(10**18, 0, 500)
        1000000000000000000
        >>> calculate_compound_decay(10**18, 400, 0)
        1000000000000000000
        >>> calculate_compound_decay(10**18, 400, 1)
        999890710382513661
    """
    validate_uint256(index, "index")
    _validate_rate(rate_bps)
    validate_non_negative(days, "days")

    if rate_bps == 0 or days == 0 or index == 0:
        return index

    return mul_div(index, decay_factor(rate_bps, days), FIXED_POINT_SCALE)


def calculate_decay_iterative(index: int, rate_bps: int, days: int) -> int:
    """
    Эталонное затухание: по одному шагу на день, floor на каждом шаге.

    Линейно по days — только для сверки и тестов. Расходится с
    calculate_compound_decay не более чем на days + 1 единиц.

    Examples:
        >>> calculate_decay_iterative(10**18, 400, 1)
        999890710382513662
    """
    validate_uint256(index, "index")
    _validate_rate(rate_bps)
    validate_non_negative(days, "days")

    for _ in range(days):
        index -= index * rate_bps // DECAY_RATIO_DENOMINATOR

    return index


# =============================================================================
# UTILITIES
# =============================================================================


def annualized_decay_fraction(rate_bps: int) -> float:
    """
    Доля стоимости, теряемая за один период аннуализации (для отчётов).

    Из-за ежедневного compounding немного меньше rate_bps / MAX_BPS.

    Examples:
        >>> round(annualized_decay_fraction(400), 6)
        0.039213
    """
    factor = decay_factor(rate_bps, ANNUALIZATION_PERIOD_DAYS)
    return 1.0 - factor / FIXED_POINT_SCALE


def _validate_rate(rate_bps: int) -> None:
    validate_non_negative(rate_bps, "rate_bps")

    if rate_bps > DECAY_RATIO_DENOMINATOR:
        raise InvalidParameterError(
            f"rate_bps {rate_bps} exceeds decay denominator {DECAY_RATIO_DENOMINATOR}"
        )
