"""
Integer Safeguards — Checked uint256 Math Primitives

Модуль обеспечивает детерминированную целочисленную арифметику ledger:
- Checked сложение/вычитание в пространстве uint256
- mul_div с округлением вниз (floor), как truncating division в ledger
- Валидация неотрицательных uint256 значений

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Никаких float: все суммы, индексы и курсы — int
2. Результат вне [0, UINT256_MAX] → FeeArithmeticError (без saturating)
3. Деление на ноль → FeeArithmeticError (fallback-значений нет)
4. Все промежуточные произведения точные (Python int), округление только в делении
"""

from typing import Final

from src.core.errors import FeeArithmeticError, InvalidParameterError

# =============================================================================
# ГРАНИЦЫ
# =============================================================================

UINT256_MAX: Final[int] = (1 << 256) - 1

# Промежуточные произведения mul_div ограничены 512 битами (full-width mulDiv)
UINT512_MAX: Final[int] = (1 << 512) - 1


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def is_uint256(value: int) -> bool:
    """
    Проверка, что value — int в диапазоне uint256.

    bool отвергается, хотя формально является int.

    Examples:
        >>> is_uint256(0)
        True
        >>> is_uint256(-1)
        False
        >>> is_uint256(UINT256_MAX + 1)
        False
    """
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    return 0 <= value <= UINT256_MAX


def validate_non_negative(value: int, name: str) -> int:
    """
    Проверка неотрицательного целого параметра.

    Raises:
        InvalidParameterError: если value не int или отрицательный
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidParameterError(f"{name} must be an integer, got {type(value).__name__}")

    if value < 0:
        raise InvalidParameterError(f"{name} cannot be negative: {value}")

    return value


def validate_uint256(value: int, name: str) -> int:
    """
    Проверка, что value представимо как uint256.

    Raises:
        InvalidParameterError: если value не int или отрицательный
        FeeArithmeticError: если value > UINT256_MAX (overflow)
    """
    validate_non_negative(value, name)

    if value > UINT256_MAX:
        raise FeeArithmeticError(f"{name} overflows uint256: {value}", code="overflow")

    return value


# =============================================================================
# CHECKED ARITHMETIC
# =============================================================================


def checked_add(a: int, b: int) -> int:
    """
    Сложение с проверкой overflow.

    Examples:
        >>> checked_add(2, 3)
        5
    """
    result = a + b
    if result > UINT256_MAX:
        raise FeeArithmeticError(f"uint256 overflow: {a} + {b}", code="overflow")
    return result


def checked_sub(a: int, b: int) -> int:
    """
    Вычитание с проверкой underflow.

    Examples:
        >>> checked_sub(5, 3)
        2
    """
    if b > a:
        raise FeeArithmeticError(f"uint256 underflow: {a} - {b}", code="underflow")
    return a - b


def mul_div(a: int, b: int, denominator: int) -> int:
    """
    floor(a * b / denominator) с full-width промежуточным произведением.

    Округление всегда вниз, что совпадает с truncating division ledger
    для неотрицательных операндов.

    Args:
        a: Множитель (uint256)
        b: Множитель (uint256)
        denominator: Делитель (> 0)

    Returns:
        floor(a * b / denominator)

    Raises:
        FeeArithmeticError: деление на ноль, произведение шире 512 бит,
            результат шире 256 бит

    Examples:
        >>> mul_div(10, 3, 4)
        7
        >>> mul_div(2**200, 2**200, 2**150) == 2**250
        True
    """
    if denominator == 0:
        raise FeeArithmeticError("mul_div: division by zero", code="division_by_zero")

    product = a * b
    if product > UINT512_MAX:
        raise FeeArithmeticError("mul_div: intermediate product overflows 512 bits", code="overflow")

    result = product // denominator
    if result > UINT256_MAX:
        raise FeeArithmeticError(f"mul_div: result overflows uint256: {result}", code="overflow")

    return result
