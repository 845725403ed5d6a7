"""
Тесты для модуля Integer Safeguards

Проверяет:
1. Валидацию uint256 параметров
2. Checked сложение/вычитание
3. mul_div: floor, деление на ноль, 512-битная граница произведения
"""

import pytest

from src.core.errors import FeeArithmeticError, InvalidParameterError, LedgerError
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


# =============================================================================
# ТЕСТЫ: Валидация
# =============================================================================


class TestValidation:
    def test_is_uint256_bounds(self):
        assert is_uint256(0)
        assert is_uint256(UINT256_MAX)
        assert not is_uint256(UINT256_MAX + 1)
        assert not is_uint256(-1)

    def test_is_uint256_rejects_non_int(self):
        """bool и float не считаются uint256."""
        assert not is_uint256(True)
        assert not is_uint256(1.0)
        assert not is_uint256("1")

    def test_validate_non_negative_passes_value_through(self):
        assert validate_non_negative(42, "x") == 42
        assert validate_non_negative(0, "x") == 0

    def test_validate_non_negative_rejects_negative(self):
        with pytest.raises(InvalidParameterError, match="cannot be negative"):
            validate_non_negative(-1, "amount")

    def test_validate_non_negative_rejects_float_and_bool(self):
        with pytest.raises(InvalidParameterError, match="must be an integer"):
            validate_non_negative(1.5, "amount")
        with pytest.raises(InvalidParameterError):
            validate_non_negative(False, "amount")

    def test_validate_uint256_overflow(self):
        with pytest.raises(FeeArithmeticError) as exc_info:
            validate_uint256(UINT256_MAX + 1, "index")
        assert exc_info.value.code == "overflow"

    def test_errors_share_base_class(self):
        """Все ошибки ledger ловятся одним except LedgerError."""
        with pytest.raises(LedgerError):
            validate_uint256(-5, "index")
        with pytest.raises(ValueError):
            validate_uint256(-5, "index")


# =============================================================================
# ТЕСТЫ: Checked arithmetic
# =============================================================================


class TestCheckedArithmetic:
    def test_checked_add(self):
        assert checked_add(1, 2) == 3
        assert checked_add(UINT256_MAX - 1, 1) == UINT256_MAX

    def test_checked_add_overflow(self):
        with pytest.raises(FeeArithmeticError) as exc_info:
            checked_add(UINT256_MAX, 1)
        assert exc_info.value.code == "overflow"

    def test_checked_sub(self):
        assert checked_sub(10, 10) == 0
        assert checked_sub(10, 3) == 7

    def test_checked_sub_underflow(self):
        with pytest.raises(FeeArithmeticError) as exc_info:
            checked_sub(3, 4)
        assert exc_info.value.code == "underflow"


# =============================================================================
# ТЕСТЫ: mul_div
# =============================================================================


class TestMulDiv:
    def test_floor_rounding(self):
        assert mul_div(10, 3, 4) == 7
        assert mul_div(1, 1, 2) == 0
        assert mul_div(7, 1, 7) == 1

    def test_wide_intermediate_product(self):
        """Произведение шире 256 бит допустимо, если результат влезает."""
        assert mul_div(UINT256_MAX, UINT256_MAX, UINT256_MAX) == UINT256_MAX
        assert mul_div(2**200, 2**200, 2**150) == 2**250

    def test_division_by_zero(self):
        with pytest.raises(FeeArithmeticError) as exc_info:
            mul_div(1, 1, 0)
        assert exc_info.value.code == "division_by_zero"

    def test_product_over_512_bits(self):
        with pytest.raises(FeeArithmeticError, match="512 bits"):
            mul_div(UINT512_MAX, 2, UINT512_MAX)

    def test_result_over_uint256(self):
        with pytest.raises(FeeArithmeticError, match="result overflows"):
            mul_div(UINT256_MAX, 2, 1)
