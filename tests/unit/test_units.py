"""
Sanity тесты для модуля Units

Проверяет конвертеры токенов и дней, нормализацию адресов и burn-лоты.
"""

import pytest

from src.core.domain.units import (
    BURN_LOT,
    ONE_TOKEN,
    SECONDS_PER_DAY,
    TOKEN_DECIMALS,
    ZERO_ADDRESS,
    day_from_timestamp,
    is_zero_address,
    normalize_address,
    require_non_zero_address,
    tokens_to_raw,
    validate_burn_amount,
)
from src.core.errors import InvalidParameterError


class TestConverters:
    def test_one_token(self):
        assert TOKEN_DECIMALS == 18
        assert ONE_TOKEN == 10**18

    def test_tokens_to_raw(self):
        assert tokens_to_raw(0) == 0
        assert tokens_to_raw(5) == 5 * ONE_TOKEN

    def test_tokens_to_raw_rejects_negative(self):
        with pytest.raises(InvalidParameterError):
            tokens_to_raw(-1)

    def test_day_boundaries(self):
        assert day_from_timestamp(0) == 0
        assert day_from_timestamp(SECONDS_PER_DAY - 1) == 0
        assert day_from_timestamp(SECONDS_PER_DAY) == 1
        assert day_from_timestamp(1_700_000_000) == 19675

    def test_negative_timestamp_rejected(self):
        with pytest.raises(InvalidParameterError):
            day_from_timestamp(-1)


class TestAddresses:
    def test_normalize_lowercases(self):
        assert normalize_address("0x" + "AB" * 20) == "0x" + "ab" * 20

    @pytest.mark.parametrize(
        "address",
        ["", "0x123", "ab" * 20, "0x" + "g" * 40, "0x" + "a" * 41, None],
    )
    def test_malformed(self, address):
        with pytest.raises(InvalidParameterError) as exc_info:
            normalize_address(address)
        assert exc_info.value.code == "malformed_address"

    def test_zero_address_rejected(self):
        with pytest.raises(InvalidParameterError) as exc_info:
            require_non_zero_address(ZERO_ADDRESS, "fee_recipient")
        assert exc_info.value.code == "zero_address"
        assert "fee_recipient" in str(exc_info.value)

    def test_is_zero_address(self):
        assert is_zero_address(ZERO_ADDRESS)
        assert not is_zero_address("0x" + "1" * 40)


class TestBurnLots:
    def test_lot_size(self):
        assert BURN_LOT == 1000 * ONE_TOKEN

    def test_multiples_accepted(self):
        validate_burn_amount(BURN_LOT)
        validate_burn_amount(37 * BURN_LOT)

    @pytest.mark.parametrize("amount", [0, 999 * ONE_TOKEN, BURN_LOT + 1, BURN_LOT // 2])
    def test_invalid_lots(self, amount):
        with pytest.raises(InvalidParameterError) as exc_info:
            validate_burn_amount(amount)
        assert exc_info.value.code == "invalid_burn_lot"
