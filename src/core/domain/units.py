"""
Units — Централизованный модуль единиц ledger

Единственный допустимый способ преобразований между:
- целыми токенами и raw-единицами (10^TOKEN_DECIMALS)
- unix timestamp (секунды) и номером дня
- произвольной строкой и нормализованным адресом

ЗАПРЕЩЕНО смешивать whole tokens и raw-единицы без явного конвертера из этого модуля.
"""

import re
from typing import Final

from src.core.errors import InvalidParameterError
from src.core.math.int_safeguards import mul_div, validate_non_negative

# =============================================================================
# ПАРАМЕТРЫ ЕДИНИЦ
# =============================================================================

TOKEN_DECIMALS: Final[int] = 18

# Raw-единиц в одном целом токене
ONE_TOKEN: Final[int] = 10**TOKEN_DECIMALS

SECONDS_PER_DAY: Final[int] = 24 * 60 * 60

# Burn разрешён только лотами, кратными 1000 целых токенов
BURN_LOT_TOKENS: Final[int] = 1000
BURN_LOT: Final[int] = BURN_LOT_TOKENS * ONE_TOKEN

# Null account: источник mint и приёмник burn
ZERO_ADDRESS: Final[str] = "0x" + "0" * 40

_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")


# =============================================================================
# КОНВЕРТЕРЫ
# =============================================================================


def tokens_to_raw(amount_tokens: int) -> int:
    """
    Конверсия: целые токены → raw-единицы.

    Examples:
        >>> tokens_to_raw(3) == 3 * 10**18
        True
    """
    validate_non_negative(amount_tokens, "amount_tokens")
    return mul_div(amount_tokens, ONE_TOKEN, 1)


def day_from_timestamp(ts_seconds: float) -> int:
    """
    Номер дня с unix epoch (целая часть ts / 86400).

    Examples:
        >>> day_from_timestamp(0)
        0
        >>> day_from_timestamp(86399.9)
        0
        >>> day_from_timestamp(86400)
        1
    """
    if ts_seconds < 0:
        raise InvalidParameterError(f"timestamp cannot be negative: {ts_seconds}")
    return int(ts_seconds // SECONDS_PER_DAY)


# =============================================================================
# АДРЕСА
# =============================================================================


def normalize_address(address: str) -> str:
    """
    Валидация и нормализация адреса (0x + 40 hex, lower case).

    Raises:
        InvalidParameterError: если формат не соответствует
    """
    if not isinstance(address, str) or not _ADDRESS_RE.match(address):
        raise InvalidParameterError(f"Malformed address: {address!r}", code="malformed_address")
    return address.lower()


def require_non_zero_address(address: str, name: str = "address") -> str:
    """
    Нормализация адреса с запретом null account.

    Raises:
        InvalidParameterError: если адрес некорректен или равен ZERO_ADDRESS
    """
    normalized = normalize_address(address)
    if normalized == ZERO_ADDRESS:
        raise InvalidParameterError(f"{name} cannot be the zero address", code="zero_address")
    return normalized


def is_zero_address(address: str) -> bool:
    return normalize_address(address) == ZERO_ADDRESS


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_burn_amount(amount: int) -> None:
    """
    Проверка, что сумма burn — положительное кратное BURN_LOT.

    Raises:
        InvalidParameterError: если amount ≤ 0 или не кратен лоту
    """
    validate_non_negative(amount, "amount")

    if amount == 0 or amount % BURN_LOT != 0:
        raise InvalidParameterError(
            f"Burn amount {amount} must be a positive multiple of "
            f"{BURN_LOT_TOKENS} tokens ({BURN_LOT} raw units)",
            code="invalid_burn_lot",
        )
