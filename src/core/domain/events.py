"""
Events — записи уведомлений ledger

Immutable Pydantic модели событий, которые FeeToken отправляет во внешний
notification sink. Имена событий совпадают с публичным журналом токена:
Transfer, Approval, Mint, Burn, CollectFees, BurnFee, Update*.

Sink получает события только после успешного завершения транзакции;
при откате буфер событий сбрасывается.
"""

from typing import Literal, Protocol, Union

from pydantic import BaseModel, Field


# =============================================================================
# LEDGER EVENTS
# =============================================================================


class LedgerEvent(BaseModel):
    """Базовая запись события."""

    model_config = {"frozen": True}


class Transfer(LedgerEvent):
    """Перемещение raw-единиц; sender/recipient == ZERO_ADDRESS для mint/burn."""

    event: Literal["Transfer"] = "Transfer"
    sender: str = Field(..., description="Отправитель (ZERO_ADDRESS для mint)")
    recipient: str = Field(..., description="Получатель (ZERO_ADDRESS для burn)")
    amount: int = Field(..., ge=0, description="Сумма в raw-единицах")


class Approval(LedgerEvent):
    event: Literal["Approval"] = "Approval"
    owner: str
    spender: str
    amount: int = Field(..., ge=0)


class Mint(LedgerEvent):
    event: Literal["Mint"] = "Mint"
    account: str
    amount: int = Field(..., ge=0, description="Сумма в raw-единицах")
    memo: str = ""


class Burn(LedgerEvent):
    event: Literal["Burn"] = "Burn"
    account: str
    user_id: str = Field(..., description="Идентификатор пользователя off-ledger")
    amount: int = Field(..., ge=0)


class FeesCollected(LedgerEvent):
    """Коммит нового fee index (CollectFees)."""

    event: Literal["CollectFees"] = "CollectFees"
    fees_accrued: int = Field(..., ge=0)
    fee_index: int = Field(..., ge=0)


class FeeBurned(LedgerEvent):
    """Settlement накопленной fee аккаунта (BurnFee)."""

    event: Literal["BurnFee"] = "BurnFee"
    account: str
    fee: int = Field(..., ge=0)
    balance: int = Field(..., ge=0, description="Raw баланс после settlement")
    fee_index: int = Field(..., ge=0)


# =============================================================================
# ADMIN EVENTS
# =============================================================================


class FeeRateUpdated(LedgerEvent):
    event: Literal["UpdateFeeRate"] = "UpdateFeeRate"
    fee_rate: int = Field(..., ge=0)


class FeeRecipientUpdated(LedgerEvent):
    event: Literal["UpdateFeeRecipient"] = "UpdateFeeRecipient"
    fee_recipient: str


class FeeRateManagerUpdated(LedgerEvent):
    event: Literal["UpdateFeeRateManager"] = "UpdateFeeRateManager"
    fee_rate_manager: str


class WhitelistManagerUpdated(LedgerEvent):
    event: Literal["UpdateWhitelistManager"] = "UpdateWhitelistManager"
    whitelist_manager: str


class OwnershipTransferred(LedgerEvent):
    event: Literal["OwnershipTransferred"] = "OwnershipTransferred"
    previous_owner: str
    new_owner: str


class WhitelistingToggled(LedgerEvent):
    event: Literal["UpdateIsWhitelisting"] = "UpdateIsWhitelisting"
    is_whitelisting: bool


class WhitelistAdded(LedgerEvent):
    event: Literal["AddToWhitelist"] = "AddToWhitelist"
    account: str


class WhitelistRemoved(LedgerEvent):
    event: Literal["RemoveFromWhitelist"] = "RemoveFromWhitelist"
    account: str


AnyLedgerEvent = Union[
    Transfer,
    Approval,
    Mint,
    Burn,
    FeesCollected,
    FeeBurned,
    FeeRateUpdated,
    FeeRecipientUpdated,
    FeeRateManagerUpdated,
    WhitelistManagerUpdated,
    OwnershipTransferred,
    WhitelistingToggled,
    WhitelistAdded,
    WhitelistRemoved,
]


# =============================================================================
# SINKS
# =============================================================================


class EventSink(Protocol):
    """Внешний приёмник событий."""

    def emit(self, event: LedgerEvent) -> None:
        ...


class InMemoryEventSink:
    """Sink, накапливающий события в списке (по умолчанию и для тестов)."""

    def __init__(self):
        self.events: list[LedgerEvent] = []

    def emit(self, event: LedgerEvent) -> None:
        self.events.append(event)

    def of_type(self, event_type: type[LedgerEvent]) -> list[LedgerEvent]:
        return [e for e in self.events if isinstance(e, event_type)]

    def clear(self) -> None:
        self.events.clear()
