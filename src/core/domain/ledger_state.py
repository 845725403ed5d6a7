"""
LedgerSnapshot — Модель снапшота состояния ledger

Immutable Pydantic модель, представляющая снапшот fee-движка и raw ledger.
Полная совместимость с JSON Schema (contracts/schema/ledger_snapshot.json).

Снапшот содержит как raw-значения (как хранятся), так и производные
(fee-adjusted) значения, вычисленные Balance Projector на момент снапшота.
"""

from enum import Enum

from pydantic import BaseModel, Field


# =============================================================================
# ENUMS
# =============================================================================


class FeeCollectionState(str, Enum):
    """
    Состояние Fee Collector.

    CURRENT: today == fees_collection_day, collect_fees — no-op
    STALE: today > fees_collection_day, есть некоммиченное затухание
    """

    CURRENT = "CURRENT"
    STALE = "STALE"


# =============================================================================
# NESTED MODELS
# =============================================================================


class FeeState(BaseModel):
    """Глобальное fee-состояние (Fee Index Store + fee rate)."""

    fee_rate: int = Field(..., ge=0, description="Fee rate (bps за период аннуализации)")
    fee_recipient: str = Field(..., description="Получатель fee")
    fee_index: int = Field(..., ge=0, description="Закоммиченный fee index")
    fees_collection_day: int = Field(..., ge=0, description="День последнего коммита")
    projected_fee_index: int = Field(..., ge=0, description="Fee index на сегодня (проекция)")
    collection_state: FeeCollectionState = Field(..., description="CURRENT/STALE")

    model_config = {"frozen": True}


class Roles(BaseModel):
    owner: str
    fee_rate_manager: str
    whitelist_manager: str

    model_config = {"frozen": True}


class AccountState(BaseModel):
    """Состояние одного держателя."""

    address: str = Field(..., description="Нормализованный адрес")
    raw_balance: int = Field(..., ge=0, description="Raw баланс (как хранится)")
    balance: int = Field(..., ge=0, description="Fee-adjusted баланс на сегодня")
    account_fee_index: int = Field(..., ge=0, description="Snapshot fee index (0 = не сверялся)")
    is_whitelisted: bool = Field(default=False)

    model_config = {"frozen": True}


# =============================================================================
# LEDGER SNAPSHOT MODEL
# =============================================================================


class LedgerSnapshot(BaseModel):
    """
    Модель снапшота ledger.

    Immutable модель (frozen=True):
    - Метаданные (schema_version, day)
    - Параметры токена (name, symbol, decimals)
    - Fee-состояние и роли
    - Raw и fee-adjusted supply
    - Аккаунты
    """

    schema_version: str = Field(..., pattern="^1$", description="Версия схемы снапшота")
    day: int = Field(..., ge=0, description="День, на который снят снапшот")

    name: str = Field(..., min_length=1)
    symbol: str = Field(..., min_length=1)
    decimals: int = Field(..., ge=0)

    fee: FeeState
    roles: Roles
    is_whitelisting: bool

    raw_total_supply: int = Field(..., ge=0)
    total_supply: int = Field(..., ge=0)

    accounts: list[AccountState] = Field(default_factory=list)

    model_config = {"frozen": True}
