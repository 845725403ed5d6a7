"""
Domain models and value objects.

Contains units, ledger events and snapshot models.
"""

from src.core.domain.events import (
    AnyLedgerEvent,
    Approval,
    Burn,
    EventSink,
    FeeBurned,
    FeeRateManagerUpdated,
    FeeRateUpdated,
    FeeRecipientUpdated,
    FeesCollected,
    InMemoryEventSink,
    LedgerEvent,
    Mint,
    OwnershipTransferred,
    Transfer,
    WhitelistAdded,
    WhitelistingToggled,
    WhitelistManagerUpdated,
    WhitelistRemoved,
)
from src.core.domain.ledger_state import (
    AccountState,
    FeeCollectionState,
    FeeState,
    LedgerSnapshot,
    Roles,
)
from src.core.domain.units import (
    BURN_LOT,
    BURN_LOT_TOKENS,
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

__all__ = [
    # Units module
    "BURN_LOT",
    "BURN_LOT_TOKENS",
    "ONE_TOKEN",
    "SECONDS_PER_DAY",
    "TOKEN_DECIMALS",
    "ZERO_ADDRESS",
    "day_from_timestamp",
    "is_zero_address",
    "normalize_address",
    "require_non_zero_address",
    "tokens_to_raw",
    "validate_burn_amount",
    # Events
    "LedgerEvent",
    "AnyLedgerEvent",
    "EventSink",
    "InMemoryEventSink",
    "Transfer",
    "Approval",
    "Mint",
    "Burn",
    "FeesCollected",
    "FeeBurned",
    "FeeRateUpdated",
    "FeeRecipientUpdated",
    "FeeRateManagerUpdated",
    "WhitelistManagerUpdated",
    "OwnershipTransferred",
    "WhitelistingToggled",
    "WhitelistAdded",
    "WhitelistRemoved",
    # Snapshot models
    "FeeCollectionState",
    "FeeState",
    "Roles",
    "AccountState",
    "LedgerSnapshot",
]
