"""Unit тесты для ledger событий и InMemoryEventSink."""

import pytest
from pydantic import ValidationError

from src.core.domain import (
    Burn,
    FeeBurned,
    FeesCollected,
    InMemoryEventSink,
    Transfer,
    WhitelistAdded,
    ZERO_ADDRESS,
)

ACCOUNT = "0x" + "a" * 40


class TestEventModels:
    def test_event_names(self):
        """Имена событий совпадают с публичным event log."""
        assert Transfer(sender=ZERO_ADDRESS, recipient=ACCOUNT, amount=1).event == "Transfer"
        assert FeesCollected(fees_accrued=0, fee_index=1).event == "CollectFees"
        assert FeeBurned(account=ACCOUNT, fee=0, balance=0, fee_index=1).event == "BurnFee"
        assert WhitelistAdded(account=ACCOUNT).event == "AddToWhitelist"

    def test_frozen(self):
        event = Burn(account=ACCOUNT, user_id="user-1", amount=5)
        with pytest.raises(ValidationError):
            event.amount = 6

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError):
            Transfer(sender=ACCOUNT, recipient=ZERO_ADDRESS, amount=-1)

    def test_model_dump_includes_event_name(self):
        dumped = FeesCollected(fees_accrued=10, fee_index=99).model_dump()
        assert dumped == {"event": "CollectFees", "fees_accrued": 10, "fee_index": 99}


class TestInMemoryEventSink:
    def test_emit_and_filter(self):
        sink = InMemoryEventSink()
        sink.emit(Transfer(sender=ZERO_ADDRESS, recipient=ACCOUNT, amount=1))
        sink.emit(FeesCollected(fees_accrued=0, fee_index=1))
        sink.emit(Transfer(sender=ACCOUNT, recipient=ZERO_ADDRESS, amount=1))

        assert len(sink.events) == 3
        assert len(sink.of_type(Transfer)) == 2
        assert sink.of_type(FeesCollected)[0].fee_index == 1

    def test_clear(self):
        sink = InMemoryEventSink()
        sink.emit(WhitelistAdded(account=ACCOUNT))
        sink.clear()
        assert sink.events == []
