"""Fee Collector — коммит fee index на сегодня.

State machine:
- CURRENT: today == fees_collection_day → collect_fees() — no-op (идемпотентно)
- STALE: today > fees_collection_day → коммит нового индекса

Переход STALE → CURRENT:
1. (today, new_index) = project()
2. fees_accrued = RTS - RTS × new_index / fee_index
3. Коммит fee_index := new_index, fees_collection_day := today
4. recipient_fee = raw_R - raw_R × new_index / account_index(R)
5. raw_R += fees_accrued - recipient_fee, account_index(R) := new_index
6. События: Transfer(0 → R), CollectFees, BurnFee(R)

Collector должен отработать до любой мутации балансов, чтобы Settlement
мог считать закоммиченный индекс актуальным на сегодня.
"""

import logging
from dataclasses import dataclass

from src.core.domain.events import FeeBurned, FeesCollected, Transfer
from src.core.domain.ledger_state import FeeCollectionState
from src.core.domain.units import ZERO_ADDRESS
from src.core.math.int_safeguards import checked_sub, mul_div
from src.fees.context import FeeContext
from src.fees.projector import BalanceProjector

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FeeCollectionResult:
    """Результат collect_fees."""

    new_state: FeeCollectionState
    previous_state: FeeCollectionState
    transition_occurred: bool

    fees_collection_day: int
    fee_index: int
    previous_fee_index: int

    fees_accrued: int
    recipient_fee: int
    fee_recipient: str

    details: str


class FeeCollector:
    """Fee Collector: единственный писатель глобального fee index."""

    def __init__(self, ctx: FeeContext, projector: BalanceProjector):
        self._ctx = ctx
        self._projector = projector

    def state(self, today: int | None = None) -> FeeCollectionState:
        if today is None:
            today = self._ctx.today()
        if today == self._ctx.store.fees_collection_day:
            return FeeCollectionState.CURRENT
        return FeeCollectionState.STALE

    def collect_fees(self) -> FeeCollectionResult:
        """Коммит fee index на сегодня (no-op в состоянии CURRENT)."""
        store = self._ctx.store
        ledger = self._ctx.ledger
        recipient = self._ctx.settings.fee_recipient

        today, new_index = self._projector.project()
        previous_index = store.fee_index

        if today == store.fees_collection_day:
            return FeeCollectionResult(
                new_state=FeeCollectionState.CURRENT,
                previous_state=FeeCollectionState.CURRENT,
                transition_occurred=False,
                fees_collection_day=today,
                fee_index=previous_index,
                previous_fee_index=previous_index,
                fees_accrued=0,
                recipient_fee=0,
                fee_recipient=recipient,
                details=f"Fees already collected for day {today}",
            )

        # 1. Fee, накопленная всем supply с момента прошлого коммита
        raw_total_supply = ledger.total_supply
        fees_accrued = checked_sub(
            raw_total_supply, mul_div(raw_total_supply, new_index, previous_index)
        )

        # 2. Коммит
        previous_day = store.fees_collection_day
        store.commit(today, new_index)

        # 3. Собственная fee получателя: от его snapshot до нового индекса
        recipient_raw = ledger.balance_of(recipient)
        recipient_index = store.account_index(recipient)
        recipient_fee = 0
        if recipient_index > 0 and recipient_raw > 0:
            recipient_fee = checked_sub(
                recipient_raw, mul_div(recipient_raw, new_index, recipient_index)
            )

        # 4. Net raw delta получателя: -recipient_fee + fees_accrued
        if recipient_fee:
            ledger.debit(recipient, recipient_fee)
        if fees_accrued:
            ledger.credit(recipient, fees_accrued)
        store.snapshot_account(recipient, new_index)
        recipient_balance = ledger.balance_of(recipient)

        # 5. События
        self._ctx.emit(
            Transfer(
                sender=ZERO_ADDRESS,
                recipient=recipient,
                amount=max(fees_accrued - recipient_fee, 0),
            )
        )
        self._ctx.emit(FeesCollected(fees_accrued=fees_accrued, fee_index=new_index))
        self._ctx.emit(
            FeeBurned(
                account=recipient,
                fee=recipient_fee,
                balance=recipient_balance,
                fee_index=new_index,
            )
        )

        logger.info(
            "Fees collected: day %d -> %d, fee_index=%d, fees_accrued=%d, recipient_fee=%d",
            previous_day,
            today,
            new_index,
            fees_accrued,
            recipient_fee,
        )

        return FeeCollectionResult(
            new_state=FeeCollectionState.CURRENT,
            previous_state=FeeCollectionState.STALE,
            transition_occurred=True,
            fees_collection_day=today,
            fee_index=new_index,
            previous_fee_index=previous_index,
            fees_accrued=fees_accrued,
            recipient_fee=recipient_fee,
            fee_recipient=recipient,
            details=(
                f"Collected {fees_accrued} over {today - previous_day} days, "
                f"recipient fee {recipient_fee}"
            ),
        )
