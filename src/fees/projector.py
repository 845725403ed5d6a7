"""Balance Projector — ленивые балансы без мутаций.

Восстанавливает то, что Fee Collector *закоммитил бы* сегодня, не коммитя:

    project()       = (day, index)                     если today == day
                    = (today, decay(index, rate, Δd))  иначе
    balance_of(a)   = raw(a) × projected / account_index(a)
    total_supply()  = raw_total_supply × projected / fee_index

Все деления — truncating (floor).
"""

import logging
from typing import NamedTuple

from src.core.errors import ClockRegressionError
from src.core.math.decay import calculate_compound_decay
from src.core.math.int_safeguards import mul_div
from src.fees.context import FeeContext

logger = logging.getLogger(__name__)


class ProjectedIndex(NamedTuple):
    day: int
    index: int


class BalanceProjector:
    """Read-only проекция fee index и балансов на сегодня."""

    def __init__(self, ctx: FeeContext):
        self._ctx = ctx

    def project(self, today: int | None = None) -> ProjectedIndex:
        """
        Проекция (day, index) на today без коммита.

        Args:
            today: Номер дня (default: по часам контекста)

        Raises:
            ClockRegressionError: today раньше fees_collection_day
        """
        store = self._ctx.store
        if today is None:
            today = self._ctx.today()

        if today < store.fees_collection_day:
            raise ClockRegressionError(
                f"Current day {today} precedes fees collection day {store.fees_collection_day}"
            )

        if today == store.fees_collection_day:
            return ProjectedIndex(store.fees_collection_day, store.fee_index)

        index = calculate_compound_decay(
            store.fee_index,
            self._ctx.settings.fee_rate,
            today - store.fees_collection_day,
        )
        logger.debug(
            "Projected fee index: day=%d index=%d (from day=%d)",
            today,
            index,
            store.fees_collection_day,
        )
        return ProjectedIndex(today, index)

    def balance_of(self, account: str) -> int:
        """
        Fee-adjusted баланс аккаунта на сегодня.

        Аккаунт без snapshot (index == 0) или с нулевым raw балансом → 0.
        Корректно только пока каждый кредит raw баланса проходит через
        settlement (см. assert_reconciled).
        """
        raw_balance = self._ctx.ledger.balance_of(account)
        account_index = self._ctx.store.account_index(account)

        if account_index == 0 or raw_balance == 0:
            return 0

        return mul_div(raw_balance, self.project().index, account_index)

    def total_supply(self) -> int:
        return mul_div(
            self._ctx.ledger.total_supply,
            self.project().index,
            self._ctx.store.fee_index,
        )
