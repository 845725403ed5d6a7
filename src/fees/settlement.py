"""Account Fee Settlement — явное списание ленивой fee аккаунта.

Вызывается перед каждой мутацией балансов (mint, burn, transfer) для
аккаунтов, которых она касается:

1. collect_fees() — безусловно, чтобы fee_index был актуален на сегодня
2. Для каждого аккаунта с 0 < account_index != fee_index и raw > 0:
       fee = raw - raw × fee_index / account_index
       raw -= fee; события Transfer(a → 0), BurnFee
3. Всегда account_index := fee_index

После settlement raw баланс выражен в терминах текущего индекса, и простая
raw-арифметика transfer корректна.
"""

import logging
from dataclasses import dataclass
from typing import Sequence

from src.core.domain.events import FeeBurned, Transfer
from src.core.domain.units import ZERO_ADDRESS, is_zero_address
from src.core.errors import FeeArithmeticError
from src.core.math.int_safeguards import checked_sub, mul_div
from src.fees.collector import FeeCollectionResult, FeeCollector
from src.fees.context import FeeContext

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccountSettlementResult:
    account: str
    fee: int
    raw_balance: int
    previous_account_index: int
    fee_index: int
    fee_burned: bool


class AccountFeeSettlement:
    """Settlement fee для 1-2 аккаунтов, затрагиваемых операцией ledger."""

    def __init__(self, ctx: FeeContext, collector: FeeCollector):
        self._ctx = ctx
        self._collector = collector

    def settle(
        self, accounts: Sequence[str]
    ) -> tuple[FeeCollectionResult, list[AccountSettlementResult]]:
        """
        Settlement аккаунтов против закоммиченного fee index.

        Null account и повторы пропускаются.

        Returns:
            (результат collect_fees, результаты по аккаунтам)
        """
        collection = self._collector.collect_fees()

        results: list[AccountSettlementResult] = []
        seen: set[str] = set()
        for account in accounts:
            if is_zero_address(account) or account in seen:
                continue
            seen.add(account)
            results.append(self._settle_account(account))

        return collection, results

    def _settle_account(self, account: str) -> AccountSettlementResult:
        store = self._ctx.store
        ledger = self._ctx.ledger

        fee_index = store.fee_index
        account_index = store.account_index(account)
        raw_balance = ledger.balance_of(account)

        fee = 0
        fee_burned = False
        if account_index != fee_index and account_index > 0 and raw_balance > 0:
            fee = checked_sub(raw_balance, mul_div(raw_balance, fee_index, account_index))
            raw_balance = ledger.debit(account, fee)
            fee_burned = True

            self._ctx.emit(Transfer(sender=account, recipient=ZERO_ADDRESS, amount=fee))
            self._ctx.emit(
                FeeBurned(account=account, fee=fee, balance=raw_balance, fee_index=fee_index)
            )
            logger.debug(
                "Settled %s: fee=%d raw_balance=%d index %d -> %d",
                account,
                fee,
                raw_balance,
                account_index,
                fee_index,
            )

        store.snapshot_account(account, fee_index)

        return AccountSettlementResult(
            account=account,
            fee=fee,
            raw_balance=raw_balance,
            previous_account_index=account_index,
            fee_index=fee_index,
            fee_burned=fee_burned,
        )


def assert_reconciled(ctx: FeeContext, account: str) -> None:
    """
    Проверка связки "raw баланс != 0 ⇒ account_index != 0".

    Любой кредит raw баланса без snapshot делает средства нечитаемыми
    через balance_of, поэтому такой кредит запрещён.

    Raises:
        FeeArithmeticError: у аккаунта нет snapshot fee index
    """
    if ctx.store.account_index(account) == 0:
        raise FeeArithmeticError(
            f"Account {account} must be settled before its raw balance is credited",
            code="unreconciled_credit",
        )
