"""Fees — ленивый fee-accrual движок.

- Fee Index Store: закоммиченный индекс, день коммита, snapshots аккаунтов
- Balance Projector: read-only балансы и supply на сегодня
- Fee Collector: коммит индекса (state machine CURRENT/STALE)
- Account Fee Settlement: явное списание fee перед мутацией баланса
"""

from .collector import FeeCollectionResult, FeeCollector
from .context import FeeContext
from .index_store import FeeIndexStore, FeeSettings
from .projector import BalanceProjector, ProjectedIndex
from .settlement import AccountFeeSettlement, AccountSettlementResult, assert_reconciled

__all__ = [
    "FeeContext",
    "FeeIndexStore",
    "FeeSettings",
    "BalanceProjector",
    "ProjectedIndex",
    "FeeCollector",
    "FeeCollectionResult",
    "AccountFeeSettlement",
    "AccountSettlementResult",
    "assert_reconciled",
]
