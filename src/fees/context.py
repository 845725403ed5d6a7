"""FeeContext — явный контекст fee-движка.

Вместо глобального singleton каждый компонент (Projector, Collector,
Settlement) получает один и тот же FeeContext по ссылке.
"""

from dataclasses import dataclass
from typing import Callable

from src.core.clock import Clock
from src.core.domain.events import LedgerEvent
from src.core.domain.units import day_from_timestamp
from src.fees.index_store import FeeIndexStore, FeeSettings
from src.ledger.raw_ledger import RawLedger


@dataclass
class FeeContext:
    store: FeeIndexStore
    ledger: RawLedger
    settings: FeeSettings
    clock: Clock
    emit: Callable[[LedgerEvent], None]

    def today(self) -> int:
        """Текущий номер дня по часам контекста."""
        return day_from_timestamp(self.clock())
