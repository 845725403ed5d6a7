"""Clock — источник текущего времени для fee-движка.

Ledger знает время только через номер дня. Часы инжектируются, чтобы
симуляции и тесты могли сдвигать время на целые дни.
"""

import time
from typing import Callable

from src.core.domain.units import SECONDS_PER_DAY, day_from_timestamp

# Callable без аргументов, возвращающий unix timestamp в секундах
Clock = Callable[[], float]


def system_clock() -> float:
    return time.time()


class ManualClock:
    """Управляемые часы для тестов и симуляций.

    Время двигается только вперёд: advance_* с отрицательным шагом отвергается.
    """

    def __init__(self, start_ts: float | None = None):
        self._now = float(start_ts) if start_ts is not None else time.time()

    def __call__(self) -> float:
        return self._now

    @property
    def today(self) -> int:
        return day_from_timestamp(self._now)

    def advance_seconds(self, seconds: float) -> None:
        if seconds < 0:
            raise ValueError(f"ManualClock cannot go backwards: {seconds}")
        self._now += seconds

    def advance_days(self, days: int) -> None:
        self.advance_seconds(days * SECONDS_PER_DAY)

    def set(self, ts: float) -> None:
        """Установка абсолютного времени (может идти назад, для edge-case тестов)."""
        self._now = float(ts)
