"""Fee Index Store — глобальное состояние fee-движка.

Хранит:
- закоммиченный fee index
- день последнего коммита (fees_collection_day)
- snapshot fee index по каждому аккаунту (0 = аккаунт не сверялся)

Ровно два мутатора: commit() (только Fee Collector) и snapshot_account()
(только Fee Collector и Account Fee Settlement).
"""

from dataclasses import dataclass

from src.core.errors import FeeArithmeticError, InvalidParameterError
from src.core.journal import UndoJournal
from src.core.math.int_safeguards import validate_non_negative, validate_uint256


@dataclass
class FeeSettings:
    """Изменяемые параметры fee: ставка и получатель."""

    fee_rate: int
    fee_recipient: str


class FeeIndexStore:
    """Закоммиченный fee index, день коммита и snapshots аккаунтов."""

    def __init__(
        self, initial_index: int, creation_day: int, journal: UndoJournal | None = None
    ):
        validate_uint256(initial_index, "initial_index")
        validate_non_negative(creation_day, "creation_day")

        if initial_index == 0:
            raise InvalidParameterError("initial fee index must be positive")

        self._fee_index = initial_index
        self._fees_collection_day = creation_day
        self._account_indices: dict[str, int] = {}
        self._journal = journal if journal is not None else UndoJournal()

    @property
    def fee_index(self) -> int:
        return self._fee_index

    @property
    def fees_collection_day(self) -> int:
        return self._fees_collection_day

    def account_index(self, account: str) -> int:
        return self._account_indices.get(account, 0)

    def accounts(self) -> list[str]:
        return list(self._account_indices)

    def commit(self, day: int, index: int) -> None:
        """
        Коммит нового (day, index).

        Raises:
            FeeArithmeticError: день в прошлом или рост индекса
        """
        if day < self._fees_collection_day:
            raise FeeArithmeticError(
                f"Cannot commit day {day} before collection day {self._fees_collection_day}",
                code="invariant",
            )
        if index > self._fee_index:
            raise FeeArithmeticError(
                f"Fee index cannot increase: {self._fee_index} -> {index}",
                code="invariant",
            )
        self._journal.record_attr(self, "_fees_collection_day")
        self._journal.record_attr(self, "_fee_index")
        self._fees_collection_day = day
        self._fee_index = index

    def snapshot_account(self, account: str, index: int) -> None:
        self._journal.record_key(self._account_indices, account)
        self._account_indices[account] = index
