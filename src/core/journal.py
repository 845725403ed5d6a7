"""UndoJournal — журнал отката точечных изменений состояния.

Каждый мутатор (FeeIndexStore, RawLedger, AccessController, Whitelist)
перед записью сообщает журналу прежнее значение затронутого ключа или
атрибута. Вне транзакции журнал ничего не хранит.

Стоимость отката пропорциональна числу записей операции, а не размеру
ledger: transfer затрагивает 2 аккаунта, получателя fee и глобальный индекс.
"""

from typing import Any, Callable, Hashable, MutableMapping, MutableSet

_MISSING = object()


class UndoJournal:
    """Стек undo-записей одной транзакции."""

    def __init__(self):
        self._entries: list[Callable[[], None]] | None = None

    @property
    def active(self) -> bool:
        return self._entries is not None

    def __len__(self) -> int:
        return len(self._entries) if self._entries is not None else 0

    def begin(self) -> None:
        if self._entries is not None:
            raise RuntimeError("UndoJournal: transaction already open")
        self._entries = []

    def commit(self) -> int:
        """Закрытие транзакции без отката. Возвращает число записей."""
        count = len(self)
        self._entries = None
        return count

    def rollback(self) -> int:
        """Откат всех записей в обратном порядке. Возвращает число записей."""
        entries = self._entries or []
        self._entries = None
        for undo in reversed(entries):
            undo()
        return len(entries)

    # -------------------------------------------------------------------------
    # Запись прежних значений
    # -------------------------------------------------------------------------

    def record_attr(self, obj: object, name: str) -> None:
        if self._entries is None:
            return
        previous = getattr(obj, name)
        self._entries.append(lambda: setattr(obj, name, previous))

    def record_key(self, mapping: MutableMapping, key: Hashable) -> None:
        """Прежнее значение mapping[key]; отсутствующий ключ при откате удаляется."""
        if self._entries is None:
            return
        previous: Any = mapping.get(key, _MISSING)
        if previous is _MISSING:
            self._entries.append(lambda: mapping.pop(key, None))
        else:
            self._entries.append(lambda: mapping.__setitem__(key, previous))

    def record_member(self, members: MutableSet, item: Hashable) -> None:
        if self._entries is None:
            return
        if item in members:
            self._entries.append(lambda: members.add(item))
        else:
            self._entries.append(lambda: members.discard(item))
