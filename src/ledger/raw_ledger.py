"""RawLedger — стандартная fungible-бухгалтерия raw-значений.

Raw баланс — это значение, выраженное относительно fee index последней
сверки аккаунта; raw total supply — относительно закоммиченного fee index.

Инвариант: сумма raw балансов == raw total supply.
"""

from src.core.errors import InsufficientAllowanceError, InsufficientBalanceError
from src.core.journal import UndoJournal
from src.core.math.int_safeguards import (
    UINT256_MAX,
    checked_add,
    checked_sub,
    validate_uint256,
)


class RawLedger:
    """Балансы, allowance и total supply в raw-единицах (checked uint256)."""

    def __init__(self, journal: UndoJournal | None = None):
        self._balances: dict[str, int] = {}
        self._allowances: dict[tuple[str, str], int] = {}
        self._total_supply = 0
        self._journal = journal if journal is not None else UndoJournal()

    # -------------------------------------------------------------------------
    # Чтение
    # -------------------------------------------------------------------------

    @property
    def total_supply(self) -> int:
        return self._total_supply

    def balance_of(self, account: str) -> int:
        return self._balances.get(account, 0)

    def allowance(self, owner: str, spender: str) -> int:
        return self._allowances.get((owner, spender), 0)

    def holders(self) -> list[str]:
        """Аккаунты, у которых когда-либо была запись баланса (в порядке появления)."""
        return list(self._balances)

    # -------------------------------------------------------------------------
    # Запись
    # -------------------------------------------------------------------------

    def credit(self, account: str, amount: int) -> int:
        """Mint raw-единиц на аккаунт. Возвращает новый raw баланс."""
        total_supply = checked_add(self._total_supply, amount)
        balance = checked_add(self.balance_of(account), amount)
        self._journal.record_attr(self, "_total_supply")
        self._journal.record_key(self._balances, account)
        self._total_supply = total_supply
        self._balances[account] = balance
        return balance

    def debit(self, account: str, amount: int) -> int:
        """Burn raw-единиц с аккаунта. Возвращает новый raw баланс."""
        balance = self.balance_of(account)
        if amount > balance:
            raise InsufficientBalanceError(
                f"Burn amount {amount} exceeds raw balance {balance} of {account}"
            )
        total_supply = checked_sub(self._total_supply, amount)
        self._journal.record_attr(self, "_total_supply")
        self._journal.record_key(self._balances, account)
        self._balances[account] = balance - amount
        self._total_supply = total_supply
        return balance - amount

    def move(self, sender: str, recipient: str, amount: int) -> None:
        """Перемещение raw-единиц; total supply не меняется."""
        sender_balance = self.balance_of(sender)
        if amount > sender_balance:
            raise InsufficientBalanceError(
                f"Transfer amount {amount} exceeds raw balance {sender_balance} of {sender}"
            )
        self._journal.record_key(self._balances, sender)
        self._journal.record_key(self._balances, recipient)
        self._balances[sender] = sender_balance - amount
        self._balances[recipient] = checked_add(self.balance_of(recipient), amount)

    def set_allowance(self, owner: str, spender: str, amount: int) -> None:
        validate_uint256(amount, "allowance")
        self._journal.record_key(self._allowances, (owner, spender))
        self._allowances[(owner, spender)] = amount

    def spend_allowance(self, owner: str, spender: str, amount: int) -> None:
        """Списание allowance; UINT256_MAX трактуется как бесконечный allowance."""
        current = self.allowance(owner, spender)
        if current == UINT256_MAX:
            return
        if amount > current:
            raise InsufficientAllowanceError(
                f"Amount {amount} exceeds allowance {current} of {spender} for {owner}"
            )
        self._journal.record_key(self._allowances, (owner, spender))
        self._allowances[(owner, spender)] = current - amount
