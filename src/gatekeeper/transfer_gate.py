"""Transfer Gate — whitelist-гейт для transfer

Вызывается для каждого transfer (кроме mint и burn) до settlement.

Порядок проверок:
1. Отправитель привилегирован (owner / whitelist manager) и получатель не в
   whitelist → получатель добавляется в whitelist, transfer разрешён
2. Whitelisting включён и получатель не в whitelist → блокировка
3. Иначе → PASS

Гейт никогда не трогает fee-состояние.
"""

import logging
from dataclasses import dataclass
from typing import Callable

from src.core.domain.events import LedgerEvent, WhitelistAdded, WhitelistRemoved
from src.core.errors import TransferGateError
from src.core.journal import UndoJournal
from src.gatekeeper.access import AccessController

logger = logging.getLogger(__name__)


class Whitelist:
    """Множество whitelisted аккаунтов + глобальный флаг whitelisting."""

    def __init__(
        self,
        is_whitelisting: bool = False,
        accounts: list[str] | None = None,
        journal: UndoJournal | None = None,
    ):
        self.is_whitelisting = is_whitelisting
        self._members: set[str] = set(accounts or [])
        self._journal = journal if journal is not None else UndoJournal()

    def __contains__(self, account: str) -> bool:
        return account in self._members

    def add(self, account: str) -> bool:
        """Добавление; False если аккаунт уже был в whitelist."""
        if account in self._members:
            return False
        self._journal.record_member(self._members, account)
        self._members.add(account)
        return True

    def remove(self, account: str) -> bool:
        if account not in self._members:
            return False
        self._journal.record_member(self._members, account)
        self._members.discard(account)
        return True

    def set_whitelisting(self, enabled: bool) -> None:
        self._journal.record_attr(self, "is_whitelisting")
        self.is_whitelisting = enabled

    def members(self) -> list[str]:
        return sorted(self._members)


@dataclass(frozen=True)
class TransferGateResult:
    """Результат Transfer Gate."""

    transfer_allowed: bool
    block_reason: str

    sender: str
    recipient: str
    is_whitelisting: bool

    # Получатель добавлен в whitelist привилегированным отправителем
    auto_whitelisted: bool

    details: str


class TransferGate:
    """Transfer Gate: whitelist enforcement."""

    def __init__(self, access: AccessController, whitelist: Whitelist):
        self._access = access
        self._whitelist = whitelist

    def evaluate(self, sender: str, recipient: str) -> TransferGateResult:
        """Решение о допуске transfer (без побочных эффектов)."""
        is_whitelisting = self._whitelist.is_whitelisting
        recipient_listed = recipient in self._whitelist

        # 1. Привилегированный отправитель whitelist-ит получателя
        if self._access.is_privileged_sender(sender) and not recipient_listed:
            return TransferGateResult(
                transfer_allowed=True,
                block_reason="",
                sender=sender,
                recipient=recipient,
                is_whitelisting=is_whitelisting,
                auto_whitelisted=True,
                details=f"PASS: privileged sender whitelists {recipient}",
            )

        # 2. Whitelisting включён
        if is_whitelisting and not recipient_listed:
            return TransferGateResult(
                transfer_allowed=False,
                block_reason="recipient_not_whitelisted",
                sender=sender,
                recipient=recipient,
                is_whitelisting=is_whitelisting,
                auto_whitelisted=False,
                details=f"Recipient {recipient} is not whitelisted",
            )

        # 3. PASS
        return TransferGateResult(
            transfer_allowed=True,
            block_reason="",
            sender=sender,
            recipient=recipient,
            is_whitelisting=is_whitelisting,
            auto_whitelisted=False,
            details=f"PASS: is_whitelisting={is_whitelisting}",
        )

    def enforce(
        self, sender: str, recipient: str, emit: Callable[[LedgerEvent], None]
    ) -> TransferGateResult:
        """
        evaluate() + применение решения.

        Raises:
            TransferGateError: transfer заблокирован
        """
        result = self.evaluate(sender, recipient)

        if not result.transfer_allowed:
            logger.warning("Transfer %s -> %s blocked: %s", sender, recipient, result.block_reason)
            raise TransferGateError(result.details)

        if result.auto_whitelisted:
            self._whitelist.add(recipient)
            emit(WhitelistAdded(account=recipient))
            logger.info("Recipient %s whitelisted by privileged sender %s", recipient, sender)

        return result

    def add_accounts(
        self, accounts: list[str], emit: Callable[[LedgerEvent], None]
    ) -> list[str]:
        """Пакетное добавление; возвращает реально добавленные аккаунты."""
        added = []
        for account in accounts:
            if self._whitelist.add(account):
                emit(WhitelistAdded(account=account))
                added.append(account)
        return added

    def remove_accounts(
        self, accounts: list[str], emit: Callable[[LedgerEvent], None]
    ) -> list[str]:
        removed = []
        for account in accounts:
            if self._whitelist.remove(account):
                emit(WhitelistRemoved(account=account))
                removed.append(account)
        return removed
