"""Access control — роли и capability-проверки.

Роли:
- OWNER: mint, назначение ролей и fee recipient, передача владения
- FEE_RATE_MANAGER: изменение fee rate (вместе с OWNER)
- WHITELIST_MANAGER: управление whitelist (вместе с OWNER)

Ядро fee-движка ролей не знает: FeeToken спрашивает AccessController
перед каждой привилегированной операцией.
"""

import logging
from enum import Enum

from src.core.domain.units import require_non_zero_address
from src.core.errors import AuthorizationError
from src.core.journal import UndoJournal

logger = logging.getLogger(__name__)


class Role(str, Enum):
    OWNER = "OWNER"
    FEE_RATE_MANAGER = "FEE_RATE_MANAGER"
    WHITELIST_MANAGER = "WHITELIST_MANAGER"


class AccessController:
    """Держатели ролей (по одному аккаунту на роль)."""

    def __init__(
        self,
        owner: str,
        fee_rate_manager: str,
        whitelist_manager: str,
        journal: UndoJournal | None = None,
    ):
        self._holders: dict[Role, str] = {
            Role.OWNER: require_non_zero_address(owner, "owner"),
            Role.FEE_RATE_MANAGER: require_non_zero_address(fee_rate_manager, "fee_rate_manager"),
            Role.WHITELIST_MANAGER: require_non_zero_address(
                whitelist_manager, "whitelist_manager"
            ),
        }
        self._journal = journal if journal is not None else UndoJournal()

    def holder(self, role: Role) -> str:
        return self._holders[role]

    def has_role(self, account: str, role: Role) -> bool:
        return self._holders[role] == account

    def require(self, caller: str, *roles: Role) -> None:
        """
        Проверка, что caller держит хотя бы одну из ролей.

        Raises:
            AuthorizationError: caller не держит ни одной роли
        """
        if any(self.has_role(caller, role) for role in roles):
            return

        names = ", ".join(role.value for role in roles)
        logger.warning("Unauthorized call by %s (requires one of: %s)", caller, names)
        raise AuthorizationError(f"Caller {caller} lacks required role: {names}")

    def assign(self, role: Role, account: str) -> str:
        """Назначение роли; zero address запрещён. Возвращает нормализованный адрес."""
        account = require_non_zero_address(account, role.value.lower())
        self._journal.record_key(self._holders, role)
        self._holders[role] = account
        logger.info("Role %s assigned to %s", role.value, account)
        return account

    def is_privileged_sender(self, account: str) -> bool:
        """Owner и whitelist manager автоматически whitelist-ят получателей."""
        return self.has_role(account, Role.OWNER) or self.has_role(
            account, Role.WHITELIST_MANAGER
        )
