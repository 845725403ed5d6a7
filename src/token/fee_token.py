"""FeeToken — публичный интерфейс fee-decay токена.

Связывает raw ledger, fee-движок и gatekeeper:

    mint / burn / transfer / transfer_from
        → [Transfer Gate]  (только transfer)
        → Account Fee Settlement → Fee Collector → Decay Calculator
        → raw ledger

    balance_of / total_supply
        → Balance Projector (без мутаций)

Каждый мутирующий вызов выполняется атомарно (_transaction): мутаторы пишут
прежние значения затронутых ключей в общий UndoJournal, при ошибке журнал
проигрывается в обратном порядке и буфер событий сбрасывается. Только после
успеха события уходят в sink.
"""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from src.core.clock import Clock, system_clock
from src.core.domain.events import (
    Approval,
    Burn,
    EventSink,
    FeeRateManagerUpdated,
    FeeRateUpdated,
    FeeRecipientUpdated,
    InMemoryEventSink,
    LedgerEvent,
    Mint,
    OwnershipTransferred,
    Transfer,
    WhitelistingToggled,
    WhitelistManagerUpdated,
)
from src.core.domain.ledger_state import (
    AccountState,
    FeeCollectionState,
    FeeState,
    LedgerSnapshot,
    Roles,
)
from src.core.domain.units import (
    TOKEN_DECIMALS,
    ZERO_ADDRESS,
    day_from_timestamp,
    normalize_address,
    require_non_zero_address,
    tokens_to_raw,
    validate_burn_amount,
)
from src.core.errors import InsufficientAllowanceError, InvalidParameterError
from src.core.journal import UndoJournal
from src.core.math.decay import (
    INITIAL_FEE_INDEX,
    MAX_FEE_RATE,
    annualized_decay_fraction,
    calculate_compound_decay,
)
from src.core.math.int_safeguards import (
    checked_add,
    validate_non_negative,
    validate_uint256,
)
from src.fees import (
    AccountFeeSettlement,
    BalanceProjector,
    FeeCollectionResult,
    FeeCollector,
    FeeContext,
    FeeIndexStore,
    FeeSettings,
    assert_reconciled,
)
from src.gatekeeper import AccessController, Role, TransferGate, Whitelist
from src.ledger import RawLedger
from src.token.config import TokenConfig, load_token_config

logger = logging.getLogger(__name__)

SNAPSHOT_SCHEMA_VERSION = "1"


def _validate_fee_rate(fee_rate: int) -> int:
    validate_non_negative(fee_rate, "fee_rate")
    if fee_rate > MAX_FEE_RATE:
        raise InvalidParameterError(
            f"Fee rate {fee_rate} exceeds maximum {MAX_FEE_RATE}", code="fee_rate_too_high"
        )
    return fee_rate


class FeeToken:
    """Fungible токен, балансы которого затухают в пользу fee recipient."""

    def __init__(
        self,
        config: TokenConfig,
        owner: str,
        clock: Clock = system_clock,
        sink: EventSink | None = None,
        initial_fee_index: int = INITIAL_FEE_INDEX,
    ):
        """
        Args:
            config: параметры инициализации
            owner: владелец (OWNER role)
            clock: источник unix timestamp (default: системные часы)
            sink: приёмник событий (default: InMemoryEventSink)
            initial_fee_index: начальный fee index
        """
        self.name = config.name
        self.symbol = config.symbol
        self.sink = sink if sink is not None else InMemoryEventSink()

        self._pending: list[LedgerEvent] = []
        self._journal = UndoJournal()

        settings = FeeSettings(
            fee_rate=_validate_fee_rate(config.fee_rate),
            fee_recipient=require_non_zero_address(config.fee_recipient, "fee_recipient"),
        )
        store = FeeIndexStore(initial_fee_index, day_from_timestamp(clock()), self._journal)

        self._ctx = FeeContext(
            store=store,
            ledger=RawLedger(self._journal),
            settings=settings,
            clock=clock,
            emit=self._pending.append,
        )
        self._projector = BalanceProjector(self._ctx)
        self._collector = FeeCollector(self._ctx, self._projector)
        self._settlement = AccountFeeSettlement(self._ctx, self._collector)

        self._access = AccessController(
            owner, config.fee_rate_manager, config.whitelist_manager, self._journal
        )
        self._whitelist = Whitelist(
            config.is_whitelisting, list(config.initial_whitelist), self._journal
        )
        self._gate = TransferGate(self._access, self._whitelist)

        logger.info(
            "FeeToken %s initialized: fee_rate=%d (%.4f%% per period), fee_recipient=%s, day=%d",
            self.symbol,
            settings.fee_rate,
            annualized_decay_fraction(settings.fee_rate) * 100,
            settings.fee_recipient,
            store.fees_collection_day,
        )

    @classmethod
    def from_config_file(
        cls,
        path: str | Path,
        owner: str,
        clock: Clock = system_clock,
        sink: EventSink | None = None,
    ) -> "FeeToken":
        return cls(load_token_config(path), owner=owner, clock=clock, sink=sink)

    # =========================================================================
    # TRANSACTION
    # =========================================================================

    @contextmanager
    def _transaction(self, operation: str) -> Iterator[None]:
        """Все-или-ничего применение мутирующего вызова."""
        if self._journal.active:
            yield
            return

        self._pending.clear()
        self._journal.begin()
        try:
            yield
        except BaseException:
            undone = self._journal.rollback()
            dropped = len(self._pending)
            self._pending.clear()
            logger.warning(
                "%s rolled back, %d writes undone, %d pending events dropped",
                operation,
                undone,
                dropped,
            )
            raise

        self._journal.commit()
        events = list(self._pending)
        self._pending.clear()
        for event in events:
            self.sink.emit(event)

    # =========================================================================
    # READS
    # =========================================================================

    @property
    def decimals(self) -> int:
        return TOKEN_DECIMALS

    @property
    def fee_rate(self) -> int:
        return self._ctx.settings.fee_rate

    @property
    def fee_recipient(self) -> str:
        return self._ctx.settings.fee_recipient

    @property
    def fee_index(self) -> int:
        return self._ctx.store.fee_index

    @property
    def fees_collection_day(self) -> int:
        return self._ctx.store.fees_collection_day

    @property
    def owner(self) -> str:
        return self._access.holder(Role.OWNER)

    @property
    def fee_rate_manager(self) -> str:
        return self._access.holder(Role.FEE_RATE_MANAGER)

    @property
    def whitelist_manager(self) -> str:
        return self._access.holder(Role.WHITELIST_MANAGER)

    @property
    def is_whitelisting(self) -> bool:
        return self._whitelist.is_whitelisting

    def is_whitelisted(self, account: str) -> bool:
        return normalize_address(account) in self._whitelist

    def accounts_fee_indices(self, account: str) -> int:
        return self._ctx.store.account_index(normalize_address(account))

    def balance_of(self, account: str) -> int:
        return self._projector.balance_of(normalize_address(account))

    def total_supply(self) -> int:
        return self._projector.total_supply()

    def raw_balance_of(self, account: str) -> int:
        return self._ctx.ledger.balance_of(normalize_address(account))

    @property
    def raw_total_supply(self) -> int:
        return self._ctx.ledger.total_supply

    def allowance(self, owner: str, spender: str) -> int:
        return self._ctx.ledger.allowance(normalize_address(owner), normalize_address(spender))

    def collection_state(self) -> FeeCollectionState:
        return self._collector.state()

    @staticmethod
    def calculate_compound_decay(index: int, rate_bps: int, days: int) -> int:
        return calculate_compound_decay(index, rate_bps, days)

    def snapshot(self) -> LedgerSnapshot:
        """Снапшот fee-состояния, ролей и всех известных аккаунтов."""
        store = self._ctx.store
        ledger = self._ctx.ledger
        day, projected_index = self._projector.project()

        known = set(ledger.holders()) | set(store.accounts())
        accounts = [
            AccountState(
                address=account,
                raw_balance=ledger.balance_of(account),
                balance=self._projector.balance_of(account),
                account_fee_index=store.account_index(account),
                is_whitelisted=account in self._whitelist,
            )
            for account in sorted(known)
        ]

        return LedgerSnapshot(
            schema_version=SNAPSHOT_SCHEMA_VERSION,
            day=day,
            name=self.name,
            symbol=self.symbol,
            decimals=self.decimals,
            fee=FeeState(
                fee_rate=self.fee_rate,
                fee_recipient=self.fee_recipient,
                fee_index=store.fee_index,
                fees_collection_day=store.fees_collection_day,
                projected_fee_index=projected_index,
                collection_state=self._collector.state(day),
            ),
            roles=Roles(
                owner=self.owner,
                fee_rate_manager=self.fee_rate_manager,
                whitelist_manager=self.whitelist_manager,
            ),
            is_whitelisting=self.is_whitelisting,
            raw_total_supply=ledger.total_supply,
            total_supply=self._projector.total_supply(),
            accounts=accounts,
        )

    # =========================================================================
    # LEDGER OPERATIONS
    # =========================================================================

    def mint(self, caller: str, account: str, amount: int, memo: str = "") -> None:
        """
        Mint amount целых токенов на account (только OWNER).

        Raw баланс увеличивается на amount × 10^decimals после settlement.
        """
        with self._transaction("mint"):
            self._access.require(normalize_address(caller), Role.OWNER)
            account = require_non_zero_address(account, "account")
            raw_amount = tokens_to_raw(amount)

            self._settlement.settle([account])
            assert_reconciled(self._ctx, account)
            self._ctx.ledger.credit(account, raw_amount)

            self._ctx.emit(Transfer(sender=ZERO_ADDRESS, recipient=account, amount=raw_amount))
            self._ctx.emit(Mint(account=account, amount=raw_amount, memo=memo))

        logger.info("Minted %d raw units to %s", raw_amount, account)

    def burn(self, caller: str, user_id: str, amount: int) -> None:
        """Burn amount raw-единиц caller-а; amount кратен лоту 1000 токенов."""
        with self._transaction("burn"):
            caller = require_non_zero_address(caller, "caller")
            validate_burn_amount(amount)

            self._settlement.settle([caller])
            self._ctx.ledger.debit(caller, amount)

            self._ctx.emit(Transfer(sender=caller, recipient=ZERO_ADDRESS, amount=amount))
            self._ctx.emit(Burn(account=caller, user_id=user_id, amount=amount))

        logger.info("Burned %d raw units of %s (user_id=%s)", amount, caller, user_id)

    def transfer(self, caller: str, recipient: str, amount: int) -> bool:
        with self._transaction("transfer"):
            self._transfer(normalize_address(caller), recipient, amount)
        return True

    def transfer_from(self, caller: str, sender: str, recipient: str, amount: int) -> bool:
        """Transfer от имени sender с расходом allowance caller-а."""
        with self._transaction("transfer_from"):
            caller = normalize_address(caller)
            sender = normalize_address(sender)
            validate_uint256(amount, "amount")
            self._ctx.ledger.spend_allowance(sender, caller, amount)
            self._transfer(sender, recipient, amount)
        return True

    def _transfer(self, sender: str, recipient: str, amount: int) -> None:
        sender = require_non_zero_address(sender, "sender")
        recipient = require_non_zero_address(recipient, "recipient")
        validate_uint256(amount, "amount")

        self._gate.enforce(sender, recipient, self._ctx.emit)
        self._settlement.settle([sender, recipient])
        assert_reconciled(self._ctx, recipient)
        self._ctx.ledger.move(sender, recipient, amount)

        self._ctx.emit(Transfer(sender=sender, recipient=recipient, amount=amount))

    def approve(self, caller: str, spender: str, amount: int) -> bool:
        with self._transaction("approve"):
            self._approve(
                require_non_zero_address(caller, "owner"),
                require_non_zero_address(spender, "spender"),
                amount,
            )
        return True

    def increase_allowance(self, caller: str, spender: str, added_value: int) -> bool:
        with self._transaction("increase_allowance"):
            caller = require_non_zero_address(caller, "owner")
            spender = require_non_zero_address(spender, "spender")
            validate_uint256(added_value, "added_value")
            current = self._ctx.ledger.allowance(caller, spender)
            self._approve(caller, spender, checked_add(current, added_value))
        return True

    def decrease_allowance(self, caller: str, spender: str, subtracted_value: int) -> bool:
        with self._transaction("decrease_allowance"):
            caller = require_non_zero_address(caller, "owner")
            spender = require_non_zero_address(spender, "spender")
            validate_uint256(subtracted_value, "subtracted_value")
            current = self._ctx.ledger.allowance(caller, spender)
            if subtracted_value > current:
                raise InsufficientAllowanceError(
                    f"Decreased allowance below zero: {current} - {subtracted_value}"
                )
            self._approve(caller, spender, current - subtracted_value)
        return True

    def _approve(self, owner: str, spender: str, amount: int) -> None:
        self._ctx.ledger.set_allowance(owner, spender, amount)
        self._ctx.emit(Approval(owner=owner, spender=spender, amount=amount))

    # =========================================================================
    # FEE OPERATIONS
    # =========================================================================

    def collect_fees(self) -> FeeCollectionResult:
        """Коммит fee index на сегодня; доступно любому вызывающему."""
        with self._transaction("collect_fees"):
            result = self._collector.collect_fees()
        return result

    def set_fee_rate(self, caller: str, new_rate: int) -> None:
        """
        Новый fee rate (OWNER или FEE_RATE_MANAGER).

        Перед сменой ставки fee собираются по старой ставке, чтобы она не
        применилась к периоду, которым не управляла.
        """
        with self._transaction("set_fee_rate"):
            self._access.require(normalize_address(caller), Role.OWNER, Role.FEE_RATE_MANAGER)
            _validate_fee_rate(new_rate)

            self._collector.collect_fees()
            self._journal.record_attr(self._ctx.settings, "fee_rate")
            self._ctx.settings.fee_rate = new_rate
            self._ctx.emit(FeeRateUpdated(fee_rate=new_rate))

        logger.info(
            "Fee rate set to %d bps (%.4f%% per period)",
            new_rate,
            annualized_decay_fraction(new_rate) * 100,
        )

    def set_fee_recipient(self, caller: str, new_recipient: str) -> None:
        """Новый fee recipient (OWNER); fee до сегодняшнего дня уходят старому."""
        with self._transaction("set_fee_recipient"):
            self._access.require(normalize_address(caller), Role.OWNER)
            new_recipient = require_non_zero_address(new_recipient, "fee_recipient")

            self._collector.collect_fees()
            self._journal.record_attr(self._ctx.settings, "fee_recipient")
            self._ctx.settings.fee_recipient = new_recipient
            self._ctx.emit(FeeRecipientUpdated(fee_recipient=new_recipient))

        logger.info("Fee recipient set to %s", new_recipient)

    # =========================================================================
    # ROLE ADMINISTRATION
    # =========================================================================

    def set_fee_rate_manager(self, caller: str, account: str) -> None:
        with self._transaction("set_fee_rate_manager"):
            self._access.require(normalize_address(caller), Role.OWNER)
            account = self._access.assign(Role.FEE_RATE_MANAGER, account)
            self._ctx.emit(FeeRateManagerUpdated(fee_rate_manager=account))

    def set_whitelist_manager(self, caller: str, account: str) -> None:
        with self._transaction("set_whitelist_manager"):
            self._access.require(normalize_address(caller), Role.OWNER)
            account = self._access.assign(Role.WHITELIST_MANAGER, account)
            self._ctx.emit(WhitelistManagerUpdated(whitelist_manager=account))

    def transfer_ownership(self, caller: str, new_owner: str) -> None:
        with self._transaction("transfer_ownership"):
            previous = self.owner
            self._access.require(normalize_address(caller), Role.OWNER)
            new_owner = self._access.assign(Role.OWNER, new_owner)
            self._ctx.emit(OwnershipTransferred(previous_owner=previous, new_owner=new_owner))

    # =========================================================================
    # WHITELIST ADMINISTRATION
    # =========================================================================

    def set_is_whitelisting(self, caller: str, is_whitelisting: bool) -> None:
        with self._transaction("set_is_whitelisting"):
            self._access.require(normalize_address(caller), Role.OWNER, Role.WHITELIST_MANAGER)
            self._whitelist.set_whitelisting(bool(is_whitelisting))
            self._ctx.emit(WhitelistingToggled(is_whitelisting=bool(is_whitelisting)))

        logger.info("Whitelisting %s", "enabled" if is_whitelisting else "disabled")

    def add_to_whitelist(self, caller: str, accounts: list[str]) -> list[str]:
        with self._transaction("add_to_whitelist"):
            self._access.require(normalize_address(caller), Role.OWNER, Role.WHITELIST_MANAGER)
            added = self._gate.add_accounts(
                [normalize_address(a) for a in accounts], self._ctx.emit
            )
        return added

    def remove_from_whitelist(self, caller: str, accounts: list[str]) -> list[str]:
        with self._transaction("remove_from_whitelist"):
            self._access.require(normalize_address(caller), Role.OWNER, Role.WHITELIST_MANAGER)
            removed = self._gate.remove_accounts(
                [normalize_address(a) for a in accounts], self._ctx.emit
            )
        return removed
