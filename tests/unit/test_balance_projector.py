"""Unit тесты для BalanceProjector: проекция индекса без мутаций."""

import pytest

from src.core.clock import ManualClock
from src.core.domain import SECONDS_PER_DAY, InMemoryEventSink
from src.core.errors import ClockRegressionError
from src.core.math.decay import INITIAL_FEE_INDEX, calculate_compound_decay
from src.fees import BalanceProjector, FeeContext, FeeIndexStore, FeeSettings, ProjectedIndex
from src.ledger import RawLedger

DAY0 = 19675
ALICE = "0x" + "a" * 40
RECIPIENT = "0x" + "f" * 40


@pytest.fixture
def clock():
    return ManualClock(DAY0 * SECONDS_PER_DAY + 3600)


@pytest.fixture
def ctx(clock):
    return FeeContext(
        store=FeeIndexStore(INITIAL_FEE_INDEX, clock.today),
        ledger=RawLedger(),
        settings=FeeSettings(fee_rate=400, fee_recipient=RECIPIENT),
        clock=clock,
        emit=InMemoryEventSink().emit,
    )


@pytest.fixture
def projector(ctx):
    return BalanceProjector(ctx)


class TestProject:
    def test_same_day_returns_committed(self, projector):
        assert projector.project() == ProjectedIndex(DAY0, INITIAL_FEE_INDEX)

    def test_later_day_decays(self, projector, clock):
        clock.advance_days(10)
        day, index = projector.project()
        assert day == DAY0 + 10
        assert index == calculate_compound_decay(INITIAL_FEE_INDEX, 400, 10)

    def test_intraday_time_ignored(self, projector, clock):
        clock.advance_seconds(SECONDS_PER_DAY - 3601)
        assert projector.project().index == INITIAL_FEE_INDEX

    def test_explicit_day(self, projector):
        assert projector.project(DAY0 + 1).day == DAY0 + 1

    def test_clock_regression(self, projector, clock):
        clock.set((DAY0 - 1) * SECONDS_PER_DAY)
        with pytest.raises(ClockRegressionError):
            projector.project()

    def test_does_not_mutate_store(self, projector, ctx, clock):
        clock.advance_days(100)
        projector.project()
        assert ctx.store.fee_index == INITIAL_FEE_INDEX
        assert ctx.store.fees_collection_day == DAY0


class TestBalances:
    def test_balance_of_settled_account(self, projector, ctx, clock):
        ctx.store.snapshot_account(ALICE, INITIAL_FEE_INDEX)
        ctx.ledger.credit(ALICE, 10**21)
        assert projector.balance_of(ALICE) == 10**21

        clock.advance_days(42)
        expected_index = calculate_compound_decay(INITIAL_FEE_INDEX, 400, 42)
        assert projector.balance_of(ALICE) == 10**21 * expected_index // INITIAL_FEE_INDEX

    def test_unsnapshotted_account_reads_zero(self, projector, ctx):
        ctx.ledger.credit(ALICE, 10**18)
        assert projector.balance_of(ALICE) == 0

    def test_zero_raw_balance(self, projector, ctx):
        ctx.store.snapshot_account(ALICE, INITIAL_FEE_INDEX)
        assert projector.balance_of(ALICE) == 0

    def test_total_supply(self, projector, ctx, clock):
        ctx.ledger.credit(ALICE, 5 * 10**20)
        assert projector.total_supply() == 5 * 10**20

        clock.advance_days(366)
        expected_index = calculate_compound_decay(INITIAL_FEE_INDEX, 400, 366)
        assert projector.total_supply() == 5 * 10**20 * expected_index // INITIAL_FEE_INDEX
        assert projector.total_supply() < 5 * 10**20
