from __future__ import annotations

from decimal import Decimal
from zoneinfo import ZoneInfo

from boletipy.domain.draw_calendar import PublicationGate, ReconciliationWeek
from boletipy.domain.model import GameType
from boletipy.domain.reconciliation import ReconciliationRun
from tests.helpers.draws import (
    FIVE_KEY_SUNDAY,
    WEEK_MONDAY,
    five_key_result,
    prize_entries,
    ticket_for,
)
from tests.helpers.fakes import FakeDrawSource, FakeReconciliationUnitOfWork, FixedClock

WEEK = ReconciliationWeek(WEEK_MONDAY)
GATE = PublicationGate(timezone=ZoneInfo("Europe/Madrid"))


def _store_with_ticket() -> FakeReconciliationUnitOfWork:
    uow = FakeReconciliationUnitOfWork()
    uow.tickets.add(
        ticket_for(
            GameType.FIVE_KEY,
            ticket_id="G-1",
            numbers=("10", "20", "30"),
            key="7",
            draws=[("016", FIVE_KEY_SUNDAY)],
        )
    )
    return uow


def _source() -> FakeDrawSource:
    return FakeDrawSource(
        [five_key_result("016", FIVE_KEY_SUNDAY, key="7")],
        {
            (GameType.FIVE_KEY, FIVE_KEY_SUNDAY): prize_entries(
                GameType.FIVE_KEY, "016", {"2+C": "8.00", "R": "2.00"}
            )
        },
    )


def test_run_backfills_then_summarizes_the_week() -> None:
    uow = _store_with_ticket()
    run = ReconciliationRun(
        unit_of_work_factory=lambda: uow,
        fetch_result=_source().fetch_result,
        fetch_prizes=_source().fetch_prizes,
        gate=GATE,
        clock=FixedClock(),
        games=(GameType.FIVE_KEY,),
    )

    summary = run.reconcile(WEEK)

    game = summary.for_game(GameType.FIVE_KEY)
    assert game is not None
    assert [line.outcome.total for line in game.lines] == [Decimal("10.00")]
    assert summary.pending == []
    assert uow.entered == 1


def test_run_without_updates_reports_pending_and_fetches_nothing() -> None:
    uow = _store_with_ticket()
    source = _source()
    run = ReconciliationRun(
        unit_of_work_factory=lambda: uow,
        fetch_result=source.fetch_result,
        fetch_prizes=source.fetch_prizes,
        gate=GATE,
        clock=FixedClock(),
        auto_update=False,
        games=(GameType.FIVE_KEY,),
    )

    summary = run.reconcile(WEEK)

    assert source.result_calls == []
    assert [entry.draw_date for entry in summary.pending] == [FIVE_KEY_SUNDAY]
    assert summary.winners == 0


def test_prizes_stored_mid_run_replace_a_cached_empty_table() -> None:
    uow = _store_with_ticket()
    uow.results.upsert_result(five_key_result("016", FIVE_KEY_SUNDAY, key="7"))
    source = _source()
    run = ReconciliationRun(
        unit_of_work_factory=lambda: uow,
        fetch_result=source.fetch_result,
        fetch_prizes=source.fetch_prizes,
        gate=GATE,
        clock=FixedClock(),
        games=(GameType.FIVE_KEY,),
    )
    # an earlier lookup in this run cached the table before it was published
    run.cache.get_or_load(GameType.FIVE_KEY, "016", uow.prizes.prize_table, FIVE_KEY_SUNDAY)

    summary = run.reconcile(WEEK)

    game = summary.for_game(GameType.FIVE_KEY)
    assert game is not None
    assert [line.outcome.pending for line in game.lines] == [False]


def test_backfill_only_date() -> None:
    uow = _store_with_ticket()
    source = _source()
    run = ReconciliationRun(
        unit_of_work_factory=lambda: uow,
        fetch_result=source.fetch_result,
        fetch_prizes=source.fetch_prizes,
        gate=GATE,
        clock=FixedClock(),
    )

    report = run.backfill(WEEK, only_date=FIVE_KEY_SUNDAY)

    assert [check.game_type for check in report.checks] == [GameType.FIVE_KEY]
    assert report.fetched() == 2
