from __future__ import annotations

from decimal import Decimal

from boletipy.domain.draw_calendar import ReconciliationWeek
from boletipy.domain.model import DrawStage, GameType, PendingDraw
from boletipy.domain.prize_resolution import PrizeResolver
from boletipy.domain.reconciliation import summarize_week
from tests.helpers.draws import (
    FIVE_KEY_SUNDAY,
    SIX_NUMBER_MONDAY,
    SIX_NUMBER_THURSDAY,
    WEEK_MONDAY,
    five_key_result,
    prize_entries,
    six_number_result,
    ticket_for,
)
from tests.helpers.fakes import FakeReconciliationUnitOfWork

WEEK = ReconciliationWeek(WEEK_MONDAY)


def _uow() -> FakeReconciliationUnitOfWork:
    uow = FakeReconciliationUnitOfWork()
    uow.results.upsert_result(six_number_result("031", SIX_NUMBER_MONDAY))
    uow.results.upsert_result(five_key_result("016", FIVE_KEY_SUNDAY, key="7"))
    uow.prizes.upsert_prize_entries(
        prize_entries(
            GameType.SIX_NUMBER,
            "031",
            {"5+C": "2500.00", "3": "8.00", "R": "1.00"},
            draw_date=SIX_NUMBER_MONDAY,
        )
    )
    uow.prizes.upsert_prize_entries(
        prize_entries(
            GameType.FIVE_KEY,
            "016",
            {"2+C": "8.00", "R": "2.00"},
            draw_date=FIVE_KEY_SUNDAY,
        )
    )
    uow.tickets.add(
        ticket_for(
            GameType.SIX_NUMBER,
            ticket_id="P-1",
            numbers=("01", "02", "03", "04", "05", "06"),
            reseed="3",
            draws=[("031", SIX_NUMBER_MONDAY), ("032", SIX_NUMBER_THURSDAY)],
        )
    )
    uow.tickets.add(
        ticket_for(
            GameType.SIX_NUMBER,
            ticket_id="P-2",
            numbers=("20", "21", "22", "23", "24", "25"),
            reseed="9",
            draws=[("031", SIX_NUMBER_MONDAY)],
        )
    )
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


def test_summary_lists_winners_and_totals_per_game() -> None:
    uow = _uow()
    resolver = PrizeResolver(source=uow.prizes.prize_table)

    summary = summarize_week(uow, WEEK, resolver=resolver)

    six = summary.for_game(GameType.SIX_NUMBER)
    key = summary.for_game(GameType.FIVE_KEY)
    star = summary.for_game(GameType.FIVE_STAR)
    assert six is not None
    assert key is not None
    assert star is not None

    assert [(line.ticket_id, line.hit_code) for line in six.lines] == [("P-1", "5+C")]
    assert six.payout == Decimal("2500.00")
    assert [draw.draw_id for draw in six.draws] == ["031"]
    assert six.draws[0].has_prize_table

    assert [(line.ticket_id, line.hit_code) for line in key.lines] == [("G-1", "2+C")]
    assert key.payout == Decimal("10.00")

    assert star.lines == []
    assert summary.winners == 2
    assert summary.payout == Decimal("2510.00")
    assert summary.payout_text == "2.510,00 €"


def test_stored_result_without_prize_table_yields_pending_lines() -> None:
    uow = _uow()
    uow.prizes.entries.clear()
    resolver = PrizeResolver(source=uow.prizes.prize_table)

    summary = summarize_week(uow, WEEK, resolver=resolver)

    six = summary.for_game(GameType.SIX_NUMBER)
    assert six is not None
    assert not six.draws[0].has_prize_table
    assert [line.outcome.pending for line in six.lines] == [True]
    assert six.winners == 0
    assert six.awaiting_publication == 1
    assert summary.payout == Decimal(0)


def test_summary_carries_backfill_pending_entries_per_game() -> None:
    uow = _uow()
    pending = [
        PendingDraw(GameType.SIX_NUMBER, SIX_NUMBER_THURSDAY, DrawStage.RESULT, "not published yet"),
    ]

    summary = summarize_week(
        uow,
        WEEK,
        resolver=PrizeResolver(source=uow.prizes.prize_table),
        pending=pending,
        games=(GameType.SIX_NUMBER,),
    )

    assert [game.game_type for game in summary.games] == [GameType.SIX_NUMBER]
    assert summary.pending == pending


def test_summary_reuses_cached_prize_tables() -> None:
    uow = _uow()
    uow.tickets.add(
        ticket_for(
            GameType.SIX_NUMBER,
            ticket_id="P-3",
            numbers=("01", "02", "03", "30", "31", "32"),
            draws=[("031", SIX_NUMBER_MONDAY)],
        )
    )
    resolver = PrizeResolver(source=uow.prizes.prize_table)

    summarize_week(uow, WEEK, resolver=resolver, games=(GameType.SIX_NUMBER,))

    assert uow.prizes.loads == 1
