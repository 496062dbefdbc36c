from __future__ import annotations

import json
from datetime import timedelta
from decimal import Decimal
from typing import TYPE_CHECKING

import pytest
from pydantic import ValidationError

from boletipy.app import reconcile_weeks, register_tickets, update_day
from boletipy.domain.draw_calendar import ReconciliationWeek
from boletipy.domain.model import CheckState, GameType
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
from tests.helpers.fakes import FakeDrawSource, FakeReconciliationUnitOfWork, FixedClock

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from boletipy.adapters.sqlalchemy.unit_of_work import SqlAlchemyReconciliationUnitOfWork
    from boletipy.domain.model import WeeklySummary

KEY_TICKET = {
    "id": "G-1",
    "tipo": "gordo",
    "combinacion": "102030",
    "clave": 7,
    "sorteos": [{"sorteo": "016", "fecha": "2025-04-20"}],
}


def _source() -> FakeDrawSource:
    return FakeDrawSource(
        results=[five_key_result()],
        prizes={
            (GameType.FIVE_KEY, FIVE_KEY_SUNDAY): prize_entries(
                GameType.FIVE_KEY, "016", {"2+C": "8.00", "R": "2.00"}, draw_date=FIVE_KEY_SUNDAY
            )
        },
    )


def _write_tickets(tmp_path: Path, name: str, payload: object) -> Path:
    path = tmp_path / name
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_reconcile_weeks_publishes_one_summary_per_week() -> None:
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
    source = _source()
    published: list[WeeklySummary] = []
    weeks = [ReconciliationWeek(WEEK_MONDAY), ReconciliationWeek(WEEK_MONDAY + timedelta(days=7))]

    summaries = reconcile_weeks(
        weeks,
        unit_of_work_factory=lambda: uow,
        fetch_result=source.fetch_result,
        fetch_prizes=source.fetch_prizes,
        publisher=published.append,
        games=(GameType.FIVE_KEY,),
        clock=FixedClock(),
    )

    assert published == summaries
    assert [summary.week_start for summary in summaries] == [week.monday for week in weeks]
    first = summaries[0].for_game(GameType.FIVE_KEY)
    assert first is not None
    assert [(line.ticket_id, line.outcome.total) for line in first.lines] == [
        ("G-1", Decimal("10.00"))
    ]
    assert summaries[1].winners == 0
    assert len(summaries[1].pending) == 1


def test_reconcile_weeks_without_updates_never_fetches() -> None:
    uow = FakeReconciliationUnitOfWork()
    source = _source()

    (summary,) = reconcile_weeks(
        [ReconciliationWeek(WEEK_MONDAY)],
        unit_of_work_factory=lambda: uow,
        fetch_result=source.fetch_result,
        fetch_prizes=source.fetch_prizes,
        publisher=lambda _summary: None,
        auto_update=False,
        clock=FixedClock(),
    )

    assert source.result_calls == []
    assert source.prize_calls == []
    assert summary.winners == 0


def test_update_day_only_touches_that_day() -> None:
    uow = FakeReconciliationUnitOfWork()
    source = FakeDrawSource(
        results=[
            six_number_result("031", SIX_NUMBER_MONDAY),
            six_number_result("032", SIX_NUMBER_THURSDAY),
        ]
    )

    report = update_day(
        SIX_NUMBER_THURSDAY,
        unit_of_work_factory=lambda: uow,
        fetch_result=source.fetch_result,
        fetch_prizes=source.fetch_prizes,
        clock=FixedClock(),
    )

    assert source.result_calls == [(GameType.SIX_NUMBER, SIX_NUMBER_THURSDAY)]
    assert [(check.draw_date, check.result) for check in report.checks] == [
        (SIX_NUMBER_THURSDAY, CheckState.STORED)
    ]
    assert uow.results.has_result(GameType.SIX_NUMBER, SIX_NUMBER_THURSDAY)
    assert not uow.results.has_result(GameType.SIX_NUMBER, SIX_NUMBER_MONDAY)


def test_register_tickets_validates_every_file_first(tmp_path: Path) -> None:
    uow = FakeReconciliationUnitOfWork()
    good = _write_tickets(tmp_path, "good.json", KEY_TICKET)
    bad = _write_tickets(tmp_path, "bad.json", [{"id": "P-1"}])

    with pytest.raises(ValidationError):
        register_tickets([good, bad], unit_of_work_factory=lambda: uow)

    assert uow.entered == 0
    assert uow.tickets.tickets == {}


def test_tickets_registered_in_a_store_are_reconciled(
    tmp_path: Path,
    sqlite_unit_of_work: Callable[[], SqlAlchemyReconciliationUnitOfWork],
) -> None:
    path = _write_tickets(tmp_path, "tickets.json", [KEY_TICKET])
    source = _source()

    count = register_tickets([path], unit_of_work_factory=sqlite_unit_of_work)
    (summary,) = reconcile_weeks(
        [ReconciliationWeek(WEEK_MONDAY)],
        unit_of_work_factory=sqlite_unit_of_work,
        fetch_result=source.fetch_result,
        fetch_prizes=source.fetch_prizes,
        publisher=lambda _summary: None,
        games=(GameType.FIVE_KEY,),
        clock=FixedClock(),
    )

    assert count == 1
    assert summary.payout == Decimal("10.00")
    with sqlite_unit_of_work() as uow:
        assert uow.repositories.prizes.has_prize_table(GameType.FIVE_KEY, "016", FIVE_KEY_SUNDAY)


def test_tenant_store_is_migrated_and_disposed(tmp_path: Path) -> None:
    path = _write_tickets(tmp_path, "tickets.json", KEY_TICKET)
    database_uri = f"sqlite+pysqlite:///{tmp_path / 'tenant.db'}"

    assert register_tickets([path], database_uri=database_uri) == 1
    assert register_tickets([path], database_uri=database_uri) == 1
