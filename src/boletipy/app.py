"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from logging import getLogger
from typing import TYPE_CHECKING

from boletipy.adapters.loterias import LoteriasFetcher, should_cache_payload
from boletipy.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyReconciliationUnitOfWork,
    is_started,
    make_session_factory,
    prepare_engine,
    startup,
)
from boletipy.adapters.ticket_import import load_tickets
from boletipy.config import get_loterias_config, get_reconciliation_config, get_storage_config
from boletipy.domain.draw_calendar import ReconciliationWeek, utcnow
from boletipy.domain.model import GameType
from boletipy.domain.ports.unit_of_work import ReconciliationUnitOfWork
from boletipy.domain.reconciliation import ReconciliationRun
from boletipy.ui.report import LogSummaryPublisher

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import date
    from pathlib import Path

    from boletipy.domain.draw_calendar import Clock
    from boletipy.domain.model import WeeklySummary
    from boletipy.domain.ports.fetching import DrawResultFetcher, PrizeTableFetcher
    from boletipy.domain.ports.notification import SummaryPublisher
    from boletipy.domain.reconciliation import BackfillReport

UnitOfWorkFactory = Callable[[], ReconciliationUnitOfWork]


log = getLogger(__name__)


def build_loterias_fetcher() -> LoteriasFetcher:
    """Fetcher for the official results service, caching settled searches."""

    return LoteriasFetcher(
        config=get_loterias_config(
            storage=get_storage_config(),
            cache_predicate=should_cache_payload,
        )
    )


@contextmanager
def _store(
    unit_of_work_factory: UnitOfWorkFactory | None,
    database_uri: str | None,
) -> Iterator[UnitOfWorkFactory]:
    """Yield a unit-of-work factory: the given one, a tenant store, or the default store."""

    if unit_of_work_factory is not None:
        yield unit_of_work_factory
        return
    if database_uri is None:
        if not is_started():
            startup()
        yield SqlAlchemyReconciliationUnitOfWork
        return
    engine = prepare_engine(database_uri=database_uri)
    session_factory = make_session_factory(engine)
    try:
        yield lambda: SqlAlchemyReconciliationUnitOfWork(session_factory)
    finally:
        engine.dispose()


@contextmanager
def _fetchers(
    fetch_result: DrawResultFetcher | None,
    fetch_prizes: PrizeTableFetcher | None,
) -> Iterator[tuple[DrawResultFetcher, PrizeTableFetcher]]:
    """Yield the given fetch operations, filling gaps from one results-service client."""

    if fetch_result is not None and fetch_prizes is not None:
        yield fetch_result, fetch_prizes
        return
    with build_loterias_fetcher() as fetcher:
        yield fetch_result or fetcher.fetch_result, fetch_prizes or fetcher.fetch_prizes


def reconcile_weeks(
    weeks: Iterable[ReconciliationWeek],
    *,
    database_uri: str | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    fetch_result: DrawResultFetcher | None = None,
    fetch_prizes: PrizeTableFetcher | None = None,
    publisher: SummaryPublisher | None = None,
    auto_update: bool = True,
    games: tuple[GameType, ...] = tuple(GameType),
    clock: Clock = utcnow,
) -> list[WeeklySummary]:
    """Reconcile each week in its own run and publish its summary."""

    gate = get_reconciliation_config().publication_gate()
    effective_publisher = publisher or LogSummaryPublisher()

    summaries: list[WeeklySummary] = []
    with (
        _fetchers(fetch_result, fetch_prizes) as (fetch_result, fetch_prizes),
        _store(unit_of_work_factory, database_uri) as uow_factory,
    ):
        for week in weeks:
            run = ReconciliationRun(
                unit_of_work_factory=uow_factory,
                fetch_result=fetch_result,
                fetch_prizes=fetch_prizes,
                gate=gate,
                clock=clock,
                auto_update=auto_update,
                games=games,
            )
            summary = run.reconcile(week)
            effective_publisher(summary)
            summaries.append(summary)
    log.info(f"Reconciled {len(summaries)} week(s)")
    return summaries


def update_day(
    day: date,
    *,
    database_uri: str | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    fetch_result: DrawResultFetcher | None = None,
    fetch_prizes: PrizeTableFetcher | None = None,
    games: tuple[GameType, ...] = tuple(GameType),
    clock: Clock = utcnow,
) -> BackfillReport:
    """Store the results and prize tables of the draws held on ``day``."""

    with (
        _fetchers(fetch_result, fetch_prizes) as (fetch_result, fetch_prizes),
        _store(unit_of_work_factory, database_uri) as uow_factory,
    ):
        run = ReconciliationRun(
            unit_of_work_factory=uow_factory,
            fetch_result=fetch_result,
            fetch_prizes=fetch_prizes,
            gate=get_reconciliation_config().publication_gate(),
            clock=clock,
            games=games,
        )
        report = run.backfill(ReconciliationWeek.containing(day), only_date=day)
    log.info(
        "Update of %s finished: checked=%s, fetched=%s, pending=%s",
        day,
        len(report.checks),
        report.fetched(),
        len(report.pending),
    )
    return report


def register_tickets(
    paths: Iterable[Path],
    *,
    database_uri: str | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> int:
    """Store the tickets of every JSON file; all files are validated before writing."""

    tickets = [ticket for path in paths for ticket in load_tickets(path)]
    with _store(unit_of_work_factory, database_uri) as uow_factory, uow_factory() as uow:
        for ticket in tickets:
            uow.repositories.tickets.add(ticket)
        uow.commit()
    log.info("Registered %s ticket(s)", len(tickets))
    return len(tickets)
