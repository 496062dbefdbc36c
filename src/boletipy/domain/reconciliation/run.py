"""One reconciliation run: backfill a week, then evaluate and total its tickets."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from boletipy.domain.draw_calendar import Clock, utcnow
from boletipy.domain.model import GameType
from boletipy.domain.prize_resolution import PrizeResolver, PrizeTableCache
from boletipy.domain.reconciliation.backfill import BackfillReport, WeekBackfill
from boletipy.domain.reconciliation.summary import summarize_week

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import date

    from boletipy.domain.draw_calendar import PublicationGate, ReconciliationWeek
    from boletipy.domain.model import WeeklySummary
    from boletipy.domain.ports.fetching import DrawResultFetcher, PrizeTableFetcher
    from boletipy.domain.ports.unit_of_work import ReconciliationUnitOfWork

log = getLogger(__name__)


@dataclass(slots=True)
class ReconciliationRun:
    """Owns the prize-table cache shared by every lookup of the run.

    Create one instance per run (per tenant, per invocation); nothing here is shared
    between runs.
    """

    unit_of_work_factory: Callable[[], ReconciliationUnitOfWork]
    fetch_result: DrawResultFetcher
    fetch_prizes: PrizeTableFetcher
    gate: PublicationGate
    clock: Clock = utcnow
    auto_update: bool = True
    games: tuple[GameType, ...] = tuple(GameType)
    cache: PrizeTableCache = field(default_factory=PrizeTableCache)

    def _backfill(self) -> WeekBackfill:
        return WeekBackfill(
            fetch_result=self.fetch_result,
            fetch_prizes=self.fetch_prizes,
            gate=self.gate,
            clock=self.clock,
            auto_update=self.auto_update,
            on_prizes_stored=self.cache.invalidate,
        )

    def backfill(self, week: ReconciliationWeek, *, only_date: date | None = None) -> BackfillReport:
        """Fetch and store whatever the week (or one of its days) is missing."""

        with self.unit_of_work_factory() as uow:
            return self._backfill().run(uow, week, games=self.games, only_date=only_date)

    def reconcile(self, week: ReconciliationWeek) -> WeeklySummary:
        log.info("Reconciling week %s..%s", week.monday, week.sunday)
        with self.unit_of_work_factory() as uow:
            report = self._backfill().run(uow, week, games=self.games)
            resolver = PrizeResolver(source=uow.repositories.prizes.prize_table, cache=self.cache)
            return summarize_week(
                uow,
                week,
                resolver=resolver,
                pending=report.pending,
                games=self.games,
            )
