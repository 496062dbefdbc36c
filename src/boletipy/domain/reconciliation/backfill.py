"""Backfill a week's draw results and prize tables from the official source.

Every scheduled draw walks the same checklist::

    UNCHECKED -> PRESENT | fetch -> STORED | PENDING
              -> PRESENT | fetch -> STORED | PENDING   (prize table)

A fetch only happens when the store lacks the data and the publication gate is open.
Failures of one draw are recorded as pending and never stop the remaining draws.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from boletipy.domain.draw_calendar import Clock, utcnow
from boletipy.domain.model import CheckState, DrawStage, GameType, PendingDraw
from boletipy.domain.ports.persistence import StoreError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence
    from datetime import date

    from boletipy.domain.draw_calendar import PublicationGate, ReconciliationWeek
    from boletipy.domain.model import DrawResult, PrizeTableEntry
    from boletipy.domain.ports.fetching import DrawResultFetcher, PrizeTableFetcher
    from boletipy.domain.ports.unit_of_work import ReconciliationUnitOfWork

log = getLogger(__name__)

NOT_STORED = "not stored"
NOT_PUBLISHED = "not published yet"
UNREADABLE = "stored result unreadable"


@dataclass(slots=True)
class DrawCheck:
    """Checklist entry for one scheduled draw."""

    game_type: GameType
    draw_date: date
    draw_id: str | None = None
    result: CheckState = CheckState.UNCHECKED
    prizes: CheckState = CheckState.UNCHECKED

    @property
    def state(self) -> CheckState:
        settled = {CheckState.PRESENT, CheckState.STORED}
        if self.result in settled and self.prizes in settled:
            return CheckState.DONE
        if CheckState.PENDING in {self.result, self.prizes}:
            return CheckState.PENDING
        if CheckState.SKIPPED in {self.result, self.prizes}:
            return CheckState.SKIPPED
        return CheckState.UNCHECKED


@dataclass(slots=True)
class BackfillReport:
    checks: list[DrawCheck] = field(default_factory=list["DrawCheck"])
    pending: list[PendingDraw] = field(default_factory=list["PendingDraw"])

    def fetched(self) -> int:
        return sum(
            (check.result is CheckState.STORED) + (check.prizes is CheckState.STORED)
            for check in self.checks
        )


@dataclass(slots=True)
class WeekBackfill:
    """Fill the gaps of one week inside an open unit of work."""

    fetch_result: DrawResultFetcher
    fetch_prizes: PrizeTableFetcher
    gate: PublicationGate
    clock: Clock = utcnow
    auto_update: bool = True
    on_prizes_stored: Callable[[GameType, str], None] | None = None

    def run(
        self,
        uow: ReconciliationUnitOfWork,
        week: ReconciliationWeek,
        *,
        games: Iterable[GameType] = tuple(GameType),
        only_date: date | None = None,
    ) -> BackfillReport:
        report = BackfillReport()
        for game_type in games:
            for draw_date in week.draw_dates(game_type):
                if only_date is not None and draw_date != only_date:
                    continue
                check = DrawCheck(game_type=game_type, draw_date=draw_date)
                report.checks.append(check)
                self._check_draw(uow, check, report.pending)
        log.info(
            "Backfill of week %s: %s draws checked, %s fetched, %s pending",
            week.monday,
            len(report.checks),
            report.fetched(),
            len(report.pending),
        )
        return report

    def _check_draw(
        self,
        uow: ReconciliationUnitOfWork,
        check: DrawCheck,
        pending: list[PendingDraw],
    ) -> None:
        result = self._ensure_result(uow, check, pending)
        if result is None:
            if check.result is CheckState.SKIPPED:
                check.prizes = CheckState.SKIPPED
            return
        check.draw_id = result.draw_id
        self._ensure_prizes(uow, check, result, pending)

    def _ensure_result(
        self,
        uow: ReconciliationUnitOfWork,
        check: DrawCheck,
        pending: list[PendingDraw],
    ) -> DrawResult | None:
        results = uow.repositories.results
        if results.has_result(check.game_type, check.draw_date):
            stored = results.get_by_date(check.game_type, check.draw_date)
            if stored is None:
                self._mark_pending(check, DrawStage.RESULT, UNREADABLE, pending)
                return None
            check.result = CheckState.PRESENT
            return stored

        if not self._may_fetch(check, DrawStage.RESULT, pending):
            return None

        try:
            fetched = self.fetch_result(check.game_type, check.draw_date)
        except Exception as exc:  # noqa: BLE001
            log.warning(
                "Fetching %s result for %s failed: %s", check.game_type, check.draw_date, exc
            )
            self._mark_pending(check, DrawStage.RESULT, f"fetch failed: {exc}", pending)
            return None

        if fetched is None:
            self._mark_pending(check, DrawStage.RESULT, NOT_PUBLISHED, pending)
            return None
        if fetched.game_type is not check.game_type or fetched.draw_date != check.draw_date:
            reason = f"source returned {fetched.game_type} draw of {fetched.draw_date}"
            self._mark_pending(check, DrawStage.RESULT, reason, pending)
            return None

        if not self._store(
            uow, check, DrawStage.RESULT, pending, lambda: results.upsert_result(fetched)
        ):
            return None
        check.result = CheckState.STORED
        log.info(
            "Stored %s result %s of %s", check.game_type, fetched.draw_id, check.draw_date
        )
        return fetched

    def _ensure_prizes(
        self,
        uow: ReconciliationUnitOfWork,
        check: DrawCheck,
        result: DrawResult,
        pending: list[PendingDraw],
    ) -> None:
        prizes = uow.repositories.prizes
        if prizes.has_prize_table(check.game_type, result.draw_id, check.draw_date):
            check.prizes = CheckState.PRESENT
            return

        if not self._may_fetch(check, DrawStage.PRIZES, pending):
            return

        try:
            fetched = self.fetch_prizes(check.game_type, check.draw_date)
        except Exception as exc:  # noqa: BLE001
            log.warning(
                "Fetching %s prizes for %s failed: %s", check.game_type, check.draw_date, exc
            )
            self._mark_pending(check, DrawStage.PRIZES, f"fetch failed: {exc}", pending)
            return

        entries = _entries_for_draw(fetched, result)
        if not entries:
            self._mark_pending(check, DrawStage.PRIZES, NOT_PUBLISHED, pending)
            return

        if not self._store(
            uow, check, DrawStage.PRIZES, pending, lambda: prizes.upsert_prize_entries(entries)
        ):
            return
        check.prizes = CheckState.STORED
        if self.on_prizes_stored is not None:
            self.on_prizes_stored(check.game_type, result.draw_id)
        log.info(
            "Stored %s prize tiers for %s draw %s", len(entries), check.game_type, result.draw_id
        )

    def _may_fetch(
        self,
        check: DrawCheck,
        stage: DrawStage,
        pending: list[PendingDraw],
    ) -> bool:
        if not self.auto_update:
            self._mark_pending(check, stage, NOT_STORED, pending)
            return False
        if not self.gate.is_open(check.draw_date, clock=self.clock):
            log.debug(
                "Skipping %s %s for %s before publication", check.game_type, stage, check.draw_date
            )
            _set_state(check, stage, CheckState.SKIPPED)
            return False
        return True

    def _store(
        self,
        uow: ReconciliationUnitOfWork,
        check: DrawCheck,
        stage: DrawStage,
        pending: list[PendingDraw],
        write: Callable[[], None],
    ) -> bool:
        try:
            write()
            uow.commit()
        except StoreError as exc:
            log.warning(
                "Storing %s %s for %s failed: %s", check.game_type, stage, check.draw_date, exc
            )
            uow.rollback()
            self._mark_pending(check, stage, f"store failed: {exc}", pending)
            return False
        return True

    @staticmethod
    def _mark_pending(
        check: DrawCheck,
        stage: DrawStage,
        reason: str,
        pending: list[PendingDraw],
    ) -> None:
        _set_state(check, stage, CheckState.PENDING)
        pending.append(
            PendingDraw(
                game_type=check.game_type,
                draw_date=check.draw_date,
                stage=stage,
                reason=reason,
            )
        )


def _set_state(check: DrawCheck, stage: DrawStage, state: CheckState) -> None:
    if stage is DrawStage.RESULT:
        check.result = state
    else:
        check.prizes = state


def _entries_for_draw(
    entries: Sequence[PrizeTableEntry],
    result: DrawResult,
) -> list[PrizeTableEntry]:
    """Key fetched tiers by the stored draw, dropping tiers of other games."""

    keyed: list[PrizeTableEntry] = []
    for entry in entries:
        if entry.game_type is not result.game_type:
            log.warning(
                "Ignoring %s prize tier fetched for a %s draw", entry.game_type, result.game_type
            )
            continue
        keyed.append(entry.for_draw(result.draw_id, result.draw_date))
    return keyed
