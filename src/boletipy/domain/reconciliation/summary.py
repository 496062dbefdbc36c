"""Evaluate stored tickets against a week's stored results and total the prizes."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from boletipy.domain.matching import evaluate
from boletipy.domain.model import (
    DrawHeader,
    GameType,
    GameWeekSummary,
    StructuralError,
    WeeklySummary,
    WinningLine,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from boletipy.domain.draw_calendar import ReconciliationWeek
    from boletipy.domain.model import DrawResult, PendingDraw
    from boletipy.domain.prize_resolution import PrizeResolver
    from boletipy.domain.ports.unit_of_work import ReconciliationUnitOfWork

log = getLogger(__name__)


def summarize_week(
    uow: ReconciliationUnitOfWork,
    week: ReconciliationWeek,
    *,
    resolver: PrizeResolver,
    pending: Iterable[PendingDraw] = (),
    games: Iterable[GameType] = tuple(GameType),
) -> WeeklySummary:
    """Build the weekly summary from what the store holds for ``week``."""

    pending_draws = list(pending)
    summary = WeeklySummary(week_start=week.monday)
    for game_type in games:
        game_summary = GameWeekSummary(
            game_type=game_type,
            pending=[entry for entry in pending_draws if entry.game_type is game_type],
        )
        for result in uow.repositories.results.between(game_type, week.monday, week.sunday):
            game_summary.draws.append(
                DrawHeader(
                    game_type=game_type,
                    draw_id=result.draw_id,
                    draw_date=result.draw_date,
                    has_prize_table=uow.repositories.prizes.has_prize_table(
                        game_type, result.draw_id, result.draw_date
                    ),
                )
            )
            game_summary.lines.extend(_winning_lines(uow, result, resolver))
        game_summary.lines.sort(key=lambda line: (line.ticket_id, line.draw_date))
        log.info(
            "%s week %s: %s winners, %s awaiting publication, payout %s",
            game_type,
            week.monday,
            game_summary.winners,
            game_summary.awaiting_publication,
            game_summary.payout_text,
        )
        summary.games.append(game_summary)
    return summary


def _winning_lines(
    uow: ReconciliationUnitOfWork,
    result: DrawResult,
    resolver: PrizeResolver,
) -> list[WinningLine]:
    lines: list[WinningLine] = []
    tickets = uow.repositories.tickets.for_draw(
        result.game_type, result.draw_id, result.draw_date
    )
    for ticket in tickets:
        try:
            hits = evaluate(ticket, result)
        except StructuralError:
            log.exception("Skipping ticket %s for draw %s", ticket.ticket_id, result.draw_id)
            continue
        outcome = resolver.resolve(
            result.game_type, result.draw_id, hits, draw_date=result.draw_date
        )
        if outcome is None:
            continue
        lines.append(
            WinningLine(
                ticket_id=ticket.ticket_id,
                draw_id=result.draw_id,
                draw_date=result.draw_date,
                outcome=outcome,
            )
        )
    return lines
