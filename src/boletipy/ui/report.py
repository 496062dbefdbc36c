"""Plain-text rendering of weekly summaries."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from boletipy.domain.model import GameWeekSummary, WeeklySummary, WinningLine
    from boletipy.domain.ports.notification import SummaryPublisher


def _line_text(line: WinningLine) -> str:
    outcome = line.outcome
    label = outcome.category_label or outcome.hit_code
    head = f"  {line.draw_date} #{line.draw_id} ticket {line.ticket_id}: {label}"
    if outcome.pending:
        return f"{head} (prize not published yet)"
    if outcome.total is not None:
        return f"{head} {outcome.amount_text} + {outcome.supplement_text} = {outcome.total_text}"
    suffix = "" if outcome.fully_resolved else " (supplement pending)"
    return f"{head} {outcome.payout_text}{suffix}"


def _game_lines(game: GameWeekSummary) -> list[str]:
    lines = [
        f"{game.game_type}: {len(game.draws)} draw(s), {game.winners} winner(s), "
        f"payout {game.payout_text}"
    ]
    lines.extend(
        f"  {draw.draw_date} #{draw.draw_id}"
        + ("" if draw.has_prize_table else " (no prize table yet)")
        for draw in game.draws
    )
    lines.extend(_line_text(line) for line in game.lines)
    lines.extend(
        f"  pending {entry.draw_date} {entry.stage}: {entry.reason}" for entry in game.pending
    )
    return lines


def render_summary(summary: WeeklySummary) -> list[str]:
    lines = [
        f"Week {summary.week_start}..{summary.week_end}: {summary.winners} winner(s), "
        f"payout {summary.payout_text}"
    ]
    for game in summary.games:
        lines.extend(_game_lines(game))
    return lines


@dataclass(slots=True)
class LogSummaryPublisher:
    """Publish summaries to a logger, one record per rendered line."""

    logger: logging.Logger = field(default_factory=lambda: logging.getLogger("boletipy.report"))
    level: int = logging.INFO

    def __call__(self, summary: WeeklySummary) -> None:
        for line in render_summary(summary):
            self.logger.log(self.level, line)


if TYPE_CHECKING:
    _publisher_check: SummaryPublisher = LogSummaryPublisher()
