"""Weekly reconciliation outputs handed to notification and rendering collaborators."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from decimal import Decimal
from typing import TYPE_CHECKING

from boletipy.domain.normalization import format_euro_amount

if TYPE_CHECKING:
    from datetime import date

    from boletipy.domain.model.enums import DrawStage, GameType
    from boletipy.domain.model.prizes import PrizeOutcome


@dataclass(frozen=True, slots=True)
class PendingDraw:
    """A draw whose result or prize table could not be stored in this run."""

    game_type: GameType
    draw_date: date
    stage: DrawStage
    reason: str


@dataclass(frozen=True, slots=True)
class DrawHeader:
    game_type: GameType
    draw_id: str
    draw_date: date
    has_prize_table: bool


@dataclass(frozen=True, slots=True)
class WinningLine:
    ticket_id: str
    draw_id: str
    draw_date: date
    outcome: PrizeOutcome

    @property
    def hit_code(self) -> str:
        return self.outcome.hit_code


@dataclass(slots=True)
class GameWeekSummary:
    game_type: GameType
    draws: list[DrawHeader] = field(default_factory=list["DrawHeader"])
    lines: list[WinningLine] = field(default_factory=list["WinningLine"])
    pending: list[PendingDraw] = field(default_factory=list["PendingDraw"])

    @property
    def winners(self) -> int:
        """Tickets with a published prize."""

        return sum(1 for line in self.lines if not line.outcome.pending)

    @property
    def awaiting_publication(self) -> int:
        return sum(1 for line in self.lines if line.outcome.pending)

    @property
    def payout(self) -> Decimal:
        total = Decimal(0)
        for line in self.lines:
            amount = line.outcome.payout
            if amount is not None and amount.is_finite():
                total += amount
        return total

    @property
    def payout_text(self) -> str:
        return format_euro_amount(self.payout)


@dataclass(slots=True)
class WeeklySummary:
    week_start: date
    games: list[GameWeekSummary] = field(default_factory=list["GameWeekSummary"])

    @property
    def week_end(self) -> date:
        return self.week_start + timedelta(days=6)

    @property
    def winners(self) -> int:
        return sum(game.winners for game in self.games)

    @property
    def payout(self) -> Decimal:
        return sum((game.payout for game in self.games), Decimal(0))

    @property
    def payout_text(self) -> str:
        return format_euro_amount(self.payout)

    @property
    def pending(self) -> list[PendingDraw]:
        return [entry for game in self.games for entry in game.pending]

    def for_game(self, game_type: GameType) -> GameWeekSummary | None:
        return next((game for game in self.games if game.game_type == game_type), None)
