"""Ports for persisting tickets, draw results and prize tables."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from boletipy.domain.model import Ticket

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import date

    from boletipy.domain.model import DrawResult, GameType, PrizeTable, PrizeTableEntry


class StoreError(RuntimeError):
    """Raised by repositories when the backing store rejects an operation."""


@runtime_checkable
class Repository[TEntity](Protocol):
    """Minimal repository contract for a persistent aggregate store."""

    def add(self, entity: TEntity) -> None: ...


@runtime_checkable
class TicketRepository(Repository[Ticket], Protocol):
    """Registered tickets. ``add`` replaces a ticket stored under the same identifier."""

    def get(self, ticket_id: str) -> Ticket | None: ...

    def for_draw(self, game_type: GameType, draw_id: str, draw_date: date) -> list[Ticket]: ...


@runtime_checkable
class DrawResultRepository(Protocol):
    """Official draw results, unique per (game type, draw id)."""

    def has_result(self, game_type: GameType, draw_date: date) -> bool: ...

    def get_by_date(self, game_type: GameType, draw_date: date) -> DrawResult | None: ...

    def between(self, game_type: GameType, start: date, end: date) -> list[DrawResult]: ...

    def upsert_result(self, result: DrawResult) -> None:
        """Insert or complete a result; stored winning numbers are never overwritten."""
        ...


@runtime_checkable
class PrizeTableRepository(Protocol):
    """Published prize tiers, unique per (game type, draw id, hit code).

    Lookups by draw id also match legacy compound identifiers ending in ``/NNN``.
    """

    def has_prize_table(self, game_type: GameType, draw_id: str, draw_date: date) -> bool: ...

    def prize_table(
        self,
        game_type: GameType,
        draw_id: str,
        draw_date: date | None = None,
    ) -> PrizeTable: ...

    def upsert_prize_entries(self, entries: Iterable[PrizeTableEntry]) -> None: ...


__all__ = [
    "DrawResultRepository",
    "PrizeTableRepository",
    "Repository",
    "StoreError",
    "TicketRepository",
]
