"""Ports for fetching official draw data from an external source.

Each call is one fallible operation: implementations may raise any exception (transport,
parsing, ...) and the reconciliation treats it as "unavailable now". Retries and
fallbacks belong inside the implementation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import date

    from boletipy.domain.model import DrawResult, GameType, PrizeTableEntry


@runtime_checkable
class DrawResultFetcher(Protocol):
    """Return the official result of the game's draw held on ``draw_date``, if published."""

    def __call__(self, game_type: GameType, draw_date: date) -> DrawResult | None: ...


@runtime_checkable
class PrizeTableFetcher(Protocol):
    """Return the published prize tiers of the game's draw on ``draw_date`` (empty if none)."""

    def __call__(self, game_type: GameType, draw_date: date) -> Sequence[PrizeTableEntry]: ...


__all__ = ["DrawResultFetcher", "PrizeTableFetcher"]
