"""Factories for tickets, results and prize tiers used across the test suite."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING

from boletipy.domain.model import (
    DrawReference,
    FiveKeyResult,
    FiveStarResult,
    GameType,
    PrizeTableEntry,
    SixNumberResult,
    make_ticket,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from boletipy.domain.model import Ticket

# Monday 2025-04-14; its week holds every game's draws
WEEK_MONDAY = date(2025, 4, 14)
SIX_NUMBER_MONDAY = date(2025, 4, 14)
SIX_NUMBER_THURSDAY = date(2025, 4, 17)
SIX_NUMBER_SATURDAY = date(2025, 4, 19)
FIVE_STAR_TUESDAY = date(2025, 4, 15)
FIVE_STAR_FRIDAY = date(2025, 4, 18)
FIVE_KEY_SUNDAY = date(2025, 4, 20)


def six_number_result(
    draw_id: str = "031",
    draw_date: date = SIX_NUMBER_MONDAY,
    *,
    numbers: Iterable[str] = ("01", "02", "03", "04", "05", "07"),
    complement: str | None = "06",
    reseed: str | None = "3",
) -> SixNumberResult:
    return SixNumberResult(
        draw_id=draw_id,
        draw_date=draw_date,
        numbers=frozenset(numbers),
        complement=complement,
        reseed=reseed,
    )


def five_star_result(
    draw_id: str = "030",
    draw_date: date = FIVE_STAR_TUESDAY,
    *,
    numbers: Iterable[str] = ("03", "15", "22", "38", "47"),
    stars: Iterable[str] | None = ("02", "11"),
    bonus_code: str | None = "ABC12345",
) -> FiveStarResult:
    return FiveStarResult(
        draw_id=draw_id,
        draw_date=draw_date,
        numbers=frozenset(numbers),
        stars=frozenset(stars) if stars is not None else None,
        bonus_code=bonus_code,
    )


def five_key_result(
    draw_id: str = "016",
    draw_date: date = FIVE_KEY_SUNDAY,
    *,
    numbers: Iterable[str] = ("10", "20", "99", "98", "97"),
    key: str | None = "7",
) -> FiveKeyResult:
    return FiveKeyResult(
        draw_id=draw_id,
        draw_date=draw_date,
        numbers=frozenset(numbers),
        key=key,
    )


def ticket_for(
    game_type: GameType,
    *,
    ticket_id: str = "T-1",
    numbers: Iterable[str],
    draws: Iterable[tuple[str, date]],
    reseed: str | None = None,
    stars: Iterable[str] = (),
    key: str | None = None,
) -> Ticket:
    return make_ticket(
        game_type,
        ticket_id=ticket_id,
        numbers=numbers,
        draws=[DrawReference(draw_id=draw_id, draw_date=day) for draw_id, day in draws],
        reseed=reseed,
        stars=stars,
        key=key,
    )


def prize_entries(
    game_type: GameType,
    draw_id: str,
    amounts: Mapping[str, str | None],
    *,
    draw_date: date | None = None,
) -> list[PrizeTableEntry]:
    """One tier per hit code; ``None`` amounts are listed but not published."""

    return [
        PrizeTableEntry(
            game_type=game_type,
            draw_id=draw_id,
            hit_code=code,
            category_label=f"Categoria {code}",
            amount=Decimal(amount) if amount is not None else None,
            amount_text="" if amount is not None else "Pendiente",
            draw_date=draw_date,
        )
        for code, amount in amounts.items()
    ]


def prize_table(
    game_type: GameType,
    draw_id: str,
    amounts: Mapping[str, str | None],
    *,
    draw_date: date | None = None,
) -> dict[str, PrizeTableEntry]:
    return {
        entry.hit_code: entry
        for entry in prize_entries(game_type, draw_id, amounts, draw_date=draw_date)
    }


__all__ = [
    "FIVE_KEY_SUNDAY",
    "FIVE_STAR_FRIDAY",
    "FIVE_STAR_TUESDAY",
    "SIX_NUMBER_MONDAY",
    "SIX_NUMBER_SATURDAY",
    "SIX_NUMBER_THURSDAY",
    "WEEK_MONDAY",
    "five_key_result",
    "five_star_result",
    "prize_entries",
    "prize_table",
    "six_number_result",
    "ticket_for",
]
