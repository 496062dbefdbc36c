"""Registered tickets, one closed variant per game type."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar

from boletipy.domain.model.enums import GameType
from boletipy.domain.model.errors import StructuralError
from boletipy.domain.normalization import (
    normalize_digit,
    normalize_draw_id,
    normalize_numbers,
    pad_number,
)

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import date


@dataclass(frozen=True, slots=True)
class DrawReference:
    """A draw a ticket takes part in."""

    draw_id: str
    draw_date: date

    def __post_init__(self) -> None:
        object.__setattr__(self, "draw_id", normalize_draw_id(self.draw_id))


@dataclass(frozen=True, slots=True, kw_only=True)
class _TicketBase:
    GAME_TYPE: ClassVar[GameType]

    ticket_id: str
    numbers: frozenset[str]
    draws: tuple[DrawReference, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not self.ticket_id or not self.ticket_id.strip():
            raise StructuralError("Ticket identifier must not be blank")
        numbers = normalize_numbers(self.numbers)
        if not numbers:
            raise StructuralError(f"Ticket {self.ticket_id} has no numbers")
        if not self.draws:
            raise StructuralError(f"Ticket {self.ticket_id} references no draw")
        object.__setattr__(self, "ticket_id", self.ticket_id.strip())
        object.__setattr__(self, "numbers", numbers)
        object.__setattr__(self, "draws", tuple(self.draws))

    @property
    def game_type(self) -> GameType:
        return self.GAME_TYPE

    def takes_part_in(self, draw_id: str) -> bool:
        normalized = normalize_draw_id(draw_id)
        return any(reference.draw_id == normalized for reference in self.draws)


@dataclass(frozen=True, slots=True, kw_only=True)
class SixNumberTicket(_TicketBase):
    GAME_TYPE: ClassVar[GameType] = GameType.SIX_NUMBER

    reseed: str | None = None

    def __post_init__(self) -> None:
        _TicketBase.__post_init__(self)
        object.__setattr__(self, "reseed", normalize_digit(self.reseed))


@dataclass(frozen=True, slots=True, kw_only=True)
class FiveStarTicket(_TicketBase):
    GAME_TYPE: ClassVar[GameType] = GameType.FIVE_STAR

    stars: frozenset[str] = frozenset()

    def __post_init__(self) -> None:
        _TicketBase.__post_init__(self)
        object.__setattr__(self, "stars", normalize_numbers(self.stars))


@dataclass(frozen=True, slots=True, kw_only=True)
class FiveKeyTicket(_TicketBase):
    GAME_TYPE: ClassVar[GameType] = GameType.FIVE_KEY

    key: str | None = None

    def __post_init__(self) -> None:
        _TicketBase.__post_init__(self)
        object.__setattr__(self, "key", normalize_digit(self.key))


type Ticket = SixNumberTicket | FiveStarTicket | FiveKeyTicket


def make_ticket(
    game_type: GameType | str,
    *,
    ticket_id: str,
    numbers: Iterable[str | int],
    draws: Iterable[DrawReference],
    reseed: str | int | None = None,
    stars: Iterable[str | int] = (),
    key: str | int | None = None,
) -> Ticket:
    """Build the ticket variant for ``game_type``, rejecting fields the game does not have."""

    resolved = GameType.parse(game_type)
    star_values = tuple(pad_number(star) for star in stars)
    reseed_value = normalize_digit(reseed)
    key_value = normalize_digit(key)
    common_numbers = frozenset(str(number) for number in numbers)
    draw_refs = tuple(draws)

    if resolved is not GameType.SIX_NUMBER and reseed_value is not None:
        raise StructuralError(f"{resolved} tickets have no reseed number")
    if resolved is not GameType.FIVE_STAR and star_values:
        raise StructuralError(f"{resolved} tickets have no stars")
    if resolved is not GameType.FIVE_KEY and key_value is not None:
        raise StructuralError(f"{resolved} tickets have no key number")

    match resolved:
        case GameType.SIX_NUMBER:
            return SixNumberTicket(
                ticket_id=ticket_id,
                numbers=common_numbers,
                draws=draw_refs,
                reseed=reseed_value,
            )
        case GameType.FIVE_STAR:
            return FiveStarTicket(
                ticket_id=ticket_id,
                numbers=common_numbers,
                draws=draw_refs,
                stars=frozenset(star_values),
            )
        case GameType.FIVE_KEY:
            return FiveKeyTicket(
                ticket_id=ticket_id,
                numbers=common_numbers,
                draws=draw_refs,
                key=key_value,
            )
