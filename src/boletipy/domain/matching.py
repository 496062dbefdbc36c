"""Match evaluators: compare a ticket with a draw result and describe the hits.

All evaluators are pure. They only fail on structural problems, i.e. when the ticket
and the result belong to different games.
"""

from __future__ import annotations

from functools import singledispatch

from boletipy.domain.model import (
    DrawResult,
    FiveKeyHits,
    FiveKeyResult,
    FiveKeyTicket,
    FiveStarHits,
    FiveStarResult,
    FiveStarTicket,
    HitDescriptor,
    SixNumberHits,
    SixNumberResult,
    SixNumberTicket,
    StructuralError,
    Ticket,
)

_COMPLEMENT_TIER = 5


def evaluate_six_number(ticket: SixNumberTicket, result: SixNumberResult) -> SixNumberHits:
    matched = len(ticket.numbers & result.numbers)
    # the complement only counts for tickets with exactly five numbers matched
    complement = (
        matched == _COMPLEMENT_TIER
        and result.complement is not None
        and result.complement in ticket.numbers
    )
    reseed = ticket.reseed is not None and ticket.reseed == result.reseed
    return SixNumberHits(
        numbers_matched=matched,
        complement_matched=complement,
        reseed_matched=reseed,
    )


def evaluate_five_star(ticket: FiveStarTicket, result: FiveStarResult) -> FiveStarHits:
    stars = len(ticket.stars & result.stars) if result.stars is not None else 0
    return FiveStarHits(
        numbers_matched=len(ticket.numbers & result.numbers),
        stars_matched=stars,
    )


def evaluate_five_key(ticket: FiveKeyTicket, result: FiveKeyResult) -> FiveKeyHits:
    key = ticket.key is not None and ticket.key == result.key
    return FiveKeyHits(
        numbers_matched=len(ticket.numbers & result.numbers),
        key_matched=key,
    )


@singledispatch
def _evaluate(ticket: object, result: DrawResult) -> HitDescriptor:
    raise StructuralError(f"Unsupported ticket type: {type(ticket).__name__}")


@_evaluate.register
def _(ticket: SixNumberTicket, result: DrawResult) -> HitDescriptor:
    if not isinstance(result, SixNumberResult):
        raise _mismatch(ticket, result)
    return evaluate_six_number(ticket, result)


@_evaluate.register
def _(ticket: FiveStarTicket, result: DrawResult) -> HitDescriptor:
    if not isinstance(result, FiveStarResult):
        raise _mismatch(ticket, result)
    return evaluate_five_star(ticket, result)


@_evaluate.register
def _(ticket: FiveKeyTicket, result: DrawResult) -> HitDescriptor:
    if not isinstance(result, FiveKeyResult):
        raise _mismatch(ticket, result)
    return evaluate_five_key(ticket, result)


def _mismatch(ticket: Ticket, result: object) -> StructuralError:
    other = getattr(result, "game_type", type(result).__name__)
    return StructuralError(
        f"Ticket {ticket.ticket_id} is a {ticket.game_type} ticket, result is {other}"
    )


def evaluate(ticket: Ticket, result: DrawResult) -> HitDescriptor:
    """Dispatch to the evaluator of the ticket's game."""

    return _evaluate(ticket, result)
