"""Published prize tables and resolved prize outcomes."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from boletipy.domain.model.errors import StructuralError
from boletipy.domain.model.games import rules_for
from boletipy.domain.normalization import format_euro_amount, normalize_draw_id

if TYPE_CHECKING:
    from collections.abc import Mapping
    from datetime import date
    from decimal import Decimal

    from boletipy.domain.model.enums import GameType


@dataclass(frozen=True, slots=True, kw_only=True)
class PrizeTableEntry:
    """One published prize tier of a draw.

    ``amount`` is ``None`` while the tier is listed without a usable figure; the raw
    published text is then kept in ``amount_text``.
    """

    game_type: GameType
    draw_id: str
    hit_code: str
    category_label: str
    amount: Decimal | None
    amount_text: str = ""
    draw_date: date | None = None

    def __post_init__(self) -> None:
        if not rules_for(self.game_type).accepts(self.hit_code):
            raise StructuralError(
                f"Hit code {self.hit_code!r} is not a {self.game_type} prize category"
            )
        object.__setattr__(self, "draw_id", normalize_draw_id(self.draw_id))
        if not self.amount_text and self.amount is not None and self.amount.is_finite():
            object.__setattr__(self, "amount_text", format_euro_amount(self.amount))

    def for_draw(self, draw_id: str, draw_date: date | None) -> PrizeTableEntry:
        return replace(self, draw_id=draw_id, draw_date=draw_date)


type PrizeTable = Mapping[str, PrizeTableEntry]


def _text(amount: Decimal | None) -> str | None:
    if amount is None or not amount.is_finite():
        return None
    return format_euro_amount(amount)


@dataclass(frozen=True, slots=True, kw_only=True)
class PrizeOutcome:
    """Resolved prize for one ticket in one draw.

    ``pending`` means the category is known but its amount is not published yet.
    ``fully_resolved`` is false while any part of the payout is still missing, e.g. a
    five-key ``+C`` tier whose key-only supplement has not been published.
    """

    game_type: GameType
    draw_id: str
    hit_code: str
    category_label: str | None = None
    amount: Decimal | None = None
    supplement: Decimal | None = None
    total: Decimal | None = None
    pending: bool = False
    fully_resolved: bool = True

    @classmethod
    def awaiting_publication(
        cls,
        game_type: GameType,
        draw_id: str,
        hit_code: str,
        category_label: str | None = None,
    ) -> PrizeOutcome:
        return cls(
            game_type=game_type,
            draw_id=draw_id,
            hit_code=hit_code,
            category_label=category_label,
            pending=True,
            fully_resolved=False,
        )

    @property
    def payout(self) -> Decimal | None:
        """Combined total when known, else the category-only amount."""

        return self.total if self.total is not None else self.amount

    @property
    def amount_text(self) -> str | None:
        return _text(self.amount)

    @property
    def supplement_text(self) -> str | None:
        return _text(self.supplement)

    @property
    def total_text(self) -> str | None:
        return _text(self.total)

    @property
    def payout_text(self) -> str | None:
        return _text(self.payout)
