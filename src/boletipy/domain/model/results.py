"""Official draw results, one closed variant per game type."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from boletipy.domain.model.enums import GameType
from boletipy.domain.model.errors import StructuralError
from boletipy.domain.model.games import rules_for
from boletipy.domain.normalization import (
    normalize_digit,
    normalize_draw_id,
    normalize_numbers,
    pad_number,
)

if TYPE_CHECKING:
    from datetime import date


@dataclass(frozen=True, slots=True, kw_only=True)
class _DrawResultBase:
    GAME_TYPE: ClassVar[GameType]

    draw_id: str
    draw_date: date
    numbers: frozenset[str]

    def __post_init__(self) -> None:
        rules = rules_for(self.GAME_TYPE)
        numbers = normalize_numbers(self.numbers)
        if len(numbers) != rules.result_size:
            raise StructuralError(
                f"{self.GAME_TYPE} result needs {rules.result_size} distinct numbers, "
                f"got {len(numbers)}"
            )
        object.__setattr__(self, "draw_id", normalize_draw_id(self.draw_id))
        object.__setattr__(self, "numbers", numbers)

    @property
    def game_type(self) -> GameType:
        return self.GAME_TYPE


@dataclass(frozen=True, slots=True, kw_only=True)
class SixNumberResult(_DrawResultBase):
    GAME_TYPE: ClassVar[GameType] = GameType.SIX_NUMBER

    complement: str | None = None
    reseed: str | None = None

    def __post_init__(self) -> None:
        _DrawResultBase.__post_init__(self)
        if self.complement is not None:
            object.__setattr__(self, "complement", pad_number(self.complement))
        object.__setattr__(self, "reseed", normalize_digit(self.reseed))


@dataclass(frozen=True, slots=True, kw_only=True)
class FiveStarResult(_DrawResultBase):
    GAME_TYPE: ClassVar[GameType] = GameType.FIVE_STAR

    stars: frozenset[str] | None = None
    bonus_code: str | None = None

    def __post_init__(self) -> None:
        _DrawResultBase.__post_init__(self)
        rules = rules_for(self.GAME_TYPE)
        if self.stars is not None:
            stars = normalize_numbers(self.stars)
            if len(stars) != rules.star_count:
                raise StructuralError(
                    f"{self.GAME_TYPE} result needs {rules.star_count} distinct stars, "
                    f"got {len(stars)}"
                )
            object.__setattr__(self, "stars", stars)
        bonus = self.bonus_code.strip() if self.bonus_code else None
        object.__setattr__(self, "bonus_code", bonus or None)


@dataclass(frozen=True, slots=True, kw_only=True)
class FiveKeyResult(_DrawResultBase):
    GAME_TYPE: ClassVar[GameType] = GameType.FIVE_KEY

    key: str | None = None

    def __post_init__(self) -> None:
        _DrawResultBase.__post_init__(self)
        object.__setattr__(self, "key", normalize_digit(self.key))


type DrawResult = SixNumberResult | FiveStarResult | FiveKeyResult
