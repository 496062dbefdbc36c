"""Hit descriptors: what a ticket matched in one draw, and the prize category it implies."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from boletipy.domain.model.enums import GameType
from boletipy.domain.model.errors import StructuralError
from boletipy.domain.model.games import KEY_ONLY_CATEGORY, KEY_SUPPLEMENT_SUFFIX, rules_for

_COMPLEMENT_TIER = 5


def _check_count(value: int, upper: int, what: str) -> None:
    if not 0 <= value <= upper:
        raise StructuralError(f"{what} must be within 0..{upper}, got {value}")


@dataclass(frozen=True, slots=True)
class SixNumberHits:
    GAME_TYPE: ClassVar[GameType] = GameType.SIX_NUMBER

    numbers_matched: int
    complement_matched: bool = False
    reseed_matched: bool = False

    def __post_init__(self) -> None:
        _check_count(self.numbers_matched, rules_for(self.GAME_TYPE).result_size, "Numbers")

    @property
    def code(self) -> str | None:
        matched = self.numbers_matched
        if matched == 6 and self.reseed_matched:  # noqa: PLR2004
            return "6+R"
        if matched == 6:  # noqa: PLR2004
            return "6"
        if matched == _COMPLEMENT_TIER:
            return "5+C" if self.complement_matched else "5"
        if matched in {3, 4}:
            return str(matched)
        if self.reseed_matched:
            return "R"
        return None

    @property
    def category(self) -> str | None:
        return self.code


@dataclass(frozen=True, slots=True)
class FiveStarHits:
    GAME_TYPE: ClassVar[GameType] = GameType.FIVE_STAR

    numbers_matched: int
    stars_matched: int = 0

    def __post_init__(self) -> None:
        rules = rules_for(self.GAME_TYPE)
        _check_count(self.numbers_matched, rules.result_size, "Numbers")
        _check_count(self.stars_matched, rules.star_count, "Stars")

    @property
    def code(self) -> str | None:
        if not self.numbers_matched and not self.stars_matched:
            return None
        return f"{self.numbers_matched}+{self.stars_matched}"

    @property
    def category(self) -> str | None:
        code = self.code
        if code is None or not rules_for(self.GAME_TYPE).accepts(code):
            return None
        return code


@dataclass(frozen=True, slots=True)
class FiveKeyHits:
    GAME_TYPE: ClassVar[GameType] = GameType.FIVE_KEY

    numbers_matched: int
    key_matched: bool = False

    def __post_init__(self) -> None:
        _check_count(self.numbers_matched, rules_for(self.GAME_TYPE).result_size, "Numbers")

    @property
    def code(self) -> str | None:
        if not self.numbers_matched and not self.key_matched:
            return None
        if self.key_matched and self.numbers_matched < 2:  # noqa: PLR2004
            return KEY_ONLY_CATEGORY
        return f"{self.numbers_matched}{KEY_SUPPLEMENT_SUFFIX if self.key_matched else ''}"

    @property
    def category(self) -> str | None:
        code = self.code
        if code is None or not rules_for(self.GAME_TYPE).accepts(code):
            return None
        return code


type HitDescriptor = SixNumberHits | FiveStarHits | FiveKeyHits
