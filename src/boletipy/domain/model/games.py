"""Per-game rules: result shapes, draw weekdays and prize vocabularies."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Final

from boletipy.domain.model.enums import GameType

if TYPE_CHECKING:
    from collections.abc import Mapping

MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY, SATURDAY, SUNDAY = range(7)


@dataclass(frozen=True, slots=True)
class GameRules:
    game_type: GameType
    result_size: int
    draw_weekdays: tuple[int, ...]
    categories: tuple[str, ...]  # best tier first
    star_count: int = 0

    def accepts(self, hit_code: str) -> bool:
        return hit_code in self.categories


SIX_NUMBER_RULES: Final = GameRules(
    game_type=GameType.SIX_NUMBER,
    result_size=6,
    draw_weekdays=(MONDAY, THURSDAY, SATURDAY),
    categories=("6+R", "6", "5+C", "5", "4", "3", "R"),
)

FIVE_STAR_RULES: Final = GameRules(
    game_type=GameType.FIVE_STAR,
    result_size=5,
    draw_weekdays=(TUESDAY, FRIDAY),
    categories=(
        "5+2",
        "5+1",
        "5+0",
        "4+2",
        "4+1",
        "4+0",
        "3+2",
        "3+1",
        "3+0",
        "2+2",
        "2+1",
        "2+0",
        "1+2",
        "1+1",
        "0+2",
    ),
    star_count=2,
)

FIVE_KEY_RULES: Final = GameRules(
    game_type=GameType.FIVE_KEY,
    result_size=5,
    draw_weekdays=(SUNDAY,),
    categories=("5+C", "5", "4+C", "4", "3+C", "3", "2+C", "2", "R"),
)

GAME_RULES: Final[Mapping[GameType, GameRules]] = MappingProxyType(
    {
        GameType.SIX_NUMBER: SIX_NUMBER_RULES,
        GameType.FIVE_STAR: FIVE_STAR_RULES,
        GameType.FIVE_KEY: FIVE_KEY_RULES,
    }
)

# Key-only consolation tier of the five-key game; also the supplement added to "+C" tiers.
KEY_ONLY_CATEGORY: Final[str] = "R"
KEY_SUPPLEMENT_SUFFIX: Final[str] = "+C"


def rules_for(game_type: GameType) -> GameRules:
    return GAME_RULES[game_type]
