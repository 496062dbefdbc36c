"""Domain model for tickets, draw results, prize tables and weekly summaries."""

from __future__ import annotations

from .enums import CheckState, DrawStage, GameType
from .errors import StructuralError
from .games import (
    FIVE_KEY_RULES,
    FIVE_STAR_RULES,
    GAME_RULES,
    KEY_ONLY_CATEGORY,
    KEY_SUPPLEMENT_SUFFIX,
    SIX_NUMBER_RULES,
    GameRules,
    rules_for,
)
from .hits import FiveKeyHits, FiveStarHits, HitDescriptor, SixNumberHits
from .prizes import PrizeOutcome, PrizeTable, PrizeTableEntry
from .results import DrawResult, FiveKeyResult, FiveStarResult, SixNumberResult
from .summary import DrawHeader, GameWeekSummary, PendingDraw, WeeklySummary, WinningLine
from .tickets import (
    DrawReference,
    FiveKeyTicket,
    FiveStarTicket,
    SixNumberTicket,
    Ticket,
    make_ticket,
)

__all__ = [
    "FIVE_KEY_RULES",
    "FIVE_STAR_RULES",
    "GAME_RULES",
    "KEY_ONLY_CATEGORY",
    "KEY_SUPPLEMENT_SUFFIX",
    "SIX_NUMBER_RULES",
    "CheckState",
    "DrawHeader",
    "DrawReference",
    "DrawResult",
    "DrawStage",
    "FiveKeyHits",
    "FiveKeyResult",
    "FiveKeyTicket",
    "FiveStarHits",
    "FiveStarResult",
    "FiveStarTicket",
    "GameRules",
    "GameType",
    "GameWeekSummary",
    "HitDescriptor",
    "PendingDraw",
    "PrizeOutcome",
    "PrizeTable",
    "PrizeTableEntry",
    "SixNumberHits",
    "SixNumberResult",
    "SixNumberTicket",
    "StructuralError",
    "Ticket",
    "WeeklySummary",
    "WinningLine",
    "make_ticket",
    "rules_for",
]
