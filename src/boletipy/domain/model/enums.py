"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum

from boletipy.domain.model.errors import StructuralError


class GameType(StrEnum):
    SIX_NUMBER = "primitiva"
    FIVE_STAR = "euromillones"
    FIVE_KEY = "gordo"

    @classmethod
    def parse(cls, value: str | GameType) -> GameType:
        """Accept either the member name (``SIX_NUMBER``) or the stored value (``primitiva``)."""

        if isinstance(value, GameType):
            return value
        token = str(value).strip()
        try:
            return cls(token.lower())
        except ValueError:
            pass
        try:
            return cls[token.upper()]
        except KeyError:
            raise StructuralError(f"Unknown game type: {value!r}") from None


class DrawStage(StrEnum):
    RESULT = "result"
    PRIZES = "prizes"


class CheckState(StrEnum):
    """States a draw moves through during weekly reconciliation."""

    UNCHECKED = "unchecked"
    PRESENT = "present"
    STORED = "stored"
    PENDING = "pending"
    SKIPPED = "skipped"
    DONE = "done"
