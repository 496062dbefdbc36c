"""Monday-anchored reconciliation weeks, draw schedules and the publication gate."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, date, datetime, time, timedelta, tzinfo
from typing import TYPE_CHECKING, Protocol

from boletipy.domain.model import rules_for

if TYPE_CHECKING:
    from collections.abc import Iterator

    from boletipy.domain.model import GameType


class Clock(Protocol):
    def __call__(self) -> datetime: ...


def utcnow() -> datetime:
    return datetime.now(UTC)


def monday_of(day: date) -> date:
    return day - timedelta(days=day.weekday())


@dataclass(frozen=True, slots=True)
class ReconciliationWeek:
    """The seven days starting on ``monday``."""

    monday: date

    def __post_init__(self) -> None:
        if self.monday.weekday() != 0:
            raise ValueError(f"Reconciliation weeks start on a Monday, got {self.monday}")

    @classmethod
    def containing(cls, day: date) -> ReconciliationWeek:
        return cls(monday_of(day))

    @property
    def sunday(self) -> date:
        return self.monday + timedelta(days=6)

    def draw_dates(self, game_type: GameType) -> tuple[date, ...]:
        """Dates of the game's scheduled draws inside the week, in order."""

        return tuple(
            self.monday + timedelta(days=weekday)
            for weekday in rules_for(game_type).draw_weekdays
        )

    def __contains__(self, day: object) -> bool:
        return isinstance(day, date) and self.monday <= day <= self.sunday


def weeks_between(start: date, end: date) -> Iterator[ReconciliationWeek]:
    """Yield every week overlapping ``start``..``end`` (inclusive)."""

    if start > end:
        raise ValueError("Week range start must not be after its end")
    monday = monday_of(start)
    while monday <= end:
        yield ReconciliationWeek(monday)
        monday += timedelta(days=7)


@dataclass(frozen=True, slots=True)
class PublicationGate:
    """Official results are not expected before ``publication_time`` on the draw day."""

    timezone: tzinfo
    publication_time: time = time(22, 0)

    def opens_at(self, draw_date: date) -> datetime:
        return datetime.combine(draw_date, self.publication_time, tzinfo=self.timezone)

    def is_open(self, draw_date: date, *, clock: Clock = utcnow) -> bool:
        now = clock()
        if now.tzinfo is None:
            now = now.replace(tzinfo=UTC)
        return now >= self.opens_at(draw_date)


__all__ = [
    "Clock",
    "PublicationGate",
    "ReconciliationWeek",
    "monday_of",
    "utcnow",
    "weeks_between",
]
