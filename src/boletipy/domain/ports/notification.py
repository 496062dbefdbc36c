"""Port for handing weekly summaries to a notification or rendering collaborator."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from boletipy.domain.model import WeeklySummary


@runtime_checkable
class SummaryPublisher(Protocol):
    def __call__(self, summary: WeeklySummary) -> None: ...


__all__ = ["SummaryPublisher"]
