"""Weekly reconciliation of draws, prize tables and tickets."""

from __future__ import annotations

from .backfill import (
    NOT_PUBLISHED,
    NOT_STORED,
    UNREADABLE,
    BackfillReport,
    DrawCheck,
    WeekBackfill,
)
from .run import ReconciliationRun
from .summary import summarize_week

__all__ = [
    "NOT_PUBLISHED",
    "NOT_STORED",
    "UNREADABLE",
    "BackfillReport",
    "DrawCheck",
    "ReconciliationRun",
    "WeekBackfill",
    "summarize_week",
]
