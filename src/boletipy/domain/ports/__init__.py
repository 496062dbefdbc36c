"""Domain port definitions for adapters."""

from __future__ import annotations

from .fetching import DrawResultFetcher, PrizeTableFetcher
from .notification import SummaryPublisher
from .persistence import (
    DrawResultRepository,
    PrizeTableRepository,
    Repository,
    StoreError,
    TicketRepository,
)
from .unit_of_work import (
    ReconciliationRepositories,
    ReconciliationUnitOfWork,
    RepositoryCollection,
    UnitOfWork,
)

__all__ = [
    "DrawResultFetcher",
    "DrawResultRepository",
    "PrizeTableFetcher",
    "PrizeTableRepository",
    "ReconciliationRepositories",
    "ReconciliationUnitOfWork",
    "Repository",
    "RepositoryCollection",
    "StoreError",
    "SummaryPublisher",
    "TicketRepository",
    "UnitOfWork",
]
