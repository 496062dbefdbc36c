"""SQLAlchemy adapter package for boletipy."""

from __future__ import annotations

from .mappings import create_all_tables, metadata
from .repositories import (
    SqlAlchemyDrawResultRepository,
    SqlAlchemyPrizeTableRepository,
    SqlAlchemyTicketRepository,
)
from .unit_of_work import (
    SqlAlchemyReconciliationUnitOfWork,
    StartupError,
    make_session_factory,
    prepare_engine,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyDrawResultRepository",
    "SqlAlchemyPrizeTableRepository",
    "SqlAlchemyReconciliationUnitOfWork",
    "SqlAlchemyTicketRepository",
    "StartupError",
    "create_all_tables",
    "make_session_factory",
    "metadata",
    "prepare_engine",
    "shutdown",
    "startup",
]
