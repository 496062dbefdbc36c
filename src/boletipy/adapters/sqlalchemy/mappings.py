"""SQLAlchemy table metadata for stored tickets, draw results and prize tables."""

from __future__ import annotations

import logging
import uuid
from typing import TYPE_CHECKING

from sqlalchemy import (
    Column,
    Date,
    Dialect,
    Enum,
    ForeignKey,
    Index,
    MetaData,
    Numeric,
    String,
    Table,
    TypeDecorator,
    UniqueConstraint,
    Uuid,
)

from boletipy.domain.model import GameType

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)

UUIDColumnType = Uuid[uuid.UUID]


class NumberSetType(TypeDecorator[frozenset[str]]):
    """Sets of two-digit numbers stored as a sorted comma-joined string (``"03,17,42"``)."""

    impl = String
    cache_ok = True

    def process_bind_param(self, value: frozenset[str] | None, dialect: Dialect) -> str | None:
        _ = dialect
        if value is None:
            return None
        return ",".join(sorted(value))

    def process_result_value(self, value: str | None, dialect: Dialect) -> frozenset[str] | None:
        _ = dialect
        if value is None:
            return None
        return frozenset(item.strip() for item in value.split(",") if item.strip())


metadata = MetaData(
    naming_convention={
        "ix": "ix_%(column_0_label)s",
        "uq": "uq_%(table_name)s_%(column_0_label)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
        "pk": "pk_%(table_name)s",
    }
)

# Core tables -----------------------------------------------------------------

draw_result_table = Table(
    "draw_result",
    metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("game_type", Enum(GameType, native_enum=False), nullable=False),
    # text on purpose: legacy rows hold compound keys such as "2024/045"
    Column("draw_id", String(16), nullable=False),
    Column("draw_date", Date, nullable=False),
    Column("numbers", NumberSetType(32), nullable=False),
    Column("complement", String(2), nullable=True),
    Column("reseed", String(1), nullable=True),
    Column("stars", NumberSetType(8), nullable=True),
    Column("bonus_code", String(32), nullable=True),
    Column("key", String(2), nullable=True),
    UniqueConstraint("game_type", "draw_id"),
    Index("ix_draw_result_game_type_draw_date", "game_type", "draw_date"),
)

prize_table_entry_table = Table(
    "prize_table_entry",
    metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("game_type", Enum(GameType, native_enum=False), nullable=False),
    Column("draw_id", String(16), nullable=False),
    Column("hit_code", String(8), nullable=False),
    Column("category_label", String(64), nullable=False),
    Column("amount", Numeric(14, 2), nullable=True),
    Column("amount_text", String(64), nullable=False, default=""),
    Column("draw_date", Date, nullable=True),
    UniqueConstraint("game_type", "draw_id", "hit_code"),
)

ticket_table = Table(
    "ticket",
    metadata,
    Column("ticket_id", String(64), primary_key=True),
    Column("game_type", Enum(GameType, native_enum=False), nullable=False),
    Column("numbers", NumberSetType(64), nullable=False),
    Column("reseed", String(1), nullable=True),
    Column("stars", NumberSetType(16), nullable=True),
    Column("key", String(2), nullable=True),
)

ticket_draw_table = Table(
    "ticket_draw",
    metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column(
        "ticket_id",
        String(64),
        ForeignKey("ticket.ticket_id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("draw_id", String(16), nullable=False),
    Column("draw_date", Date, nullable=False),
    UniqueConstraint("ticket_id", "draw_id", "draw_date"),
    Index("ix_ticket_draw_draw_date_draw_id", "draw_date", "draw_id"),
)


def create_all_tables(engine: Engine) -> None:
    """Create every table directly, bypassing migrations (test fixtures only)."""

    log.info("Creating all tables")
    metadata.create_all(engine)


__all__ = [
    "NumberSetType",
    "create_all_tables",
    "draw_result_table",
    "metadata",
    "prize_table_entry_table",
    "ticket_draw_table",
    "ticket_table",
]
