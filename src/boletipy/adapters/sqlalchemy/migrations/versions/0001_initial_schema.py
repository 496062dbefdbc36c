"""Initial schema: tickets, draw results and prize tables.

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-12 09:00:00
"""

from __future__ import annotations

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

revision: str = "0001_initial_schema"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

_GAME_TYPE = sa.Enum("SIX_NUMBER", "FIVE_STAR", "FIVE_KEY", name="gametype", native_enum=False)


def upgrade() -> None:
    op.create_table(
        "draw_result",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("game_type", _GAME_TYPE, nullable=False),
        sa.Column("draw_id", sa.String(length=16), nullable=False),
        sa.Column("draw_date", sa.Date(), nullable=False),
        sa.Column("numbers", sa.String(length=32), nullable=False),
        sa.Column("complement", sa.String(length=2), nullable=True),
        sa.Column("reseed", sa.String(length=1), nullable=True),
        sa.Column("stars", sa.String(length=8), nullable=True),
        sa.Column("bonus_code", sa.String(length=32), nullable=True),
        sa.Column("key", sa.String(length=2), nullable=True),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_draw_result")),
        sa.UniqueConstraint(
            "game_type",
            "draw_id",
            name=op.f("uq_draw_result_draw_result_game_type"),
        ),
    )
    op.create_index(
        "ix_draw_result_game_type_draw_date",
        "draw_result",
        ["game_type", "draw_date"],
    )

    op.create_table(
        "prize_table_entry",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("game_type", _GAME_TYPE, nullable=False),
        sa.Column("draw_id", sa.String(length=16), nullable=False),
        sa.Column("hit_code", sa.String(length=8), nullable=False),
        sa.Column("category_label", sa.String(length=64), nullable=False),
        sa.Column("amount", sa.Numeric(precision=14, scale=2), nullable=True),
        sa.Column("amount_text", sa.String(length=64), nullable=False),
        sa.Column("draw_date", sa.Date(), nullable=True),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_prize_table_entry")),
        sa.UniqueConstraint(
            "game_type",
            "draw_id",
            "hit_code",
            name=op.f("uq_prize_table_entry_prize_table_entry_game_type"),
        ),
    )

    op.create_table(
        "ticket",
        sa.Column("ticket_id", sa.String(length=64), nullable=False),
        sa.Column("game_type", _GAME_TYPE, nullable=False),
        sa.Column("numbers", sa.String(length=64), nullable=False),
        sa.Column("reseed", sa.String(length=1), nullable=True),
        sa.Column("stars", sa.String(length=16), nullable=True),
        sa.Column("key", sa.String(length=2), nullable=True),
        sa.PrimaryKeyConstraint("ticket_id", name=op.f("pk_ticket")),
    )

    op.create_table(
        "ticket_draw",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("ticket_id", sa.String(length=64), nullable=False),
        sa.Column("draw_id", sa.String(length=16), nullable=False),
        sa.Column("draw_date", sa.Date(), nullable=False),
        sa.ForeignKeyConstraint(
            ["ticket_id"],
            ["ticket.ticket_id"],
            name=op.f("fk_ticket_draw_ticket_draw_ticket_id_ticket"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_ticket_draw")),
        sa.UniqueConstraint(
            "ticket_id",
            "draw_id",
            "draw_date",
            name=op.f("uq_ticket_draw_ticket_draw_ticket_id"),
        ),
    )
    op.create_index(
        "ix_ticket_draw_draw_date_draw_id",
        "ticket_draw",
        ["draw_date", "draw_id"],
    )


def downgrade() -> None:
    op.drop_index("ix_ticket_draw_draw_date_draw_id", table_name="ticket_draw")
    op.drop_table("ticket_draw")
    op.drop_table("ticket")
    op.drop_table("prize_table_entry")
    op.drop_index("ix_draw_result_game_type_draw_date", table_name="draw_result")
    op.drop_table("draw_result")
