"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Any

from sqlalchemy import and_, case, delete, exists, func, or_, select
from sqlalchemy.dialects import mysql, postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError

from boletipy.adapters.sqlalchemy.mappings import (
    draw_result_table,
    prize_table_entry_table,
    ticket_draw_table,
    ticket_table,
)
from boletipy.domain.model import (
    DrawReference,
    FiveKeyResult,
    FiveKeyTicket,
    FiveStarResult,
    FiveStarTicket,
    GameType,
    PrizeTableEntry,
    SixNumberResult,
    SixNumberTicket,
    StructuralError,
    make_ticket,
)
from boletipy.domain.normalization import legacy_draw_id_pattern, normalize_draw_id
from boletipy.domain.ports.persistence import StoreError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Mapping, Sequence
    from datetime import date

    from sqlalchemy import ColumnElement, Row, Table
    from sqlalchemy.orm import Session
    from sqlalchemy.sql.expression import ColumnClause

    from boletipy.domain.model import DrawResult, PrizeTable, Ticket

log = getLogger(__name__)

type _Incoming = Mapping[str, ColumnClause[Any]]
type _SetBuilder = Callable[[_Incoming], dict[str, Any]]


def _upsert(
    session: Session,
    table: Table,
    rows: Sequence[dict[str, Any]],
    *,
    conflict: Sequence[str],
    build_set: _SetBuilder,
) -> None:
    """Insert ``rows`` or update them in place when ``conflict`` columns collide.

    ``build_set`` receives the incoming row columns and returns the assignments applied
    to the existing row, in evaluation order.
    """

    if not rows:
        return
    dialect = session.get_bind().dialect.name
    try:
        match dialect:
            case "sqlite" | "postgresql":
                insert = sqlite.insert if dialect == "sqlite" else postgresql.insert
                stmt = insert(table).values(list(rows))
                stmt = stmt.on_conflict_do_update(
                    index_elements=list(conflict),
                    set_=build_set(stmt.excluded),
                )
            case "mysql" | "mariadb":
                stmt = mysql.insert(table).values(list(rows))
                # later assignments see earlier ones, so keep the builder's order
                stmt = stmt.on_duplicate_key_update(list(build_set(stmt.inserted).items()))
            case _:
                raise StoreError(f"Upserts are not supported on {dialect}")
        session.execute(stmt)
    except SQLAlchemyError as exc:
        raise StoreError(f"Could not write {table.name}: {exc}") from exc


def _draw_id_matches(column: ColumnElement[str], draw_id: str) -> ColumnElement[bool]:
    """Match the normalized draw id or a legacy ``YYYY/NNN`` compound key."""

    normalized = normalize_draw_id(draw_id)
    return or_(column == normalized, column.like(legacy_draw_id_pattern(normalized)))


class SqlAlchemyTicketRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: Ticket) -> None:
        row = _ticket_row(entity)
        try:
            self.session.execute(
                delete(ticket_draw_table).where(ticket_draw_table.c.ticket_id == entity.ticket_id)
            )
            _upsert(
                self.session,
                ticket_table,
                [row],
                conflict=("ticket_id",),
                build_set=lambda incoming: {
                    name: incoming[name] for name in row if name != "ticket_id"
                },
            )
            self.session.execute(
                ticket_draw_table.insert(),
                [
                    {
                        "ticket_id": entity.ticket_id,
                        "draw_id": reference.draw_id,
                        "draw_date": reference.draw_date,
                    }
                    for reference in entity.draws
                ],
            )
        except SQLAlchemyError as exc:
            raise StoreError(f"Could not store ticket {entity.ticket_id}: {exc}") from exc

    def get(self, ticket_id: str) -> Ticket | None:
        row = self.session.execute(
            select(ticket_table).where(ticket_table.c.ticket_id == ticket_id)
        ).one_or_none()
        if row is None:
            return None
        return self._load(row)

    def for_draw(self, game_type: GameType, draw_id: str, draw_date: date) -> list[Ticket]:
        stmt = (
            select(ticket_table)
            .where(ticket_table.c.game_type == game_type)
            .where(
                exists()
                .where(ticket_draw_table.c.ticket_id == ticket_table.c.ticket_id)
                .where(ticket_draw_table.c.draw_date == draw_date)
                .where(_draw_id_matches(ticket_draw_table.c.draw_id, draw_id))
            )
            .order_by(ticket_table.c.ticket_id)
        )
        tickets: list[Ticket] = []
        for row in self.session.execute(stmt):
            ticket = self._load(row)
            if ticket is not None:
                tickets.append(ticket)
        return tickets

    def _load(self, row: Row[Any]) -> Ticket | None:
        draws = [
            DrawReference(draw_id=draw_id, draw_date=draw_date)
            for draw_id, draw_date in self.session.execute(
                select(ticket_draw_table.c.draw_id, ticket_draw_table.c.draw_date)
                .where(ticket_draw_table.c.ticket_id == row.ticket_id)
                .order_by(ticket_draw_table.c.draw_date)
            )
        ]
        try:
            return make_ticket(
                row.game_type,
                ticket_id=row.ticket_id,
                numbers=row.numbers,
                draws=draws,
                reseed=row.reseed,
                stars=row.stars or (),
                key=row.key,
            )
        except StructuralError as exc:
            log.warning("Ignoring malformed stored ticket %s: %s", row.ticket_id, exc)
            return None


def _ticket_row(ticket: Ticket) -> dict[str, Any]:
    row: dict[str, Any] = {
        "ticket_id": ticket.ticket_id,
        "game_type": ticket.game_type,
        "numbers": ticket.numbers,
        "reseed": None,
        "stars": None,
        "key": None,
    }
    match ticket:
        case SixNumberTicket():
            row["reseed"] = ticket.reseed
        case FiveStarTicket():
            row["stars"] = ticket.stars
        case FiveKeyTicket():
            row["key"] = ticket.key
    return row


_SUPPLEMENTARY_COLUMNS = ("complement", "reseed", "stars", "bonus_code", "key")


def _result_row(result: DrawResult) -> dict[str, Any]:
    row: dict[str, Any] = {
        "game_type": result.game_type,
        "draw_id": result.draw_id,
        "draw_date": result.draw_date,
        "numbers": result.numbers,
        **dict.fromkeys(_SUPPLEMENTARY_COLUMNS),
    }
    match result:
        case SixNumberResult():
            row["complement"] = result.complement
            row["reseed"] = result.reseed
        case FiveStarResult():
            row["stars"] = result.stars
            row["bonus_code"] = result.bonus_code
        case FiveKeyResult():
            row["key"] = result.key
    return row


def _result_from_row(row: Row[Any]) -> DrawResult | None:
    try:
        match GameType.parse(row.game_type):
            case GameType.SIX_NUMBER:
                return SixNumberResult(
                    draw_id=row.draw_id,
                    draw_date=row.draw_date,
                    numbers=row.numbers,
                    complement=row.complement,
                    reseed=row.reseed,
                )
            case GameType.FIVE_STAR:
                return FiveStarResult(
                    draw_id=row.draw_id,
                    draw_date=row.draw_date,
                    numbers=row.numbers,
                    stars=row.stars,
                    bonus_code=row.bonus_code,
                )
            case GameType.FIVE_KEY:
                return FiveKeyResult(
                    draw_id=row.draw_id,
                    draw_date=row.draw_date,
                    numbers=row.numbers,
                    key=row.key,
                )
    except StructuralError as exc:
        log.warning("Ignoring malformed stored %s draw %s: %s", row.game_type, row.draw_id, exc)
        return None


def _result_assignments(incoming: _Incoming) -> dict[str, Any]:
    """Same draw: keep the numbers and only fill unknown fields. Reused number: replace."""

    table = draw_result_table
    same_draw = table.c.draw_date == incoming["draw_date"]
    assignments: dict[str, Any] = {
        name: case(
            (same_draw, func.coalesce(table.c[name], incoming[name])),
            else_=incoming[name],
        )
        for name in _SUPPLEMENTARY_COLUMNS
    }
    assignments["numbers"] = case((same_draw, table.c.numbers), else_=incoming["numbers"])
    assignments["draw_date"] = incoming["draw_date"]
    return assignments


class SqlAlchemyDrawResultRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def has_result(self, game_type: GameType, draw_date: date) -> bool:
        stmt = select(
            exists()
            .where(draw_result_table.c.game_type == game_type)
            .where(draw_result_table.c.draw_date == draw_date)
        )
        return bool(self.session.execute(stmt).scalar())

    def get_by_date(self, game_type: GameType, draw_date: date) -> DrawResult | None:
        row = self.session.execute(
            select(draw_result_table)
            .where(draw_result_table.c.game_type == game_type)
            .where(draw_result_table.c.draw_date == draw_date)
            .limit(1)
        ).one_or_none()
        return _result_from_row(row) if row is not None else None

    def between(self, game_type: GameType, start: date, end: date) -> list[DrawResult]:
        stmt = (
            select(draw_result_table)
            .where(draw_result_table.c.game_type == game_type)
            .where(draw_result_table.c.draw_date.between(start, end))
            .order_by(draw_result_table.c.draw_date)
        )
        results = (_result_from_row(row) for row in self.session.execute(stmt))
        return [result for result in results if result is not None]

    def upsert_result(self, result: DrawResult) -> None:
        _upsert(
            self.session,
            draw_result_table,
            [_result_row(result)],
            conflict=("game_type", "draw_id"),
            build_set=_result_assignments,
        )


def _prize_row(entry: PrizeTableEntry) -> dict[str, Any]:
    return {
        "game_type": entry.game_type,
        "draw_id": entry.draw_id,
        "hit_code": entry.hit_code,
        "category_label": entry.category_label,
        "amount": entry.amount,
        "amount_text": entry.amount_text,
        "draw_date": entry.draw_date,
    }


_PRIZE_UPDATED_COLUMNS = ("category_label", "amount", "amount_text", "draw_date")


class SqlAlchemyPrizeTableRepository:
    """Prize tiers keyed by (game, draw id, hit code); the last write wins."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def has_prize_table(self, game_type: GameType, draw_id: str, draw_date: date) -> bool:
        table = prize_table_entry_table
        exact = select(
            exists()
            .where(table.c.game_type == game_type)
            .where(table.c.draw_id == normalize_draw_id(draw_id))
            .where(table.c.draw_date == draw_date)
        )
        if self.session.execute(exact).scalar():
            return True
        return bool(
            self.session.execute(
                select(
                    exists()
                    .where(table.c.game_type == game_type)
                    .where(self._legacy_match(draw_id, draw_date))
                )
            ).scalar()
        )

    def prize_table(
        self,
        game_type: GameType,
        draw_id: str,
        draw_date: date | None = None,
    ) -> PrizeTable:
        table = prize_table_entry_table
        normalized = normalize_draw_id(draw_id)
        stmt = select(table).where(table.c.game_type == game_type)
        if draw_date is None:
            stmt = stmt.where(_draw_id_matches(table.c.draw_id, normalized))
        else:
            stmt = stmt.where(
                or_(
                    and_(table.c.draw_id == normalized, table.c.draw_date == draw_date),
                    self._legacy_match(normalized, draw_date),
                )
            )
        entries: dict[str, PrizeTableEntry] = {}
        # exact identifiers come last so they win over legacy rows of the same hit code
        exact_last = case((table.c.draw_id == normalized, 1), else_=0)
        for row in self.session.execute(stmt.order_by(exact_last)):
            entry = self._load(row)
            if entry is not None:
                entries[entry.hit_code] = entry
        return entries

    def upsert_prize_entries(self, entries: Iterable[PrizeTableEntry]) -> None:
        _upsert(
            self.session,
            prize_table_entry_table,
            [_prize_row(entry) for entry in entries],
            conflict=("game_type", "draw_id", "hit_code"),
            build_set=lambda incoming: {name: incoming[name] for name in _PRIZE_UPDATED_COLUMNS},
        )

    @staticmethod
    def _legacy_match(draw_id: str, draw_date: date) -> ColumnElement[bool]:
        """Legacy rows: a compound ``.../NNN`` key, or the bare id stored without a date."""

        table = prize_table_entry_table
        normalized = normalize_draw_id(draw_id)
        undated = table.c.draw_date.is_(None)
        return or_(
            and_(
                table.c.draw_id.like(legacy_draw_id_pattern(normalized)),
                or_(table.c.draw_date == draw_date, undated),
            ),
            and_(table.c.draw_id == normalized, undated),
        )

    @staticmethod
    def _load(row: Row[Any]) -> PrizeTableEntry | None:
        try:
            return PrizeTableEntry(
                game_type=GameType.parse(row.game_type),
                draw_id=row.draw_id,
                hit_code=row.hit_code,
                category_label=row.category_label,
                amount=row.amount,
                amount_text=row.amount_text or "",
                draw_date=row.draw_date,
            )
        except StructuralError as exc:
            log.warning("Ignoring malformed stored prize tier %s: %s", row.hit_code, exc)
            return None


__all__ = [
    "SqlAlchemyDrawResultRepository",
    "SqlAlchemyPrizeTableRepository",
    "SqlAlchemyTicketRepository",
]
