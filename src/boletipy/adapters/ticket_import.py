"""Read registered tickets from JSON exports.

A file holds either one record or a list of them::

    {
      "id": "P-0001",
      "tipo": "primitiva",
      "combinacion": "051224334149",
      "reintegro": "7",
      "sorteos": [{"sorteo": "2025/031", "fecha": "2025-04-14"}]
    }

``combinacion`` and ``estrellas`` are lists or compact two-digit strings.
"""

from __future__ import annotations

import json
from datetime import date
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from boletipy.domain.model import DrawReference, make_ticket
from boletipy.domain.normalization import split_combination

if TYPE_CHECKING:
    from pathlib import Path

    from boletipy.domain.model import Ticket

log = getLogger(__name__)


def _combination(value: object) -> object:
    if isinstance(value, str):
        return list(split_combination(value))
    if isinstance(value, list):
        return [str(item) for item in value]
    return value


def _digit_text(value: object) -> object:
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        return value.strip() or None
    return value


class TicketImportModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class DrawReferenceRecord(TicketImportModel):
    sorteo: str
    fecha: date

    _normalize_sorteo = field_validator("sorteo", mode="before")(_digit_text)


class TicketRecord(TicketImportModel):
    ticket_id: str = Field(validation_alias=AliasChoices("id", "identificador", "ticket_id"))
    tipo: str
    combinacion: list[str]
    reintegro: str | None = None
    estrellas: list[str] = Field(default_factory=list)
    clave: str | None = None
    sorteos: list[DrawReferenceRecord] = Field(default_factory=list["DrawReferenceRecord"])

    _normalize_combinacion = field_validator("combinacion", "estrellas", mode="before")(
        _combination
    )
    _normalize_digits = field_validator("reintegro", "clave", mode="before")(_digit_text)

    def to_ticket(self) -> Ticket:
        return make_ticket(
            self.tipo,
            ticket_id=self.ticket_id,
            numbers=self.combinacion,
            draws=[
                DrawReference(draw_id=reference.sorteo, draw_date=reference.fecha)
                for reference in self.sorteos
            ],
            reseed=self.reintegro,
            stars=self.estrellas,
            key=self.clave,
        )


_RECORDS = TypeAdapter(list[TicketRecord])


def parse_ticket_records(payload: object) -> list[TicketRecord]:
    records = payload if isinstance(payload, list) else [payload]
    return _RECORDS.validate_python(records)


def load_tickets(path: Path) -> list[Ticket]:
    """Tickets of one JSON file.

    Raises ``pydantic.ValidationError`` for malformed records and ``StructuralError``
    for tickets the games do not allow.
    """

    with path.open(encoding="utf-8") as handle:
        payload = json.load(handle)
    tickets = [record.to_ticket() for record in parse_ticket_records(payload)]
    log.info("Read %s ticket(s) from %s", len(tickets), path)
    return tickets
