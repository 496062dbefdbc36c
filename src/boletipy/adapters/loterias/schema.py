"""Pydantic models describing the official results search payloads."""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


def _to_text(value: object) -> object:
    if isinstance(value, int | float):
        return str(value)
    return _blank_to_none(value)


class LoteriasBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class MillionPayload(LoteriasBaseModel):
    combinacion: str | None = None

    _normalize_combinacion = field_validator("combinacion", mode="before")(_blank_to_none)


class PrizeRowPayload(LoteriasBaseModel):
    """One ``escrutinio`` row: a prize tier and what it paid."""

    tipo: str = ""
    categoria: str | None = None
    premio: str | None = None

    _normalize_categoria = field_validator("categoria", mode="before")(_to_text)
    _normalize_premio = field_validator("premio", mode="before")(_to_text)

    @field_validator("tipo", mode="before")
    @classmethod
    def _default_tipo(cls, value: object) -> object:
        return "" if value is None else value


class DrawPayload(LoteriasBaseModel):
    """One entry of the ``buscadorSorteos`` response list."""

    fecha_sorteo: datetime
    numero: str | None = None
    combinacion: str = ""
    estrellas: str | None = None
    millon: MillionPayload | None = None
    escrutinio: list[PrizeRowPayload] = Field(default_factory=list[PrizeRowPayload])

    _normalize_numero = field_validator("numero", mode="before")(_to_text)
    _normalize_estrellas = field_validator("estrellas", mode="before")(_blank_to_none)

    @field_validator("fecha_sorteo", mode="before")
    @classmethod
    def _parse_fecha(cls, value: object) -> object:
        # "2024-03-05 21:00:00" and bare "2024-03-05" both occur
        if isinstance(value, str) and len(value.strip()) == len("YYYY-MM-DD"):
            return f"{value.strip()}T00:00:00"
        return value

    @field_validator("combinacion", mode="before")
    @classmethod
    def _default_combinacion(cls, value: object) -> object:
        return "" if value is None else value

    @property
    def draw_date(self) -> date:
        return self.fecha_sorteo.date()


class SearchResponse(LoteriasBaseModel):
    draws: list[DrawPayload]

    @classmethod
    def from_payload(cls, payload: list[object]) -> SearchResponse:
        """Validate the bare JSON list returned by the service."""

        return cls.model_validate({"draws": payload})
