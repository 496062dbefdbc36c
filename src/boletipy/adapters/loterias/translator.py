"""Translate official results payloads into domain draw results and prize tiers."""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from logging import getLogger
from types import MappingProxyType
from typing import TYPE_CHECKING

from boletipy.domain.model import (
    FiveKeyResult,
    FiveStarResult,
    GameType,
    PrizeTableEntry,
    SixNumberResult,
    StructuralError,
    rules_for,
)
from boletipy.domain.normalization import (
    normalize_draw_id,
    normalize_ordinal,
    pad_number,
    parse_euro_amount,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from boletipy.domain.model import DrawResult

    from .schema import DrawPayload, PrizeRowPayload

log = getLogger(__name__)

_DIGITS_RE = re.compile(r"\d{1,2}")
_PARENS_RE = re.compile(r"\(([^)]+)\)")
_COMPLEMENT_RE = re.compile(r"C\s*\(?\s*(\d{1,2})\s*\)?", re.IGNORECASE)
_RESEED_RE = re.compile(r"R\s*\(?\s*(\d)\s*\)?", re.IGNORECASE)
_KEY_RE = re.compile(r"R\s*\(?\s*(\d{1,2})\s*\)?", re.IGNORECASE)
_KEY_LABEL_RE = re.compile(r"Clave\D*(\d{1,2})", re.IGNORECASE)
_PLUS_RE = re.compile(r"(\d+)\+(\d+)")
_ONLY_HITS_RE = re.compile(r"(\d+)\s*aciertos?", re.IGNORECASE)
_HITS_WORD_RE = re.compile(r"aciertos?", re.IGNORECASE)
_RESEED_WORD_RE = re.compile(r"reintegro", re.IGNORECASE)
_COMPLEMENT_WORD_RE = re.compile(r"complementario", re.IGNORECASE)
_COMPLEMENT_MARK_RE = re.compile(r"\+?C", re.IGNORECASE)
_WHITESPACE_RE = re.compile(r"\s+")

_DISCARDED_ROW_MARKERS = ("recaud", "destinado", "total")

# the five-key search payload numbers its tiers instead of labelling them consistently
FIVE_KEY_CATEGORIES: Mapping[int, tuple[str, str]] = MappingProxyType(
    {
        1: ("1ª (5 Aciertos+C)", "5+C"),
        2: ("2ª (5 Aciertos)", "5"),
        3: ("3ª (4 Aciertos+C)", "4+C"),
        4: ("4ª (4 Aciertos)", "4"),
        5: ("5ª (3 Aciertos+C)", "3+C"),
        6: ("6ª (3 Aciertos)", "3"),
        7: ("7ª (2 Aciertos+C)", "2+C"),
        8: ("8ª (2 Aciertos)", "2"),
        9: ("Reintegro", "R"),
    }
)


# --- results -----------------------------------------------------------------


def _numbers(text: str, count: int) -> list[str]:
    return [pad_number(raw) for raw in _DIGITS_RE.findall(text)[:count]]


def _six_number_result(payload: DrawPayload, draw_id: str) -> SixNumberResult:
    combination = payload.combinacion
    head = re.split(r"C\s*\(|R\s*\(|Reintegro", combination, maxsplit=1, flags=re.IGNORECASE)[0]
    complement = _COMPLEMENT_RE.search(combination)
    reseed = _RESEED_RE.search(combination)
    return SixNumberResult(
        draw_id=draw_id,
        draw_date=payload.draw_date,
        numbers=frozenset(_numbers(head, 6)),
        complement=complement.group(1) if complement else None,
        reseed=reseed.group(1) if reseed else None,
    )


def _five_star_result(payload: DrawPayload, draw_id: str) -> FiveStarResult:
    runs = _DIGITS_RE.findall(payload.combinacion)
    star_runs = _DIGITS_RE.findall(payload.estrellas) if payload.estrellas else runs[5:]
    return FiveStarResult(
        draw_id=draw_id,
        draw_date=payload.draw_date,
        numbers=frozenset(pad_number(raw) for raw in runs[:5]),
        stars=frozenset(pad_number(raw) for raw in star_runs) if star_runs else None,
        bonus_code=payload.millon.combinacion if payload.millon else None,
    )


def _five_key_result(payload: DrawPayload, draw_id: str) -> FiveKeyResult:
    combination = payload.combinacion
    head = re.split(r"R|Reintegro", combination, maxsplit=1, flags=re.IGNORECASE)[0]
    key = _KEY_RE.search(combination) or _KEY_LABEL_RE.search(combination)
    return FiveKeyResult(
        draw_id=draw_id,
        draw_date=payload.draw_date,
        numbers=frozenset(_numbers(head, 5)),
        key=key.group(1) if key else None,
    )


def parse_draw_result(game_type: GameType, payload: DrawPayload) -> DrawResult | None:
    """Build the domain result of one search entry, or ``None`` when it is incomplete."""

    if payload.numero is None:
        log.warning(f"{game_type} draw of {payload.draw_date} has no draw number")
        return None
    try:
        draw_id = normalize_draw_id(payload.numero)
        match game_type:
            case GameType.SIX_NUMBER:
                return _six_number_result(payload, draw_id)
            case GameType.FIVE_STAR:
                return _five_star_result(payload, draw_id)
            case GameType.FIVE_KEY:
                return _five_key_result(payload, draw_id)
    except StructuralError as exc:
        log.warning(f"Ignoring incomplete {game_type} result of {payload.draw_date}: {exc}")
        return None


# --- prize tiers -------------------------------------------------------------


def _five_star_hit_code(label: str) -> str | None:
    inside = _PARENS_RE.search(label)
    if inside:
        return _WHITESPACE_RE.sub("", inside.group(1))
    plus = _PLUS_RE.search(_WHITESPACE_RE.sub("", label))
    if plus:
        return f"{plus.group(1)}+{plus.group(2)}"
    only = _ONLY_HITS_RE.search(label)
    return only.group(1) if only else None


def _reseed_aware_hit_code(label: str) -> str | None:
    """``"Especial (6 Aciertos + R)"`` -> ``6+R``, ``"2ª (5 Aciertos+C)"`` -> ``5+C``."""

    lowered = label.lower()
    if "reintegro" in lowered and "acierto" not in lowered and "(" not in lowered:
        return "R"
    inside = _PARENS_RE.search(label)
    if inside is None:
        return None
    code = _WHITESPACE_RE.sub("", _HITS_WORD_RE.sub("", inside.group(1)))
    code = _COMPLEMENT_WORD_RE.sub("C", code)
    code = _COMPLEMENT_MARK_RE.sub("+C", _RESEED_WORD_RE.sub("R", code))
    return code.replace("++", "+")


def _label_and_code(game_type: GameType, row: PrizeRowPayload) -> tuple[str, str | None]:
    label = normalize_ordinal(row.tipo)
    if game_type is GameType.FIVE_KEY and row.categoria and row.categoria.isdigit():
        known = FIVE_KEY_CATEGORIES.get(int(row.categoria))
        if known is not None:
            return known
    if game_type is GameType.FIVE_STAR:
        return label, _five_star_hit_code(label)
    return label, _reseed_aware_hit_code(label)


def parse_prize_amount(text: str | None) -> Decimal | None:
    """Read a published amount, either machine (``"1234.5"``) or es-ES (``"1.234,50 €"``)."""

    if text is None:
        return None
    try:
        if "," in text:
            return parse_euro_amount(text)
        amount = Decimal(text.replace("€", "").strip())
    except (ValueError, InvalidOperation):
        return None
    return amount if amount.is_finite() else None


def parse_prize_entries(game_type: GameType, payload: DrawPayload) -> list[PrizeTableEntry]:
    """Prize tiers of one search entry, keyed by the hit codes the matcher produces."""

    if payload.numero is None:
        log.warning(f"{game_type} prize table of {payload.draw_date} has no draw number")
        return []
    draw_id = normalize_draw_id(payload.numero)
    rules = rules_for(game_type)
    entries: dict[str, PrizeTableEntry] = {}
    for row in payload.escrutinio:
        lowered = row.tipo.lower()
        if any(marker in lowered for marker in _DISCARDED_ROW_MARKERS):
            continue
        label, code = _label_and_code(game_type, row)
        if code is None or not rules.accepts(code):
            log.debug(f"Skipping {game_type} prize row {row.tipo!r}")
            continue
        amount = parse_prize_amount(row.premio)
        entries[code] = PrizeTableEntry(
            game_type=game_type,
            draw_id=draw_id,
            hit_code=code,
            category_label=label,
            amount=amount,
            amount_text="" if amount is not None else (row.premio or ""),
            draw_date=payload.draw_date,
        )
    return list(entries.values())
