"""Canonical forms for numbers, draw identifiers, category labels and euro amounts.

Every comparison in the matching layer works on the strings produced here:

* main numbers, complements and stars are two-digit, zero-padded strings (``"07"``),
* single-digit selections (reseed, key) are unpadded digit strings (``"7"``),
* draw identifiers are three-digit strings (``"045"``); legacy compound keys such as
  ``"2024/045"`` reduce to their numeric suffix.

Amounts use the ``es-ES`` convention: ``.`` groups thousands, ``,`` separates the two
decimals and the euro sign trails after a space (``"1.234,56 €"``).
"""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import TYPE_CHECKING, Final

from boletipy.domain.model.errors import StructuralError

if TYPE_CHECKING:
    from collections.abc import Iterable

EURO_SYMBOL: Final[str] = "€"
DRAW_ID_WIDTH: Final[int] = 3
NUMBER_WIDTH: Final[int] = 2

_CENTS = Decimal("0.01")
_DIGITS_RE = re.compile(r"\d+")
_ORDINAL_FEMININE_RE = re.compile(r"\b(\d+)(?:a|ª)(?=\W|$)", re.IGNORECASE)
_ORDINAL_MASCULINE_RE = re.compile(r"\b(\d+)(?:o|º)(?=\W|$)", re.IGNORECASE)
_WHITESPACE_RE = re.compile(r"\s+")


def pad_number(value: str | int) -> str:
    """Return a main-set number as a two-digit string."""

    token = str(value).strip()
    if not token.isdigit():
        raise StructuralError(f"Not a lottery number: {value!r}")
    return str(int(token)).zfill(NUMBER_WIDTH)


def normalize_numbers(values: Iterable[str | int]) -> frozenset[str]:
    return frozenset(pad_number(value) for value in values)


def split_combination(text: str) -> tuple[str, ...]:
    """Split a combination into two-digit numbers.

    Compact strings (``"050912"``) are cut into pairs; anything with separators
    (``"5 - 9 - 12"``) is read as digit runs.
    """

    stripped = text.strip()
    if stripped.isdigit():
        if len(stripped) % NUMBER_WIDTH:
            raise StructuralError(f"Compact combination has odd length: {text!r}")
        return tuple(
            stripped[index : index + NUMBER_WIDTH]
            for index in range(0, len(stripped), NUMBER_WIDTH)
        )
    return tuple(pad_number(run) for run in _DIGITS_RE.findall(stripped))


def normalize_digit(value: str | int | None) -> str | None:
    """Normalize a reseed or key number; blank values mean unknown."""

    if value is None:
        return None
    token = str(value).strip()
    if not token:
        return None
    digit = str(int(token)) if token.isdigit() else ""
    if len(digit) != 1:
        raise StructuralError(f"Not a single-digit selection: {value!r}")
    return digit


def normalize_draw_id(value: str | int, *, prefer_suffix: bool = True) -> str:
    """Return the three-digit form of a draw identifier.

    ``"2024/045"`` becomes ``"045"`` when ``prefer_suffix`` is set (the default);
    otherwise the first digit run wins.
    """

    if isinstance(value, int):
        if value < 0:
            raise StructuralError(f"Negative draw identifier: {value}")
        return str(value).zfill(DRAW_ID_WIDTH)

    token = value.strip()
    if prefer_suffix and "/" in token:
        tail = token.rsplit("/", 1)[1].strip()
        if tail.isdigit():
            return str(int(tail)).zfill(DRAW_ID_WIDTH)
    match = _DIGITS_RE.search(token)
    if match is None:
        raise StructuralError(f"Draw identifier has no digits: {value!r}")
    return str(int(match.group())).zfill(DRAW_ID_WIDTH)


def legacy_draw_id_pattern(draw_id: str | int) -> str:
    """SQL ``LIKE`` pattern matching compound legacy keys ending in the draw number."""

    return f"%/{normalize_draw_id(draw_id)}"


def normalize_ordinal(label: str) -> str:
    """Canonicalize ordinal markers (``1a`` -> ``1ª``, ``2o`` -> ``2º``) and whitespace."""

    text = _ORDINAL_FEMININE_RE.sub(lambda match: f"{match.group(1)}ª", label)
    text = _ORDINAL_MASCULINE_RE.sub(lambda match: f"{match.group(1)}º", text)
    return _WHITESPACE_RE.sub(" ", text).strip()


def parse_euro_amount(text: str) -> Decimal:
    """Parse an ``es-ES`` formatted amount such as ``"1.234,56 €"``.

    Raises ``ValueError`` when the text holds no parseable amount.
    """

    cleaned = _WHITESPACE_RE.sub("", text.replace(EURO_SYMBOL, ""))
    if not cleaned:
        raise ValueError(f"Empty amount: {text!r}")
    cleaned = cleaned.replace(".", "").replace(",", ".")
    try:
        amount = Decimal(cleaned)
    except InvalidOperation as exc:
        raise ValueError(f"Invalid amount: {text!r}") from exc
    if not amount.is_finite():
        raise ValueError(f"Non-finite amount: {text!r}")
    return amount


def format_euro_amount(amount: Decimal) -> str:
    """Format an amount the ``es-ES`` way: ``Decimal("1234.5")`` -> ``"1.234,50 €"``."""

    if not amount.is_finite():
        raise ValueError(f"Cannot format non-finite amount: {amount}")
    quantized = amount.quantize(_CENTS, rounding=ROUND_HALF_UP)
    sign = "-" if quantized < 0 else ""
    integral, _, fraction = f"{abs(quantized):.2f}".partition(".")
    groups: list[str] = []
    while len(integral) > 3:  # noqa: PLR2004
        groups.insert(0, integral[-3:])
        integral = integral[:-3]
    groups.insert(0, integral)
    return f"{sign}{'.'.join(groups)},{fraction} {EURO_SYMBOL}"
