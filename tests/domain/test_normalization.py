from __future__ import annotations

from decimal import Decimal

import pytest

from boletipy.domain.model import StructuralError
from boletipy.domain.normalization import (
    format_euro_amount,
    legacy_draw_id_pattern,
    normalize_digit,
    normalize_draw_id,
    normalize_numbers,
    normalize_ordinal,
    pad_number,
    parse_euro_amount,
    split_combination,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("7", "07"), (7, "07"), (" 42 ", "42"), ("007", "07")],
)
def test_pad_number(raw: str | int, expected: str) -> None:
    assert pad_number(raw) == expected


def test_pad_number_rejects_non_digits() -> None:
    with pytest.raises(StructuralError):
        pad_number("x1")


def test_normalize_numbers_ignores_order_and_padding() -> None:
    assert normalize_numbers(["5", "12", "05"]) == frozenset({"05", "12"})


def test_split_combination_compact_and_separated() -> None:
    assert split_combination("050912") == ("05", "09", "12")
    assert split_combination("5 - 9 - 12") == ("05", "09", "12")


def test_split_combination_rejects_odd_compact_strings() -> None:
    with pytest.raises(StructuralError):
        split_combination("05091")


def test_normalize_digit_treats_blank_as_unknown() -> None:
    assert normalize_digit(None) is None
    assert normalize_digit("  ") is None
    assert normalize_digit("03") == "3"
    assert normalize_digit(0) == "0"


@pytest.mark.parametrize("raw", ["12", 10, "x", "-1", -3])
def test_normalize_digit_rejects_anything_but_one_digit(raw: str | int) -> None:
    with pytest.raises(StructuralError, match="single-digit"):
        normalize_digit(raw)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("7", "007"),
        (7, "007"),
        ("045", "045"),
        ("2024/045", "045"),
        ("Sorteo 45", "045"),
    ],
)
def test_normalize_draw_id(raw: str | int, expected: str) -> None:
    assert normalize_draw_id(raw) == expected


def test_normalize_draw_id_prefix_mode_reads_first_run() -> None:
    assert normalize_draw_id("2024/045", prefer_suffix=False) == "2024"


def test_normalize_draw_id_without_digits() -> None:
    with pytest.raises(StructuralError):
        normalize_draw_id("n/a")


def test_legacy_draw_id_pattern() -> None:
    assert legacy_draw_id_pattern("45") == "%/045"


def test_normalize_ordinal() -> None:
    assert normalize_ordinal("1a  Categoria") == "1ª Categoria"
    assert normalize_ordinal("2o (5 Aciertos)") == "2º (5 Aciertos)"


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("1.234,56 €", Decimal("1234.56")),
        ("8,00", Decimal("8.00")),
        ("1.000.000,00 €", Decimal("1000000.00")),
        ("-3,50", Decimal("-3.50")),
    ],
)
def test_parse_euro_amount(text: str, expected: Decimal) -> None:
    assert parse_euro_amount(text) == expected


@pytest.mark.parametrize("text", ["", " € ", "abc", "NaN"])
def test_parse_euro_amount_rejects_unparseable_text(text: str) -> None:
    with pytest.raises(ValueError, match="amount"):
        parse_euro_amount(text)


def test_format_euro_amount() -> None:
    assert format_euro_amount(Decimal("1234.5")) == "1.234,50 €"
    assert format_euro_amount(Decimal("0.005")) == "0,01 €"
    assert format_euro_amount(Decimal(-1000)) == "-1.000,00 €"


@pytest.mark.parametrize(
    "amount",
    [Decimal("0.00"), Decimal("2.00"), Decimal("1234.56"), Decimal("98765432.10")],
)
def test_currency_format_and_parse_round_trip(amount: Decimal) -> None:
    assert parse_euro_amount(format_euro_amount(amount)) == amount


def test_format_rejects_non_finite_amounts() -> None:
    with pytest.raises(ValueError, match="non-finite"):
        format_euro_amount(Decimal("NaN"))
