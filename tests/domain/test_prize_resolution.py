from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING

import pytest

from boletipy.domain.matching import evaluate
from boletipy.domain.model import (
    FiveKeyHits,
    FiveStarHits,
    GameType,
    SixNumberHits,
    StructuralError,
)
from boletipy.domain.prize_resolution import PrizeResolver, PrizeTableCache
from tests.helpers.draws import FIVE_KEY_SUNDAY, five_key_result, prize_table, ticket_for

if TYPE_CHECKING:
    from boletipy.domain.model import PrizeTable


class RecordingSource:
    def __init__(self, tables: dict[tuple[GameType, str, date | None], PrizeTable]) -> None:
        self.tables = tables
        self.calls: list[tuple[GameType, str, date | None]] = []

    def __call__(
        self,
        game_type: GameType,
        draw_id: str,
        draw_date: date | None = None,
    ) -> PrizeTable:
        self.calls.append((game_type, draw_id, draw_date))
        return self.tables.get((game_type, draw_id, draw_date), {})


def _resolver(
    game_type: GameType,
    amounts: dict[str, str | None],
    draw_id: str = "016",
) -> tuple[PrizeResolver, RecordingSource]:
    source = RecordingSource({(game_type, draw_id, None): prize_table(game_type, draw_id, amounts)})
    return PrizeResolver(source=source), source


def test_five_key_plus_c_adds_key_only_supplement() -> None:
    resolver, _ = _resolver(GameType.FIVE_KEY, {"2+C": "8.00", "R": "2.00"})

    outcome = resolver.resolve(
        GameType.FIVE_KEY, "16", FiveKeyHits(numbers_matched=2, key_matched=True)
    )

    assert outcome is not None
    assert outcome.hit_code == "2+C"
    assert outcome.amount == Decimal("8.00")
    assert outcome.supplement == Decimal("2.00")
    assert outcome.total == Decimal("10.00")
    assert outcome.payout_text == "10,00 €"
    assert outcome.fully_resolved
    assert not outcome.pending


def test_five_key_ticket_resolves_end_to_end() -> None:
    ticket = ticket_for(
        GameType.FIVE_KEY,
        numbers=("10", "20", "30"),
        key="7",
        draws=[("016", FIVE_KEY_SUNDAY)],
    )
    result = five_key_result(numbers=("10", "20", "99", "98", "97"), key="7")
    resolver, _ = _resolver(GameType.FIVE_KEY, {"2+C": "8.00", "R": "2.00"})

    hits = evaluate(ticket, result)
    outcome = resolver.resolve(GameType.FIVE_KEY, result.draw_id, hits)

    assert hits == FiveKeyHits(numbers_matched=2, key_matched=True)
    assert outcome is not None
    assert outcome.hit_code == "2+C"
    assert outcome.total == Decimal("10.00")


def test_five_key_plus_c_without_key_only_tier_is_partially_resolved() -> None:
    resolver, _ = _resolver(GameType.FIVE_KEY, {"2+C": "8.00"})

    outcome = resolver.resolve(
        GameType.FIVE_KEY, "016", FiveKeyHits(numbers_matched=2, key_matched=True)
    )

    assert outcome is not None
    assert outcome.amount == Decimal("8.00")
    assert outcome.total is None
    assert outcome.payout == Decimal("8.00")
    assert not outcome.fully_resolved
    assert not outcome.pending


def test_five_key_plus_c_with_unpublished_key_only_amount() -> None:
    resolver, _ = _resolver(GameType.FIVE_KEY, {"3+C": "20.00", "R": None})

    outcome = resolver.resolve(
        GameType.FIVE_KEY, "016", FiveKeyHits(numbers_matched=3, key_matched=True)
    )

    assert outcome is not None
    assert outcome.supplement is None
    assert not outcome.fully_resolved


def test_five_key_tier_without_key_has_no_supplement() -> None:
    resolver, _ = _resolver(GameType.FIVE_KEY, {"2": "3.00", "R": "2.00"})

    outcome = resolver.resolve(GameType.FIVE_KEY, "016", FiveKeyHits(numbers_matched=2))

    assert outcome is not None
    assert outcome.total is None
    assert outcome.payout == Decimal("3.00")
    assert outcome.fully_resolved


def test_missing_category_is_pending() -> None:
    resolver, _ = _resolver(GameType.SIX_NUMBER, {"6": "1000000.00"}, draw_id="031")

    outcome = resolver.resolve(
        GameType.SIX_NUMBER, "031", SixNumberHits(numbers_matched=5, complement_matched=True)
    )

    assert outcome is not None
    assert outcome.pending
    assert outcome.hit_code == "5+C"
    assert outcome.payout is None
    assert not outcome.fully_resolved


def test_empty_prize_table_is_pending() -> None:
    resolver = PrizeResolver(source=RecordingSource({}))

    outcome = resolver.resolve(GameType.FIVE_STAR, "030", FiveStarHits(numbers_matched=2))

    assert outcome is not None
    assert outcome.pending


def test_listed_tier_without_amount_keeps_its_label() -> None:
    resolver, _ = _resolver(GameType.SIX_NUMBER, {"3": None}, draw_id="031")

    outcome = resolver.resolve(GameType.SIX_NUMBER, "031", SixNumberHits(numbers_matched=3))

    assert outcome is not None
    assert outcome.pending
    assert outcome.category_label == "Categoria 3"


def test_hits_without_category_win_nothing() -> None:
    resolver, source = _resolver(GameType.FIVE_STAR, {"2+0": "4.00"}, draw_id="030")

    outcome = resolver.resolve(GameType.FIVE_STAR, "030", FiveStarHits(numbers_matched=1))

    assert outcome is None
    assert source.calls == []


def test_resolve_rejects_hits_of_another_game() -> None:
    resolver, _ = _resolver(GameType.FIVE_KEY, {"R": "2.00"})
    with pytest.raises(StructuralError):
        resolver.resolve(GameType.FIVE_KEY, "016", SixNumberHits(numbers_matched=3))


def test_cache_loads_each_table_once_per_run() -> None:
    resolver, source = _resolver(GameType.FIVE_STAR, {"2+0": "4.00", "1+2": "8.00"}, "030")

    for hits in (
        FiveStarHits(numbers_matched=2),
        FiveStarHits(numbers_matched=1, stars_matched=2),
        FiveStarHits(numbers_matched=2),
    ):
        resolver.resolve(GameType.FIVE_STAR, "30", hits)

    assert source.calls == [(GameType.FIVE_STAR, "030", None)]
    assert resolver.cache.loads == 1
    assert (GameType.FIVE_STAR, "030", None) in resolver.cache


def test_cache_keys_tables_by_draw_date() -> None:
    old_year = date(2024, 4, 16)
    this_year = date(2025, 4, 15)
    source = RecordingSource(
        {
            (GameType.FIVE_STAR, "030", old_year): prize_table(
                GameType.FIVE_STAR, "030", {"2+0": "3.00"}, draw_date=old_year
            ),
            (GameType.FIVE_STAR, "030", this_year): prize_table(
                GameType.FIVE_STAR, "030", {"2+0": "5.00"}, draw_date=this_year
            ),
        }
    )
    resolver = PrizeResolver(source=source)
    hits = FiveStarHits(numbers_matched=2)

    old = resolver.resolve(GameType.FIVE_STAR, "030", hits, draw_date=old_year)
    new = resolver.resolve(GameType.FIVE_STAR, "030", hits, draw_date=this_year)

    assert old is not None
    assert new is not None
    assert old.amount == Decimal("3.00")
    assert new.amount == Decimal("5.00")
    assert len(resolver.cache) == 2


def test_invalidate_forgets_every_date_of_the_draw() -> None:
    cache = PrizeTableCache()
    source = RecordingSource({})
    cache.get_or_load(GameType.FIVE_KEY, "016", source, date(2025, 4, 20))
    cache.get_or_load(GameType.FIVE_KEY, "016", source)
    cache.get_or_load(GameType.FIVE_KEY, "017", source)

    cache.invalidate(GameType.FIVE_KEY, "16")

    assert len(cache) == 1
    assert (GameType.FIVE_KEY, "017", None) in cache


def test_separate_runs_do_not_share_caches() -> None:
    first = PrizeTableCache()
    second = PrizeTableCache()
    first.get_or_load(GameType.FIVE_KEY, "016", RecordingSource({}))

    assert len(first) == 1
    assert len(second) == 0
