"""Map hit descriptors to payouts using published prize tables."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Protocol

from boletipy.domain.model import (
    KEY_ONLY_CATEGORY,
    KEY_SUPPLEMENT_SUFFIX,
    GameType,
    PrizeOutcome,
    StructuralError,
)
from boletipy.domain.normalization import normalize_draw_id

if TYPE_CHECKING:
    from datetime import date
    from decimal import Decimal

    from boletipy.domain.model import HitDescriptor, PrizeTable, PrizeTableEntry

log = getLogger(__name__)


class PrizeTableSource(Protocol):
    """Load the stored prize table of a draw; ``draw_date`` narrows reused draw numbers."""

    def __call__(
        self,
        game_type: GameType,
        draw_id: str,
        draw_date: date | None = None,
    ) -> PrizeTable: ...


@dataclass(slots=True)
class PrizeTableCache:
    """Prize tables memoized for the lifetime of one reconciliation run."""

    _tables: dict[tuple[GameType, str, date | None], PrizeTable] = field(
        default_factory=dict[tuple[GameType, str, "date | None"], "PrizeTable"]
    )
    loads: int = 0

    def get_or_load(
        self,
        game_type: GameType,
        draw_id: str,
        source: PrizeTableSource,
        draw_date: date | None = None,
    ) -> PrizeTable:
        key = (game_type, normalize_draw_id(draw_id), draw_date)
        table = self._tables.get(key)
        if table is None:
            table = source(game_type, key[1], draw_date)
            self.loads += 1
            self._tables[key] = table
            log.debug("Cached %s prize tiers for %s draw %s", len(table), game_type, key[1])
        return table

    def invalidate(self, game_type: GameType, draw_id: str) -> None:
        """Forget every cached table of the draw number, whatever its date."""

        normalized = normalize_draw_id(draw_id)
        for key in [key for key in self._tables if key[:2] == (game_type, normalized)]:
            del self._tables[key]

    def __contains__(self, key: object) -> bool:
        return key in self._tables

    def __len__(self) -> int:
        return len(self._tables)


@dataclass(slots=True)
class PrizeResolver:
    """Resolve prizes through a run-scoped cache in front of ``source``."""

    source: PrizeTableSource
    cache: PrizeTableCache = field(default_factory=PrizeTableCache)

    def resolve(
        self,
        game_type: GameType,
        draw_id: str,
        hits: HitDescriptor,
        *,
        draw_date: date | None = None,
    ) -> PrizeOutcome | None:
        """Return the prize for ``hits`` in the draw, ``None`` when the hits win nothing."""

        if hits.GAME_TYPE is not game_type:
            raise StructuralError(f"{hits.GAME_TYPE} hits cannot be resolved as {game_type}")
        category = hits.category
        if category is None:
            return None

        normalized = normalize_draw_id(draw_id)
        table = self.cache.get_or_load(game_type, normalized, self.source, draw_date)
        entry = table.get(category)
        amount = entry.amount if entry is not None else None
        if entry is None or amount is None or not amount.is_finite():
            log.debug("Prize %s for %s draw %s not published yet", category, game_type, normalized)
            return PrizeOutcome.awaiting_publication(
                game_type,
                normalized,
                category,
                entry.category_label if entry is not None else None,
            )

        if game_type is GameType.FIVE_KEY and category.endswith(KEY_SUPPLEMENT_SUFFIX):
            return _with_key_supplement(entry, amount, table.get(KEY_ONLY_CATEGORY))

        return PrizeOutcome(
            game_type=game_type,
            draw_id=normalized,
            hit_code=category,
            category_label=entry.category_label,
            amount=amount,
        )


def _with_key_supplement(
    entry: PrizeTableEntry,
    amount: Decimal,
    key_only: PrizeTableEntry | None,
) -> PrizeOutcome:
    """Five-key ``+C`` tiers also collect the key-only prize."""

    if key_only is None or key_only.amount is None or not key_only.amount.is_finite():
        log.debug(
            "Key-only prize missing for %s draw %s; %s stays partially resolved",
            entry.game_type,
            entry.draw_id,
            entry.hit_code,
        )
        return PrizeOutcome(
            game_type=entry.game_type,
            draw_id=entry.draw_id,
            hit_code=entry.hit_code,
            category_label=entry.category_label,
            amount=amount,
            fully_resolved=False,
        )

    return PrizeOutcome(
        game_type=entry.game_type,
        draw_id=entry.draw_id,
        hit_code=entry.hit_code,
        category_label=entry.category_label,
        amount=amount,
        supplement=key_only.amount,
        total=amount + key_only.amount,
    )
