"""Public interface for the official results adapter."""

from __future__ import annotations

from .client import LoteriasAPIError, LoteriasFetcher, should_cache_payload
from .schema import DrawPayload, PrizeRowPayload, SearchResponse
from .translator import parse_draw_result, parse_prize_amount, parse_prize_entries

__all__ = [
    "DrawPayload",
    "LoteriasAPIError",
    "LoteriasFetcher",
    "PrizeRowPayload",
    "SearchResponse",
    "parse_draw_result",
    "parse_prize_amount",
    "parse_prize_entries",
    "should_cache_payload",
]
