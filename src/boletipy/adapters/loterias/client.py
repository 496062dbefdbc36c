"""HTTP client for the official draw search service."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

import httpx

from boletipy.adapters.http_resilience import ResilientClient
from boletipy.config.loterias import LoteriasConfig, get_loterias_config
from boletipy.domain.ports.fetching import DrawResultFetcher, PrizeTableFetcher

from .schema import DrawPayload, SearchResponse
from .translator import parse_draw_result, parse_prize_entries

if TYPE_CHECKING:
    from collections.abc import Callable, Coroutine
    from datetime import date
    from types import TracebackType

    from boletipy.config.http_resilience import ResilienceConfig
    from boletipy.domain.model import DrawResult, GameType, PrizeTableEntry

log = getLogger(__name__)

_DATE_PARAM_FORMAT = "%Y%m%d"


def _default_config() -> LoteriasConfig:
    return get_loterias_config(cache_predicate=should_cache_payload)


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


def should_cache_payload(payload: object) -> bool:
    """Only settled searches are cacheable: every draw listed with its prize tiers."""

    if not isinstance(payload, list) or not payload:
        return False
    return all(isinstance(entry, dict) and entry.get("escrutinio") for entry in payload)


class LoteriasAPIError(RuntimeError):
    """Raised when the search service answers with something other than a draw list."""

    def __init__(self, message: str, *, code: int | None = None) -> None:
        super().__init__(message)
        self.code = code


@dataclass(slots=True)
class LoteriasFetcher:
    """Fetch official results and prize tiers, one draw date at a time.

    ``fetch_result`` and ``fetch_prizes`` are the two fetch operations the weekly
    reconciliation is wired with. One event loop and one HTTP client serve every search
    until ``close``, so the rate limit and the response cache span the whole run.
    """

    config: LoteriasConfig = field(default_factory=_default_config)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )
    _runner: asyncio.Runner | None = field(default=None, init=False, repr=False)
    _client: ResilientClient | None = field(default=None, init=False, repr=False)

    def __enter__(self) -> LoteriasFetcher:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        if self._runner is None:
            return
        try:
            if self._client is not None:
                self._runner.run(self._client.aclose())
        finally:
            self._client = None
            self._runner.close()
            self._runner = None

    def fetch_result(self, game_type: GameType, draw_date: date) -> DrawResult | None:
        payload = self._draw_on(game_type, draw_date)
        if payload is None:
            return None
        return parse_draw_result(game_type, payload)

    def fetch_prizes(self, game_type: GameType, draw_date: date) -> list[PrizeTableEntry]:
        payload = self._draw_on(game_type, draw_date)
        if payload is None:
            return []
        return parse_prize_entries(game_type, payload)

    def search(self, game_type: GameType, start: date, end: date) -> list[DrawPayload]:
        """All held draws of the game between ``start`` and ``end`` (inclusive)."""

        return self._run(self._search_async(game_type, start, end))

    def _run[T](self, coro: Coroutine[object, object, T]) -> T:
        if self._runner is None:
            self._runner = asyncio.Runner()
        return self._runner.run(coro)

    def _http(self) -> ResilientClient:
        if self._client is None:
            self._client = self.client_factory(self.config.resilience)
        return self._client

    def _draw_on(self, game_type: GameType, draw_date: date) -> DrawPayload | None:
        draws = [
            payload
            for payload in self.search(game_type, draw_date, draw_date)
            if payload.draw_date == draw_date
        ]
        if not draws:
            log.info(f"No {game_type} draw published for {draw_date}")
            return None
        return draws[0]

    async def _search_async(
        self,
        game_type: GameType,
        start: date,
        end: date,
    ) -> list[DrawPayload]:
        endpoint = self.config.endpoints[game_type]
        params = httpx.QueryParams(
            {
                "game_id": endpoint.game_id,
                "celebrados": "true",
                "fechaInicioInclusiva": start.strftime(_DATE_PARAM_FORMAT),
                "fechaFinInclusiva": end.strftime(_DATE_PARAM_FORMAT),
            }
        )
        response = await self._http().get(
            self.config.search_path,
            params=params,
            headers={"Referer": endpoint.referer},
        )
        response.raise_for_status()

        payload = response.json()
        if not isinstance(payload, list):
            log.error(f"Unexpected {game_type} search payload: {type(payload).__name__}")
            raise LoteriasAPIError(
                "Unexpected draw search payload", code=response.status_code
            )
        log.debug(f"{game_type} search {start}..{end} returned {len(payload)} draw(s)")
        return SearchResponse.from_payload(payload).draws


if TYPE_CHECKING:
    _result_check: DrawResultFetcher = LoteriasFetcher().fetch_result
    _prizes_check: PrizeTableFetcher = LoteriasFetcher().fetch_prizes
