"""Official results service configuration values."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from boletipy.domain.model import GameType

from .env import optional_env_var
from .errors import InvalidConfigurationValueError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, ShouldCacheHook

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .storage import StorageConfig

LOTERIAS_BASE_URL = "https://www.loteriasyapuestas.es/servicios/"
LOTERIAS_SEARCH_PATH = "buscadorSorteos"
LOTERIAS_TIMEOUT_SECONDS = 15.0
LOTERIAS_BASE_URL_ENV = "BOLETIPY_LOTERIAS_BASE_URL"
LOTERIAS_HTTP_CACHE_ENV = "BOLETIPY_HTTP_CACHE"

DEFAULT_HEADERS: Mapping[str, str] = MappingProxyType(
    {
        "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64)",
        "Accept": "application/json, text/plain, */*",
        "Accept-Language": "es-ES,es;q=0.9",
    }
)


@dataclass(frozen=True, slots=True)
class GameEndpoint:
    game_id: str
    referer: str


GAME_ENDPOINTS: Mapping[GameType, GameEndpoint] = MappingProxyType(
    {
        GameType.SIX_NUMBER: GameEndpoint(
            "LAPR", "https://www.loteriasyapuestas.es/es/resultados/primitiva"
        ),
        GameType.FIVE_STAR: GameEndpoint(
            "EMIL", "https://www.loteriasyapuestas.es/es/resultados/euromillones"
        ),
        GameType.FIVE_KEY: GameEndpoint(
            "ELGR", "https://www.loteriasyapuestas.es/es/resultados/gordo-primitiva"
        ),
    }
)


@dataclass(frozen=True)
class LoteriasConfig:
    """Holds the official results service configuration values."""

    resilience: ResilienceConfig
    search_path: str = LOTERIAS_SEARCH_PATH
    endpoints: Mapping[GameType, GameEndpoint] = field(default_factory=lambda: GAME_ENDPOINTS)


def _cache_config(
    storage: StorageConfig | None,
    predicate: ShouldCacheHook | None,
) -> CacheConfig:
    backend = (optional_env_var(LOTERIAS_HTTP_CACHE_ENV) or "memory").lower()
    if backend == "off":
        return CacheConfig(enabled=False)
    if backend not in {"sqlite", "memory"}:
        raise InvalidConfigurationValueError(
            LOTERIAS_HTTP_CACHE_ENV, backend, "one of memory, sqlite, off"
        )
    if backend == "sqlite" and storage is not None:
        return CacheConfig(
            backend="sqlite",
            sqlite_path=str(storage.http_cache_path()),
            should_cache=predicate,
        )
    if backend == "sqlite":
        return CacheConfig(backend="sqlite", should_cache=predicate)
    return CacheConfig(backend="memory", should_cache=predicate)


def get_loterias_config(
    *,
    resilience: ResilienceConfig | None = None,
    storage: StorageConfig | None = None,
    cache_predicate: ShouldCacheHook | None = None,
) -> LoteriasConfig:
    base_url = optional_env_var(LOTERIAS_BASE_URL_ENV) or LOTERIAS_BASE_URL
    return LoteriasConfig(
        resilience=resilience
        or ResilienceConfig(
            name="loterias",
            base_url=base_url,
            timeout_seconds=LOTERIAS_TIMEOUT_SECONDS,
            ratelimit=RateLimit(max_calls=2, per_seconds=1.0),
            cache=_cache_config(storage, cache_predicate),
            default_headers=DEFAULT_HEADERS,
        ),
    )
