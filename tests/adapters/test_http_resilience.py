from __future__ import annotations

import asyncio

import httpx
import pytest

from boletipy.adapters.http_resilience import (
    ResilienceConfig,
    ResilientClient,
    RetryPolicy,
    _build_cache_components,  # type: ignore[reportPrivateUsage]
    build_retry,
)
from boletipy.config.http_resilience import CacheConfig, RateLimit


def test_build_retry_copies_the_policy() -> None:
    policy = RetryPolicy(total=5, backoff_factor=0.1, status_forcelist=frozenset({503}))

    retry = build_retry(policy)

    assert retry.total == 5
    assert retry.backoff_factor == 0.1
    assert retry.is_retryable_status_code(503)
    assert not retry.is_retryable_status_code(500)


def test_client_sends_defaults_and_retries_server_errors() -> None:
    calls: list[httpx.Request] = []

    async def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        if len(calls) == 1:
            return httpx.Response(503)
        return httpx.Response(200, json={"ok": True})

    config = ResilienceConfig(
        name="test",
        base_url="https://example.test/",
        retry=RetryPolicy(total=2, backoff_factor=0.0, backoff_jitter=0.0),
        ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
        cache=None,
        default_headers={"Accept-Language": "es-ES"},
    )

    async def run() -> httpx.Response:
        async with ResilientClient(config, transport=httpx.MockTransport(handler)) as client:
            return await client.get("ping", params={"q": "1"})

    response = asyncio.run(run())

    assert response.json() == {"ok": True}
    assert len(calls) == 2
    assert str(calls[-1].url) == "https://example.test/ping?q=1"
    assert calls[-1].headers["Accept-Language"] == "es-ES"


@pytest.mark.parametrize("cache", [None, CacheConfig(enabled=False)])
def test_disabled_cache_builds_no_storage(cache: CacheConfig | None) -> None:
    assert _build_cache_components(cache) == (None, None)


def test_unknown_cache_backend_is_rejected() -> None:
    with pytest.raises(ValueError, match="Unsupported cache backend"):
        _build_cache_components(CacheConfig(backend="redis"))  # type: ignore[arg-type]
