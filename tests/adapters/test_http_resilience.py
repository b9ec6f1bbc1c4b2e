from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, cast

import httpx

from albumlink.adapters.http_resilience import (
    ResilientClient,
    _JsonPayloadFilter,  # pyright: ignore[reportPrivateUsage]
    build_limiter,
    build_retry,
)
from albumlink.config.http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from albumlink.config.musicbrainz import is_cacheable_payload

if TYPE_CHECKING:
    from hishel import Response as CachedResponse


def test_build_limiter() -> None:
    assert build_limiter(None) is None

    limiter = build_limiter(RateLimit(max_calls=1, per_seconds=1.0))

    assert limiter is not None
    assert limiter.max_rate == 1
    assert limiter.time_period == 1.0


def test_build_retry_copies_policy() -> None:
    retry = build_retry(RetryPolicy(attempts=2, statuses=frozenset({503})))

    assert retry.total == 2
    assert retry.is_retryable_status_code(503)
    assert not retry.is_retryable_status_code(429)


def test_client_sends_default_headers_and_base_url() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"ok": True})

    config = ResilienceConfig(
        name="test",
        base_url="https://api.test/v1",
        cache=None,
        ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
        headers={"User-Agent": "albumlink-tests (dev@example.com)"},
    )

    async def scenario() -> httpx.Response:
        async with ResilientClient(
            config,
            limiter=build_limiter(config.ratelimit),
            transport=httpx.MockTransport(handler),
        ) as client:
            return await client.get("things", params={"q": "x"})

    response = asyncio.run(scenario())

    assert response.json() == {"ok": True}
    assert str(seen[0].url) == "https://api.test/v1/things?q=x"
    assert seen[0].headers["User-Agent"] == "albumlink-tests (dev@example.com)"


def test_payload_filter_consults_predicate() -> None:
    payload_filter = _JsonPayloadFilter(is_cacheable_payload)
    response = cast("CachedResponse", object())

    assert payload_filter.needs_body()
    assert payload_filter.apply(response, b'{"id": "rg-1"}')
    assert not payload_filter.apply(response, b'{"error": "Not Found"}')
    assert not payload_filter.apply(response, b"<html>")
