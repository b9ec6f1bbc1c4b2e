"""Async HTTP client used by the catalog adapters.

Requests go through three layers: an optional hishel response cache, an
``aiolimiter`` limiter shared by every client of one API, and an
``httpx_retries`` transport that retries transient failures.
"""

from __future__ import annotations

import json
from logging import getLogger
from typing import TYPE_CHECKING, Any

import httpx
from aiolimiter import AsyncLimiter
from hishel import AsyncSqliteStorage, FilterPolicy
from hishel import Response as CachedResponse
from hishel._policies import BaseFilter
from hishel.httpx import AsyncCacheClient
from httpx_retries import Retry, RetryTransport

from albumlink.config.storage import get_data_paths

if TYPE_CHECKING:
    from types import TracebackType

    from httpx._types import QueryParamTypes

    from albumlink.config.http_resilience import (
        PayloadPredicate,
        RateLimit,
        ResilienceConfig,
        ResponseCache,
        RetryPolicy,
    )

log = getLogger(__name__)

IDEMPOTENT_METHODS = ("GET", "HEAD")


def build_limiter(ratelimit: RateLimit | None) -> AsyncLimiter | None:
    """Limiter for ``ratelimit``; share the result between clients of one API."""

    if ratelimit is None:
        return None
    return AsyncLimiter(ratelimit.max_calls, ratelimit.per_seconds)


def build_retry(policy: RetryPolicy) -> Retry:
    return Retry(
        total=policy.attempts,
        allowed_methods=IDEMPOTENT_METHODS,
        status_forcelist=tuple(policy.statuses),
        retry_on_exceptions=policy.transport_errors,
        backoff_factor=policy.backoff_factor,
        backoff_jitter=policy.jitter,
        max_backoff_wait=policy.max_backoff_wait,
        respect_retry_after_header=policy.honour_retry_after,
    )


class _JsonPayloadFilter(BaseFilter[CachedResponse]):
    """Lets hishel store a response only when ``predicate`` accepts its JSON body."""

    def __init__(self, predicate: PayloadPredicate) -> None:
        self._predicate = predicate

    def needs_body(self) -> bool:
        return True

    def apply(self, item: CachedResponse, body: bytes | None) -> bool:
        del item
        if body is None:
            return True
        try:
            payload = json.loads(body)
        except (UnicodeDecodeError, json.JSONDecodeError):
            return False
        return bool(self._predicate(payload))


def _open_client(
    config: ResilienceConfig, transport: httpx.AsyncBaseTransport
) -> httpx.AsyncClient:
    options: dict[str, Any] = {
        "timeout": config.timeout_seconds,
        "transport": transport,
        "headers": dict(config.headers),
    }
    if config.base_url is not None:
        options["base_url"] = config.base_url

    cache = config.cache
    if cache is None:
        return httpx.AsyncClient(**options)
    return AsyncCacheClient(**options, storage=_cache_storage(cache), policy=_cache_policy(cache))


def _cache_storage(cache: ResponseCache) -> AsyncSqliteStorage:
    database_path = str(get_data_paths().http_cache) if cache.persist else ":memory:"
    return AsyncSqliteStorage(
        database_path=database_path,
        default_ttl=cache.ttl_seconds,
        refresh_ttl_on_access=cache.refresh_on_access,
    )


def _cache_policy(cache: ResponseCache) -> FilterPolicy | None:
    if cache.should_cache is None:
        return None
    return FilterPolicy(response_filters=[_JsonPayloadFilter(cache.should_cache)])


class ResilientClient:
    """``httpx.AsyncClient`` wrapper owned by one catalog client.

    The limiter is passed in rather than created here so one limiter can guard
    every request made against an API, whatever client instance sends it.
    """

    def __init__(
        self,
        config: ResilienceConfig,
        *,
        limiter: AsyncLimiter | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self._limiter = limiter
        self._client = _open_client(
            config, transport or RetryTransport(retry=build_retry(config.retry))
        )

    async def __aenter__(self) -> ResilientClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get(self, url: str, *, params: QueryParamTypes | None = None) -> httpx.Response:
        log.debug("%s: GET %s", self.config.name, url)
        if self._limiter is None:
            return await self._client.get(url, params=params)
        async with self._limiter:
            return await self._client.get(url, params=params)
