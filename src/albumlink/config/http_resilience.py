"""Settings for the catalog HTTP clients: retries, pacing and response caching."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Final, TypeAlias

import httpx

PayloadPredicate: TypeAlias = Callable[[object], bool]

RETRYABLE_STATUSES: Final[frozenset[int]] = frozenset({429, 500, 502, 503, 504})
RETRYABLE_ERRORS: Final[tuple[type[httpx.HTTPError], ...]] = (
    httpx.TimeoutException,
    httpx.NetworkError,
    httpx.RemoteProtocolError,
)


@dataclass(slots=True, frozen=True)
class RetryPolicy:
    """Retries for idempotent requests; backoff is exponential with jitter."""

    attempts: int = 4
    backoff_factor: float = 0.5
    max_backoff_wait: float = 60.0
    jitter: float = 1.0
    honour_retry_after: bool = True
    statuses: frozenset[int] = RETRYABLE_STATUSES
    transport_errors: tuple[type[httpx.HTTPError], ...] = RETRYABLE_ERRORS


@dataclass(slots=True, frozen=True)
class RateLimit:
    max_calls: int
    per_seconds: float


@dataclass(slots=True, frozen=True)
class ResponseCache:
    """HTTP-level cache of raw responses.

    ``persist`` keeps responses in the data directory across runs; otherwise
    they live in memory for the lifetime of the client. ``should_cache`` sees
    the decoded JSON body and can veto storing it.
    """

    persist: bool = False
    ttl_seconds: float | None = None
    refresh_on_access: bool = True
    should_cache: PayloadPredicate | None = None


@dataclass(slots=True, frozen=True)
class ResilienceConfig:
    name: str
    base_url: str | None = None
    timeout_seconds: float = 30.0
    retry: RetryPolicy = field(default_factory=RetryPolicy)
    ratelimit: RateLimit | None = None
    cache: ResponseCache | None = field(default_factory=ResponseCache)
    headers: Mapping[str, str] = field(default_factory=dict[str, str])
