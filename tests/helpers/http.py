"""Helpers for driving ``ResilientClient`` against ``httpx.MockTransport``."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

import httpx

from albumlink.adapters.http_resilience import ResilientClient

if TYPE_CHECKING:
    from aiolimiter import AsyncLimiter

    from albumlink.config.http_resilience import ResilienceConfig

Handler = Callable[[httpx.Request], httpx.Response]


def make_client_factory(
    handler: Handler,
) -> Callable[[ResilienceConfig, AsyncLimiter | None], ResilientClient]:
    def factory(resilience: ResilienceConfig, limiter: AsyncLimiter | None) -> ResilientClient:
        return ResilientClient(resilience, limiter=limiter, transport=httpx.MockTransport(handler))

    return factory
