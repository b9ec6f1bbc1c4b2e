"""TTL tiers for the enrichment read-through cache."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Literal, TypeAlias

from .env import env_float

TTLTier: TypeAlias = Literal["short", "medium", "long", "week"]

SHORT_TTL_SECONDS: Final[float] = 60 * 5
MEDIUM_TTL_SECONDS: Final[float] = 60 * 60
LONG_TTL_SECONDS: Final[float] = 60 * 60 * 24
WEEK_TTL_SECONDS: Final[float] = 60 * 60 * 24 * 7


@dataclass(frozen=True, slots=True)
class CacheTTLConfig:
    short: float = SHORT_TTL_SECONDS
    medium: float = MEDIUM_TTL_SECONDS
    long: float = LONG_TTL_SECONDS
    week: float = WEEK_TTL_SECONDS
    max_entries: int = 10_000

    def seconds_for(self, tier: TTLTier) -> float:
        return float(getattr(self, tier))


def get_cache_ttl_config() -> CacheTTLConfig:
    """Build TTL tiers, honouring ``ALBUMLINK_CACHE_TTL_<TIER>`` overrides in seconds."""

    return CacheTTLConfig(
        short=env_float("ALBUMLINK_CACHE_TTL_SHORT", SHORT_TTL_SECONDS),
        medium=env_float("ALBUMLINK_CACHE_TTL_MEDIUM", MEDIUM_TTL_SECONDS),
        long=env_float("ALBUMLINK_CACHE_TTL_LONG", LONG_TTL_SECONDS),
        week=env_float("ALBUMLINK_CACHE_TTL_WEEK", WEEK_TTL_SECONDS),
    )
