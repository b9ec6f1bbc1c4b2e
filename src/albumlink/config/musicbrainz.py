"""MusicBrainz connection settings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from .env import env_str
from .http_resilience import RateLimit, ResilienceConfig, ResponseCache

DEFAULT_MUSICBRAINZ_BASE_URL: Final[str] = "https://musicbrainz.org/ws/2"

# Used when MUSICBRAINZ_APP_NAME or MUSICBRAINZ_CONTACT is not set.
DEFAULT_APP_NAME: Final[str] = "albumlink"
DEFAULT_CONTACT: Final[str] = "albumlink@example.com"

# MusicBrainz asks anonymous clients for at most one request per second.
MUSICBRAINZ_RATE_LIMIT: Final[RateLimit] = RateLimit(max_calls=1, per_seconds=1.0)


@dataclass(frozen=True, slots=True)
class MusicBrainzConfig:
    resilience: ResilienceConfig


def is_cacheable_payload(payload: object) -> bool:
    """Error documents come back with a 200 often enough that they must not be cached."""
    return isinstance(payload, dict) and "error" not in payload


def get_musicbrainz_config() -> MusicBrainzConfig:
    """Settings for the public MusicBrainz web service.

    MusicBrainz requires a User-Agent naming the application and a way to reach
    its maintainer. ``MUSICBRAINZ_APP_NAME`` and ``MUSICBRAINZ_CONTACT`` override
    the package defaults, so the catalog works without any configuration.
    """

    app_name = env_str("MUSICBRAINZ_APP_NAME", DEFAULT_APP_NAME)
    contact = env_str("MUSICBRAINZ_CONTACT", DEFAULT_CONTACT)
    user_agent = f"{app_name} ({contact})"
    return MusicBrainzConfig(
        resilience=ResilienceConfig(
            name="musicbrainz",
            base_url=DEFAULT_MUSICBRAINZ_BASE_URL,
            ratelimit=MUSICBRAINZ_RATE_LIMIT,
            cache=ResponseCache(should_cache=is_cacheable_payload),
            headers={"User-Agent": user_agent, "Accept": "application/json"},
        )
    )
