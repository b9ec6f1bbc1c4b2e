"""Spotify configuration values."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .env import require_env_vars
from .errors import MissingConfigurationError
from .http_resilience import RateLimit

log = logging.getLogger(__name__)

# Spotify's rolling window is roughly 100 requests per minute for most app tiers.
DEFAULT_SPOTIFY_RATE_LIMIT = RateLimit(max_calls=100, per_seconds=60.0)


@dataclass(frozen=True)
class SpotifyConfig:
    client_id: str
    client_secret: str
    ratelimit: RateLimit | None = field(default_factory=lambda: DEFAULT_SPOTIFY_RATE_LIMIT)
    requests_timeout: float = 10.0


def get_spotify_config() -> SpotifyConfig:
    values = require_env_vars(("SPOTIFY_CLIENT_ID", "SPOTIFY_CLIENT_SECRET"))
    return SpotifyConfig(
        client_id=values["SPOTIFY_CLIENT_ID"],
        client_secret=values["SPOTIFY_CLIENT_SECRET"],
    )


def get_spotify_config_or_none() -> SpotifyConfig | None:
    """Return the Spotify configuration, or ``None`` when credentials are not set."""

    try:
        return get_spotify_config()
    except MissingConfigurationError as exc:
        log.info("Spotify is not configured, album lookups will be skipped: %s", exc)
        return None
