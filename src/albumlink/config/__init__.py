"""Application configuration helpers."""

from __future__ import annotations

from .cache import CacheTTLConfig, TTLTier, get_cache_ttl_config
from .env import env_float, env_str, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, ResponseCache, RetryPolicy
from .logging import configure_logging
from .musicbrainz import MusicBrainzConfig, get_musicbrainz_config
from .spotify import SpotifyConfig, get_spotify_config, get_spotify_config_or_none
from .storage import DataPaths, get_data_paths, get_database_uri

__all__ = [
    "CacheTTLConfig",
    "ConfigurationError",
    "DataPaths",
    "MissingConfigurationError",
    "MusicBrainzConfig",
    "RateLimit",
    "ResilienceConfig",
    "ResponseCache",
    "RetryPolicy",
    "SpotifyConfig",
    "TTLTier",
    "configure_logging",
    "env_float",
    "env_str",
    "get_cache_ttl_config",
    "get_data_paths",
    "get_database_uri",
    "get_musicbrainz_config",
    "get_spotify_config",
    "get_spotify_config_or_none",
    "require_env_vars",
]
