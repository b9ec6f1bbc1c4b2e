"""Root logger setup for processes that embed albumlink."""

from __future__ import annotations

import logging
import os

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
LOG_LEVEL_ENV = "ALBUMLINK_LOG_LEVEL"

# Per-request INFO lines from the HTTP stack drown out resolver and enricher output.
_CHATTY_LOGGERS = ("httpx", "hishel", "spotipy")


def configure_logging(*, level: int | str | None = None, force: bool = False) -> None:
    """Configure the root logger through ``logging.basicConfig``.

    ``level`` falls back to ``ALBUMLINK_LOG_LEVEL`` and then INFO. ``force``
    replaces handlers installed earlier, which tests rely on.
    """

    if isinstance(level, int):
        resolved = level
    else:
        name = (level or os.getenv(LOG_LEVEL_ENV) or "INFO").upper()
        resolved = logging.getLevelNamesMapping().get(name, logging.INFO)
    logging.basicConfig(level=resolved, format=LOG_FORMAT, datefmt="%H:%M:%S", force=force)
    for logger_name in _CHATTY_LOGGERS:
        logging.getLogger(logger_name).setLevel(max(resolved, logging.WARNING))
