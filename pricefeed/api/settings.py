"""Runtime settings for the pricefeed API layer."""

from __future__ import annotations

import os
from functools import lru_cache

from pricefeed.core.config import FeedSettings, load_feed_settings

DEFAULT_PORT = 3000


class ApiSettings:
    """Container for process-level API settings."""

    def __init__(self) -> None:
        self.host: str = os.getenv("HOST", "0.0.0.0")
        self.port: int = int(os.getenv("PORT") or DEFAULT_PORT)
        self.log_level: str = os.getenv("LOG_LEVEL", "info").lower()
        self.reload: bool = os.getenv("RELOAD", "false").lower() == "true"


@lru_cache(maxsize=1)
def get_api_settings() -> ApiSettings:
    """Return cached API settings instance."""

    return ApiSettings()


@lru_cache(maxsize=1)
def get_feed_settings() -> FeedSettings:
    """Return cached feed settings loaded from settings.yaml and the environment."""

    return load_feed_settings()


__all__ = ["ApiSettings", "get_api_settings", "get_feed_settings"]
