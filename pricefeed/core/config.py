"""
Configuration loading.

``settings.yaml`` is read once through :class:`Config`; the price pipeline
receives an immutable :class:`FeedSettings` built from it so that callers
(and tests) can inject their own candidate URLs.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from pricefeed.core.errors import ConfigError
from pricefeed.core.models import InstrumentConfig
from pricefeed.core.stats import ROUNDING_POLICIES

DEFAULT_SETTINGS_PATH = Path(__file__).parent.parent / "config" / "settings.yaml"

BACKENDS = ("html", "api")
HISTORY_MODES = ("archive", "synthetic")
BACKEND_DEFAULTS = {
    "html": {"history": "archive", "avg_rounding": "round"},
    "api": {"history": "synthetic", "avg_rounding": "floor"},
}


class Config:
    _config = None
    _path = None

    @classmethod
    def load(cls, path=None):
        path = str(path or os.getenv("PRICEFEED_SETTINGS") or DEFAULT_SETTINGS_PATH)
        if cls._config is None or cls._path != path:
            try:
                with open(path, "r", encoding="utf-8") as f:
                    cls._config = yaml.safe_load(f) or {}
            except FileNotFoundError as e:
                raise ConfigError(f"Settings file not found: {path}") from e
            cls._path = path
        return cls._config

    @classmethod
    def reset(cls):
        cls._config = None
        cls._path = None


@dataclass(frozen=True)
class FeedSettings:
    """Everything the snapshot pipeline needs for one request."""
    instruments: Tuple[InstrumentConfig, ...]
    backend: str = "html"
    history: str = "archive"
    avg_rounding: str = "round"
    timeout: float = 15.0
    referer: Optional[str] = "https://www.tgju.org/"
    user_agents: Tuple[str, ...] = ()
    locale: str = "fa-IR"
    unavailable_label: str = "ناموجود"
    synthetic_step_ratio: float = 0.005

    def validate(self) -> "FeedSettings":
        if self.backend not in BACKENDS:
            raise ConfigError(f"Unknown backend: {self.backend!r}", key="backend")
        if self.history not in HISTORY_MODES:
            raise ConfigError(f"Unknown history mode: {self.history!r}", key="history")
        if self.avg_rounding not in ROUNDING_POLICIES:
            raise ConfigError(f"Unknown rounding policy: {self.avg_rounding!r}", key="avg_rounding")
        if self.timeout <= 0:
            raise ConfigError("Timeout must be positive", key="timeout", section="fetcher")
        if not self.instruments:
            raise ConfigError("No instruments configured", section="instruments")

        for instrument in self.instruments:
            sources = instrument.api_urls if self.backend == "api" else instrument.now_urls
            if not sources:
                raise ConfigError(
                    f"Instrument {instrument.key!r} has no {self.backend} sources",
                    section="instruments",
                    instrument=instrument.key,
                )
        return self

    def instrument(self, key: str) -> InstrumentConfig:
        for instrument in self.instruments:
            if instrument.key == key:
                return instrument
        raise KeyError(key)


def _tuple(value: Any) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    return tuple(str(item) for item in value)


def _parse_instruments(raw: Any) -> Tuple[InstrumentConfig, ...]:
    if not isinstance(raw, dict):
        raise ConfigError("'instruments' must be a mapping", section="instruments")

    instruments = []
    for key, spec in raw.items():
        spec = spec or {}
        instruments.append(
            InstrumentConfig(
                key=str(key),
                label=str(spec.get("label", key)),
                now_urls=_tuple(spec.get("now_urls")),
                history_urls=_tuple(spec.get("history_urls")),
                api_urls=_tuple(spec.get("api_urls")),
                selectors=_tuple(spec.get("selectors")),
            )
        )
    return tuple(instruments)


def build_feed_settings(raw: Dict[str, Any], overrides: Optional[Dict[str, Any]] = None) -> FeedSettings:
    """Build validated settings from a decoded settings document."""
    feed = dict(raw.get("feed") or {})
    fetcher = raw.get("fetcher") or {}
    display = raw.get("display") or {}
    overrides = dict(overrides or {})

    backend = overrides.pop("backend", None) or feed.get("backend", "html")
    defaults = BACKEND_DEFAULTS.get(backend, BACKEND_DEFAULTS["html"])

    settings = FeedSettings(
        instruments=_parse_instruments(raw.get("instruments") or {}),
        backend=backend,
        history=feed.get("history") or defaults["history"],
        avg_rounding=feed.get("avg_rounding") or defaults["avg_rounding"],
        timeout=float(fetcher.get("timeout", 15.0)),
        referer=fetcher.get("referer"),
        user_agents=_tuple(fetcher.get("user_agents")),
        locale=display.get("locale", "fa-IR"),
        unavailable_label=display.get("unavailable", "ناموجود"),
        synthetic_step_ratio=float(feed.get("synthetic_step_ratio", 0.005)),
    )
    if overrides:
        settings = replace(settings, **overrides)
    return settings.validate()


def load_feed_settings(path=None, overrides: Optional[Dict[str, Any]] = None) -> FeedSettings:
    """
    Load feed settings from YAML, applying environment overrides.

    PRICEFEED_BACKEND and PRICEFEED_TIMEOUT take precedence over the file;
    explicit ``overrides`` take precedence over both.
    """
    env_overrides: Dict[str, Any] = {}
    if os.getenv("PRICEFEED_BACKEND"):
        env_overrides["backend"] = os.getenv("PRICEFEED_BACKEND").strip().lower()
    if os.getenv("PRICEFEED_TIMEOUT"):
        try:
            env_overrides["timeout"] = float(os.getenv("PRICEFEED_TIMEOUT"))
        except ValueError as e:
            raise ConfigError("PRICEFEED_TIMEOUT must be a number", key="PRICEFEED_TIMEOUT") from e
    env_overrides.update(overrides or {})

    return build_feed_settings(Config.load(path), env_overrides)
