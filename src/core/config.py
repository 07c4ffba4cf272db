"""Runtime configuration for the spotlight carousel."""

from __future__ import annotations

import os
from dataclasses import dataclass

from src.core.errors import ConfigurationError

DEFAULT_INTERVAL_MS = 6000
DEFAULT_MAX_SLIDES = 5
DEFAULT_API_BASE_URL = "https://api.themoviedb.org/3"
DEFAULT_LANGUAGE = "en-US"


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as ex:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from ex


def _env_float(name: str) -> float | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    try:
        return float(raw)
    except ValueError as ex:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from ex


@dataclass(frozen=True)
class SpotlightConfig:
    """Spotlight configuration.

    Attributes:
        interval_ms: Auto-advance cadence of the carousel in milliseconds.
        max_slides: Cap on the number of navigable slides.
        fetch_timeout: Optional cap on a pending fetch, in seconds. None
            leaves the transport's own behaviour in place.
        api_base_url: Base address of the trending endpoint.
        api_key: API key for the remote source.
        language: Language requested from the remote source.
    """

    interval_ms: int = DEFAULT_INTERVAL_MS
    max_slides: int = DEFAULT_MAX_SLIDES
    fetch_timeout: float | None = None
    api_base_url: str = DEFAULT_API_BASE_URL
    api_key: str | None = None
    language: str = DEFAULT_LANGUAGE

    def __post_init__(self) -> None:
        if self.interval_ms <= 0:
            raise ConfigurationError(
                f"interval_ms must be positive, got {self.interval_ms}"
            )
        if self.max_slides <= 0:
            raise ConfigurationError(
                f"max_slides must be positive, got {self.max_slides}"
            )
        if self.fetch_timeout is not None and self.fetch_timeout <= 0:
            raise ConfigurationError(
                f"fetch_timeout must be positive, got {self.fetch_timeout}"
            )

    @property
    def interval_seconds(self) -> float:
        return self.interval_ms / 1000.0

    @classmethod
    def from_env(cls) -> SpotlightConfig:
        """Build a configuration from environment variables.

        Reads SPOTLIGHT_INTERVAL_MS, SPOTLIGHT_MAX_SLIDES,
        SPOTLIGHT_FETCH_TIMEOUT, TMDB_BASE_URL, TMDB_API_KEY and
        TMDB_LANGUAGE. Unset variables keep their defaults.

        Raises:
            ConfigurationError: If a variable cannot be parsed or is out of range.
        """
        return cls(
            interval_ms=_env_int("SPOTLIGHT_INTERVAL_MS", DEFAULT_INTERVAL_MS),
            max_slides=_env_int("SPOTLIGHT_MAX_SLIDES", DEFAULT_MAX_SLIDES),
            fetch_timeout=_env_float("SPOTLIGHT_FETCH_TIMEOUT"),
            api_base_url=os.getenv("TMDB_BASE_URL", DEFAULT_API_BASE_URL).rstrip("/"),
            api_key=os.getenv("TMDB_API_KEY") or None,
            language=os.getenv("TMDB_LANGUAGE", DEFAULT_LANGUAGE),
        )
