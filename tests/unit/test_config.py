"""Tests for SpotlightConfig."""

from unittest.mock import patch

import pytest

from src.core.config import SpotlightConfig
from src.core.errors import ConfigurationError


class TestDefaults:
    def test_defaults(self) -> None:
        config = SpotlightConfig()
        assert config.interval_ms == 6000
        assert config.max_slides == 5
        assert config.fetch_timeout is None
        assert config.api_base_url == "https://api.themoviedb.org/3"
        assert config.api_key is None
        assert config.language == "en-US"

    def test_interval_seconds(self) -> None:
        assert SpotlightConfig(interval_ms=2500).interval_seconds == 2.5

    def test_is_frozen(self) -> None:
        config = SpotlightConfig()
        with pytest.raises(AttributeError):
            config.max_slides = 3  # type: ignore[misc]


class TestValidation:
    @pytest.mark.parametrize("interval_ms", [0, -100])
    def test_rejects_non_positive_interval(self, interval_ms: int) -> None:
        with pytest.raises(ConfigurationError):
            SpotlightConfig(interval_ms=interval_ms)

    def test_rejects_non_positive_max_slides(self) -> None:
        with pytest.raises(ConfigurationError):
            SpotlightConfig(max_slides=0)

    def test_rejects_non_positive_timeout(self) -> None:
        with pytest.raises(ConfigurationError):
            SpotlightConfig(fetch_timeout=0)


class TestFromEnv:
    def test_empty_environment_uses_defaults(self) -> None:
        with patch.dict("os.environ", {}, clear=True):
            assert SpotlightConfig.from_env() == SpotlightConfig()

    def test_reads_all_variables(self) -> None:
        env = {
            "SPOTLIGHT_INTERVAL_MS": "3000",
            "SPOTLIGHT_MAX_SLIDES": "8",
            "SPOTLIGHT_FETCH_TIMEOUT": "12.5",
            "TMDB_BASE_URL": "https://proxy.test/3/",
            "TMDB_API_KEY": "secret",
            "TMDB_LANGUAGE": "fr-FR",
        }
        with patch.dict("os.environ", env, clear=True):
            config = SpotlightConfig.from_env()

        assert config.interval_ms == 3000
        assert config.max_slides == 8
        assert config.fetch_timeout == 12.5
        assert config.api_base_url == "https://proxy.test/3"
        assert config.api_key == "secret"
        assert config.language == "fr-FR"

    def test_empty_api_key_is_none(self) -> None:
        with patch.dict("os.environ", {"TMDB_API_KEY": ""}, clear=True):
            assert SpotlightConfig.from_env().api_key is None

    def test_invalid_integer(self) -> None:
        with patch.dict("os.environ", {"SPOTLIGHT_MAX_SLIDES": "five"}, clear=True):
            with pytest.raises(ConfigurationError) as exc_info:
                SpotlightConfig.from_env()
        assert "SPOTLIGHT_MAX_SLIDES" in str(exc_info.value)

    def test_invalid_timeout(self) -> None:
        with patch.dict("os.environ", {"SPOTLIGHT_FETCH_TIMEOUT": "soon"}, clear=True):
            with pytest.raises(ConfigurationError):
                SpotlightConfig.from_env()
