"""Tests for structured logging configuration."""

import json
import logging
from io import StringIO
from unittest.mock import patch

import structlog

from src.core.logging import (
    QUIET_LOGGERS,
    bind_contextvars,
    clear_contextvars,
    configure_logging,
    get_logger,
    unbind_contextvars,
)


class TestConfigureLogging:
    """Tests for configure_logging function."""

    def setup_method(self) -> None:
        """Reset structlog and logging configuration before each test."""
        structlog.reset_defaults()
        clear_contextvars()

    def test_configure_development_mode(self) -> None:
        """Should configure pretty-printed output in development mode."""
        configure_logging(development=True)
        logger = get_logger("test")
        logger.info("carousel_activated", slide_count=3)

    def test_configure_production_mode(self) -> None:
        """Should configure JSON output in production mode."""
        configure_logging(development=False)
        logger = get_logger("test")
        logger.info("carousel_activated", slide_count=3)

    def test_reads_environment_variable(self) -> None:
        """Should read ENVIRONMENT env var to determine mode."""
        with patch.dict("os.environ", {"ENVIRONMENT": "production"}):
            configure_logging()
            logger = get_logger("test")
            logger.info("test")

    def test_reads_log_level_environment_variable(self) -> None:
        """Should read LOG_LEVEL env var."""
        with patch.dict("os.environ", {"LOG_LEVEL": "DEBUG"}):
            configure_logging(development=True)
            assert logging.getLogger().level == logging.DEBUG

    def test_default_log_level_is_info(self) -> None:
        """Should default to INFO log level."""
        configure_logging(development=True, log_level="INFO")
        assert logging.getLogger().level == logging.INFO

    def test_unknown_log_level_falls_back_to_info(self) -> None:
        configure_logging(development=True, log_level="CHATTY")
        assert logging.getLogger().level == logging.INFO

    def test_silences_third_party_loggers(self) -> None:
        """Should set third-party loggers to WARNING level."""
        configure_logging(development=True, log_level="DEBUG")
        for name in QUIET_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING


class TestGetLogger:
    """Tests for get_logger function."""

    def setup_method(self) -> None:
        structlog.reset_defaults()
        configure_logging(development=True)

    def test_returns_bound_logger(self) -> None:
        """Should return a logger with the standard level methods."""
        logger = get_logger("src.core.carousel_logic")
        for method in ("debug", "info", "warning", "error"):
            assert hasattr(logger, method)

    def test_logger_without_name(self) -> None:
        logger = get_logger()
        logger.info("test message")


class TestContextVars:
    """Tests for context variable functions."""

    def setup_method(self) -> None:
        structlog.reset_defaults()
        clear_contextvars()
        configure_logging(development=True)

    def teardown_method(self) -> None:
        clear_contextvars()

    def test_bind_contextvars_adds_to_context(self) -> None:
        bind_contextvars(session_id="abc-123", resource="trending")
        context = structlog.contextvars.get_contextvars()
        assert context["session_id"] == "abc-123"
        assert context["resource"] == "trending"

    def test_clear_contextvars_removes_all(self) -> None:
        bind_contextvars(key1="value1", key2="value2")
        clear_contextvars()
        assert structlog.contextvars.get_contextvars() == {}

    def test_unbind_contextvars_removes_specific(self) -> None:
        bind_contextvars(keep="this", remove="that")
        unbind_contextvars("remove")
        assert structlog.contextvars.get_contextvars() == {"keep": "this"}


class TestProductionJsonOutput:
    """Tests for JSON output in production mode."""

    def setup_method(self) -> None:
        structlog.reset_defaults()
        clear_contextvars()

    def test_json_output_is_valid(self) -> None:
        """Should produce valid JSON carrying the event and its context."""
        output = StringIO()
        handler = logging.StreamHandler(output)
        handler.setLevel(logging.INFO)

        configure_logging(development=False, log_level="INFO")

        root_logger = logging.getLogger()
        root_logger.addHandler(handler)

        try:
            logger = get_logger("test")
            logger.info("fetch_succeeded", count=5)

            handler.flush()
            lines = [line for line in output.getvalue().splitlines() if line]
            assert lines
            parsed = json.loads(lines[-1])
            assert parsed["event"] == "fetch_succeeded"
            assert parsed["count"] == 5
            assert parsed["level"] == "info"
        finally:
            root_logger.removeHandler(handler)
