"""Tests for logging utilities.

Test coverage includes:
    - Logger instance creation and naming
    - Custom and environment-driven log levels
    - Log message emission
"""

import logging
from unittest.mock import patch

from weaviate_algolia.utils.logging import LoggerFactory


class TestLoggerFactory:
    """Test suite for LoggerFactory."""

    def test_logger_factory_creates_logger(self) -> None:
        """Test that LoggerFactory creates a logger instance."""
        logger = LoggerFactory(logger_name=__name__).get_logger()

        assert isinstance(logger, logging.Logger)

    def test_logger_factory_logger_name(self) -> None:
        """Test that logger uses correct name."""
        logger = LoggerFactory(logger_name="weaviate_algolia.test").get_logger()

        assert logger.name == "weaviate_algolia.test"

    def test_logger_factory_with_custom_level(self) -> None:
        """Test that the requested level is applied to the named logger."""
        logger = LoggerFactory(logger_name="test_debug", log_level=logging.DEBUG).get_logger()

        assert logger.level == logging.DEBUG

    def test_logger_factory_logs_warning(self, caplog) -> None:
        """Test that logger can emit warning messages."""
        with caplog.at_level(logging.WARNING):
            logger = LoggerFactory(logger_name="test_warning").get_logger()
            logger.warning("Test warning message")

        assert "Test warning message" in caplog.text

    def test_logger_factory_multiple_calls_same_name(self) -> None:
        """Test that factories with the same name share one logger."""
        logger1 = LoggerFactory(logger_name="test_same").get_logger()
        logger2 = LoggerFactory(logger_name="test_same").get_logger()

        assert logger1 is logger2


class TestConfigureFromEnv:
    """Test suite for LOG_LEVEL-driven configuration."""

    @patch.dict("os.environ", {"LOG_LEVEL": "debug"})
    def test_level_from_env(self) -> None:
        factory = LoggerFactory.configure_from_env("test_env_debug")

        assert factory.log_level == logging.DEBUG

    @patch.dict("os.environ", {"LOG_LEVEL": "LOUD"})
    def test_invalid_level_defaults_to_info(self) -> None:
        factory = LoggerFactory.configure_from_env("test_env_invalid")

        assert factory.log_level == logging.INFO

    @patch.dict("os.environ", {}, clear=True)
    def test_missing_env_defaults_to_info(self) -> None:
        factory = LoggerFactory.configure_from_env("test_env_missing")

        assert factory.log_level == logging.INFO
