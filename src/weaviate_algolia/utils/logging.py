"""Logging utilities for the weaviate_algolia package.

A single factory configures the root handler once per process, so modules can
ask for named loggers without stacking duplicate handlers.

Usage:
    >>> from weaviate_algolia.utils.logging import LoggerFactory
    >>> logger = LoggerFactory(__name__).get_logger()
    >>> logger.info("Translating filters")

    # Or pick the level from LOG_LEVEL
    >>> logger = LoggerFactory.configure_from_env(__name__).get_logger()
"""

import logging
import os


class LoggerFactory:
    """Create named loggers sharing one process-wide configuration.

    Attributes:
        logger_name (str): Name of the logger to create.
        log_level (int): Level applied by the first factory in the process.
        log_format (str): Format applied by the first factory in the process.
        logger (logging.Logger): The named logger.
    """

    _is_logger_initialized: bool = False

    def __init__(
        self,
        logger_name: str,
        log_level: int = logging.INFO,
        log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    ) -> None:
        """Initialize the factory and resolve the named logger.

        Args:
            logger_name (str): Name of the logger to create.
            log_level (int, optional): Logging level (default is logging.INFO).
            log_format (str, optional): Format for log records.
        """
        self.logger_name = logger_name
        self.log_level = log_level
        self.log_format = log_format
        self.logger = self._initialize_logger()

    def _initialize_logger(self) -> logging.Logger:
        if not LoggerFactory._is_logger_initialized:
            logging.basicConfig(level=self.log_level, format=self.log_format)
            LoggerFactory._is_logger_initialized = True

        logger = logging.getLogger(self.logger_name)
        logger.setLevel(self.log_level)
        return logger

    def get_logger(self) -> logging.Logger:
        """Return the configured logger instance."""
        return self.logger

    @staticmethod
    def configure_from_env(
        logger_name: str, env_var: str = "LOG_LEVEL"
    ) -> "LoggerFactory":
        """Build a factory whose level comes from an environment variable.

        Args:
            logger_name (str): Name of the logger to create.
            env_var (str, optional): Variable holding the level name.

        Returns:
            LoggerFactory: Factory at the requested level, INFO if unset or invalid.
        """
        log_level_str = os.getenv(env_var, "INFO").upper()
        log_level = getattr(logging, log_level_str, logging.INFO)
        if not isinstance(log_level, int):
            log_level = logging.INFO
        return LoggerFactory(logger_name, log_level=log_level)
