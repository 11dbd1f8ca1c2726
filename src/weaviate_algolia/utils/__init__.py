"""Shared utilities: logging, configuration loading and timing."""

from weaviate_algolia.utils.config import (
    DEFAULT_FIELDS,
    AdapterOptions,
    load_adapter_options,
    load_config,
    options_from_config,
    resolve_env_vars,
    setup_logger,
)
from weaviate_algolia.utils.logging import LoggerFactory
from weaviate_algolia.utils.timer import Timer


__all__ = [
    # Config
    "DEFAULT_FIELDS",
    "AdapterOptions",
    "load_adapter_options",
    "load_config",
    "options_from_config",
    "resolve_env_vars",
    "setup_logger",
    # Logging
    "LoggerFactory",
    # Timing
    "Timer",
]
