"""Configuration utilities for the search adapter.

Adapter settings come from a YAML file (or an already-parsed dict) with
environment variable substitution, so credentials never live in the file.

Environment Variable Syntax:
    - ${VAR}: Substitute with environment variable VAR, empty string if unset
    - ${VAR:-default}: Substitute with VAR if set, otherwise use 'default'

Expected layout::

    weaviate:
      url: ${WEAVIATE_URL:-http://localhost:8080}
      class_name: Product
      api_key: ${WEAVIATE_API_KEY:-}
      fields:
        - "title description price _additional { id distance }"
    logging:
      name: weaviate_algolia
      level: INFO

Usage:
    >>> from weaviate_algolia.utils.config import load_adapter_options
    >>> options = load_adapter_options("configs/weaviate_algolia.yaml")
"""

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union

import yaml

from weaviate_algolia.exceptions import ConfigurationError
from weaviate_algolia.utils.logging import LoggerFactory


DEFAULT_FIELDS: list[str] = ["title description price _additional { id distance }"]

DEFAULT_GRPC_PORT = 50051


@dataclass
class AdapterOptions:
    """Connection and retrieval settings for one Weaviate class.

    Attributes:
        weaviate_url: Base URL (scheme + host[:port]) of the Weaviate instance.
        class_name: Weaviate class (collection) to search.
        api_key: Optional API key credential.
        fields: GraphQL selection used for hits; ``None`` uses DEFAULT_FIELDS.
        headers: Extra HTTP headers (e.g. vectorizer module API keys).
        grpc_port: gRPC port the client is configured with.
        skip_init_checks: Skip the client's startup health checks.
        attributes_to_retrieve: Properties returned when a request names
            none; takes precedence over ``fields``.
        attributes_to_highlight: Accepted for Algolia parity; highlighting is
            not performed.
    """

    weaviate_url: str
    class_name: str
    api_key: Optional[str] = None
    fields: Optional[list[str]] = None
    headers: dict[str, str] = field(default_factory=dict)
    grpc_port: int = DEFAULT_GRPC_PORT
    skip_init_checks: bool = True
    attributes_to_retrieve: Optional[list[str]] = None
    attributes_to_highlight: Optional[list[str]] = None

    @property
    def selection_fields(self) -> list[str]:
        return list(self.fields) if self.fields else list(DEFAULT_FIELDS)


def resolve_env_vars(value: Any) -> Any:
    """Resolve environment variables in configuration values.

    Args:
        value: A string, dict or list, possibly nested.

    Returns:
        The value with every ``${...}`` reference expanded.
    """
    if isinstance(value, str):
        pattern = r"\$\{([^}]+)\}"

        def replacer(match: re.Match[str]) -> str:
            expr = match.group(1)
            if ":-" in expr:
                var, default = expr.split(":-", 1)
                return os.environ.get(var, default)
            return os.environ.get(expr, "")

        return re.sub(pattern, replacer, value)
    if isinstance(value, dict):
        return {k: resolve_env_vars(v) for k, v in value.items()}
    if isinstance(value, list):
        return [resolve_env_vars(item) for item in value]
    return value


def load_config(config_or_path: Union[dict[str, Any], str, Path]) -> dict[str, Any]:
    """Load configuration from a dict or YAML file, resolving env vars.

    Raises:
        FileNotFoundError: If the configuration file does not exist.
        yaml.YAMLError: If the YAML file is malformed.
    """
    if isinstance(config_or_path, dict):
        return resolve_env_vars(config_or_path)

    with open(config_or_path) as f:
        config = yaml.safe_load(f)
    return resolve_env_vars(config or {})


def setup_logger(config: dict[str, Any]) -> logging.Logger:
    """Set up a logger from the ``logging`` section of a config."""
    logging_config = config.get("logging", {}) or {}
    logger_name = logging_config.get("name", "weaviate_algolia")
    log_level_str = str(logging_config.get("level", "INFO"))
    log_level = getattr(logging, log_level_str.upper(), logging.INFO)

    factory = LoggerFactory(logger_name, log_level=log_level)
    return factory.get_logger()


def options_from_config(config: dict[str, Any]) -> AdapterOptions:
    """Build AdapterOptions from the ``weaviate`` section of a resolved config.

    Raises:
        ConfigurationError: If ``url`` or ``class_name`` is missing or empty.
    """
    section = config.get("weaviate") or {}
    missing = [key for key in ("url", "class_name") if not section.get(key)]
    if missing:
        raise ConfigurationError(f"Missing required weaviate config keys: {missing}")

    fields = section.get("fields")
    if isinstance(fields, str):
        fields = [fields]

    return AdapterOptions(
        weaviate_url=section["url"],
        class_name=section["class_name"],
        api_key=section.get("api_key") or None,
        fields=fields or None,
        headers=dict(section.get("headers") or {}),
        grpc_port=int(section.get("grpc_port", DEFAULT_GRPC_PORT)),
        skip_init_checks=bool(section.get("skip_init_checks", True)),
        attributes_to_retrieve=section.get("attributes_to_retrieve"),
        attributes_to_highlight=section.get("attributes_to_highlight"),
    )


def load_adapter_options(config_or_path: Union[dict[str, Any], str, Path]) -> AdapterOptions:
    """Load a config source and return its AdapterOptions."""
    return options_from_config(load_config(config_or_path))
