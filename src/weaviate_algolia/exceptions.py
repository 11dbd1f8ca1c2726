"""Exceptions raised by the search adapter."""

from typing import Any, Optional


class SearchAdapterError(Exception):
    """Base class for adapter errors."""


class ConfigurationError(SearchAdapterError):
    """Adapter configuration is missing a required value."""


class FilterParseError(SearchAdapterError, ValueError):
    """A filter string could not be translated into a predicate tree.

    Never escapes :func:`weaviate_algolia.filters.translate`; it is captured
    into a failed ``FilterParseResult`` so the search runs unfiltered.
    """

    def __init__(self, message: str, clause: Optional[str] = None) -> None:
        super().__init__(message)
        self.clause = clause


class SearchExecutionError(SearchAdapterError):
    """Weaviate answered a query with GraphQL errors."""

    def __init__(self, message: str, errors: Optional[list[Any]] = None) -> None:
        super().__init__(message)
        self.errors = errors or []
