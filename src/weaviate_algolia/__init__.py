"""Algolia-compatible search over Weaviate.

This package translates Algolia multi-query requests (text query, filter
string, vector directives, sort, pagination) into Weaviate GraphQL queries and
reshapes the results into Algolia result pages.
"""

from weaviate_algolia.adapter import WeaviateSearchAdapter
from weaviate_algolia.databases import SearchStore, WeaviateSearchStore
from weaviate_algolia.exceptions import (
    ConfigurationError,
    FilterParseError,
    SearchAdapterError,
    SearchExecutionError,
)
from weaviate_algolia.filters import FilterParseResult, FilterStatus, parse_filters, translate
from weaviate_algolia.query_builder import BuiltQueries, CountQuery, DataQuery, build_queries
from weaviate_algolia.types import (
    FilterOperator,
    NearObjectParams,
    NearTextParams,
    SearchParams,
    SearchRequest,
    SearchResponse,
    SortBy,
    WhereFilter,
)
from weaviate_algolia.utils.config import AdapterOptions, load_adapter_options


__all__ = [
    "AdapterOptions",
    "BuiltQueries",
    "ConfigurationError",
    "CountQuery",
    "DataQuery",
    "FilterOperator",
    "FilterParseError",
    "FilterParseResult",
    "FilterStatus",
    "NearObjectParams",
    "NearTextParams",
    "SearchAdapterError",
    "SearchExecutionError",
    "SearchParams",
    "SearchRequest",
    "SearchResponse",
    "SearchStore",
    "SortBy",
    "WeaviateSearchAdapter",
    "WeaviateSearchStore",
    "WhereFilter",
    "build_queries",
    "load_adapter_options",
    "parse_filters",
    "translate",
]
