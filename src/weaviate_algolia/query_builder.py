"""Assemble Weaviate queries from Algolia search parameters.

Each request becomes a pair of queries over the same class and filter: a
``Get`` query for the page of hits and an ``Aggregate`` query for the total
match count used in pagination. Building is pure; nothing here talks to
Weaviate.

Search mode selection:
    - ``hybrid`` with a query: hybrid search (BM25 + vector, alpha 0.5)
    - query only: BM25 keyword search
    - nearText / nearObject: passed through as given, alongside any of the above
    - nothing: plain listing, filtered and sorted
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from weaviate_algolia.filters import FilterParseResult, parse_filters
from weaviate_algolia.types import (
    GRAPHQL_NAME,
    NearObjectParams,
    NearTextParams,
    SearchParams,
    WhereFilter,
)
from weaviate_algolia.utils.config import AdapterOptions
from weaviate_algolia.utils.logging import LoggerFactory


logger_factory = LoggerFactory(logger_name=__name__, log_level=logging.INFO)
logger = logger_factory.get_logger()


DEFAULT_HITS_PER_PAGE = 20

# Equal weight between BM25 and vector scoring.
HYBRID_ALPHA = 0.5

ADDITIONAL_FIELDS = "_additional { id distance }"

WILDCARD_ATTRIBUTE = "*"


@dataclass
class Bm25Directive:
    query: str


@dataclass
class HybridDirective:
    query: str
    alpha: float = HYBRID_ALPHA


@dataclass
class SortDirective:
    path: list[str]
    order: str = "asc"


@dataclass
class DataQuery:
    """A ``Get`` query for one page of hits.

    Attributes:
        class_name: Weaviate class to query.
        fields: GraphQL selection for each hit.
        bm25: Keyword search directive.
        hybrid: Hybrid search directive.
        near_text: nearText directive, unchanged from the request.
        near_object: nearObject directive, unchanged from the request.
        where: Predicate tree.
        sort: Sort keys, primary first.
        limit: Page size.
        offset: Rows to skip.
    """

    class_name: str
    fields: list[str]
    bm25: Optional[Bm25Directive] = None
    hybrid: Optional[HybridDirective] = None
    near_text: Optional[NearTextParams] = None
    near_object: Optional[NearObjectParams] = None
    where: Optional[WhereFilter] = None
    sort: list[SortDirective] = field(default_factory=list)
    limit: int = DEFAULT_HITS_PER_PAGE
    offset: int = 0


@dataclass
class CountQuery:
    """An ``Aggregate`` query counting every match of ``where``."""

    class_name: str
    where: Optional[WhereFilter] = None


@dataclass
class BuiltQueries:
    data_query: DataQuery
    count_query: CountQuery
    filter_result: FilterParseResult


def resolve_fields(params: SearchParams, options: AdapterOptions) -> list[str]:
    """Pick the hit selection: request attributes, then configured defaults.

    Attribute names are spliced into the GraphQL selection set, so only plain
    property names are accepted. ``"*"`` (Algolia's "all attributes") and any
    invalid name fall back to the configured selection.

    Args:
        params: Parsed request parameters.
        options: Adapter settings carrying the configured selection.

    Returns:
        list[str]: Selection set entries for the ``Get`` query.
    """
    attributes = params.attributes_to_retrieve or options.attributes_to_retrieve
    if isinstance(attributes, str):
        attributes = [attributes]
    if not attributes or WILDCARD_ATTRIBUTE in attributes:
        return options.selection_fields

    invalid = [
        name for name in attributes if not isinstance(name, str) or not GRAPHQL_NAME.match(name)
    ]
    if invalid:
        logger.warning(
            f"Ignoring attributesToRetrieve with invalid property names {invalid!r}, "
            "using the configured fields."
        )
        return options.selection_fields
    return [*attributes, ADDITIONAL_FIELDS]


def build_queries(params: SearchParams, options: AdapterOptions) -> BuiltQueries:
    """Build the data and count queries for one search request.

    Args:
        params: Parsed request parameters.
        options: Adapter settings providing the class name and default fields.

    Returns:
        BuiltQueries: Both queries, sharing one ``where`` tree, plus the
            filter translation outcome.
    """
    limit = params.hits_per_page or DEFAULT_HITS_PER_PAGE
    offset = (params.page or 0) * limit

    data_query = DataQuery(
        class_name=options.class_name,
        fields=resolve_fields(params, options),
        near_text=params.near_text,
        near_object=params.near_object,
        limit=limit,
        offset=offset,
    )

    if params.hybrid and params.query:
        data_query.hybrid = HybridDirective(query=params.query)
    elif params.query:
        data_query.bm25 = Bm25Directive(query=params.query)

    data_query.sort = [
        SortDirective(path=[sort.property], order=sort.order or "asc")
        for sort in params.sort_by
    ]

    filter_result = parse_filters(params.filters)
    data_query.where = filter_result.where

    count_query = CountQuery(class_name=options.class_name, where=filter_result.where)

    logger.debug(
        f"Built query for {options.class_name}: limit={limit} offset={offset} "
        f"filter={filter_result.status.value}"
    )
    return BuiltQueries(
        data_query=data_query, count_query=count_query, filter_result=filter_result
    )
