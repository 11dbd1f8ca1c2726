"""Reshape Weaviate rows into an Algolia result page."""

import math
from typing import Any, Optional

from weaviate_algolia.query_builder import DEFAULT_HITS_PER_PAGE
from weaviate_algolia.types import SearchParams, SearchResponse


def score_from_row(row: dict[str, Any]) -> Optional[float]:
    """Similarity score ``1 - distance``, or ``None`` for pure keyword matches."""
    additional = row.get("_additional") or {}
    distance = additional.get("distance")
    if distance is None:
        return None
    return 1 - distance


def count_pages(total_count: int, hits_per_page: int) -> int:
    """Number of pages needed to show every match.

    Args:
        total_count: Matches reported by the count query.
        hits_per_page: Page size used for the data query.

    Returns:
        int: ``ceil(total_count / hits_per_page)``, or 0 with no matches.
    """
    if total_count <= 0:
        return 0
    return math.ceil(total_count / hits_per_page)


def normalize(
    rows: list[dict[str, Any]],
    total_count: int,
    params: SearchParams,
    elapsed_ms: float,
) -> SearchResponse:
    """Build the Algolia page for one request.

    Args:
        rows: Hits returned by the ``Get`` query, in order.
        total_count: Matches reported by the ``Aggregate`` query.
        params: The request's parameters; page and page size are echoed.
        elapsed_ms: Time spent serving the request.

    Returns:
        SearchResponse: ``nbHits`` counts rows in this page only, while
            ``nbPages`` is derived from ``total_count``.
    """
    hits_per_page = params.hits_per_page or DEFAULT_HITS_PER_PAGE
    hits = [{**row, "_score": score_from_row(row)} for row in rows]

    return SearchResponse(
        hits=hits,
        nb_hits=len(hits),
        page=params.page or 0,
        nb_pages=count_pages(total_count, hits_per_page),
        hits_per_page=hits_per_page,
        processing_time_ms=int(elapsed_ms),
        query=params.query or "",
    )
