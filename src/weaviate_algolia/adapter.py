"""Algolia-compatible search facade over Weaviate.

``WeaviateSearchAdapter.search`` accepts the body of an Algolia multi-query
call and answers with ``{"results": [...]}``, one page per request in input
order. Requests run concurrently and, within each request, the hit query and
the count query run concurrently.

A failure in any request fails the whole batch; there is no per-request
error isolation.

Usage Example:
    >>> async with WeaviateSearchAdapter(
    ...     AdapterOptions(weaviate_url="http://localhost:8080", class_name="Product")
    ... ) as adapter:
    ...     response = await adapter.search(
    ...         [{"params": {"query": "phone", "filters": "price:<700"}}]
    ...     )
"""

import asyncio
import logging
from pathlib import Path
from typing import Any, Optional, Union

from weaviate_algolia.databases.base import SearchStore
from weaviate_algolia.databases.weaviate import WeaviateSearchStore
from weaviate_algolia.normalizer import normalize
from weaviate_algolia.query_builder import build_queries
from weaviate_algolia.types import SearchRequest, SearchResponse
from weaviate_algolia.utils.config import (
    AdapterOptions,
    load_config,
    options_from_config,
    setup_logger,
)
from weaviate_algolia.utils.logging import LoggerFactory
from weaviate_algolia.utils.timer import Timer


logger_factory = LoggerFactory(logger_name=__name__, log_level=logging.INFO)
logger = logger_factory.get_logger()


RequestLike = Union[SearchRequest, dict[str, Any]]


class WeaviateSearchAdapter:
    """Serve Algolia-style search batches from a Weaviate class.

    Attributes:
        options: Connection and retrieval settings.
        store: Executes the built queries; owns the Weaviate client.
    """

    def __init__(self, options: AdapterOptions, store: Optional[SearchStore] = None):
        """Initialize the adapter.

        Args:
            options (AdapterOptions): Class name, URL, credentials, fields.
            store (Optional[SearchStore]): Query executor; a
                WeaviateSearchStore built from ``options`` when omitted.
        """
        self.options = options
        self.store = store or WeaviateSearchStore.from_options(options)

    @classmethod
    def from_config(
        cls, config_or_path: Union[dict[str, Any], str, Path]
    ) -> "WeaviateSearchAdapter":
        """Create an adapter from a YAML file or dict, see utils.config."""
        config = load_config(config_or_path)
        setup_logger(config)
        return cls(options_from_config(config))

    async def connect(self) -> None:
        """Open the store connection ahead of the first search.

        WeaviateSearchStore also connects on first query, so this is optional.

        Returns:
            None
        """
        await self.store.connect()

    async def close(self) -> None:
        """Release the store connection.

        Returns:
            None
        """
        await self.store.close()

    async def __aenter__(self) -> "WeaviateSearchAdapter":
        await self.connect()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    async def search(self, requests: list[RequestLike]) -> dict[str, list[dict[str, Any]]]:
        """Answer a batch of Algolia search requests.

        Args:
            requests: ``SearchRequest`` objects or raw ``{"params": {...}}`` dicts.

        Returns:
            ``{"results": [...]}`` with one Algolia page dict per request, in
            the order the requests were given.

        Raises:
            SearchExecutionError: If Weaviate rejects any query.
            Exception: Transport errors from the Weaviate client.
        """
        parsed = [
            request if isinstance(request, SearchRequest) else SearchRequest.from_dict(request)
            for request in requests
        ]
        # gather keeps input order regardless of completion order.
        pages = await asyncio.gather(*(self._search_one(request) for request in parsed))
        return {"results": [page.to_dict() for page in pages]}

    async def _search_one(self, request: SearchRequest) -> SearchResponse:
        params = request.params
        with Timer() as timer:
            try:
                queries = build_queries(params, self.options)
                rows, total_count = await asyncio.gather(
                    self.store.fetch(queries.data_query),
                    self.store.count(queries.count_query),
                )
            except Exception as e:
                logger.error(f"Weaviate search error: {e}")
                raise
            return normalize(rows, total_count, params, timer.elapsed_ms)
