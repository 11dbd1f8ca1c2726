"""Weaviate store backed by the async v4 Python client.

Queries are rendered to GraphQL and sent through ``graphql_raw_query`` so
that every Algolia modifier maps one-to-one onto Weaviate's ``Get`` and
``Aggregate`` arguments (BM25, hybrid, nearText, nearObject, where, sort,
limit, offset), including combinations the collection API does not expose.

Architecture:
    - One WeaviateAsyncClient per store, shared by all in-flight queries
    - Lazy connection on first use, serialized by an asyncio.Lock
    - GraphQL errors surface as SearchExecutionError; transport errors
      propagate unchanged

Usage Example:
    >>> store = WeaviateSearchStore(url="http://localhost:8080")
    >>> rows = await store.fetch(data_query)
    >>> total = await store.count(count_query)
    >>> await store.close()
"""

import asyncio
import logging
from typing import Any, Optional
from urllib.parse import urlparse

import weaviate
from weaviate.classes.init import Auth
from weaviate.connect import ConnectionParams

from weaviate_algolia.databases.base import SearchStore
from weaviate_algolia.exceptions import SearchExecutionError
from weaviate_algolia.graphql import render_aggregate_query, render_get_query
from weaviate_algolia.query_builder import CountQuery, DataQuery
from weaviate_algolia.utils.config import DEFAULT_GRPC_PORT, AdapterOptions
from weaviate_algolia.utils.logging import LoggerFactory


logger_factory = LoggerFactory(logger_name=__name__, log_level=logging.INFO)
logger = logger_factory.get_logger()


class WeaviateSearchStore(SearchStore):
    """Executes data and count queries against a Weaviate instance.

    Attributes:
        url: Base URL of the Weaviate instance (scheme + host[:port]).
        api_key: Optional API key; anonymous access when ``None``.
        headers: Additional HTTP headers (e.g. vectorizer module keys).
        grpc_port: gRPC port the client is configured with.
        skip_init_checks: Skip the client's startup health checks.
        client: The async Weaviate client.
    """

    def __init__(
        self,
        url: str,
        api_key: Optional[str] = None,
        headers: Optional[dict[str, str]] = None,
        grpc_port: int = DEFAULT_GRPC_PORT,
        skip_init_checks: bool = True,
    ):
        """Initialize the store and build (but not connect) the client.

        Args:
            url (str): Base URL of the Weaviate instance.
            api_key (Optional[str]): API key credential.
            headers (Optional[dict[str, str]]): Additional request headers.
            grpc_port (int): gRPC port for the client connection parameters.
            skip_init_checks (bool): Skip startup health checks on connect.
        """
        self.url = url
        self.api_key = api_key
        self.headers = headers or {}
        self.grpc_port = grpc_port
        self.skip_init_checks = skip_init_checks

        self._connect_lock = asyncio.Lock()

        logger.info(f"Initializing Weaviate client for {url}.")
        try:
            self.client = weaviate.WeaviateAsyncClient(
                connection_params=self._connection_params(),
                auth_client_secret=Auth.api_key(api_key) if api_key else None,
                additional_headers=self.headers,
                skip_init_checks=skip_init_checks,
            )
        except Exception as e:
            logger.error(f"Failed to initialize Weaviate client: {e}")
            raise

    @classmethod
    def from_options(cls, options: AdapterOptions) -> "WeaviateSearchStore":
        """Create a store from adapter settings.

        Args:
            options (AdapterOptions): URL, credentials, headers and client flags.

        Returns:
            WeaviateSearchStore: A store whose client is built but not connected.
        """
        return cls(
            url=options.weaviate_url,
            api_key=options.api_key,
            headers=options.headers,
            grpc_port=options.grpc_port,
            skip_init_checks=options.skip_init_checks,
        )

    def _connection_params(self) -> ConnectionParams:
        secure = urlparse(self.url).scheme == "https"
        return ConnectionParams.from_url(
            self.url, grpc_port=self.grpc_port, grpc_secure=secure
        )

    async def connect(self) -> None:
        """Connect the client if it is not connected yet.

        Concurrent callers share one connection attempt.

        Returns:
            None

        Raises:
            Exception: Whatever the client raises when the instance is
                unreachable or rejects the credentials.
        """
        async with self._connect_lock:
            if self.client.is_connected():
                return
            try:
                await self.client.connect()
            except Exception as e:
                logger.error(f"Failed to connect to Weaviate at {self.url}: {e}")
                raise
            logger.info("Weaviate client connected.")

    async def close(self) -> None:
        """Close the client connection.

        Returns:
            None

        Note:
            Safe to call when never connected or already closed.
        """
        if self.client.is_connected():
            await self.client.close()
            logger.info("Weaviate client connection closed.")

    async def _run(self, gql: str) -> Any:
        await self.connect()
        logger.debug(f"Executing GraphQL: {gql}")
        response = await self.client.graphql_raw_query(gql)
        if response.errors:
            msg = f"Weaviate rejected query: {response.errors}"
            logger.error(msg)
            errors = response.errors if isinstance(response.errors, list) else [response.errors]
            raise SearchExecutionError(msg, errors=errors)
        return response

    async def fetch(self, query: DataQuery) -> list[dict[str, Any]]:
        """Run the ``Get`` query and return its rows, ``[]`` when none."""
        response = await self._run(render_get_query(query))
        return list((response.get or {}).get(query.class_name) or [])

    async def count(self, query: CountQuery) -> int:
        """Run the ``Aggregate`` query and return ``meta.count``, 0 when absent."""
        response = await self._run(render_aggregate_query(query))
        groups = (response.aggregate or {}).get(query.class_name) or []
        if not groups:
            return 0
        meta = groups[0].get("meta") or {}
        return int(meta.get("count") or 0)
