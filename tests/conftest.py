"""Shared fixtures for adapter tests.

Fixtures:
    adapter_options: AdapterOptions for a ``Product`` class on localhost.
    product_rows: Three phone rows as Weaviate returns them from ``Get``.
    fake_store: In-memory SearchStore recording every query it receives.
"""

import asyncio
from typing import Any, Optional

import pytest

from weaviate_algolia.databases.base import SearchStore
from weaviate_algolia.query_builder import CountQuery, DataQuery
from weaviate_algolia.utils.config import AdapterOptions


class FakeStore(SearchStore):
    """SearchStore stub serving fixed rows.

    ``fetch`` pages through ``rows`` with the query's limit/offset and
    ``count`` reports ``len(rows)`` unless ``total_count`` overrides it.
    ``delays`` maps a query text to seconds slept inside ``fetch``.
    """

    def __init__(
        self,
        rows: Optional[list[dict[str, Any]]] = None,
        total_count: Optional[int] = None,
        delays: Optional[dict[str, float]] = None,
        error: Optional[Exception] = None,
    ) -> None:
        self.rows = rows or []
        self.total_count = total_count
        self.delays = delays or {}
        self.error = error
        self.data_queries: list[DataQuery] = []
        self.count_queries: list[CountQuery] = []
        self.connected = False
        self.closed = False

    async def connect(self) -> None:
        self.connected = True

    async def close(self) -> None:
        self.closed = True

    async def fetch(self, query: DataQuery) -> list[dict[str, Any]]:
        self.data_queries.append(query)
        text = query.bm25.query if query.bm25 else ""
        await asyncio.sleep(self.delays.get(text, 0))
        if self.error is not None:
            raise self.error
        return self.rows[query.offset : query.offset + query.limit]

    async def count(self, query: CountQuery) -> int:
        self.count_queries.append(query)
        if self.total_count is not None:
            return self.total_count
        return len(self.rows)


@pytest.fixture
def adapter_options() -> AdapterOptions:
    return AdapterOptions(weaviate_url="http://localhost:8080", class_name="Product")


@pytest.fixture
def product_rows() -> list[dict[str, Any]]:
    return [
        {
            "title": "iPhone 12",
            "description": "A great smartphone with amazing features",
            "price": 799,
            "_additional": {"id": "id-1", "distance": None},
        },
        {
            "title": "Samsung Galaxy S21",
            "description": "Android flagship with excellent camera",
            "price": 899,
            "_additional": {"id": "id-2", "distance": 0.25},
        },
        {
            "title": "Google Pixel 6",
            "description": "Pure Android experience with great AI features",
            "price": 699,
            "_additional": {"id": "id-3", "distance": 0.0},
        },
    ]


@pytest.fixture
def fake_store(product_rows) -> FakeStore:
    return FakeStore(rows=product_rows)
