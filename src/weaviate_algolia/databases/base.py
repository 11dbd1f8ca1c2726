"""Store collaborator contract consumed by the search adapter."""

from abc import ABC, abstractmethod
from typing import Any

from weaviate_algolia.query_builder import CountQuery, DataQuery


class SearchStore(ABC):
    """Executes built queries.

    Implementations must allow ``fetch`` and ``count`` calls to be in flight
    concurrently on one instance.
    """

    async def connect(self) -> None:
        """Open the underlying connection; the default is a no-op."""

    async def close(self) -> None:
        """Release the underlying connection; the default is a no-op."""

    @abstractmethod
    async def fetch(self, query: DataQuery) -> list[dict[str, Any]]:
        """Return the rows for one page of hits."""

    @abstractmethod
    async def count(self, query: CountQuery) -> int:
        """Return the total number of objects matching the query's filter."""
