"""Store implementations executing built queries."""

from weaviate_algolia.databases.base import SearchStore
from weaviate_algolia.databases.weaviate import WeaviateSearchStore


__all__ = ["SearchStore", "WeaviateSearchStore"]
