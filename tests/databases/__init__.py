"""Tests for store implementations in ``weaviate_algolia.databases``."""
