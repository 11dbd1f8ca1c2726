"""Test suite for the weaviate_algolia package.

- tests/: filter translation, query building, GraphQL rendering, response
  normalization and the batch search facade
- tests/databases: the Weaviate-backed store, with the client patched out
- tests/utils: configuration, logging and timing helpers

No test needs a running Weaviate instance.
"""
