"""Tests for the Weaviate-backed SearchStore.

The async Weaviate client is patched out; these tests check client
construction, lazy connection, GraphQL dispatch and response unpacking.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from weaviate_algolia.databases.weaviate import WeaviateSearchStore
from weaviate_algolia.exceptions import SearchExecutionError
from weaviate_algolia.query_builder import CountQuery, DataQuery
from weaviate_algolia.types import FilterOperator, WhereFilter
from weaviate_algolia.utils.config import AdapterOptions


CLIENT_PATH = "weaviate_algolia.databases.weaviate.weaviate.WeaviateAsyncClient"


def _raw_response(get=None, aggregate=None, errors=None) -> SimpleNamespace:
    return SimpleNamespace(get=get or {}, aggregate=aggregate or {}, explore={}, errors=errors)


def _mock_client(connected: bool = True) -> MagicMock:
    client = MagicMock()
    client.is_connected = MagicMock(return_value=connected)
    client.connect = AsyncMock()
    client.close = AsyncMock()
    client.graphql_raw_query = AsyncMock()
    return client


class TestWeaviateSearchStoreInitialization:
    """Test suite for client construction."""

    @patch(CLIENT_PATH)
    def test_initialization_with_api_key(self, mock_client_cls) -> None:
        store = WeaviateSearchStore(url="https://cluster.weaviate.cloud", api_key="secret")

        kwargs = mock_client_cls.call_args.kwargs
        assert kwargs["auth_client_secret"] is not None
        assert kwargs["connection_params"].http.host == "cluster.weaviate.cloud"
        assert kwargs["connection_params"].http.secure is True
        assert store.client is mock_client_cls.return_value

    @patch(CLIENT_PATH)
    def test_initialization_anonymous(self, mock_client_cls) -> None:
        WeaviateSearchStore(url="http://localhost:8080")

        kwargs = mock_client_cls.call_args.kwargs
        assert kwargs["auth_client_secret"] is None
        assert kwargs["connection_params"].http.port == 8080
        assert kwargs["skip_init_checks"] is True

    @patch(CLIENT_PATH)
    def test_from_options(self, mock_client_cls) -> None:
        options = AdapterOptions(
            weaviate_url="http://localhost:8080",
            class_name="Product",
            headers={"X-OpenAI-Api-Key": "key"},
            grpc_port=50052,
        )
        store = WeaviateSearchStore.from_options(options)

        assert store.headers == {"X-OpenAI-Api-Key": "key"}
        assert store.grpc_port == 50052
        assert mock_client_cls.call_args.kwargs["additional_headers"] == {
            "X-OpenAI-Api-Key": "key"
        }

    @patch(CLIENT_PATH)
    def test_initialization_failure(self, mock_client_cls) -> None:
        mock_client_cls.side_effect = Exception("bad url")

        with pytest.raises(Exception, match="bad url"):
            WeaviateSearchStore(url="http://localhost:8080")


class TestWeaviateSearchStoreConnection:
    """Test suite for lazy connect and close."""

    @pytest.mark.asyncio
    async def test_connects_once_when_disconnected(self) -> None:
        with patch(CLIENT_PATH) as mock_client_cls:
            client = _mock_client(connected=False)
            mock_client_cls.return_value = client
            store = WeaviateSearchStore(url="http://localhost:8080")

            await store.connect()

        client.connect.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_skips_connect_when_connected(self) -> None:
        with patch(CLIENT_PATH) as mock_client_cls:
            client = _mock_client(connected=True)
            mock_client_cls.return_value = client
            store = WeaviateSearchStore(url="http://localhost:8080")

            await store.connect()
            await store.close()

        client.connect.assert_not_awaited()
        client.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_close_when_not_connected(self) -> None:
        with patch(CLIENT_PATH) as mock_client_cls:
            client = _mock_client(connected=False)
            mock_client_cls.return_value = client
            store = WeaviateSearchStore(url="http://localhost:8080")

            await store.close()

        client.close.assert_not_awaited()


class TestWeaviateSearchStoreQueries:
    """Test suite for fetch and count."""

    @pytest.fixture
    def store_and_client(self):
        with patch(CLIENT_PATH) as mock_client_cls:
            client = _mock_client()
            mock_client_cls.return_value = client
            yield WeaviateSearchStore(url="http://localhost:8080"), client

    @pytest.mark.asyncio
    async def test_fetch_returns_rows(self, store_and_client) -> None:
        store, client = store_and_client
        rows = [{"title": "iPhone 12", "_additional": {"id": "1", "distance": None}}]
        client.graphql_raw_query.return_value = _raw_response(get={"Product": rows})
        query = DataQuery(class_name="Product", fields=["title"], limit=2, offset=4)

        result = await store.fetch(query)

        assert result == rows
        gql = client.graphql_raw_query.await_args.args[0]
        assert gql == "{ Get { Product(limit: 2, offset: 4) { title } } }"

    @pytest.mark.asyncio
    async def test_fetch_missing_class_gives_empty(self, store_and_client) -> None:
        store, client = store_and_client
        client.graphql_raw_query.return_value = _raw_response(get={"Product": None})

        assert await store.fetch(DataQuery(class_name="Product", fields=["title"])) == []

    @pytest.mark.asyncio
    async def test_count(self, store_and_client) -> None:
        store, client = store_and_client
        client.graphql_raw_query.return_value = _raw_response(
            aggregate={"Product": [{"meta": {"count": 3}}]}
        )
        where = WhereFilter.leaf("price", FilterOperator.GREATER_THAN, 800)

        assert await store.count(CountQuery(class_name="Product", where=where)) == 3
        gql = client.graphql_raw_query.await_args.args[0]
        assert "Aggregate" in gql
        assert "operator: GreaterThan" in gql

    @pytest.mark.asyncio
    async def test_count_without_groups_is_zero(self, store_and_client) -> None:
        store, client = store_and_client
        client.graphql_raw_query.return_value = _raw_response(aggregate={"Product": []})

        assert await store.count(CountQuery(class_name="Product")) == 0

    @pytest.mark.asyncio
    async def test_graphql_errors_raise(self, store_and_client) -> None:
        store, client = store_and_client
        errors = [{"message": "invalid 'where' filter: NaN"}]
        client.graphql_raw_query.return_value = _raw_response(errors=errors)

        with pytest.raises(SearchExecutionError) as exc_info:
            await store.fetch(DataQuery(class_name="Product", fields=["title"]))

        assert exc_info.value.errors == errors

    @pytest.mark.asyncio
    async def test_transport_errors_propagate(self, store_and_client) -> None:
        store, client = store_and_client
        client.graphql_raw_query.side_effect = ConnectionError("refused")

        with pytest.raises(ConnectionError, match="refused"):
            await store.count(CountQuery(class_name="Product"))
