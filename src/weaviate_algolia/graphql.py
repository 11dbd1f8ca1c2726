"""Render built queries as Weaviate GraphQL documents.

GraphQL input objects differ from JSON in two ways that matter here: object
keys are bare names, and enum values (filter operators, sort order) are bare
identifiers rather than strings. ``GraphQLEnum`` marks the latter.

Example:
    >>> render_aggregate_query(CountQuery(class_name="Product"))
    '{ Aggregate { Product { meta { count } } } }'
"""

import json
from dataclasses import dataclass
from typing import Any

from weaviate_algolia.query_builder import CountQuery, DataQuery
from weaviate_algolia.types import GRAPHQL_NAME, WhereFilter


__all__ = [
    "GraphQLEnum",
    "to_graphql_value",
    "where_argument",
    "render_get_query",
    "render_aggregate_query",
]


@dataclass(frozen=True)
class GraphQLEnum:
    name: str


def to_graphql_value(value: Any) -> str:
    """Serialize a Python value as a GraphQL input literal."""
    if isinstance(value, GraphQLEnum):
        return value.name
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        # json renders NaN as NaN, which Weaviate rejects as it should.
        return json.dumps(value)
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    if isinstance(value, dict):
        for key in value:
            if not isinstance(key, str) or not GRAPHQL_NAME.match(key):
                raise ValueError(f"Cannot render {key!r} as a GraphQL input key")
        items = ", ".join(f"{key}: {to_graphql_value(item)}" for key, item in value.items())
        return "{" + items + "}"
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(to_graphql_value(item) for item in value) + "]"
    raise TypeError(f"Cannot render {type(value).__name__} as a GraphQL value")


def where_argument(where: WhereFilter) -> dict[str, Any]:
    """The ``where`` dict with operators marked as enum values."""
    argument = where.to_dict()
    argument["operator"] = GraphQLEnum(argument["operator"])
    if "operands" in argument:
        argument["operands"] = [where_argument(operand) for operand in where.operands]
    return argument


def _get_arguments(query: DataQuery) -> dict[str, Any]:
    arguments: dict[str, Any] = {}
    if query.bm25 is not None:
        arguments["bm25"] = {"query": query.bm25.query}
    if query.hybrid is not None:
        arguments["hybrid"] = {"query": query.hybrid.query, "alpha": query.hybrid.alpha}
    if query.near_text is not None:
        arguments["nearText"] = query.near_text.to_dict()
    if query.near_object is not None:
        arguments["nearObject"] = query.near_object.to_dict()
    if query.where is not None:
        arguments["where"] = where_argument(query.where)
    if query.sort:
        arguments["sort"] = [
            {"path": list(sort.path), "order": GraphQLEnum(sort.order)} for sort in query.sort
        ]
    arguments["limit"] = query.limit
    arguments["offset"] = query.offset
    return arguments


def _render_arguments(arguments: dict[str, Any]) -> str:
    if not arguments:
        return ""
    rendered = ", ".join(f"{key}: {to_graphql_value(value)}" for key, value in arguments.items())
    return f"({rendered})"


def render_get_query(query: DataQuery) -> str:
    """Render a ``Get`` query fetching one page of hits."""
    arguments = _render_arguments(_get_arguments(query))
    fields = " ".join(query.fields)
    return f"{{ Get {{ {query.class_name}{arguments} {{ {fields} }} }} }}"


def render_aggregate_query(query: CountQuery) -> str:
    """Render an ``Aggregate`` query counting matches of the same filter."""
    arguments = {}
    if query.where is not None:
        arguments["where"] = where_argument(query.where)
    rendered = _render_arguments(arguments)
    return f"{{ Aggregate {{ {query.class_name}{rendered} {{ meta {{ count }} }} }} }}"
