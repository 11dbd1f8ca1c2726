"""Value objects shared by the Algolia-to-Weaviate translation layers.

Requests arrive in the Algolia wire shape (camelCase keys nested under
``params``) and leave in the Algolia response shape. In between, everything
is carried as dataclasses so the filter translator, query builder and
normalizer can be tested without a Weaviate instance.

Types:
    - FilterOperator: Weaviate ``where`` operators
    - WhereFilter: Predicate tree node (leaf comparison or And/Or group)
    - NearTextParams / NearObjectParams / SortBy: Search modifiers
    - SearchParams / SearchRequest: One inbound Algolia request
    - SearchResponse: One Algolia-shaped result page
"""

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from weaviate_algolia.utils.logging import LoggerFactory


logger_factory = LoggerFactory(logger_name=__name__, log_level=logging.INFO)
logger = logger_factory.get_logger()


__all__ = [
    "GRAPHQL_NAME",
    "FilterOperator",
    "WhereFilter",
    "MoveParams",
    "NearTextParams",
    "NearObjectParams",
    "SortBy",
    "SearchParams",
    "SearchRequest",
    "SearchResponse",
]

# Property and argument names that may be spliced into GraphQL text.
GRAPHQL_NAME = re.compile(r"^[_A-Za-z][_0-9A-Za-z]*$")


class FilterOperator(str, Enum):
    """Operators understood by Weaviate ``where`` filters.

    Only Equal, GreaterThan, GreaterThanEqual, LessThan, LessThanEqual, Like,
    IsNull, And and Or are produced from filter strings. The rest have no
    textual encoding.
    """

    EQUAL = "Equal"
    NOT_EQUAL = "NotEqual"
    GREATER_THAN = "GreaterThan"
    GREATER_THAN_EQUAL = "GreaterThanEqual"
    LESS_THAN = "LessThan"
    LESS_THAN_EQUAL = "LessThanEqual"
    LIKE = "Like"
    IS_NULL = "IsNull"
    AND = "And"
    OR = "Or"
    CONTAINS_ALL = "ContainsAll"
    CONTAINS_ANY = "ContainsAny"
    WITHIN_GEO_RANGE = "WithinGeoRange"

    @property
    def is_logical(self) -> bool:
        return self in (FilterOperator.AND, FilterOperator.OR)

    @property
    def is_numeric(self) -> bool:
        return self in (
            FilterOperator.GREATER_THAN,
            FilterOperator.GREATER_THAN_EQUAL,
            FilterOperator.LESS_THAN,
            FilterOperator.LESS_THAN_EQUAL,
        )


@dataclass
class WhereFilter:
    """A node of the predicate tree sent to Weaviate as ``where``.

    Leaves carry ``path`` and exactly one value slot matching the operator:
    ``value_number`` for range comparisons, ``value_text`` for Equal and
    Like, ``value_boolean`` for IsNull. Groups carry ``operands`` and an
    And/Or operator.

    Attributes:
        operator: Comparison or logical operator.
        path: Property path for leaves, ``None`` for groups.
        value_number: Numeric comparison value (may be NaN).
        value_text: Text comparison value, wildcards kept verbatim.
        value_boolean: IsNull flag; ``True`` means "match null".
        operands: Child nodes for And/Or groups.
    """

    operator: FilterOperator
    path: Optional[list[str]] = None
    value_number: Optional[float] = None
    value_text: Optional[str] = None
    value_boolean: Optional[bool] = None
    operands: list["WhereFilter"] = field(default_factory=list)

    @classmethod
    def leaf(cls, field_name: str, operator: FilterOperator, value: Any) -> "WhereFilter":
        """Build a comparison leaf, placing ``value`` in the operator's slot."""
        node = cls(operator=operator, path=[field_name])
        if operator is FilterOperator.IS_NULL:
            node.value_boolean = bool(value)
        elif isinstance(value, bool):
            node.value_boolean = value
        elif isinstance(value, (int, float)):
            node.value_number = float(value)
        elif isinstance(value, (list, tuple)):
            node.value_text = ",".join(str(v) for v in value)
        else:
            node.value_text = value
        return node

    @classmethod
    def group(cls, operator: FilterOperator, operands: list["WhereFilter"]) -> "WhereFilter":
        """Build an And/Or node over ``operands``.

        Args:
            operator: FilterOperator.AND or FilterOperator.OR.
            operands: Child nodes, kept in order.

        Returns:
            WhereFilter: The group node.

        Raises:
            ValueError: If ``operator`` is not a logical operator.
        """
        if not operator.is_logical:
            raise ValueError(f"Group operator must be And or Or, got {operator.value}")
        return cls(operator=operator, operands=list(operands))

    @property
    def is_leaf(self) -> bool:
        return not self.operator.is_logical

    @property
    def field(self) -> Optional[str]:
        return self.path[0] if self.path else None

    @property
    def value(self) -> Any:
        if self.value_boolean is not None:
            return self.value_boolean
        if self.value_number is not None:
            return self.value_number
        return self.value_text

    def to_dict(self) -> dict[str, Any]:
        """Return the Weaviate GraphQL ``where`` argument as a dict."""
        if not self.is_leaf:
            return {
                "operator": self.operator.value,
                "operands": [operand.to_dict() for operand in self.operands],
            }

        result: dict[str, Any] = {"path": list(self.path or []), "operator": self.operator.value}
        if self.value_number is not None:
            result["valueNumber"] = self.value_number
        if self.value_text is not None:
            result["valueText"] = self.value_text
        if self.value_boolean is not None:
            result["valueBoolean"] = self.value_boolean
        return result


def _extra_keys(data: dict[str, Any], known: tuple[str, ...]) -> dict[str, Any]:
    """Collect keys without a dedicated attribute so they reach Weaviate unchanged.

    Keys that are not GraphQL names cannot be rendered and are dropped.
    """
    extra: dict[str, Any] = {}
    for key, value in data.items():
        if key in known:
            continue
        if isinstance(key, str) and GRAPHQL_NAME.match(key):
            extra[key] = value
        else:
            logger.debug(f"Dropping search modifier key {key!r}: not a GraphQL name")
    return extra


@dataclass
class MoveParams:
    """``moveTo`` / ``moveAwayFrom`` clause of a nearText search."""

    concepts: list[str] = field(default_factory=list)
    force: Optional[float] = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MoveParams":
        return cls(
            concepts=list(data.get("concepts", [])),
            force=data.get("force"),
            extra=_extra_keys(data, ("concepts", "force")),
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.concepts:
            result["concepts"] = list(self.concepts)
        if self.force is not None:
            result["force"] = self.force
        result.update(self.extra)
        return result


@dataclass
class NearTextParams:
    """Concept-seeded vector search.

    Attributes:
        concepts: Texts to vectorize and search near.
        distance: Maximum allowed distance.
        certainty: Minimum certainty, alternative to ``distance``.
        move_to: Concepts to shift the search vector towards.
        move_away_from: Concepts to shift the search vector away from.
        extra: Other nearText arguments (``autocorrect``, ``targetVectors``...),
            passed through as given.
    """

    concepts: list[str]
    distance: Optional[float] = None
    certainty: Optional[float] = None
    move_to: Optional[MoveParams] = None
    move_away_from: Optional[MoveParams] = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "NearTextParams":
        move_to = data.get("moveTo")
        move_away_from = data.get("moveAwayFrom")
        return cls(
            concepts=list(data.get("concepts", [])),
            distance=data.get("distance"),
            certainty=data.get("certainty"),
            move_to=MoveParams.from_dict(move_to) if move_to else None,
            move_away_from=MoveParams.from_dict(move_away_from) if move_away_from else None,
            extra=_extra_keys(
                data, ("concepts", "distance", "certainty", "moveTo", "moveAwayFrom")
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"concepts": list(self.concepts)}
        if self.distance is not None:
            result["distance"] = self.distance
        if self.certainty is not None:
            result["certainty"] = self.certainty
        if self.move_to is not None:
            result["moveTo"] = self.move_to.to_dict()
        if self.move_away_from is not None:
            result["moveAwayFrom"] = self.move_away_from.to_dict()
        result.update(self.extra)
        return result


_NEAR_OBJECT_KEYS = ("id", "beacon", "distance", "certainty")


@dataclass
class NearObjectParams:
    """Vector search seeded by an existing object's vector."""

    id: Optional[str] = None
    beacon: Optional[str] = None
    distance: Optional[float] = None
    certainty: Optional[float] = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "NearObjectParams":
        return cls(
            id=data.get("id"),
            beacon=data.get("beacon"),
            distance=data.get("distance"),
            certainty=data.get("certainty"),
            extra=_extra_keys(data, _NEAR_OBJECT_KEYS),
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        for key in _NEAR_OBJECT_KEYS:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        result.update(self.extra)
        return result


@dataclass
class SortBy:
    """One sort key; earlier entries take precedence."""

    property: str
    order: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SortBy":
        return cls(property=data["property"], order=data.get("order"))


# Algolia parameter names mapped to SearchParams attributes.
_PARAM_KEYS = {
    "query": "query",
    "page": "page",
    "hitsPerPage": "hits_per_page",
    "filters": "filters",
    "hybrid": "hybrid",
    "attributesToRetrieve": "attributes_to_retrieve",
}


@dataclass
class SearchParams:
    """Parameters of a single Algolia-style search request.

    Attributes:
        query: Free-text query; empty or ``None`` means no text search.
        page: 0-based page index.
        hits_per_page: Page size.
        filters: Flat filter string, e.g. ``"price:>800 AND brand:Acme"``.
        near_text: Optional nearText vector search.
        near_object: Optional nearObject vector search.
        hybrid: Blend BM25 and vector scoring for ``query``.
        sort_by: Ordered sort keys.
        attributes_to_retrieve: Properties to return instead of the defaults.
        extra: Any other Algolia parameters, kept verbatim.
    """

    query: Optional[str] = None
    page: Optional[int] = None
    hits_per_page: Optional[int] = None
    filters: Optional[str] = None
    near_text: Optional[NearTextParams] = None
    near_object: Optional[NearObjectParams] = None
    hybrid: bool = False
    sort_by: list[SortBy] = field(default_factory=list)
    attributes_to_retrieve: Optional[list[str]] = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SearchParams":
        kwargs: dict[str, Any] = {}
        extra: dict[str, Any] = {}
        for key, value in data.items():
            if key in _PARAM_KEYS:
                kwargs[_PARAM_KEYS[key]] = value
            elif key == "nearText":
                kwargs["near_text"] = NearTextParams.from_dict(value) if value else None
            elif key == "nearObject":
                kwargs["near_object"] = NearObjectParams.from_dict(value) if value else None
            elif key == "sortBy":
                kwargs["sort_by"] = [SortBy.from_dict(item) for item in value or []]
            else:
                extra[key] = value
        kwargs["hybrid"] = bool(kwargs.get("hybrid"))
        return cls(extra=extra, **kwargs)


@dataclass
class SearchRequest:
    """One entry of an Algolia multi-query batch."""

    params: SearchParams = field(default_factory=SearchParams)
    index_name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SearchRequest":
        return cls(
            params=SearchParams.from_dict(data.get("params") or {}),
            index_name=data.get("indexName"),
        )


@dataclass
class SearchResponse:
    """One Algolia-shaped result page.

    Attributes:
        hits: Result rows with ``_score`` added.
        nb_hits: Rows returned in this page.
        page: Requested page index, echoed.
        nb_pages: ``ceil(total matching / hits_per_page)``.
        hits_per_page: Page size used.
        processing_time_ms: Elapsed time for this request.
        query: Echoed query text.
    """

    hits: list[dict[str, Any]]
    nb_hits: int
    page: int
    nb_pages: int
    hits_per_page: int
    processing_time_ms: int
    query: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "hits": self.hits,
            "nbHits": self.nb_hits,
            "page": self.page,
            "nbPages": self.nb_pages,
            "hitsPerPage": self.hits_per_page,
            "processingTimeMS": self.processing_time_ms,
            "query": self.query,
        }
