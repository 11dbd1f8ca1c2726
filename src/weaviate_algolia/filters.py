"""Algolia filter string to Weaviate ``where`` tree translation.

Algolia clients express filters as a flat string::

    price:>=800 AND title:*Samsung* OR price:<700 AND description:*Android*

The grammar is deliberately small. ``OR`` binds looser than ``AND`` and there
are no parentheses, so every filter is an OR of AND-groups of clauses. Each
clause is ``field:value`` where the value prefix selects the operator:

=============  ==================  =====================
Value          Operator            Stored as
=============  ==================  =====================
``>=N``        GreaterThanEqual    ``valueNumber``
``<=N``        LessThanEqual       ``valueNumber``
``>N``         GreaterThan         ``valueNumber``
``<N``         LessThan            ``valueNumber``
``null``       IsNull              ``valueBoolean: true``
contains ``*`` Like                ``valueText`` verbatim
anything else  Equal               ``valueText`` verbatim
=============  ==================  =====================

Separators are the literal tokens `` OR `` and `` AND ``; field names and
values containing them, or containing ``:``, cannot be expressed.

A single clause yields a bare leaf and a single AND-group yields no Or
wrapper. Existing callers depend on that shape.

Usage:
    >>> where = translate("price:>600 AND price:<800")
    >>> where.to_dict()["operator"]
    'And'
"""

import logging
import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from weaviate_algolia.exceptions import FilterParseError
from weaviate_algolia.types import FilterOperator, WhereFilter
from weaviate_algolia.utils.logging import LoggerFactory


logger_factory = LoggerFactory(logger_name=__name__, log_level=logging.INFO)
logger = logger_factory.get_logger()


__all__ = [
    "OR_SEPARATOR",
    "AND_SEPARATOR",
    "FilterStatus",
    "FilterParseResult",
    "parse_number",
    "parse_filter_value",
    "parse_clause",
    "parse_and_group",
    "parse_filters",
    "translate",
]


OR_SEPARATOR = " OR "
AND_SEPARATOR = " AND "
NULL_LITERAL = "null"
WILDCARD = "*"

# Prefix order matters: two-character operators must win over their prefixes.
_COMPARISON_PREFIXES: tuple[tuple[str, FilterOperator], ...] = (
    (">=", FilterOperator.GREATER_THAN_EQUAL),
    ("<=", FilterOperator.LESS_THAN_EQUAL),
    (">", FilterOperator.GREATER_THAN),
    ("<", FilterOperator.LESS_THAN),
)

_NUMERIC_PREFIX = re.compile(r"[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


class FilterStatus(str, Enum):
    ABSENT = "absent"
    PARSED = "parsed"
    FAILED = "failed"


@dataclass
class FilterParseResult:
    """Outcome of translating a filter string.

    Attributes:
        status: ABSENT when no filter was given, PARSED on success, FAILED
            when the string was malformed.
        where: The predicate tree, only set when PARSED.
        error: Why translation failed, only set when FAILED.
    """

    status: FilterStatus
    where: Optional[WhereFilter] = None
    error: Optional[str] = None

    @property
    def applied(self) -> bool:
        return self.status is FilterStatus.PARSED


def parse_number(text: str) -> float:
    """Parse the longest leading number in ``text``, NaN if there is none.

    ``"800"`` gives 800.0, ``" 12.5kg"`` gives 12.5 and ``"abc"`` gives NaN.
    NaN is kept rather than rejected; Weaviate refuses the query later.
    """
    match = _NUMERIC_PREFIX.match(text.lstrip())
    if not match:
        return math.nan
    return float(match.group(0))


def parse_filter_value(raw_value: str) -> tuple[FilterOperator, Any]:
    """Decode a clause value into its operator and typed value."""
    for prefix, operator in _COMPARISON_PREFIXES:
        if raw_value.startswith(prefix):
            return operator, parse_number(raw_value[len(prefix):])
    if raw_value == NULL_LITERAL:
        return FilterOperator.IS_NULL, True
    if WILDCARD in raw_value:
        return FilterOperator.LIKE, raw_value
    return FilterOperator.EQUAL, raw_value


def parse_clause(clause: str) -> WhereFilter:
    """Translate one ``field:value`` clause into a leaf.

    Raises:
        FilterParseError: If the clause has no ``:`` or an empty field name.
    """
    field_name, separator, raw_value = clause.partition(":")
    if not separator:
        raise FilterParseError(f"Filter clause {clause!r} is missing ':'", clause=clause)
    if not field_name:
        raise FilterParseError(f"Filter clause {clause!r} has no field name", clause=clause)

    operator, value = parse_filter_value(raw_value)
    return WhereFilter.leaf(field_name, operator, value)


def parse_and_group(group: str) -> WhereFilter:
    """Translate clauses joined by `` AND ``; one clause yields a bare leaf."""
    conditions = group.split(AND_SEPARATOR)
    if len(conditions) == 1:
        return parse_clause(conditions[0])
    return WhereFilter.group(
        FilterOperator.AND, [parse_clause(condition) for condition in conditions]
    )


def parse_filters(filter_string: Optional[str]) -> FilterParseResult:
    """Translate a filter string, reporting the outcome explicitly.

    Args:
        filter_string: Algolia-style filter string; empty or ``None`` means
            no filter.

    Returns:
        FilterParseResult: Never raises for malformed input; failures are
            logged and returned with status FAILED.
    """
    if not filter_string:
        return FilterParseResult(status=FilterStatus.ABSENT)
    if not isinstance(filter_string, str):
        error = f"Filters must be a string, got {type(filter_string).__name__}"
        logger.warning(f"Filter parsing error, searching without filters: {error}")
        return FilterParseResult(status=FilterStatus.FAILED, error=error)

    try:
        or_groups = filter_string.split(OR_SEPARATOR)
        if len(or_groups) > 1:
            where = WhereFilter.group(
                FilterOperator.OR, [parse_and_group(group) for group in or_groups]
            )
        else:
            where = parse_and_group(filter_string)
    except FilterParseError as e:
        logger.warning(f"Filter parsing error, searching without filters: {e}")
        return FilterParseResult(status=FilterStatus.FAILED, error=str(e))

    logger.debug(f"Translated filter {filter_string!r} into {where.to_dict()}")
    return FilterParseResult(status=FilterStatus.PARSED, where=where)


def translate(filter_string: Optional[str]) -> Optional[WhereFilter]:
    """Translate a filter string into a predicate tree, or ``None``.

    ``None`` covers both "no filter given" and "filter malformed"; use
    :func:`parse_filters` to tell them apart.
    """
    return parse_filters(filter_string).where
