"""
Filter & Comparison Primitives.

Pure functions used by ``DataService.search``.  None of them raise for
well-typed input: incomparable operands yield ``False`` (filters) or
``0`` (sorting), and an unrecognised operator or field never matches.
"""

from __future__ import annotations

from orderdesk.models.entity import Entity
from orderdesk.models.enums import FilterOperator
from orderdesk.models.search_models import FilterCriteria

__all__ = ["apply_filter", "compare_values", "matches_query"]


def matches_query(entity: Entity, query: str) -> bool:
    """``True`` when any string field of *entity* contains *query* (case-insensitive)."""
    needle = query.lower()
    return any(needle in value.lower() for value in entity.string_values())


def apply_filter(entity: Entity, criteria: FilterCriteria) -> bool:
    """Evaluate one ``FilterCriteria`` against *entity*."""
    try:
        operator = FilterOperator(criteria.operator)
    except ValueError:
        return False

    if criteria.field not in type(entity).FILTERABLE_FIELDS:
        return False

    value = entity.field_value(criteria.field)
    target = criteria.value

    if operator is FilterOperator.EQUALS:
        return value == target

    if operator in (
        FilterOperator.CONTAINS,
        FilterOperator.STARTS_WITH,
        FilterOperator.ENDS_WITH,
    ):
        if not isinstance(value, str) or not isinstance(target, str):
            return False
        haystack, needle = value.lower(), target.lower()
        if operator is FilterOperator.CONTAINS:
            return needle in haystack
        if operator is FilterOperator.STARTS_WITH:
            return haystack.startswith(needle)
        return haystack.endswith(needle)

    try:
        if operator is FilterOperator.GREATER_THAN:
            return bool(value > target)  # type: ignore[operator]
        return bool(value < target)  # type: ignore[operator]
    except TypeError:
        return False


def compare_values(left: object, right: object) -> int:
    """Three-way comparison on natural ordering.

    Returns ``-1``, ``0`` or ``1``.  Pairs that cannot be ordered (an
    absent value, mixed types) compare equal, so a stable sort leaves
    them in their original relative positions.
    """
    try:
        if left < right:  # type: ignore[operator]
            return -1
        if right < left:  # type: ignore[operator]
            return 1
    except TypeError:
        return 0
    return 0
