"""
Shared Enumerations for OrderDesk Models.

All string enumerations for type-safe field constraints.
StrEnum values compare equal to their string equivalents, so a filter
value of ``"SHIPPED"`` matches ``OrderStatus.SHIPPED`` and statuses sort
lexically like any other string field.
"""

from __future__ import annotations

from enum import StrEnum


class OrderStatus(StrEnum):
    """Order fulfilment states."""

    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


class ActivityType(StrEnum):
    """Kinds of session activity captured in a ``LoginRecord``."""

    LOGIN = "LOGIN"
    LOGOUT = "LOGOUT"


class FilterOperator(StrEnum):
    """Comparison operators understood by ``DataService.search``."""

    EQUALS = "EQUALS"
    CONTAINS = "CONTAINS"
    STARTS_WITH = "STARTS_WITH"
    ENDS_WITH = "ENDS_WITH"
    GREATER_THAN = "GREATER_THAN"
    LESS_THAN = "LESS_THAN"


class SortOrder(StrEnum):
    """Sort direction for search results."""

    ASC = "asc"
    DESC = "desc"
