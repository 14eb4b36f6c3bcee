"""
Search & Response Models.

Pydantic models for the query-engine contract (``SearchParameters`` in,
``PaginatedResponse`` out) and the generic ``ApiResponse`` envelope that
service methods return to the UI layer.
"""

from __future__ import annotations

from datetime import datetime
from typing import Generic, Optional, TypeVar, Union

from pydantic import BaseModel, Field, field_validator

from orderdesk.models.entity import as_utc
from orderdesk.models.enums import FilterOperator, SortOrder

T = TypeVar("T")

__all__ = [
    "ApiResponse",
    "FilterCriteria",
    "PaginatedResponse",
    "PaginationMeta",
    "SearchParameters",
]


class FilterCriteria(BaseModel):
    """A single ``(field, operator, value)`` predicate.

    ``operator`` accepts any string so that an unknown operator reaches
    the engine and fails closed there instead of being rejected here.
    Datetime values are normalised to UTC like entity timestamps, so a
    naive bound compares as a UTC instant.
    """

    field: str
    operator: Union[FilterOperator, str]
    value: object = None

    @field_validator("value")
    @classmethod
    def _normalise_datetime(cls, value: object) -> object:
        if isinstance(value, datetime):
            return as_utc(value)
        return value


class SearchParameters(BaseModel):
    """Inputs to ``DataService.search``."""

    query: Optional[str] = None
    filters: list[FilterCriteria] = Field(default_factory=list)
    sort_by: Optional[str] = None
    sort_order: SortOrder = SortOrder.ASC
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1)


class PaginationMeta(BaseModel):
    """Pagination metadata accompanying a result page."""

    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int
    has_next_page: bool
    has_previous_page: bool


class ApiResponse(BaseModel, Generic[T]):
    """Uniform success/error envelope.

    ``error`` carries a short message suitable for display when
    ``success`` is ``False``; ``message`` describes a successful call.
    """

    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    message: Optional[str] = None


class PaginatedResponse(BaseModel, Generic[T]):
    """One page of search results plus its pagination metadata."""

    success: bool
    data: list[T] = Field(default_factory=list)
    error: Optional[str] = None
    message: Optional[str] = None
    meta: Optional[PaginationMeta] = None
