"""
Generic In-Memory Query Engine.

``DataService[T]`` holds an ordered collection of one entity type and
answers search requests against it: free-text match, then structured
filters, then an optional stable sort, then a page slice.  Every search
recomputes the full view; nothing is indexed or cached.

The collection is mutated only by :meth:`DataService.add` and
:meth:`DataService.clear`.
"""

from __future__ import annotations

import math
from functools import cmp_to_key
from typing import Generic, Optional, TypeVar

from orderdesk.logger import StructuredLogger
from orderdesk.models.entity import Entity
from orderdesk.models.enums import SortOrder
from orderdesk.models.search_models import (
    PaginatedResponse,
    PaginationMeta,
    SearchParameters,
)
from orderdesk.services.base_service import BaseService
from orderdesk.services.filtering import apply_filter, compare_values, matches_query

T = TypeVar("T", bound=Entity)


class DataService(BaseService, Generic[T]):
    """Search, filter, sort and paginate a list of entities.

    Parameters
    ----------
    logger:
        Structured logger instance.
    name:
        Collection label used in log lines (e.g. ``"orders"``).
    """

    def __init__(self, logger: StructuredLogger, name: str = "items") -> None:
        super().__init__(logger)
        self._name: str = name
        self._items: list[T] = []

    # ------------------------------------------------------------------
    # Collection access
    # ------------------------------------------------------------------

    def add(self, item: T) -> None:
        """Append *item*.  Duplicates are not detected."""
        self._items.append(item)

    def find_by_id(self, item_id: str) -> Optional[T]:
        """Return the first entity with *item_id*, or ``None``."""
        for item in self._items:
            if item.id == item_id:
                return item
        return None

    def find_all(self) -> list[T]:
        """Return a copy of the collection in insertion order."""
        return list(self._items)

    def find_by(self, field: str, value: object) -> list[T]:
        """Return every entity whose *field* equals *value* exactly."""
        return [item for item in self._items if item.field_value(field) == value]

    def count(self) -> int:
        return len(self._items)

    def clear(self) -> None:
        self._items.clear()

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def search(self, params: SearchParameters) -> PaginatedResponse[T]:
        """Run a search and return one page of results.

        Parameters
        ----------
        params:
            Free-text query, filters, sort field/direction and page window.

        Returns
        -------
        PaginatedResponse[T]
            ``success`` is always ``True``; a page past the end yields an
            empty ``data`` list with accurate ``meta``.
        """
        results: list[T] = list(self._items)

        if params.query:
            results = [item for item in results if matches_query(item, params.query)]

        for criteria in params.filters:
            results = [item for item in results if apply_filter(item, criteria)]

        if params.sort_by:
            results = self._sorted(results, params.sort_by, params.sort_order)

        total_items = len(results)
        total_pages = math.ceil(total_items / params.limit)
        start = (params.page - 1) * params.limit
        page_items = results[start:start + params.limit]

        meta = PaginationMeta(
            current_page=params.page,
            total_pages=total_pages,
            total_items=total_items,
            items_per_page=params.limit,
            has_next_page=params.page < total_pages,
            has_previous_page=params.page > 1,
        )
        self._logger.debug(
            "Searched %s: %d match(es), page %d/%d.",
            self._name,
            total_items,
            params.page,
            total_pages,
        )
        return PaginatedResponse(success=True, data=page_items, meta=meta)

    @staticmethod
    def _sorted(items: list[T], field: str, order: SortOrder) -> list[T]:
        direction = -1 if order == SortOrder.DESC else 1

        def _compare(left: T, right: T) -> int:
            return direction * compare_values(
                left.field_value(field), right.field_value(field)
            )

        return sorted(items, key=cmp_to_key(_compare))
