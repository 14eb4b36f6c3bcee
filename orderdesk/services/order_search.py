"""
Order Search Service.

Translates the dashboard's ``OrderSearchForm`` into ``SearchParameters``
and runs them against a ``DataService[Order]`` populated from the mock
API.

Date bounds are inclusive calendar days in UTC: ``date_from`` admits
orders placed at or after midnight of that day, ``date_to`` admits
orders placed before midnight of the following day.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone

from orderdesk.logger import StructuredLogger
from orderdesk.models.enums import FilterOperator, SortOrder
from orderdesk.models.forms import OrderSearchForm
from orderdesk.models.order import Order
from orderdesk.models.search_models import (
    ApiResponse,
    FilterCriteria,
    PaginatedResponse,
    SearchParameters,
)
from orderdesk.services.base_service import BaseService
from orderdesk.services.data_service import DataService
from orderdesk.services.mock_api import ApiService

DEFAULT_SORT_FIELD: str = "order_date"
DEFAULT_SORT_ORDER: SortOrder = SortOrder.DESC

_ONE_TICK: timedelta = timedelta(microseconds=1)


def start_of_day(day: date) -> datetime:
    """Midnight UTC at the start of *day*."""
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


class OrderSearchService(BaseService):
    """Dashboard order search.

    Parameters
    ----------
    api:
        Mock API supplying the orders.
    logger:
        Structured logger instance.
    default_page_size:
        Page size used when the form leaves ``limit`` blank.
    max_page_size:
        Upper bound applied to any requested page size.
    """

    def __init__(
        self,
        api: ApiService,
        logger: StructuredLogger,
        default_page_size: int = 10,
        max_page_size: int = 100,
    ) -> None:
        super().__init__(logger)
        self._api: ApiService = api
        self._orders: DataService[Order] = DataService(logger, name="orders")
        self._default_page_size: int = default_page_size
        self._max_page_size: int = max_page_size

    @property
    def orders(self) -> DataService[Order]:
        return self._orders

    def load_orders(self) -> ApiResponse[int]:
        """Replace the searchable collection with the orders from the API.

        The new collection is filled before it is published, so a search
        running during a load sees either the old set or the new one.
        """
        response = self._api.get_orders()
        if not response.success or response.data is None:
            self._logger.warning("Order load failed: %s", response.error)
            return ApiResponse(success=False, error="Failed to load dashboard data")

        orders: DataService[Order] = DataService(self._logger, name="orders")
        for order in response.data:
            orders.add(order)
        self._orders = orders
        count = orders.count()
        self._logger.info("Loaded %d order(s) for search.", count)
        return ApiResponse(success=True, data=count, message=f"{count} orders loaded")

    def build_parameters(self, form: OrderSearchForm) -> SearchParameters:
        """Map form inputs onto query-engine parameters."""
        filters: list[FilterCriteria] = []

        if form.status is not None:
            filters.append(
                FilterCriteria(field="status", operator=FilterOperator.EQUALS, value=form.status)
            )
        if form.buyer_name:
            filters.append(
                FilterCriteria(
                    field="buyer_name", operator=FilterOperator.CONTAINS, value=form.buyer_name
                )
            )
        if form.order_number:
            filters.append(
                FilterCriteria(
                    field="order_number",
                    operator=FilterOperator.CONTAINS,
                    value=form.order_number,
                )
            )
        if form.date_from is not None:
            filters.append(
                FilterCriteria(
                    field="order_date",
                    operator=FilterOperator.GREATER_THAN,
                    value=start_of_day(form.date_from) - _ONE_TICK,
                )
            )
        if form.date_to is not None:
            filters.append(
                FilterCriteria(
                    field="order_date",
                    operator=FilterOperator.LESS_THAN,
                    value=start_of_day(form.date_to + timedelta(days=1)),
                )
            )

        limit = min(form.limit or self._default_page_size, self._max_page_size)
        return SearchParameters(
            query=form.query,
            filters=filters,
            sort_by=form.sort_by or DEFAULT_SORT_FIELD,
            sort_order=form.sort_order or DEFAULT_SORT_ORDER,
            page=form.page or 1,
            limit=limit,
        )

    def search(self, form: OrderSearchForm) -> PaginatedResponse[Order]:
        return self._orders.search(self.build_parameters(form))
