"""
Login Activity Service.

Keeps the session-activity log in a ``DataService[LoginRecord]`` seeded
from the mock API, appends new LOGIN/LOGOUT events as they happen, and
answers "most recent activity" queries for the dashboard.

The dashboard loads the log on a worker thread while logout records on
another; loads and appends are serialised by a lock and a reload is
published as a new collection in one assignment.
"""

from __future__ import annotations

import threading
from typing import Optional

from orderdesk.logger import StructuredLogger
from orderdesk.models.enums import ActivityType, FilterOperator, SortOrder
from orderdesk.models.login_record import LoginRecord
from orderdesk.models.search_models import ApiResponse, FilterCriteria, SearchParameters
from orderdesk.services.base_service import BaseService
from orderdesk.services.data_service import DataService
from orderdesk.services.mock_api import ApiService


class ActivityService(BaseService):
    """Record and query login/logout activity.

    Parameters
    ----------
    api:
        Mock API supplying the historical login records.
    logger:
        Structured logger instance.
    """

    def __init__(self, api: ApiService, logger: StructuredLogger) -> None:
        super().__init__(logger)
        self._api: ApiService = api
        self._records: DataService[LoginRecord] = DataService(logger, name="login_records")
        self._session_entries: list[LoginRecord] = []
        self._loaded: bool = False
        self._lock: threading.Lock = threading.Lock()

    def load(self) -> ApiResponse[int]:
        """Reload the log from the API.

        Entries recorded during this session are kept after the fixture
        records.
        """
        response = self._api.get_login_records()
        if not response.success or response.data is None:
            return ApiResponse(success=False, error=response.error)

        with self._lock:
            records: DataService[LoginRecord] = DataService(self._logger, name="login_records")
            for record in [*response.data, *self._session_entries]:
                records.add(record)
            self._records = records
            self._loaded = True
        self._logger.info("Loaded %d login record(s).", records.count())
        return ApiResponse(success=True, data=records.count())

    def record(
        self,
        user_id: str,
        activity_type: ActivityType,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> LoginRecord:
        """Append a new activity entry stamped with the current time."""
        entry = LoginRecord.create(
            user_id=user_id,
            activity_type=activity_type,
            ip_address=ip_address,
            user_agent=user_agent,
        )
        with self._lock:
            self._records.add(entry)
            self._session_entries.append(entry)
        self._logger.info(
            "%s recorded for user %s.",
            activity_type,
            user_id,
            extra={"event": str(activity_type), "user_id": user_id},
        )
        return entry

    def recent(self, limit: int = 5, user_id: Optional[str] = None) -> list[LoginRecord]:
        """Return up to *limit* records, newest first.

        The fixture log is loaded on first use.  When *user_id* is given
        only that user's activity is returned.  A *limit* below 1 yields
        an empty list.
        """
        if limit < 1:
            return []
        if not self._loaded:
            self.load()

        filters: list[FilterCriteria] = []
        if user_id is not None:
            filters.append(
                FilterCriteria(field="user_id", operator=FilterOperator.EQUALS, value=user_id)
            )
        page = self._records.search(
            SearchParameters(
                filters=filters,
                sort_by="timestamp",
                sort_order=SortOrder.DESC,
                limit=limit,
            )
        )
        return page.data
