"""
Mock API Service.

Stands in for a remote backend by serving the JSON fixtures shipped in
``orderdesk/data/``.  Each public call waits ``delay_s`` seconds to
simulate network latency, then answers with an ``ApiResponse`` envelope.

Fixture records use camelCase keys and ISO-8601 timestamps; they are
normalised to snake_case here and validated by the entity models, so
nothing past this boundary ever sees raw JSON.

Users registered during the session are held in an in-memory overlay
and are visible to every subsequent lookup until the process exits.
"""

from __future__ import annotations

import json
import threading
import time
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import TypeVar

from orderdesk.logger import StructuredLogger
from orderdesk.models.login_record import LoginRecord
from orderdesk.models.order import Order
from orderdesk.models.search_models import ApiResponse
from orderdesk.models.user import User
from orderdesk.services.base_service import BaseService
from orderdesk.utils.string_helpers import normalize_keys

USERS_FILE: str = "users.json"
ORDERS_FILE: str = "orders.json"
LOGIN_RECORDS_FILE: str = "loginRecords.json"

INVALID_CREDENTIALS_ERROR: str = "Invalid credentials"

# JSONDecodeError and pydantic's ValidationError are both ValueErrors;
# TypeError covers a record that is not a JSON object.
_FIXTURE_ERRORS: tuple[type[Exception], ...] = (OSError, ValueError, TypeError)

E = TypeVar("E")


class ApiService(BaseService):
    """Fixture-backed stand-in for the remote API.

    Parameters
    ----------
    fixtures_dir:
        Directory holding ``users.json``, ``orders.json`` and
        ``loginRecords.json``.
    logger:
        Structured logger instance.
    delay_s:
        Simulated latency applied before every public call (``0``
        disables it).
    sleep:
        Injectable sleep function, for tests.
    """

    def __init__(
        self,
        fixtures_dir: Path,
        logger: StructuredLogger,
        delay_s: float = 0.5,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        super().__init__(logger)
        self._fixtures_dir: Path = fixtures_dir
        self._delay_s: float = delay_s
        self._sleep: Callable[[float], None] = sleep
        self._lock: threading.Lock = threading.Lock()
        self._cache: dict[str, list[dict[str, object]]] = {}
        self._registered: list[User] = []

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    def get_users(self) -> ApiResponse[list[User]]:
        self._simulate_delay()
        try:
            users = self._all_users()
        except _FIXTURE_ERRORS as exc:
            self._logger.warning("Failed to load %s: %s", USERS_FILE, exc)
            return ApiResponse(success=False, error="Failed to retrieve users")
        return ApiResponse(
            success=True, data=users, message="Users retrieved successfully"
        )

    def get_user_by_id(self, user_id: str) -> ApiResponse[User]:
        self._simulate_delay()
        try:
            users = self._all_users()
        except _FIXTURE_ERRORS as exc:
            self._logger.warning("Failed to load %s: %s", USERS_FILE, exc)
            return ApiResponse(success=False, error="Failed to retrieve user data")

        user = next((u for u in users if u.id == user_id), None)
        if user is None:
            return ApiResponse(success=False, error="User not found")
        return ApiResponse(
            success=True, data=user, message="User retrieved successfully"
        )

    def authenticate_user(self, username: str) -> ApiResponse[User]:
        """Find the user whose email or mobile number equals *username*.

        The comparison is exact; no password is checked.
        """
        self._simulate_delay()
        try:
            users = self._all_users()
        except _FIXTURE_ERRORS as exc:
            self._logger.warning("Failed to load %s: %s", USERS_FILE, exc)
            return ApiResponse(
                success=False, error="Authentication service unavailable"
            )

        user = next(
            (u for u in users if username in (u.email, u.mobile_number)),
            None,
        )
        if user is None:
            return ApiResponse(success=False, error=INVALID_CREDENTIALS_ERROR)
        return ApiResponse(
            success=True, data=user, message="Authentication successful"
        )

    def validate_user_exists(
        self, email: str, mobile_number: str
    ) -> ApiResponse[bool]:
        """Report whether *email* (any case) or *mobile_number* is taken."""
        self._simulate_delay()
        try:
            users = self._all_users()
        except _FIXTURE_ERRORS as exc:
            self._logger.warning("Failed to load %s: %s", USERS_FILE, exc)
            return ApiResponse(success=False, error="Validation service unavailable")

        wanted_email = email.lower()
        exists = any(
            u.email.lower() == wanted_email or u.mobile_number == mobile_number
            for u in users
        )
        return ApiResponse(
            success=True,
            data=exists,
            message="User already exists" if exists else "User does not exist",
        )

    def register_user(self, user: User) -> ApiResponse[User]:
        """Add *user* to the in-memory overlay."""
        self._simulate_delay()
        with self._lock:
            self._registered.append(user)
        self._logger.info("Registered user %s.", user.id)
        return ApiResponse(
            success=True, data=user, message="User registered successfully"
        )

    # ------------------------------------------------------------------
    # Orders
    # ------------------------------------------------------------------

    def get_orders(self) -> ApiResponse[list[Order]]:
        self._simulate_delay()
        try:
            orders = self._load_entities(ORDERS_FILE, Order.from_record)
        except _FIXTURE_ERRORS as exc:
            self._logger.warning("Failed to load %s: %s", ORDERS_FILE, exc)
            return ApiResponse(success=False, error="Failed to retrieve orders")
        return ApiResponse(
            success=True, data=orders, message="Orders retrieved successfully"
        )

    def get_order_by_id(self, order_id: str) -> ApiResponse[Order]:
        self._simulate_delay()
        try:
            orders = self._load_entities(ORDERS_FILE, Order.from_record)
        except _FIXTURE_ERRORS as exc:
            self._logger.warning("Failed to load %s: %s", ORDERS_FILE, exc)
            return ApiResponse(success=False, error="Failed to retrieve order data")

        order = next((o for o in orders if o.id == order_id), None)
        if order is None:
            return ApiResponse(success=False, error="Order not found")
        return ApiResponse(
            success=True, data=order, message="Order retrieved successfully"
        )

    # ------------------------------------------------------------------
    # Login records
    # ------------------------------------------------------------------

    def get_login_records(self) -> ApiResponse[list[LoginRecord]]:
        self._simulate_delay()
        try:
            records = self._load_entities(LOGIN_RECORDS_FILE, LoginRecord.from_record)
        except _FIXTURE_ERRORS as exc:
            self._logger.warning("Failed to load %s: %s", LOGIN_RECORDS_FILE, exc)
            return ApiResponse(
                success=False, error="Failed to retrieve login records"
            )
        return ApiResponse(
            success=True,
            data=records,
            message="Login records retrieved successfully",
        )

    def get_recent_login_records(
        self, limit: int = 10
    ) -> ApiResponse[list[LoginRecord]]:
        """Return the *limit* newest login records, newest first."""
        self._simulate_delay()
        try:
            records = self._load_entities(LOGIN_RECORDS_FILE, LoginRecord.from_record)
        except _FIXTURE_ERRORS as exc:
            self._logger.warning("Failed to load %s: %s", LOGIN_RECORDS_FILE, exc)
            return ApiResponse(
                success=False, error="Failed to retrieve recent login records"
            )

        newest = sorted(records, key=lambda r: r.timestamp, reverse=True)
        return ApiResponse(
            success=True,
            data=newest[: max(limit, 0)],
            message="Recent login records retrieved successfully",
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _simulate_delay(self) -> None:
        if self._delay_s > 0:
            self._sleep(self._delay_s)

    def _all_users(self) -> list[User]:
        users = self._load_entities(USERS_FILE, User.from_record)
        with self._lock:
            return users + list(self._registered)

    def _load_entities(
        self,
        filename: str,
        build: Callable[[Mapping[str, object]], E],
    ) -> list[E]:
        return [build(record) for record in self._read_fixture(filename)]

    def _read_fixture(self, filename: str) -> list[dict[str, object]]:
        """Read and key-normalise a fixture file, caching the parsed records."""
        with self._lock:
            cached = self._cache.get(filename)
        if cached is not None:
            return cached

        path = self._fixtures_dir / filename
        with path.open(encoding="utf-8") as fh:
            payload = json.load(fh)
        if not isinstance(payload, list):
            raise ValueError(f"{filename} must contain a JSON array")

        records: list[dict[str, object]] = normalize_keys(payload)  # type: ignore[assignment]
        with self._lock:
            self._cache[filename] = records
        self._logger.debug("Loaded %d record(s) from %s.", len(records), path)
        return records

    @property
    def registered_users(self) -> list[User]:
        """Users added through :meth:`register_user` this session."""
        with self._lock:
            return list(self._registered)
