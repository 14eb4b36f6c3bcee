"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from orderdesk.auth import SessionManager
from orderdesk.config import AppConfig
from orderdesk.database import DatabaseManager
from orderdesk.logger import StructuredLogger
from orderdesk.schema import initialize_schema
from orderdesk.services.activity import ActivityService
from orderdesk.services.app_settings_service import AppSettingsService
from orderdesk.services.auth_service import AuthService
from orderdesk.services.mock_api import ApiService
from orderdesk.services.order_search import OrderSearchService
from orderdesk.services.session_store import SessionStoreService

FIXTURES_DIR = Path(__file__).resolve().parent.parent / "orderdesk" / "data"
SESSION_KEY = "orderdesk_user"


@pytest.fixture(scope="session")
def logger(tmp_path_factory):
    """Structured logger writing to a throwaway log file."""
    log_file = tmp_path_factory.mktemp("logs") / "orderdesk-test.log"
    return StructuredLogger(name="orderdesk.tests", log_file=str(log_file))


@pytest.fixture
def config():
    """Configuration with simulated latency disabled."""
    return AppConfig(API_DELAY_S=0, FIXTURES_DIR=FIXTURES_DIR)


@pytest.fixture
def db(logger):
    """In-memory SQLite database with the schema applied."""
    manager = DatabaseManager(sqlite_path=Path(":memory:"), logger=logger)
    initialize_schema(manager.sqlite, logger)
    try:
        yield manager
    finally:
        manager.close()


@pytest.fixture
def settings(db, logger):
    return AppSettingsService(db=db, logger=logger)


@pytest.fixture
def session_store(settings, logger):
    return SessionStoreService(settings=settings, storage_key=SESSION_KEY, logger=logger)


@pytest.fixture
def api(logger):
    """Mock API over the packaged fixtures, with no delay."""
    return ApiService(fixtures_dir=FIXTURES_DIR, logger=logger, delay_s=0)


@pytest.fixture
def session():
    return SessionManager()


@pytest.fixture
def activity(api, logger):
    return ActivityService(api=api, logger=logger)


@pytest.fixture
def auth_service(api, session, session_store, activity, logger):
    return AuthService(
        api=api,
        session=session,
        session_store=session_store,
        activity=activity,
        logger=logger,
    )


@pytest.fixture
def order_search(api, logger):
    return OrderSearchService(api=api, logger=logger)
