"""
Business Logic Services Package.

The ``create_services()`` factory wires every service together,
returning a typed dict that the UI layer can consume without knowing
the internal dependency graph.
"""

from __future__ import annotations

from typing import TypedDict

from orderdesk.auth import SessionManager
from orderdesk.config import AppConfig
from orderdesk.database import DatabaseManager
from orderdesk.logger import get_logger
from orderdesk.services.activity import ActivityService
from orderdesk.services.app_settings_service import AppSettingsService
from orderdesk.services.auth_service import AuthService
from orderdesk.services.mock_api import ApiService
from orderdesk.services.order_search import OrderSearchService
from orderdesk.services.session_store import SessionStoreService


class ServiceContainer(TypedDict):
    """Typed container for all application services."""

    api_service: ApiService
    app_settings_service: AppSettingsService
    session_store_service: SessionStoreService
    activity_service: ActivityService
    auth_service: AuthService
    order_search_service: OrderSearchService


def create_services(
    db: DatabaseManager,
    config: AppConfig,
    session: SessionManager,
) -> ServiceContainer:
    """
    Wire all services together.

    This is the single composition root for the service layer.  The
    application entry-point calls this once at startup and passes the
    returned dict to views as needed.

    Args:
        db: Initialised DatabaseManager with the schema in place.
        config: Application configuration.
        session: Shared holder for the authenticated user.

    Returns:
        ServiceContainer mapping service names to fully-wired instances.
    """
    logger = get_logger("services")

    # ------------------------------------------------------------------
    # 1. Infrastructure
    # ------------------------------------------------------------------
    api_service = ApiService(
        fixtures_dir=config.FIXTURES_DIR,
        logger=logger,
        delay_s=config.API_DELAY_S,
    )
    app_settings_service = AppSettingsService(db=db, logger=logger)
    session_store_service = SessionStoreService(
        settings=app_settings_service,
        storage_key=config.SESSION_STORAGE_KEY,
        logger=logger,
    )

    # ------------------------------------------------------------------
    # 2. Domain services
    # ------------------------------------------------------------------
    activity_service = ActivityService(api=api_service, logger=logger)
    auth_service = AuthService(
        api=api_service,
        session=session,
        session_store=session_store_service,
        activity=activity_service,
        logger=logger,
    )
    order_search_service = OrderSearchService(
        api=api_service,
        logger=logger,
        default_page_size=config.DEFAULT_PAGE_SIZE,
        max_page_size=config.MAX_PAGE_SIZE,
    )

    return ServiceContainer(
        api_service=api_service,
        app_settings_service=app_settings_service,
        session_store_service=session_store_service,
        activity_service=activity_service,
        auth_service=auth_service,
        order_search_service=order_search_service,
    )
