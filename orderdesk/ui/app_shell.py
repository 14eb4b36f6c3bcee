"""Application Host Shell.

The top-level ``CTk`` window that orchestrates the application
lifecycle: login → dashboard → logout.

All dependencies are injected via the constructor.  The shell contains
no business logic; it delegates authentication to ``LoginView`` /
``AuthService`` and order search to ``DashboardView``.
"""

from __future__ import annotations

import threading
from typing import Optional

import customtkinter as ctk

from orderdesk import __version__ as _APP_VERSION
from orderdesk.auth import SessionManager
from orderdesk.config import AppConfig
from orderdesk.logger import StructuredLogger
from orderdesk.services import ServiceContainer
from orderdesk.ui.login_view import LoginView
from orderdesk.ui.theme import (
    LOGIN_WINDOW_HEIGHT,
    LOGIN_WINDOW_WIDTH,
    MAIN_WINDOW_HEIGHT,
    MAIN_WINDOW_WIDTH,
)
from orderdesk.ui.views.dashboard_view import DashboardView


class AppShell(ctk.CTk):
    """Host Shell: the main application window.

    Lifecycle
    ---------
    1. On boot: shows the dashboard when a persisted session was
       restored, otherwise the ``LoginView``.
    2. On successful login: replaces the login view with the dashboard.
    3. Logout: records the logout, clears the session and the persisted
       identity, and returns to login.

    Parameters
    ----------
    config:
        Application configuration.
    session:
        Injectable session holder for the authenticated user.
    services:
        Fully-wired service container.
    logger:
        Structured logger instance.
    """

    def __init__(
        self,
        config: AppConfig,
        session: SessionManager,
        services: ServiceContainer,
        logger: StructuredLogger,
    ) -> None:
        super().__init__()

        self._config = config
        self._session = session
        self._services = services
        self._logger = logger

        self._login_view: Optional[LoginView] = None
        self._dashboard: Optional[DashboardView] = None

        self.title(f"OrderDesk {_APP_VERSION}")
        ctk.set_appearance_mode("light")
        ctk.set_default_color_theme("blue")
        self.geometry(f"{MAIN_WINDOW_WIDTH}x{MAIN_WINDOW_HEIGHT}")
        self.minsize(LOGIN_WINDOW_WIDTH, LOGIN_WINDOW_HEIGHT)

        self.protocol("WM_DELETE_WINDOW", self._on_close)

        if self._session.is_authenticated:
            self._show_dashboard()
        else:
            self._show_login()

    # ==================================================================
    # View transitions
    # ==================================================================

    def _show_login(self) -> None:
        self._clear_views()
        self._login_view = LoginView(
            parent=self,
            auth_service=self._services["auth_service"],
            on_login_success=self._handle_login_success,
            logger=self._logger,
        )
        self._login_view.pack(fill="both", expand=True)

    def _show_dashboard(self) -> None:
        self._clear_views()
        self._dashboard = DashboardView(
            parent=self,
            session=self._session,
            order_search=self._services["order_search_service"],
            activity=self._services["activity_service"],
            on_logout=self._handle_logout,
            logger=self._logger,
            recent_limit=self._config.RECENT_ACTIVITY_LIMIT,
        )
        self._dashboard.pack(fill="both", expand=True)

    def _clear_views(self) -> None:
        if self._login_view is not None:
            self._login_view.destroy()
            self._login_view = None
        if self._dashboard is not None:
            self._dashboard.destroy()
            self._dashboard = None

    # ==================================================================
    # Auth lifecycle
    # ==================================================================

    def _handle_login_success(self) -> None:
        """Called by ``LoginView`` (on the main thread) after authentication."""
        user = self._session.current_user
        if user is not None:
            self._logger.info("Login successful: %s", user.full_name)
        self._show_dashboard()

    def _handle_logout(self) -> None:
        """Delegate logout to AuthService off the main thread, then return to login."""
        auth_service = self._services["auth_service"]

        def _logout_in_background() -> None:
            auth_service.logout()
            self.after(0, self._show_login)

        threading.Thread(
            target=_logout_in_background,
            name="logout",
            daemon=True,
        ).start()

    # ==================================================================
    # Window close
    # ==================================================================

    def _on_close(self) -> None:
        self._logger.info("Main window closed.")
        self.destroy()
