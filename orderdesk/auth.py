"""
Authentication & Session State.

Provides an injectable ``SessionManager`` that holds the authenticated
identity (``AuthUser`` model) for the lifetime of a single-user desktop
session.

Usage::

    from orderdesk.auth import SessionManager
    from orderdesk.models.auth_models import AuthUser

    session = SessionManager()
    session.set_current_user(AuthUser(
        id="abc-123",
        email="user@example.com",
        full_name="John Doe",
        mobile_number="+15551234567",
    ))
    user = session.get_current_user()
"""

from __future__ import annotations

import threading
from typing import Optional

from orderdesk.models.auth_models import AuthUser


class SessionManager:
    """Injectable holder for the current authenticated user.

    Each instance maintains its own session state, eliminating the
    need for module-level globals.  Pass a single ``SessionManager``
    through your dependency-injection layer so every component shares
    the same session.
    """

    def __init__(self) -> None:
        self._lock: threading.RLock = threading.RLock()
        self._current_user: Optional[AuthUser] = None

    def set_current_user(self, user: AuthUser) -> None:
        """Record *user* as the authenticated session user."""
        with self._lock:
            self._current_user = user

    def get_current_user(self) -> AuthUser:
        """Return the authenticated user.

        Raises:
            RuntimeError: If no user is currently authenticated.
        """
        with self._lock:
            if self._current_user is None:
                raise RuntimeError(
                    "No user is currently authenticated. Login required."
                )
            return self._current_user

    @property
    def current_user(self) -> Optional[AuthUser]:
        """The authenticated user, or ``None`` when logged out."""
        with self._lock:
            return self._current_user

    def clear(self) -> None:
        """Remove the current user, ending the session."""
        with self._lock:
            self._current_user = None

    @property
    def is_authenticated(self) -> bool:
        """``True`` when a user is currently logged in."""
        with self._lock:
            return self._current_user is not None
