"""
Authentication Service.

Single orchestrator for every authentication concern: login,
registration, logout and restoring a persisted session at start-up.

Sits between the UI layer and the mock API / session store so that
``LoginView`` remains a thin form handler.  All methods return typed
``AuthResult`` models; the UI never inspects raw exceptions.

Passwords are accepted unchecked once non-empty.  There is no hashing,
rate limiting or encryption of the stored identity.
"""

from __future__ import annotations

import platform
import socket
from collections.abc import Mapping
from typing import Optional

from pydantic import ValidationError

from orderdesk import __version__
from orderdesk.auth import SessionManager
from orderdesk.logger import StructuredLogger
from orderdesk.models.auth_models import AuthErrorCode, AuthResult, AuthUser
from orderdesk.models.enums import ActivityType
from orderdesk.models.forms import LoginFormData, UserRegistrationData, field_errors
from orderdesk.models.user import User
from orderdesk.services.activity import ActivityService
from orderdesk.services.mock_api import INVALID_CREDENTIALS_ERROR, ApiService
from orderdesk.services.session_store import SessionStoreService
from orderdesk.utils.audit import log_audit_event

_FALLBACK_IP: str = "127.0.0.1"


def client_ip_address() -> str:
    """Best-effort IPv4 address of this host."""
    try:
        return socket.gethostbyname(socket.gethostname())
    except OSError:
        return _FALLBACK_IP


def client_descriptor() -> str:
    """Identify this client the way a browser user-agent would."""
    return (
        f"OrderDesk/{__version__} "
        f"({platform.system()} {platform.release()}; "
        f"Python {platform.python_version()})"
    )


class AuthService:
    """Centralised authentication service.

    Parameters
    ----------
    api:
        Mock API used to look up and register users.
    session:
        Injectable session holder for the authenticated user.
    session_store:
        Persisted identity across restarts.
    activity:
        Login/logout activity log.
    logger:
        Structured JSON logger for audit-grade logging.
    """

    def __init__(
        self,
        api: ApiService,
        session: SessionManager,
        session_store: SessionStoreService,
        activity: ActivityService,
        logger: StructuredLogger,
    ) -> None:
        self._api: ApiService = api
        self._session: SessionManager = session
        self._session_store: SessionStoreService = session_store
        self._activity: ActivityService = activity
        self._logger: StructuredLogger = logger

    # ------------------------------------------------------------------
    # Login
    # ------------------------------------------------------------------

    def login(self, username: str, password: str) -> AuthResult:
        """Sign in with an email address or mobile number.

        Parameters
        ----------
        username:
            Email address or mobile number, matched exactly.
        password:
            Any non-empty string.

        Returns
        -------
        AuthResult
            ``success=True`` with ``user`` set, or a structured error with
            ``error_code`` and ``error_message`` on failure.
        """
        try:
            form = LoginFormData(username=username, password=password)
        except ValidationError as exc:
            return AuthResult(
                success=False,
                error_code=AuthErrorCode.VALIDATION_ERROR,
                error_message="Please correct the highlighted fields.",
                field_errors=field_errors(exc),
            )

        try:
            response = self._api.authenticate_user(form.username)
            if not response.success or response.data is None:
                if response.error == INVALID_CREDENTIALS_ERROR:
                    self._logger.info("Login rejected for unknown username.")
                    return AuthResult(
                        success=False,
                        error_code=AuthErrorCode.INVALID_CREDENTIALS,
                        error_message="Invalid username or password",
                    )
                return AuthResult(
                    success=False,
                    error_code=AuthErrorCode.SERVICE_UNAVAILABLE,
                    error_message="Authentication service unavailable",
                )

            user = AuthUser.from_user(response.data)
            self._activity.record(
                user_id=user.id,
                activity_type=ActivityType.LOGIN,
                ip_address=client_ip_address(),
                user_agent=client_descriptor(),
            )
            self._session.set_current_user(user)
            self._session_store.save(user)

            log_audit_event(
                self._logger,
                action="LOGIN",
                entity_type="User",
                entity_id=user.id,
                user_id=user.id,
                details={"email": user.email},
            )
            return AuthResult(success=True, user=user, message="Login successful")

        except Exception as exc:
            self._logger.error("Unexpected login failure: %s", exc, exc_info=True)
            return AuthResult(
                success=False,
                error_code=AuthErrorCode.UNKNOWN_ERROR,
                error_message="Login failed. Please try again.",
            )

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, data: Mapping[str, str]) -> AuthResult:
        """Create a new account from registration form fields.

        The account is visible to later logins for the lifetime of the
        process.  The user is not signed in automatically.
        """
        try:
            registration = UserRegistrationData.model_validate(dict(data))
        except ValidationError as exc:
            return AuthResult(
                success=False,
                error_code=AuthErrorCode.VALIDATION_ERROR,
                error_message="Please correct the highlighted fields.",
                field_errors=field_errors(exc),
            )

        try:
            exists = self._api.validate_user_exists(
                registration.email, registration.mobile_number
            )
            if not exists.success:
                return AuthResult(
                    success=False,
                    error_code=AuthErrorCode.SERVICE_UNAVAILABLE,
                    error_message=exists.error or "Registration service unavailable",
                )
            if exists.data:
                return AuthResult(
                    success=False,
                    error_code=AuthErrorCode.EMAIL_ALREADY_EXISTS,
                    error_message=(
                        "User with this email or mobile number already exists"
                    ),
                )

            user = User.create(registration)
            self._api.register_user(user)

            log_audit_event(
                self._logger,
                action="REGISTER",
                entity_type="User",
                entity_id=user.id,
                user_id=user.id,
                details={"email": user.email},
            )
            return AuthResult(
                success=True,
                message="Registration successful. Please sign in.",
            )

        except Exception as exc:
            self._logger.error("Unexpected registration failure: %s", exc, exc_info=True)
            return AuthResult(
                success=False,
                error_code=AuthErrorCode.UNKNOWN_ERROR,
                error_message="Registration failed. Please try again.",
            )

    # ------------------------------------------------------------------
    # Logout / restore
    # ------------------------------------------------------------------

    def logout(self) -> AuthResult:
        """End the session and forget the persisted identity."""
        user = self._session.current_user
        if user is not None:
            self._activity.record(
                user_id=user.id,
                activity_type=ActivityType.LOGOUT,
                ip_address=client_ip_address(),
                user_agent=client_descriptor(),
            )
            log_audit_event(
                self._logger,
                action="LOGOUT",
                entity_type="User",
                entity_id=user.id,
                user_id=user.id,
            )

        self._session.clear()
        self._session_store.clear()
        return AuthResult(success=True, message="Logged out")

    def restore_session(self) -> Optional[AuthUser]:
        """Re-establish the session from the persisted identity, if any."""
        user = self._session_store.load()
        if user is None:
            return None
        self._session.set_current_user(user)
        self._logger.info("Session restored for user %s.", user.id)
        return user
