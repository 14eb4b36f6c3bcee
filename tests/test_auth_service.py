"""Tests for login, registration, logout and session restore."""

import logging

import pytest

from orderdesk.auth import SessionManager
from orderdesk.models.auth_models import AuthErrorCode, AuthUser
from orderdesk.models.enums import ActivityType
from orderdesk.services.activity import ActivityService
from orderdesk.services.auth_service import AuthService, client_descriptor, client_ip_address
from orderdesk.services.mock_api import ApiService

JOHN_ID = "550e8400-e29b-41d4-a716-446655440001"

NEW_USER = {
    "first_name": "Ada",
    "last_name": "Lovelace",
    "email": "Ada.Lovelace@Example.com",
    "mobile_number": "+15550001111",
    "address": "12 Analytical Row, London",
}


@pytest.fixture
def broken_auth(tmp_path, session, session_store, logger):
    """AuthService whose API cannot read any fixtures."""
    api = ApiService(fixtures_dir=tmp_path / "missing", logger=logger, delay_s=0)
    return AuthService(
        api=api,
        session=session,
        session_store=session_store,
        activity=ActivityService(api=api, logger=logger),
        logger=logger,
    )


# ---------------------------------------------------------------------------
# Login
# ---------------------------------------------------------------------------


def test_login_with_email(auth_service, session, session_store):
    """A known email signs in, populates the session and persists it."""
    result = auth_service.login("john.doe@example.com", "anything")

    assert result.success is True
    assert result.message == "Login successful"
    assert result.user.id == JOHN_ID
    assert result.user.full_name == "John Doe"
    assert session.is_authenticated
    assert session.get_current_user() == result.user
    assert session_store.load() == result.user


def test_login_with_mobile_number(auth_service):
    result = auth_service.login("+15551234567", "secret")
    assert result.success is True
    assert result.user.email == "john.doe@example.com"


def test_login_records_activity(auth_service, activity):
    """A successful login appears at the top of the user's recent activity."""
    auth_service.login("john.doe@example.com", "secret")

    latest = activity.recent(limit=1, user_id=JOHN_ID)[0]
    assert latest.activity_type is ActivityType.LOGIN
    assert latest.user_agent == client_descriptor()
    assert latest.ip_address == client_ip_address()


def test_login_writes_audit_event(auth_service, caplog):
    with caplog.at_level(logging.INFO):
        auth_service.login("john.doe@example.com", "secret")
    audits = [r.getMessage() for r in caplog.records if r.getMessage().startswith("AUDIT:")]
    assert any('"action": "LOGIN"' in message for message in audits)


def test_login_unknown_user(auth_service, session, session_store):
    result = auth_service.login("nobody@example.com", "secret")

    assert result.success is False
    assert result.error_code is AuthErrorCode.INVALID_CREDENTIALS
    assert result.error_message == "Invalid username or password"
    assert not session.is_authenticated
    assert session_store.load() is None


def test_login_validation_errors(auth_service, session):
    """Malformed input is rejected before the API is consulted."""
    result = auth_service.login("", "")

    assert result.success is False
    assert result.error_code is AuthErrorCode.VALIDATION_ERROR
    assert {e.field for e in result.field_errors} == {"username", "password"}
    assert not session.is_authenticated


def test_login_when_service_unavailable(broken_auth):
    result = broken_auth.login("john.doe@example.com", "secret")
    assert result.error_code is AuthErrorCode.SERVICE_UNAVAILABLE
    assert result.error_message == "Authentication service unavailable"


def test_login_unexpected_error(auth_service, api, monkeypatch, session):
    """Unexpected exceptions become UNKNOWN_ERROR results."""

    def explode(username):
        raise RuntimeError("boom")

    monkeypatch.setattr(api, "authenticate_user", explode)
    result = auth_service.login("john.doe@example.com", "secret")

    assert result.success is False
    assert result.error_code is AuthErrorCode.UNKNOWN_ERROR
    assert not session.is_authenticated


# ---------------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------------


def test_register_then_login(auth_service, api, session):
    """A registered account can sign in straight away, but is not signed in by registering."""
    result = auth_service.register(NEW_USER)

    assert result.success is True
    assert result.message == "Registration successful. Please sign in."
    assert not session.is_authenticated
    assert api.registered_users[0].email == "ada.lovelace@example.com"

    login = auth_service.login("ada.lovelace@example.com", "secret")
    assert login.success is True
    assert login.user.full_name == "Ada Lovelace"


def test_register_duplicate_email_any_case(auth_service):
    result = auth_service.register({**NEW_USER, "email": "JOHN.DOE@example.com"})
    assert result.success is False
    assert result.error_code is AuthErrorCode.EMAIL_ALREADY_EXISTS
    assert result.error_message == "User with this email or mobile number already exists"


def test_register_duplicate_mobile(auth_service):
    result = auth_service.register({**NEW_USER, "mobile_number": "+15559876543"})
    assert result.error_code is AuthErrorCode.EMAIL_ALREADY_EXISTS


def test_register_twice(auth_service):
    assert auth_service.register(NEW_USER).success is True
    assert auth_service.register(NEW_USER).error_code is AuthErrorCode.EMAIL_ALREADY_EXISTS


def test_register_validation_errors(auth_service, api):
    result = auth_service.register({**NEW_USER, "first_name": "A", "address": "short"})

    assert result.error_code is AuthErrorCode.VALIDATION_ERROR
    assert {e.field for e in result.field_errors} == {"first_name", "address"}
    assert api.registered_users == []


def test_register_missing_field(auth_service):
    data = dict(NEW_USER)
    del data["address"]
    result = auth_service.register(data)
    assert result.error_code is AuthErrorCode.VALIDATION_ERROR
    assert [e.field for e in result.field_errors] == ["address"]


def test_register_when_service_unavailable(broken_auth):
    result = broken_auth.register(NEW_USER)
    assert result.error_code is AuthErrorCode.SERVICE_UNAVAILABLE
    assert result.error_message == "Validation service unavailable"


# ---------------------------------------------------------------------------
# Logout / restore
# ---------------------------------------------------------------------------


def test_logout_clears_session_and_store(auth_service, session, session_store, activity):
    auth_service.login("john.doe@example.com", "secret")
    result = auth_service.logout()

    assert result.success is True
    assert not session.is_authenticated
    assert session_store.load() is None

    session_types = [
        r.activity_type
        for r in activity.recent(limit=20, user_id=JOHN_ID)
        if r.user_agent == client_descriptor()
    ]
    assert sorted(session_types) == [ActivityType.LOGIN, ActivityType.LOGOUT]


def test_logout_without_session(auth_service, session):
    result = auth_service.logout()
    assert result.success is True
    assert not session.is_authenticated


def test_restore_session(api, session_store, activity, logger):
    """A saved identity is restored into a fresh session."""
    user = AuthUser(
        id=JOHN_ID,
        email="john.doe@example.com",
        full_name="John Doe",
        mobile_number="+15551234567",
    )
    session_store.save(user)

    fresh_session = SessionManager()
    service = AuthService(
        api=api,
        session=fresh_session,
        session_store=session_store,
        activity=activity,
        logger=logger,
    )

    assert service.restore_session() == user
    assert fresh_session.get_current_user() == user


def test_restore_session_with_nothing_stored(auth_service, session):
    assert auth_service.restore_session() is None
    assert not session.is_authenticated


def test_restore_session_with_corrupt_entry(auth_service, settings, session_store, session):
    settings.set(session_store.storage_key, '{"id": 1')
    assert auth_service.restore_session() is None
    assert not session.is_authenticated
    assert settings.get(session_store.storage_key) is None


# ---------------------------------------------------------------------------
# Session manager
# ---------------------------------------------------------------------------


def test_session_manager_requires_login():
    session = SessionManager()
    assert session.current_user is None
    with pytest.raises(RuntimeError):
        session.get_current_user()


def test_session_manager_clear():
    session = SessionManager()
    user = AuthUser(id="u", email="a@example.com", full_name="A B", mobile_number="+15550001111")
    session.set_current_user(user)
    assert session.is_authenticated
    session.clear()
    assert not session.is_authenticated
