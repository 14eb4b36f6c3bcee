"""Tests for the local SQLite store: schema, app settings and the session entry."""

import json
import sqlite3

import pytest

from orderdesk.models.auth_models import AuthUser
from orderdesk.schema import CURRENT_SCHEMA_VERSION, initialize_schema

SESSION_KEY = "orderdesk_user"


@pytest.fixture
def auth_user():
    return AuthUser(
        id="550e8400-e29b-41d4-a716-446655440001",
        email="john.doe@example.com",
        full_name="John Doe",
        mobile_number="+15551234567",
    )


# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------


def test_schema_records_version(db):
    row = db.sqlite.execute("SELECT version FROM schema_version WHERE id = 1").fetchone()
    assert row["version"] == CURRENT_SCHEMA_VERSION


def test_schema_initialisation_is_idempotent(db, logger):
    """Running initialisation again leaves existing data alone."""
    db.sqlite.execute("INSERT INTO app_settings (key, value) VALUES ('k', 'v')")
    db.sqlite.commit()

    initialize_schema(db.sqlite, logger)

    row = db.sqlite.execute("SELECT value FROM app_settings WHERE key = 'k'").fetchone()
    assert row["value"] == "v"


# ---------------------------------------------------------------------------
# App settings
# ---------------------------------------------------------------------------


def test_settings_round_trip(settings):
    assert settings.get("theme") is None
    assert settings.set("theme", "dark") is True
    assert settings.get("theme") == "dark"


def test_settings_set_overwrites(db, settings):
    settings.set("theme", "dark")
    settings.set("theme", "light")
    assert settings.get("theme") == "light"
    count = db.sqlite.execute("SELECT COUNT(*) FROM app_settings").fetchone()[0]
    assert count == 1


def test_settings_delete(settings):
    settings.set("theme", "dark")
    assert settings.delete("theme") is True
    assert settings.get("theme") is None
    assert settings.delete("theme") is True


def test_settings_report_failures_on_closed_database(db, settings):
    """Writes return False and reads raise once the connection is gone."""
    db.close()
    assert settings.set("theme", "dark") is False
    assert settings.delete("theme") is False
    with pytest.raises(sqlite3.ProgrammingError):
        settings.get("theme")


# ---------------------------------------------------------------------------
# Session store
# ---------------------------------------------------------------------------


def test_session_round_trip(session_store, auth_user):
    assert session_store.load() is None
    assert session_store.save(auth_user) is True
    assert session_store.load() == auth_user


def test_session_is_stored_under_configured_key(session_store, settings, auth_user):
    session_store.save(auth_user)
    assert session_store.storage_key == SESSION_KEY
    assert json.loads(settings.get(SESSION_KEY))["email"] == "john.doe@example.com"


def test_session_clear(session_store, settings, auth_user):
    session_store.save(auth_user)
    session_store.clear()
    assert session_store.load() is None
    assert settings.get(SESSION_KEY) is None


@pytest.mark.parametrize(
    "raw",
    [
        "{not json",
        "[]",
        json.dumps({"id": "u-1", "email": "a@example.com"}),
        json.dumps(
            {
                "id": "u-1",
                "email": "not-an-email",
                "full_name": "A B",
                "mobile_number": "+15550001111",
            }
        ),
    ],
    ids=["corrupt", "wrong-shape", "missing-fields", "bad-email"],
)
def test_unusable_session_is_discarded(session_store, settings, raw):
    """Anything that is not a valid identity reads as logged out and is removed."""
    settings.set(SESSION_KEY, raw)
    assert session_store.load() is None
    assert settings.get(SESSION_KEY) is None


def test_session_store_survives_storage_failure(db, session_store, auth_user):
    """A broken store never raises to the caller."""
    db.close()
    assert session_store.load() is None
    assert session_store.save(auth_user) is False
    session_store.clear()


def test_session_with_unknown_keys_is_restored(session_store, settings):
    """Extra keys in a stored identity are dropped, not treated as corruption."""
    settings.set(
        SESSION_KEY,
        json.dumps(
            {
                "id": "u-1",
                "email": "a@example.com",
                "full_name": "A B",
                "mobile_number": "+15550001111",
                "role": "admin",
            }
        ),
    )
    user = session_store.load()

    assert user == AuthUser(
        id="u-1", email="a@example.com", full_name="A B", mobile_number="+15550001111"
    )
    assert "role" not in user.model_dump()
    assert settings.get(SESSION_KEY) is not None
