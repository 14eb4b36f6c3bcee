"""Tests for the fixture-backed mock API."""

import json
from pathlib import Path

import pytest

from orderdesk.models.enums import ActivityType, OrderStatus
from orderdesk.models.user import User
from orderdesk.services.mock_api import INVALID_CREDENTIALS_ERROR, ApiService

FIXTURES_DIR = Path(__file__).resolve().parent.parent / "orderdesk" / "data"

JOHN_ID = "550e8400-e29b-41d4-a716-446655440001"


@pytest.fixture
def broken_api(tmp_path, logger):
    """API pointed at a directory with no fixtures."""
    return ApiService(fixtures_dir=tmp_path / "missing", logger=logger, delay_s=0)


def make_user(email="new.user@example.com", mobile="+15550009999"):
    return User(
        first_name="New",
        last_name="User",
        email=email,
        mobile_number=mobile,
        address="1 Fresh Street, Newtown",
    )


def test_fixture_counts(api):
    assert len(api.get_users().data) == 6
    assert len(api.get_orders().data) == 28
    assert len(api.get_login_records().data) == 12


def test_camel_case_keys_are_normalised(api):
    """Fixture camelCase keys land on snake_case model fields."""
    order = api.get_order_by_id("7c9e6679-7425-40de-944b-e07fc1f90001").data
    assert order.order_number == "ORD-04512345-A1B2"
    assert order.buyer_name == "Alice Johnson"
    assert order.status is OrderStatus.DELIVERED

    user = api.get_user_by_id(JOHN_ID).data
    assert user.full_name == "John Doe"
    assert user.mobile_number == "+15551234567"


def test_lookup_misses(api):
    missing_user = api.get_user_by_id("nope")
    assert missing_user.success is False
    assert missing_user.error == "User not found"

    missing_order = api.get_order_by_id("nope")
    assert missing_order.success is False
    assert missing_order.error == "Order not found"


def test_every_call_waits_for_the_configured_delay(logger):
    """Latency is simulated through the injected sleep function."""
    calls = []
    api = ApiService(fixtures_dir=FIXTURES_DIR, logger=logger, delay_s=0.25, sleep=calls.append)

    api.get_users()
    api.get_orders()
    api.authenticate_user("john.doe@example.com")

    assert calls == [0.25, 0.25, 0.25]


def test_zero_delay_never_sleeps(logger):
    calls = []
    api = ApiService(fixtures_dir=FIXTURES_DIR, logger=logger, delay_s=0, sleep=calls.append)
    api.get_users()
    assert calls == []


def test_authenticate_by_email_or_mobile(api):
    by_email = api.authenticate_user("john.doe@example.com")
    by_mobile = api.authenticate_user("+15551234567")
    assert by_email.success and by_mobile.success
    assert by_email.data.id == by_mobile.data.id == JOHN_ID
    assert by_email.message == "Authentication successful"


def test_authenticate_is_exact(api):
    """Usernames are not case-folded when authenticating."""
    result = api.authenticate_user("JOHN.DOE@example.com")
    assert result.success is False
    assert result.error == INVALID_CREDENTIALS_ERROR


def test_validate_user_exists(api):
    taken = api.validate_user_exists("Jane.Smith@Example.com", "+10000000000")
    assert taken.data is True
    assert taken.message == "User already exists"

    taken_mobile = api.validate_user_exists("someone@example.com", "+15559876543")
    assert taken_mobile.data is True

    free = api.validate_user_exists("someone@example.com", "+10000000000")
    assert free.data is False
    assert free.message == "User does not exist"


def test_registered_users_are_visible_to_later_lookups(api):
    user = make_user()
    result = api.register_user(user)

    assert result.success is True
    assert result.message == "User registered successfully"
    assert api.registered_users == [user]
    assert len(api.get_users().data) == 7
    assert api.authenticate_user("new.user@example.com").data.id == user.id
    assert api.validate_user_exists("NEW.USER@example.com", "+10000000000").data is True


def test_recent_login_records_newest_first(api):
    result = api.get_recent_login_records(limit=3)
    assert [r.id[-2:] for r in result.data] == ["12", "11", "10"]
    assert result.data[0].activity_type is ActivityType.LOGOUT
    assert result.data[0].ip_address == "192.168.1.33"


def test_recent_login_records_limit_bounds(api):
    assert api.get_recent_login_records(limit=0).data == []
    assert len(api.get_recent_login_records(limit=50).data) == 12


def test_missing_fixtures_produce_failure_envelopes(broken_api):
    """Unreadable data is reported through the envelope, never raised."""
    expected = {
        "get_users": "Failed to retrieve users",
        "get_orders": "Failed to retrieve orders",
        "get_login_records": "Failed to retrieve login records",
        "get_recent_login_records": "Failed to retrieve recent login records",
    }
    for method, error in expected.items():
        result = getattr(broken_api, method)()
        assert result.success is False
        assert result.data is None
        assert result.error == error

    assert broken_api.get_user_by_id(JOHN_ID).error == "Failed to retrieve user data"
    assert broken_api.get_order_by_id("x").error == "Failed to retrieve order data"
    assert broken_api.authenticate_user("john.doe@example.com").error == (
        "Authentication service unavailable"
    )
    assert broken_api.validate_user_exists("a@example.com", "+15550001111").error == (
        "Validation service unavailable"
    )


@pytest.mark.parametrize(
    "content",
    ["{broken", json.dumps({"orders": []}), json.dumps([{"buyerName": "No Number"}])],
    ids=["invalid-json", "not-a-list", "invalid-record"],
)
def test_bad_fixture_content_is_a_failure(tmp_path, logger, content):
    (tmp_path / "orders.json").write_text(content, encoding="utf-8")
    api = ApiService(fixtures_dir=tmp_path, logger=logger, delay_s=0)

    result = api.get_orders()
    assert result.success is False
    assert result.error == "Failed to retrieve orders"
