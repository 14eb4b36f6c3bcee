"""Tests for form validation and error flattening."""

from datetime import date

import pytest
from pydantic import ValidationError

from orderdesk.models.enums import OrderStatus, SortOrder
from orderdesk.models.forms import (
    LoginFormData,
    OrderSearchForm,
    UserRegistrationData,
    field_errors,
    is_valid_email,
    is_valid_mobile,
)

VALID_REGISTRATION = {
    "first_name": "Ada",
    "last_name": "Lovelace",
    "email": "ada@example.com",
    "mobile_number": "+15550001111",
    "address": "12 Analytical Row, London",
}


def errors_for(model, **fields):
    with pytest.raises(ValidationError) as excinfo:
        model(**fields)
    return {e.field: e.message for e in field_errors(excinfo.value)}


@pytest.mark.parametrize(
    "value, expected",
    [
        ("john.doe@example.com", True),
        ("a+tag@sub.example.org", True),
        ("no-at-sign.example.com", False),
        ("trailing@dot.", False),
        ("user@localhost", False),
    ],
)
def test_is_valid_email(value, expected):
    assert is_valid_email(value) is expected


@pytest.mark.parametrize(
    "value, expected",
    [
        ("+15551234567", True),
        ("15551234567", True),
        ("+05551234567", False),
        ("555-123-4567", False),
        ("+1234567890123456", False),
    ],
)
def test_is_valid_mobile(value, expected):
    assert is_valid_mobile(value) is expected


def test_registration_accepts_valid_data_and_lowercases_email():
    data = UserRegistrationData(**{**VALID_REGISTRATION, "email": " Ada@Example.COM "})
    assert data.email == "ada@example.com"


def test_registration_name_rules():
    """Names must be 2-50 letters."""
    errors = errors_for(UserRegistrationData, **{**VALID_REGISTRATION, "first_name": "A"})
    assert errors == {"first_name": "First name must be at least 2 characters"}

    errors = errors_for(UserRegistrationData, **{**VALID_REGISTRATION, "last_name": "L0velace"})
    assert errors == {"last_name": "Last name must contain only letters"}

    errors = errors_for(UserRegistrationData, **{**VALID_REGISTRATION, "last_name": "x" * 51})
    assert errors == {"last_name": "Last name must not exceed 50 characters"}


def test_registration_contact_rules():
    errors = errors_for(UserRegistrationData, **{**VALID_REGISTRATION, "email": "nope"})
    assert errors == {"email": "Please enter a valid email address"}

    errors = errors_for(UserRegistrationData, **{**VALID_REGISTRATION, "mobile_number": "+15551"})
    assert errors == {"mobile_number": "Mobile number must be at least 10 digits"}

    errors = errors_for(UserRegistrationData, **{**VALID_REGISTRATION, "mobile_number": "abc"})
    assert errors == {"mobile_number": "Please enter a valid mobile number"}


def test_registration_address_rules():
    errors = errors_for(UserRegistrationData, **{**VALID_REGISTRATION, "address": "short"})
    assert errors == {"address": "Address must be at least 10 characters"}

    errors = errors_for(UserRegistrationData, **{**VALID_REGISTRATION, "address": "x" * 201})
    assert errors == {"address": "Address must not exceed 200 characters"}


def test_registration_reports_every_bad_field():
    """All failing fields are reported together."""
    errors = errors_for(
        UserRegistrationData,
        first_name="A",
        last_name="B",
        email="bad",
        mobile_number="1",
        address="tiny",
    )
    assert set(errors) == {"first_name", "last_name", "email", "mobile_number", "address"}


def test_login_accepts_email_or_mobile():
    assert LoginFormData(username="john.doe@example.com", password="x").username == "john.doe@example.com"
    assert LoginFormData(username="+15551234567", password="x").username == "+15551234567"


def test_login_requires_username_and_password():
    errors = errors_for(LoginFormData, username="", password="")
    assert errors == {
        "username": "Username is required",
        "password": "Password is required",
    }


def test_login_rejects_malformed_username():
    errors = errors_for(LoginFormData, username="john doe", password="secret")
    assert errors == {"username": "Username must be a valid email address or mobile number"}


def test_search_form_blank_inputs_are_absent():
    """Empty and whitespace-only inputs become None."""
    form = OrderSearchForm(query="  ", status="", buyer_name="", date_from="", sort_order=" ")
    assert form.query is None
    assert form.status is None
    assert form.buyer_name is None
    assert form.date_from is None
    assert form.sort_order is None


def test_search_form_parses_values():
    form = OrderSearchForm(
        status="SHIPPED",
        date_from="2024-01-14",
        date_to="2024-01-15",
        sort_by="buyer_name",
        sort_order="asc",
        page=2,
        limit=25,
    )
    assert form.status is OrderStatus.SHIPPED
    assert form.date_from == date(2024, 1, 14)
    assert form.sort_order is SortOrder.ASC
    assert form.page == 2


@pytest.mark.parametrize(
    "fields",
    [
        {"status": "LOST"},
        {"sort_by": "address"},
        {"date_from": "15/01/2024"},
        {"page": 0},
        {"limit": 101},
    ],
)
def test_search_form_rejects_bad_values(fields):
    with pytest.raises(ValidationError):
        OrderSearchForm(**fields)
