"""
Form Schemas.

Pydantic models validating the three user-facing forms: registration,
login, and order search.  Error messages are written for direct display
next to the offending field; :func:`field_errors` flattens a
``ValidationError`` into that shape.
"""

from __future__ import annotations

import re
from datetime import date
from typing import Literal, Optional

from pydantic import BaseModel, Field, ValidationError, ValidationInfo, field_validator

from orderdesk.models.enums import OrderStatus, SortOrder

__all__ = [
    "FieldError",
    "LoginFormData",
    "OrderSearchForm",
    "UserRegistrationData",
    "field_errors",
    "is_valid_email",
    "is_valid_mobile",
]

_EMAIL_RE: re.Pattern[str] = re.compile(
    r"^[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+"
    r"@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)+$"
)
_LOOSE_EMAIL_RE: re.Pattern[str] = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_MOBILE_RE: re.Pattern[str] = re.compile(r"^\+?[1-9]\d{1,14}$")
_NAME_RE: re.Pattern[str] = re.compile(r"^[a-zA-Z\s]+$")

_FIELD_LABELS: dict[str, str] = {
    "first_name": "First name",
    "last_name": "Last name",
}


def is_valid_email(value: str) -> bool:
    """Simplified RFC 5322 check used for stored email addresses."""
    return bool(_EMAIL_RE.match(value))


def is_valid_mobile(value: str) -> bool:
    """E.164-style mobile number check (optional ``+``, up to 15 digits)."""
    return bool(_MOBILE_RE.match(value))


class FieldError(BaseModel):
    """A validation failure tied to one form field."""

    field: str
    message: str


def field_errors(exc: ValidationError) -> list[FieldError]:
    """Flatten a pydantic ``ValidationError`` into display-ready errors.

    Custom ``ValueError`` messages raised by the validators below are
    surfaced verbatim, without pydantic's ``"Value error, "`` prefix.
    """
    errors: list[FieldError] = []
    for error in exc.errors():
        loc = error.get("loc") or ("__root__",)
        ctx = error.get("ctx") or {}
        if error.get("type") == "value_error" and "error" in ctx:
            message = str(ctx["error"])
        else:
            message = error.get("msg", "Invalid value")
        errors.append(FieldError(field=str(loc[0]), message=message))
    return errors


# ---------------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------------

class UserRegistrationData(BaseModel):
    """Fields collected by the registration form."""

    first_name: str
    last_name: str
    email: str
    mobile_number: str
    address: str

    @field_validator("first_name", "last_name")
    @classmethod
    def _check_name(cls, value: str, info: ValidationInfo) -> str:
        label = _FIELD_LABELS.get(info.field_name or "", "Name")
        if len(value) < 2:
            raise ValueError(f"{label} must be at least 2 characters")
        if len(value) > 50:
            raise ValueError(f"{label} must not exceed 50 characters")
        if not _NAME_RE.match(value):
            raise ValueError(f"{label} must contain only letters")
        return value

    @field_validator("email")
    @classmethod
    def _check_email(cls, value: str) -> str:
        if not is_valid_email(value.strip()):
            raise ValueError("Please enter a valid email address")
        return value.strip().lower()

    @field_validator("mobile_number")
    @classmethod
    def _check_mobile(cls, value: str) -> str:
        if not is_valid_mobile(value):
            raise ValueError("Please enter a valid mobile number")
        if len(value) < 10:
            raise ValueError("Mobile number must be at least 10 digits")
        if len(value) > 15:
            raise ValueError("Mobile number must not exceed 15 digits")
        return value

    @field_validator("address")
    @classmethod
    def _check_address(cls, value: str) -> str:
        if len(value) < 10:
            raise ValueError("Address must be at least 10 characters")
        if len(value) > 200:
            raise ValueError("Address must not exceed 200 characters")
        return value


# ---------------------------------------------------------------------------
# Login
# ---------------------------------------------------------------------------

class LoginFormData(BaseModel):
    """Username (email or mobile number) and password."""

    username: str
    password: str

    @field_validator("username")
    @classmethod
    def _check_username(cls, value: str) -> str:
        if not value:
            raise ValueError("Username is required")
        if not (_LOOSE_EMAIL_RE.match(value) or _MOBILE_RE.match(value)):
            raise ValueError(
                "Username must be a valid email address or mobile number"
            )
        return value

    @field_validator("password")
    @classmethod
    def _check_password(cls, value: str) -> str:
        if not value:
            raise ValueError("Password is required")
        return value


# ---------------------------------------------------------------------------
# Order search
# ---------------------------------------------------------------------------

OrderSortField = Literal["order_date", "order_number", "buyer_name", "status"]


class OrderSearchForm(BaseModel):
    """Dashboard search form.  Blank inputs are treated as absent."""

    query: Optional[str] = None
    status: Optional[OrderStatus] = None
    buyer_name: Optional[str] = None
    order_number: Optional[str] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    sort_by: Optional[OrderSortField] = None
    sort_order: Optional[SortOrder] = None
    page: Optional[int] = Field(default=None, ge=1)
    limit: Optional[int] = Field(default=None, ge=1, le=100)

    @field_validator(
        "query",
        "status",
        "buyer_name",
        "order_number",
        "date_from",
        "date_to",
        "sort_by",
        "sort_order",
        mode="before",
    )
    @classmethod
    def _blank_to_none(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value
