"""
Authentication Models.

Pydantic models for the auth request/response contracts between
``AuthService`` and the UI layer, plus the minimal authenticated
identity persisted between sessions.

Every auth operation returns a structured, inspectable ``AuthResult``
rather than raw strings or exception side-channels.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from orderdesk.models.forms import FieldError, is_valid_email
from orderdesk.models.user import User


class AuthErrorCode(StrEnum):
    """Categories of authentication failure shown to the UI."""

    INVALID_CREDENTIALS = "invalid_credentials"
    EMAIL_ALREADY_EXISTS = "email_already_exists"
    VALIDATION_ERROR = "validation_error"
    SERVICE_UNAVAILABLE = "service_unavailable"
    UNKNOWN_ERROR = "unknown_error"


class AuthUser(BaseModel):
    """The minimal identity kept after a successful login.

    This is the shape written to, and validated when read back from,
    the local session store.  Unknown keys in a stored identity are
    dropped; missing or invalid fields reject it.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    email: str
    full_name: str
    mobile_number: str

    @field_validator("email")
    @classmethod
    def _check_email(cls, value: str) -> str:
        if not is_valid_email(value):
            raise ValueError("Stored email address is not valid")
        return value

    @classmethod
    def from_user(cls, user: User) -> "AuthUser":
        return cls(
            id=user.id,
            email=user.email,
            full_name=user.full_name,
            mobile_number=user.mobile_number,
        )


class AuthResult(BaseModel):
    """Unified response for login, registration and logout.

    Attributes
    ----------
    success:
        ``True`` when the operation completed without error.
    error_code:
        Structured error category (``None`` on success).
    error_message:
        Human-readable error description (``None`` on success).
    field_errors:
        Per-field validation failures when ``error_code`` is
        ``VALIDATION_ERROR``.
    user:
        The authenticated identity after a login.
    message:
        Human-readable confirmation on success.
    """

    success: bool
    error_code: Optional[AuthErrorCode] = None
    error_message: Optional[str] = None
    field_errors: list[FieldError] = Field(default_factory=list)
    user: Optional[AuthUser] = None
    message: Optional[str] = None
