"""
User Model.

A registered user.  ``full_name`` is derived from the first and last
name on every read and is never stored.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, ClassVar

from pydantic import BaseModel, ConfigDict, Field, computed_field

from orderdesk.models.entity import RecordMetadata, read_field, split_metadata, string_values

if TYPE_CHECKING:
    from orderdesk.models.forms import UserRegistrationData


class User(BaseModel):
    """Represents a user account.

    Email is unique within the population (case-insensitive) and so is
    the mobile number; uniqueness is checked at registration time by
    ``AuthService``, not by the model.
    """

    model_config = ConfigDict(frozen=True)

    FILTERABLE_FIELDS: ClassVar[tuple[str, ...]] = (
        "id",
        "created_at",
        "updated_at",
        "first_name",
        "last_name",
        "full_name",
        "email",
        "mobile_number",
        "address",
    )

    meta: RecordMetadata = Field(default_factory=RecordMetadata.new)
    first_name: str
    last_name: str
    email: str
    mobile_number: str
    address: str

    @computed_field  # type: ignore[prop-decorator]
    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def id(self) -> str:
        return self.meta.id

    def field_value(self, name: str) -> object:
        return read_field(self, name)

    def string_values(self) -> list[str]:
        return string_values(self)

    @classmethod
    def create(cls, registration: "UserRegistrationData") -> "User":
        """Build a new user from validated registration data."""
        return cls(
            meta=RecordMetadata.new(),
            first_name=registration.first_name,
            last_name=registration.last_name,
            email=registration.email,
            mobile_number=registration.mobile_number,
            address=registration.address,
        )

    @classmethod
    def from_record(cls, record: Mapping[str, object]) -> "User":
        """Build a user from a flat snake_case fixture record."""
        meta, fields = split_metadata(record)
        fields.pop("full_name", None)
        return cls(meta=meta, **fields)
