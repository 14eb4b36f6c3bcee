"""
Login Record Model.

One entry of session activity (login or logout) for a user.  ``user_id``
refers to a ``User`` but is not checked against the user population.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from orderdesk.models.entity import (
    RecordMetadata,
    as_utc,
    read_field,
    split_metadata,
    string_values,
    utcnow,
)
from orderdesk.models.enums import ActivityType


class LoginRecord(BaseModel):
    """A login or logout event."""

    model_config = ConfigDict(frozen=True)

    FILTERABLE_FIELDS: ClassVar[tuple[str, ...]] = (
        "id",
        "created_at",
        "updated_at",
        "user_id",
        "activity_type",
        "timestamp",
        "ip_address",
        "user_agent",
    )

    meta: RecordMetadata = Field(default_factory=RecordMetadata.new)
    user_id: str
    activity_type: ActivityType
    timestamp: datetime = Field(default_factory=utcnow)
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None

    @field_validator("timestamp")
    @classmethod
    def _normalise_timezone(cls, value: datetime) -> datetime:
        return as_utc(value)

    @property
    def id(self) -> str:
        return self.meta.id

    def field_value(self, name: str) -> object:
        return read_field(self, name)

    def string_values(self) -> list[str]:
        return string_values(self)

    @classmethod
    def create(
        cls,
        user_id: str,
        activity_type: ActivityType,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> "LoginRecord":
        """Record an activity happening now."""
        meta = RecordMetadata.new()
        return cls(
            meta=meta,
            user_id=user_id,
            activity_type=activity_type,
            timestamp=meta.created_at,
            ip_address=ip_address,
            user_agent=user_agent,
        )

    @classmethod
    def from_record(cls, record: Mapping[str, object]) -> "LoginRecord":
        """Build a record from a flat snake_case fixture record."""
        meta, fields = split_metadata(record)
        return cls(meta=meta, **fields)
