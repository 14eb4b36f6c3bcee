"""
Shared Record Metadata.

Every entity (``User``, ``Order``, ``LoginRecord``) embeds a
``RecordMetadata`` value holding its identifier and timestamps, rather
than inheriting them from a common base class.  The helpers in this
module give the query engine uniform, allow-listed access to entity
fields without resorting to arbitrary attribute lookups.
"""

from __future__ import annotations

import uuid
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import ClassVar, Optional, Protocol, runtime_checkable

from pydantic import BaseModel, Field, field_validator, model_validator

__all__ = [
    "META_FIELDS",
    "Entity",
    "RecordMetadata",
    "as_utc",
    "read_field",
    "split_metadata",
    "string_values",
    "utcnow",
]

META_FIELDS: tuple[str, ...] = ("id", "created_at", "updated_at")
"""Field names resolved through an entity's ``meta`` value."""


def utcnow() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(tz=timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes; convert aware ones to UTC.

    Keeping every timestamp aware means date fields always compare by
    instant and never raise on naive/aware mixing.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class RecordMetadata(BaseModel):
    """Identifier and timestamps shared by every entity.

    All three fields reject assignment with a ``ValidationError``.
    ``updated_at`` changes only through :meth:`touch`, which never moves
    it backwards.
    """

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), frozen=True)
    created_at: datetime = Field(default_factory=utcnow, frozen=True)
    updated_at: datetime = Field(default_factory=utcnow, frozen=True)

    @field_validator("created_at", "updated_at")
    @classmethod
    def _normalise_timezone(cls, value: datetime) -> datetime:
        return as_utc(value)

    @model_validator(mode="after")
    def _updated_not_before_created(self) -> "RecordMetadata":
        if self.updated_at < self.created_at:
            raise ValueError("updated_at cannot precede created_at")
        return self

    @classmethod
    def new(cls) -> "RecordMetadata":
        """Build metadata for a freshly created record."""
        now = utcnow()
        return cls(id=str(uuid.uuid4()), created_at=now, updated_at=now)

    def touch(self, now: Optional[datetime] = None) -> datetime:
        """Advance ``updated_at`` to *now* (default: the current time).

        A clock reading earlier than the stored value is ignored, so the
        update timestamp never regresses.  Returns the resulting value.
        """
        moment = as_utc(now) if now is not None else utcnow()
        if moment > self.updated_at:
            # Frozen against assignment; touch is the only writer.
            object.__setattr__(self, "updated_at", moment)
        return self.updated_at


@runtime_checkable
class Entity(Protocol):
    """Shape the query engine relies on."""

    FILTERABLE_FIELDS: ClassVar[tuple[str, ...]]

    @property
    def id(self) -> str: ...  # noqa: E704

    def field_value(self, name: str) -> object: ...  # noqa: E704

    def string_values(self) -> list[str]: ...  # noqa: E704


def read_field(entity: BaseModel, name: str) -> object:
    """Return the allow-listed field *name* of *entity*, or ``None``.

    Names outside the entity's ``FILTERABLE_FIELDS`` resolve to ``None``
    exactly like a missing attribute would.
    """
    if name not in getattr(type(entity), "FILTERABLE_FIELDS", ()):
        return None
    if name in META_FIELDS:
        return getattr(entity.meta, name)
    return getattr(entity, name, None)


def string_values(entity: BaseModel) -> list[str]:
    """Every allow-listed field value of *entity* that is a string."""
    values: list[str] = []
    for name in getattr(type(entity), "FILTERABLE_FIELDS", ()):
        value = read_field(entity, name)
        if isinstance(value, str):
            values.append(value)
    return values


def split_metadata(
    record: Mapping[str, object],
) -> tuple[RecordMetadata, dict[str, object]]:
    """Separate flat ``id``/``created_at``/``updated_at`` keys from *record*.

    Fixture data stores metadata alongside entity fields; this returns a
    validated ``RecordMetadata`` plus the remaining fields.
    """
    fields = dict(record)
    meta_fields = {key: fields.pop(key) for key in META_FIELDS if key in fields}
    return RecordMetadata(**meta_fields), fields
