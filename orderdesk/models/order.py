"""
Order Model.

Orders carry a generated order number of the form ``PREFIX-########-XXXX``:
the prefix, the last eight digits of the creation time in epoch
milliseconds, and four random uppercase alphanumerics.
"""

from __future__ import annotations

import secrets
import string
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
from orderdesk.models.enums import OrderStatus

DEFAULT_ORDER_PREFIX: str = "ORD"

_SUFFIX_ALPHABET: str = string.ascii_uppercase + string.digits
_SUFFIX_LENGTH: int = 4
_TIME_DIGITS: int = 8


def generate_order_number(
    prefix: str = DEFAULT_ORDER_PREFIX,
    now: Optional[datetime] = None,
) -> str:
    """Return a fresh order number such as ``ORD-45678901-K3ZQ``."""
    moment = now or utcnow()
    millis = str(int(moment.timestamp() * 1000))
    time_part = millis[-_TIME_DIGITS:].zfill(_TIME_DIGITS)
    suffix = "".join(secrets.choice(_SUFFIX_ALPHABET) for _ in range(_SUFFIX_LENGTH))
    return f"{prefix}-{time_part}-{suffix}"


class Order(BaseModel):
    """A customer order as shown on the dashboard."""

    model_config = ConfigDict(frozen=True)

    FILTERABLE_FIELDS: ClassVar[tuple[str, ...]] = (
        "id",
        "created_at",
        "updated_at",
        "order_number",
        "buyer_name",
        "status",
        "order_date",
    )

    meta: RecordMetadata = Field(default_factory=RecordMetadata.new)
    order_number: str
    buyer_name: str
    status: OrderStatus = OrderStatus.PENDING
    order_date: datetime = Field(default_factory=utcnow)

    @field_validator("order_date")
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
        buyer_name: str,
        status: OrderStatus = OrderStatus.PENDING,
        order_date: Optional[datetime] = None,
        prefix: str = DEFAULT_ORDER_PREFIX,
    ) -> "Order":
        """Build a new order, stamping its number and date from the creation time."""
        meta = RecordMetadata.new()
        return cls(
            meta=meta,
            order_number=generate_order_number(prefix, meta.created_at),
            buyer_name=buyer_name,
            status=status,
            order_date=order_date or meta.created_at,
        )

    @classmethod
    def from_record(cls, record: Mapping[str, object]) -> "Order":
        """Build an order from a flat snake_case fixture record."""
        meta, fields = split_metadata(record)
        return cls(meta=meta, **fields)
