"""Persisted record schemas.

Each model is the exact shape of one element of a store's JSON snapshot, so
the same class validates inbound records and snapshot files.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

SopStatus = Literal["private", "submitted", "approved", "rejected"]


class StoredRecord(BaseModel):
    id: str = Field(min_length=1)

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="forbid",
    )

    def to_json(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


class IntakeRecord(StoredRecord):
    received_at: str = Field(min_length=1)
    plant_name: str = Field(min_length=1)
    room_name: str = ""
    target_ppm: str = ""
    target_ph: str = ""
    notes: str = ""
    queued_at: str = ""


class ChatRecord(StoredRecord):
    created_at: str = Field(min_length=1)
    message: str = Field(min_length=1, max_length=2000)
    response: str


class SopRecord(StoredRecord):
    owner_id: str = Field(min_length=1)
    name: str = Field(min_length=2, max_length=120)
    stage: str = Field(min_length=2, max_length=120)
    notes: str = Field(default="", max_length=4000)
    status: SopStatus = "private"
    created_at: str = Field(min_length=1)
    updated_at: str = Field(min_length=1)
    submitted_at: str | None = None
    approved_at: str | None = None

    @model_validator(mode="after")
    def _updated_not_before_created(self) -> "SopRecord":
        if parse_timestamp(self.updated_at) < parse_timestamp(self.created_at):
            raise ValueError("updatedAt must not be earlier than createdAt")
        return self


class EntitlementRecord(StoredRecord):
    user_id: str = Field(min_length=1)
    product_id: str = Field(min_length=1)
    transaction_id: str = Field(min_length=1)
    source: str = "store"
    purchased_at: str = Field(min_length=1)


class RoyaltyLedgerEntry(StoredRecord):
    product_id: str = Field(min_length=1)
    creator_id: str = Field(min_length=1)
    transaction_id: str = Field(min_length=1)
    net_revenue: int = Field(ge=0)
    royalty_percent: float = Field(ge=0, le=100)
    royalty_amount: int = Field(ge=0)
    created_at: str = Field(min_length=1)


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp; values without an offset are taken as UTC."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


__all__ = [
    "ChatRecord",
    "EntitlementRecord",
    "IntakeRecord",
    "RoyaltyLedgerEntry",
    "SopRecord",
    "SopStatus",
    "StoredRecord",
    "parse_timestamp",
]
