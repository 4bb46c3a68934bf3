"""External request schemas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class RequestModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class IntakeRequest(RequestModel):
    plant_name: str = Field(min_length=1)
    room_name: str = ""
    target_ppm: str = ""
    target_ph: str = ""
    notes: str = ""
    queued_at: str = ""


class ChatRequest(RequestModel):
    message: str = Field(min_length=1, max_length=2000)


class SopCreateRequest(RequestModel):
    name: str = Field(min_length=2, max_length=120)
    stage: str = Field(min_length=2, max_length=120)
    notes: str = Field(default="", max_length=4000)


class PurchaseVerifyRequest(RequestModel):
    """Purchase claim from the client; ``net_revenue`` is in minor currency units."""

    product_id: str = Field(min_length=1)
    transaction_id: str = Field(min_length=1)
    net_revenue: int = Field(default=0, ge=0)
    source: str = Field(default="store", min_length=1, max_length=64)


class DeletionRequest(RequestModel):
    email: str | None = Field(default=None, pattern=_EMAIL_PATTERN)
    reason: str | None = Field(default=None, min_length=3, max_length=500)


__all__ = [
    "ChatRequest",
    "DeletionRequest",
    "IntakeRequest",
    "PurchaseVerifyRequest",
    "SopCreateRequest",
]
