"""External response schemas."""

from __future__ import annotations

from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field


class ErrorDetail(BaseModel):
    path: str
    message: str


class ErrorResponse(BaseModel):
    ok: bool = False
    error: str
    details: List[ErrorDetail] = Field(default_factory=list)


class ItemsResponse(BaseModel):
    ok: bool = True
    count: int
    items: list[dict[str, Any]]


class CreatedResponse(BaseModel):
    ok: bool = True
    id: str
    stored: str = "memory"


class ChatResponse(BaseModel):
    ok: bool = True
    id: str
    response: str


class RecordResponse(BaseModel):
    ok: bool = True
    item: dict[str, Any]


class PurchaseResponse(BaseModel):
    ok: bool = True
    already_owned: bool = Field(alias="alreadyOwned")
    entitlement: dict[str, Any]
    royalty: dict[str, Any] | None = None

    model_config = ConfigDict(populate_by_name=True)


class DeletionResponse(BaseModel):
    ok: bool = True
    ticket_id: str = Field(alias="ticketId")
    message: str

    model_config = ConfigDict(populate_by_name=True)


__all__ = [
    "ChatResponse",
    "CreatedResponse",
    "DeletionResponse",
    "ErrorDetail",
    "ErrorResponse",
    "ItemsResponse",
    "PurchaseResponse",
    "RecordResponse",
]
