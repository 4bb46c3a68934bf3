"""Schema package for external contracts and validation."""

from .requests import (
    ChatRequest,
    DeletionRequest,
    IntakeRequest,
    PurchaseVerifyRequest,
    SopCreateRequest,
)
from .validation import ValidationOutcome, validate_payload

__all__ = [
    "ChatRequest",
    "DeletionRequest",
    "IntakeRequest",
    "PurchaseVerifyRequest",
    "SopCreateRequest",
    "ValidationOutcome",
    "validate_payload",
]
