"""Account deletion requests.

Requests are acknowledged and logged for the support team; nothing is
persisted here.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from uuid import uuid4

logger = logging.getLogger(__name__)

DELETION_MESSAGE = (
    "Deletion request received. Our team will process your request within 30 days."
)


@dataclass(frozen=True)
class DeletionTicket:
    ticket_id: str
    message: str = DELETION_MESSAGE


def request_deletion(user_id: str, *, email: str | None = None, reason: str | None = None) -> DeletionTicket:
    ticket = DeletionTicket(ticket_id=f"del_{uuid4().hex[:12]}")
    logger.info(
        "Deletion request received ticket=%s user=%s email=%s reason=%s",
        ticket.ticket_id,
        user_id,
        email or "-",
        reason or "-",
    )
    return ticket


__all__ = ["DELETION_MESSAGE", "DeletionTicket", "request_deletion"]
