from typing import Any

from fastapi import APIRouter, Body, Depends

from api.deps import get_user_id
from api.errors import validation_response
from schemas.requests import DeletionRequest
from schemas.responses import DeletionResponse
from schemas.validation import validate_payload
from services.account import request_deletion

router = APIRouter(prefix="/v1/account", tags=["Account"])


@router.post("/deletion-request", response_model=DeletionResponse)
def deletion_request(
    payload: Any = Body(default=None),
    user_id: str = Depends(get_user_id),
):
    outcome = validate_payload(DeletionRequest, {} if payload is None else payload)
    if not outcome.ok:
        return validation_response("Invalid request body", outcome)

    data = outcome.value
    ticket = request_deletion(user_id, email=data.email, reason=data.reason)
    return DeletionResponse(ticket_id=ticket.ticket_id, message=ticket.message)
