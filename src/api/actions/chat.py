import logging
from typing import Any

from fastapi import APIRouter, Body, Depends

from api.deps import get_services
from api.errors import validation_response
from schemas.requests import ChatRequest
from schemas.responses import ChatResponse, ItemsResponse
from schemas.validation import validate_payload
from services.container import AppServices

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/chat", tags=["Chat"])


@router.post("", response_model=ChatResponse)
def send_message(
    payload: Any = Body(default=None),
    services: AppServices = Depends(get_services),
):
    """Answer a grow question with a canned recommendation and keep the exchange."""
    outcome = validate_payload(ChatRequest, payload)
    if not outcome.ok:
        return validation_response("Invalid chat payload", outcome)

    message = outcome.value.message
    response = services.responder.respond(message)
    record = services.stores.chat.append({"message": message, "response": response})
    logger.info("Chat stored id=%s", record.id)
    return ChatResponse(id=record.id, response=response)


@router.get("/recent", response_model=ItemsResponse)
def recent_chat(limit: str | None = None, services: AppServices = Depends(get_services)):
    store = services.stores.chat
    items = [record.to_json() for record in store.list(limit)]
    return ItemsResponse(count=len(store), items=items)
