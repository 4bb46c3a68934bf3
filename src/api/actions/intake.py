import logging
from typing import Any

from fastapi import APIRouter, Body, Depends

from api.deps import get_services
from api.errors import validation_response
from schemas.requests import IntakeRequest
from schemas.responses import CreatedResponse, ItemsResponse
from schemas.validation import validate_payload
from services.container import AppServices

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/intake", tags=["Intake"])


@router.post("", response_model=CreatedResponse)
def create_intake(
    payload: Any = Body(default=None),
    services: AppServices = Depends(get_services),
):
    outcome = validate_payload(IntakeRequest, payload)
    if not outcome.ok:
        return validation_response("Invalid intake payload", outcome)

    record = services.stores.intake.append(outcome.value.model_dump())
    logger.info(
        "Intake received id=%s plant=%s room=%s", record.id, record.plant_name, record.room_name
    )
    return CreatedResponse(id=record.id)


@router.get("/recent", response_model=ItemsResponse)
def recent_intake(limit: str | None = None, services: AppServices = Depends(get_services)):
    store = services.stores.intake
    items = [record.to_json() for record in store.list(limit)]
    return ItemsResponse(count=len(store), items=items)
