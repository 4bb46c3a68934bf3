from typing import Any

from fastapi import APIRouter, Body, Depends

from api.deps import get_services, get_user_id
from api.errors import validation_response
from schemas.requests import SopCreateRequest
from schemas.responses import ItemsResponse, RecordResponse
from schemas.validation import validate_payload
from services.container import AppServices

router = APIRouter(prefix="/v1/sops", tags=["SOPs"])


@router.post("", response_model=RecordResponse)
def create_sop(
    payload: Any = Body(default=None),
    user_id: str = Depends(get_user_id),
    services: AppServices = Depends(get_services),
):
    outcome = validate_payload(SopCreateRequest, payload)
    if not outcome.ok:
        return validation_response("Invalid SOP payload", outcome)

    data = outcome.value
    record = services.sops.create(user_id, data.name, data.stage, data.notes)
    return RecordResponse(item=record.to_json())


@router.get("", response_model=ItemsResponse)
def list_sops(
    limit: str | None = None,
    user_id: str = Depends(get_user_id),
    services: AppServices = Depends(get_services),
):
    items = [record.to_json() for record in services.sops.list_for_owner(user_id, limit)]
    return ItemsResponse(count=len(items), items=items)


@router.post("/{sop_id}/submit", response_model=RecordResponse)
def submit_sop(
    sop_id: str,
    user_id: str = Depends(get_user_id),
    services: AppServices = Depends(get_services),
):
    """Submit a private SOP for review; NotFound and InvalidTransition map to 404/409."""
    record = services.sops.submit(sop_id, user_id)
    return RecordResponse(item=record.to_json())
