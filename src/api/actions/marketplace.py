from typing import Any

from fastapi import APIRouter, Body, Depends, Query

from api.deps import get_services, get_user_id
from api.errors import validation_response
from schemas.requests import PurchaseVerifyRequest
from schemas.responses import ItemsResponse, PurchaseResponse
from schemas.validation import validate_payload
from services.container import AppServices

router = APIRouter(prefix="/v1/marketplace", tags=["Marketplace"])


@router.get("/catalog", response_model=ItemsResponse)
def catalog(
    user_id: str = Depends(get_user_id),
    services: AppServices = Depends(get_services),
):
    owned = services.ledger.list_owned(user_id)
    items = [view.to_json() for view in services.catalog.annotate(owned)]
    return ItemsResponse(count=len(items), items=items)


@router.post("/purchases/verify", response_model=PurchaseResponse)
def verify_purchase(
    payload: Any = Body(default=None),
    user_id: str = Depends(get_user_id),
    services: AppServices = Depends(get_services),
):
    outcome = validate_payload(PurchaseVerifyRequest, payload)
    if not outcome.ok:
        return validation_response("Invalid purchase payload", outcome)

    data = outcome.value
    result = services.ledger.verify_purchase(
        user_id,
        data.product_id,
        data.transaction_id,
        data.net_revenue,
        source=data.source,
    )
    return PurchaseResponse(
        already_owned=result.already_owned,
        entitlement=result.entitlement.to_json(),
        royalty=result.royalty.to_json() if result.royalty else None,
    )


@router.get("/entitlements", response_model=ItemsResponse)
def entitlements(
    limit: str | None = None,
    user_id: str = Depends(get_user_id),
    services: AppServices = Depends(get_services),
):
    items = [record.to_json() for record in services.ledger.list_entitlements(user_id, limit)]
    return ItemsResponse(count=len(items), items=items)


@router.get("/royalties", response_model=ItemsResponse)
def royalties(
    creator_id: str | None = Query(default=None, alias="creatorId"),
    limit: str | None = None,
    services: AppServices = Depends(get_services),
):
    entries = services.ledger.list_royalties(creator_id, limit)
    return ItemsResponse(count=len(entries), items=[entry.to_json() for entry in entries])
