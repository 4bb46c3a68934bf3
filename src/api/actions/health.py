from fastapi import APIRouter, Depends
from pydantic import BaseModel

from api.deps import get_services
from plantpilot import SERVICE_NAME, __version__
from services.container import AppServices

router = APIRouter()


class HealthResponse(BaseModel):
    status: str
    version: str
    stores: list[dict]


@router.get("/healthz", tags=["System"])
async def liveness():
    return {"ok": True, "service": SERVICE_NAME}


@router.get("/health", response_model=HealthResponse, tags=["System"])
async def health_check(services: AppServices = Depends(get_services)):
    """Check the health of the API and its record stores."""
    stats = services.stores.stats()
    degraded = any(store["flushFailures"] for store in stats)
    return HealthResponse(status="degraded" if degraded else "ok", version=__version__, stores=stats)
