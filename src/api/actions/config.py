from fastapi import APIRouter, Depends

from api.deps import get_services
from services.container import AppServices

router = APIRouter()


@router.get("/config", tags=["System"])
async def get_configuration(services: AppServices = Depends(get_services)):
    """Get current runtime configuration."""
    return services.settings.model_dump(mode="json")
