from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
from ..models.schemas import HealthDetailResponse
from ..services.container import ServiceContainer, get_container

router = APIRouter()


@router.get("/healthz", response_class=PlainTextResponse)
async def health_check():
    """Liveness probe. Does not touch Elasticsearch."""
    return "ok"


@router.get("/healthz/detailed", response_model=HealthDetailResponse)
async def detailed_health_check(container: ServiceContainer = Depends(get_container)):
    """
    Detailed health check with suggestion index information.

    Returns:
    - Elasticsearch URL and index name
    - Whether the index exists and how many keywords it holds
    - API title and version
    """
    return await container.health_service.get_detailed_status()
