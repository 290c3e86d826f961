import logging
from datetime import datetime

from ..config.settings import Settings
from ..models.schemas import HealthDetailResponse
from .elasticsearch_service import ElasticsearchService
from .exceptions import ElasticsearchOperationError


logger = logging.getLogger(__name__)


class HealthService:
    """Service class for health checks and system status"""

    def __init__(self, es_service: ElasticsearchService, settings: Settings):
        self.es_service = es_service
        self.settings = settings

    async def get_detailed_status(self) -> HealthDetailResponse:
        """Get detailed status including the suggestion index state"""
        elasticsearch = {
            "url": self.es_service.url,
            "index": self.es_service.index_name,
            "index_exists": False,
            "doc_count": None
        }
        status = "OK"
        try:
            elasticsearch["index_exists"] = await self.es_service.index_exists()
            if elasticsearch["index_exists"]:
                elasticsearch["doc_count"] = await self.es_service.count_documents()
            else:
                status = "DEGRADED"
        except ElasticsearchOperationError as e:
            logger.warning("health.detailed failed error=%s", e)
            status = "ERROR"

        return HealthDetailResponse(
            status=status,
            timestamp=datetime.now().isoformat(),
            elasticsearch=elasticsearch,
            api={
                "title": self.settings.api_title,
                "version": self.settings.api_version
            }
        )
