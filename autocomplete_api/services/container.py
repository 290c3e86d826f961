from typing import Optional

from elasticsearch import AsyncElasticsearch
from fastapi import Request

from ..config.settings import Settings
from .elasticsearch_service import ElasticsearchService
from .index_service import IndexService
from .keyword_service import KeywordService
from .autocomplete_service import AutoCompleteService
from .health_service import HealthService


class ServiceContainer:
    """Dependency injection container for managing service instances"""

    def __init__(self, settings: Settings, client: Optional[AsyncElasticsearch] = None):
        # Initialize services
        self._settings = settings
        self._elasticsearch_service = ElasticsearchService(settings, client=client)
        self._index_service = IndexService(self._elasticsearch_service)
        self._keyword_service = KeywordService(self._elasticsearch_service)
        self._autocomplete_service = AutoCompleteService(self._elasticsearch_service, size=settings.suggest_size)
        self._health_service = HealthService(self._elasticsearch_service, settings)

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def elasticsearch_service(self) -> ElasticsearchService:
        return self._elasticsearch_service

    @property
    def index_service(self) -> IndexService:
        return self._index_service

    @property
    def keyword_service(self) -> KeywordService:
        return self._keyword_service

    @property
    def autocomplete_service(self) -> AutoCompleteService:
        return self._autocomplete_service

    @property
    def health_service(self) -> HealthService:
        return self._health_service


def get_container(request: Request) -> ServiceContainer:
    """FastAPI dependency returning the container built at startup"""
    return request.app.state.container
