import logging
from typing import Dict, Any, Optional

from elasticsearch import AsyncElasticsearch, ApiError, NotFoundError, TransportError

from ..config.settings import Settings
from .exceptions import ElasticsearchOperationError


logger = logging.getLogger(__name__)

ENGINE_ERRORS = (ApiError, TransportError)


def _error_type(exc: ApiError) -> Optional[str]:
    """Pull the Elasticsearch error type (e.g. resource_already_exists_exception) out of an ApiError"""
    body = getattr(exc, "body", None)
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        return body["error"].get("type")
    return getattr(exc, "message", None)


def _body(response: Any) -> Any:
    return getattr(response, "body", response)


class ElasticsearchService:
    """Service class for Elasticsearch operations on the suggestion index"""

    def __init__(self, settings: Settings, client: Optional[AsyncElasticsearch] = None):
        if client is None:
            client = AsyncElasticsearch(
                hosts=[settings.elasticsearch_url],
                basic_auth=settings.elasticsearch_auth,
                request_timeout=settings.elasticsearch_request_timeout
            )
        self.client = client
        self.url = settings.elasticsearch_url
        self.index_name = settings.index_name

    async def index_exists(self) -> bool:
        """Check whether the suggestion index exists"""
        try:
            response = await self.client.indices.exists(index=self.index_name)
        except NotFoundError:
            return False
        except ENGINE_ERRORS as e:
            raise ElasticsearchOperationError("index exists check", e) from e

        status = response.meta.status
        if status == 200:
            return True
        if status == 404:
            return False
        raise ElasticsearchOperationError(
            "index exists check", message=f"Elasticsearch index exists check returned status {status}"
        )

    async def create_index(self, index_settings: Dict[str, Any], mappings: Dict[str, Any]) -> bool:
        """
        Create the suggestion index.

        Returns False instead of raising when another process created the index first.
        """
        try:
            await self.client.indices.create(
                index=self.index_name,
                settings=index_settings,
                mappings=mappings
            )
        except ApiError as e:
            if _error_type(e) == "resource_already_exists_exception":
                return False
            raise ElasticsearchOperationError("create index", e) from e
        except TransportError as e:
            raise ElasticsearchOperationError("create index", e) from e
        return True

    async def upsert_document(self, doc_id: str, doc: Dict[str, Any]) -> None:
        """Create the document if absent, otherwise merge the given fields into it"""
        try:
            await self.client.update(
                index=self.index_name,
                id=doc_id,
                doc=doc,
                doc_as_upsert=True
            )
        except ENGINE_ERRORS as e:
            raise ElasticsearchOperationError("upsert", e) from e

    async def completion_search(self, suggest: Dict[str, Any]) -> Dict[str, Any]:
        """Run a suggest-only search against the index and return the raw response body"""
        try:
            response = await self.client.search(index=self.index_name, suggest=suggest)
        except ENGINE_ERRORS as e:
            raise ElasticsearchOperationError("suggest search", e) from e
        return _body(response)

    async def get_document(self, doc_id: str) -> Optional[Dict[str, Any]]:
        """Fetch the stored source of a document, or None when it does not exist"""
        try:
            response = await self.client.get(index=self.index_name, id=doc_id)
        except NotFoundError:
            return None
        except ENGINE_ERRORS as e:
            raise ElasticsearchOperationError("get document", e) from e
        body = _body(response)
        if not body.get("found", True):
            return None
        return body.get("_source", {})

    async def count_documents(self) -> int:
        """Count the documents stored in the index"""
        try:
            response = await self.client.count(index=self.index_name)
        except ENGINE_ERRORS as e:
            raise ElasticsearchOperationError("count", e) from e
        return int(_body(response)["count"])

    async def close(self) -> None:
        """Release the client's connection pool"""
        await self.client.close()
        logger.info("elasticsearch.closed url=%s", self.url)
