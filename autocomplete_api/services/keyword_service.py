import logging
from typing import Dict, Any, Optional

from ..models.schemas import KeywordUpsertRequest, KeywordDocumentResponse
from .elasticsearch_service import ElasticsearchService
from .exceptions import KeywordValidationError
from .keyword_ids import keyword_document_id


logger = logging.getLogger(__name__)

DEFAULT_WEIGHT = 1


def build_keyword_document(keyword: str, weight: int, meta: Dict[str, Any]) -> Dict[str, Any]:
    """Shape a keyword into the document stored in the suggestion index"""
    return {
        "keyword": keyword,
        "suggest": {
            "input": [keyword],
            "weight": weight
        },
        "meta": meta
    }


class KeywordService:
    """Service class for storing and looking up keywords"""

    def __init__(self, es_service: ElasticsearchService):
        self.es_service = es_service

    async def upsert_keyword(self, request: KeywordUpsertRequest) -> str:
        """
        Store a keyword submission, creating or overwriting the document for its normalized form.

        A weight of zero (or none) is stored as 1; negative weights are passed through.
        Returns the document id.
        """
        keyword = request.keyword.strip()
        if not keyword:
            raise KeywordValidationError("keyword must not be empty")

        weight = request.weight
        if not weight:
            weight = DEFAULT_WEIGHT
        meta = request.meta if request.meta is not None else {}

        doc_id = keyword_document_id(keyword)
        await self.es_service.upsert_document(doc_id, build_keyword_document(keyword, weight, meta))
        logger.info("keyword.upsert id=%s weight=%s", doc_id, weight)
        return doc_id

    async def get_keyword(self, keyword: str) -> Optional[KeywordDocumentResponse]:
        """Look up the stored document for a keyword, or None when it was never submitted"""
        doc_id = keyword_document_id(keyword)
        source = await self.es_service.get_document(doc_id)
        if source is None:
            return None

        suggest = source.get("suggest") or {}
        return KeywordDocumentResponse(
            id=doc_id,
            keyword=source.get("keyword", ""),
            weight=suggest.get("weight", DEFAULT_WEIGHT),
            meta=source.get("meta") or {}
        )
