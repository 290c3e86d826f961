import logging
from typing import Dict, Any

from .elasticsearch_service import ElasticsearchService
from .exceptions import ElasticsearchOperationError, IndexBootstrapError


logger = logging.getLogger(__name__)


INDEX_SETTINGS: Dict[str, Any] = {
    "analysis": {
        "filter": {
            "autocomplete_filter": {
                "type": "edge_ngram",
                "min_gram": 1,
                "max_gram": 20
            }
        },
        "analyzer": {
            "autocomplete": {
                "type": "custom",
                "tokenizer": "standard",
                "filter": [
                    "lowercase",
                    "autocomplete_filter"
                ]
            }
        }
    }
}

INDEX_MAPPINGS: Dict[str, Any] = {
    "properties": {
        "keyword": {"type": "keyword"},
        "suggest": {
            "type": "completion",
            "analyzer": "autocomplete",
            "preserve_separators": True
        },
        "meta": {"type": "object", "enabled": True}
    }
}


class IndexService:
    """Service class that prepares the suggestion index before traffic is accepted"""

    def __init__(self, es_service: ElasticsearchService):
        self.es_service = es_service

    async def ensure_index(self) -> None:
        """
        Make sure the suggestion index exists, creating it with the autocomplete schema if needed.

        Safe to call on every startup. Any failure other than losing a creation race to
        another process raises IndexBootstrapError.
        """
        index = self.es_service.index_name
        try:
            if await self.es_service.index_exists():
                logger.info("index.ensure exists index=%s", index)
                return

            created = await self.es_service.create_index(INDEX_SETTINGS, INDEX_MAPPINGS)
        except ElasticsearchOperationError as e:
            logger.error("index.ensure failed index=%s error=%s", index, e)
            raise IndexBootstrapError(index, e) from e

        if created:
            logger.info("index.ensure created index=%s", index)
        else:
            logger.info("index.ensure created_concurrently index=%s", index)
