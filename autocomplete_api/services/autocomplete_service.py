import logging
from typing import Dict, Any, List

from pydantic import ValidationError

from ..models.schemas import CompletionSearchResponse
from .elasticsearch_service import ElasticsearchService
from .exceptions import KeywordValidationError, MalformedResponseError


logger = logging.getLogger(__name__)

SUGGESTION_NAME = "ac"
SUGGEST_FIELD = "suggest"


class AutoCompleteService:
    """Service class for autocomplete functionality"""

    def __init__(self, es_service: ElasticsearchService, size: int = 10):
        self.es_service = es_service
        self.size = size

    def build_completion_query(self, query: str) -> Dict[str, Any]:
        """Build the completion suggester request for a prefix"""
        return {
            SUGGESTION_NAME: {
                "prefix": query,
                "completion": {
                    "field": SUGGEST_FIELD,
                    "skip_duplicates": True,
                    "size": self.size
                }
            }
        }

    def extract_suggestions(self, response: Dict[str, Any]) -> List[str]:
        """
        Flatten the options of the named suggestion into a list of strings.

        Elasticsearch's ranking order is preserved. Raises MalformedResponseError if the
        response lacks the suggestion or its options are not shaped as expected.
        """
        try:
            parsed = CompletionSearchResponse.model_validate(response)
        except ValidationError as e:
            raise MalformedResponseError("suggest search", e) from e

        if SUGGESTION_NAME not in parsed.suggest:
            raise MalformedResponseError(
                "suggest search", message=f"Elasticsearch response has no '{SUGGESTION_NAME}' suggestion"
            )

        suggestions = []
        for entry in parsed.suggest[SUGGESTION_NAME]:
            for option in entry.options:
                suggestions.append(option.text)
        return suggestions

    async def get_suggestions(self, query: str) -> List[str]:
        """Get autocomplete suggestions for the given prefix"""
        if query is None or not query.strip():
            raise KeywordValidationError("q must not be empty")
        prefix = query.strip()

        response = await self.es_service.completion_search(self.build_completion_query(prefix))
        suggestions = self.extract_suggestions(response)
        logger.debug("suggest.done prefix=%r count=%d", prefix, len(suggestions))
        return suggestions
