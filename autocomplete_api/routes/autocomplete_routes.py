import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from ..models.schemas import SuggestResponse
from ..services.container import ServiceContainer, get_container
from ..services.exceptions import KeywordValidationError, ElasticsearchOperationError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/suggest", response_model=SuggestResponse)
async def suggest(
    q: Optional[str] = Query(None, description="Prefix typed so far"),
    container: ServiceContainer = Depends(get_container)
):
    """
    Get keyword completions for a prefix.

    Features:
    - Prefix matching and ranking by keyword weight, done by Elasticsearch
    - Duplicate completions suppressed
    - At most 10 suggestions returned
    - Empty list when nothing matches
    """
    try:
        suggestions = await container.autocomplete_service.get_suggestions(q)
    except KeywordValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ElasticsearchOperationError as e:
        logger.error("suggest.failed error=%s", e)
        raise HTTPException(status_code=500, detail="suggest failed")
    return SuggestResponse(suggestions=suggestions)
