import logging
from fastapi import APIRouter, Depends, HTTPException, Response
from ..models.schemas import KeywordUpsertRequest, KeywordDocumentResponse
from ..services.container import ServiceContainer, get_container
from ..services.exceptions import KeywordValidationError, ElasticsearchOperationError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/keywords", status_code=201, response_class=Response)
async def upsert_keyword(
    payload: KeywordUpsertRequest,
    container: ServiceContainer = Depends(get_container)
):
    """
    Submit a keyword for autocompletion.

    Submissions are keyed by the lowercased, trimmed keyword, so resubmitting a keyword
    overwrites its weight and meta instead of adding a duplicate.
    """
    try:
        await container.keyword_service.upsert_keyword(payload)
    except KeywordValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ElasticsearchOperationError as e:
        logger.error("keyword.upsert failed error=%s", e)
        raise HTTPException(status_code=500, detail="upsert failed")
    return Response(status_code=201)


@router.get("/keywords/{keyword}", response_model=KeywordDocumentResponse)
async def get_keyword(
    keyword: str,
    container: ServiceContainer = Depends(get_container)
):
    """Look up the stored document for a keyword (matched case- and whitespace-insensitively)"""
    try:
        document = await container.keyword_service.get_keyword(keyword)
    except KeywordValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ElasticsearchOperationError as e:
        logger.error("keyword.get failed error=%s", e)
        raise HTTPException(status_code=500, detail="lookup failed")
    if document is None:
        raise HTTPException(status_code=404, detail="keyword not found")
    return document
