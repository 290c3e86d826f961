from typing import Optional, List, Dict, Any
from pydantic import BaseModel


class KeywordUpsertRequest(BaseModel):
    keyword: str
    weight: Optional[int] = None
    meta: Optional[Dict[str, Any]] = None


class KeywordDocumentResponse(BaseModel):
    id: str
    keyword: str
    weight: int
    meta: Dict[str, Any] = {}


class SuggestResponse(BaseModel):
    suggestions: List[str]


class HealthDetailResponse(BaseModel):
    status: str
    timestamp: str
    elasticsearch: Dict[str, Any]
    api: Dict[str, str]


# Shape of the suggest section in an Elasticsearch search response:
# {"suggest": {"ac": [{"options": [{"text": ...}, ...]}, ...]}}

class CompletionOption(BaseModel):
    text: str


class CompletionEntry(BaseModel):
    options: List[CompletionOption]


class CompletionSearchResponse(BaseModel):
    suggest: Dict[str, List[CompletionEntry]]
