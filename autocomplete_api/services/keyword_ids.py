import hashlib

from .exceptions import KeywordValidationError


def normalize_keyword(keyword: str) -> str:
    """Lowercase and trim a keyword to the form used for document identity"""
    return keyword.strip().lower()


def keyword_document_id(keyword: str) -> str:
    """
    Derive the Elasticsearch document id for a keyword.

    The id is the hex SHA-1 of the normalized keyword, so keywords differing only in
    case or surrounding whitespace share one document.
    """
    normalized = normalize_keyword(keyword)
    if not normalized:
        raise KeywordValidationError("keyword must not be empty")
    return hashlib.sha1(normalized.encode("utf-8")).hexdigest()
