"""
Exceptions raised by the autocomplete services.

Routes translate these into HTTP responses: validation problems become 400s,
everything else a generic 500 with the detail kept in the logs.
"""
from typing import Optional


class AutocompleteError(Exception):
    """
    base class for all errors raised by the autocomplete services
    """

    def __init__(self, message: str = None):
        if not message:
            message = "Unspecified autocomplete service failure"
        super(AutocompleteError, self).__init__(message)


class KeywordValidationError(AutocompleteError):
    """
    a client supplied keyword or query was unusable (e.g. empty after trimming).
    Raised before any call to Elasticsearch is made.
    """


class ElasticsearchOperationError(AutocompleteError):
    """
    an Elasticsearch call failed: the transport could not reach the cluster, the cluster
    answered with an error, or the answer could not be understood.
    """

    def __init__(self, operation: str, cause: Optional[BaseException] = None, message: str = None):
        """
        create the exception

        :param str operation:  the name of the engine operation that failed (e.g. "upsert")
        :param cause:          the underlying exception, if any
        :param str message:    an explanation overriding the default one
        """
        if not message:
            message = f"Elasticsearch {operation} failed"
            if cause is not None:
                message += f": {cause}"
        super(ElasticsearchOperationError, self).__init__(message)
        self.operation = operation
        self.cause = cause


class MalformedResponseError(ElasticsearchOperationError):
    """
    Elasticsearch answered, but the response body did not have the expected shape
    """


class IndexBootstrapError(AutocompleteError):
    """
    the suggestion index could not be confirmed or created at startup.  The service must
    not accept traffic after this is raised.
    """

    def __init__(self, index: str, cause: Optional[BaseException] = None):
        message = f"Unable to prepare index '{index}'"
        if cause is not None:
            message += f": {cause}"
        super(IndexBootstrapError, self).__init__(message)
        self.index = index
        self.cause = cause
