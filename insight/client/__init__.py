"""HTTP client for the remote document service.

Responsibilities:
    - REST calls for documents, chat history, and analysis
    - Uniform APIError for transport and application failures
    - Client-side upload filter (PDF and TXT only)

Holds no state. The state package decides what to fetch and when.
"""

from insight.client.api_client import (
    APIError,
    DocumentAPIClient,
    ErrorKind,
    close_api_client,
    get_api_client,
)
from insight.client.uploads import UploadFile, UploadRejected, validate_upload

__all__ = [
    "APIError",
    "DocumentAPIClient",
    "ErrorKind",
    "close_api_client",
    "get_api_client",
    "UploadFile",
    "UploadRejected",
    "validate_upload",
]
