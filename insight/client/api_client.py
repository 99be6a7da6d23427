"""Async HTTP client for the remote document service.

Thin wrapper over ``httpx.AsyncClient`` that speaks the service's REST
contract and turns every failure into a single ``APIError`` type. A call
succeeds only on a 2xx status; nothing is retried.
"""

import logging
from enum import Enum
from typing import TypeVar

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from insight.client.uploads import UploadFile
from insight.config import ClientConfig, get_client_config
from insight.models.schemas import (
    AnalyzeRequest,
    AnalyzeResponse,
    ChatMessage,
    Document,
    User,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

_DOCUMENT_LIST = TypeAdapter(list[Document])
_MESSAGE_LIST = TypeAdapter(list[ChatMessage])


class ErrorKind(str, Enum):
    """How a remote call failed."""

    TRANSPORT = "transport"
    APPLICATION = "application"


class APIError(Exception):
    """Raised when a remote call does not complete successfully.

    Attributes:
        operation: Name of the client method that failed.
        kind: Transport failure or non-success response.
        status_code: HTTP status for application failures.
    """

    def __init__(
        self,
        operation: str,
        kind: ErrorKind,
        message: str,
        status_code: int | None = None,
    ) -> None:
        super().__init__(f"{operation} failed: {message}")
        self.operation = operation
        self.kind = kind
        self.status_code = status_code


class DocumentAPIClient:
    """Client for the document, chat history, and analyze endpoints.

    Can be used as an async context manager. When an ``http_client`` is
    injected the caller keeps ownership of it and ``aclose`` leaves it open.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 60.0,
        http_client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "DocumentAPIClient":
        return cls(config.api_base_url, timeout=config.timeout, transport=transport)

    async def __aenter__(self) -> "DocumentAPIClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    async def _request(
        self,
        operation: str,
        method: str,
        path: str,
        **kwargs: object,
    ) -> httpx.Response:
        """Send a request and require a success status.

        Raises:
            APIError: On transport errors or non-2xx responses.
        """
        try:
            response = await self._http.request(method, path, **kwargs)
            logger.debug(f"{method} {path} -> {response.status_code}")
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise APIError(
                operation,
                ErrorKind.APPLICATION,
                f"HTTP {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.RequestError as e:
            raise APIError(operation, ErrorKind.TRANSPORT, f"Connection failed: {e}") from e
        return response

    @staticmethod
    def _decode(operation: str, response: httpx.Response, adapter: TypeAdapter) -> object:
        try:
            return adapter.validate_json(response.content)
        except ValidationError as e:
            raise APIError(
                operation,
                ErrorKind.APPLICATION,
                f"Malformed response body: {e.error_count()} error(s)",
                status_code=response.status_code,
            ) from e

    def _decode_list(
        self, operation: str, response: httpx.Response, adapter: TypeAdapter
    ) -> list:
        # The service encodes an empty result set as JSON null
        if not response.content or response.content.strip() == b"null":
            return []
        return self._decode(operation, response, adapter)

    def _decode_model(
        self, operation: str, response: httpx.Response, model: type[ModelT]
    ) -> ModelT:
        return self._decode(operation, response, TypeAdapter(model))

    def _try_decode_model(
        self, operation: str, response: httpx.Response, model: type[ModelT]
    ) -> ModelT | None:
        # Mutating calls succeed on status alone; the body is informational
        try:
            return self._decode_model(operation, response, model)
        except APIError as e:
            logger.warning(f"Ignoring response body: {e}")
            return None

    async def list_documents(self, user_id: str) -> list[Document]:
        """List every document owned by ``user_id``, newest first."""
        response = await self._request(
            "list_documents", "GET", "/documents", params={"user_id": user_id}
        )
        return self._decode_list("list_documents", response, _DOCUMENT_LIST)

    async def get_document(self, document_id: str) -> Document:
        response = await self._request("get_document", "GET", f"/documents/{document_id}")
        return self._decode_model("get_document", response, Document)

    async def upload_document(self, file: UploadFile, user_id: str) -> Document | None:
        """Upload a file as multipart form data.

        Args:
            file: File to send under the ``file`` field.
            user_id: Owner recorded by the service.

        Returns:
            The document record created by the service, or None if the
            success response carried no readable record.
        """
        response = await self._request(
            "upload_document",
            "POST",
            "/documents/upload",
            files={"file": file.as_multipart()},
            data={"user_id": user_id},
        )
        return self._try_decode_model("upload_document", response, Document)

    async def delete_document(self, document_id: str) -> None:
        await self._request("delete_document", "DELETE", f"/documents/{document_id}")

    async def get_chat_history(self, document_id: str) -> list[ChatMessage]:
        """Fetch a document's conversation in timestamp order."""
        response = await self._request(
            "get_chat_history", "GET", f"/documents/{document_id}/chat-history"
        )
        return self._decode_list("get_chat_history", response, _MESSAGE_LIST)

    async def analyze(
        self, document_id: str, user_id: str, query: str
    ) -> AnalyzeResponse | None:
        """Ask a question about a document.

        The service stores both the question and the answer in the
        document's chat history.

        Args:
            document_id: Document to ask about.
            user_id: Owner of the conversation.
            query: The question text.

        Returns:
            The answer as returned by the service, or None if the success
            response carried no readable answer.
        """
        payload = AnalyzeRequest(query=query)
        response = await self._request(
            "analyze",
            "POST",
            f"/documents/{document_id}/analyze",
            params={"user_id": user_id},
            json=payload.model_dump(),
        )
        return self._try_decode_model("analyze", response, AnalyzeResponse)

    async def create_user(self, email: str) -> User:
        response = await self._request("create_user", "POST", "/users", json={"email": email})
        return self._decode_model("create_user", response, User)


# Module-level shared instance
_api_client: DocumentAPIClient | None = None


def get_api_client(config: ClientConfig | None = None) -> DocumentAPIClient:
    """Get or create the shared API client.

    One connection pool serves every dashboard page.

    Args:
        config: Configuration used on first creation. Loaded from the
            environment when omitted.

    Returns:
        The DocumentAPIClient instance.
    """
    global _api_client
    if _api_client is None:
        _api_client = DocumentAPIClient.from_config(config or get_client_config())
    return _api_client


async def close_api_client() -> None:
    """Close the shared API client, if one was created."""
    global _api_client
    if _api_client is not None:
        await _api_client.aclose()
        _api_client = None
