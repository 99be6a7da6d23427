"""Pytest fixtures and shared test configuration.

Provides an in-memory stand-in for the remote document service and
clients wired to it through ASGI transport.

Fixtures:
    - remote: Fake service state (documents, chat history, failure switches)
    - api_client: DocumentAPIClient talking to the fake service
    - alerts: Messages shown to the user during a test
    - confirm_answer: What the delete confirmation returns (mutable)
    - controller: ClientStateController wired to all of the above
"""

from collections.abc import AsyncGenerator
from datetime import datetime, timedelta, timezone

import pytest
from fastapi import APIRouter, FastAPI, File, Form, HTTPException, Response, UploadFile
from httpx import ASGITransport

from insight.client.api_client import DocumentAPIClient
from insight.models.schemas import AnalyzeRequest, ChatMessage, Document, MessageType, User
from insight.state.controller import ClientStateController

TEST_USER_ID = "test-user-12345"
BASE_URL = "http://test/api"
_EPOCH = datetime(2025, 1, 1, tzinfo=timezone.utc)


class FakeRemoteService:
    """In-memory document service speaking the real REST contract.

    Attributes:
        documents: Stored documents by id.
        chat: Stored messages per document id.
        failing: Operation names that answer with HTTP 500.
        calls: Operation names in the order they were served.
    """

    def __init__(self) -> None:
        self.documents: dict[str, Document] = {}
        self.chat: dict[str, list[ChatMessage]] = {}
        self.failing: set[str] = set()
        self.calls: list[str] = []
        self._counter = 0
        self.app = self._create_app()

    def _next(self) -> tuple[int, str]:
        self._counter += 1
        stamp = (_EPOCH + timedelta(minutes=self._counter)).isoformat()
        return self._counter, stamp

    def add_document(self, file_name: str, user_id: str = TEST_USER_ID) -> Document:
        n, stamp = self._next()
        doc = Document(
            id=f"doc-{n}",
            user_id=user_id,
            file_name=file_name,
            storage_path=f"uploads/doc-{n}.pdf",
            uploaded_at=stamp,
        )
        self.documents[doc.id] = doc
        return doc

    def add_message(self, document_id: str, message_type: MessageType, content: str) -> None:
        n, stamp = self._next()
        self.chat.setdefault(document_id, []).append(
            ChatMessage(
                id=f"msg-{n}",
                document_id=document_id,
                user_id=self.documents[document_id].user_id,
                message_type=message_type,
                message_content=content,
                timestamp=stamp,
            )
        )

    def _serve(self, operation: str) -> None:
        self.calls.append(operation)
        if operation in self.failing:
            raise HTTPException(status_code=500, detail=f"{operation} failed")

    def _create_app(self) -> FastAPI:
        router = APIRouter(prefix="/api")

        @router.get("/documents")
        async def list_documents(user_id: str) -> list[Document] | None:
            self._serve("list_documents")
            docs = [d for d in self.documents.values() if d.user_id == user_id]
            # Empty results come back as null, like the real service
            return sorted(docs, key=lambda d: d.uploaded_at, reverse=True) or None

        @router.post("/documents/upload")
        async def upload_document(
            file: UploadFile = File(...), user_id: str = Form(...)
        ) -> Document:
            self._serve("upload_document")
            await file.read()
            return self.add_document(file.filename or "unnamed", user_id=user_id)

        @router.get("/documents/{document_id}")
        async def get_document(document_id: str) -> Document:
            self._serve("get_document")
            if document_id not in self.documents:
                raise HTTPException(status_code=404, detail="Document not found")
            return self.documents[document_id]

        @router.delete("/documents/{document_id}", status_code=204)
        async def delete_document(document_id: str) -> Response:
            self._serve("delete_document")
            if document_id not in self.documents:
                raise HTTPException(status_code=404, detail="Document not found")
            del self.documents[document_id]
            self.chat.pop(document_id, None)
            return Response(status_code=204)

        @router.get("/documents/{document_id}/chat-history")
        async def chat_history(document_id: str) -> list[ChatMessage] | None:
            self._serve("get_chat_history")
            return self.chat.get(document_id) or None

        @router.post("/documents/{document_id}/analyze")
        async def analyze(document_id: str, user_id: str, payload: AnalyzeRequest) -> dict:
            self._serve("analyze")
            if document_id not in self.documents:
                raise HTTPException(status_code=404, detail="Document not found")
            answer = f"Answer to: {payload.query}"
            self.add_message(document_id, MessageType.USER, payload.query)
            self.add_message(document_id, MessageType.AI, answer)
            return {"response": answer}

        @router.post("/users")
        async def create_user(payload: dict) -> User:
            self._serve("create_user")
            _, stamp = self._next()
            return User(id="user-1", email=payload["email"], created_at=stamp)

        app = FastAPI()
        app.include_router(router)
        return app


@pytest.fixture
def remote() -> FakeRemoteService:
    """Return a fresh fake remote service."""
    return FakeRemoteService()


@pytest.fixture
async def api_client(remote: FakeRemoteService) -> AsyncGenerator[DocumentAPIClient]:
    """Create an API client bound to the fake service.

    Yields:
        DocumentAPIClient using ASGI transport.
    """
    transport = ASGITransport(app=remote.app)
    async with DocumentAPIClient(BASE_URL, transport=transport) as client:
        yield client


@pytest.fixture
def alerts() -> list[str]:
    return []


@pytest.fixture
def confirm_answer() -> dict[str, bool]:
    """Answer given by the delete confirmation; tests may flip it."""
    return {"value": True}


@pytest.fixture
def controller(
    api_client: DocumentAPIClient,
    alerts: list[str],
    confirm_answer: dict[str, bool],
) -> ClientStateController:
    """Create a controller wired to the fake service."""

    async def confirm(message: str) -> bool:
        return confirm_answer["value"]

    return ClientStateController(
        api_client,
        TEST_USER_ID,
        notify=alerts.append,
        confirm=confirm,
    )
