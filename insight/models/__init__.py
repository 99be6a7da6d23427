"""Pydantic models for the remote document API.

Provides type safety and validation for everything the dashboard reads
from or sends to the service.

Models:
    - Document: Uploaded file tracked by the service
    - ChatMessage: Individual turn in a document conversation
    - MessageType: Author tag of a chat message (user or ai)
    - AnalyzeRequest: Question payload for the analyze endpoint
    - AnalyzeResponse: Answer returned by the analyze endpoint
    - User: Account record
"""

from insight.models.schemas import (
    AnalyzeRequest,
    AnalyzeResponse,
    ChatMessage,
    Document,
    MessageType,
    User,
)

__all__ = [
    "AnalyzeRequest",
    "AnalyzeResponse",
    "ChatMessage",
    "Document",
    "MessageType",
    "User",
]
