from enum import Enum

from pydantic import BaseModel, Field


class MessageType(str, Enum):
    """Author of a chat message."""

    USER = "user"
    AI = "ai"


class Document(BaseModel):
    """A user-owned file tracked by the remote service.

    Attributes:
        id: Opaque document identifier.
        user_id: Owner of the document.
        file_name: Original file name shown in the list.
        storage_path: Storage reference, meaningful only to the service.
        uploaded_at: ISO-8601 upload timestamp.
    """

    id: str
    user_id: str
    file_name: str
    storage_path: str = ""
    uploaded_at: str


class ChatMessage(BaseModel):
    """One turn of a document's conversation log.

    Attributes:
        id: Message identifier.
        document_id: Document the conversation belongs to.
        user_id: Owner of the conversation.
        message_type: Whether the user or the AI wrote the message.
        message_content: Message text.
        timestamp: ISO-8601 creation timestamp.
    """

    id: str
    document_id: str
    user_id: str
    message_type: MessageType
    message_content: str
    timestamp: str

    @property
    def is_user(self) -> bool:
        return self.message_type is MessageType.USER


class AnalyzeRequest(BaseModel):
    """Request payload for the analyze endpoint.

    The query is sent as typed; whitespace is only ignored when deciding
    whether there is anything to ask.
    """

    query: str = Field(..., min_length=1)


class AnalyzeResponse(BaseModel):
    """Answer returned by the analyze endpoint."""

    response: str


class User(BaseModel):
    """Account record returned when a user is created."""

    id: str
    email: str
    created_at: str
