"""Client-side state for the document dashboard.

Keeps the dashboard's view of documents and chat history in step with the
remote service. Every mutation goes to the service first and the affected
collection is then fetched again in full; local collections are only ever
replaced, never patched.

Concurrency model:

- Everything runs on one event loop. Mutating actions (upload, delete,
  analyze) are serialized by a busy flag that the dashboard also uses to
  disable its controls. The check and the set happen before the first
  await, so a second action started while one is in flight is rejected
  without touching the network.
- Background fetches (document list, chat history) are not gated. Each
  one takes a ticket from a monotonic counter and its result is applied
  only if no newer fetch of the same collection was issued meanwhile.
  Chat history results must also still match the selected document.
"""

import inspect
import logging
from collections.abc import Awaitable, Callable, Iterator
from contextlib import contextmanager

from insight.client.api_client import APIError, DocumentAPIClient
from insight.client.uploads import UploadFile, UploadRejected, validate_upload
from insight.config import MAX_UPLOAD_SIZE, ClientConfig
from insight.models.schemas import ChatMessage, Document

logger = logging.getLogger(__name__)

Notifier = Callable[[str], Awaitable[None] | None]
Confirmer = Callable[[str], Awaitable[bool]]
Listener = Callable[["ClientStateController"], None]

UPLOAD_FAILED = "Failed to upload document"
DELETE_FAILED = "Failed to delete document"
ANALYZE_FAILED = "Failed to analyze document"
DELETE_PROMPT = "Are you sure you want to delete this document?"


class DashboardState:
    """Snapshot of what the dashboard renders."""

    def __init__(self) -> None:
        self.documents: list[Document] = []
        self.selected: Document | None = None
        self.chat_history: list[ChatMessage] = []
        self.query: str = ""
        self.busy: bool = False


async def _decline_without_prompt(message: str) -> bool:
    logger.warning(f"No confirmation handler, declining: {message}")
    return False


class ClientStateController:
    """Mediates between user actions, the remote API, and dashboard state.

    Args:
        api: Client for the remote document service.
        user_id: Identity used for every user-scoped request.
        notify: Called with a message when an action fails. May be async,
            in which case it is awaited (a blocking alert).
        confirm: Awaited before a destructive action; returning False
            cancels it. Without one, destructive actions are declined.
        max_upload_bytes: Largest file the upload action will send.
    """

    def __init__(
        self,
        api: DocumentAPIClient,
        user_id: str,
        notify: Notifier | None = None,
        confirm: Confirmer | None = None,
        max_upload_bytes: int = MAX_UPLOAD_SIZE,
    ) -> None:
        self.api = api
        self.user_id = user_id
        self.state = DashboardState()
        self._notify = notify or logger.warning
        self._confirm = confirm or _decline_without_prompt
        self._max_upload_bytes = max_upload_bytes
        self._listeners: list[Listener] = []
        self._documents_ticket = 0
        self._history_ticket = 0

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        api: DocumentAPIClient | None = None,
        notify: Notifier | None = None,
        confirm: Confirmer | None = None,
    ) -> "ClientStateController":
        return cls(
            api or DocumentAPIClient.from_config(config),
            config.user_id,
            notify=notify,
            confirm=confirm,
            max_upload_bytes=config.max_upload_bytes,
        )

    # === Read access ===

    @property
    def documents(self) -> list[Document]:
        return self.state.documents

    @property
    def selected(self) -> Document | None:
        return self.state.selected

    @property
    def chat_history(self) -> list[ChatMessage]:
        return self.state.chat_history

    @property
    def query(self) -> str:
        return self.state.query

    @property
    def busy(self) -> bool:
        return self.state.busy

    @property
    def can_analyze(self) -> bool:
        return self.selected is not None and bool(self.query.strip()) and not self.busy

    # === Change notification ===

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _changed(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    async def _alert(self, message: str) -> None:
        result = self._notify(message)
        if inspect.isawaitable(result):
            await result

    @contextmanager
    def _busy(self) -> Iterator[None]:
        self.state.busy = True
        self._changed()
        try:
            yield
        finally:
            self.state.busy = False
            self._changed()

    # === Fetching ===

    async def _fetch_documents(self) -> list[Document] | None:
        """Fetch the document list.

        Returns:
            The fresh list, or None if the fetch failed or a newer fetch
            was issued while this one was in flight.
        """
        self._documents_ticket += 1
        ticket = self._documents_ticket
        try:
            documents = await self.api.list_documents(self.user_id)
        except APIError as e:
            logger.error(f"Failed to fetch documents: {e}")
            return None
        if ticket != self._documents_ticket:
            logger.debug("Discarding stale document list response")
            return None
        return documents

    def _invalidate_history(self) -> None:
        self._history_ticket += 1

    async def _load_history(self, document_id: str) -> bool:
        self._invalidate_history()
        ticket = self._history_ticket
        try:
            messages = await self.api.get_chat_history(document_id)
        except APIError as e:
            logger.error(f"Failed to fetch chat history for {document_id}: {e}")
            return False
        current = self.selected
        if ticket != self._history_ticket or current is None or current.id != document_id:
            logger.debug(f"Discarding stale chat history for {document_id}")
            return False
        self.state.chat_history = messages
        self._changed()
        return True

    async def refresh_documents(self) -> bool:
        """Replace the document list with a fresh copy from the service.

        Returns:
            True if the list was replaced.
        """
        documents = await self._fetch_documents()
        if documents is None:
            return False
        self.state.documents = documents
        self._changed()
        return True

    async def refresh_chat_history(self) -> bool:
        """Reload the chat history of the selected document, if any."""
        if self.selected is None:
            return False
        return await self._load_history(self.selected.id)

    # === Operations ===

    async def initialize(self) -> None:
        """Load the user's documents. Failures leave the list empty."""
        await self.refresh_documents()

    async def select_document(self, document: Document | None) -> None:
        """Select a document and load its chat history.

        The previous history is dropped straight away so it can never be
        shown against the new selection. Selecting None clears it.
        """
        self.state.selected = document
        self.state.chat_history = []
        self._invalidate_history()
        self._changed()
        if document is not None:
            await self._load_history(document.id)

    def set_query(self, text: str) -> None:
        self.state.query = text or ""
        self._changed()

    async def upload_document(self, file: UploadFile | None) -> bool:
        """Upload a file and reload the document list.

        The new document is never added locally; it appears only once the
        service returns it from the list endpoint.

        Returns:
            True if the service accepted the upload.
        """
        if file is None:
            return False
        if self.busy:
            logger.warning(f"Upload of {file.filename} ignored while another action runs")
            return False

        try:
            validate_upload(file, self._max_upload_bytes)
        except UploadRejected as e:
            logger.warning(f"Upload rejected: {e}")
            await self._alert(str(e))
            return False

        with self._busy():
            try:
                await self.api.upload_document(file, self.user_id)
            except APIError as e:
                logger.error(f"Upload error: {e}")
                await self._alert(UPLOAD_FAILED)
                return False

            logger.info(f"Uploaded document: {file.filename}")
            await self.refresh_documents()
            return True

    async def delete_document(self, document_id: str) -> bool:
        """Delete a document after confirmation and reload the list.

        If the deleted document was selected, the selection and chat
        history are cleared in the same update as the new list.

        Returns:
            True if the service deleted the document.
        """
        if self.busy:
            return False
        if not await self._confirm(DELETE_PROMPT):
            return False
        # The confirmation prompt yields to the event loop
        if self.busy:
            return False

        with self._busy():
            try:
                await self.api.delete_document(document_id)
            except APIError as e:
                logger.error(f"Delete error: {e}")
                await self._alert(DELETE_FAILED)
                return False

            logger.info(f"Deleted document: {document_id}")
            documents = await self._fetch_documents()
            if documents is not None:
                self.state.documents = documents
            if self.selected is not None and self.selected.id == document_id:
                self.state.selected = None
                self.state.chat_history = []
                self._invalidate_history()
            self._changed()
            return True

    async def analyze_query(self, query: str | None = None) -> bool:
        """Ask a question about the selected document.

        Args:
            query: Question text. Defaults to the pending query; when given
                it becomes the pending query so a failed attempt can be
                retried.

        Returns:
            True if the service answered. The answer is read back through
            the chat history, never from the response body.
        """
        if self.busy:
            logger.warning("Analyze ignored while another action runs")
            return False
        if query is not None:
            self.state.query = query
            self._changed()
        text = self.state.query
        document = self.selected

        if document is None or not text.strip():
            return False

        with self._busy():
            try:
                await self.api.analyze(document.id, self.user_id, text)
            except APIError as e:
                logger.error(f"Analysis error: {e}")
                await self._alert(ANALYZE_FAILED)
                return False

            await self._load_history(document.id)
            self.state.query = ""
            return True
