"""NiceGUI dashboard: document list, upload, and per-document AI chat."""

from datetime import datetime

from nicegui import events, ui

from insight.client.api_client import get_api_client
from insight.client.uploads import UploadFile, accept_attribute
from insight.config import get_client_config
from insight.models.schemas import ChatMessage, Document
from insight.state.controller import ClientStateController

DASHBOARD_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600;700&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    body { background: #f9fafb; min-height: 100vh; }

    .panel {
        background: white;
        border: 1px solid #e5e7eb;
        border-radius: 12px;
        box-shadow: 0 1px 3px rgba(0, 0, 0, 0.06);
    }

    .doc-item { border: 1px solid #e5e7eb; border-radius: 8px; cursor: pointer; }
    .doc-item:hover { border-color: #d1d5db; }
    .doc-item.selected { border-color: #3b82f6; background: #eff6ff; }

    .message-user { background: #3b82f6; color: white; border-radius: 8px; }
    .message-ai { background: white; border: 1px solid #e5e7eb; border-radius: 8px; }
</style>
"""


def _parse_timestamp(value: str) -> datetime | None:
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


def format_upload_date(value: str) -> str:
    """Render an upload timestamp as a short date, or echo it if unparseable."""
    parsed = _parse_timestamp(value)
    return parsed.strftime("%b %d, %Y") if parsed else value


def format_message_time(value: str) -> str:
    """Render a message timestamp as a clock time, or echo it if unparseable."""
    parsed = _parse_timestamp(value)
    return parsed.strftime("%I:%M %p") if parsed else value


async def show_alert(message: str) -> None:
    """Show a modal alert and wait until it is dismissed."""
    with ui.dialog() as dialog, ui.card().classes("min-w-[320px]"):
        ui.label(message).classes("text-sm text-gray-800")
        with ui.row().classes("w-full justify-end"):
            ui.button("OK", on_click=lambda: dialog.submit(None)).props("unelevated")
    await dialog
    dialog.clear()


async def ask_confirmation(message: str) -> bool:
    """Show a modal yes/no question and return the answer."""
    with ui.dialog() as dialog, ui.card().classes("min-w-[320px]"):
        ui.label(message).classes("text-sm text-gray-800")
        with ui.row().classes("w-full justify-end gap-2"):
            ui.button("Cancel", on_click=lambda: dialog.submit(False)).props("flat")
            ui.button("Delete", on_click=lambda: dialog.submit(True)).props(
                "unelevated color=negative"
            )
    result = await dialog
    dialog.clear()
    return bool(result)


@ui.page("/dashboard")
def dashboard_page() -> None:
    """Document dashboard page."""
    ui.add_head_html(DASHBOARD_CSS)
    config = get_client_config()
    controller = ClientStateController.from_config(
        config,
        api=get_api_client(config),
        notify=show_alert,
        confirm=ask_confirmation,
    )

    upload: ui.upload
    query_input: ui.textarea
    analyze_btn: ui.button

    async def handle_upload(e: events.UploadEventArguments) -> None:
        file = UploadFile(
            filename=e.file.name,
            content=await e.file.read(),
            content_type=e.file.content_type or "application/octet-stream",
        )
        await controller.upload_document(file)
        upload.reset()

    async def handle_delete(document_id: str) -> None:
        await controller.delete_document(document_id)

    async def handle_analyze() -> None:
        await controller.analyze_query()

    def render_document(doc: Document) -> None:
        is_selected = controller.selected is not None and controller.selected.id == doc.id
        css = "doc-item selected" if is_selected else "doc-item"
        with (
            ui.row()
            .classes(f"w-full p-3 items-center justify-between no-wrap {css}")
            .on("click", lambda d=doc: controller.select_document(d))
        ):
            with ui.column().classes("gap-0 min-w-0 flex-1"):
                ui.label(doc.file_name).classes("text-sm font-medium text-gray-900 truncate")
                ui.label(format_upload_date(doc.uploaded_at)).classes("text-xs text-gray-500")
            # stop keeps the row from selecting the document being deleted
            ui.button(icon="delete").props("flat dense round color=negative").on(
                "click.stop", lambda d=doc: handle_delete(d.id)
            )

    def render_message(msg: ChatMessage) -> None:
        align = "justify-end" if msg.is_user else "justify-start"
        bubble = "message-user" if msg.is_user else "message-ai"
        stamp = "text-blue-100" if msg.is_user else "text-gray-500"

        with ui.row().classes(f"w-full {align}"):
            with ui.element("div").classes(f"max-w-[80%] p-3 {bubble}"):
                if msg.is_user:
                    ui.label(msg.message_content).classes("text-sm whitespace-pre-wrap")
                else:
                    ui.markdown(msg.message_content).classes("text-sm")
                ui.label(format_message_time(msg.timestamp)).classes(f"text-xs mt-1 {stamp}")

    @ui.refreshable
    def document_list() -> None:
        if not controller.documents:
            ui.label("No documents uploaded yet").classes("text-sm text-gray-500")
            return
        with ui.column().classes("w-full gap-2"):
            for doc in controller.documents:
                render_document(doc)

    @ui.refreshable
    def chat_panel() -> None:
        selected = controller.selected
        if selected is None:
            with ui.column().classes("w-full flex-grow items-center justify-center gap-3"):
                ui.icon("upload_file").classes("text-5xl text-gray-300")
                ui.label("Select a document from the left panel to start analyzing").classes(
                    "text-gray-500"
                )
            return

        ui.label(f"Analyzing: {selected.file_name}").classes("text-sm text-gray-600")
        with (
            ui.scroll_area().classes("flex-grow w-full bg-gray-50 rounded-lg"),
            ui.column().classes("w-full p-4 gap-4"),
        ):
            if not controller.chat_history:
                ui.label("No conversation yet. Ask a question about this document!").classes(
                    "w-full text-center text-gray-500"
                )
            for msg in controller.chat_history:
                render_message(msg)

    rendered: dict[str, object] = {}

    def sync_controls(_: ClientStateController) -> None:
        # Collections are replaced, never mutated, so identity tells what changed
        if rendered.get("documents") is not controller.documents or rendered.get(
            "selected"
        ) is not controller.selected:
            document_list.refresh()
        if rendered.get("history") is not controller.chat_history or rendered.get(
            "selected"
        ) is not controller.selected:
            chat_panel.refresh()
        rendered.update(
            documents=controller.documents,
            selected=controller.selected,
            history=controller.chat_history,
        )
        upload.set_enabled(not controller.busy)
        query_input.set_enabled(not controller.busy and controller.selected is not None)
        if query_input.value != controller.query:
            query_input.value = controller.query
        analyze_btn.set_enabled(controller.can_analyze)
        analyze_btn.set_text("Analyzing..." if controller.busy else "Analyze")

    # === UI Layout ===
    with ui.column().classes("w-full max-w-7xl mx-auto p-4 md:p-8 gap-6"):
        with ui.column().classes("gap-1"):
            ui.label("Strategic Insight Dashboard").classes("text-3xl font-bold text-gray-900")
            ui.label("Upload documents and analyze them with AI-powered insights").classes(
                "text-gray-600"
            )

        with ui.row().classes("w-full gap-8 no-wrap items-start"):
            # Documents
            with ui.column().classes("panel p-5 gap-4 w-1/3"):
                with ui.row().classes("items-center gap-2"):
                    ui.icon("description").classes("text-xl")
                    ui.label("Documents").classes("text-lg font-semibold")
                ui.label("Upload Document").classes("text-sm font-medium")
                upload = (
                    ui.upload(on_upload=handle_upload, auto_upload=True, max_files=1)
                    .props(f'accept="{accept_attribute()}" flat bordered')
                    .classes("w-full")
                )
                ui.label("PDF and TXT files only").classes("text-sm text-gray-500")
                ui.label("Your Documents").classes("text-sm font-medium")
                document_list()

            # Chat
            with ui.column().classes("panel p-5 gap-4 flex-grow").style("height: 600px"):
                with ui.row().classes("items-center gap-2"):
                    ui.icon("chat").classes("text-xl")
                    ui.label("AI Analysis Chat").classes("text-lg font-semibold")
                with ui.column().classes("w-full flex-grow"):
                    chat_panel()
                with ui.row().classes("w-full gap-2 items-end no-wrap"):
                    query_input = (
                        ui.textarea(
                            label="Ask a question about this document",
                            placeholder="e.g., Summarize the key strategic initiatives "
                            "mentioned in this report...",
                            on_change=lambda e: controller.set_query(e.value),
                        )
                        .props("outlined dense rows=2")
                        .classes("flex-grow")
                    )
                    analyze_btn = ui.button("Analyze", on_click=handle_analyze).props(
                        "unelevated"
                    )

    controller.add_listener(sync_controls)
    sync_controls(controller)
    ui.timer(0, controller.initialize, once=True)
