"""NiceGUI landing page."""

from nicegui import ui

FEATURE_CARDS = [
    (
        "description",
        "text-blue-600",
        "Upload Documents",
        "Upload PDF and text files containing business information, "
        "annual reports, and market analyses.",
    ),
    (
        "smart_toy",
        "text-green-600",
        "AI Analysis",
        "Ask specific questions about your documents and get strategic insights "
        "powered by advanced AI models.",
    ),
    (
        "forum",
        "text-purple-600",
        "Interactive Chat",
        "Every question and answer is kept with its document, so a conversation "
        "picks up where you left it.",
    ),
]


@ui.page("/")
def landing_page() -> None:
    """Product overview with a link to the dashboard."""
    with (
        ui.element("div").classes("w-full min-h-screen bg-gradient-to-br from-blue-50 to-indigo-100"),
        ui.column().classes("w-full max-w-5xl mx-auto px-4 py-16 items-center gap-12"),
    ):
        with ui.column().classes("items-center gap-6 text-center"):
            ui.label("Strategic Insight Analyst").classes("text-5xl font-bold text-gray-900")
            ui.label(
                "Upload business documents and leverage AI to extract and summarize "
                "strategic insights. Transform your documents into actionable intelligence."
            ).classes("text-xl text-gray-600 max-w-3xl")

        with ui.row().classes("w-full gap-8 justify-center"):
            for icon, color, title, text in FEATURE_CARDS:
                with ui.card().classes("w-72 items-center text-center p-6"):
                    ui.icon(icon).classes(f"text-4xl {color}")
                    ui.label(title).classes(f"text-2xl font-semibold {color}")
                    ui.label(text).classes("text-gray-600")

        ui.button("Get Started", on_click=lambda: ui.navigate.to("/dashboard")).props(
            "unelevated size=lg"
        ).classes("px-8")
