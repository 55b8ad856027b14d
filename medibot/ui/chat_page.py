"""NiceGUI chat screen backed by ChatController."""

import html
import json

from nicegui import app, ui

from medibot.chat.controller import ChatController, ChatHooks
from medibot.models.schemas import Message, SessionSummary, ShareOutcome
from medibot.storage.local_storage import MappingStore
from medibot.ui.formatting import markdown_to_html

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    .header { background: linear-gradient(135deg, #0f766e 0%, #0e7490 100%); }

    .message-user {
        background: linear-gradient(135deg, #0f766e 0%, #0e7490 100%);
        color: white;
        border-radius: 18px 18px 4px 18px;
    }

    .message-bot {
        background: #f3f4f6;
        color: #1f2937;
        border-radius: 18px 18px 18px 4px;
    }

    .typing-dot {
        width: 8px; height: 8px;
        background: #0f766e;
        border-radius: 50%;
        animation: bounce 1.4s infinite ease-in-out;
    }
    .typing-dot:nth-child(2) { animation-delay: 0.2s; }
    .typing-dot:nth-child(3) { animation-delay: 0.4s; }

    @keyframes bounce {
        0%, 60%, 100% { transform: translateY(0); }
        30% { transform: translateY(-6px); }
    }

    .history-item.current { border-left: 3px solid #0f766e; background: #f0fdfa; }
</style>
"""

# navigator.share resolves on success and rejects when dismissed or blocked
_SHARE_JS = """
if (!navigator.share) { return 'unsupported'; }
return navigator.share(%s).then(() => 'shared', () => 'failed');
"""


async def share_with_browser(title: str, text: str) -> ShareOutcome:
    """Open the browser share sheet for the current client."""
    payload = json.dumps({"title": title, "text": text})
    try:
        result = await ui.run_javascript(_SHARE_JS % payload, timeout=60.0)
    except TimeoutError:
        return ShareOutcome.FAILED

    try:
        return ShareOutcome(result)
    except ValueError:
        return ShareOutcome.FAILED


@ui.page("/")
def index_page() -> None:
    ui.navigate.to("/chatbot")


@ui.page("/chatbot")
def chat_page() -> None:
    """Main chat page."""
    ui.add_head_html(CUSTOM_CSS)

    messages_container: ui.column
    history_list: ui.column
    history_panel: ui.column
    sidebar: ui.column
    title_label: ui.label
    error_label: ui.label
    send_btn: ui.button

    def render_message(message: Message) -> None:
        align = "justify-end" if message.is_user else "justify-start"
        bubble = "message-user" if message.is_user else "message-bot"

        with ui.row().classes(f"w-full {align} gap-3 items-end"):
            if not message.is_user:
                ui.icon("medical_services").classes("text-teal-700 text-2xl")
            with ui.element("div").classes(f"max-w-[70%] px-4 py-3 {bubble}"):
                if message.is_user:
                    content = html.escape(message.text).replace("\n", "<br>")
                else:
                    content = markdown_to_html(message.text)
                ui.html(content).classes("text-sm leading-relaxed")

    def render_typing_indicator() -> None:
        with ui.row().classes("w-full justify-start gap-3 items-end"):
            ui.icon("medical_services").classes("text-teal-700 text-2xl")
            with ui.element("div").classes("message-bot px-4 py-3"), ui.row().classes("gap-1"):
                for _ in range(3):
                    ui.element("div").classes("typing-dot")

    def render_history_item(summary: SessionSummary) -> None:
        current = " current" if summary.id == controller.session_id else ""
        with (
            ui.column()
            .classes(f"history-item{current} w-full gap-0 px-3 py-2 cursor-pointer rounded")
            .on("click", lambda _, sid=summary.id: controller.load_history(sid))
        ):
            ui.label(summary.title).classes("text-sm font-medium truncate w-full")
            ui.label(f"{summary.date} · {summary.preview}").classes("text-xs text-gray-400")

    def render() -> None:
        title_label.set_text(controller.title)
        error_label.set_text(controller.error or "")
        error_label.set_visibility(controller.error is not None)
        sidebar.set_visibility(controller.show_sidebar)
        history_panel.set_visibility(controller.show_history)
        send_btn.set_enabled(not controller.is_busy)

        messages_container.clear()
        with messages_container:
            for message in controller.messages.messages:
                render_message(message)
            if controller.is_busy:
                render_typing_indicator()

        history_list.clear()
        with history_list:
            if not controller.history:
                ui.label("No previous chats").classes("text-sm text-gray-400 px-3")
            for summary in controller.history:
                render_history_item(summary)

    controller = ChatController(
        MappingStore(app.storage.user),
        hooks=ChatHooks(
            navigate=ui.navigate.to,
            notify=ui.notify,
            share=share_with_browser,
            on_change=lambda: render(),
        ),
    )

    # === UI Layout ===
    with ui.row().classes("w-full h-screen gap-0 no-wrap"):
        # Sidebar
        with ui.column().classes("h-full w-16 items-center gap-4 py-4 bg-gray-100") as sidebar:
            ui.button(icon="add", on_click=controller.refresh_chat).props("flat round").tooltip(
                "New chat"
            )
            ui.button(icon="history", on_click=controller.toggle_history).props(
                "flat round"
            ).tooltip("Chat history")
            ui.button(icon="share", on_click=controller.share).props("flat round").tooltip(
                "Share chat"
            )
            ui.button(icon="mic", on_click=controller.go_voice).props("flat round").tooltip(
                "Voice assistant"
            )
            ui.button(icon="chat", on_click=controller.go_chatbot).props("flat round").tooltip(
                "Chatbot"
            )
            ui.space()
            ui.button(icon="login", on_click=controller.go_login).props("flat round").tooltip(
                "Log in"
            )

        # History panel
        with ui.column().classes("h-full w-72 border-r gap-2 py-3") as history_panel:
            with ui.row().classes("w-full items-center justify-between px-3"):
                ui.label("Chat History").classes("font-semibold")
                ui.button(icon="close", on_click=controller.toggle_history).props(
                    "flat round dense"
                )
            ui.button("New Chat", icon="add", on_click=controller.refresh_chat).props(
                "outline dense"
            ).classes("mx-3")
            with ui.scroll_area().classes("flex-grow w-full"):
                history_list = ui.column().classes("w-full gap-1")

        # Conversation
        with ui.column().classes("h-full flex-grow gap-0"):
            with ui.row().classes("w-full header px-5 py-3 items-center justify-between"):
                ui.button(icon="menu", on_click=controller.toggle_sidebar).props(
                    "flat round color=white"
                )
                title_label = ui.label().classes("text-white font-medium")
                ui.icon("medical_services").classes("text-white text-2xl")

            with (
                ui.scroll_area().classes("flex-grow w-full bg-white"),
                ui.column().classes("w-full p-5"),
            ):
                messages_container = ui.column().classes("w-full gap-4")

            error_label = ui.label().classes("w-full px-5 py-2 text-sm text-red-600 bg-red-50")

            with ui.row().classes("w-full p-4 gap-3 items-end border-t"):
                ui.textarea(placeholder="Type a message...").props(
                    "autogrow outlined dense rows=1"
                ).classes("flex-grow").bind_value(controller, "input_text").on(
                    "keydown.enter.prevent", lambda: controller.send()
                )
                send_btn = ui.button(icon="send", on_click=lambda: controller.send()).props(
                    "round unelevated color=teal-8"
                )

    controller.init()
    render()
    ui.timer(0.1, controller.fetch_sessions, once=True)
