"""Main Textual TUI application.

Binds the chat view-model to widgets and forwards user interaction to it.
"""

import asyncio

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header, LoadingIndicator, TextArea

from ..chat import ChatViewModel
from .config import LogLevel
from .styles import APP_CSS
from .themes import FRED_NIGHT
from .widgets import ChatHistoryWidget, ChatInputBar, DebugPanel, ErrorBanner


class ChatWidgetApp(App):
    """Textual chat widget over a ChatViewModel."""

    CSS = APP_CSS
    TITLE = "Fred"

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit"),
        Binding("ctrl+r", "copy_last_response", "Copy Response"),
        Binding("ctrl+d", "toggle_debug", "Debug"),
    ]

    def __init__(self, view_model: ChatViewModel, log_level: str | None = None) -> None:
        super().__init__()
        self._view_model = view_model
        self._log_level = log_level

    @property
    def view_model(self) -> ChatViewModel:
        return self._view_model

    def compose(self) -> ComposeResult:
        config = self._view_model.config
        yield Header(show_clock=True)
        yield ChatHistoryWidget(
            id="chat-history",
            user_label=config.user_label,
            bot_label=config.bot_label,
        )
        yield LoadingIndicator(id="loading")
        yield ErrorBanner(id="error-banner")
        yield DebugPanel(id="debug-panel")
        yield ChatInputBar(id="chat-input-bar")
        yield Footer()

    def on_mount(self) -> None:
        """Called when app is mounted."""
        self.register_theme(FRED_NIGHT)
        self.theme = "fred-night"

        log_panel = self.query_one("#debug-panel", DebugPanel)
        if self._log_level is not None:
            log_panel.log_level = LogLevel.from_string(self._log_level)
            log_panel.show()
            log_panel.write_entry("TUI", f"Log panel enabled with level: {self._log_level.upper()}", LogLevel.INFO)
        self._view_model.set_debug_callback(log_panel.handle_debug)

        self.sub_title = f"{self._view_model.config.model}"
        self._view_model.attach_container(self.query_one("#chat-history", ChatHistoryWidget))
        self._view_model.subscribe(self._sync_view)
        self._sync_view()

        self.query_one("#chat-input-bar", ChatInputBar).focus_input()

    def _sync_view(self) -> None:
        """Push view-model state into the widgets."""
        vm = self._view_model
        chat = self.query_one("#chat-history", ChatHistoryWidget)
        chat.sync(vm.messages)

        self.query_one("#loading", LoadingIndicator).display = vm.loading
        banner = self.query_one("#error-banner", ErrorBanner)
        banner.show_error(vm.custom_error_message if vm.error_occurred else None)

        input_bar = self.query_one("#chat-input-bar", ChatInputBar)
        input_bar.text = vm.user_input
        input_bar.set_sending(vm.loading and vm.config.overlap_policy == "reject")

        self.call_after_refresh(vm.on_render_complete)

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        """Two-way bind the input text and grow the input to fit."""
        input_bar = self.query_one("#chat-input-bar", ChatInputBar)
        self._view_model.user_input = event.text_area.text
        self._view_model.auto_grow(input_bar)

    def on_chat_input_bar_submitted(self, event: ChatInputBar.Submitted) -> None:
        """Handle user input submission."""
        self._send(event.value)

    @work(group="send")
    async def _send(self, text: str) -> None:
        """Run one send as a background async worker."""
        try:
            accepted = await self._view_model.send_message(text)
        except asyncio.CancelledError:
            return
        if accepted and self._view_model.error_occurred:
            self.notify(self._view_model.custom_error_message or "Error", severity="error", timeout=4)

    def action_toggle_debug(self) -> None:
        """Toggle the log panel visibility."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        is_visible = log_panel.toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=2)

    def action_copy_last_response(self) -> None:
        """Copy last bot response to clipboard."""
        chat = self.query_one("#chat-history", ChatHistoryWidget)
        response = chat.get_last_response()
        if response:
            self.copy_to_clipboard(response)
            self.notify("Response copied")
        else:
            self.notify("No response to copy", severity="warning")


async def run_textual_tui(view_model: ChatViewModel, log_level: str | None = None) -> None:
    """Run the Textual TUI.

    Args:
        view_model: Chat view-model to display
        log_level: Log level for panel (debug/info/warning/error), None to hide
    """
    app = ChatWidgetApp(view_model, log_level=log_level)
    try:
        await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
