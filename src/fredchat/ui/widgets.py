"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Chat message rendering
- Input bar composition and submission
- Error banner and log rendering
"""

from collections.abc import Sequence
from datetime import datetime

from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.message import Message
from textual.widgets import Button, Markdown, RichLog, Static, TextArea

from ..chat import ChatMessage
from .config import LOG_MAX_MESSAGE_LENGTH, LOG_TIMESTAMP_FORMAT, MESSAGE_TIMESTAMP_FORMAT, LogLevel


class ChatInputBar(Horizontal):
    """Chat input bar with TextArea and Send button."""

    class Submitted(Message):
        """Message sent when user submits input."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    def compose(self):
        text_area = TextArea(id="chat-input", show_line_numbers=False)
        text_area.cursor_blink = False
        yield text_area
        yield Button("Send", id="send-btn", variant="success").with_tooltip(
            "Send message (Ctrl+J)"
        )

    def on_mount(self) -> None:
        text_area = self.query_one("#chat-input", TextArea)
        text_area.highlight_cursor_line = False

    @property
    def text(self) -> str:
        return self.query_one("#chat-input", TextArea).text

    @text.setter
    def text(self, value: str) -> None:
        text_area = self.query_one("#chat-input", TextArea)
        if text_area.text != value:
            text_area.text = value

    def set_sending(self, sending: bool) -> None:
        """Disable the Send button while a send is in flight."""
        self.query_one("#send-btn", Button).disabled = sending

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "send-btn":
            event.stop()
            self._submit()

    def on_key(self, event) -> None:
        """Handle keyboard shortcuts.

        Note: ctrl+enter cannot work in terminals (terminal doesn't pass
        ctrl/shift modifiers with Enter). Use ctrl+j as the submit shortcut.
        """
        if event.key == "ctrl+j":
            self._submit()
            event.prevent_default()
            event.stop()

    def _submit(self) -> None:
        # The view-model decides whether the text is blank and clears the
        # input once the send settles.
        self.post_message(self.Submitted(self.text))

    def focus_input(self) -> None:
        """Focus the text input."""
        self.query_one("#chat-input", TextArea).focus()


class ErrorBanner(Static):
    """Single-line banner for the user-facing error message."""

    def on_mount(self) -> None:
        self.display = False

    def show_error(self, message: str | None) -> None:
        """Show the message, or hide the banner when it is empty."""
        if message:
            self.update(message)
            self.display = True
        else:
            self.update("")
            self.display = False


class DebugPanel(RichLog):
    """Log panel for real-time tracing with level filtering.

    Shows timestamped log messages from all components.
    Hidden by default, shown with --log-level flag or toggled with Ctrl+D.
    """

    BORDER_TITLE = "Log"
    BORDER_SUBTITLE = "Trace log"

    def __init__(self, *args, log_level: int = LogLevel.DEBUG, **kwargs) -> None:
        super().__init__(
            *args,
            markup=True,
            highlight=False,
            auto_scroll=True,
            wrap=False,
            **kwargs
        )
        self._log_level = log_level

    @property
    def log_level(self) -> int:
        """Current log level threshold."""
        return self._log_level

    @log_level.setter
    def log_level(self, level: int) -> None:
        self._log_level = level
        self._update_subtitle()

    def _update_subtitle(self) -> None:
        if self.display:
            self.border_subtitle = f"Level: {LogLevel.name(self._log_level)}"
        else:
            self.border_subtitle = "Hidden"

    def on_mount(self) -> None:
        """Hide by default."""
        self.display = False

    def write_entry(
        self,
        component: str,
        message: str,
        level: int = LogLevel.DEBUG
    ) -> None:
        """Add a log entry if it meets the current level threshold.

        Args:
            component: Component name (TUI, Chat, Key, LLM)
            message: Log message
            level: Log level (LogLevel.DEBUG, INFO, WARNING, ERROR)
        """
        if level < self._log_level:
            return

        timestamp = datetime.now().strftime(LOG_TIMESTAMP_FORMAT)
        if len(message) > LOG_MAX_MESSAGE_LENGTH:
            message = message[:LOG_MAX_MESSAGE_LENGTH] + "..."

        level_colors = {
            LogLevel.DEBUG: "dim white",
            LogLevel.INFO: "cyan",
            LogLevel.WARNING: "yellow",
            LogLevel.ERROR: "red",
        }
        component_colors = {
            "TUI": "cyan",
            "Chat": "green",
            "Key": "yellow",
            "LLM": "magenta",
        }
        level_color = level_colors.get(level, "white")
        comp_color = component_colors.get(component, "white")
        # Messages may carry brackets from exception text
        safe_message = message.replace("[", "\\[")

        self.write(
            f"[dim]{timestamp}[/] "
            f"[{level_color}]{LogLevel.name(level):<5}[/] "
            f"[{comp_color}]\\[{component}][/] {safe_message}"
        )

    def handle_debug(self, level: str, component: str, message: str) -> None:
        """Debug-callback entry point: Callable(level, component, message)."""
        self.write_entry(component, message, LogLevel.from_string(level))

    def show(self) -> None:
        self.display = True
        self._update_subtitle()

    def hide(self) -> None:
        self.display = False
        self.border_subtitle = "Hidden"

    def toggle(self) -> bool:
        """Toggle visibility. Returns new state."""
        if self.display:
            self.hide()
            return False
        self.show()
        return True


class ChatHistoryWidget(VerticalScroll):
    """Scrollable, sender-tagged message list.

    Messages are only ever appended, so syncing renders the tail that has
    not been mounted yet.
    """

    BORDER_TITLE = "Chat"
    BORDER_SUBTITLE = "Conversation"

    def __init__(self, *args, user_label: str = "You", bot_label: str = "Bot", **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._user_label = user_label
        self._bot_label = bot_label
        self._messages: list[ChatMessage] = []

    @property
    def message_count(self) -> int:
        return len(self._messages)

    def sync(self, messages: Sequence[ChatMessage]) -> None:
        """Render any messages not displayed yet."""
        for msg in messages[len(self._messages):]:
            self._messages.append(msg)
            self._render_message(msg)
        self.border_subtitle = f"{len(self._messages)} messages"

    def get_last_response(self) -> str | None:
        """Get the last bot response."""
        for msg in reversed(self._messages):
            if not msg.user:
                return msg.text
        return None

    def _render_message(self, msg: ChatMessage) -> None:
        if msg.user:
            label, css_class = self._user_label, "user-message"
        else:
            label, css_class = self._bot_label, "bot-message"

        header = f"{label} [{msg.timestamp.strftime(MESSAGE_TIMESTAMP_FORMAT)}]"
        container = Vertical(classes=f"chat-message {css_class}")
        container.compose_add_child(Static(header, classes="message-header", markup=False))
        if msg.user:
            container.compose_add_child(Static(msg.text, classes="message-content", markup=False))
        else:
            container.compose_add_child(Markdown(msg.text, classes="message-content"))
        self.mount(container)
