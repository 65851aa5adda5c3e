"""Chat view-model.

Holds the conversation state behind the widget and runs the send sequence:
append the user message, fetch a credential, request a completion, then
append the reply or record an error. Rendering layers bind to this object
and call `on_render_complete()` after each refresh.
"""

import asyncio
import contextlib
from collections.abc import Callable
from typing import Any

from ..config import ChatConfig
from ..credentials import CredentialSource
from ..llm import InvalidResponseError, LLMProvider, build_conversation
from .formatting import SafeHtml, format_code_block
from .models import ChatMessage

COMPONENT = "Chat"

KEY_ERROR_MESSAGE = "Failed to retrieve API key."
INVALID_RESPONSE_MESSAGE = "Invalid or empty response from the API."
TECHNICAL_DIFFICULTIES_MESSAGE = (
    "I'm experiencing technical difficulties at the moment. Please try again later."
)

# Rows taken by the input control's border
INPUT_CHROME_ROWS = 2


class ChatViewModel:
    """In-memory state and operations backing the chat UI.

    The message list only grows. Each send rebuilds a one-turn conversation
    (system prompt plus the latest user text), so the remote model never
    sees earlier turns.

    Example:
        async with httpx.AsyncClient() as http:
            vm = ChatViewModel(
                config,
                credentials=BackendKeyClient(config.key_endpoint, config.auth_token, http),
                llm=OpenAIProvider(config.model, config.base_url, http_client=http),
            )
            await vm.send_message("Hello")
    """

    def __init__(
        self,
        config: ChatConfig,
        credentials: CredentialSource,
        llm: LLMProvider,
    ) -> None:
        self._config = config
        self._credentials = credentials
        self._llm = llm
        self._messages: list[ChatMessage] = []
        self._send_lock = asyncio.Lock()
        self._container: Any | None = None
        self._listeners: list[Callable[[], None]] = []
        self._debug_callback: Any | None = None

        self.user_input: str = ""
        self.loading: bool = False
        self.error: str | None = None
        self.error_occurred: bool = False
        self.custom_error_message: str | None = None
        self.formatted_response: SafeHtml = SafeHtml("")

        if config.greeting:
            self._messages.append(ChatMessage(text=config.greeting, user=False))

    @property
    def config(self) -> ChatConfig:
        return self._config

    @property
    def messages(self) -> tuple[ChatMessage, ...]:
        """Messages in insertion order."""
        return tuple(self._messages)

    @property
    def is_sending(self) -> bool:
        """Whether a send is currently in flight."""
        return self._send_lock.locked()

    def set_debug_callback(self, callback: Any) -> None:
        """Set debug callback for logging.

        Propagated to the credential source.

        Args:
            callback: Callable(level: str, component: str, message: str)
        """
        self._debug_callback = callback
        self._credentials.set_debug_callback(callback)

    def _debug(self, level: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, COMPONENT, message)

    def subscribe(self, listener: Callable[[], None]) -> None:
        """Register a callable invoked after every state change."""
        self._listeners.append(listener)

    def _notify(self) -> None:
        for listener in self._listeners:
            listener()

    async def send_message(self, text: str | None = None) -> bool:
        """Send a user message and collect the bot's reply.

        Args:
            text: Message text; defaults to the current `user_input`

        Returns:
            False if the send was ignored (blank text, or another send in
            flight under the "reject" overlap policy), True otherwise. A
            True result does not mean the reply arrived; check
            `error_occurred`.
        """
        if text is None:
            text = self.user_input
        if not text.strip():
            return False

        if self._config.overlap_policy == "reject" and self._send_lock.locked():
            self._debug("warning", "Send ignored: another message is still in flight")
            return False

        async with self._send_lock:
            await self._send(text)
        return True

    async def _send(self, text: str) -> None:
        self._messages.append(ChatMessage(text=text, user=True))
        self.loading = True
        self._clear_error()
        self._notify()

        try:
            api_key = await self._fetch_api_key()
            if not api_key:
                self._handle_error(KEY_ERROR_MESSAGE)
                return

            conversation = build_conversation(self._config.system_prompt, text)
            self._debug("info", f"Requesting completion from {self._config.model}")
            try:
                response = await self._llm.chat_completion(
                    conversation,
                    api_key=api_key,
                    model=self._config.model,
                )
            except InvalidResponseError as e:
                self._debug("error", f"Invalid response: {e}")
                self._handle_error(INVALID_RESPONSE_MESSAGE)
                return
            except Exception as e:
                self._debug("error", f"Completion failed: {e}")
                self._handle_error(TECHNICAL_DIFFICULTIES_MESSAGE)
                return

            reply = response.content.strip()
            self._messages.append(ChatMessage(text=reply, user=False))
            self.formatted_response = format_code_block(
                reply, trusted=self._config.trust_model_output
            )
            self._debug("info", f"Reply received ({len(reply)} chars)")
        finally:
            self.loading = False
            self.user_input = ""
            self._notify()

    async def _fetch_api_key(self) -> str:
        try:
            return await self._credentials.get_api_key()
        except Exception as e:
            # Sources should not raise; treat it as a missing credential
            self._debug("error", f"Credential source raised: {e}")
            return ""

    def _clear_error(self) -> None:
        self.error = None
        self.error_occurred = False
        self.custom_error_message = None

    def _handle_error(self, error_message: str) -> None:
        self.error = error_message
        self.custom_error_message = error_message
        self.error_occurred = True

    def attach_container(self, container: Any | None) -> None:
        """Attach the scrollable message container.

        The container needs `max_scroll_y` and `scroll_to(y=..., animate=...)`,
        as Textual's scrollable widgets provide.
        """
        self._container = container

    def scroll_to_bottom(self) -> None:
        """Scroll the message container so the latest message is visible.

        Does nothing if no container is attached or it is not mounted yet.
        """
        with contextlib.suppress(Exception):
            container = self._container
            container.scroll_to(y=container.max_scroll_y, animate=False)

    def on_render_complete(self) -> None:
        """Post-render hook for the rendering layer."""
        self.scroll_to_bottom()

    def auto_grow(self, control: Any) -> int:
        """Resize the text-entry control to fit its content.

        Args:
            control: Object with a `text` attribute and a `styles.height`
                setting, e.g. a Textual widget

        Returns:
            Number of visible text rows after resizing
        """
        line_count = control.text.count("\n") + 1
        rows = max(self._config.input_min_rows, min(line_count, self._config.input_max_rows))
        control.styles.height = rows + INPUT_CHROME_ROWS
        return rows
