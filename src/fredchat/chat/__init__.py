"""Chat view-model module.

- models.py: Displayed message representation
- formatting.py: Reply-to-HTML formatting and the trust boundary
- view_model.py: Conversation state and the send sequence
"""

from .formatting import SafeHtml, format_code_block
from .models import ChatMessage
from .view_model import (
    INVALID_RESPONSE_MESSAGE,
    KEY_ERROR_MESSAGE,
    TECHNICAL_DIFFICULTIES_MESSAGE,
    ChatViewModel,
)

__all__ = [
    "INVALID_RESPONSE_MESSAGE",
    "KEY_ERROR_MESSAGE",
    "TECHNICAL_DIFFICULTIES_MESSAGE",
    "ChatMessage",
    "ChatViewModel",
    "SafeHtml",
    "format_code_block",
]
