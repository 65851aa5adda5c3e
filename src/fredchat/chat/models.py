"""Data models for the chat view-model.

Hides the internal representation of displayed chat messages.
"""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class ChatMessage:
    """A message shown in the conversation."""

    text: str
    user: bool  # True for the human, False for the bot
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def role(self) -> str:
        return "user" if self.user else "assistant"
