"""
fredchat: a chat widget for an LLM completion API.

Each module hides a specific design decision: where the API key comes from
(credentials), which completion API is called (llm), how conversation state
evolves (chat), and how it is drawn (ui).
"""

__version__ = "0.1.0"

from .chat import ChatMessage, ChatViewModel, format_code_block
from .config import ChatConfig
from .credentials import CredentialSource, create_credential_source
from .llm import LLMProvider, create_llm_provider

__all__ = [
    "ChatConfig",
    "ChatMessage",
    "ChatViewModel",
    "CredentialSource",
    "LLMProvider",
    "create_credential_source",
    "create_llm_provider",
    "format_code_block",
]
