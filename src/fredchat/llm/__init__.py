from .base import LLMProvider
from .errors import CompletionError, InvalidResponseError
from .factory import create_llm_provider
from .models import ChatMessage, LLMResponse, build_conversation
from .providers import OpenAIProvider

__all__ = [
    "LLMProvider",
    "create_llm_provider",
    "ChatMessage",
    "CompletionError",
    "InvalidResponseError",
    "LLMResponse",
    "OpenAIProvider",
    "build_conversation",
]
