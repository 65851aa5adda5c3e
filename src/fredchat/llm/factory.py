from typing import Any

from .base import LLMProvider
from .providers import OpenAIProvider


def create_llm_provider(provider: str, **config: Any) -> LLMProvider:
    """Create an LLM provider instance.

    This factory function hides the instantiation logic for different providers.

    Args:
        provider: Provider type ('openai')
        **config: Provider-specific configuration
            For OpenAI:
                - model: str (default: 'gpt-4')
                - base_url: str | None
                - organization: str | None
                - http_client: httpx.AsyncClient | None

    Returns:
        Initialized LLM provider instance

    Raises:
        ValueError: If provider type is not supported

    Examples:
        >>> provider = create_llm_provider(
        ...     "openai",
        ...     model="gpt-4",
        ...     base_url="https://api.openai.com/v1"
        ... )
    """
    provider_lower = provider.lower()

    if provider_lower == "openai":
        return OpenAIProvider(**config)

    raise ValueError(
        f"Unsupported provider: {provider}. "
        f"Supported providers: 'openai'"
    )
