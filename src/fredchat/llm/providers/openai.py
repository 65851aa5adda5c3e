from typing import Any

import httpx
from openai import AsyncOpenAI, OpenAIError

from ..base import LLMProvider
from ..errors import CompletionError, InvalidResponseError
from ..models import ChatMessage, LLMResponse


class OpenAIProvider(LLMProvider):
    """OpenAI Chat Completions provider.

    Hidden design decisions:
    - One AsyncOpenAI client per request, bound to that request's credential
    - Retries disabled; the transport's default timeout applies
    - Message format conversion
    - Response shape validation
    """

    def __init__(
        self,
        model: str = "gpt-4",
        base_url: str | None = None,
        organization: str | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        """Initialize OpenAI provider.

        Args:
            model: Default model to use
            base_url: Optional custom API base URL
            organization: Optional organization ID
            http_client: Shared HTTP client; one is created (and owned) if omitted
        """
        self._model = model
        self._base_url = base_url
        self._organization = organization
        self._owns_http_client = http_client is None
        self._http_client = http_client or httpx.AsyncClient()

    @property
    def model(self) -> str:
        """Get the default model name."""
        return self._model

    def _client_for(self, api_key: str) -> AsyncOpenAI:
        return AsyncOpenAI(
            api_key=api_key,
            base_url=self._base_url,
            organization=self._organization,
            max_retries=0,
            http_client=self._http_client,
        )

    async def chat_completion(
        self,
        messages: list[ChatMessage],
        api_key: str,
        model: str | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        """Send `{model, messages}` to /chat/completions.

        Args:
            messages: Conversation to send
            api_key: Bearer credential for this request
            model: Model to use (overrides default)
            **kwargs: Additional OpenAI-specific parameters

        Returns:
            LLMResponse with the first choice's content
        """
        model_to_use = model or self._model
        openai_messages = [
            {"role": msg.role, "content": msg.content}
            for msg in messages
        ]

        client = self._client_for(api_key)
        try:
            completion = await client.chat.completions.create(
                model=model_to_use,
                messages=openai_messages,
                **kwargs
            )
        except OpenAIError as e:
            raise CompletionError(str(e)) from e

        # Responses are not validated by the SDK, so a body without
        # choices surfaces here as a missing attribute.
        choices = getattr(completion, "choices", None)
        if not choices:
            raise InvalidResponseError("Response contained no choices")
        try:
            content = choices[0].message.content
        except (AttributeError, IndexError, TypeError) as e:
            raise InvalidResponseError("First choice has no message content") from e
        if content is None:
            raise InvalidResponseError("First choice has no message content")

        usage = None
        if getattr(completion, "usage", None):
            usage = {
                "prompt_tokens": completion.usage.prompt_tokens,
                "completion_tokens": completion.usage.completion_tokens,
                "total_tokens": completion.usage.total_tokens
            }

        return LLMResponse(
            content=content,
            model=getattr(completion, "model", None) or model_to_use,
            usage=usage
        )

    async def close(self) -> None:
        """Close the HTTP client if this provider created it."""
        if self._owns_http_client:
            await self._http_client.aclose()
