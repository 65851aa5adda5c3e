"""Unit tests for the LLM module."""
import json

import httpx
import pytest
from hypothesis import given
from hypothesis import strategies as st

from conftest import BASE_URL, completion_body
from fredchat.llm import (
    ChatMessage,
    CompletionError,
    InvalidResponseError,
    LLMProvider,
    OpenAIProvider,
    build_conversation,
    create_llm_provider,
)


class TestLLMProviderInterface:
    """Tests for the abstract LLMProvider interface."""

    def test_provider_is_abstract(self):
        """Test that LLMProvider cannot be instantiated directly."""
        with pytest.raises(TypeError):
            LLMProvider()  # type: ignore


class TestBuildConversation:
    """Tests for the one-turn conversation builder."""

    def test_system_then_user(self):
        conversation = build_conversation("Be nice.", "Hello")
        assert conversation == [
            ChatMessage(role="system", content="Be nice."),
            ChatMessage(role="user", content="Hello"),
        ]

    @given(st.text(), st.text())
    def test_always_exactly_two_messages(self, system_prompt: str, user_text: str):
        """Property test: the conversation never carries history."""
        conversation = build_conversation(system_prompt, user_text)
        assert [m.role for m in conversation] == ["system", "user"]
        assert conversation[1].content == user_text


class TestOpenAIProvider:
    """Tests for OpenAIProvider against a fake completion endpoint."""

    @pytest.fixture
    def provider(self, http_client):
        return OpenAIProvider(model="gpt-4", base_url=BASE_URL, http_client=http_client)

    @pytest.fixture
    def messages(self):
        return build_conversation("You are personable chatbot.", "Hi")

    def test_model_property(self, provider):
        assert provider.model == "gpt-4"

    @pytest.mark.asyncio
    async def test_chat_completion_returns_first_choice(self, provider, messages, remote):
        response = await provider.chat_completion(messages, api_key="sk-test")

        assert response.content == "Hello"
        assert response.model == "gpt-4"
        assert response.usage == {"prompt_tokens": 12, "completion_tokens": 3, "total_tokens": 15}

    @pytest.mark.asyncio
    async def test_request_carries_per_call_credential(self, provider, messages, remote):
        await provider.chat_completion(messages, api_key="sk-first")
        await provider.chat_completion(messages, api_key="sk-second")

        auth = [r.headers["Authorization"] for r in remote.completion_requests]
        assert auth == ["Bearer sk-first", "Bearer sk-second"]

    @pytest.mark.asyncio
    async def test_model_override(self, provider, messages, remote):
        await provider.chat_completion(messages, api_key="sk-test", model="gpt-4o-mini")

        body = json.loads(remote.completion_requests[0].content)
        assert body["model"] == "gpt-4o-mini"

    @pytest.mark.asyncio
    async def test_missing_choices_raises_invalid_response(self, provider, messages, remote):
        remote.completion_payload = {"id": "chatcmpl-test", "object": "chat.completion"}

        with pytest.raises(InvalidResponseError):
            await provider.chat_completion(messages, api_key="sk-test")

    @pytest.mark.asyncio
    async def test_empty_choices_raises_invalid_response(self, provider, messages, remote):
        body = completion_body("unused")
        body["choices"] = []
        remote.completion_payload = body

        with pytest.raises(InvalidResponseError):
            await provider.chat_completion(messages, api_key="sk-test")

    @pytest.mark.asyncio
    async def test_server_error_raises_completion_error_without_retry(self, provider, messages, remote):
        remote.completion_status = 503
        remote.completion_payload = {"error": {"message": "overloaded"}}

        with pytest.raises(CompletionError) as exc_info:
            await provider.chat_completion(messages, api_key="sk-test")

        assert not isinstance(exc_info.value, InvalidResponseError)
        assert len(remote.completion_requests) == 1

    @pytest.mark.asyncio
    async def test_network_error_raises_completion_error(self, provider, messages, remote):
        remote.completion_payload = httpx.ConnectError("connection refused")

        with pytest.raises(CompletionError):
            await provider.chat_completion(messages, api_key="sk-test")

    @pytest.mark.asyncio
    async def test_shared_client_survives_close(self, provider, http_client):
        await provider.close()
        assert not http_client.is_closed

    @pytest.mark.asyncio
    @pytest.mark.integration
    async def test_chat_completion_real_api(self, api_keys):
        """Integration test: one completion against the real API."""
        if not api_keys["openai"]:
            pytest.skip("OPENAI_API_KEY not set")

        async with OpenAIProvider(model="gpt-4o-mini") as provider:
            response = await provider.chat_completion(
                build_conversation("Answer with one word.", "Say hello"),
                api_key=api_keys["openai"],
            )
        assert response.content


class TestLLMFactory:
    """Tests for LLM factory function."""

    def test_create_openai_provider(self, http_client):
        provider = create_llm_provider("OpenAI", model="gpt-4", http_client=http_client)
        assert isinstance(provider, OpenAIProvider)
        assert provider.model == "gpt-4"

    def test_create_provider_unknown_type(self):
        with pytest.raises(ValueError, match="Unsupported provider"):
            create_llm_provider("unknown")
