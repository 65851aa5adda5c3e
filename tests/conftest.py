"""Pytest configuration and shared fixtures."""
import asyncio
import os

import httpx
import pytest

from fredchat.chat import ChatViewModel
from fredchat.config import ChatConfig
from fredchat.credentials import BackendKeyClient, CredentialSource
from fredchat.llm import OpenAIProvider

KEY_ENDPOINT = "https://backend.test/api/getApiKey"
BASE_URL = "https://llm.test/v1"
COMPLETIONS_PATH = "/v1/chat/completions"


def completion_body(content: str) -> dict:
    """Return a Chat Completions response body with one choice."""
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "created": 1700000000,
        "model": "gpt-4",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
        "usage": {"prompt_tokens": 12, "completion_tokens": 3, "total_tokens": 15},
    }


class FakeRemote:
    """Stands in for both the key backend and the completion API.

    Set `key_payload` / `completion_payload` to a JSON-able value, to raw
    bytes, or to an exception instance to raise from the transport.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.key_status = 200
        self.key_payload: object = {"apiKey": "sk-test"}
        self.completion_status = 200
        self.completion_payload: object = completion_body("Hello")

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path == "/api/getApiKey":
            return self._respond(request, self.key_status, self.key_payload)
        if request.url.path == COMPLETIONS_PATH:
            return self._respond(request, self.completion_status, self.completion_payload)
        return httpx.Response(404, json={"error": "not found"})

    @staticmethod
    def _respond(request: httpx.Request, status: int, payload: object) -> httpx.Response:
        if isinstance(payload, Exception):
            raise payload
        if isinstance(payload, bytes):
            return httpx.Response(status, content=payload)
        return httpx.Response(status, json=payload)

    @property
    def key_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path == "/api/getApiKey"]

    @property
    def completion_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path == COMPLETIONS_PATH]


class GatedCredentialSource(CredentialSource):
    """Credential source that blocks until `release()` is called."""

    def __init__(self, api_key: str = "sk-test") -> None:
        super().__init__()
        self._api_key = api_key
        self._gate = asyncio.Event()
        self.entered = asyncio.Event()
        self.calls = 0

    @property
    def source_type(self) -> str:
        return "gated"

    def release(self) -> None:
        self._gate.set()

    async def get_api_key(self) -> str:
        self.calls += 1
        self.entered.set()
        await self._gate.wait()
        return self._api_key


@pytest.fixture(scope="session")
def api_keys():
    """Return API keys from environment."""
    return {
        "openai": os.getenv("OPENAI_API_KEY"),
    }


@pytest.fixture
def config():
    """Return a config pointing at the fake remote endpoints."""
    return ChatConfig(
        auth_token="static-secret",
        key_endpoint=KEY_ENDPOINT,
        base_url=BASE_URL,
    )


@pytest.fixture
def remote():
    return FakeRemote()


@pytest.fixture
def http_client(remote):
    """HTTP client whose transport is the fake remote.

    MockTransport holds no connections, so the client needs no closing.
    """
    return httpx.AsyncClient(transport=httpx.MockTransport(remote))


@pytest.fixture
def view_model(config, http_client):
    """View-model wired to the fake remote through the real clients."""
    credentials = BackendKeyClient(config.key_endpoint, config.auth_token, http_client=http_client)
    llm = OpenAIProvider(model=config.model, base_url=config.base_url, http_client=http_client)
    return ChatViewModel(config, credentials=credentials, llm=llm)


@pytest.fixture
def debug_log():
    """Collects (level, component, message) tuples from a debug callback."""
    entries: list[tuple[str, str, str]] = []

    def _callback(level: str, component: str, message: str) -> None:
        entries.append((level, component, message))

    _callback.entries = entries
    return _callback
