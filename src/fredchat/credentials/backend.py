"""Key retrieval from a trusted backend endpoint."""

import httpx

from .base import CredentialSource

COMPONENT = "Key"


class BackendKeyClient(CredentialSource):
    """Fetches a short-lived API key from a trusted backend on every call.

    Hidden design decisions:
    - Authentication to the backend with a static bearer secret
    - Response format ({"apiKey": "..."})
    - No caching: each call performs a fresh GET
    - All failures collapse to an empty string after being logged
    """

    def __init__(
        self,
        endpoint: str,
        auth_token: str,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            endpoint: Backend URL that returns the key
            auth_token: Static secret sent as `Authorization: Bearer <auth_token>`
            http_client: Shared HTTP client; one is created (and owned) if omitted
        """
        super().__init__()
        self._endpoint = endpoint
        self._auth_token = auth_token
        self._owns_http_client = http_client is None
        self._http_client = http_client or httpx.AsyncClient()

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @property
    def source_type(self) -> str:
        return "backend"

    async def get_api_key(self) -> str:
        headers = {"Authorization": f"Bearer {self._auth_token}"}
        self._debug("debug", COMPONENT, f"GET {self._endpoint}")

        try:
            response = await self._http_client.get(self._endpoint, headers=headers)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            self._debug("error", COMPONENT, f"Error fetching API key: {e}")
            return ""
        except ValueError as e:
            # json.JSONDecodeError is a ValueError
            self._debug("error", COMPONENT, f"Error fetching API key: malformed JSON ({e})")
            return ""

        api_key = data.get("apiKey") if isinstance(data, dict) else None
        if not isinstance(api_key, str) or not api_key:
            self._debug("error", COMPONENT, "Error fetching API key: response has no 'apiKey'")
            return ""

        self._debug("info", COMPONENT, "API key retrieved")
        return api_key

    async def close(self) -> None:
        if self._owns_http_client:
            await self._http_client.aclose()
