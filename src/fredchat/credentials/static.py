"""Fixed credential for local runs and tests."""

from .base import CredentialSource


class StaticCredentialSource(CredentialSource):
    """Returns the same key on every call."""

    def __init__(self, api_key: str) -> None:
        super().__init__()
        self._api_key = api_key

    @property
    def source_type(self) -> str:
        return "static"

    async def get_api_key(self) -> str:
        if not self._api_key:
            self._debug("warning", "Key", "Static API key is empty")
        return self._api_key
