"""Abstract base class for credential sources.

The abstraction hides where the completion API key comes from:
- A trusted backend that hands out short-lived keys
- A fixed key supplied at startup (local use)

Sources never raise on failure. An empty string means "no credential".
"""

from abc import ABC, abstractmethod
from typing import Any


class CredentialSource(ABC):
    """Provides the bearer credential for one outbound completion request."""

    def __init__(self) -> None:
        self._debug_callback: Any | None = None

    def set_debug_callback(self, callback: Any) -> None:
        """Set debug callback for logging.

        Args:
            callback: Callable(level: str, component: str, message: str)
        """
        self._debug_callback = callback

    def _debug(self, level: str, component: str, message: str) -> None:
        """Send debug message if callback is set."""
        if self._debug_callback:
            self._debug_callback(level, component, message)

    @abstractmethod
    async def get_api_key(self) -> str:
        """Return a credential, or an empty string if none could be obtained."""

    async def close(self) -> None:
        """Release any open connections."""

    @property
    @abstractmethod
    def source_type(self) -> str:
        """Get the source type identifier."""

    async def __aenter__(self) -> "CredentialSource":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
