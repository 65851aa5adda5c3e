"""Factory for creating credential sources."""

from typing import Any

from .base import CredentialSource


def create_credential_source(source: str = "backend", **kwargs: Any) -> CredentialSource:
    """Create a credential source.

    Args:
        source: Source type ("backend" or "static")
        **kwargs: Source-specific configuration
            For backend:
                - endpoint: str (required)
                - auth_token: str (required)
                - http_client: httpx.AsyncClient | None
            For static:
                - api_key: str (required)

    Returns:
        CredentialSource instance

    Raises:
        ValueError: If source type is not supported
        TypeError: If required configuration is missing
    """
    source_lower = source.lower()

    if source_lower == "backend":
        for key in ("endpoint", "auth_token"):
            if key not in kwargs:
                raise TypeError(f"Backend credential source requires '{key}' in config")
        from .backend import BackendKeyClient
        return BackendKeyClient(**kwargs)

    if source_lower == "static":
        if "api_key" not in kwargs:
            raise TypeError("Static credential source requires 'api_key' in config")
        from .static import StaticCredentialSource
        return StaticCredentialSource(**kwargs)

    raise ValueError(
        f"Unsupported credential source: {source}. "
        f"Supported sources: backend, static"
    )
