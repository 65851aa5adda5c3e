"""Credential retrieval for outbound completion requests.

Keys are fetched per request from a trusted source, never stored client-side.
"""

from .backend import BackendKeyClient
from .base import CredentialSource
from .factory import create_credential_source
from .static import StaticCredentialSource

__all__ = [
    "BackendKeyClient",
    "CredentialSource",
    "StaticCredentialSource",
    "create_credential_source",
]
