"""Errors raised by LLM providers."""


class CompletionError(Exception):
    """The completion request failed (network error, non-2xx status, client error)."""


class InvalidResponseError(CompletionError):
    """The completion request succeeded but carried no usable choices."""
