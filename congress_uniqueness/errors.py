"""Exceptions raised by the data provider layer.

The scoring core never raises these; missing data reaches it as ``None``.
"""

from __future__ import annotations


class ProviderError(Exception):
    """Base class for failures fetching or loading external data."""


class ApiKeyMissingError(ProviderError):
    """An API key required by a provider is not configured."""

    def __init__(self, provider: str) -> None:
        super().__init__(f"{provider} API key is not configured")
        self.provider = provider


class DataNotFoundError(ProviderError):
    """A cached dataset required by a command does not exist yet."""

    def __init__(self, dataset: str, hint: str = "") -> None:
        message = f"No cached {dataset} found"
        if hint:
            message = f"{message}. {hint}"
        super().__init__(message)
        self.dataset = dataset
