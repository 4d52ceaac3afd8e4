"""Custom exception hierarchy for urban-dict-cache."""

from __future__ import annotations


class UrbanDictError(Exception):
    """Base exception for all urban-dict-cache errors."""


class ConfigurationError(UrbanDictError):
    """Raised when client options or settings are invalid."""


class UpstreamError(UrbanDictError):
    """Raised when the definition API call fails or returns an unusable body."""

    def __init__(self, message: str, *, url: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class CacheError(UrbanDictError):
    """Raised when the cache store fails or holds a corrupt entry."""

    def __init__(self, message: str, *, key: str) -> None:
        super().__init__(message)
        self.key = key
