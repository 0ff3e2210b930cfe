"""Custom exception hierarchy for pycriticalmaps."""

from __future__ import annotations


class CriticalMapsError(Exception):
    """Base exception for all pycriticalmaps errors."""


class ConfigError(CriticalMapsError):
    """Invalid or missing configuration."""


class EncodingError(CriticalMapsError):
    """Outgoing payload could not be serialized."""


class TransportError(CriticalMapsError):
    """HTTP-level failure (network, non-2xx, cancelled request)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class DecodeError(TransportError):
    """Response body could not be interpreted as an API response."""
