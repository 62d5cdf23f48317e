"""Framework exception types."""

from __future__ import annotations

from typing import Any

from .serialization import json_encode


class SwerveError(Exception):
    """Base error type."""


class ConfigError(SwerveError):
    """Raised when a configuration cannot be copied or decoded.

    This only happens while a server is being constructed; it is never turned
    into a per-request response.
    """


class KeyGenerationError(SwerveError):
    """Raised when the secure random source cannot produce key material."""


class HTTPError(SwerveError):
    """Structured HTTP error that is msgspec serializable."""

    def __init__(self, status: int, detail: Any) -> None:
        super().__init__(status, detail)
        self.status = status
        self.detail = detail

    def to_response_body(self) -> bytes:
        return json_encode({"error": {"status": self.status, "detail": self.detail}})
