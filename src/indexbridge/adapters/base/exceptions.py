"""Adapter-specific exceptions."""

from __future__ import annotations

from typing import Any


class IndexBridgeError(Exception):
    """Base exception for adapter errors."""


class InvalidRequest(IndexBridgeError):
    """Raised when a request is malformed or cannot match anything."""


class BackendUnavailable(IndexBridgeError):
    """Raised when the transport cannot reach the search backend."""


class ConfigurationError(IndexBridgeError):
    """Raised when adapter configuration is invalid."""


class IndexAdminError(IndexBridgeError):
    """Raised when the backend rejects an index administration call.

    Attributes:
        status: HTTP status reported by the backend, if any.
        cause: The backend's error payload or message.
    """

    def __init__(self, message: str, status: int | None = None, cause: Any = None) -> None:
        super().__init__(message)
        self.status = status
        self.cause = cause
