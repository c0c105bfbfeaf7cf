"""Helpers for client responses and client errors."""

from __future__ import annotations

from typing import Any

from elasticsearch import TransportError


def response_body(response: Any) -> dict[str, Any]:
    """Plain dict body of a client response (``ObjectApiResponse`` or dict)."""
    return dict(getattr(response, "body", response) or {})


def transport_cause(error: TransportError) -> str:
    """The cause a transport error reports.

    ``str()`` of a transport error is only its generic label ("Connection
    error"); the reported reason lives in ``message`` and the underlying
    exceptions in ``errors``.
    """
    cause = str(error.message)
    nested = [str(e) for e in getattr(error, "errors", ()) or ()]
    if nested:
        cause = f"{cause} ({'; '.join(nested)})"
    return cause
