"""
Error taxonomy for row-store calls.

Every failure a submission or statistics call can hit is one of these. They are
raised inside backends and the HTTP helpers, and converted to an
``{"status": "error", "message": ...}`` value at the service boundary.
"""

from __future__ import annotations

from typing import Optional


class RowStoreError(Exception):
    """Base class for all recoverable row-store failures."""


class NetworkFailure(RowStoreError):
    """Transport-level failure: no response was received (refused, DNS, timeout)."""


class BackendRejection(RowStoreError):
    """The row-store answered, but with a non-2xx status or an error body."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class MalformedResponse(RowStoreError):
    """The response body was not valid JSON where JSON was expected."""


class ValidationFailure(RowStoreError):
    """A submission failed client-side checks; no network call was made."""

    def __init__(self, message: str, fields: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.fields = fields


__all__ = [
    "RowStoreError",
    "NetworkFailure",
    "BackendRejection",
    "MalformedResponse",
    "ValidationFailure",
]
