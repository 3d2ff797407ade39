"""
Backend interfaces and result contracts for the Korje Hasana client.

Concrete backends (SheetDB, Apps Script) implement the RowStoreBackend protocol.
Backends raise ``RowStoreError`` subclasses; the service turns those into an
OperationResult so callers only ever see values.
"""

from __future__ import annotations

import abc
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Protocol, TypedDict, runtime_checkable

import httpx

from korje_hasana.config import Settings
from korje_hasana.domain.models import RecordKind, Statistics, SubmissionRecord


class OperationResult(TypedDict, total=False):
    """
    Value returned by every public service call.

    ``status`` is always present and is either ``"success"`` or ``"error"``.
    """

    status: str
    message: Optional[str]
    data: Dict[str, Any]


@runtime_checkable
class RowStoreBackend(Protocol):
    """
    Common interface all row-store backends must implement.

    Attributes
    ----------
    name : str
        A short machine-friendly identifier, matched against BACKEND_TYPE.
    description : str
        A human-friendly summary of the wire shape.
    """

    name: str
    description: str

    async def submit(self, kind: RecordKind, record: SubmissionRecord) -> Dict[str, Any]:
        """
        Append one row for ``record`` and return the decoded backend reply.

        Raises
        ------
        RowStoreError
            On any transport, status, or body problem.
        """
        ...

    async def get_statistics(self) -> Statistics:
        """Return a fresh statistics snapshot."""
        ...


class AbstractRowStoreBackend(abc.ABC):
    """
    ABC helper holding the settings and HTTP client every backend needs.

    Subclasses set ``name`` and ``description`` and implement both operations.
    """

    name: str
    description: str

    def __init__(self, settings: Settings, client: httpx.AsyncClient) -> None:
        self.settings = settings
        self.client = client

    @staticmethod
    def _now() -> datetime:
        """Client-assigned creation time for a new row."""
        return datetime.now(timezone.utc)

    @abc.abstractmethod
    async def submit(
        self, kind: RecordKind, record: SubmissionRecord
    ) -> Dict[str, Any]:  # pragma: no cover - interface only
        raise NotImplementedError

    @abc.abstractmethod
    async def get_statistics(self) -> Statistics:  # pragma: no cover - interface only
        raise NotImplementedError


__all__ = [
    "OperationResult",
    "RowStoreBackend",
    "AbstractRowStoreBackend",
]
