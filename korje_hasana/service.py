"""
Service façade: the one interface the rest of the site talks to.

Usage:
    from korje_hasana.config import Settings
    from korje_hasana.service import KorjeHasanaService

    async with KorjeHasanaService(Settings()) as service:
        result = await service.submit_donation({"type": "Zakat", "amount": "৳500"})
        stats = await service.get_statistics()

The backend variant is chosen once, at construction, from ``BACKEND_TYPE``.
Nothing below this layer branches on that flag.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Mapping, Optional

import httpx

from korje_hasana.backends.abstract import OperationResult, RowStoreBackend
from korje_hasana.backends.apps_script import AppsScriptBackend
from korje_hasana.backends.sheetdb import SheetDBBackend
from korje_hasana.config import Settings
from korje_hasana.errors import RowStoreError
from korje_hasana.gateway import SubmissionGateway
from korje_hasana.infrastructure.http import build_async_client
from korje_hasana.utils.logging import get_logger

log = get_logger(__name__)

BackendFactory = Callable[[Settings, httpx.AsyncClient], RowStoreBackend]


def _backend_factories() -> Dict[str, BackendFactory]:
    """Registry of available backends."""
    return {
        "sheetdb": lambda settings, client: SheetDBBackend(settings, client),
        "google_sheets": lambda settings, client: AppsScriptBackend(settings, client),
    }


def available_backends() -> List[str]:
    """List available backend names."""
    return sorted(_backend_factories().keys())


def build_backend(settings: Settings, client: httpx.AsyncClient) -> RowStoreBackend:
    factories = _backend_factories()
    if settings.backend_type not in factories:
        raise ValueError(
            f"Unknown backend '{settings.backend_type}'. Available: {', '.join(factories)}"
        )
    return factories[settings.backend_type](settings, client)


class KorjeHasanaService:
    """
    Uniform entry point: three submissions and one statistics read.

    Parameters
    ----------
    settings : Settings
        Built once at startup and passed in; never looked up globally here.
    client : httpx.AsyncClient, optional
        Shared HTTP client. If omitted, one is built from settings and closed
        by ``aclose()`` / the async context manager. An injected client is
        left open for its owner.
    backend : RowStoreBackend, optional
        Override the registry choice (tests, custom stores).
    """

    def __init__(
        self,
        settings: Settings,
        client: Optional[httpx.AsyncClient] = None,
        backend: Optional[RowStoreBackend] = None,
    ) -> None:
        self.settings = settings
        self._owns_client = client is None
        self.client = client if client is not None else build_async_client(settings)
        self.backend = backend if backend is not None else build_backend(settings, self.client)
        self.gateway = SubmissionGateway(self.backend)

    async def __aenter__(self) -> "KorjeHasanaService":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()

    async def submit_application(self, form: Mapping[str, Any]) -> OperationResult:
        return await self.gateway.submit_application(form)

    async def submit_donation(self, form: Mapping[str, Any]) -> OperationResult:
        return await self.gateway.submit_donation(form)

    async def submit_volunteer(self, form: Mapping[str, Any]) -> OperationResult:
        return await self.gateway.submit_volunteer(form)

    async def get_statistics(self) -> OperationResult:
        """
        Recompute the published metrics from the store.

        Returns ``{"status": "success", "data": {...}}`` or
        ``{"status": "error", "message": ...}``; never raises.
        """
        try:
            stats = await self.backend.get_statistics()
        except RowStoreError as exc:
            log.warning(
                "[STATS FAILED] %s",
                self.backend.name,
                extra={"backend": self.backend.name, "error_type": type(exc).__name__},
            )
            return OperationResult(status="error", message=str(exc))
        except Exception as exc:  # noqa: BLE001 - callers must never see a raised fault
            log.exception("[STATS FAILED] %s", self.backend.name, extra={"backend": self.backend.name})
            return OperationResult(status="error", message=str(exc) or "Failed to fetch statistics")

        return OperationResult(status="success", data=stats.as_payload())


__all__ = [
    "KorjeHasanaService",
    "available_backends",
    "build_backend",
]
