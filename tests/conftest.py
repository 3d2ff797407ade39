"""
Pytest configuration for the Korje Hasana client.

Provides fixtures for:
- Settings with test-specific overrides (no .env lookups matter)
- An in-memory fake row-store served through httpx.MockTransport
- Service instances wired to that fake store for either backend shape
"""

from __future__ import annotations

import json
from typing import Any, Callable, Dict, Iterable, List, Optional

import httpx
import pytest

from korje_hasana.config import Settings
from korje_hasana.infrastructure.http import build_async_client
from korje_hasana.service import KorjeHasanaService

SHEETDB_URL = "https://sheetdb.test/api/v1/abc123"
SCRIPT_URL = "https://script.test/macros/s/xyz/exec"


class FakeRowStore:
    """
    In-memory stand-in for both backend shapes.

    SheetDB requests carry ``?sheet=``; anything else is treated as the Apps
    Script endpoint. Every request is recorded in ``requests``. Sheets named in
    ``redirecting`` answer with a redirect back to themselves.
    """

    def __init__(
        self,
        sheets: Optional[Dict[str, List[Dict[str, Any]]]] = None,
        failing: Iterable[str] = (),
        redirecting: Iterable[str] = (),
        stats_reply: Optional[Dict[str, Any]] = None,
        script_reply: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.sheets: Dict[str, List[Dict[str, Any]]] = {
            name: list(rows) for name, rows in (sheets or {}).items()
        }
        self.failing = set(failing)
        self.redirecting = set(redirecting)
        self.stats_reply = stats_reply or {"status": "success", "data": {}}
        self.script_reply = script_reply or {"status": "success", "message": "ok"}
        self.requests: List[httpx.Request] = []
        self.script_posts: List[Dict[str, Any]] = []

    @property
    def writes(self) -> List[httpx.Request]:
        return [r for r in self.requests if r.method == "POST"]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        sheet = request.url.params.get("sheet")

        if sheet is not None:
            if sheet in self.failing:
                return httpx.Response(500, json={"error": f"sheet {sheet} unavailable"})
            if sheet in self.redirecting:
                return httpx.Response(302, headers={"Location": str(request.url)})
            if request.method == "GET":
                return httpx.Response(200, json=self.sheets.get(sheet, []))
            rows = json.loads(request.content)["data"]
            self.sheets.setdefault(sheet, []).extend(rows)
            return httpx.Response(201, json={"created": len(rows)})

        if request.method == "POST":
            self.script_posts.append(json.loads(request.content))
            return httpx.Response(200, json=self.script_reply)
        if request.url.params.get("action") == "getStats":
            return httpx.Response(200, json=self.stats_reply)
        return httpx.Response(200, json={"status": "error", "message": "Invalid action"})


@pytest.fixture
def test_settings() -> Settings:
    """
    Settings fixture pointing at fake endpoints, with a single read attempt.
    """
    return Settings(
        backend_type="sheetdb",
        sheetdb_base_url=SHEETDB_URL + "/",
        script_url=SCRIPT_URL,
        read_retry_attempts=1,
        request_timeout_seconds=2.0,
        log_level="DEBUG",
    )


@pytest.fixture
def script_settings(test_settings: Settings) -> Settings:
    return test_settings.model_copy(update={"backend_type": "google_sheets"})


@pytest.fixture
def store() -> FakeRowStore:
    return FakeRowStore()


@pytest.fixture
def make_service() -> Callable[..., KorjeHasanaService]:
    """
    Factory building a service whose HTTP client talks to a FakeRowStore.
    """

    def _make(settings: Settings, fake: FakeRowStore) -> KorjeHasanaService:
        client = build_async_client(settings, transport=httpx.MockTransport(fake.handler))
        return KorjeHasanaService(settings, client=client)

    return _make


@pytest.fixture
def application_form() -> Dict[str, str]:
    return {
        "name": "রহিম উদ্দিন",
        "phone": "01711000000",
        "address": "Badalgachi, Naogaon",
        "type": "Education",
        "amount": "5,000",
        "details": "Semester fees",
    }


@pytest.fixture
def volunteer_form() -> Dict[str, Any]:
    return {
        "name": "Karim",
        "phone": "01811000000",
        "address": "Naogaon",
        "occupation": "Teacher",
        "helpTypes": ["Field visits", "Accounting"],
        "hours": "5",
    }
