"""
Integration tests against a real row-store.

These read from the store configured through the environment (BACKEND_TYPE,
SHEETDB_BASE_URL or SCRIPT_URL) and never write, so they are safe to point at
the production sheet.

Run with: RUN_INTEGRATION_TESTS=1 pytest tests/integration/
"""

from __future__ import annotations

import os

import pytest

from korje_hasana.config import Settings
from korje_hasana.service import KorjeHasanaService

pytestmark = pytest.mark.skipif(
    os.getenv("RUN_INTEGRATION_TESTS", "0") != "1",
    reason="Integration tests require RUN_INTEGRATION_TESTS=1 and a reachable row-store",
)


@pytest.mark.asyncio
async def test_live_statistics_shape():
    async with KorjeHasanaService(Settings()) as service:
        result = await service.get_statistics()

    assert result["status"] == "success", result.get("message")
    data = result["data"]
    assert set(data) == {"totalApplications", "totalDonations", "totalVolunteers", "successRate"}
    assert data["successRate"].endswith("%")
    assert data["totalApplications"] >= 0


@pytest.mark.asyncio
async def test_live_statistics_repeatable():
    async with KorjeHasanaService(Settings()) as service:
        first = await service.get_statistics()
        second = await service.get_statistics()

    assert first == second
