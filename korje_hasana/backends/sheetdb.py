"""
SheetDB backend: one spreadsheet tab per collection behind a REST API.

Writes go to ``POST <base>?sheet=<collection>`` wrapped as ``{"data": [row]}``;
reads come from ``GET <base>?sheet=<collection>`` as a JSON array of row objects.
Statistics are computed client-side by the StatisticsAggregator.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx

from korje_hasana.aggregator import Row, StatisticsAggregator
from korje_hasana.backends.abstract import AbstractRowStoreBackend
from korje_hasana.config import Settings
from korje_hasana.domain.models import RecordKind, Statistics, SubmissionRecord
from korje_hasana.infrastructure.http import get_json, post_json
from korje_hasana.utils.logging import get_logger

log = get_logger(__name__)


class SheetDBBackend(AbstractRowStoreBackend):
    """
    Row-per-submission storage on SheetDB.

    Each row is always sent inside a one-element ``data`` list, which SheetDB
    accepts for single and bulk inserts alike.
    """

    name: str = "sheetdb"
    description: str = "SheetDB REST API, one sheet per collection (?sheet=<name>)."

    def __init__(
        self,
        settings: Settings,
        client: httpx.AsyncClient,
        base_url: Optional[str] = None,
    ) -> None:
        super().__init__(settings, client)
        self.base_url = (base_url or settings.sheetdb_base_url).rstrip("/")

    def _sheet(self, kind: RecordKind) -> str:
        return self.settings.sheet_name(kind.value)

    async def submit(self, kind: RecordKind, record: SubmissionRecord) -> Dict[str, Any]:
        sheet = self._sheet(kind)
        payload = {"data": [record.to_row(self._now())]}
        body = await post_json(self.client, self.base_url, payload, params={"sheet": sheet})
        log.debug("SheetDB insert reply", extra={"sheet": sheet, "reply": body})
        return body if isinstance(body, dict) else {"created": body}

    async def fetch_rows(self, kind: RecordKind) -> List[Row]:
        """Read every row of the collection for ``kind``."""
        sheet = self._sheet(kind)
        body = await get_json(
            self.client,
            self.base_url,
            params={"sheet": sheet},
            attempts=self.settings.read_retry_attempts,
        )
        if not isinstance(body, list):
            log.warning(
                "Expected a JSON array of rows; treating sheet as empty",
                extra={"sheet": sheet, "type": type(body).__name__},
            )
            return []
        return [row for row in body if isinstance(row, dict)]

    async def get_statistics(self) -> Statistics:
        aggregator = StatisticsAggregator(self, self.settings.success_rate_policy)
        return await aggregator.compute()


__all__ = ["SheetDBBackend"]
