"""
Google Apps Script backend: a single web-app endpoint in front of a spreadsheet.

Writes are ``POST <endpoint>`` with ``{"action": "submit<Kind>", ...fields,
"timestamp"}``; statistics come from ``GET <endpoint>?action=getStats``. The
script itself appends rows, assigns status and computes the totals, so this
backend only normalizes what it gets back.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError

from korje_hasana.backends.abstract import AbstractRowStoreBackend
from korje_hasana.config import Settings
from korje_hasana.domain.models import RecordKind, Statistics, SubmissionRecord
from korje_hasana.errors import BackendRejection, MalformedResponse
from korje_hasana.infrastructure.http import get_json, post_json


def _check_reply(body: Any) -> Dict[str, Any]:
    """The script always answers ``{status, ...}``; an error status is a rejection."""
    if not isinstance(body, dict):
        raise MalformedResponse(f"Expected a JSON object from Apps Script, got {type(body).__name__}")
    if str(body.get("status", "")).strip().lower() == "error":
        raise BackendRejection(str(body.get("message") or "Apps Script reported an error"))
    return body


class AppsScriptBackend(AbstractRowStoreBackend):
    name: str = "google_sheets"
    description: str = "Google Apps Script web app (action=submit<Kind> / action=getStats)."

    def __init__(
        self,
        settings: Settings,
        client: httpx.AsyncClient,
        script_url: Optional[str] = None,
    ) -> None:
        super().__init__(settings, client)
        self.script_url = script_url or settings.script_url

    async def submit(self, kind: RecordKind, record: SubmissionRecord) -> Dict[str, Any]:
        payload = {
            "action": kind.action,
            **record.field_values(),
            "timestamp": self._now().isoformat(),
        }
        return _check_reply(await post_json(self.client, self.script_url, payload))

    async def get_statistics(self) -> Statistics:
        body = _check_reply(
            await get_json(
                self.client,
                self.script_url,
                params={"action": "getStats"},
                attempts=self.settings.read_retry_attempts,
            )
        )
        data = body.get("data")
        if not isinstance(data, dict):
            raise MalformedResponse("getStats reply has no 'data' object")
        try:
            return Statistics.model_validate(data)
        except ValidationError as exc:
            raise MalformedResponse(f"getStats data is out of range: {exc}") from exc


__all__ = ["AppsScriptBackend"]
