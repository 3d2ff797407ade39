"""
Submission gateway: one validated form in, one appended row out.

Validation runs before any network call, so an incomplete form never costs a
write. Writes are sent once and never retried; a resubmission by the user is a
new row. Every failure comes back as an ``{"status": "error"}`` value.
"""

from __future__ import annotations

from typing import Any, Mapping

from korje_hasana.backends.abstract import OperationResult, RowStoreBackend
from korje_hasana.domain.models import RecordKind, parse_record
from korje_hasana.errors import RowStoreError, ValidationFailure
from korje_hasana.utils.logging import get_logger

log = get_logger(__name__)

SUCCESS_MESSAGES = {
    RecordKind.APPLICATION: "Application submitted",
    RecordKind.DONATION: "Donation recorded",
    RecordKind.VOLUNTEER: "Volunteer application submitted",
}


class SubmissionGateway:
    def __init__(self, backend: RowStoreBackend) -> None:
        self.backend = backend

    async def submit(self, kind: RecordKind | str, form: Mapping[str, Any]) -> OperationResult:
        """
        Validate ``form`` as a ``kind`` record and append it as one row.

        Returns
        -------
        OperationResult
            ``{"status": "success", "message": ...}`` after exactly one write, or
            ``{"status": "error", "message": ...}`` with no write (validation) or
            a failed write (anything else).
        """
        try:
            kind = RecordKind(kind)
        except ValueError:
            log.info("[SUBMIT REJECTED] unknown kind %r", kind, extra={"kind": str(kind)})
            return OperationResult(status="error", message=f"Unknown submission kind: {kind!r}")

        try:
            record = parse_record(kind, form)
        except ValidationFailure as exc:
            log.info(
                "[SUBMIT REJECTED] %s", kind.value, extra={"kind": kind.value, "fields": exc.fields}
            )
            return OperationResult(status="error", message=str(exc))

        log.info("[SUBMIT START] %s", kind.value, extra={"kind": kind.value, "backend": self.backend.name})
        try:
            await self.backend.submit(kind, record)
        except RowStoreError as exc:
            log.warning(
                "[SUBMIT FAILED] %s",
                kind.value,
                extra={"kind": kind.value, "error_type": type(exc).__name__, "error": str(exc)},
            )
            return OperationResult(status="error", message=str(exc))
        except Exception as exc:  # noqa: BLE001 - callers must never see a raised fault
            log.exception("[SUBMIT FAILED] %s", kind.value, extra={"kind": kind.value})
            return OperationResult(status="error", message=f"Unexpected error: {exc}")

        log.info("[SUBMIT SUCCESS] %s", kind.value, extra={"kind": kind.value})
        return OperationResult(status="success", message=SUCCESS_MESSAGES[kind])

    async def submit_application(self, form: Mapping[str, Any]) -> OperationResult:
        return await self.submit(RecordKind.APPLICATION, form)

    async def submit_donation(self, form: Mapping[str, Any]) -> OperationResult:
        return await self.submit(RecordKind.DONATION, form)

    async def submit_volunteer(self, form: Mapping[str, Any]) -> OperationResult:
        return await self.submit(RecordKind.VOLUNTEER, form)


__all__ = ["SubmissionGateway", "SUCCESS_MESSAGES"]
