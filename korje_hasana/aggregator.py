"""
Statistics aggregation over rows read back from the row-store.

Usage:
    from korje_hasana.aggregator import StatisticsAggregator

    stats = await StatisticsAggregator(backend).compute()
    print(stats.as_payload())

The aggregator owns no state. Every ``compute()`` fetches the three collections
concurrently and reduces them from scratch, so results are only as fresh as the
external store's own consistency allows.

Sheet rows are edited by hand and their headers drift, so amounts and statuses
are read through a fixed, ordered list of candidate keys. When no candidate
amount key exists, a last-resort scan takes the first field in the row that
parses to a non-zero number. That scan is lossy (a phone number can win) and is
logged every time it runs.
"""

from __future__ import annotations

import asyncio
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence

from korje_hasana.domain.amounts import ZERO, parse_amount, to_decimal
from korje_hasana.domain.models import RecordKind, Statistics
from korje_hasana.errors import RowStoreError
from korje_hasana.utils.logging import get_logger

log = get_logger(__name__)

Row = Dict[str, Any]

# Order matters: first present, non-empty key wins.
AMOUNT_KEYS: tuple[str, ...] = (
    "amount",
    "Amount",
    "AMOUNT",
    "Amount (BDT)",
    "amount (BDT)",
    "Amount(BDT)",
    "Amount (Tk)",
    "Donation Amount",
    "donationAmount",
    "donation_amount",
    "পরিমাণ",
    "টাকার পরিমাণ",
)

STATUS_KEYS: tuple[str, ...] = ("status", "Status", "STATUS", "অবস্থা")

APPROVED_STATUSES = frozenset({"approved", "success", "accepted"})

# Offset used by the decay policy: total / (total + 10).
DECAY_OFFSET = 10


class SuccessRatePolicy(str, Enum):
    """How ``successRate`` is derived."""

    STATUS = "status"
    DECAY = "decay"


class RowSource(Protocol):
    """Anything that can return every row of a collection."""

    async def fetch_rows(self, kind: RecordKind) -> List[Row]:
        ...


def _first_present(row: Mapping[str, Any], keys: Sequence[str]) -> Optional[Any]:
    for key in keys:
        value = row.get(key)
        if value is None:
            continue
        if isinstance(value, str) and not value.strip():
            continue
        return value
    return None


def donation_amount(row: Mapping[str, Any]) -> Decimal:
    """
    Best-effort amount of one donation row.

    A matched candidate key that does not parse counts as zero; the scan only
    runs when no candidate key is present at all.
    """
    value = _first_present(row, AMOUNT_KEYS)
    if value is not None:
        return to_decimal(value)

    log.warning(
        "Donation row has no known amount column; scanning all fields",
        extra={"columns": list(row.keys())},
    )
    for key, candidate in row.items():
        parsed = parse_amount(candidate)
        if parsed:
            log.warning(
                "Amount guessed from column %r", key, extra={"column": key, "amount": str(parsed)}
            )
            return parsed
    return ZERO


def total_donations(rows: Sequence[Mapping[str, Any]]) -> Decimal:
    return sum((donation_amount(row) for row in rows), ZERO)


def is_approved(row: Mapping[str, Any]) -> bool:
    status = _first_present(row, STATUS_KEYS)
    return status is not None and str(status).strip().lower() in APPROVED_STATUSES


def _percent(numerator: int, denominator: int) -> int:
    if denominator <= 0:
        return 0
    ratio = Decimal(numerator * 100) / Decimal(denominator)
    return int(ratio.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def success_rate(
    applications: Sequence[Mapping[str, Any]],
    policy: SuccessRatePolicy = SuccessRatePolicy.STATUS,
) -> int:
    """
    Success rate as an integer percentage.

    ``STATUS`` counts applications whose status reads approved/success/accepted.
    ``DECAY`` ignores status entirely and returns ``total / (total + 10)``.
    """
    total = len(applications)
    if policy is SuccessRatePolicy.DECAY:
        return _percent(total, total + DECAY_OFFSET)
    approved = sum(1 for row in applications if is_approved(row))
    return _percent(approved, total)


def summarize(
    applications: Sequence[Mapping[str, Any]],
    donations: Sequence[Mapping[str, Any]],
    volunteers: Sequence[Mapping[str, Any]],
    policy: SuccessRatePolicy = SuccessRatePolicy.STATUS,
) -> Statistics:
    """Reduce the three row sets into a Statistics snapshot."""
    return Statistics(
        total_applications=len(applications),
        total_donations=total_donations(donations),
        total_volunteers=len(volunteers),
        success_rate=success_rate(applications, policy),
    )


class StatisticsAggregator:
    """
    Fan out one read per collection, join, and reduce.

    A failed read degrades that collection to an empty list so the other
    metrics still publish.
    """

    def __init__(
        self,
        source: RowSource,
        policy: SuccessRatePolicy | str = SuccessRatePolicy.STATUS,
    ) -> None:
        self._source = source
        self.policy = SuccessRatePolicy(policy)

    async def _rows_or_empty(self, kind: RecordKind) -> List[Row]:
        try:
            return await self._source.fetch_rows(kind)
        except RowStoreError as exc:
            log.warning(
                "Could not read %s rows; counting them as empty",
                kind.value,
                extra={"collection": kind.value, "error": str(exc)},
            )
            return []

    async def compute(self) -> Statistics:
        applications, donations, volunteers = await asyncio.gather(
            self._rows_or_empty(RecordKind.APPLICATION),
            self._rows_or_empty(RecordKind.DONATION),
            self._rows_or_empty(RecordKind.VOLUNTEER),
        )
        stats = summarize(applications, donations, volunteers, self.policy)
        log.info(
            "Statistics computed",
            extra={
                "applications": stats.total_applications,
                "donations": str(stats.total_donations),
                "volunteers": stats.total_volunteers,
                "success_rate": stats.success_rate,
                "policy": self.policy.value,
            },
        )
        return stats


__all__ = [
    "AMOUNT_KEYS",
    "STATUS_KEYS",
    "APPROVED_STATUSES",
    "RowSource",
    "StatisticsAggregator",
    "SuccessRatePolicy",
    "donation_amount",
    "is_approved",
    "success_rate",
    "summarize",
    "total_donations",
]
