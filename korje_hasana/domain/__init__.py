"""
Domain package for the Korje Hasana client.

Exports the submission record models, the statistics snapshot, and the amount
parsing helpers shared by the gateway and the aggregator. Keep this package
focused on data definitions and validation concerns.
"""

from korje_hasana.domain.amounts import parse_amount, parse_entered_amount, to_decimal
from korje_hasana.domain.models import (
    ApplicationRecord,
    DonationRecord,
    RecordKind,
    Statistics,
    SubmissionRecord,
    VolunteerRecord,
    parse_record,
)

__all__ = [
    "ApplicationRecord",
    "DonationRecord",
    "RecordKind",
    "Statistics",
    "SubmissionRecord",
    "VolunteerRecord",
    "parse_record",
    "parse_amount",
    "parse_entered_amount",
    "to_decimal",
]
