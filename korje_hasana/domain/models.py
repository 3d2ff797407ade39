"""
Domain models for the Korje Hasana client.

Defines the three submission record kinds (Application, Donation, Volunteer)
and the statistics snapshot. Records are built from raw form mappings with
``from_form``, which trims values, enforces the required-field contract, and
normalizes amounts before anything touches the network.
"""
from __future__ import annotations

import re
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Any, ClassVar, Dict, Mapping, Optional, Tuple, Type

from pydantic import BaseModel, Field, ValidationError, field_serializer, field_validator

from korje_hasana.domain.amounts import ZERO, parse_entered_amount, to_decimal
from korje_hasana.errors import ValidationFailure

_TAG_SEPARATORS = re.compile(r"[,;،]")


class RecordKind(str, Enum):
    """The three kinds of submission the site collects."""

    APPLICATION = "application"
    DONATION = "donation"
    VOLUNTEER = "volunteer"

    @property
    def action(self) -> str:
        """Action name used by the Apps Script endpoint, e.g. ``submitDonation``."""
        return f"submit{self.value.capitalize()}"


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, set)):
        return not any(not _is_blank(item) for item in value)
    return False


class SubmissionRecord(BaseModel):
    """
    Base class for a single row written by the submission gateway.

    Subclasses declare ``kind``, the ``required_fields`` contract (write-time
    names), and the status a fresh row starts in, if the kind has one.
    """

    kind: ClassVar[RecordKind]
    required_fields: ClassVar[Tuple[str, ...]] = ()
    initial_status: ClassVar[Optional[str]] = None

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "str_strip_whitespace": True,
    }

    @classmethod
    def _accepted_keys(cls) -> set[str]:
        return {f.alias or name for name, f in cls.model_fields.items()}

    @classmethod
    def from_form(cls, form: Mapping[str, Any]) -> "SubmissionRecord":
        """
        Build a record from a form mapping.

        Raises
        ------
        ValidationFailure
            If a required field is blank, the amount does not parse, or the
            amount is negative.
        """
        aliases = {name: f.alias for name, f in cls.model_fields.items() if f.alias}
        cleaned = {
            aliases.get(k, k): v.strip() if isinstance(v, str) else v for k, v in form.items()
        }

        missing = tuple(name for name in cls.required_fields if _is_blank(cleaned.get(name)))
        if missing:
            raise ValidationFailure(
                f"Missing required field(s) for {cls.kind.value}: {', '.join(missing)}",
                fields=missing,
            )

        accepted = cls._accepted_keys()
        # Blank optional values fall through to the model defaults.
        values = {k: v for k, v in cleaned.items() if k in accepted and not _is_blank(v)}

        if "amount" in values:
            amount = parse_entered_amount(values["amount"])
            if amount is None:
                raise ValidationFailure(
                    f"Amount is not a number: {values['amount']!r}", fields=("amount",)
                )
            values["amount"] = amount

        try:
            return cls.model_validate(values)
        except ValidationError as exc:
            fields = tuple(str(err["loc"][0]) for err in exc.errors() if err["loc"])
            details = "; ".join(f"{'.'.join(map(str, e['loc']))}: {e['msg']}" for e in exc.errors())
            raise ValidationFailure(f"Invalid {cls.kind.value}: {details}", fields=fields) from exc

    def field_values(self) -> Dict[str, Any]:
        """Normalized field values keyed by their write-time names."""
        return self.model_dump(by_alias=True, mode="json")

    def to_row(self, created_at: datetime) -> Dict[str, Any]:
        """Full row as appended to a collection: timestamp, fields, initial status."""
        row: Dict[str, Any] = {"timestamp": created_at.isoformat()}
        row.update(self.field_values())
        if self.initial_status is not None:
            row["status"] = self.initial_status
        return row


class ApplicationRecord(SubmissionRecord):
    """A loan or aid application. Reviewed out-of-band; starts as Pending."""

    kind: ClassVar[RecordKind] = RecordKind.APPLICATION
    required_fields: ClassVar[Tuple[str, ...]] = (
        "name",
        "phone",
        "address",
        "type",
        "amount",
        "details",
    )
    initial_status: ClassVar[Optional[str]] = "Pending"

    name: str
    phone: str
    address: str
    type: str
    amount: Decimal = Field(..., ge=0)
    details: str


class DonationRecord(SubmissionRecord):
    """A donation pledge. Name and phone may be left out by anonymous donors."""

    kind: ClassVar[RecordKind] = RecordKind.DONATION
    required_fields: ClassVar[Tuple[str, ...]] = ("type", "amount")

    name: str = "Anonymous"
    phone: str = "N/A"
    type: str
    amount: Decimal = Field(..., ge=0)
    method: str = ""
    details: str = "N/A"


class VolunteerRecord(SubmissionRecord):
    kind: ClassVar[RecordKind] = RecordKind.VOLUNTEER
    required_fields: ClassVar[Tuple[str, ...]] = (
        "name",
        "phone",
        "address",
        "occupation",
        "helpTypes",
        "hours",
    )
    initial_status: ClassVar[Optional[str]] = "Pending"

    name: str
    phone: str
    address: str
    occupation: str
    help_types: Tuple[str, ...] = Field(..., alias="helpTypes", min_length=1)
    hours: str
    extra: str = "N/A"

    @field_validator("help_types", mode="before")
    @classmethod
    def _split_tags(cls, value: Any) -> Tuple[str, ...]:
        if isinstance(value, str):
            value = _TAG_SEPARATORS.split(value)
        elif not isinstance(value, (list, tuple, set, frozenset)):
            raise ValueError("help types must be text or a list of text")
        tags: list[str] = []
        for tag in value:
            tag = str(tag).strip()
            if tag and tag not in tags:
                tags.append(tag)
        return tuple(tags)

    @field_serializer("help_types")
    def _join_tags(self, value: Tuple[str, ...]) -> str:
        return ", ".join(value)


RECORD_TYPES: Dict[RecordKind, Type[SubmissionRecord]] = {
    RecordKind.APPLICATION: ApplicationRecord,
    RecordKind.DONATION: DonationRecord,
    RecordKind.VOLUNTEER: VolunteerRecord,
}


def parse_record(kind: RecordKind | str, form: Mapping[str, Any]) -> SubmissionRecord:
    """Validate a form for the given kind and return the matching record."""
    return RECORD_TYPES[RecordKind(kind)].from_form(form)


class Statistics(BaseModel):
    """
    Snapshot of the four published metrics.

    Inputs are parsed tolerantly so a backend that reports ``"1,500"`` donations
    or ``"45%"`` success lands in the same shape as locally computed values.
    """

    total_applications: int = Field(0, alias="totalApplications", ge=0)
    total_donations: Decimal = Field(ZERO, alias="totalDonations")
    total_volunteers: int = Field(0, alias="totalVolunteers", ge=0)
    success_rate: int = Field(0, alias="successRate", ge=0, le=100)

    model_config = {
        "frozen": True,
        "populate_by_name": True,
    }

    @field_validator("total_applications", "total_volunteers", "success_rate", mode="before")
    @classmethod
    def _coerce_count(cls, value: Any) -> int:
        return int(to_decimal(value).quantize(Decimal(1), rounding=ROUND_HALF_UP))

    @field_validator("total_donations", mode="before")
    @classmethod
    def _coerce_amount(cls, value: Any) -> Decimal:
        return to_decimal(value)

    def as_payload(self) -> Dict[str, Any]:
        """Render in the published shape: donations as a float, the rate as a ``"N%"`` string."""
        return {
            "totalApplications": self.total_applications,
            "totalDonations": float(self.total_donations),
            "totalVolunteers": self.total_volunteers,
            "successRate": f"{self.success_rate}%",
        }


__all__ = [
    "RecordKind",
    "SubmissionRecord",
    "ApplicationRecord",
    "DonationRecord",
    "VolunteerRecord",
    "RECORD_TYPES",
    "parse_record",
    "Statistics",
]
