from datetime import datetime, timezone
from decimal import Decimal

import pytest

from korje_hasana.domain.models import (
    ApplicationRecord,
    DonationRecord,
    RecordKind,
    Statistics,
    VolunteerRecord,
    parse_record,
)
from korje_hasana.errors import ValidationFailure

CREATED_AT = datetime(2025, 3, 1, 9, 30, tzinfo=timezone.utc)


@pytest.mark.parametrize("missing", ["name", "phone", "address", "type", "amount", "details"])
def test_application_requires_every_field(application_form, missing):
    form = dict(application_form)
    form[missing] = "   "

    with pytest.raises(ValidationFailure) as excinfo:
        ApplicationRecord.from_form(form)

    assert excinfo.value.fields == (missing,)
    assert missing in str(excinfo.value)


def test_application_row_has_timestamp_fields_and_pending_status(application_form):
    record = ApplicationRecord.from_form(application_form)
    row = record.to_row(CREATED_AT)

    assert list(row)[0] == "timestamp"
    assert row["timestamp"] == "2025-03-01T09:30:00+00:00"
    assert row["amount"] == "5000"
    assert row["name"] == "রহিম উদ্দিন"
    assert row["status"] == "Pending"


def test_donation_defaults_for_anonymous_donor():
    record = DonationRecord.from_form({"type": "Zakat", "amount": "500", "name": "", "phone": None})
    fields = record.field_values()

    assert fields["name"] == "Anonymous"
    assert fields["phone"] == "N/A"
    assert fields["details"] == "N/A"
    assert "status" not in record.to_row(CREATED_AT)


def test_donation_amount_is_normalized():
    record = DonationRecord.from_form({"type": "Sadaqah", "amount": "৳1,200.50"})

    assert record.amount == Decimal("1200.50")
    assert Decimal(record.field_values()["amount"]) == Decimal("1200.50")


def test_donation_rejects_negative_amount():
    with pytest.raises(ValidationFailure) as excinfo:
        DonationRecord.from_form({"type": "Zakat", "amount": "-100"})
    assert "amount" in excinfo.value.fields


def test_donation_rejects_non_numeric_amount():
    with pytest.raises(ValidationFailure, match="not a number"):
        DonationRecord.from_form({"type": "Zakat", "amount": "a lot"})


def test_donation_amount_with_taka_abbreviation():
    record = DonationRecord.from_form({"type": "Zakat", "amount": "Tk. 500"})
    assert record.amount == Decimal("500")

    with pytest.raises(ValidationFailure, match="not a number"):
        DonationRecord.from_form({"type": "Zakat", "amount": "approx .500"})


def test_volunteer_help_types_deduplicated_in_order(volunteer_form):
    form = dict(volunteer_form, helpTypes=["Accounting", "Teaching", "Accounting", " "])
    record = VolunteerRecord.from_form(form)

    assert record.help_types == ("Accounting", "Teaching")
    assert record.field_values()["helpTypes"] == "Accounting, Teaching"
    assert record.field_values()["extra"] == "N/A"
    assert record.to_row(CREATED_AT)["status"] == "Pending"


def test_volunteer_accepts_delimited_string_and_python_name(volunteer_form):
    form = dict(volunteer_form)
    del form["helpTypes"]
    form["help_types"] = "Teaching; Field visits, Teaching"

    record = VolunteerRecord.from_form(form)

    assert record.help_types == ("Teaching", "Field visits")


def test_volunteer_requires_at_least_one_help_type(volunteer_form):
    with pytest.raises(ValidationFailure) as excinfo:
        VolunteerRecord.from_form(dict(volunteer_form, helpTypes=[]))
    assert excinfo.value.fields == ("helpTypes",)


def test_volunteer_rejects_help_types_that_are_not_text(volunteer_form):
    with pytest.raises(ValidationFailure) as excinfo:
        VolunteerRecord.from_form(dict(volunteer_form, helpTypes=3))
    assert excinfo.value.fields == ("helpTypes",)


def test_parse_record_dispatches_on_kind(application_form):
    assert isinstance(parse_record("application", application_form), ApplicationRecord)
    assert RecordKind.VOLUNTEER.action == "submitVolunteer"


def test_unknown_form_keys_are_dropped():
    record = DonationRecord.from_form({"type": "Zakat", "amount": "10", "csrf": "x"})
    assert "csrf" not in record.field_values()


def test_statistics_accepts_decorated_backend_values():
    stats = Statistics.model_validate(
        {
            "totalApplications": "12",
            "totalDonations": "৳1,500",
            "totalVolunteers": 4,
            "successRate": "45%",
        }
    )

    assert stats.as_payload() == {
        "totalApplications": 12,
        "totalDonations": 1500,
        "totalVolunteers": 4,
        "successRate": "45%",
    }


def test_statistics_payload_donations_are_always_floats():
    fractional = Statistics(total_donations=Decimal("10.50")).as_payload()["totalDonations"]
    whole = Statistics(total_donations=Decimal("1500")).as_payload()["totalDonations"]

    assert fractional == 10.5
    assert whole == 1500
    assert type(fractional) is type(whole) is float
