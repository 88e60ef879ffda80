from __future__ import annotations

from datetime import date

import pytest
from pydantic import ValidationError

from models.candidate_record import CandidateRecord


def _record(**overrides):
    data = dict(
        name="Jane Tan",
        linkedin_url="https://www.linkedin.com/in/jane",
        location="Singapore",
        tags=["Custody"],
        date_added=date(2024, 3, 1),
    )
    data.update(overrides)
    return CandidateRecord(**data)


def test_store_fields_use_column_names():
    fields = _record(experience_years=4).to_store_fields()
    assert set(fields) == {
        "Name", "LinkedIn URL", "Location", "Current Role", "Company",
        "Avaloq Keywords", "Years of Experience", "Source", "Date Added", "Status",
    }
    assert fields["Current Role"] == "Not specified"
    assert fields["Source"] == "LinkedIn Automation"
    assert fields["Years of Experience"] == 4


def test_tags_are_deduplicated_and_required():
    assert _record(tags=["Custody", "Custody", "Reporting"]).tags == ["Custody", "Reporting"]
    with pytest.raises(ValidationError):
        _record(tags=[])
    with pytest.raises(ValidationError):
        _record(tags=[""])


def test_experience_cannot_be_negative():
    with pytest.raises(ValidationError):
        _record(experience_years=-1)


def test_record_is_immutable():
    rec = _record()
    with pytest.raises(ValidationError):
        rec.name = "Other"


def test_describe():
    assert _record(current_role="Avaloq Developer", company="UOB", experience_years=6).describe() == (
        "Avaloq Developer at UOB (6 years) - Singapore"
    )
    assert _record().describe() == "Not specified (experience unknown) - Singapore"
