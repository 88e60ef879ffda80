from __future__ import annotations

from models.candidate_record import NOT_SPECIFIED
from services.field_cleanup import finalize_company, finalize_role, strip_noise


def test_strip_noise_cuts_bullets_counts_and_locations():
    assert strip_noise("Avaloq Developer · 500+ connections") == "Avaloq Developer"
    assert strip_noise("Avaloq Consultant 10 years") == "Avaloq Consultant"
    assert strip_noise("Avaloq Architect in Singapore area") == "Avaloq Architect"
    assert strip_noise("DBS Bank, ") == "DBS Bank"
    assert strip_noise("Credit Suisse View profile") == "Credit Suisse"
    assert strip_noise("Avaloq   Solution    Architect") == "Avaloq Solution Architect"


def test_short_company_resets_to_sentinel():
    assert finalize_company("A") == NOT_SPECIFIED
    assert finalize_company("X · Singapore") == NOT_SPECIFIED
    assert finalize_company("HSBC") == "HSBC"


def test_numeric_or_missing_values_reset_to_sentinel():
    assert finalize_role("12345") == NOT_SPECIFIED
    assert finalize_role(None) == NOT_SPECIFIED
    assert finalize_role("") == NOT_SPECIFIED
    assert finalize_role("QA") == NOT_SPECIFIED


def test_long_values_are_truncated():
    value = "Avaloq " + "x" * 120
    out = finalize_role(value)
    assert len(out) == 80
    assert out.startswith("Avaloq ")
