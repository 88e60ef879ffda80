from __future__ import annotations

from datetime import date

from conftest import FakeStore
from errors import StoreError
from models.candidate_record import CandidateRecord
from services.upsert_policy import UpsertOutcome, UpsertPolicy, upsert_candidate


def _candidate(url: str = "https://www.linkedin.com/in/jane-tan", name: str = "Jane Tan") -> CandidateRecord:
    return CandidateRecord(
        name=name,
        linkedin_url=url,
        location="Singapore",
        current_role="Avaloq Consultant",
        company="DBS Bank",
        tags=["Cash Management"],
        experience_years=10,
        date_added=date(2024, 3, 1),
    )


def test_new_candidate_is_appended_when_no_blank_row():
    store = FakeStore({"rec1": {"Name": "Alice", "LinkedIn URL": "https://www.linkedin.com/in/alice"}})
    assert UpsertPolicy(store).upsert(_candidate()) is UpsertOutcome.ADDED
    assert store.writes[0][0] is None
    assert len(store.rows) == 2


def test_blank_row_is_overwritten_instead_of_appending():
    store = FakeStore({
        "rec1": {"Name": "Alice", "LinkedIn URL": "https://www.linkedin.com/in/alice"},
        "rec2": {"Name": ""},
        "rec3": {},
    })
    assert upsert_candidate(_candidate(), store) is True
    row_id, fields = store.writes[0]
    assert row_id == "rec2"
    assert fields["Name"] == "Jane Tan"
    assert fields["Avaloq Keywords"] == ["Cash Management"]
    assert len(store.rows) == 3


def test_duplicate_url_is_skipped_without_write():
    store = FakeStore({"rec1": {"Name": "Jane Tan", "LinkedIn URL": "https://www.linkedin.com/in/jane-tan"}})
    assert UpsertPolicy(store).upsert(_candidate()) is UpsertOutcome.DUPLICATE
    assert upsert_candidate(_candidate(), store) is False
    assert store.writes == []


class _BrokenLookupStore(FakeStore):
    def find_existing(self, linkedin_url):
        raise StoreError("lookup down")


class _BrokenScanStore(FakeStore):
    def find_first_blank_row(self):
        raise StoreError("scan down")


class _BrokenWriteStore(FakeStore):
    def write_row(self, row_id, fields):
        raise StoreError("write down")


def test_failed_lookup_does_not_write():
    store = _BrokenLookupStore()
    assert UpsertPolicy(store).upsert(_candidate()) is UpsertOutcome.FAILED
    assert store.writes == []


def test_failed_blank_scan_falls_back_to_append():
    store = _BrokenScanStore({"rec1": {"Name": ""}})
    assert UpsertPolicy(store).upsert(_candidate()) is UpsertOutcome.ADDED
    assert store.writes[0][0] is None


def test_failed_write_reports_failure():
    assert UpsertPolicy(_BrokenWriteStore()).upsert(_candidate()) is UpsertOutcome.FAILED
    assert upsert_candidate(_candidate(), _BrokenWriteStore()) is False
