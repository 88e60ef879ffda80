from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest


def pytest_configure():
    # Ensure project root is on sys.path for absolute imports like 'services.upsert_policy'
    root = Path(__file__).resolve().parents[1]
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))
    # Set test environment knobs
    os.environ.setdefault("RUN_ENV", "test")


@pytest.fixture(autouse=True)
def _fresh_settings():
    # Settings are cached per process; tests that tweak env need a rebuild
    from config.settings import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class FakeStore:
    """In-memory CandidateStorePort keyed by row id, Airtable-like field names."""

    def __init__(self, rows=None):
        self.rows = dict(rows or {})
        self.writes = []
        self._next = len(self.rows) + 1

    def find_existing(self, linkedin_url):
        return any(f.get("LinkedIn URL") == linkedin_url for f in self.rows.values())

    def find_first_blank_row(self):
        blank = [rid for rid, f in self.rows.items() if not (f.get("Name") or "").strip()]
        return sorted(blank)[0] if blank else None

    def write_row(self, row_id, fields):
        self.writes.append((row_id, fields))
        if row_id is None:
            row_id = f"rec{self._next}"
            self._next += 1
        self.rows[row_id] = dict(fields)
        return row_id


class RecordingThrottle:
    def __init__(self):
        self.results = 0
        self.keywords = 0

    def after_result(self):
        self.results += 1

    def after_keyword(self):
        self.keywords += 1


@pytest.fixture
def fake_store():
    return FakeStore()


@pytest.fixture
def throttle():
    return RecordingThrottle()
