from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone

from fastapi.testclient import TestClient

from api.app import create_app, format_uptime
from config.settings import get_settings
from models.scrape_summary import ScrapeSummary
from services.run_tracker import RunTracker


class _Runner:
    def __init__(self, error: Exception | None = None):
        self.calls = 0
        self.error = error

    def factory(self, settings):
        return self.run

    def run(self) -> ScrapeSummary:
        self.calls += 1
        if self.error:
            raise self.error
        return ScrapeSummary(total_found=3, total_added=2, total_duplicates=1, started_at=datetime.now(timezone.utc))


def _client(runner: _Runner, tracker: RunTracker | None = None, **overrides) -> TestClient:
    settings = replace(get_settings(), **overrides)
    return TestClient(create_app(settings, runner_factory=runner.factory, tracker=tracker))


def test_health_descriptor():
    body = _client(_Runner()).get("/").json()
    assert body["status"] == "online"
    assert body["service"] == "Avaloq Candidate Scraper"
    assert body["version"] == "1.0.0"
    assert "cronTrigger" in body["endpoints"]


def test_status_reports_credentials_and_memory():
    client = _client(_Runner(), google_api_key="k", google_cse_id="cx", airtable_token=None)
    body = client.get("/status").json()
    assert body["status"] == "healthy"
    assert body["environment"]["hasGoogleCredentials"] is True
    assert body["environment"]["hasAirtableCredentials"] is False
    assert body["memory"]["rss"].endswith("MB")
    assert body["run"]["running"] is False


def test_scrape_requires_matching_token():
    runner = _Runner()
    client = _client(runner, auth_token="s3cret")

    resp = client.post("/scrape")
    assert resp.status_code == 401
    assert resp.json()["error"] == "Unauthorized"

    resp = client.post("/scrape", headers={"x-auth-token": "wrong"})
    assert resp.status_code == 401
    assert runner.calls == 0

    resp = client.post("/scrape", headers={"x-auth-token": "s3cret"})
    assert resp.status_code == 200
    assert resp.json()["status"] == "started"
    assert runner.calls == 1


def test_scrape_open_when_no_token_configured():
    runner = _Runner()
    tracker = RunTracker()
    resp = _client(runner, tracker, auth_token=None).post("/scrape")
    assert resp.json()["status"] == "started"
    snap = tracker.snapshot()
    assert snap["runsCompleted"] == 1
    assert snap["lastSummary"]["total_added"] == 2


def test_cron_trigger_checks_secret():
    runner = _Runner()
    client = _client(runner, cron_secret="tick")

    resp = client.get("/cron-trigger", params={"secret": "nope"})
    assert resp.status_code == 401
    assert resp.json()["error"] == "Invalid cron secret"
    assert runner.calls == 0

    resp = client.get("/cron-trigger", params={"secret": "tick"})
    assert resp.json()["status"] == "started"
    assert runner.calls == 1


def test_second_trigger_while_running_is_not_started():
    runner = _Runner()
    tracker = RunTracker()
    assert tracker.try_start("manual")
    resp = _client(runner, tracker, auth_token=None).post("/scrape")
    assert resp.json()["status"] == "already_running"
    assert runner.calls == 0


def test_failed_background_run_is_recorded():
    runner = _Runner(error=RuntimeError("boom"))
    tracker = RunTracker()
    resp = _client(runner, tracker, cron_secret=None).get("/cron-trigger")
    assert resp.status_code == 200
    assert tracker.snapshot()["lastError"] == "boom"
    assert tracker.running is False


def test_unknown_route_lists_endpoints():
    resp = _client(_Runner()).get("/nope")
    assert resp.status_code == 404
    body = resp.json()
    assert body["error"] == "Not found"
    assert "POST /scrape" in body["availableEndpoints"]


def test_format_uptime():
    assert format_uptime(0) == "0s"
    assert format_uptime(61) == "1m 1s"
    assert format_uptime(3600) == "1h"
    assert format_uptime(93784) == "1d 2h 3m 4s"
