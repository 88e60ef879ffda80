from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

from models.scrape_summary import ScrapeSummary

logger = logging.getLogger(__name__)


class RunTracker:
    """Keeps at most one scrape in flight per process and remembers the last outcome."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.running = False
        self.trigger: Optional[str] = None
        self.started_at: Optional[datetime] = None
        self.last_summary: Optional[ScrapeSummary] = None
        self.last_error: Optional[str] = None
        self.runs_completed = 0

    def try_start(self, trigger: str) -> bool:
        """Claim the run slot; False when a run is already active."""
        with self._lock:
            if self.running:
                return False
            self.running = True
            self.trigger = trigger
            self.started_at = datetime.now(timezone.utc)
            return True

    def finish(self, summary: Optional[ScrapeSummary] = None, error: Optional[str] = None) -> None:
        with self._lock:
            self.running = False
            self.last_summary = summary
            self.last_error = error
            self.runs_completed += 1

    def execute(self, trigger: str, runner: Callable[[], ScrapeSummary]) -> None:
        """Run a claimed scrape to completion. Failures are logged and recorded, never raised."""
        try:
            summary = runner()
        except Exception as e:
            logger.exception(f"{trigger.capitalize()} scraper failed: {e}", extra={"status": "failed"})
            self.finish(error=str(e))
            return
        logger.info(f"{trigger.capitalize()} scraper completed: {summary.model_dump(mode='json')}")
        self.finish(summary=summary)

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "running": self.running,
                "trigger": self.trigger,
                "startedAt": self.started_at.isoformat() if self.started_at else None,
                "runsCompleted": self.runs_completed,
                "lastSummary": self.last_summary.model_dump(mode="json") if self.last_summary else None,
                "lastError": self.last_error,
            }
