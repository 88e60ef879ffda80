from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class ScrapeSummary(BaseModel):
    """Totals reported at the end of one scrape run."""

    success: bool = True
    total_found: int = 0
    total_added: int = 0
    total_duplicates: int = 0
    total_failed: int = 0
    started_at: datetime
    finished_at: datetime | None = None

    model_config = ConfigDict(extra="forbid")
