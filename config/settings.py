from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

from errors import ConfigurationError


def _load_env() -> None:
    # Centralized dotenv loading; safe if .env missing
    load_dotenv()


def _flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    google_api_key: str | None
    google_cse_id: str | None
    google_search_url: str

    airtable_token: str | None
    airtable_base_id: str | None
    airtable_table_name: str
    airtable_api_url: str

    store_backend: str  # airtable | sqlite
    db_path: str

    # Control surface
    auth_token: str | None
    cron_secret: str | None
    port: int

    # Rate limiting and retries
    result_delay_seconds: float
    keyword_delay_seconds: float
    max_retries: int
    request_timeout_seconds: int
    results_per_page: int

    log_level: str
    run_env: str

    profile_site: str = "linkedin.com/in"
    service_name: str = "Avaloq Candidate Scraper"
    service_version: str = "1.0.0"
    demo: bool = False

    @property
    def has_google_credentials(self) -> bool:
        return bool(self.google_api_key and self.google_cse_id)

    @property
    def has_airtable_credentials(self) -> bool:
        return bool(self.airtable_token and self.airtable_base_id)

    def require_credentials(self) -> None:
        """Fail fast when a scrape cannot possibly run with this configuration."""
        missing = []
        if not self.google_api_key:
            missing.append("GOOGLE_API_KEY")
        if not self.google_cse_id:
            missing.append("GOOGLE_CSE_ID")
        if self.store_backend == "airtable":
            if not self.airtable_token:
                missing.append("AIRTABLE_TOKEN")
            if not self.airtable_base_id:
                missing.append("AIRTABLE_BASE_ID")
        elif self.store_backend != "sqlite":
            raise ConfigurationError(f"Unknown STORE_BACKEND: {self.store_backend}")
        if missing:
            raise ConfigurationError(f"Missing required settings: {', '.join(missing)}")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    _load_env()
    return Settings(
        google_api_key=os.getenv("GOOGLE_API_KEY"),
        google_cse_id=os.getenv("GOOGLE_CSE_ID"),
        google_search_url=os.getenv("GOOGLE_SEARCH_URL", "https://www.googleapis.com/customsearch/v1"),
        airtable_token=os.getenv("AIRTABLE_TOKEN"),
        airtable_base_id=os.getenv("AIRTABLE_BASE_ID"),
        airtable_table_name=os.getenv("AIRTABLE_TABLE_NAME", "Candidates"),
        airtable_api_url=os.getenv("AIRTABLE_API_URL", "https://api.airtable.com/v0"),
        store_backend=os.getenv("STORE_BACKEND", "airtable").lower(),
        db_path=os.getenv("DB_PATH", "candidates.db"),
        auth_token=os.getenv("AUTH_TOKEN") or None,
        cron_secret=os.getenv("CRON_SECRET") or None,
        port=int(os.getenv("PORT", "3000")),
        result_delay_seconds=float(os.getenv("RESULT_DELAY_SECONDS", "2")),
        keyword_delay_seconds=float(os.getenv("KEYWORD_DELAY_SECONDS", "5")),
        max_retries=int(os.getenv("MAX_RETRIES", "3")),
        request_timeout_seconds=int(os.getenv("REQUEST_TIMEOUT", "10")),
        results_per_page=int(os.getenv("RESULTS_PER_PAGE", "10")),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        run_env=os.getenv("RUN_ENV", "local"),
        profile_site=os.getenv("PROFILE_SITE", "linkedin.com/in"),
        demo=_flag("DEMO"),
    )
