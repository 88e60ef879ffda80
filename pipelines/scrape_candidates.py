from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from pydantic import ValidationError

from config.settings import Settings, get_settings
from config.vocabulary import DEFAULT_VOCABULARY, Vocabulary
from data_extractor import CandidateExtractor
from models.scrape_summary import ScrapeSummary
from ports.search import SearchPort
from ports.store import CandidateStorePort
from ports.throttle import ThrottlePort
from services.upsert_policy import UpsertOutcome, UpsertPolicy
from utils.throttle import FixedDelayThrottle

logger = logging.getLogger(__name__)


def build_profile_query(keyword: str, country: str, site: str = "linkedin.com/in") -> str:
    return f"site:{site} {keyword} {country}"


class CandidateScraper:
    """One full pass: every country x every role keyword, first result page only.

    Strictly sequential. Each hit is extracted, deduplicated and written before
    the next one is touched.
    """

    def __init__(
        self,
        searcher: SearchPort,
        store: CandidateStorePort,
        throttle: ThrottlePort,
        vocabulary: Vocabulary = DEFAULT_VOCABULARY,
        extractor: Optional[CandidateExtractor] = None,
        profile_site: str = "linkedin.com/in",
    ) -> None:
        self.searcher = searcher
        self.store = store
        self.throttle = throttle
        self.vocabulary = vocabulary
        self.extractor = extractor or CandidateExtractor(vocabulary)
        self.policy = UpsertPolicy(store)
        self.profile_site = profile_site

    def run(self) -> ScrapeSummary:
        run_id = uuid.uuid4().hex[:12]
        summary = ScrapeSummary(started_at=datetime.now(timezone.utc))
        logger.info("Starting candidate scraping", extra={"run_id": run_id})

        for country in self.vocabulary.countries:
            logger.info(f"Searching in {country}", extra={"country": country, "run_id": run_id})
            for keyword in self.vocabulary.search_keywords:
                self._scrape_keyword(summary, country, keyword, run_id)
                self.throttle.after_keyword()

        summary.finished_at = datetime.now(timezone.utc)
        logger.info(
            f"Scraping complete: found={summary.total_found} added={summary.total_added} "
            f"duplicates={summary.total_duplicates} failed={summary.total_failed}",
            extra={"run_id": run_id, "status": "complete"},
        )
        return summary

    def _scrape_keyword(self, summary: ScrapeSummary, country: str, keyword: str, run_id: str) -> None:
        extra = {"country": country, "keyword": keyword, "run_id": run_id}
        query = build_profile_query(keyword, country, self.profile_site)
        logger.info(f"Searching: {query}", extra=extra)
        results = self.searcher.search(query, page_offset=1)
        summary.total_found += len(results)
        logger.info(f"Found {len(results)} results", extra=extra)

        for item in results:
            try:
                candidate = self.extractor.extract(item, country)
            except ValidationError as e:
                logger.error(f"Could not build candidate from {item.link!r}: {e}", extra={**extra, "status": "failed"})
                summary.total_failed += 1
                self.throttle.after_result()
                continue

            outcome = self.policy.upsert(candidate)
            if outcome is UpsertOutcome.ADDED:
                summary.total_added += 1
            elif outcome is UpsertOutcome.DUPLICATE:
                summary.total_duplicates += 1
            else:
                summary.total_failed += 1
            self.throttle.after_result()


def build_store(settings: Optional[Settings] = None) -> CandidateStorePort:
    """Store selected by STORE_BACKEND."""
    settings = settings or get_settings()
    if settings.store_backend == "sqlite":
        from db.repos.candidates_repo import SqliteCandidateStore

        return SqliteCandidateStore(settings.db_path)
    from stores.airtable_store import AirtableCandidateStore

    return AirtableCandidateStore(settings)


def build_scraper(settings: Optional[Settings] = None) -> CandidateScraper:
    """Wire the production collaborators. Raises ConfigurationError on missing credentials."""
    from google_searcher import GoogleSearcher

    settings = settings or get_settings()
    settings.require_credentials()
    return CandidateScraper(
        searcher=GoogleSearcher(settings),
        store=build_store(settings),
        throttle=FixedDelayThrottle(settings.result_delay_seconds, settings.keyword_delay_seconds),
        profile_site=settings.profile_site,
    )


def run_scrape(settings: Optional[Settings] = None) -> ScrapeSummary:
    return build_scraper(settings).run()
