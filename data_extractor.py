import re
import logging
from datetime import date, datetime, timezone
from typing import Dict, List, Optional, Sequence

from config.vocabulary import DEFAULT_VOCABULARY, Vocabulary
from models.candidate_record import CandidateRecord, NOT_SPECIFIED, UNKNOWN_NAME
from models.search_result_item import SearchResultItem
from services.classifier import combined_text, detect_tags, estimate_experience_years
from services.field_cleanup import finalize_company, finalize_role
from services.role_resolvers import (
    RoleCompanyResolver,
    default_resolvers,
    resolve_role_company,
    split_title,
)

logger = logging.getLogger(__name__)

PARENTHETICAL = re.compile(r"\s*\(.*?\)\s*")


def extract_name_from_title(title: str) -> str:
    """Person's name from a result title like 'Jane Tan (She/Her) - Consultant - LinkedIn'."""
    if not title:
        return UNKNOWN_NAME
    first = split_title(title)[0]
    name = PARENTHETICAL.sub(" ", first)
    name = " ".join(name.split())
    return name or UNKNOWN_NAME


def today_utc() -> date:
    return datetime.now(timezone.utc).date()


def extract(
    item: SearchResultItem,
    country: str,
    *,
    today: Optional[date] = None,
    vocabulary: Vocabulary = DEFAULT_VOCABULARY,
    resolvers: Optional[Sequence[RoleCompanyResolver]] = None,
) -> CandidateRecord:
    """Build a candidate record from one search hit. Never raises on odd text."""
    title = item.title
    snippet = item.snippet

    name = extract_name_from_title(title)
    partial, tiers = resolve_role_company(title, snippet, resolvers or default_resolvers(vocabulary))
    current_role = finalize_role(partial.role, vocabulary)
    company = finalize_company(partial.company, vocabulary)

    text = combined_text(title, snippet)
    record = CandidateRecord(
        name=name,
        linkedin_url=item.link,
        location=country,
        current_role=current_role,
        company=company,
        tags=detect_tags(text, vocabulary),
        experience_years=estimate_experience_years(text, vocabulary),
        source=vocabulary.source_label,
        date_added=today or today_utc(),
    )
    logger.debug(
        f"Extracted {record.name!r}: role={record.current_role!r} company={record.company!r} "
        f"tiers={tiers} tags={record.tags} years={record.experience_years}"
    )
    return record


class CandidateExtractor:
    """Stateful wrapper around extract() that keeps per-run extraction counters."""

    def __init__(self, vocabulary: Vocabulary = DEFAULT_VOCABULARY):
        self.vocabulary = vocabulary
        self.resolvers = default_resolvers(vocabulary)
        self.extraction_stats = {
            'successful_extractions': 0,
            'role_unresolved': 0,
            'company_unresolved': 0,
            'experience_unknown': 0,
        }

    def extract(self, item: SearchResultItem, country: str, today: Optional[date] = None) -> CandidateRecord:
        logger.debug(f"Raw search result title={item.title!r} snippet={item.snippet[:200]!r}")
        record = extract(item, country, today=today, vocabulary=self.vocabulary, resolvers=self.resolvers)
        self.extraction_stats['successful_extractions'] += 1
        if record.current_role == NOT_SPECIFIED:
            self.extraction_stats['role_unresolved'] += 1
        if record.company == NOT_SPECIFIED:
            self.extraction_stats['company_unresolved'] += 1
        if record.experience_years is None:
            self.extraction_stats['experience_unknown'] += 1
        return record

    def extract_all(self, items: List[SearchResultItem], country: str) -> List[CandidateRecord]:
        """Extract every hit of one search batch."""
        return [self.extract(item, country) for item in items]

    def get_extraction_stats(self) -> Dict:
        """Return extraction statistics."""
        return self.extraction_stats.copy()
