from __future__ import annotations

import re
from functools import lru_cache
from typing import List, Optional, Tuple

from config.vocabulary import DEFAULT_VOCABULARY, Vocabulary


def combined_text(title: str, snippet: str) -> str:
    return f"{title} {snippet}".lower()


def detect_tags(text: str, vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> List[str]:
    """Return module names whose keywords occur in text, or the default tag."""
    lowered = text.lower()
    tags = [
        module
        for module, keywords in vocabulary.domain_modules.items()
        if any(kw.lower() in lowered for kw in keywords)
    ]
    return tags or [vocabulary.default_tag]


@lru_cache(maxsize=8)
def experience_patterns(domain_term: str) -> Tuple[re.Pattern, ...]:
    domain = re.escape(domain_term)
    return (
        re.compile(r"(\d+)\+?\s*years?\s+(?:of\s+)?experience", re.IGNORECASE),
        re.compile(r"experience[:\s]+(\d+)\+?\s*years?", re.IGNORECASE),
        re.compile(rf"(\d+)\+?\s*years?\s+in\s+{domain}", re.IGNORECASE),
        re.compile(r"(\d+)\+?\s*yrs?\s+experience", re.IGNORECASE),
        re.compile(r"over\s+(\d+)\s+years?", re.IGNORECASE),
    )


def estimate_experience_years(text: str, vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> Optional[int]:
    """Explicit year counts win over seniority words; None when neither is present."""
    lowered = text.lower()
    for pattern in experience_patterns(vocabulary.domain_term):
        m = pattern.search(lowered)
        if m:
            return int(m.group(1))

    for phrases, years in vocabulary.seniority_buckets:
        if any(phrase in lowered for phrase in phrases):
            return years
    return None
