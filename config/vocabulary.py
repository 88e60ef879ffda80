from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Tuple


COUNTRIES: Tuple[str, ...] = ("Singapore", "Malaysia", "Philippines")

SEARCH_KEYWORDS: Tuple[str, ...] = (
    "Avaloq developer",
    "Avaloq consultant",
    "Avaloq specialist",
    "Avaloq engineer",
    "Avaloq architect",
)

# Module name -> lowercase substrings that indicate it
DOMAIN_MODULES: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "Investment Transactions": ("investment", "transaction", "trading", "portfolio"),
    "Cash Management": ("cash", "liquidity", "treasury", "payment"),
    "Client Management": ("client", "crm", "relationship", "onboarding"),
    "Interfaces": ("interface", "integration", "api", "middleware"),
    "Reporting": ("reporting", "analytics", "dashboard", "bi"),
    "Custody": ("custody", "settlement", "safekeeping"),
    "Corporate Actions": ("corporate action", "dividend", "split", "merger"),
})

ROLE_KEYWORDS: Tuple[str, ...] = (
    "developer",
    "engineer",
    "consultant",
    "architect",
    "specialist",
    "analyst",
    "manager",
    "lead",
)

# Checked in order; first bucket with a matching phrase wins
SENIORITY_BUCKETS: Tuple[Tuple[Tuple[str, ...], int], ...] = (
    (("junior", "graduate", "entry"), 1),
    (("senior", "lead developer"), 8),
    (("principal", "architect", "head of"), 12),
    (("manager", "director"), 10),
    (("engineer", "developer", "consultant"), 5),
)

BOILERPLATE_PHRASES: Tuple[str, ...] = (
    "University",
    "See your",
    "View",
    "mutual",
    "connections?",
    "followers?",
)


@dataclass(frozen=True)
class Vocabulary:
    """Fixed dictionaries driving search, extraction and classification."""

    countries: Tuple[str, ...] = COUNTRIES
    search_keywords: Tuple[str, ...] = SEARCH_KEYWORDS
    domain_modules: Mapping[str, Tuple[str, ...]] = field(default_factory=lambda: DOMAIN_MODULES)
    role_keywords: Tuple[str, ...] = ROLE_KEYWORDS
    seniority_buckets: Tuple[Tuple[Tuple[str, ...], int], ...] = SENIORITY_BUCKETS
    boilerplate_phrases: Tuple[str, ...] = BOILERPLATE_PHRASES
    domain_term: str = "Avaloq"
    default_tag: str = "General Avaloq"
    source_label: str = "LinkedIn Automation"


DEFAULT_VOCABULARY = Vocabulary()
