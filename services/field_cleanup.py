from __future__ import annotations

import re
from typing import Iterable, Optional

from config.vocabulary import DEFAULT_VOCABULARY, Vocabulary
from models.candidate_record import NOT_SPECIFIED


MAX_FIELD_LENGTH = 80
MIN_ROLE_LENGTH = 3
MIN_COMPANY_LENGTH = 2

_BULLET_TAIL = re.compile(r"\s*[·•]\s*.*$")
_COUNT_TAIL = re.compile(r"\s+\d+\s*(?:\+)?\s*(?:years?|yrs?|connections?|followers?).*", re.IGNORECASE)
_TRAILING_PUNCT = re.compile(r"[,;]\s*$")
_MULTI_SPACE = re.compile(r"\s{2,}")
_DIGITS_ONLY = re.compile(r"^\d+$")


def _country_alternation(countries: Iterable[str]) -> str:
    return "|".join(re.escape(c) for c in countries)


def strip_noise(value: str, vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> str:
    """Remove snippet debris (bullets, counts, locations, boilerplate) from a role/company value."""
    countries = _country_alternation(vocabulary.countries)
    # Phrases are regex fragments (e.g. "connections?"), not literals
    boilerplate = "|".join([p for p in (countries, *vocabulary.boilerplate_phrases) if p])

    text = _BULLET_TAIL.sub("", value)
    text = _COUNT_TAIL.sub("", text)
    if countries:
        text = re.sub(rf"\s+in\s+(?:{countries}).*", "", text, flags=re.IGNORECASE)
    if boilerplate:
        text = re.sub(rf"(?:{boilerplate}).*", "", text, flags=re.IGNORECASE)
    text = _TRAILING_PUNCT.sub("", text)
    text = _MULTI_SPACE.sub(" ", text)
    return text.strip()


def finalize_field(value: Optional[str], min_length: int, vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> str:
    """Clean a raw value and fall back to the sentinel when nothing usable is left."""
    if not value or value == NOT_SPECIFIED:
        return NOT_SPECIFIED
    cleaned = strip_noise(value, vocabulary)
    if len(cleaned) > MAX_FIELD_LENGTH:
        cleaned = cleaned[:MAX_FIELD_LENGTH].strip()
    if len(cleaned) < min_length or _DIGITS_ONLY.match(cleaned):
        return NOT_SPECIFIED
    return cleaned


def finalize_role(value: Optional[str], vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> str:
    return finalize_field(value, MIN_ROLE_LENGTH, vocabulary)


def finalize_company(value: Optional[str], vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> str:
    return finalize_field(value, MIN_COMPANY_LENGTH, vocabulary)
