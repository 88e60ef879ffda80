"""
Tiered role/company resolution for a single search hit.

Each resolver looks at the raw title/snippet and the fields resolved so far and
either returns a refinement or None. Resolvers run in a fixed order; a resolver
is skipped when every field it can fill is already resolved, and it never
overwrites a resolved field.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import FrozenSet, List, Optional, Protocol, Sequence, Tuple

from config.vocabulary import DEFAULT_VOCABULARY, Vocabulary


ROLE = "role"
COMPANY = "company"

TITLE_SEPARATOR = re.compile(r"\s*[-|]\s*")
LINKEDIN_SUFFIX = re.compile(r"\s*[-|]\s*LinkedIn.*$", re.IGNORECASE)


@dataclass(frozen=True)
class PartialRoleCompany:
    """Role/company as resolved so far; None means still unresolved."""

    role: Optional[str] = None
    company: Optional[str] = None

    @property
    def complete(self) -> bool:
        return self.role is not None and self.company is not None

    def is_open(self, field_name: str) -> bool:
        return getattr(self, field_name) is None

    def merge(self, role: Optional[str] = None, company: Optional[str] = None) -> "PartialRoleCompany":
        """Fill only the fields that are still open; empty strings count as no value."""
        updates = {}
        role = (role or "").strip()
        company = (company or "").strip()
        if role and self.role is None:
            updates[ROLE] = role
        if company and self.company is None:
            updates[COMPANY] = company
        return replace(self, **updates) if updates else self


class RoleCompanyResolver(Protocol):
    name: str
    fills: FrozenSet[str]

    def resolve(self, title: str, snippet: str, current: PartialRoleCompany) -> Optional[PartialRoleCompany]:
        ...


def split_title(title: str) -> List[str]:
    return TITLE_SEPARATOR.split(title)


class TitleResolver:
    """Tier 1: 'Name - Role at Company - LinkedIn' and positional title segments."""

    name = "title"
    fills = frozenset({ROLE, COMPANY})
    AT_PATTERN = re.compile(r"^(.+?)\s+(?:at|@)\s+(.+)$", re.IGNORECASE)

    def resolve(self, title: str, snippet: str, current: PartialRoleCompany) -> Optional[PartialRoleCompany]:
        clean_title = LINKEDIN_SUFFIX.sub("", title).strip()
        parts = split_title(clean_title)
        if len(parts) < 2:
            return None

        after_name = " | ".join(parts[1:])
        m = self.AT_PATTERN.match(after_name)
        if m:
            return current.merge(role=m.group(1), company=m.group(2))
        if len(parts) == 3:
            return current.merge(role=parts[1], company=parts[2])
        if len(parts) == 2:
            return current.merge(role=parts[1])
        return None


class SnippetCurrentResolver:
    """Tier 2: 'Current: ROLE at COMPANY' / 'Experience: ...' statements in the snippet."""

    name = "snippet_current"
    fills = frozenset({ROLE, COMPANY})
    PATTERN = re.compile(
        r"(?:Current(?:ly)?|Experience)[:\s]+([^.·\n]+?)(?:\s+(?:at|@)\s+([^.·\n]+?))?(?:\.|·|$)",
        re.IGNORECASE,
    )

    def resolve(self, title: str, snippet: str, current: PartialRoleCompany) -> Optional[PartialRoleCompany]:
        m = self.PATTERN.search(snippet)
        if not m:
            return None
        return current.merge(role=m.group(1), company=m.group(2))


class SnippetAtCompanyResolver:
    """Tier 3: a capitalized employer following 'at' or '@' in the snippet."""

    name = "snippet_at_company"
    fills = frozenset({COMPANY})
    PATTERN = re.compile(r"\b(?:at|@)\s+([A-Z][A-Za-z\s&]+?)(?:\s*[·•.]|\s+in\s+|\s+\d|\s*$)")

    def resolve(self, title: str, snippet: str, current: PartialRoleCompany) -> Optional[PartialRoleCompany]:
        m = self.PATTERN.search(snippet)
        if not m:
            return None
        return current.merge(company=m.group(1))


class RoleKeywordResolver:
    """Tier 4: phrase around the first known role keyword present in the snippet."""

    name = "role_keyword"
    fills = frozenset({ROLE})

    def __init__(self, keywords: Sequence[str]):
        self.keywords = tuple(keywords)
        # Up to three capitalized words on either side of the keyword
        self._patterns: Tuple[Tuple[str, re.Pattern], ...] = tuple(
            (
                kw.lower(),
                re.compile(
                    rf"(?:\b[A-Z][a-z]+\s+){{0,3}}(?i:{re.escape(kw)})(?:\s+[A-Z][a-z]+){{0,3}}"
                ),
            )
            for kw in self.keywords
        )

    def resolve(self, title: str, snippet: str, current: PartialRoleCompany) -> Optional[PartialRoleCompany]:
        lowered = snippet.lower()
        for keyword, pattern in self._patterns:
            if keyword not in lowered:
                continue
            m = pattern.search(snippet)
            if m:
                return current.merge(role=m.group(0))
        return None


def default_resolvers(vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> Tuple[RoleCompanyResolver, ...]:
    return (
        TitleResolver(),
        SnippetCurrentResolver(),
        SnippetAtCompanyResolver(),
        RoleKeywordResolver(vocabulary.role_keywords),
    )


def resolve_role_company(
    title: str,
    snippet: str,
    resolvers: Sequence[RoleCompanyResolver],
) -> Tuple[PartialRoleCompany, List[str]]:
    """Run resolvers in order until both fields are resolved.

    Returns the partial result and the names of resolvers that contributed.
    """
    current = PartialRoleCompany()
    contributed: List[str] = []
    for resolver in resolvers:
        if current.complete:
            break
        if not any(current.is_open(f) for f in resolver.fills):
            continue
        refined = resolver.resolve(title, snippet, current)
        if refined is not None and refined != current:
            contributed.append(resolver.name)
            current = refined
    return current, contributed
