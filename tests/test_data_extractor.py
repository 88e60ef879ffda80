from __future__ import annotations

from datetime import date

from data_extractor import CandidateExtractor, extract, extract_name_from_title
from models.candidate_record import NOT_SPECIFIED
from models.search_result_item import SearchResultItem


def _item(title: str, snippet: str = "", link: str = "https://www.linkedin.com/in/someone") -> SearchResultItem:
    return SearchResultItem(title=title, snippet=snippet, link=link)


def test_end_to_end_singapore_consultant():
    item = _item(
        "Jane Tan - Senior Avaloq Consultant at DBS Bank - LinkedIn",
        "10+ years experience in Cash Management",
        "https://sg.linkedin.com/in/jane-tan",
    )
    rec = extract(item, "Singapore", today=date(2024, 3, 1))

    assert rec.name == "Jane Tan"
    assert rec.current_role == "Senior Avaloq Consultant"
    assert rec.company == "DBS Bank"
    assert rec.tags == ["Cash Management"]
    assert rec.experience_years == 10
    assert rec.location == "Singapore"
    assert rec.linkedin_url == "https://sg.linkedin.com/in/jane-tan"
    assert rec.source == "LinkedIn Automation"
    assert rec.status == "New"
    assert rec.date_added == date(2024, 3, 1)


def test_role_at_company_title_pattern():
    rec = extract(_item("Wei Ling - Avaloq Developer at UBS - LinkedIn"), "Singapore")
    assert (rec.name, rec.current_role, rec.company) == ("Wei Ling", "Avaloq Developer", "UBS")


def test_three_segment_title_gives_role_and_company():
    rec = extract(_item("John Lim - Avaloq Developer - UOB | LinkedIn"), "Singapore")
    assert rec.current_role == "Avaloq Developer"
    assert rec.company == "UOB"


def test_two_segment_title_leaves_company_to_snippet():
    rec = extract(
        _item("Maria Santos - Avaloq Specialist - LinkedIn", "Currently Avaloq Specialist at BPI. Manila"),
        "Philippines",
    )
    assert rec.current_role == "Avaloq Specialist"
    assert rec.company == "BPI"


def test_snippet_only_company_and_role_keyword():
    rec = extract(_item("Ahmad Ismail | LinkedIn", "Avaloq Engineer at Maybank · Kuala Lumpur"), "Malaysia")
    assert rec.name == "Ahmad Ismail"
    assert rec.company == "Maybank"
    assert rec.current_role == "Avaloq Engineer"
    assert rec.experience_years == 5


def test_unresolvable_role_and_company_use_sentinels():
    rec = extract(_item("John Doe", "Based in Singapore."), "Singapore")
    assert rec.current_role == NOT_SPECIFIED
    assert rec.company == NOT_SPECIFIED
    assert rec.tags == ["General Avaloq"]
    assert rec.experience_years is None


def test_name_strips_parenthetical_and_falls_back_to_unknown():
    assert extract_name_from_title("Jane Tan (She/Her) - Consultant - LinkedIn") == "Jane Tan"
    assert extract_name_from_title("") == "Unknown"
    assert extract_name_from_title("(Hiring) - Avaloq Developer") == "Unknown"


def test_empty_item_never_raises():
    rec = extract(SearchResultItem(), "Malaysia")
    assert rec.name == "Unknown"
    assert rec.tags == ["General Avaloq"]
    assert rec.current_role == NOT_SPECIFIED


def test_extractor_counts_unresolved_fields():
    extractor = CandidateExtractor()
    extractor.extract_all(
        [
            _item("Jane Tan - Senior Avaloq Consultant at DBS Bank - LinkedIn", "10+ years experience"),
            _item("John Doe", "Based in Singapore."),
        ],
        "Singapore",
    )
    stats = extractor.get_extraction_stats()
    assert stats["successful_extractions"] == 2
    assert stats["role_unresolved"] == 1
    assert stats["company_unresolved"] == 1
    assert stats["experience_unknown"] == 1
