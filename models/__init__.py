from .candidate_record import CandidateRecord, NOT_SPECIFIED, UNKNOWN_NAME
from .search_result_item import SearchResultItem
from .scrape_summary import ScrapeSummary

__all__ = [
    "CandidateRecord",
    "SearchResultItem",
    "ScrapeSummary",
    "NOT_SPECIFIED",
    "UNKNOWN_NAME",
]
