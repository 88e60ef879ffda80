from .search import SearchPort
from .store import CandidateStorePort
from .throttle import ThrottlePort

__all__ = [
    "SearchPort",
    "CandidateStorePort",
    "ThrottlePort",
]
