from __future__ import annotations

from typing import List, Protocol

from models.search_result_item import SearchResultItem


class SearchPort(Protocol):
    def search(self, query: str, page_offset: int = 1) -> List[SearchResultItem]:
        ...
