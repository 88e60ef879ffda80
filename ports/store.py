from __future__ import annotations

from typing import Any, Dict, Optional, Protocol


class CandidateStorePort(Protocol):
    def find_existing(self, linkedin_url: str) -> bool:
        ...

    def find_first_blank_row(self) -> Optional[str]:
        ...

    def write_row(self, row_id: Optional[str], fields: Dict[str, Any]) -> str:
        ...
