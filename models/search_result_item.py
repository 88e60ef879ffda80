from __future__ import annotations

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, field_validator


class SearchResultItem(BaseModel):
    """One organic search hit as returned by the search API."""

    title: str = ""
    snippet: str = ""
    link: str = ""

    model_config = ConfigDict(frozen=True, extra="ignore")

    @field_validator("title", "snippet", "link", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value)

    @classmethod
    def from_google_item(cls, item: Dict[str, Any]) -> "SearchResultItem":
        return cls(
            title=item.get("title"),
            snippet=item.get("snippet"),
            link=item.get("link"),
        )
