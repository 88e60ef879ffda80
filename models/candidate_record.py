from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


NOT_SPECIFIED = "Not specified"
UNKNOWN_NAME = "Unknown"


class CandidateRecord(BaseModel):
    """App/store record shape: one extracted candidate, keyed by LinkedIn URL.

    Aliases are the column names of the remote table.
    """

    name: str = Field(default=UNKNOWN_NAME, alias="Name")
    linkedin_url: str = Field(alias="LinkedIn URL")
    location: str = Field(alias="Location")
    current_role: str = Field(default=NOT_SPECIFIED, alias="Current Role")
    company: str = Field(default=NOT_SPECIFIED, alias="Company")
    tags: List[str] = Field(alias="Avaloq Keywords", min_length=1)
    experience_years: Optional[int] = Field(default=None, alias="Years of Experience", ge=0)
    source: str = Field(default="LinkedIn Automation", alias="Source")
    date_added: date = Field(alias="Date Added")
    status: Literal["New"] = Field(default="New", alias="Status")

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    @field_validator("tags")
    @classmethod
    def _unique_tags(cls, value: List[str]) -> List[str]:
        seen: List[str] = []
        for tag in value:
            if tag and tag not in seen:
                seen.append(tag)
        if not seen:
            raise ValueError("tags must contain at least one non-empty tag")
        return seen

    @property
    def has_company(self) -> bool:
        return self.company != NOT_SPECIFIED

    def to_store_fields(self) -> Dict[str, Any]:
        """Alias-keyed, JSON-ready field dict as written to the store."""
        return self.model_dump(by_alias=True, mode="json")

    def describe(self) -> str:
        years = f"{self.experience_years} years" if self.experience_years else "experience unknown"
        company = f" at {self.company}" if self.has_company else ""
        return f"{self.current_role}{company} ({years}) - {self.location}"
