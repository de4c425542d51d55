"""Data models for the job search pipeline.

`SearchQuery` is what a caller builds once per search; `JobRecord` is what the
pipeline hands back. Both are frozen so they can be shared across the cache and
concurrent callers without copying.

This file uses Pydantic v2.
"""

from __future__ import annotations

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .utils import collapse_whitespace


DEFAULT_HOST = "www.linkedin.com"
SALARY_NOT_SPECIFIED = "Not specified"


class JobRecord(BaseModel):
    """A single job posting extracted from one search result card.

    Serialized with the wire names the search tool has always returned
    (`jobUrl`, `companyLogo`, `agoTime`); use `model_dump(by_alias=True)`.
    """

    model_config = ConfigDict(frozen=True)

    position: str
    company: str
    location: str = ""
    date: Optional[str] = Field(default=None, description="ISO-8601 posting date when present.")
    salary: str = SALARY_NOT_SPECIFIED
    job_url: str = Field(default="", serialization_alias="jobUrl")
    company_logo: str = Field(default="", serialization_alias="companyLogo")
    ago_time: str = Field(default="", serialization_alias="agoTime", description="e.g. '2 days ago'.")

    def to_payload(self) -> dict:
        """Return the JSON-ready dict, dropping `date` when the card had none."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class SearchQuery(BaseModel):
    """Structured search criteria.

    Filter fields hold loose, human-entered values ("past week", "Full-time");
    `job_search.normalize` maps them to the source's tokens. Values it doesn't
    recognize are simply left out of the request.
    """

    model_config = ConfigDict(frozen=True)

    host: str = DEFAULT_HOST
    keyword: str = ""
    location: str = ""
    date_since_posted: str = ""
    job_type: str = ""
    remote_filter: str = ""
    salary: str = ""
    experience_level: str = ""
    sort_by: str = ""
    limit: int = Field(default=0, ge=0, description="Max records to return; 0 means no cap.")
    page: int = Field(default=0, ge=0, description="Page multiplier added to every start offset.")

    @field_validator("keyword", "location", mode="before")
    @classmethod
    def _join_words(cls, value: Optional[str]) -> str:
        return collapse_whitespace(value or "", sep="+")

    @field_validator(
        "date_since_posted",
        "job_type",
        "remote_filter",
        "experience_level",
        "sort_by",
        mode="before",
    )
    @classmethod
    def _strip_filter(cls, value: Optional[str]) -> str:
        return (value or "").strip()

    @field_validator("salary", mode="before")
    @classmethod
    def _salary_as_text(cls, value: Union[int, str, None]) -> str:
        if value is None:
            return ""
        return str(value).strip()
