"""Search-related Pydantic schemas."""

import re
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from rag_support.consts import DEFAULT_MAX_RESULTS, DEFAULT_SCRAPE_CONTENT

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

SearchCategory = Literal[
    "company",
    "research paper",
    "news",
    "linkedin profile",
    "github",
    "tweet",
    "movie",
    "song",
    "personal site",
    "pdf",
    "financial report",
]


class SearchOptions(BaseModel):
    """Per-call search options. Frozen so providers cannot mutate caller input."""

    model_config = ConfigDict(frozen=True)

    max_results: int = Field(
        default=DEFAULT_MAX_RESULTS,
        ge=1,
        description="Requested number of results (clamped by the provider)",
    )
    scrape_content: bool = Field(
        default=DEFAULT_SCRAPE_CONTENT,
        description="Whether page content should be scraped and chunked",
    )
    include_domains: frozenset[str] | None = Field(
        default=None, description="Only return results from these host patterns"
    )
    exclude_domains: frozenset[str] | None = Field(
        default=None, description="Never return results from these host patterns"
    )
    start_published_date: str | None = Field(
        default=None, description="Earliest publication date (YYYY-MM-DD)"
    )
    end_published_date: str | None = Field(
        default=None, description="Latest publication date (YYYY-MM-DD)"
    )
    category: SearchCategory | None = Field(default=None, description="Content-type tag")

    @field_validator("start_published_date", "end_published_date")
    @classmethod
    def validate_iso_date(cls, v: str | None) -> str | None:
        if v is not None and not _ISO_DATE.match(v):
            raise ValueError(f"Date must be in YYYY-MM-DD format, got '{v}'")
        return v

    @model_validator(mode="after")
    def validate_date_range(self) -> "SearchOptions":
        start, end = self.start_published_date, self.end_published_date
        # ISO dates compare correctly as strings
        if start and end and start > end:
            raise ValueError("start_published_date must not be after end_published_date")
        return self


class SearchResult(BaseModel):
    """Normalized search result returned by every provider."""

    url: str = Field(..., min_length=1, description="URL of the search result")
    title: str = Field(..., description="Title of the search result")
    description: str = Field(..., description="Snippet/preview text from the result")
    content: str | None = Field(default=None, description="Scraped page content")
    markdown: str | None = Field(default=None, description="Scraped content as markdown")
