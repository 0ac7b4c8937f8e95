"""Search task, raw candidate and validated job listing models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from job_scout_core.constants import DEFAULT_MAX_RESULTS


class SearchTask(BaseModel):
    """One scrape run: a query against an ordered list of target domains."""

    model_config = ConfigDict(frozen=True)

    query: str = Field(min_length=1, description="Free-text job query")
    target_domains: tuple[str, ...] = Field(
        description="Target domains, processed strictly in this order",
    )
    max_results_per_domain: int = Field(
        default=DEFAULT_MAX_RESULTS,
        ge=1,
        description="Cap on listings extracted per domain (not in aggregate)",
    )

    @field_validator("query")
    @classmethod
    def strip_query(cls, value: str) -> str:
        """Reject whitespace-only queries."""
        stripped = value.strip()
        if not stripped:
            msg = "query must not be blank"
            raise ValueError(msg)
        return stripped

    @field_validator("target_domains", mode="before")
    @classmethod
    def drop_blank_domains(cls, value: object) -> object:
        """Strip domains and drop blank entries, keeping order."""
        if isinstance(value, str):
            value = [value]
        if isinstance(value, list | tuple):
            return tuple(str(d).strip() for d in value if str(d).strip())
        return value


class CandidateListing(BaseModel):
    """Raw extraction output for one result container. May be incomplete."""

    title: str = Field(default="", description="Result title text")
    url: str = Field(default="", description="Result link, possibly redirect-wrapped")
    snippet: str = Field(default="", description="Result snippet text")
    company: str | None = Field(default=None, description="Company, if the site exposes it")
    location: str | None = Field(default=None, description="Location, if the site exposes it")

    @property
    def is_complete(self) -> bool:
        """True when both a title and a url were extracted."""
        return bool(self.title.strip()) and bool(self.url.strip())


class JobListing(BaseModel):
    """Validated listing handed to the sink and returned to the caller."""

    title: str = Field(min_length=1, description="Job title")
    company: str | None = Field(default=None, description="Company name (best-effort)")
    location: str | None = Field(default=None, description="Job location (best-effort)")
    description: str | None = Field(default=None, description="Result snippet")
    url: str = Field(min_length=1, description="Cleaned absolute posting URL")
    source: str = Field(min_length=1, description="Target domain the listing came from")

    @field_validator("title", "url", "source", mode="before")
    @classmethod
    def strip_required(cls, value: object) -> object:
        """Trim surrounding whitespace from required text fields."""
        return value.strip() if isinstance(value, str) else value

    @field_validator("company", "location", "description", mode="before")
    @classmethod
    def blank_to_none(cls, value: object) -> object:
        """Normalise blank optional fields to None."""
        if isinstance(value, str):
            stripped = value.strip()
            return stripped or None
        return value

    @field_validator("url")
    @classmethod
    def require_http_url(cls, value: str) -> str:
        """Listings only ever point at absolute http(s) URLs."""
        if not value.startswith(("http://", "https://")):
            msg = f"url must be absolute http(s), got {value!r}"
            raise ValueError(msg)
        return value
