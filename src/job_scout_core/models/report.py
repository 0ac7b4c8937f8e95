"""Per-domain and per-run scrape reports."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, Field

from job_scout_core.models.listing import JobListing, SearchTask
from job_scout_core.models.step import StepStatus


class DomainReport(BaseModel):
    """Outcome of scraping one target domain."""

    domain: str = Field(description="Target domain as supplied by the caller")
    status: StepStatus = Field(description="Terminal status for this domain")
    strategy: str | None = Field(default=None, description="Resolved strategy name")
    selector: str | None = Field(
        default=None, description="Active container selector, or 'fallback:links'"
    )
    listings_count: int = Field(default=0, ge=0, description="Listings emitted")
    reason: str = Field(default="", description="Why the domain ended this way")
    duration_seconds: float = Field(default=0.0, ge=0.0)


class ScrapeReport(BaseModel):
    """Summary of one scrape run."""

    task: SearchTask
    listings: list[JobListing] = Field(default_factory=list)
    domains: list[DomainReport] = Field(default_factory=list)
    persisted: int = Field(default=0, ge=0, description="Listings stored by the sink")
    persist_failures: int = Field(default=0, ge=0, description="Sink inserts that failed")
    cancelled: bool = Field(default=False, description="Session closed before all domains ran")
    started_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    duration_seconds: float = Field(default=0.0, ge=0.0)

    def count_by_status(self) -> dict[str, int]:
        """Number of domains per terminal status."""
        counts: dict[str, int] = {}
        for report in self.domains:
            counts[report.status.value] = counts.get(report.status.value, 0) + 1
        return counts
