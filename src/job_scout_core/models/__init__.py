"""Domain models for job-scout."""

from job_scout_core.models.listing import CandidateListing, JobListing, SearchTask
from job_scout_core.models.report import DomainReport, ScrapeReport
from job_scout_core.models.step import StepResult, StepStatus

__all__ = [
    "CandidateListing",
    "DomainReport",
    "JobListing",
    "ScrapeReport",
    "SearchTask",
    "StepResult",
    "StepStatus",
]
