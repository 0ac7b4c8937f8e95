"""Public interface re-exports for job_scout_core."""

from job_scout_core.interfaces.sink import JobListingSink

__all__ = [
    "JobListingSink",
]
