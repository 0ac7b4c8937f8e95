"""Custom exception hierarchy for job-scout."""

from __future__ import annotations


class JobScoutError(Exception):
    """Base exception for all job-scout errors."""


class BrowserLaunchError(JobScoutError):
    """Raised when the browser process cannot be started. Fatal to the run."""


class SessionClosedError(JobScoutError):
    """Raised when a page is requested from a session that was already closed."""


class PersistenceError(JobScoutError):
    """Raised when the listing sink fails to store a listing."""
