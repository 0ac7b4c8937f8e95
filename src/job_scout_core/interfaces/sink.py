"""Abstract job listing sink interface."""

from __future__ import annotations

from collections.abc import Awaitable
from typing import Protocol, runtime_checkable


@runtime_checkable
class JobListingSink(Protocol):
    """Persistence boundary: stores one listing per call.

    Implementations may be synchronous or return an awaitable. Each call is
    independently fallible.
    """

    def insert_job_listing(
        self,
        title: str,
        company: str | None,
        location: str | None,
        description: str | None,
        url: str,
        source: str,
    ) -> Awaitable[None] | None:
        """Store a single listing."""
        ...
