"""Hands validated listings to the persistence sink one at a time."""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from job_scout_core.interfaces.sink import JobListingSink
    from job_scout_core.models.listing import JobListing

logger = structlog.get_logger()


@dataclass
class PersistSummary:
    """Counts from one persist pass."""

    persisted: int = 0
    failed: int = 0


class ResultAggregator:
    """Persist listings in order, tolerating individual insert failures.

    A failed insert is logged and counted; the listing is still part of
    the result the caller receives. No deduplication happens here beyond
    whatever uniqueness the sink enforces.
    """

    def __init__(self, sink: JobListingSink | None = None) -> None:
        """Initialize with an optional sink; without one, persist is a no-op."""
        self._sink = sink

    async def persist(self, listings: list[JobListing]) -> PersistSummary:
        """Insert every listing through the sink."""
        summary = PersistSummary()
        if self._sink is None:
            return summary

        for listing in listings:
            try:
                result = self._sink.insert_job_listing(
                    listing.title,
                    listing.company,
                    listing.location,
                    listing.description,
                    listing.url,
                    listing.source,
                )
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                summary.failed += 1
                logger.error(
                    "listing_insert_failed",
                    url=listing.url,
                    source=listing.source,
                    error_type=type(e).__name__,
                    error=str(e),
                )
                continue
            summary.persisted += 1

        logger.info(
            "listings_persisted",
            persisted=summary.persisted,
            failed=summary.failed,
        )
        return summary
