"""Tests for ResultAggregator persistence."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from job_scout_core.interfaces.sink import JobListingSink
from job_scout_core.models.listing import JobListing
from job_scout_scraper.aggregator import ResultAggregator


def _listings(count: int) -> list[JobListing]:
    return [
        JobListing(
            title=f"Engineer {i}",
            company="Acme",
            url=f"https://jobs.lever.co/acme/{i}",
            source="jobs.lever.co",
        )
        for i in range(count)
    ]


class _SyncSink:
    """Synchronous sink that records inserted urls."""

    def __init__(self) -> None:
        self.urls: list[str] = []

    def insert_job_listing(
        self,
        title: str,
        company: str | None,
        location: str | None,
        description: str | None,
        url: str,
        source: str,
    ) -> None:
        self.urls.append(url)


@pytest.mark.unit
class TestResultAggregator:
    """Test persist behavior."""

    @pytest.mark.asyncio
    async def test_no_sink_is_noop(self) -> None:
        """Without a sink nothing is persisted or failed."""
        summary = await ResultAggregator().persist(_listings(3))
        assert (summary.persisted, summary.failed) == (0, 0)

    @pytest.mark.asyncio
    async def test_sync_sink(self) -> None:
        """Synchronous sinks are supported, in order."""
        sink = _SyncSink()
        assert isinstance(sink, JobListingSink)
        summary = await ResultAggregator(sink).persist(_listings(3))
        assert summary.persisted == 3
        assert sink.urls == [f"https://jobs.lever.co/acme/{i}" for i in range(3)]

    @pytest.mark.asyncio
    async def test_async_sink(self) -> None:
        """Awaitable results are awaited."""
        sink = MagicMock()
        sink.insert_job_listing = AsyncMock(return_value=None)
        summary = await ResultAggregator(sink).persist(_listings(2))
        assert summary.persisted == 2
        assert sink.insert_job_listing.await_count == 2

    @pytest.mark.asyncio
    async def test_failure_does_not_stop_remaining(self) -> None:
        """One failing insert is counted; the rest still go through."""
        sink = MagicMock()
        sink.insert_job_listing = AsyncMock(side_effect=[None, RuntimeError("unique"), None])
        summary = await ResultAggregator(sink).persist(_listings(3))
        assert summary.persisted == 2
        assert summary.failed == 1
        assert sink.insert_job_listing.await_count == 3

    @pytest.mark.asyncio
    async def test_empty_list(self) -> None:
        """Nothing to persist is not an error."""
        sink = MagicMock()
        sink.insert_job_listing = AsyncMock()
        summary = await ResultAggregator(sink).persist([])
        assert summary.persisted == 0
        sink.insert_job_listing.assert_not_awaited()
