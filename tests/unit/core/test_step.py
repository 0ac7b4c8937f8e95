"""Tests for StepResult and the scrape reports."""

from __future__ import annotations

import pytest

from job_scout_core.models.listing import SearchTask
from job_scout_core.models.report import DomainReport, ScrapeReport
from job_scout_core.models.step import StepResult, StepStatus


@pytest.mark.unit
class TestStepResult:
    """Test StepResult constructors and unwrap."""

    def test_found_is_ok(self) -> None:
        """found() carries the value and is ok."""
        result = StepResult.found("div.g")
        assert result.ok
        assert result.status is StepStatus.FOUND
        assert result.unwrap() == "div.g"

    @pytest.mark.parametrize(
        ("factory", "status"),
        [
            (StepResult.not_found, StepStatus.NOT_FOUND),
            (StepResult.blocked, StepStatus.BLOCKED),
            (StepResult.timed_out, StepStatus.TIMED_OUT),
            (StepResult.failed, StepStatus.FAILED),
        ],
    )
    def test_non_found_statuses(self, factory: object, status: StepStatus) -> None:
        """Every other status is not ok and keeps its reason."""
        result = factory("why")  # type: ignore[operator]
        assert result.status is status
        assert not result.ok
        assert result.reason == "why"
        assert result.value is None

    def test_unwrap_non_found_raises(self) -> None:
        """unwrap() on a non-FOUND result raises ValueError."""
        with pytest.raises(ValueError, match="cannot unwrap"):
            StepResult.blocked("unusual traffic").unwrap()

    def test_status_values_are_strings(self) -> None:
        """Statuses serialize as lower-case strings."""
        assert StepStatus.TIMED_OUT == "timed_out"


@pytest.mark.unit
class TestScrapeReport:
    """Test ScrapeReport aggregation."""

    def test_count_by_status(self) -> None:
        """Domains are counted per terminal status."""
        report = ScrapeReport(task=SearchTask(query="sre", target_domains=("a.com", "b.com")))
        report.domains.extend(
            [
                DomainReport(domain="a.com", status=StepStatus.FOUND, listings_count=3),
                DomainReport(domain="b.com", status=StepStatus.BLOCKED, reason="CAPTCHA"),
                DomainReport(domain="c.com", status=StepStatus.FOUND, listings_count=1),
            ]
        )
        assert report.count_by_status() == {"found": 2, "blocked": 1}

    def test_empty_report(self) -> None:
        """A fresh report has no listings and is not cancelled."""
        report = ScrapeReport(task=SearchTask(query="sre", target_domains=()))
        assert report.listings == []
        assert report.count_by_status() == {}
        assert report.cancelled is False
