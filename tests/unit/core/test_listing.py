"""Tests for search task and listing models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from job_scout_core.models.listing import CandidateListing, JobListing, SearchTask


@pytest.mark.unit
class TestSearchTask:
    """Test SearchTask validation."""

    def test_defaults(self) -> None:
        """Per-domain cap defaults to 50."""
        task = SearchTask(query="backend engineer", target_domains=("jobs.lever.co",))
        assert task.max_results_per_domain == 50

    def test_query_is_stripped(self) -> None:
        """Surrounding whitespace is removed from the query."""
        task = SearchTask(query="  data scientist ", target_domains=())
        assert task.query == "data scientist"

    def test_blank_query_rejected(self) -> None:
        """Whitespace-only queries are invalid."""
        with pytest.raises(ValidationError, match="query must not be blank"):
            SearchTask(query="   ", target_domains=("icims.com",))

    def test_domains_keep_order_and_drop_blanks(self) -> None:
        """Domains are stripped, blanks dropped, order preserved."""
        task = SearchTask(
            query="sre",
            target_domains=[" jobs.lever.co ", "", "icims.com", "  "],  # type: ignore[arg-type]
        )
        assert task.target_domains == ("jobs.lever.co", "icims.com")

    def test_single_domain_string_accepted(self) -> None:
        """A bare string becomes a one-element tuple."""
        task = SearchTask(query="sre", target_domains="icims.com")  # type: ignore[arg-type]
        assert task.target_domains == ("icims.com",)

    def test_max_results_must_be_positive(self) -> None:
        """Zero results per domain is rejected."""
        with pytest.raises(ValidationError):
            SearchTask(query="sre", target_domains=(), max_results_per_domain=0)

    def test_frozen(self) -> None:
        """Tasks are immutable."""
        task = SearchTask(query="sre", target_domains=())
        with pytest.raises(ValidationError):
            task.query = "other"  # type: ignore[misc]


@pytest.mark.unit
class TestCandidateListing:
    """Test CandidateListing completeness."""

    @pytest.mark.parametrize(
        ("title", "url", "expected"),
        [
            ("Backend Engineer", "https://jobs.lever.co/acme/1", True),
            ("", "https://jobs.lever.co/acme/1", False),
            ("Backend Engineer", "", False),
            ("   ", "https://jobs.lever.co/acme/1", False),
        ],
    )
    def test_is_complete(self, title: str, url: str, expected: bool) -> None:
        """A candidate needs both a title and a url."""
        assert CandidateListing(title=title, url=url).is_complete is expected


@pytest.mark.unit
class TestJobListing:
    """Test JobListing validation."""

    def test_valid_listing(self) -> None:
        """Required fields are stripped; blank optionals become None."""
        listing = JobListing(
            title=" Backend Engineer ",
            company="",
            location="  ",
            description="Build APIs",
            url="https://jobs.lever.co/acme/1",
            source="jobs.lever.co",
        )
        assert listing.title == "Backend Engineer"
        assert listing.company is None
        assert listing.location is None
        assert listing.description == "Build APIs"

    def test_empty_title_rejected(self) -> None:
        """Listings must have a title."""
        with pytest.raises(ValidationError):
            JobListing(title="  ", url="https://jobs.lever.co/acme/1", source="lever.co")

    def test_relative_url_rejected(self) -> None:
        """Listings must point at absolute http(s) URLs."""
        with pytest.raises(ValidationError, match="absolute http"):
            JobListing(title="SRE", url="/url?q=https://x.com", source="lever.co")

    def test_empty_source_rejected(self) -> None:
        """Every listing carries the domain it came from."""
        with pytest.raises(ValidationError):
            JobListing(title="SRE", url="https://jobs.lever.co/acme/1", source="")
