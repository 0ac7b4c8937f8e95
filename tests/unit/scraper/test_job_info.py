"""Tests for company/location heuristics."""

from __future__ import annotations

import pytest

from job_scout_scraper.job_info import parse_job_info


@pytest.mark.unit
class TestParseJobInfo:
    """Test parse_job_info."""

    def test_company_from_title_suffix(self) -> None:
        """The last ' - ' segment is taken as the company."""
        company, _ = parse_job_info("Senior Backend Engineer - Acme Corp", "")
        assert company == "Acme Corp"

    def test_pipe_separator(self) -> None:
        """' | ' separates title and company too."""
        company, _ = parse_job_info("Data Engineer | Globex", "")
        assert company == "Globex"

    def test_site_name_suffix_ignored(self) -> None:
        """Engine-appended site names are not companies."""
        company, _ = parse_job_info("Platform Engineer - Lever", "")
        assert company is None

    def test_company_after_at(self) -> None:
        """'Role at Company' yields the company."""
        company, _ = parse_job_info("Staff Engineer at Initech Labs", "")
        assert company == "Initech Labs"

    def test_city_state_location(self) -> None:
        """'City, ST' in the snippet is the location."""
        _, location = parse_job_info("SRE - Acme", "Acme is hiring in San Francisco, CA for SRE.")
        assert location == "San Francisco, CA"

    def test_remote_location(self) -> None:
        """Remote is used when no city is present."""
        _, location = parse_job_info("SRE - Acme", "This role is fully Remote.")
        assert location == "Remote"

    def test_snippet_preferred_over_title(self) -> None:
        """A snippet signal wins over comma-separated title text."""
        _, location = parse_job_info(
            "Backend Engineer, Payments | Globex", "Remote role building payment services."
        )
        assert location == "Remote"

    def test_nothing_found(self) -> None:
        """Plain text yields (None, None)."""
        assert parse_job_info("engineer", "we build things") == (None, None)

    def test_empty_inputs(self) -> None:
        """Empty strings never raise."""
        assert parse_job_info("", "") == (None, None)
