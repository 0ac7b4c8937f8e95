"""Tests for redirect-wrapper removal and URL helpers."""

from __future__ import annotations

import pytest

from job_scout_scraper.url_cleaner import absolutize_url, clean_url, is_http_url


@pytest.mark.unit
class TestCleanUrl:
    """Test clean_url on search-engine wrappers."""

    def test_google_relative_wrapper(self) -> None:
        """/url?q=... yields the embedded destination."""
        wrapped = "/url?q=https://jobs.lever.co/acme/123&sa=U&ved=abc"
        assert clean_url(wrapped) == "https://jobs.lever.co/acme/123"

    def test_google_relative_wrapper_percent_encoded(self) -> None:
        """An encoded destination is decoded."""
        wrapped = "/url?q=https%3A%2F%2Fboards.greenhouse.io%2Facme%2Fjobs%2F42&sa=U"
        assert clean_url(wrapped) == "https://boards.greenhouse.io/acme/jobs/42"

    def test_google_absolute_wrapper_url_param(self) -> None:
        """The absolute google.com/url form reads the url parameter."""
        wrapped = "https://www.google.com/url?sa=t&url=https%3A%2F%2Fjobs.ashbyhq.com%2Facme"
        assert clean_url(wrapped) == "https://jobs.ashbyhq.com/acme"

    def test_duckduckgo_wrapper(self) -> None:
        """DuckDuckGo's uddg parameter carries the destination."""
        wrapped = "//duckduckgo.com/l/?uddg=https%3A%2F%2Fjobs.lever.co%2Facme%2F9&rut=f00"
        assert clean_url(wrapped) == "https://jobs.lever.co/acme/9"

    def test_plain_url_unchanged(self) -> None:
        """A URL without a wrapper passes through."""
        url = "https://apply.workable.com/acme/j/ABC123/"
        assert clean_url(url) == url

    def test_wrapper_without_destination_unchanged(self) -> None:
        """A wrapper whose q parameter is not a URL is left alone."""
        wrapped = "/url?q=related+searches&sa=U"
        assert clean_url(wrapped) == wrapped

    def test_undecodable_capture_returned_raw(self) -> None:
        """Invalid percent-escapes fall back to the raw captured value."""
        wrapped = "/url?q=https://jobs.lever.co/acme/%E9%ZZ&sa=U"
        assert clean_url(wrapped) == "https://jobs.lever.co/acme/%E9%ZZ"

    def test_empty(self) -> None:
        """Empty input yields empty output."""
        assert clean_url("") == ""

    @pytest.mark.parametrize(
        "url",
        [
            "/url?q=https://jobs.lever.co/acme/1&sa=U",
            "//duckduckgo.com/l/?uddg=https%3A%2F%2Fjobs.lever.co%2Fa&rut=1",
            "https://icims.com/jobs/1",
        ],
    )
    def test_idempotent(self, url: str) -> None:
        """Cleaning an already-clean URL changes nothing."""
        once = clean_url(url)
        assert clean_url(once) == once


@pytest.mark.unit
class TestAbsolutizeUrl:
    """Test absolutize_url."""

    def test_protocol_relative(self) -> None:
        """//host/path gets an https scheme."""
        assert absolutize_url("//jobs.lever.co/a", "") == "https://jobs.lever.co/a"

    def test_relative_against_base(self) -> None:
        """Relative paths resolve against the page URL."""
        base = "https://html.duckduckgo.com/html/?q=x"
        assert absolutize_url("/about", base) == "https://html.duckduckgo.com/about"

    def test_absolute_unchanged(self) -> None:
        """Absolute URLs are returned as-is."""
        assert absolutize_url("https://a.com/x", "https://b.com") == "https://a.com/x"

    def test_relative_without_base_unchanged(self) -> None:
        """Without a base there is nothing to resolve against."""
        assert absolutize_url("/about", "") == "/about"


@pytest.mark.unit
class TestIsHttpUrl:
    """Test is_http_url."""

    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("https://jobs.lever.co", True),
            ("http://icims.com", True),
            ("javascript:void(0)", False),
            ("/url?q=x", False),
            ("", False),
        ],
    )
    def test_is_http_url(self, url: str, expected: bool) -> None:
        """Only absolute http(s) URLs qualify."""
        assert is_http_url(url) is expected
