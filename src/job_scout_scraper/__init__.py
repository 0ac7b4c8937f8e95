"""Search-result scraping engine for ATS job postings."""

from job_scout_scraper.scraper import JobScraper
from job_scout_scraper.session import ScrapeSession

__all__ = [
    "JobScraper",
    "ScrapeSession",
]
