"""Per-domain extraction pipeline: navigate, settle, block check, waterfall."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import structlog
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError
from pydantic import ValidationError

from job_scout_core.constants import (
    BLOCK_BODY_MARKERS,
    BLOCK_HTML_MARKERS,
    BLOCK_TITLE_MARKERS,
)
from job_scout_core.models.listing import CandidateListing, JobListing, SearchTask
from job_scout_core.models.report import DomainReport
from job_scout_core.models.step import StepResult, StepStatus
from job_scout_scraper.job_info import parse_job_info
from job_scout_scraper.strategies.registry import normalize_domain
from job_scout_scraper.url_cleaner import absolutize_url, clean_url, is_http_url

if TYPE_CHECKING:
    from playwright.async_api import Locator, Page

    from job_scout_core.config.settings import Settings
    from job_scout_scraper.delay import DelayScheduler
    from job_scout_scraper.stealth import HumanBehavior
    from job_scout_scraper.strategies.base import SiteStrategy
    from job_scout_scraper.strategies.registry import StrategyRegistry

logger = structlog.get_logger()

FALLBACK_SELECTOR = "fallback:links"


def detect_block(
    title: str,
    body_text: str,
    html: str = "",
    *,
    title_markers: tuple[str, ...] = BLOCK_TITLE_MARKERS,
    body_markers: tuple[str, ...] = BLOCK_BODY_MARKERS,
    html_markers: tuple[str, ...] = BLOCK_HTML_MARKERS,
) -> str | None:
    """Return the first blocking marker found in the page, or None.

    Title, then visible body text, then raw markup; a challenge widget
    rendered in an iframe shows up only in the markup. Matching is
    case-sensitive substring search.
    """
    for marker in title_markers:
        if marker in (title or ""):
            return marker
    for marker in body_markers:
        if marker in (body_text or ""):
            return marker
    for marker in html_markers:
        if marker in (html or ""):
            return marker
    return None


@dataclass
class DomainResult:
    """Listings and report for one target domain."""

    report: DomainReport
    listings: list[JobListing] = field(default_factory=list)


class ExtractionPipeline:
    """Scrape one target domain at a time on a caller-owned page.

    Never raises for domain-level problems: unresolved strategies,
    navigation timeouts, block pages and empty waterfalls all end as a
    DomainResult with zero listings.
    """

    def __init__(
        self,
        settings: Settings,
        registry: StrategyRegistry,
        scheduler: DelayScheduler,
        behavior: HumanBehavior,
    ) -> None:
        """Initialize with settings, strategy registry and timing helpers."""
        self._settings = settings
        self._registry = registry
        self._scheduler = scheduler
        self._behavior = behavior
        self._navigation_timeout_ms = settings.navigation_timeout_seconds * 1000
        self._field_timeout_ms = settings.field_timeout_seconds * 1000
        self._warmed_up: set[str] = set()

    def begin_run(self) -> None:
        """Forget per-page state before a run starts on a fresh page."""
        self._warmed_up.clear()

    async def run_domain(self, page: Page, domain: str, task: SearchTask) -> DomainResult:
        """Run every step for one domain and return what it produced."""
        start = time.monotonic()
        strategy = self._registry.resolve(domain)
        if strategy is None:
            logger.info("domain_skipped_no_strategy", domain=domain)
            return self._finish(
                domain, None, StepResult.not_found("no strategy for domain"), start
            )

        try:
            return await self._scrape(page, domain, strategy, task, start)
        except Exception as e:
            logger.error(
                "domain_failed",
                domain=domain,
                error_type=type(e).__name__,
                error=str(e),
            )
            return self._finish(domain, strategy, StepResult.failed(str(e)), start)

    async def _scrape(
        self,
        page: Page,
        domain: str,
        strategy: SiteStrategy,
        task: SearchTask,
        start: float,
    ) -> DomainResult:
        url = strategy.build_search_url(task.query)
        logger.info("domain_scrape_start", domain=domain, strategy=strategy.name, url=url)

        await self._warm_up(page, strategy)

        if strategy.general_search:
            await self._behavior.simulate(page)
        navigated = await self._navigate(page, url)
        if not navigated.ok:
            logger.warning("domain_navigation_failed", domain=domain, reason=navigated.reason)
            return self._finish(domain, strategy, navigated, start)

        await self._settle(page, strategy)

        page_check = await self._check_block(page)
        if page_check.status is StepStatus.BLOCKED:
            logger.warning(
                "domain_blocked",
                domain=domain,
                marker=page_check.reason,
                hint="try headed mode, a proxy, or longer delays",
            )
            return self._finish(domain, strategy, page_check, start)

        limit = task.max_results_per_domain
        located = await strategy.locate_containers(page)
        if located.ok:
            match = located.unwrap()
            selector = match.selector
            candidates = await self._extract_all(strategy, match.elements[:limit], domain)
        else:
            logger.info("selector_waterfall_exhausted", domain=domain)
            selector = FALLBACK_SELECTOR
            candidates = await self._fallback_links(page, domain, limit)

        listings = self._promote_all(candidates, strategy, domain, page.url)
        logger.info(
            "domain_scraped",
            domain=domain,
            selector=selector,
            candidates=len(candidates),
            listings=len(listings),
        )
        outcome: StepResult[list[JobListing]] = (
            StepResult.found(listings)
            if listings
            else StepResult.not_found("no complete listings extracted")
        )
        return self._finish(domain, strategy, outcome, start, selector=selector, listings=listings)

    async def _warm_up(self, page: Page, strategy: SiteStrategy) -> None:
        """Visit the engine's homepage once per pipeline before searching it."""
        warmup_url = strategy.warmup_url
        if not warmup_url or warmup_url in self._warmed_up:
            return
        self._warmed_up.add(warmup_url)
        logger.info("session_warmup", url=warmup_url)
        try:
            await page.goto(
                warmup_url,
                wait_until="domcontentloaded",
                timeout=self._navigation_timeout_ms,
            )
        except PlaywrightError as e:
            logger.warning("session_warmup_failed", url=warmup_url, error=str(e))
            return
        await self._scheduler.settle()
        await self._behavior.simulate(page)
        await self._behavior.dismiss_cookie_consent(page)

    async def _navigate(self, page: Page, url: str) -> StepResult[str]:
        try:
            await page.goto(
                url,
                wait_until="domcontentloaded",
                timeout=self._navigation_timeout_ms,
            )
        except PlaywrightTimeoutError:
            return StepResult.timed_out(
                f"navigation exceeded {self._settings.navigation_timeout_seconds}s"
            )
        except PlaywrightError as e:
            return StepResult.failed(f"navigation error: {e}")
        return StepResult.found(url)

    async def _settle(self, page: Page, strategy: SiteStrategy) -> None:
        await self._scheduler.settle()
        if strategy.general_search:
            await self._behavior.scroll(page)
            await self._behavior.dismiss_cookie_consent(page)
            await self._behavior.simulate(page)

    async def _check_block(self, page: Page) -> StepResult[str]:
        """FOUND with the page title for real content, BLOCKED with the marker otherwise."""
        title = await page.title()
        try:
            body = await page.inner_text("body", timeout=self._field_timeout_ms * 4)
        except PlaywrightError:
            body = ""
        try:
            html = await page.content()
        except PlaywrightError:
            html = ""
        marker = detect_block(title, body, html)
        if marker is not None:
            return StepResult.blocked(marker)
        return StepResult.found(title)

    async def _extract_all(
        self,
        strategy: SiteStrategy,
        elements: list[Locator],
        domain: str,
    ) -> list[CandidateListing]:
        candidates: list[CandidateListing] = []
        for index, element in enumerate(elements):
            try:
                candidates.append(await strategy.extract_candidate(element))
            except Exception as e:
                logger.warning(
                    "container_extraction_failed",
                    domain=domain,
                    index=index,
                    error=str(e),
                )
        return candidates

    async def _fallback_links(
        self, page: Page, domain: str, limit: int
    ) -> list[CandidateListing]:
        """Anchors whose href mentions the target domain, capped at limit."""
        needle = normalize_domain(domain)
        if needle is None:
            return []
        try:
            anchors = await page.locator(f'a[href*="{needle}"]').all()
        except PlaywrightError as e:
            logger.warning("fallback_extraction_failed", domain=domain, error=str(e))
            return []
        logger.info("fallback_links_found", domain=domain, count=len(anchors))

        candidates: list[CandidateListing] = []
        for anchor in anchors[:limit]:
            try:
                href = await anchor.get_attribute("href", timeout=self._field_timeout_ms)
                text = await anchor.text_content(timeout=self._field_timeout_ms)
            except PlaywrightError:
                continue
            candidates.append(
                CandidateListing(title=" ".join((text or "").split()), url=(href or "").strip())
            )
        return candidates

    def _promote_all(
        self,
        candidates: list[CandidateListing],
        strategy: SiteStrategy,
        source: str,
        page_url: str,
    ) -> list[JobListing]:
        listings: list[JobListing] = []
        for candidate in candidates:
            listing = self.promote(candidate, strategy, source, page_url)
            if listing is not None:
                listings.append(listing)
        return listings

    @staticmethod
    def promote(
        candidate: CandidateListing,
        strategy: SiteStrategy,
        source: str,
        page_url: str = "",
    ) -> JobListing | None:
        """Turn a complete candidate into a JobListing, or None to discard it."""
        if not candidate.is_complete:
            return None
        url = absolutize_url(clean_url(candidate.url.strip()), page_url)
        if not is_http_url(url) or not strategy.accepts_listing_url(url):
            return None

        company, location = candidate.company, candidate.location
        if company is None or location is None:
            guessed_company, guessed_location = parse_job_info(candidate.title, candidate.snippet)
            company = company or guessed_company
            location = location or guessed_location

        try:
            return JobListing(
                title=candidate.title,
                company=company,
                location=location,
                description=candidate.snippet,
                url=url,
                source=source,
            )
        except ValidationError:
            return None

    def _finish(
        self,
        domain: str,
        strategy: SiteStrategy | None,
        outcome: StepResult[Any],
        start: float,
        *,
        selector: str | None = None,
        listings: list[JobListing] | None = None,
    ) -> DomainResult:
        listings = listings or []
        report = DomainReport(
            domain=domain,
            status=outcome.status,
            strategy=strategy.name if strategy is not None else None,
            selector=selector,
            listings_count=len(listings),
            reason=outcome.reason,
            duration_seconds=round(time.monotonic() - start, 3),
        )
        return DomainResult(report=report, listings=listings)
