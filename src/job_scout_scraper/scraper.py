"""Scrape-run orchestration: one session, domains in order, then persist."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING
from uuid import uuid4

import structlog

from job_scout_core.constants import DEFAULT_MAX_RESULTS
from job_scout_core.exceptions import SessionClosedError
from job_scout_core.models.listing import JobListing, SearchTask
from job_scout_core.models.report import ScrapeReport
from job_scout_scraper.aggregator import ResultAggregator
from job_scout_scraper.delay import DelayScheduler
from job_scout_scraper.observability.logging import bind_run_context, clear_run_context
from job_scout_scraper.observability.tracing import trace_domain, trace_scrape_run
from job_scout_scraper.pipeline import ExtractionPipeline
from job_scout_scraper.session import ScrapeSession
from job_scout_scraper.stealth import HumanBehavior
from job_scout_scraper.strategies.registry import build_default_registry

if TYPE_CHECKING:
    from playwright.async_api import Page

    from job_scout_core.config.settings import Settings
    from job_scout_core.interfaces.sink import JobListingSink
    from job_scout_scraper.strategies.registry import StrategyRegistry

logger = structlog.get_logger()


class JobScraper:
    """Scrape job listings for a query across an ordered list of domains.

    Only a browser launch failure escapes ``run``/``scrape``; every other
    problem degrades to fewer listings.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        session: ScrapeSession | None = None,
        registry: StrategyRegistry | None = None,
        scheduler: DelayScheduler | None = None,
        sink: JobListingSink | None = None,
    ) -> None:
        """Wire the session, registry, delays and sink; all injectable."""
        self.settings = settings
        self.session = session or ScrapeSession(settings)
        self.registry = registry or build_default_registry(
            settings.search_engine,
            field_timeout_seconds=settings.field_timeout_seconds,
        )
        self.scheduler = scheduler or DelayScheduler(settings)
        self.behavior = HumanBehavior(
            self.scheduler,
            viewport=(settings.viewport_width, settings.viewport_height),
            consent_timeout_seconds=settings.consent_timeout_seconds,
        )
        self.pipeline = ExtractionPipeline(settings, self.registry, self.scheduler, self.behavior)
        self.aggregator = ResultAggregator(sink)

    async def scrape(
        self,
        target_domains: list[str],
        query: str,
        max_results: int = DEFAULT_MAX_RESULTS,
    ) -> list[JobListing]:
        """Return listings for ``query`` on each domain, at most ``max_results`` per domain."""
        task = SearchTask(
            query=query,
            target_domains=tuple(target_domains),
            max_results_per_domain=max_results,
        )
        report = await self.run(task)
        return report.listings

    async def run(self, task: SearchTask) -> ScrapeReport:
        """Execute a scrape task and return the full report.

        Raises BrowserLaunchError if Chromium cannot be started, and
        SessionClosedError if the scraper was closed before the run began.
        """
        if self.session.is_closed:
            msg = "scrape session is closed"
            raise SessionClosedError(msg)
        run_id = f"scrape-{uuid4().hex[:12]}"
        bind_run_context(run_id, task.query, engine=self.settings.search_engine)
        start = time.monotonic()
        report = ScrapeReport(task=task)
        logger.info(
            "scrape_run_start",
            query=task.query,
            domains=list(task.target_domains),
            max_results_per_domain=task.max_results_per_domain,
        )

        try:
            with trace_scrape_run(run_id, task.query, len(task.target_domains)):
                await self._run_domains(task, report)
                summary = await self.aggregator.persist(report.listings)
            report.persisted = summary.persisted
            report.persist_failures = summary.failed
            report.duration_seconds = round(time.monotonic() - start, 3)
            logger.info(
                "scrape_run_end",
                listings=len(report.listings),
                by_status=report.count_by_status(),
                duration_seconds=report.duration_seconds,
            )
        finally:
            clear_run_context()
        return report

    async def _run_domains(self, task: SearchTask, report: ScrapeReport) -> None:
        general_search = self._needs_general_search(task)
        self.pipeline.begin_run()

        try:
            async with self.session.scoped_page(general_search=general_search) as page:
                await self._visit_domains(page, task, report, general_search=general_search)
        except SessionClosedError:
            # closed while the browser was still starting
            logger.warning("scrape_run_cancelled", remaining=len(task.target_domains))
            report.cancelled = True

    async def _visit_domains(
        self,
        page: Page,
        task: SearchTask,
        report: ScrapeReport,
        *,
        general_search: bool,
    ) -> None:
        domains = task.target_domains
        for index, domain in enumerate(domains):
            if self.session.is_closed:
                logger.warning("scrape_run_cancelled", remaining=len(domains) - index)
                report.cancelled = True
                break

            logger.info(
                "domain_progress",
                domain=domain,
                position=index + 1,
                total=len(domains),
            )
            with trace_domain(domain) as span:
                result = await self.pipeline.run_domain(page, domain, task)
                if span is not None:
                    span.set_attribute("scrape.status", result.report.status.value)
                    span.set_attribute("scrape.listings", result.report.listings_count)

            report.domains.append(result.report)
            report.listings.extend(result.listings)

            if index < len(domains) - 1 and not self.session.is_closed:
                await self.scheduler.between_domains()
                if general_search:
                    await self.behavior.simulate(page)

    def _needs_general_search(self, task: SearchTask) -> bool:
        """True if any target resolves to a general-search strategy."""
        for domain in task.target_domains:
            strategy = self.registry.resolve(domain)
            if strategy is not None and strategy.general_search:
                return True
        return False

    async def close(self) -> None:
        """Close the browser session. Idempotent."""
        await self.session.close()

    async def __aenter__(self) -> JobScraper:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()
