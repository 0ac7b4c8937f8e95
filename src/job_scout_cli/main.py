"""CLI entrypoint using typer."""

from __future__ import annotations

import asyncio
import json
from typing import TYPE_CHECKING

import typer
from rich.console import Console
from rich.table import Table

from job_scout_core.config.settings import Settings
from job_scout_core.constants import DEFAULT_MAX_RESULTS
from job_scout_core.exceptions import BrowserLaunchError
from job_scout_core.models.listing import SearchTask
from job_scout_scraper.observability import configure_logging, configure_tracing
from job_scout_scraper.scraper import JobScraper
from job_scout_scraper.strategies.registry import KNOWN_ATS_SITES, build_default_registry

if TYPE_CHECKING:
    from job_scout_core.interfaces.sink import JobListingSink
    from job_scout_core.models.report import ScrapeReport
    from job_scout_infra.db.models import JobListingModel

app = typer.Typer(
    name="job-scout",
    help="Scrape ATS job postings through site-filtered web search",
)
console = Console()

__version__ = "0.1.0"


@app.command()
def scrape(
    query: str = typer.Argument(..., help="Free-text job query, e.g. 'backend engineer'"),
    sites: list[str] = typer.Option(
        [],
        "--site",
        "-s",
        help="Target domain (repeatable); defaults to every known ATS family",
    ),
    max_results: int = typer.Option(
        DEFAULT_MAX_RESULTS, "--max-results", "-n", min=1, help="Listings per domain"
    ),
    engine: str | None = typer.Option(
        None, "--engine", help="Search engine: duckduckgo or google"
    ),
    headless: bool | None = typer.Option(
        None, "--headless/--headed", help="Override SCOUT_HEADLESS"
    ),
    persist: bool | None = typer.Option(
        None, "--persist/--no-persist", help="Insert listings into the database"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print listings as JSON"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable debug logging"),
) -> None:
    """Scrape listings for QUERY across the target domains."""
    settings = Settings()
    if engine is not None:
        if engine not in ("duckduckgo", "google"):
            console.print(f"[red]Error:[/red] unknown engine {engine!r}")
            raise typer.Exit(code=2)
        settings.search_engine = engine  # type: ignore[assignment]
    if headless is not None:
        settings.headless = headless
    if persist is not None:
        settings.persist_results = persist
    if verbose:
        settings.log_level = "DEBUG"

    configure_logging(settings)
    configure_tracing(settings)

    task = SearchTask(
        query=query,
        target_domains=tuple(sites or KNOWN_ATS_SITES),
        max_results_per_domain=max_results,
    )
    console.print(
        f"[bold green]Scraping:[/bold green] {task.query!r} on "
        f"{len(task.target_domains)} domain(s) via {settings.search_engine}"
    )

    try:
        report = asyncio.run(_run_scrape(settings, task))
    except BrowserLaunchError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        console.print("[dim]Install the browser with `playwright install chromium`.[/dim]")
        raise typer.Exit(code=1) from exc

    if as_json:
        console.print_json(json.dumps([listing.model_dump() for listing in report.listings]))
    else:
        _print_report(report)


@app.command()
def sites(
    engine: str = typer.Option("duckduckgo", "--engine", help="Search engine"),
) -> None:
    """List the known domain families and their search strategies."""
    registry = build_default_registry(engine)
    table = Table(title="Known domain families")
    table.add_column("Domain", no_wrap=True)
    table.add_column("Engine")
    table.add_column("Site filter", no_wrap=True)
    for key, strategy in registry:
        table.add_row(key, strategy.name, getattr(strategy, "site_filter", "-"))
    console.print(table)


@app.command()
def listings(
    source: str = typer.Argument(..., help="Source domain, e.g. jobs.lever.co"),
    limit: int = typer.Option(20, "--limit", "-n", min=1, help="Rows to show"),
) -> None:
    """Show listings stored by earlier scrape runs, newest first."""
    settings = Settings()
    configure_logging(settings)

    total, rows = asyncio.run(_load_stored(settings, source, limit))
    if not rows:
        console.print(f"[yellow]No stored listings for {source}[/yellow]")
        return

    table = Table(title=f"Stored listings: {source}")
    table.add_column("Title", overflow="fold")
    table.add_column("Company")
    table.add_column("Location")
    table.add_column("URL", overflow="fold")
    for row in rows:
        table.add_row(row.title, row.company or "", row.location or "", row.url)
    console.print(table)
    console.print(f"  Showing {len(rows)} of {total}")


@app.command()
def version() -> None:
    """Show version."""
    console.print(f"job-scout v{__version__}")


async def _run_scrape(settings: Settings, task: SearchTask) -> ScrapeReport:
    """Run one scrape task, with the SQL sink when persistence is enabled."""
    sink: JobListingSink | None = None
    engine = None
    if settings.persist_results:
        from job_scout_infra.db.engine import create_engine
        from job_scout_infra.db.listing_sink import SqlJobListingSink
        from job_scout_infra.db.session import create_session_factory, init_db

        engine = create_engine(settings)
        await init_db(engine)
        sink = SqlJobListingSink(create_session_factory(engine))

    try:
        async with JobScraper(settings, sink=sink) as scraper:
            return await scraper.run(task)
    finally:
        if engine is not None:
            await engine.dispose()


async def _load_stored(
    settings: Settings, source: str, limit: int
) -> tuple[int, list[JobListingModel]]:
    """Return the stored count for ``source`` and its newest ``limit`` rows."""
    from job_scout_infra.db.engine import create_engine
    from job_scout_infra.db.listing_sink import SqlJobListingSink
    from job_scout_infra.db.session import create_session_factory, init_db

    engine = create_engine(settings)
    try:
        await init_db(engine)
        sink = SqlJobListingSink(create_session_factory(engine))
        return await sink.count(source), await sink.list_by_source(source, limit)
    finally:
        await engine.dispose()


def _print_report(report: ScrapeReport) -> None:
    """Print per-domain outcomes and the listings table."""
    domains = Table(title="Domains")
    domains.add_column("Domain")
    domains.add_column("Status")
    domains.add_column("Selector")
    domains.add_column("Listings", justify="right")
    domains.add_column("Reason")
    for d in report.domains:
        domains.add_row(
            d.domain, d.status.value, d.selector or "-", str(d.listings_count), d.reason
        )
    console.print(domains)

    if report.listings:
        listing_table = Table(title=f"Listings ({len(report.listings)})")
        listing_table.add_column("Title", overflow="fold")
        listing_table.add_column("Company")
        listing_table.add_column("Location")
        listing_table.add_column("Source")
        listing_table.add_column("URL", overflow="fold")
        for listing in report.listings:
            listing_table.add_row(
                listing.title,
                listing.company or "",
                listing.location or "",
                listing.source,
                listing.url,
            )
        console.print(listing_table)
    else:
        console.print("[yellow]No listings found[/yellow]")

    if report.persist_failures:
        console.print(f"[yellow]Insert failures: {report.persist_failures}[/yellow]")
    if report.cancelled:
        console.print("[yellow]Run cancelled before all domains were scraped[/yellow]")
    console.print(f"  Persisted: {report.persisted}")
    console.print(f"  Duration: {report.duration_seconds:.1f}s")


if __name__ == "__main__":
    app()
