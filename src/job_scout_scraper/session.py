"""Browser session lifecycle: one Chromium process, one page at a time."""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

import structlog
from playwright.async_api import Error as PlaywrightError

from job_scout_core.constants import BROWSER_LAUNCH_ARGS, GENERAL_SEARCH_HEADERS
from job_scout_core.exceptions import BrowserLaunchError, SessionClosedError
from job_scout_scraper.stealth import install_stealth_scripts

if TYPE_CHECKING:
    from playwright.async_api import Browser, BrowserContext, Page, Playwright

    from job_scout_core.config.settings import Settings

logger = structlog.get_logger()


def _default_playwright_factory() -> Any:  # noqa: ANN401
    from playwright.async_api import async_playwright

    return async_playwright()


class ScrapeSession:
    """Owns the Playwright driver, one browser, and at most one page.

    The browser is launched lazily on first use and reused for every domain
    of a run. ``close()`` is idempotent and may be called mid-run.
    Not shared across concurrent runs.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        playwright_factory: Callable[[], Any] = _default_playwright_factory,
    ) -> None:
        """Initialize with settings and an injectable Playwright factory."""
        self._settings = settings
        self._playwright_factory = playwright_factory
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._context: BrowserContext | None = None
        self._page: Page | None = None
        self._closed = False

    @property
    def is_closed(self) -> bool:
        """True once close() has been called."""
        return self._closed

    @property
    def page(self) -> Page | None:
        """The currently open page, if any."""
        return self._page

    async def ensure_browser(self) -> Browser:
        """Return the active browser, launching Chromium on first call.

        Raises BrowserLaunchError if the driver or browser cannot start.
        Launches are never retried. A close() that lands while Chromium is
        starting tears the new browser down and raises SessionClosedError.
        """
        if self._closed:
            msg = "scrape session is closed"
            raise SessionClosedError(msg)
        if self._browser is not None:
            return self._browser

        headless = self._settings.headless
        try:
            self._playwright = await self._playwright_factory().start()
            self._browser = await self._playwright.chromium.launch(
                headless=headless,
                args=list(BROWSER_LAUNCH_ARGS),
            )
        except Exception as e:
            await self._stop_driver()
            msg = f"failed to launch Chromium: {e}"
            raise BrowserLaunchError(msg) from e

        if self._closed:
            # close() ran while Chromium was starting and found nothing to release
            await self._release_browser()
            msg = "scrape session closed during browser launch"
            raise SessionClosedError(msg)

        if not headless:
            logger.warning(
                "browser_visible_mode",
                note="running headed; lower detection risk, needs a display",
            )
        logger.info("browser_launched", headless=headless)
        return self._browser

    async def new_scoped_context(self, *, general_search: bool = False) -> BrowserContext:
        """Create a browsing context with a realistic fingerprint.

        The general-search variant also sends browser-like request headers.
        """
        browser = await self.ensure_browser()
        s = self._settings
        options: dict[str, Any] = {
            "user_agent": s.user_agent,
            "viewport": {"width": s.viewport_width, "height": s.viewport_height},
            "locale": s.locale,
            "timezone_id": s.timezone_id,
        }
        if general_search:
            options["permissions"] = ["geolocation"]
            options["extra_http_headers"] = dict(GENERAL_SEARCH_HEADERS)
        return await browser.new_context(**options)

    @asynccontextmanager
    async def scoped_page(self, *, general_search: bool = False) -> AsyncIterator[Page]:
        """Open the single page of a run; closes page and context on exit.

        A browser that launched but cannot open a context or page (crashed,
        or closed underneath us) raises BrowserLaunchError, or
        SessionClosedError if close() was called.
        """
        await self._close_page()
        try:
            self._context = await self.new_scoped_context(general_search=general_search)
            self._page = await self._context.new_page()
            await install_stealth_scripts(self._page)
        except PlaywrightError as e:
            await self._close_page()
            if self._closed:
                msg = "scrape session closed while opening a page"
                raise SessionClosedError(msg) from e
            msg = f"browser could not open a page: {e}"
            raise BrowserLaunchError(msg) from e
        try:
            yield self._page
        finally:
            await self._close_page()

    async def close(self) -> None:
        """Release page, context, browser and driver. Safe to call repeatedly."""
        if self._closed and self._browser is None and self._playwright is None:
            return
        self._closed = True
        await self._close_page()
        await self._release_browser()
        logger.info("browser_closed")

    async def _release_browser(self) -> None:
        browser, self._browser = self._browser, None
        if browser is not None:
            try:
                await browser.close()
            except Exception as e:
                logger.warning("browser_close_failed", error=str(e))
        await self._stop_driver()

    async def _close_page(self) -> None:
        page, self._page = self._page, None
        context, self._context = self._context, None
        if page is not None:
            try:
                await page.close()
            except Exception as e:
                logger.debug("page_close_failed", error=str(e))
        if context is not None:
            try:
                await context.close()
            except Exception as e:
                logger.debug("context_close_failed", error=str(e))

    async def _stop_driver(self) -> None:
        driver, self._playwright = self._playwright, None
        if driver is not None:
            try:
                await driver.stop()
            except Exception as e:
                logger.warning("playwright_stop_failed", error=str(e))

    async def __aenter__(self) -> ScrapeSession:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()
