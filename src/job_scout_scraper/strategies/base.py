"""Base site strategy: search-URL builder plus selector waterfalls."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar
from urllib.parse import urlparse

import structlog
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from job_scout_core.models.listing import CandidateListing
from job_scout_core.models.step import StepResult

if TYPE_CHECKING:
    from playwright.async_api import Locator, Page

logger = structlog.get_logger()


@dataclass
class ContainerMatch:
    """Result containers found by the active waterfall selector."""

    selector: str
    elements: list[Locator] = field(default_factory=list)


class SiteStrategy(ABC):
    """Strategy interface for one domain family.

    Subclasses supply the search URL and ordered selector tuples; the
    waterfall and per-field extraction logic lives here.
    """

    name: ClassVar[str] = "base"
    # General-search strategies get browser-like headers, pointer simulation,
    # scrolling and cookie-consent handling.
    general_search: ClassVar[bool] = False
    warmup_url: ClassVar[str | None] = None

    container_selectors: ClassVar[tuple[str, ...]] = ()
    title_selectors: ClassVar[tuple[str, ...]] = ()
    url_selectors: ClassVar[tuple[str, ...]] = ()
    snippet_selectors: ClassVar[tuple[str, ...]] = ()

    def __init__(self, *, field_timeout_seconds: float = 0.5) -> None:
        """Initialize with the per-extractor timeout."""
        self.field_timeout_ms = field_timeout_seconds * 1000

    @abstractmethod
    def build_search_url(self, query: str) -> str:
        """Deterministically map a query to the URL to load."""
        ...

    async def locate_containers(self, page: Page) -> StepResult[ContainerMatch]:
        """Run the container waterfall; first selector with elements wins."""
        for selector in self.container_selectors:
            try:
                elements = await page.locator(selector).all()
            except Exception as e:
                logger.debug("container_selector_failed", selector=selector, error=str(e))
                continue
            logger.debug("container_selector_tried", selector=selector, count=len(elements))
            if elements:
                return StepResult.found(ContainerMatch(selector=selector, elements=elements))
        return StepResult.not_found("no container selector matched")

    async def extract_candidate(self, container: Locator) -> CandidateListing:
        """Extract title, url and snippet from one container.

        Each field tries its extractors in order; missing fields stay empty.
        """
        title = await self.first_text(container, self.title_selectors)
        url = await self.first_href(container, self.url_selectors)
        snippet = await self.first_text(container, self.snippet_selectors)
        return CandidateListing(
            title=title.value or "",
            url=url.value or "",
            snippet=snippet.value or "",
        )

    async def first_text(
        self, container: Locator, selectors: tuple[str, ...]
    ) -> StepResult[str]:
        """Text of the first selector that yields non-blank text."""
        last: StepResult[str] = StepResult.not_found()
        for selector in selectors:
            try:
                target = container.locator(selector).first
                if await target.count() == 0:
                    continue
                text = await target.text_content(timeout=self.field_timeout_ms)
            except Exception as e:
                last = self._extractor_error(selector, e)
                continue
            if text and text.strip():
                return StepResult.found(" ".join(text.split()))
        return last

    async def first_href(
        self, container: Locator, selectors: tuple[str, ...]
    ) -> StepResult[str]:
        """Href of the first selector that yields a usable link."""
        last: StepResult[str] = StepResult.not_found()
        for selector in selectors:
            try:
                target = container.locator(selector).first
                if await target.count() == 0:
                    continue
                href = await target.get_attribute("href", timeout=self.field_timeout_ms)
            except Exception as e:
                last = self._extractor_error(selector, e)
                continue
            if href and self.accepts_href(href.strip()):
                return StepResult.found(href.strip())
        return last

    def accepts_href(self, href: str) -> bool:
        """Whether an href can lead to a posting (absolute or wrapped)."""
        return href.startswith(("http://", "https://", "/url?", "//"))

    def accepts_listing_url(self, url: str) -> bool:
        """Whether a cleaned, absolute URL belongs to this domain family."""
        return True

    def _extractor_error(self, selector: str, error: Exception) -> StepResult[str]:
        if isinstance(error, PlaywrightTimeoutError):
            logger.debug("field_extractor_timed_out", selector=selector)
            return StepResult.timed_out(selector)
        logger.debug("field_extractor_failed", selector=selector, error=str(error))
        return StepResult.failed(f"{selector}: {error}")

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class SiteSearchStrategy(SiteStrategy):
    """Search-engine query scoped to one site with a ``site:`` filter."""

    def __init__(self, site_filter: str, *, field_timeout_seconds: float = 0.5) -> None:
        """Initialize with the host used in the ``site:`` operator."""
        super().__init__(field_timeout_seconds=field_timeout_seconds)
        self.site_filter = site_filter

    def scoped_query(self, query: str) -> str:
        """The raw query with the site filter appended."""
        return f"{query.strip()} site:{self.site_filter}"

    def accepts_listing_url(self, url: str) -> bool:
        """Only keep links hosted on the filtered site or its subdomains.

        Drops engine-internal links (cached pages, related searches).
        """
        host = (urlparse(url).hostname or "").lower().removeprefix("www.")
        return host == self.site_filter or host.endswith(f".{self.site_filter}")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(site_filter={self.site_filter!r})"
