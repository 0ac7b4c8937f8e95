"""Site-filtered search strategies for Google and DuckDuckGo."""

from __future__ import annotations

from typing import ClassVar
from urllib.parse import quote, quote_plus

from job_scout_scraper.strategies.base import SiteSearchStrategy


class GoogleSiteSearchStrategy(SiteSearchStrategy):
    """General web search on google.com restricted with ``site:``.

    Google changes its result markup often, so every field has several
    selectors, newest layout first.
    """

    name: ClassVar[str] = "google"
    general_search: ClassVar[bool] = True
    warmup_url: ClassVar[str | None] = "https://www.google.com"

    container_selectors: ClassVar[tuple[str, ...]] = (
        "div[data-header-feature]",
        "div.g",
        'div[class*="g tF2Cxc"]',
        'div[class*="yuRUbf"]',
        "div[data-ved]",
    )
    title_selectors: ClassVar[tuple[str, ...]] = ("h3", "h3.LC20lb", "h3.DKV0Md", "a h3")
    url_selectors: ClassVar[tuple[str, ...]] = ("a[href]", "a", "h3 a")
    snippet_selectors: ClassVar[tuple[str, ...]] = (
        ".VwiC3b",
        ".IsZvec",
        'span[style*="-webkit-line-clamp"]',
        ".s",
        "div[data-sncf]",
    )

    def build_search_url(self, query: str) -> str:
        """Google search URL asking for up to 100 results."""
        encoded = quote(self.scoped_query(query), safe="")
        return f"https://www.google.com/search?q={encoded}&num=100"


class DuckDuckGoSiteSearchStrategy(SiteSearchStrategy):
    """DuckDuckGo's JavaScript-free HTML result page restricted with ``site:``."""

    name: ClassVar[str] = "duckduckgo"

    container_selectors: ClassVar[tuple[str, ...]] = (
        ".result:not(.result--ad)",
        ".web-result",
        ".links_main",
    )
    title_selectors: ClassVar[tuple[str, ...]] = ("a.result__a", ".result__title", "a")
    url_selectors: ClassVar[tuple[str, ...]] = ("a.result__a", "a.result__url", "a")
    snippet_selectors: ClassVar[tuple[str, ...]] = (".result__snippet", ".result__body")

    def build_search_url(self, query: str) -> str:
        """DuckDuckGo HTML endpoint URL."""
        return f"https://html.duckduckgo.com/html/?q={quote_plus(self.scoped_query(query))}"


ENGINE_STRATEGIES: dict[str, type[SiteSearchStrategy]] = {
    "duckduckgo": DuckDuckGoSiteSearchStrategy,
    "google": GoogleSiteSearchStrategy,
}
