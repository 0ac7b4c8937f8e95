"""Domain-to-strategy registry with exact and substring matching."""

from __future__ import annotations

import re
from collections.abc import Iterator
from urllib.parse import urlparse

import structlog

from job_scout_scraper.strategies.base import SiteStrategy
from job_scout_scraper.strategies.search_engines import ENGINE_STRATEGIES

logger = structlog.get_logger()

_HOSTNAME_RE = re.compile(
    r"^[a-z0-9](?:[a-z0-9-]*[a-z0-9])?(?:\.[a-z0-9](?:[a-z0-9-]*[a-z0-9])?)+$"
)

# Known ATS families: registry key -> host used in the site: filter.
# Order matters for substring lookups.
KNOWN_ATS_SITES: dict[str, str] = {
    "icims.com": "icims.com",
    "apply.workable.com": "apply.workable.com",
    "boards.greenhouse.io": "boards.greenhouse.io",
    "jobs.smartrecruiters.com": "jobs.smartrecruiters.com",
    "jobs.lever.co": "jobs.lever.co",
    "myworkdayjobs.com": "myworkdayjobs.com",
    "jobs.ashbyhq.com": "jobs.ashbyhq.com",
}


def normalize_domain(domain: str) -> str | None:
    """Reduce user input to a bare lower-case hostname, or None if malformed."""
    if not isinstance(domain, str):
        return None
    value = domain.strip().lower()
    if not value:
        return None
    if "://" in value:
        value = urlparse(value).netloc
    value = value.split("/", 1)[0].split(":", 1)[0].removeprefix("www.").strip(".")
    if not _HOSTNAME_RE.match(value):
        return None
    return value


class StrategyRegistry:
    """Maps target domains to site strategies.

    Lookup tries an exact key match first, then the first key (in
    registration order) that contains the domain or is contained by it.
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._strategies: dict[str, SiteStrategy] = {}

    def register(self, key: str, strategy: SiteStrategy) -> None:
        """Register a strategy for a domain family key."""
        normalized = normalize_domain(key)
        if normalized is None:
            msg = f"invalid registry key: {key!r}"
            raise ValueError(msg)
        self._strategies[normalized] = strategy

    def resolve(self, domain: str) -> SiteStrategy | None:
        """Return the strategy for a domain, or None when nothing matches."""
        normalized = normalize_domain(domain)
        if normalized is None:
            return None

        exact = self._strategies.get(normalized)
        if exact is not None:
            return exact

        for key, strategy in self._strategies.items():
            if key in normalized or normalized in key:
                return strategy
        return None

    def keys(self) -> list[str]:
        """Registered keys in lookup order."""
        return list(self._strategies)

    def __iter__(self) -> Iterator[tuple[str, SiteStrategy]]:
        return iter(self._strategies.items())

    def __len__(self) -> int:
        return len(self._strategies)

    def __contains__(self, domain: object) -> bool:
        return isinstance(domain, str) and self.resolve(domain) is not None


def build_default_registry(
    engine: str = "duckduckgo",
    *,
    field_timeout_seconds: float = 0.5,
) -> StrategyRegistry:
    """Registry of the known ATS families searched through one engine."""
    strategy_cls = ENGINE_STRATEGIES.get(engine)
    if strategy_cls is None:
        msg = f"unknown search engine: {engine!r}"
        raise ValueError(msg)

    registry = StrategyRegistry()
    for key, site_filter in KNOWN_ATS_SITES.items():
        registry.register(
            key,
            strategy_cls(site_filter, field_timeout_seconds=field_timeout_seconds),
        )
    logger.debug("strategy_registry_built", engine=engine, domains=len(registry))
    return registry
