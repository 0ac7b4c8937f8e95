"""Site strategies and the domain registry."""

from job_scout_scraper.strategies.base import ContainerMatch, SiteSearchStrategy, SiteStrategy
from job_scout_scraper.strategies.registry import (
    KNOWN_ATS_SITES,
    StrategyRegistry,
    build_default_registry,
    normalize_domain,
)
from job_scout_scraper.strategies.search_engines import (
    ENGINE_STRATEGIES,
    DuckDuckGoSiteSearchStrategy,
    GoogleSiteSearchStrategy,
)

__all__ = [
    "ENGINE_STRATEGIES",
    "KNOWN_ATS_SITES",
    "ContainerMatch",
    "DuckDuckGoSiteSearchStrategy",
    "GoogleSiteSearchStrategy",
    "SiteSearchStrategy",
    "SiteStrategy",
    "StrategyRegistry",
    "build_default_registry",
    "normalize_domain",
]
