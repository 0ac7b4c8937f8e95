"""Anti-detection helpers: init-time overrides and human-like interaction."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from job_scout_core.constants import (
    COOKIE_CONSENT_SELECTORS,
    HUMAN_MOVE_COUNT_RANGE,
    HUMAN_SCROLL_MAX_PX,
)

if TYPE_CHECKING:
    from playwright.async_api import Page

    from job_scout_scraper.delay import DelayScheduler

logger = structlog.get_logger()

# Runs before any page script; the usual automation fingerprint checks read as human.
STEALTH_SCRIPT = """
() => {
  Object.defineProperty(navigator, 'webdriver', { get: () => false });
  Object.defineProperty(navigator, 'plugins', { get: () => [1, 2, 3, 4, 5] });
  Object.defineProperty(navigator, 'languages', { get: () => ['en-US', 'en'] });
  window.chrome = { runtime: {} };
  const permissions = navigator.permissions;
  if (permissions && permissions.query) {
    const originalQuery = permissions.query.bind(permissions);
    permissions.query = (parameters) =>
      parameters && parameters.name === 'notifications'
        ? Promise.resolve({ state: (window.Notification && Notification.permission) || 'default' })
        : originalQuery(parameters);
  }
}
"""


async def install_stealth_scripts(page: Page) -> bool:
    """Register the stealth overrides on a page before it navigates.

    Best-effort: returns False and logs instead of raising.
    """
    try:
        await page.add_init_script(f"({STEALTH_SCRIPT})()")
    except Exception as e:
        logger.warning("stealth_install_failed", error=str(e))
        return False
    return True


class HumanBehavior:
    """Randomized pointer, scroll and consent interactions.

    All methods are best-effort and never raise.
    """

    def __init__(
        self,
        scheduler: DelayScheduler,
        *,
        viewport: tuple[int, int] = (800, 600),
        consent_selectors: tuple[str, ...] = COOKIE_CONSENT_SELECTORS,
        consent_timeout_seconds: float = 2.0,
    ) -> None:
        """Initialize with a delay scheduler and interaction bounds."""
        self._scheduler = scheduler
        self._viewport = viewport
        self._consent_selectors = consent_selectors
        self._consent_timeout_ms = consent_timeout_seconds * 1000

    async def simulate(self, page: Page) -> None:
        """Move the pointer a few times with short random pauses."""
        rng = self._scheduler.rng
        width, height = self._viewport
        moves = rng.randint(*HUMAN_MOVE_COUNT_RANGE)
        try:
            for i in range(moves):
                await page.mouse.move(
                    rng.uniform(0, width),
                    rng.uniform(0, height),
                    steps=rng.randint(5, 20),
                )
                if i < moves - 1:
                    await self._scheduler.pause()
        except Exception as e:
            logger.debug("human_simulation_failed", error=str(e))

    async def scroll(self, page: Page) -> None:
        """Scroll to a small random vertical offset."""
        offset = int(self._scheduler.rng.uniform(0, HUMAN_SCROLL_MAX_PX))
        try:
            await page.evaluate("(y) => window.scrollTo(0, y)", offset)
        except Exception as e:
            logger.debug("human_scroll_failed", error=str(e))

    async def dismiss_cookie_consent(self, page: Page) -> bool:
        """Click the first visible consent button. Absence is not an error."""
        for selector in self._consent_selectors:
            try:
                button = page.locator(selector).first
                if not await button.is_visible():
                    continue
                await button.click(timeout=self._consent_timeout_ms)
            except Exception:
                logger.debug("consent_selector_failed", selector=selector)
                continue
            logger.info("cookie_consent_dismissed", selector=selector)
            await self._scheduler.pause()
            return True
        return False
