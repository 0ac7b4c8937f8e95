"""Randomized delay scheduler used to break up request cadence."""

from __future__ import annotations

import asyncio
import random
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from job_scout_core.config.settings import Settings

logger = structlog.get_logger()

SleepFunc = Callable[[float], Awaitable[None]]


class DelayScheduler:
    """Sleeps for uniformly random durations.

    Both the RNG and the sleep function are injectable so tests can pin
    the drawn durations and skip real waiting. Holds no other state, so a
    single instance may be shared freely.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        rng: random.Random | None = None,
        sleep: SleepFunc = asyncio.sleep,
    ) -> None:
        """Initialize with optional settings, RNG and sleep function."""
        self._settings = settings
        self.rng = rng or random.Random()
        self._sleep = sleep

    async def delay(self, min_seconds: float, max_seconds: float) -> float:
        """Suspend for a random duration in [min_seconds, max_seconds].

        Returns the duration that was slept.
        """
        if min_seconds < 0 or max_seconds < 0:
            msg = f"delay bounds must be non-negative, got ({min_seconds}, {max_seconds})"
            raise ValueError(msg)
        if min_seconds > max_seconds:
            msg = f"delay min ({min_seconds}) > max ({max_seconds})"
            raise ValueError(msg)

        duration = self.rng.uniform(min_seconds, max_seconds)
        # uniform() may overshoot b by a float rounding step
        duration = min(max(duration, min_seconds), max_seconds)
        await self._sleep(duration)
        return duration

    async def settle(self) -> float:
        """Pause between browser actions while a page settles."""
        low, high = self._window("settle_delay", (1.0, 4.0))
        return await self.delay(low, high)

    async def between_domains(self) -> float:
        """Pause between two target domains; wider than the settle window."""
        low, high = self._window("domain_delay", (3.0, 10.0))
        duration = await self.delay(low, high)
        logger.info("inter_domain_delay", seconds=round(duration, 2))
        return duration

    async def pause(self) -> float:
        """Short pause between simulated pointer actions."""
        low, high = self._window("human_pause", (0.2, 0.5))
        return await self.delay(low, high)

    def _window(self, name: str, default: tuple[float, float]) -> tuple[float, float]:
        """Read a (min, max) delay window from settings."""
        if self._settings is None:
            return default
        return (
            float(getattr(self._settings, f"{name}_min_seconds")),
            float(getattr(self._settings, f"{name}_max_seconds")),
        )
