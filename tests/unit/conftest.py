"""Shared pytest fixtures for unit tests."""

from __future__ import annotations

import random
from unittest.mock import MagicMock

import pytest

from job_scout_scraper.delay import DelayScheduler
from job_scout_scraper.stealth import HumanBehavior
from tests.mocks.mock_settings import make_settings


@pytest.fixture
def mock_settings() -> MagicMock:
    """Return a MagicMock Settings with zero-width delay windows."""
    return make_settings()


@pytest.fixture
def sleeps() -> list[float]:
    """Durations passed to the fake sleep."""
    return []


@pytest.fixture
def scheduler(mock_settings: MagicMock, sleeps: list[float]) -> DelayScheduler:
    """DelayScheduler with a seeded RNG that records instead of sleeping."""

    async def fake_sleep(seconds: float) -> None:
        sleeps.append(seconds)

    return DelayScheduler(mock_settings, rng=random.Random(42), sleep=fake_sleep)


@pytest.fixture
def behavior(scheduler: DelayScheduler) -> HumanBehavior:
    """HumanBehavior driven by the recording scheduler."""
    return HumanBehavior(scheduler, viewport=(1280, 720), consent_timeout_seconds=1.0)
