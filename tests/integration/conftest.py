"""Integration test fixtures: a real Chromium session serving local HTML."""

from __future__ import annotations

from collections.abc import AsyncIterator
from pathlib import Path

import pytest

from job_scout_core.config.settings import Settings
from job_scout_core.exceptions import BrowserLaunchError
from job_scout_scraper.session import ScrapeSession
from tests.mocks.mock_settings import make_real_settings


@pytest.fixture
def real_settings(tmp_path: Path) -> Settings:
    """Real Settings with zero delays and a short navigation timeout."""
    return make_real_settings(tmp_path, navigation_timeout_seconds=10.0)


@pytest.fixture
async def browser_session(real_settings: Settings) -> AsyncIterator[ScrapeSession]:
    """A launched ScrapeSession; skips when Chromium is not installed."""
    session = ScrapeSession(real_settings)
    try:
        await session.ensure_browser()
    except BrowserLaunchError as e:
        await session.close()
        pytest.skip(f"Chromium unavailable: {e}")
    yield session
    await session.close()
