"""Tests for stealth scripts and human-like behavior."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from job_scout_core.constants import HUMAN_SCROLL_MAX_PX
from job_scout_scraper.stealth import STEALTH_SCRIPT, HumanBehavior, install_stealth_scripts
from tests.mocks.mock_browser import FakeDocument, FakeNode, FakePage


async def _page_with(nodes: dict[str, list[FakeNode]]) -> FakePage:
    page = FakePage(FakeDocument(nodes=nodes))
    await page.goto("https://www.google.com")
    return page


@pytest.mark.unit
class TestInstallStealthScripts:
    """Test install_stealth_scripts."""

    @pytest.mark.asyncio
    async def test_registers_init_script(self) -> None:
        """The override script is registered as an invoked function."""
        page = FakePage()
        assert await install_stealth_scripts(page) is True  # type: ignore[arg-type]
        assert len(page.init_scripts) == 1
        assert "webdriver" in page.init_scripts[0]
        assert page.init_scripts[0].endswith(")()")

    @pytest.mark.asyncio
    async def test_failure_is_swallowed(self) -> None:
        """A page that rejects the script yields False, not an exception."""
        page = AsyncMock()
        page.add_init_script.side_effect = RuntimeError("page closed")
        assert await install_stealth_scripts(page) is False

    def test_script_masks_automation_fingerprints(self) -> None:
        """The script covers the common fingerprint checks."""
        for signal in ("webdriver", "plugins", "languages", "chrome", "permissions"):
            assert signal in STEALTH_SCRIPT


@pytest.mark.unit
class TestHumanBehavior:
    """Test pointer, scroll and consent interactions."""

    @pytest.mark.asyncio
    async def test_simulate_moves_inside_viewport(
        self, behavior: HumanBehavior, sleeps: list[float]
    ) -> None:
        """Two or three moves, each inside the viewport, paused in between."""
        page = FakePage()
        await behavior.simulate(page)  # type: ignore[arg-type]
        assert 2 <= len(page.mouse.moves) <= 3
        assert all(0 <= x <= 1280 and 0 <= y <= 720 for x, y in page.mouse.moves)
        assert len(sleeps) == len(page.mouse.moves) - 1

    @pytest.mark.asyncio
    async def test_simulate_never_raises(self, behavior: HumanBehavior) -> None:
        """Pointer failures are logged and swallowed."""
        page = AsyncMock()
        page.mouse.move.side_effect = RuntimeError("target closed")
        await behavior.simulate(page)

    @pytest.mark.asyncio
    async def test_scroll_offset_bounded(self, behavior: HumanBehavior) -> None:
        """Scroll offsets stay within the configured maximum."""
        page = FakePage()
        await behavior.scroll(page)  # type: ignore[arg-type]
        assert 0 <= page.scrolls[0] <= HUMAN_SCROLL_MAX_PX

    @pytest.mark.asyncio
    async def test_dismiss_clicks_first_visible_button(self, behavior: HumanBehavior) -> None:
        """The first visible consent button is clicked once."""
        hidden = FakeNode(visible=False)
        accept = FakeNode(text="Accept all")
        page = await _page_with({'button:has-text("Accept")': [hidden], "#L2AGLb": [accept]})
        assert await behavior.dismiss_cookie_consent(page) is True  # type: ignore[arg-type]
        assert hidden.clicks == 0
        assert accept.clicks == 1

    @pytest.mark.asyncio
    async def test_dismiss_absent_dialog(self, behavior: HumanBehavior) -> None:
        """No dialog is not an error."""
        page = await _page_with({})
        assert await behavior.dismiss_cookie_consent(page) is False  # type: ignore[arg-type]
