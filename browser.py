"""Browser controller that hands out one isolated page per scenario."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Literal, Optional

from playwright.async_api import (
    Browser,
    Page,
    Playwright,
    async_playwright,
    TimeoutError as PlaywrightTimeout,
)

from exceptions import BrowserNotStartedError, NavigationError

BrowserType = Literal["chromium", "firefox", "webkit"]
LoadState = Literal["load", "domcontentloaded", "networkidle"]


class SimpleBrowser:
    """Browser manager using Playwright with a fresh context for every page."""

    def __init__(
        self,
        browser_type: BrowserType = "chromium",
        headless: bool = True,
        viewport_width: int = 1280,
        viewport_height: int = 720,
        base_url: Optional[str] = None,
        slow_mo: int = 0,
        logger: Optional[logging.Logger] = None,
    ):
        self.browser_type = browser_type
        self.headless = headless
        self.viewport_width = viewport_width
        self.viewport_height = viewport_height
        self.base_url = base_url
        self.slow_mo = slow_mo
        self.logger = logger or logging.getLogger("browser")

        self._playwright: Optional[Playwright] = None
        self.browser: Optional[Browser] = None

    def _ensure_started(self) -> None:
        """Raise if browser not started."""
        if self.browser is None:
            raise BrowserNotStartedError()

    async def start(self) -> None:
        """Start the browser with specified engine."""
        self._playwright = await async_playwright().start()

        browser_launcher = getattr(self._playwright, self.browser_type)
        launch_options: dict[str, Any] = {"headless": self.headless}
        if self.slow_mo > 0:
            launch_options["slow_mo"] = self.slow_mo

        self.browser = await browser_launcher.launch(**launch_options)
        self.logger.info(f"Browser started: {self.browser_type} (headless={self.headless})")

    async def close(self) -> None:
        """Close the browser and clean up resources."""
        if self.browser:
            await self.browser.close()
            self.browser = None
        if self._playwright:
            await self._playwright.stop()
            self._playwright = None
        self.logger.info("Browser closed")

    @asynccontextmanager
    async def isolated_page(self) -> AsyncIterator[Page]:
        """Yield a page in its own browser context; both are closed afterwards."""
        self._ensure_started()
        context_options: dict[str, Any] = {
            "viewport": {"width": self.viewport_width, "height": self.viewport_height},
        }
        if self.base_url:
            context_options["base_url"] = self.base_url
        context = await self.browser.new_context(**context_options)
        try:
            page = await context.new_page()
            page.on("console", self._log_console)
            yield page
        finally:
            await context.close()

    def _log_console(self, msg: Any) -> None:
        """Forward page console errors to the log."""
        if msg.type == "error":
            self.logger.debug(f"Console error: {msg.text}")


async def goto(
    page: Page,
    url: str,
    wait_until: Literal["load", "domcontentloaded", "networkidle", "commit"] = "load",
    timeout: float = 30000,
) -> None:
    """Navigate to a URL, wrapping Playwright failures in NavigationError."""
    try:
        await page.goto(url, wait_until=wait_until, timeout=timeout)
    except PlaywrightTimeout as e:
        raise NavigationError(f"Navigation timed out: {url}", url=url, timeout=timeout) from e
    except Exception as e:
        raise NavigationError(f"Navigation failed: {e}", url=url) from e


async def wait_for_load_state(
    page: Page,
    state: LoadState = "networkidle",
    timeout: float = 30000,
) -> None:
    """Wait for page to reach specified load state."""
    await page.wait_for_load_state(state, timeout=timeout)
