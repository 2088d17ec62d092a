"""
Browser session lifecycle for a crawl run.

Example:
    >>> async with BrowserSession(config.browser) as page:
    ...     await page.goto(config.crawler.start_url)
    ...     document = await CatalogCrawler(page, config.crawler).run()
"""

from __future__ import annotations

from typing import Optional, TYPE_CHECKING

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright

from facetcrawl.infrastructure.browser.playwright_page import PlaywrightPage
from facetcrawl.utils.config import BrowserConfig
from facetcrawl.utils.exceptions import BrowserLaunchError
from facetcrawl.utils.logger import get_logger

if TYPE_CHECKING:
    from playwright.async_api import Browser, BrowserContext, Page, Playwright

logger = get_logger(__name__)


class BrowserSession:
    """
    One Chromium browser, context and page for the lifetime of a crawl.

    Attributes:
        config: Browser settings (headless flag, timeout, user agent).
        page: Page adapter, available while the session is active.
    """

    def __init__(self, config: Optional[BrowserConfig] = None):
        self.config = config or BrowserConfig()
        self.page: Optional[PlaywrightPage] = None

        self._playwright: Optional["Playwright"] = None
        self._browser: Optional["Browser"] = None
        self._context: Optional["BrowserContext"] = None
        self._page: Optional["Page"] = None
        self._session_active = False

    # =========================================
    # Context Manager
    # =========================================

    async def __aenter__(self) -> PlaywrightPage:
        return await self.start()

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    # =========================================
    # Session Management
    # =========================================

    async def start(self) -> PlaywrightPage:
        """
        Launch Chromium and open a page.

        Returns:
            The page adapter for the new session.

        Raises:
            BrowserLaunchError: If Playwright cannot start the browser.
        """
        if self._session_active:
            logger.warning("Session already active")
            return self.page

        logger.info("Starting browser session...")

        try:
            self._playwright = await async_playwright().start()
            self._browser = await self._playwright.chromium.launch(
                headless=self.config.headless,
                args=[
                    "--disable-blink-features=AutomationControlled",
                    "--disable-dev-shm-usage",
                ],
            )

            context_options = {
                "viewport": {
                    "width": self.config.viewport_width,
                    "height": self.config.viewport_height,
                },
            }
            if self.config.user_agent:
                context_options["user_agent"] = self.config.user_agent
            self._context = await self._browser.new_context(**context_options)

            self._page = await self._context.new_page()
            self._page.set_default_timeout(self.config.timeout_seconds * 1000)
        except PlaywrightError as e:
            await self._release()
            raise BrowserLaunchError(
                f"Could not start Chromium: {e.message}",
                context={"headless": self.config.headless},
            ) from e

        self.page = PlaywrightPage(self._page)
        self._session_active = True

        logger.info(f"Browser session started (headless={self.config.headless})")
        return self.page

    async def close(self) -> None:
        """Close page, context and browser, then stop Playwright."""
        if not self._session_active:
            return

        logger.info("Closing browser session...")
        await self._release()
        logger.info("Browser session closed")

    async def _release(self) -> None:
        try:
            if self._page:
                await self._page.close()
            if self._context:
                await self._context.close()
            if self._browser:
                await self._browser.close()
        finally:
            if self._playwright:
                await self._playwright.stop()
            self._page = None
            self._context = None
            self._browser = None
            self._playwright = None
            self.page = None
            self._session_active = False
