"""
Playwright implementation of the page-query capability set.

Every Playwright call goes through :func:`translate_errors`: timeouts become
:class:`WaitTimeoutError` and any other Playwright error becomes
:class:`ElementActionError`, so the crawl core never depends on Playwright
exception types.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, List, Optional

from playwright.async_api import ElementHandle, Page
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from facetcrawl.domain.interfaces.page_query import PageElement, PageQuery
from facetcrawl.utils.exceptions import ElementActionError, NavigationError, WaitTimeoutError
from facetcrawl.utils.logger import get_logger

logger = get_logger(__name__)

URL_CHANGED_SCRIPT = "previous => window.location.href !== previous"


@contextmanager
def translate_errors(
    action: str,
    selector: Optional[str] = None,
    url: Optional[str] = None,
    timeout_ms: Optional[int] = None,
) -> Iterator[None]:
    """Map Playwright exceptions raised inside the block to crawler errors."""
    try:
        yield
    except PlaywrightTimeoutError as e:
        raise WaitTimeoutError(
            f"Timed out during {action}",
            selector=selector,
            url=url,
            timeout_ms=timeout_ms,
        ) from e
    except PlaywrightError as e:
        raise ElementActionError(
            f"{action} failed: {e.message}",
            action=action,
            selector=selector,
            url=url,
        ) from e


class PlaywrightPageElement(PageElement):
    """PageElement backed by a Playwright ElementHandle."""

    def __init__(self, handle: ElementHandle):
        self.handle = handle

    async def query(self, selector: str) -> Optional[PageElement]:
        with translate_errors("query", selector=selector):
            handle = await self.handle.query_selector(selector)
        return PlaywrightPageElement(handle) if handle else None

    async def query_all(self, selector: str) -> List[PageElement]:
        with translate_errors("query_all", selector=selector):
            handles = await self.handle.query_selector_all(selector)
        return [PlaywrightPageElement(h) for h in handles]

    async def click(self) -> None:
        with translate_errors("click"):
            await self.handle.click()

    async def activate(self) -> None:
        with translate_errors("activate"):
            await self.handle.evaluate("el => el.click()")

    async def get_attribute(self, name: str) -> Optional[str]:
        with translate_errors(f"get_attribute({name})"):
            return await self.handle.get_attribute(name)

    async def inner_text(self) -> str:
        with translate_errors("inner_text"):
            return await self.handle.inner_text()

    async def is_checked(self) -> bool:
        with translate_errors("is_checked"):
            return await self.handle.is_checked()


class PlaywrightPage(PageQuery):
    """
    PageQuery backed by a Playwright Page.

    Example:
        >>> page = PlaywrightPage(await context.new_page())
        >>> await page.goto("https://www.target.com/c/kids/-/N-xcoz4")
    """

    def __init__(self, page: Page):
        self._page = page

    @property
    def url(self) -> str:
        return self._page.url

    async def goto(self, url: str) -> None:
        logger.info(f"Navigating to: {url}")
        try:
            response = await self._page.goto(url, wait_until="domcontentloaded")
        except PlaywrightTimeoutError as e:
            raise WaitTimeoutError("Timed out opening page", url=url) from e
        except PlaywrightError as e:
            raise NavigationError(f"Navigation failed: {e.message}", url=url) from e

        if response is not None and response.status >= 400:
            raise NavigationError(
                f"Navigation failed: HTTP {response.status}",
                url=url,
                status_code=response.status,
            )

    async def evaluate(self, script: str, arg: Any = None) -> Any:
        with translate_errors("evaluate", url=self._page.url):
            return await self._page.evaluate(script, arg)

    async def query(self, selector: str) -> Optional[PageElement]:
        with translate_errors("query", selector=selector, url=self._page.url):
            handle = await self._page.query_selector(selector)
        return PlaywrightPageElement(handle) if handle else None

    async def query_all(self, selector: str) -> List[PageElement]:
        with translate_errors("query_all", selector=selector, url=self._page.url):
            handles = await self._page.query_selector_all(selector)
        return [PlaywrightPageElement(h) for h in handles]

    async def wait_for_selector(self, selector: str, timeout_ms: int) -> PageElement:
        with translate_errors("wait_for_selector", selector=selector, timeout_ms=timeout_ms):
            handle = await self._page.wait_for_selector(selector, timeout=timeout_ms)

        if handle is None:
            raise WaitTimeoutError("Selector resolved to no element", selector=selector, timeout_ms=timeout_ms)
        return PlaywrightPageElement(handle)

    async def wait_for_timeout(self, timeout_ms: int) -> None:
        with translate_errors("wait_for_timeout"):
            await self._page.wait_for_timeout(timeout_ms)

    async def wait_for_url_change(self, previous_url: str, timeout_ms: int) -> None:
        with translate_errors("wait_for_url_change", url=previous_url, timeout_ms=timeout_ms):
            await self._page.wait_for_function(URL_CHANGED_SCRIPT, arg=previous_url, timeout=timeout_ms)

    async def click_and_wait_for_navigation(self, element: PageElement, timeout_ms: int) -> None:
        with translate_errors("click_and_wait_for_navigation", url=self._page.url, timeout_ms=timeout_ms):
            async with self._page.expect_navigation(wait_until="domcontentloaded", timeout=timeout_ms):
                await element.click()
