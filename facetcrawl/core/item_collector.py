"""
Product link collection from a listing page.

Scrolls the page in fixed increments so lazy-loaded cards render, then
reads every product link inside the product grid.

Example:
    >>> collector = ItemCollector(base_url="https://www.target.com")
    >>> urls = await collector.collect(page)
"""

from __future__ import annotations

from typing import List, Optional
from urllib.parse import urljoin, urlsplit, urlunsplit

from facetcrawl.core.selectors import DEFAULT_SELECTORS, CatalogSelectors
from facetcrawl.domain.interfaces.page_query import PageQuery
from facetcrawl.utils.exceptions import ElementNotFoundError, WaitTimeoutError
from facetcrawl.utils.logger import get_logger

logger = get_logger(__name__)

SCROLL_SCRIPT = """([step, steps]) => {
    window.scrollTo({
        top: document.body.scrollHeight * (step / steps),
        behavior: "smooth",
    });
}"""


def normalize_item_url(href: str, base_url: str) -> str:
    """
    Resolve a product href to an absolute URL without query or fragment.

    Example:
        >>> normalize_item_url("/p/some-item?ref=x#frag", "https://www.target.com")
        'https://www.target.com/p/some-item'
    """
    absolute = urljoin(base_url, href.strip())
    parts = urlsplit(absolute)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, "", ""))


class ItemCollector:
    """
    Collects unique product URLs from the current listing page.

    Attributes:
        base_url: Base URL relative hrefs are resolved against.
        scroll_steps: Number of incremental scroll commands.
        scroll_delay_ms: Settle delay after each scroll command.
        container_timeout_ms: Wait bound for the product grid.
    """

    def __init__(
        self,
        base_url: str,
        scroll_steps: int = 20,
        scroll_delay_ms: int = 700,
        container_timeout_ms: int = 10000,
        selectors: Optional[CatalogSelectors] = None,
    ):
        self.base_url = base_url
        self.scroll_steps = scroll_steps
        self.scroll_delay_ms = scroll_delay_ms
        self.container_timeout_ms = container_timeout_ms
        self.selectors = selectors or DEFAULT_SELECTORS

    async def scroll_for_lazy_loading(self, page: PageQuery) -> None:
        """Scroll down in ``scroll_steps`` increments, settling after each."""
        logger.debug(f"Scrolling {self.scroll_steps} steps for lazy loading...")

        for step in range(1, self.scroll_steps + 1):
            await page.evaluate(SCROLL_SCRIPT, [step, self.scroll_steps])
            await page.wait_for_timeout(self.scroll_delay_ms)

    async def collect(self, page: PageQuery) -> List[str]:
        """
        Scroll the page and return its product URLs.

        Returns:
            Normalized URLs in first-occurrence DOM order, without duplicates.

        Raises:
            ElementNotFoundError: If the product grid never renders.
        """
        await self.scroll_for_lazy_loading(page)

        try:
            container = await page.wait_for_selector(
                self.selectors.product_list,
                timeout_ms=self.container_timeout_ms,
            )
        except WaitTimeoutError as e:
            raise ElementNotFoundError(
                "Product list container did not render",
                selector=self.selectors.product_list,
                context={"url": page.url, "timeout_ms": self.container_timeout_ms},
            ) from e

        anchors = await container.query_all(self.selectors.product_link)

        urls: List[str] = []
        seen = set()
        for anchor in anchors:
            href = await anchor.get_attribute("href")
            if not href:
                continue
            url = normalize_item_url(href, self.base_url)
            if url in seen:
                continue
            seen.add(url)
            urls.append(url)

        logger.debug(f"Collected {len(urls)} unique product links from {len(anchors)} anchors")
        return urls
