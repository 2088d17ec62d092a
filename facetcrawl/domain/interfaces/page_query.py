"""
Abstract page-query capability set used by the crawl components.

The crawl algorithms only talk to these interfaces, so they run the same
against a live Playwright page or an in-memory fake.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional


class PageElement(ABC):
    """
    A handle to one DOM element.

    Handles are short-lived: the catalog rebuilds its DOM on navigation,
    so callers re-query instead of keeping handles across page changes.
    """

    @abstractmethod
    async def query(self, selector: str) -> Optional["PageElement"]:
        """Return the first descendant matching ``selector``, or None."""
        pass

    @abstractmethod
    async def query_all(self, selector: str) -> List["PageElement"]:
        """Return all descendants matching ``selector`` in DOM order."""
        pass

    @abstractmethod
    async def click(self) -> None:
        """Click the element like a user would."""
        pass

    @abstractmethod
    async def activate(self) -> None:
        """Fire a DOM-level ``click()`` on the element, skipping actionability checks."""
        pass

    @abstractmethod
    async def get_attribute(self, name: str) -> Optional[str]:
        """Return the attribute value, or None when it is not set."""
        pass

    @abstractmethod
    async def inner_text(self) -> str:
        """Return the rendered text of the element."""
        pass

    @abstractmethod
    async def is_checked(self) -> bool:
        """Return the checked state of a checkbox element."""
        pass


class PageQuery(ABC):
    """
    Browser page capability set.

    Every wait is bounded; implementations raise
    :class:`~facetcrawl.utils.exceptions.WaitTimeoutError` when a bound
    is exceeded instead of returning silently.
    """

    @property
    @abstractmethod
    def url(self) -> str:
        """Current page URL."""
        pass

    @abstractmethod
    async def goto(self, url: str) -> None:
        """Navigate to ``url`` and wait for the DOM to be ready."""
        pass

    @abstractmethod
    async def evaluate(self, script: str, arg: Any = None) -> Any:
        """Run ``script`` in the page context and return its result."""
        pass

    @abstractmethod
    async def query(self, selector: str) -> Optional[PageElement]:
        """Return the first element matching ``selector`` without waiting."""
        pass

    @abstractmethod
    async def query_all(self, selector: str) -> List[PageElement]:
        """Return every element matching ``selector`` without waiting."""
        pass

    @abstractmethod
    async def wait_for_selector(self, selector: str, timeout_ms: int) -> PageElement:
        """Wait until ``selector`` matches an element and return it."""
        pass

    @abstractmethod
    async def wait_for_timeout(self, timeout_ms: int) -> None:
        """Sleep for a fixed settle delay."""
        pass

    @abstractmethod
    async def wait_for_url_change(self, previous_url: str, timeout_ms: int) -> None:
        """Wait until the page URL differs from ``previous_url``."""
        pass

    @abstractmethod
    async def click_and_wait_for_navigation(self, element: PageElement, timeout_ms: int) -> None:
        """Click ``element`` and wait for the navigation it triggers."""
        pass
