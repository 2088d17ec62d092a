"""
Pagination through one facet's result set.

``PaginationState`` plus ``advance_pagination`` form the pagination state
machine; ``PageWalker`` performs the DOM side of a step.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from facetcrawl.core.selectors import DEFAULT_SELECTORS, CatalogSelectors
from facetcrawl.domain.interfaces.page_query import PageQuery
from facetcrawl.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class PaginationState:
    """Position inside one facet's result pages (1-based)."""

    page_number: int = 1
    exhausted: bool = False


def advance_pagination(state: PaginationState, advanced: bool) -> PaginationState:
    """
    Compute the pagination state after a next-page attempt.

    Args:
        state: State before the attempt.
        advanced: Whether the walker reached a further page.
    """
    if state.exhausted:
        return state
    if not advanced:
        return replace(state, exhausted=True)
    return replace(state, page_number=state.page_number + 1)


def pagination_allows_next(state: PaginationState, max_pages: Optional[int] = None) -> bool:
    """Whether another next-page attempt is permitted from ``state``."""
    if state.exhausted:
        return False
    return max_pages is None or state.page_number < max_pages


class PageWalker:
    """Moves the listing to its next result page when there is one."""

    def __init__(
        self,
        navigation_timeout_ms: int = 30000,
        selectors: Optional[CatalogSelectors] = None,
    ):
        self.navigation_timeout_ms = navigation_timeout_ms
        self.selectors = selectors or DEFAULT_SELECTORS

    async def go_next(self, page: PageQuery) -> bool:
        """
        Click "next" and wait for the new page.

        Returns:
            True if the page advanced, False when this is the last page.
            A missing pagination control is the normal single-page case.

        Raises:
            WaitTimeoutError: If the navigation never settles.
        """
        pagination = await page.query(self.selectors.pagination)
        if pagination is None:
            logger.debug("No pagination control, single page")
            return False

        next_button = await pagination.query(self.selectors.next_button)
        if next_button is None:
            return False

        if await next_button.get_attribute("disabled") is not None:
            logger.debug("Next button disabled, last page")
            return False

        await page.click_and_wait_for_navigation(next_button, timeout_ms=self.navigation_timeout_ms)
        return True

    async def step(
        self,
        page: PageQuery,
        state: PaginationState,
        max_pages: Optional[int] = None,
    ) -> PaginationState:
        """Attempt one page advance from ``state`` and return the new state."""
        if not pagination_allows_next(state, max_pages):
            logger.info(f"Page cap of {max_pages} reached")
            return replace(state, exhausted=True)

        advanced = await self.go_next(page)
        return advance_pagination(state, advanced)
