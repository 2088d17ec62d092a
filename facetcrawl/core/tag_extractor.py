"""
Applied-filter chip extraction.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from facetcrawl.core.selectors import DEFAULT_SELECTORS, CatalogSelectors
from facetcrawl.domain.interfaces.page_query import PageQuery
from facetcrawl.utils.logger import get_logger

logger = get_logger(__name__)

TAG_SEPARATOR = ", "


def format_tags(labels: Iterable[str]) -> str:
    """Sort chip labels and join them into the item tag string."""
    return TAG_SEPARATOR.join(sorted(label for label in labels if label))


class TagExtractor:
    """Reads the labels of the currently applied filter chips."""

    def __init__(self, selectors: Optional[CatalogSelectors] = None):
        self.selectors = selectors or DEFAULT_SELECTORS

    async def extract(self, page: PageQuery) -> List[str]:
        """
        Return chip labels in DOM order, skipping the "clear all" chip.

        A missing chip bar or chip list means nothing is applied and
        yields an empty list.
        """
        bar = await page.query(self.selectors.applied_filter_bar)
        if bar is None:
            logger.debug("No applied-filter bar on page")
            return []

        chip_list = await bar.query(self.selectors.chip_list)
        if chip_list is None:
            return []

        labels: List[str] = []
        for chip in await chip_list.query_all(self.selectors.chip_item):
            if await chip.get_attribute("data-test") == self.selectors.clear_all_marker:
                continue
            label = await chip.query(self.selectors.chip_label)
            labels.append((await label.inner_text()).strip() if label else "")

        return labels
