"""
Faceted pagination crawl driver.

Composes the facet cycle and the pagination walk into a single control
loop over one browser page:

- discover the facet options (the pre-checked one is crawled first)
- for the active facet, collect items and chip tags page by page
- when pagination is exhausted, advance the facet or stop
- aggregate every batch into one output document at the end

Example:
    >>> crawler = CatalogCrawler(page, config.crawler)
    >>> document = await crawler.run()
    >>> print(document.summary.total_products)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from tqdm import tqdm

from facetcrawl.core.aggregation import AggregationPipeline
from facetcrawl.core.facet_cycler import FacetCycler
from facetcrawl.core.item_collector import ItemCollector
from facetcrawl.core.page_walker import PageWalker, PaginationState
from facetcrawl.core.selectors import DEFAULT_SELECTORS, CatalogSelectors
from facetcrawl.core.tag_extractor import TagExtractor, format_tags
from facetcrawl.domain.entities.facet import FacetTransition
from facetcrawl.domain.entities.product import Item, OutputDocument, RawBatch
from facetcrawl.domain.interfaces.page_query import PageQuery
from facetcrawl.utils.config import CrawlerConfig
from facetcrawl.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class CrawlStats:
    """
    Statistics for a crawl run.

    Tracks facets and pages visited and raw items collected.
    """
    types_scraped: int = 0
    pages_visited: int = 0
    items_collected: int = 0
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None

    def start(self) -> None:
        """Mark the start of the run."""
        self.start_time = datetime.now()

    def stop(self) -> None:
        """Mark the end of the run."""
        self.end_time = datetime.now()

    @property
    def duration_seconds(self) -> float:
        if not self.start_time:
            return 0.0
        end = self.end_time or datetime.now()
        return (end - self.start_time).total_seconds()

    def __str__(self) -> str:
        return (
            f"CrawlStats(types={self.types_scraped}, "
            f"pages={self.pages_visited}, "
            f"items={self.items_collected}, "
            f"duration={self.duration_seconds:.1f}s)"
        )


@dataclass
class CrawlResult:
    """Raw outcome of a crawl, before aggregation."""

    batches: List[RawBatch] = field(default_factory=list)
    stats: CrawlStats = field(default_factory=CrawlStats)

    @property
    def types_scraped(self) -> int:
        return self.stats.types_scraped


class CatalogCrawler:
    """
    Crawls every page of every facet value of a catalog listing.

    The page must already show the start URL; session lifecycle is
    handled by the caller.

    Attributes:
        page: Page the crawl drives.
        settings: Crawl limits and timings.
        stats: Statistics of the last run.
    """

    def __init__(
        self,
        page: PageQuery,
        settings: Optional[CrawlerConfig] = None,
        selectors: Optional[CatalogSelectors] = None,
        show_progress: bool = False,
    ):
        self.page = page
        self.settings = settings or CrawlerConfig()
        self.selectors = selectors or DEFAULT_SELECTORS
        self.show_progress = show_progress

        self.collector = ItemCollector(
            base_url=self.settings.base_url,
            scroll_steps=self.settings.scroll_steps,
            scroll_delay_ms=self.settings.scroll_delay_ms,
            container_timeout_ms=self.settings.container_timeout_ms,
            selectors=self.selectors,
        )
        self.tag_extractor = TagExtractor(selectors=self.selectors)
        self.walker = PageWalker(
            navigation_timeout_ms=self.settings.navigation_timeout_ms,
            selectors=self.selectors,
        )
        self.cycler = FacetCycler(
            toggle_delay_ms=self.settings.toggle_delay_ms,
            navigation_timeout_ms=self.settings.navigation_timeout_ms,
            selectors=self.selectors,
        )
        self.pipeline = AggregationPipeline(chunk_size=self.settings.chunk_size)
        self.stats = CrawlStats()

    async def collect_page(self, facet_label: str, page_number: int) -> RawBatch:
        """Collect the current page's items tagged with the applied chips."""
        logger.info(f'Scraping Type "{facet_label}" - page {page_number}...')

        urls = await self.collector.collect(self.page)
        tags = format_tags(await self.tag_extractor.extract(self.page))

        return RawBatch(
            facet_label=facet_label,
            page_number=page_number,
            items=[Item(url=url, tags=tags) for url in urls],
        )

    async def crawl_facet(self, transition: FacetTransition) -> List[RawBatch]:
        """Walk every result page of the active facet value."""
        batches: List[RawBatch] = []
        state = PaginationState()

        while not state.exhausted:
            batch = await self.collect_page(transition.current_label, state.page_number)
            batches.append(batch)
            self.stats.pages_visited += 1
            self.stats.items_collected += len(batch)

            state = await self.walker.step(self.page, state, self.settings.max_pages_per_type)

        logger.info(
            f'Type "{transition.current_label}" done: {len(batches)} pages, '
            f"{sum(len(b) for b in batches)} items"
        )
        return batches

    async def crawl(self) -> CrawlResult:
        """
        Run the facet and pagination loops and return the raw batches.

        Stops after the facet whose transition reports ``has_next=False``,
        or once ``max_types`` facet values have been crawled.

        Raises:
            CrawlerError: Any structural, state or timeout failure aborts the run.
        """
        self.stats = CrawlStats()
        self.stats.start()
        result = CrawlResult(stats=self.stats)

        transition = await self.cycler.discover(self.page)
        total_types = min(len(self.cycler.options) - self.cycler.state.index, self.settings.max_types)

        with tqdm(total=total_types, desc="Types", unit="type", disable=not self.show_progress) as progress:
            while True:
                result.batches.extend(await self.crawl_facet(transition))
                self.stats.types_scraped += 1
                progress.update(1)

                if not transition.has_next:
                    break
                if self.stats.types_scraped >= self.settings.max_types:
                    logger.info(f"Type cap of {self.settings.max_types} reached")
                    break

                transition = await self.cycler.advance(self.page)

        self.stats.stop()
        logger.info(f"Crawl finished. {self.stats}")
        return result

    async def run(self) -> OutputDocument:
        """Crawl the catalog and aggregate the batches into one document."""
        result = await self.crawl()
        return self.pipeline.build(result.batches, types_scraped=result.types_scraped)
