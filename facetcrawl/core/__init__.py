# Core Package
"""
Crawl engine: item collection, chip tags, pagination, facet cycling and
aggregation, composed by ``CatalogCrawler``.
"""

from .aggregation import AggregationPipeline
from .crawler import CatalogCrawler, CrawlResult, CrawlStats
from .facet_cycler import (
    FacetCycler,
    FacetCycleState,
    FacetPhase,
    advance_facets,
    discover_facets,
)
from .item_collector import ItemCollector, normalize_item_url
from .page_walker import PageWalker, PaginationState, advance_pagination
from .selectors import DEFAULT_SELECTORS, CatalogSelectors
from .tag_extractor import TagExtractor, format_tags

__all__ = [
    "AggregationPipeline",
    "CatalogCrawler",
    "CrawlResult",
    "CrawlStats",
    "FacetCycler",
    "FacetCycleState",
    "FacetPhase",
    "advance_facets",
    "discover_facets",
    "ItemCollector",
    "normalize_item_url",
    "PageWalker",
    "PaginationState",
    "advance_pagination",
    "CatalogSelectors",
    "DEFAULT_SELECTORS",
    "TagExtractor",
    "format_tags",
]
