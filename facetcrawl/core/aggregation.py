"""Aggregation of per-page batches into the chunked output document.

Batches are consumed once, at the end of a crawl, in visitation order.
Every call starts from an empty seen-set, so the same batches always give
the same document apart from ``collectedAt``.
"""

from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from facetcrawl.domain.entities.product import Item, OutputDocument, RawBatch, RunSummary
from facetcrawl.utils.logger import get_logger

logger = get_logger(__name__)

CHUNK_KEY_PREFIX = "array"


class AggregationPipeline:
    """Deduplicates, chunks and summarizes crawl batches."""

    def __init__(self, chunk_size: int = 5):
        """Initialize the pipeline.

        Args:
            chunk_size: Items per output chunk (>= 1)
        """
        if chunk_size < 1:
            raise ValueError(f"chunk_size must be >= 1, got {chunk_size}")
        self.chunk_size = chunk_size

    @staticmethod
    def deduplicate(batches: Iterable[RawBatch]) -> List[Item]:
        """Keep the first occurrence of each URL, tags included.

        Args:
            batches: Batches in the order facets and pages were visited

        Returns:
            Items in first-seen order with unique URLs
        """
        seen = set()
        unique: List[Item] = []
        total = 0

        for batch in batches:
            for item in batch.items:
                total += 1
                if item.url in seen:
                    continue
                seen.add(item.url)
                unique.append(item)

        logger.debug(f"Deduplicated {total} items to {len(unique)}")
        return unique

    def chunk(self, items: List[Item]) -> Dict[str, List[Item]]:
        """Split items into contiguous ``array1``, ``array2``, ... chunks."""
        return {
            f"{CHUNK_KEY_PREFIX}{start // self.chunk_size + 1}": items[start:start + self.chunk_size]
            for start in range(0, len(items), self.chunk_size)
        }

    def build(
        self,
        batches: Iterable[RawBatch],
        types_scraped: int,
        collected_at: Optional[datetime] = None,
        **extra_summary: Any,
    ) -> OutputDocument:
        """Produce the output document for a whole crawl.

        Args:
            batches: All batches of the crawl, in visitation order
            types_scraped: Number of facet values actually traversed
            collected_at: Collection timestamp (default: now)
            **extra_summary: Additional summary fields

        Returns:
            OutputDocument whose chunks concatenate to the deduplicated list
        """
        items = self.deduplicate(batches)
        summary = RunSummary(
            total_products=len(items),
            collected_at=collected_at or datetime.now(),
            types_scraped=types_scraped,
            **extra_summary,
        )
        document = OutputDocument(urls=self.chunk(items), summary=summary)

        logger.info(
            f"Aggregated {summary.total_products} unique products into "
            f"{len(document.urls)} chunks of up to {self.chunk_size}"
        )
        return document
