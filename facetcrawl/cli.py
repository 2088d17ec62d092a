"""
Command line entry point for facetcrawl.

Crawls every page of every "Type" facet value of a catalog listing and
writes the deduplicated, chunked product list to a JSON file.

Usage:
    facetcrawl
    facetcrawl --url "https://www.target.com/c/kids/-/N-xcoz4Z5zlb2Znq2ic"
    facetcrawl --max-types 5 --chunk-size 10 --no-headless
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from facetcrawl.core.crawler import CatalogCrawler
from facetcrawl.domain.entities.product import OutputDocument
from facetcrawl.infrastructure.browser.session import BrowserSession
from facetcrawl.infrastructure.storage.json_store import JsonResultStore
from facetcrawl.utils.config import AppConfig, load_config
from facetcrawl.utils.exceptions import AppException, ConfigurationError
from facetcrawl.utils.logger import configure_logging, get_logger, log_exception, log_execution_time

logger = get_logger(__name__)


# ============================================
# Crawl
# ============================================

async def run_crawl(config: AppConfig) -> OutputDocument:
    """
    Open a browser on the start URL and crawl it.

    Args:
        config: Application configuration.

    Returns:
        The aggregated output document.
    """
    async with BrowserSession(config.browser) as page:
        await page.goto(config.crawler.start_url)

        crawler = CatalogCrawler(
            page,
            settings=config.crawler,
            show_progress=config.show_progress,
        )
        with log_execution_time(logger, "catalog crawl"):
            return await crawler.run()


def save_document(config: AppConfig, document: OutputDocument, filename: Optional[str] = None) -> Path:
    """Persist the document with the configured JSON store."""
    store = JsonResultStore(
        directory=config.output.directory,
        filename_prefix=config.output.filename_prefix,
    )
    return store.save(document, filename=filename)


# ============================================
# CLI Interface
# ============================================

def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="facetcrawl",
        description="Crawl a faceted, paginated product catalog into a chunked JSON document",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  facetcrawl
  facetcrawl --config config/config.yaml
  facetcrawl --max-types 5 --chunk-size 10 --no-headless
        """,
    )

    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to YAML config (default: $FACETCRAWL_CONFIG or config/config.yaml)",
    )
    parser.add_argument("--url", type=str, default=None, help="Catalog start URL")
    parser.add_argument("--chunk-size", type=int, default=None, help="Products per output chunk")
    parser.add_argument("--max-types", type=int, default=None, help="Maximum facet values to crawl")
    parser.add_argument("--max-pages", type=int, default=None, help="Maximum pages per facet value")

    headless = parser.add_mutually_exclusive_group()
    headless.add_argument("--headless", dest="headless", action="store_true", default=None,
                          help="Run the browser headless")
    headless.add_argument("--no-headless", dest="headless", action="store_false",
                          help="Run the browser in visible mode")

    parser.add_argument("--output-dir", type=str, default=None, help="Directory for the JSON document")
    parser.add_argument("--output", type=str, default=None, help="Output filename (inside the output dir)")
    parser.add_argument("--no-progress", action="store_true", help="Disable the progress bar")

    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> AppConfig:
    """Load the config file and apply command line overrides."""
    config = load_config(args.config)

    crawler_updates = {
        "start_url": args.url,
        "chunk_size": args.chunk_size,
        "max_types": args.max_types,
        "max_pages_per_type": args.max_pages,
    }
    crawler_updates = {k: v for k, v in crawler_updates.items() if v is not None}

    # Re-validate so overrides get the same checks as the file
    data = config.model_dump()
    data["crawler"].update(crawler_updates)
    if args.headless is not None:
        data["browser"]["headless"] = args.headless
    if args.output_dir:
        data["output"]["directory"] = args.output_dir
    if args.no_progress:
        data["show_progress"] = False

    try:
        return AppConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid command line override: {e}") from e


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    try:
        config = build_config(args)
        configure_logging(config.log_level)
        logger.info(
            f"Crawling {config.crawler.start_url} "
            f"(max_types={config.crawler.max_types}, chunk_size={config.crawler.chunk_size}, "
            f"headless={config.browser.headless})"
        )

        document = asyncio.run(run_crawl(config))
        path = save_document(config, document, filename=args.output)

    except KeyboardInterrupt:
        logger.warning("Crawl interrupted by user")
        return 1

    except AppException as e:
        log_exception(logger, "catalog crawl", e)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Saved {document.summary.total_products} unique products to: {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
