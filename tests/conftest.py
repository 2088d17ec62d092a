"""Pytest fixtures and configuration for facetcrawl tests."""

import os
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Generator

# Keep test runs from writing logs/ into the working tree
os.environ.setdefault("FACETCRAWL_LOG_DIR", tempfile.mkdtemp(prefix="facetcrawl-logs-"))

import pytest
import yaml

from facetcrawl.domain.entities.product import Item, RawBatch
from facetcrawl.utils.config import AppConfig, CrawlerConfig, reset_config

from fakes import FakeCatalogPage, build_catalog


@pytest.fixture
def crawler_settings() -> CrawlerConfig:
    """Crawl settings with no settle delays."""
    return CrawlerConfig(
        chunk_size=5,
        max_types=10,
        scroll_steps=3,
        scroll_delay_ms=0,
        toggle_delay_ms=0,
        container_timeout_ms=100,
        navigation_timeout_ms=100,
    )


@pytest.fixture
def catalog() -> dict:
    """Three facets, two pages each, one product shared by every first page."""
    return build_catalog()


@pytest.fixture
def catalog_page(catalog) -> FakeCatalogPage:
    """Fake listing on the first facet's first page."""
    return FakeCatalogPage(catalog)


@pytest.fixture
def collected_at() -> datetime:
    return datetime(2024, 5, 1, 10, 22, 31)


@pytest.fixture
def overlapping_batches() -> list[RawBatch]:
    """Batches from two facets where the second repeats one URL."""
    base = "https://www.target.com/p"
    return [
        RawBatch("Tops", 1, [
            Item(url=f"{base}/a", tags="Tops"),
            Item(url=f"{base}/b", tags="Tops"),
        ]),
        RawBatch("Tops", 2, [
            Item(url=f"{base}/c", tags="Tops"),
        ]),
        RawBatch("Bottoms", 1, [
            Item(url=f"{base}/b", tags="Bottoms"),
            Item(url=f"{base}/d", tags="Bottoms"),
        ]),
    ]


@pytest.fixture
def config_file(tmp_path) -> Generator[Path, None, None]:
    """Write a small YAML config and yield its path."""
    path = tmp_path / "config.yaml"
    data = {
        "crawler": {"chunk_size": 7, "max_types": 2},
        "browser": {"headless": False},
        "output": {"directory": str(tmp_path / "out")},
        "show_progress": False,
        "log_level": "debug",
    }
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    yield path


@pytest.fixture
def app_config(tmp_path) -> AppConfig:
    """Default configuration writing into a temporary directory."""
    config = AppConfig()
    config.output.directory = str(tmp_path / "out")
    config.show_progress = False
    return config


@pytest.fixture(autouse=True)
def reset_singletons(monkeypatch):
    """Reset cached configuration and env overrides between tests."""
    monkeypatch.delenv("FACETCRAWL_HEADLESS", raising=False)
    monkeypatch.delenv("FACETCRAWL_CONFIG", raising=False)
    reset_config()
    yield
    reset_config()
