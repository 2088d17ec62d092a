"""Unit tests for configuration loading and validation."""

from pathlib import Path

import pytest
import yaml

from facetcrawl.utils.config import AppConfig, CrawlerConfig, get_config, load_config
from facetcrawl.utils.exceptions import ConfigFileNotFoundError, ConfigurationError


class TestCrawlerConfig:
    """Test crawl settings validation."""

    def test_defaults(self):
        """Test defaults match the reference crawl."""
        config = CrawlerConfig()
        assert config.chunk_size == 5
        assert config.max_types == 3
        assert config.max_pages_per_type is None
        assert config.base_url == "https://www.target.com"

    def test_chunk_size_must_be_positive(self):
        with pytest.raises(ValueError):
            CrawlerConfig(chunk_size=0)

    def test_url_scheme_required(self):
        """Test start URL must be absolute."""
        with pytest.raises(ValueError, match="http"):
            CrawlerConfig(start_url="www.target.com/c/kids")


class TestAppConfig:
    """Test application configuration."""

    def test_load_from_yaml(self, config_file):
        """Test loading configuration from YAML file."""
        config = load_config(config_file)

        assert config.crawler.chunk_size == 7
        assert config.crawler.max_types == 2
        assert config.browser.headless is False
        assert config.show_progress is False
        assert config.log_level == "DEBUG"
        # Unset keys keep their defaults
        assert config.crawler.scroll_steps == 20

    def test_missing_file(self, tmp_path):
        """Test a missing file names the example config."""
        with pytest.raises(ConfigFileNotFoundError, match="config.example.yaml"):
            load_config(tmp_path / "config.yaml")

    def test_invalid_values(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump({"crawler": {"max_types": 0}}), encoding="utf-8")

        with pytest.raises(ConfigurationError):
            load_config(path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("crawler: [unclosed", encoding="utf-8")

        with pytest.raises(ConfigurationError):
            load_config(path)

    def test_invalid_log_level(self):
        with pytest.raises(ValueError, match="Invalid log level"):
            AppConfig(log_level="verbose")

    def test_empty_file_uses_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("", encoding="utf-8")

        assert load_config(path) == AppConfig()

    def test_path_from_environment(self, config_file, monkeypatch):
        monkeypatch.setenv("FACETCRAWL_CONFIG", str(config_file))

        assert load_config().crawler.chunk_size == 7

    def test_shipped_example_config_is_valid(self):
        example = Path(__file__).resolve().parents[2] / "config" / "config.example.yaml"

        config = load_config(example)

        assert config.crawler.max_types == 3

    def test_shipped_local_config_is_valid(self):
        local = Path(__file__).resolve().parents[2] / "config" / "config.yaml"

        assert load_config(local).crawler == CrawlerConfig()


class TestHeadlessOverride:
    """Test the FACETCRAWL_HEADLESS environment flag."""

    @pytest.mark.parametrize("value,expected", [
        ("1", True),
        ("true", True),
        ("YES", True),
        ("0", False),
        ("off", False),
    ])
    def test_flag_values(self, config_file, monkeypatch, value, expected):
        monkeypatch.setenv("FACETCRAWL_HEADLESS", value)

        assert load_config(config_file).browser.headless is expected

    def test_invalid_flag(self, config_file, monkeypatch):
        monkeypatch.setenv("FACETCRAWL_HEADLESS", "maybe")

        with pytest.raises(ConfigurationError, match="FACETCRAWL_HEADLESS"):
            load_config(config_file)


class TestGetConfig:
    """Test the configuration singleton."""

    def test_cached_instance(self, config_file):
        first = get_config(config_file)
        second = get_config()

        assert first is second

    def test_reload(self, config_file):
        first = get_config(config_file)
        second = get_config(config_file, reload=True)

        assert first is not second
        assert first == second
