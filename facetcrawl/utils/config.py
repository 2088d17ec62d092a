"""Configuration management system using Pydantic v2 and YAML.

This module provides type-safe configuration loading with validation
for the facetcrawl application.
"""

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .exceptions import ConfigFileNotFoundError, ConfigurationError


CONFIG_ENV_VAR = "FACETCRAWL_CONFIG"
HEADLESS_ENV_VAR = "FACETCRAWL_HEADLESS"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


class CrawlerConfig(BaseModel):
    """Configuration for the faceted catalog crawl."""

    start_url: str = Field(
        default="https://www.target.com/c/kids/-/N-xcoz4Z5zlb2Znq2ic?moveTo=product-list-grid",
        description="Catalog listing page the crawl starts from",
    )
    base_url: str = Field(default="https://www.target.com", description="Base URL for relative product links")
    chunk_size: int = Field(default=5, ge=1, description="Items per output chunk")
    max_types: int = Field(default=3, ge=1, description="Maximum number of facet values to crawl")
    max_pages_per_type: Optional[int] = Field(default=None, ge=1, description="Optional page cap per facet value")
    scroll_steps: int = Field(default=20, ge=1, description="Incremental scroll steps for lazy loading")
    scroll_delay_ms: int = Field(default=700, ge=0, description="Settle delay after each scroll step")
    toggle_delay_ms: int = Field(default=250, ge=0, description="Settle delay after each checkbox toggle")
    container_timeout_ms: int = Field(default=10000, ge=0, description="Wait bound for the product list")
    navigation_timeout_ms: int = Field(default=30000, ge=0, description="Wait bound for navigations and URL changes")

    @field_validator('start_url', 'base_url')
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Ensure URLs are absolute http(s) URLs."""
        if not v.startswith(('http://', 'https://')):
            raise ValueError("URL must start with http:// or https://")
        return v


class BrowserConfig(BaseModel):
    """Configuration for the Playwright browser session."""

    headless: bool = Field(default=True, description="Run browser in headless mode")
    timeout_seconds: int = Field(default=30, ge=1, description="Default Playwright action timeout in seconds")
    user_agent: Optional[str] = Field(default=None, description="Custom user agent string")
    viewport_width: int = Field(default=1920, ge=320)
    viewport_height: int = Field(default=1080, ge=240)


class OutputConfig(BaseModel):
    """Configuration for the JSON output document."""

    directory: str = Field(default="URL_scraper_output", description="Directory for output documents")
    filename_prefix: str = Field(default="target_urls", description="Prefix for generated filenames")


class AppConfig(BaseModel):
    """Root configuration model containing all sub-configurations."""

    crawler: CrawlerConfig = Field(default_factory=CrawlerConfig)
    browser: BrowserConfig = Field(default_factory=BrowserConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    show_progress: bool = Field(default=True, description="Show a progress bar over facet values")
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level. Choose from: {valid_levels}")
        return v_upper


# Singleton pattern for configuration
_config: Optional[AppConfig] = None


def _apply_env_overrides(config: AppConfig) -> AppConfig:
    """Apply environment flag overrides on top of the file configuration."""
    headless = os.environ.get(HEADLESS_ENV_VAR)
    if headless is None:
        return config

    value = headless.strip().lower()
    if value in _TRUTHY:
        config.browser.headless = True
    elif value in _FALSY:
        config.browser.headless = False
    else:
        raise ConfigurationError(
            f"{HEADLESS_ENV_VAR} must be a boolean flag",
            context={"value": headless},
        )
    return config


def load_config(config_path: Optional[Path | str] = None) -> AppConfig:
    """Load and validate configuration from YAML file.

    Args:
        config_path: Path to configuration file. Defaults to the
                    FACETCRAWL_CONFIG env var, then config/config.yaml
                    relative to the working directory.

    Returns:
        Validated AppConfig instance

    Raises:
        ConfigFileNotFoundError: If config file doesn't exist
        ConfigurationError: If configuration is invalid
    """
    if config_path is None:
        env_config_path = os.environ.get(CONFIG_ENV_VAR)
        if env_config_path:
            config_path = Path(env_config_path)
        else:
            config_path = Path("config") / "config.yaml"
    else:
        config_path = Path(config_path)

    if not config_path.exists():
        example_path = config_path.parent / "config.example.yaml"
        raise ConfigFileNotFoundError(
            f"Configuration file not found: {config_path}. "
            f"Copy {example_path} to {config_path} or set {CONFIG_ENV_VAR}.",
            path=str(config_path),
        )

    with open(config_path, 'r', encoding='utf-8') as f:
        try:
            config_dict = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Could not parse {config_path}: {e}",
                context={"path": str(config_path)},
            ) from e

    try:
        config = AppConfig.model_validate(config_dict)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid configuration in {config_path}: {e}",
            context={"path": str(config_path)},
        ) from e

    return _apply_env_overrides(config)


def get_config(config_path: Optional[Path | str] = None, reload: bool = False) -> AppConfig:
    """Get configuration instance (singleton pattern).

    Args:
        config_path: Path to configuration file (only used on first call or if reload=True)
        reload: Force reload of configuration

    Returns:
        Cached or newly loaded AppConfig instance
    """
    global _config

    if _config is None or reload:
        _config = load_config(config_path)

    return _config


def reset_config() -> None:
    """Reset cached configuration (useful for testing)."""
    global _config
    _config = None
