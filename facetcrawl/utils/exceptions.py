"""
Custom exception hierarchy for facetcrawl.

Provides a structured exception hierarchy for different error scenarios:
- AppException: Base for all application errors
- ConfigError: Configuration-related errors
- CrawlerError: Browser-driven crawl errors (always fatal for a run)
- StorageError: Persisting or loading output documents

Each exception includes:
- Descriptive message
- Optional error code for programmatic handling
- Optional context dictionary for debugging

Example:
    >>> from facetcrawl.utils.exceptions import ElementNotFoundError
    >>> raise ElementNotFoundError("Filter menu button not found", selector=sel)
"""

from __future__ import annotations

from typing import Any, Dict, Optional


# ============================================
# Base Exception
# ============================================


class AppException(Exception):
    """
    Base exception for all facetcrawl errors.

    Attributes:
        message: Human-readable error description.
        code: Optional error code for programmatic handling.
        context: Optional dictionary with debugging context.

    Example:
        >>> try:
        ...     raise AppException("Something went wrong", code="APP_001")
        ... except AppException as e:
        ...     print(f"Error {e.code}: {e.message}")
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code or self._default_code()
        self.context = context or {}
        super().__init__(self.message)

    def _default_code(self) -> str:
        """Generate default error code from class name."""
        # CamelCase -> UPPER_SNAKE_CASE
        name = self.__class__.__name__
        code = ""
        for i, char in enumerate(name):
            if char.isupper() and i > 0:
                code += "_"
            code += char.upper()
        return code

    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code={self.code!r}, "
            f"context={self.context!r})"
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "code": self.code,
            "context": self.context,
        }


# ============================================
# Configuration Errors
# ============================================


class ConfigError(AppException):
    """Base exception for configuration-related errors."""

    pass


class ConfigFileNotFoundError(ConfigError):
    """
    Raised when the configuration file is not found.

    Example:
        >>> raise ConfigFileNotFoundError(path="/path/to/config.yaml")
    """

    def __init__(
        self,
        message: str = "Configuration file not found",
        path: Optional[str] = None,
        **kwargs,
    ) -> None:
        context = kwargs.pop("context", {})
        if path:
            context["path"] = path
        super().__init__(message, code="CONFIG_FILE_NOT_FOUND", context=context, **kwargs)


class ConfigurationError(ConfigError):
    """Raised when configuration is invalid or cannot be parsed."""

    def __init__(
        self,
        message: str = "Invalid configuration",
        **kwargs,
    ) -> None:
        super().__init__(message, code="CONFIG_INVALID", **kwargs)


# ============================================
# Crawler Errors
# ============================================


class CrawlerError(AppException):
    """
    Base exception for crawl errors.

    Every crawler error aborts the whole run: a half-toggled facet drawer
    or a page that never settled cannot be resumed safely.
    """

    pass


class ElementNotFoundError(CrawlerError):
    """
    Raised when an element that must always be present is missing.

    Example:
        >>> raise ElementNotFoundError(
        ...     "Filter menu button not found",
        ...     selector='button[data-test="filters-menu"]'
        ... )
    """

    def __init__(
        self,
        message: str = "Required element not found",
        selector: Optional[str] = None,
        **kwargs,
    ) -> None:
        context = kwargs.pop("context", {})
        if selector:
            context["selector"] = selector
        super().__init__(message, code="ELEMENT_NOT_FOUND", context=context, **kwargs)


class WaitTimeoutError(CrawlerError):
    """Raised when waiting for a selector, navigation or URL change times out."""

    def __init__(
        self,
        message: str = "Timed out waiting for page",
        selector: Optional[str] = None,
        url: Optional[str] = None,
        timeout_ms: Optional[int] = None,
        **kwargs,
    ) -> None:
        context = kwargs.pop("context", {})
        if selector:
            context["selector"] = selector
        if url:
            context["url"] = url
        if timeout_ms is not None:
            context["timeout_ms"] = timeout_ms
        super().__init__(message, code="WAIT_TIMEOUT", context=context, **kwargs)


class FacetStateError(CrawlerError):
    """
    Raised when the facet drawer is in an unexpected state.

    Example:
        >>> raise FacetStateError("No type is currently checked")
    """

    def __init__(
        self,
        message: str = "Invalid facet state",
        **kwargs,
    ) -> None:
        super().__init__(message, code="FACET_STATE", **kwargs)


class ElementActionError(CrawlerError):
    """
    Raised when the browser rejects an element query or action.

    Typical causes are handles detached by a DOM rebuild and execution
    contexts destroyed by a navigation.

    Example:
        >>> raise ElementActionError("click failed", action="click")
    """

    def __init__(
        self,
        message: str = "Element action failed",
        action: Optional[str] = None,
        selector: Optional[str] = None,
        url: Optional[str] = None,
        **kwargs,
    ) -> None:
        context = kwargs.pop("context", {})
        if action:
            context["action"] = action
        if selector:
            context["selector"] = selector
        if url:
            context["url"] = url
        super().__init__(message, code="ELEMENT_ACTION_FAILED", context=context, **kwargs)


class BrowserLaunchError(CrawlerError):
    """Raised when Chromium cannot be started."""

    def __init__(
        self,
        message: str = "Browser launch failed",
        **kwargs,
    ) -> None:
        super().__init__(message, code="BROWSER_LAUNCH", **kwargs)


class NavigationError(CrawlerError):
    """Raised when the browser fails to open the start URL."""

    def __init__(
        self,
        message: str = "Navigation failed",
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        **kwargs,
    ) -> None:
        context = kwargs.pop("context", {})
        if url:
            context["url"] = url
        if status_code:
            context["status_code"] = status_code
        super().__init__(message, code="NAVIGATION_ERROR", context=context, **kwargs)


# ============================================
# Storage Errors
# ============================================


class StorageError(AppException):
    """Raised when an output document cannot be written or read."""

    def __init__(
        self,
        message: str = "Storage operation failed",
        path: Optional[str] = None,
        **kwargs,
    ) -> None:
        context = kwargs.pop("context", {})
        if path:
            context["path"] = path
        super().__init__(message, code="STORAGE_ERROR", context=context, **kwargs)
