# Browser Package
"""
Playwright-backed browser session and page-query adapter.
"""

from facetcrawl.infrastructure.browser.playwright_page import PlaywrightPage, PlaywrightPageElement
from facetcrawl.infrastructure.browser.session import BrowserSession

__all__ = [
    "BrowserSession",
    "PlaywrightPage",
    "PlaywrightPageElement",
]
