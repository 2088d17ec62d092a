"""Unit tests for Playwright error translation in the browser adapter."""

import asyncio
from types import SimpleNamespace

import pytest
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from facetcrawl import cli
from facetcrawl.infrastructure.browser import session as session_module
from facetcrawl.infrastructure.browser.playwright_page import PlaywrightPage, PlaywrightPageElement
from facetcrawl.infrastructure.browser.session import BrowserSession
from facetcrawl.utils.config import BrowserConfig
from facetcrawl.utils.exceptions import (
    BrowserLaunchError,
    CrawlerError,
    ElementActionError,
    WaitTimeoutError,
)

DETACHED = "Element is not attached to the DOM"


class DetachedHandle:
    """ElementHandle whose every call fails like a handle dropped by a re-render."""

    async def _fail(self, *args, **kwargs):
        raise PlaywrightError(DETACHED)

    query_selector = _fail
    query_selector_all = _fail
    click = _fail
    evaluate = _fail
    get_attribute = _fail
    inner_text = _fail
    is_checked = _fail


class NavigatedAwayPage:
    """Page whose execution context is gone and whose waits time out."""

    url = "https://www.target.com/c/kids"

    async def evaluate(self, script, arg=None):
        raise PlaywrightError("Execution context was destroyed, most likely because of a navigation")

    async def query_selector(self, selector):
        raise PlaywrightError("Execution context was destroyed")

    async def query_selector_all(self, selector):
        raise PlaywrightError("Execution context was destroyed")

    async def wait_for_function(self, script, arg=None, timeout=None):
        raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded")

    async def wait_for_selector(self, selector, timeout=None):
        raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded")


class TestPlaywrightPageElement:
    """Test element actions on a detached handle."""

    @pytest.mark.parametrize("action,args", [
        ("click", ()),
        ("activate", ()),
        ("get_attribute", ("id",)),
        ("inner_text", ()),
        ("is_checked", ()),
        ("query", ("label",)),
        ("query_all", ("li",)),
    ])
    def test_playwright_errors_become_crawler_errors(self, action, args):
        element = PlaywrightPageElement(DetachedHandle())

        with pytest.raises(ElementActionError) as exc_info:
            asyncio.run(getattr(element, action)(*args))

        assert DETACHED in exc_info.value.message
        assert exc_info.value.code == "ELEMENT_ACTION_FAILED"
        assert isinstance(exc_info.value, CrawlerError)

    def test_query_keeps_selector_context(self):
        element = PlaywrightPageElement(DetachedHandle())

        with pytest.raises(ElementActionError) as exc_info:
            asyncio.run(element.query('label[for="type-1"]'))

        assert exc_info.value.context["selector"] == 'label[for="type-1"]'


class TestPlaywrightPage:
    """Test page calls after the execution context was destroyed."""

    @pytest.fixture
    def page(self):
        return PlaywrightPage(NavigatedAwayPage())

    def test_evaluate(self, page):
        with pytest.raises(ElementActionError) as exc_info:
            asyncio.run(page.evaluate("() => 1"))

        assert exc_info.value.context["url"] == NavigatedAwayPage.url

    @pytest.mark.parametrize("method", ["query", "query_all"])
    def test_queries(self, page, method):
        with pytest.raises(ElementActionError):
            asyncio.run(getattr(page, method)("ul"))

    def test_url_change_timeout(self, page):
        with pytest.raises(WaitTimeoutError) as exc_info:
            asyncio.run(page.wait_for_url_change(NavigatedAwayPage.url, timeout_ms=50))

        assert exc_info.value.context["timeout_ms"] == 50

    def test_selector_timeout(self, page):
        with pytest.raises(WaitTimeoutError) as exc_info:
            asyncio.run(page.wait_for_selector("ul", timeout_ms=50))

        assert exc_info.value.context["selector"] == "ul"


class TestBrowserSession:
    """Test browser launch failures."""

    def test_launch_failure(self, monkeypatch):
        stopped = []

        async def launch(**kwargs):
            raise PlaywrightError("Executable doesn't exist")

        async def stop():
            stopped.append(True)

        driver = SimpleNamespace(chromium=SimpleNamespace(launch=launch), stop=stop)

        async def start():
            return driver

        monkeypatch.setattr(session_module, "async_playwright", lambda: SimpleNamespace(start=start))
        session = BrowserSession(BrowserConfig(headless=True))

        with pytest.raises(BrowserLaunchError, match="Executable doesn't exist"):
            asyncio.run(session.start())

        assert stopped == [True]
        assert session.page is None


class TestCliOnBrowserErrors:
    """Test the command exits cleanly when the browser rejects an action."""

    def test_detached_element_exits_with_status_1(self, config_file, monkeypatch, capsys, tmp_path):
        async def crawl_with_detached_label(config):
            await PlaywrightPageElement(DetachedHandle()).activate()

        monkeypatch.setattr(cli, "run_crawl", crawl_with_detached_label)

        exit_code = cli.main(["--config", str(config_file)])

        assert exit_code == 1
        assert "ELEMENT_ACTION_FAILED" in capsys.readouterr().err
        assert not (tmp_path / "out").exists()
