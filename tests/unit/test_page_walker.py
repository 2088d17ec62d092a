"""Unit tests for pagination."""

import asyncio

import pytest

from facetcrawl.core.page_walker import (
    PageWalker,
    PaginationState,
    advance_pagination,
    pagination_allows_next,
)
from facetcrawl.core.selectors import DEFAULT_SELECTORS as S

from fakes import FakeElement, FakePage


def page_with_next(attributes=None):
    next_button = FakeElement(attributes=attributes or {})
    pagination = FakeElement(children={S.next_button: [next_button]})
    return FakePage({S.pagination: [pagination]}), next_button


class TestPageWalker:
    """Test next-page detection and navigation."""

    def test_no_pagination_means_single_page(self):
        page = FakePage({})

        assert asyncio.run(PageWalker().go_next(page)) is False
        assert page.navigations == 0

    def test_pagination_without_next_button(self):
        page = FakePage({S.pagination: [FakeElement()]})

        assert asyncio.run(PageWalker().go_next(page)) is False

    def test_disabled_next_button(self):
        page, button = page_with_next({"disabled": ""})

        assert asyncio.run(PageWalker().go_next(page)) is False
        assert button.clicks == 0

    def test_enabled_next_button_navigates(self):
        page, button = page_with_next()

        assert asyncio.run(PageWalker().go_next(page)) is True
        assert button.clicks == 1
        assert page.navigations == 1

    def test_step_advances_state(self):
        page, _ = page_with_next()

        state = asyncio.run(PageWalker().step(page, PaginationState()))

        assert state == PaginationState(page_number=2, exhausted=False)

    def test_step_respects_page_cap(self):
        page, button = page_with_next()

        state = asyncio.run(PageWalker().step(page, PaginationState(page_number=2), max_pages=2))

        assert state.exhausted
        assert button.clicks == 0


class TestPaginationState:
    """Test the pure pagination transition."""

    def test_advance(self):
        assert advance_pagination(PaginationState(), True) == PaginationState(page_number=2)

    def test_no_further_page_exhausts(self):
        state = advance_pagination(PaginationState(page_number=3), False)
        assert state == PaginationState(page_number=3, exhausted=True)

    def test_exhausted_is_terminal(self):
        state = PaginationState(page_number=3, exhausted=True)
        assert advance_pagination(state, True) is state

    @pytest.mark.parametrize("page_number,max_pages,expected", [
        (1, None, True),
        (1, 2, True),
        (2, 2, False),
        (5, 1, False),
    ])
    def test_page_cap(self, page_number, max_pages, expected):
        assert pagination_allows_next(PaginationState(page_number=page_number), max_pages) is expected
