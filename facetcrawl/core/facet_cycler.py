"""
Traversal of the catalog's "Type" facet.

The facet cycle is a small state machine::

    UNINITIALIZED --discover--> ACTIVE(index) --advance--> ACTIVE(index + 1)
                                ACTIVE(last)  --advance--> EXHAUSTED

``discover_facets`` and ``advance_facets`` are pure transitions over
``FacetCycleState``. ``FacetCycler`` wraps them with the drawer clicks and
waits needed to make the page match the new state.

Example:
    >>> cycler = FacetCycler()
    >>> transition = await cycler.discover(page)
    >>> while transition.has_next:
    ...     transition = await cycler.advance(page)
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from facetcrawl.core.selectors import DEFAULT_SELECTORS, CatalogSelectors
from facetcrawl.domain.entities.facet import FacetOption, FacetTransition
from facetcrawl.domain.interfaces.page_query import PageElement, PageQuery
from facetcrawl.utils.exceptions import ElementNotFoundError, FacetStateError, WaitTimeoutError
from facetcrawl.utils.logger import get_logger

logger = get_logger(__name__)


class FacetPhase(str, Enum):
    """Lifecycle phase of a facet cycle."""

    UNINITIALIZED = "uninitialized"
    ACTIVE = "active"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class FacetCycleState:
    """
    Facet traversal state for one crawl run.

    Attributes:
        phase: Current lifecycle phase.
        options: Options captured at discovery, in DOM order.
        index: Position of the active option (-1 before discovery).
    """

    phase: FacetPhase = FacetPhase.UNINITIALIZED
    options: Tuple[FacetOption, ...] = ()
    index: int = -1

    @property
    def current(self) -> Optional[FacetOption]:
        if self.phase is FacetPhase.UNINITIALIZED:
            return None
        return self.options[self.index]

    @property
    def has_next(self) -> bool:
        return self.phase is FacetPhase.ACTIVE and self.index + 1 < len(self.options)

    def transition(self) -> FacetTransition:
        current = self.current
        return FacetTransition(
            current_label=current.label if current else "",
            has_next=self.has_next,
            index=self.index,
        )


def discover_facets(options: Sequence[FacetOption]) -> Tuple[FacetCycleState, FacetTransition]:
    """
    Enter the cycle at the pre-selected option.

    Raises:
        FacetStateError: If there are no options or none is checked.
    """
    if not options:
        raise FacetStateError("Facet drawer has no options")

    checked = [i for i, option in enumerate(options) if option.checked]
    if not checked:
        raise FacetStateError(
            "No type is currently checked",
            context={"options": [option.label for option in options]},
        )
    if len(checked) > 1:
        logger.warning(
            f"{len(checked)} types checked on entry, starting from "
            f"'{options[checked[0]].label}'"
        )

    state = FacetCycleState(phase=FacetPhase.ACTIVE, options=tuple(options), index=checked[0])
    return state, state.transition()


def advance_facets(state: FacetCycleState) -> Tuple[FacetCycleState, FacetTransition]:
    """
    Move to the next option, or to EXHAUSTED from the last one.

    Raises:
        FacetStateError: If the cycle is not ACTIVE.
    """
    if state.phase is not FacetPhase.ACTIVE:
        raise FacetStateError(
            f"Cannot advance facet cycle in phase '{state.phase.value}'",
            context={"index": state.index},
        )

    if state.index + 1 >= len(state.options):
        exhausted = replace(state, phase=FacetPhase.EXHAUSTED)
        return exhausted, FacetTransition(
            current_label=state.options[state.index].label,
            has_next=False,
            index=state.index,
        )

    advanced = replace(state, index=state.index + 1)
    return advanced, advanced.transition()


class FacetCycler:
    """
    Drives the "Type" facet drawer through its options one at a time.

    The option list is captured once by :meth:`discover`; later advances
    reuse the captured checkbox ids and only look up fresh label handles
    in the reopened drawer.

    Attributes:
        state: Current facet cycle state.
        toggle_delay_ms: Settle delay after each checkbox toggle.
        navigation_timeout_ms: Wait bound for the drawer and URL change.
    """

    def __init__(
        self,
        toggle_delay_ms: int = 250,
        navigation_timeout_ms: int = 30000,
        selectors: Optional[CatalogSelectors] = None,
    ):
        self.toggle_delay_ms = toggle_delay_ms
        self.navigation_timeout_ms = navigation_timeout_ms
        self.selectors = selectors or DEFAULT_SELECTORS
        self.state = FacetCycleState()

    @property
    def options(self) -> Tuple[FacetOption, ...]:
        return self.state.options

    # =========================================
    # Drawer handling
    # =========================================

    async def _wait_for(self, page: PageQuery, selector: str, what: str) -> PageElement:
        try:
            return await page.wait_for_selector(selector, timeout_ms=self.navigation_timeout_ms)
        except WaitTimeoutError as e:
            raise ElementNotFoundError(f"{what} not found", selector=selector) from e

    async def open_drawer(self, page: PageQuery) -> PageElement:
        """Open the filter menu and the Type facet, returning its modal."""
        filter_bar = await self._wait_for(page, self.selectors.filter_bar, "Filter bar")

        filter_button = await filter_bar.query(self.selectors.filter_menu_button)
        if filter_button is None:
            raise ElementNotFoundError(
                "Filter menu button not found",
                selector=self.selectors.filter_menu_button,
            )
        await filter_button.click()

        type_button = await self._wait_for(page, self.selectors.facet_group_button, "Type facet button")
        await type_button.click()

        return await self._wait_for(page, self.selectors.facet_modal, "Type facet modal")

    async def close_drawer(self, modal: PageElement) -> None:
        close_button = await modal.query(self.selectors.close_button)
        if close_button is None:
            raise ElementNotFoundError("Facet drawer close button not found", selector=self.selectors.close_button)
        await close_button.activate()

    async def read_options(self, modal: PageElement) -> List[FacetOption]:
        """Read every facet checkbox in the modal, in DOM order."""
        options: List[FacetOption] = []
        for checkbox in await modal.query_all(self.selectors.facet_checkbox):
            option_id = await checkbox.get_attribute("id")
            if not option_id:
                raise FacetStateError("Facet checkbox without id")

            label = await modal.query(self.selectors.option_label(option_id))
            options.append(FacetOption(
                id=option_id,
                label=(await label.inner_text()).strip() if label else "",
                checked=await checkbox.is_checked(),
            ))
        return options

    async def _toggle(self, page: PageQuery, modal: PageElement, option: FacetOption) -> None:
        selector = self.selectors.option_label(option.id)
        label = await modal.query(selector)
        if label is None:
            raise ElementNotFoundError(f"Label for type '{option.label}' not found", selector=selector)
        await label.activate()
        await page.wait_for_timeout(self.toggle_delay_ms)

    # =========================================
    # Transitions
    # =========================================

    async def discover(self, page: PageQuery) -> FacetTransition:
        """
        Capture the facet options and enter the cycle at the checked one.

        Raises:
            ElementNotFoundError: If the drawer cannot be opened.
            FacetStateError: If no option is checked, or already discovered.
        """
        if self.state.phase is not FacetPhase.UNINITIALIZED:
            raise FacetStateError("Facet options already discovered")

        modal = await self.open_drawer(page)
        options = await self.read_options(modal)
        state, transition = discover_facets(options)
        await self.close_drawer(modal)

        self.state = state
        logger.info(
            f"Discovered {len(options)} types, starting with "
            f"'{transition.current_label}' ({state.index + 1}/{len(options)})"
        )
        return transition

    async def advance(self, page: PageQuery) -> FacetTransition:
        """
        Switch the listing to the next facet option.

        From the last option the drawer is closed and the cycle becomes
        EXHAUSTED with ``has_next=False``.

        Raises:
            FacetStateError: If the cycle is not ACTIVE.
            WaitTimeoutError: If the URL does not change after applying.
        """
        next_state, transition = advance_facets(self.state)
        modal = await self.open_drawer(page)

        if next_state.phase is FacetPhase.EXHAUSTED:
            await self.close_drawer(modal)
            self.state = next_state
            logger.info(f"'{transition.current_label}' is the last type")
            return transition

        previous_url = page.url
        await self._toggle(page, modal, self.state.options[self.state.index])
        await self._toggle(page, modal, next_state.options[next_state.index])

        apply_button = await modal.query(self.selectors.apply_button)
        if apply_button is not None:
            await apply_button.click()

        see_results = await page.query(self.selectors.see_results_button)
        if see_results is not None:
            await see_results.click()

        await page.wait_for_url_change(previous_url, timeout_ms=self.navigation_timeout_ms)

        self.state = next_state
        logger.info(
            f"Switched to type '{transition.current_label}' "
            f"({next_state.index + 1}/{len(next_state.options)})"
        )
        return transition
