"""
CSS selectors for the catalog listing page.

Selectors are isolated here for easy maintenance when the site updates its
DOM. Every crawl component takes an optional ``CatalogSelectors`` and falls
back to ``DEFAULT_SELECTORS``.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class CatalogSelectors:
    """
    CSS selectors for a target.com category listing.

    Selectors marked "scoped" are queried inside the element named in
    their comment rather than on the whole page.
    """

    # Filter bar holding the "Filter" menu button
    filter_bar: str = (
        'div[data-module-type="ListingPageFilterBar"] > div > div > div > div[data-test="lp-filterBar"]'
    )
    # scoped: filter_bar
    filter_menu_button: str = 'ul > li:nth-child(1) button[data-test="filters-menu"]'

    # Chip bar listing the currently applied filters
    applied_filter_bar: str = (
        'div[data-module-type="ListingPageFilterBar"] > div > div > div > div > div[data-test="lp-filterBar"]'
    )
    # scoped: applied_filter_bar
    chip_list: str = "ul"
    # scoped: chip_list
    chip_item: str = "li"
    # scoped: chip_item
    chip_label: str = "button > div.h-text-md"
    # data-test value of the "clear all" chip
    clear_all_marker: str = "clear-all-link"

    # "Type" facet group inside the filter drawer
    facet_group_button: str = (
        'div[data-floating-ui-portal] button[data-test="facet-group-d_item_type_all"]'
    )
    facet_modal: str = (
        'div[data-floating-ui-portal] div[data-floating-ui-portal] '
        'div[data-floating-ui-focusable][aria-modal="true"]'
    )
    # scoped: facet_modal
    facet_checkbox: str = 'input[type="checkbox"][data-test^="facet-checkbox-"]'
    # scoped: facet_modal, formatted with the checkbox id
    facet_option_label: str = 'label[for="{id}"]'
    # scoped: facet_modal
    close_button: str = 'button[aria-label="close"]'
    # scoped: facet_modal
    apply_button: str = 'button:has-text("Apply")'
    see_results_button: str = 'div[data-floating-ui-portal] button:has-text("See results")'

    # Pagination
    pagination: str = 'div[data-test="pagination"]'
    # scoped: pagination
    next_button: str = 'button[data-test="next"]'

    # Product grid
    product_list: str = 'div[data-module-type="ListingPageProductListCards"]'
    # scoped: product_list
    product_link: str = 'a[href^="/p/"]'

    def option_label(self, option_id: str) -> str:
        """Selector for the label bound to a facet checkbox."""
        return self.facet_option_label.format(id=option_id)


# Default selectors instance
DEFAULT_SELECTORS = CatalogSelectors()
