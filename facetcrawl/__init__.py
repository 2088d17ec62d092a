"""facetcrawl - faceted pagination crawler for product catalogs.

Drives a Playwright browser through every value of a catalog's "Type"
facet and every result page of each, tagging product URLs with the
applied filter chips, then deduplicates and chunks them into one JSON
document.
"""

__version__ = "0.1.0"
