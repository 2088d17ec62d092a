# Domain Entities Package
"""
Core crawl entities: facet options, product items and the output document.
"""

from .facet import FacetOption, FacetTransition
from .product import COLLECTED_AT_FORMAT, Item, OutputDocument, RawBatch, RunSummary

__all__ = [
    "FacetOption",
    "FacetTransition",
    "Item",
    "RawBatch",
    "RunSummary",
    "OutputDocument",
    "COLLECTED_AT_FORMAT",
]
