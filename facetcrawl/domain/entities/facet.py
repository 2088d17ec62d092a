"""
Facet entities read from the catalog's filter drawer.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class FacetOption:
    """One checkbox in the facet drawer, in DOM order."""

    id: str
    label: str
    checked: bool = False

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("FacetOption id cannot be empty")


@dataclass(frozen=True)
class FacetTransition:
    """Outcome of discovering or advancing the facet cycle.

    ``has_next`` is False once the active option is the last one; the
    driver finishes paginating that option and then stops.
    """

    current_label: str
    has_next: bool
    index: int = 0
