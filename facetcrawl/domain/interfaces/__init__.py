# Domain Interfaces Package
"""
Abstract base classes defining contracts for infrastructure implementations.
"""

from .page_query import PageElement, PageQuery
from .storage_interface import ResultStore

__all__ = ["PageElement", "PageQuery", "ResultStore"]
