"""
Abstract interface for output document persistence.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from facetcrawl.domain.entities.product import OutputDocument


class ResultStore(ABC):
    """
    Abstract base class for output document stores.

    The crawl core never opens files itself; it hands the finished
    document to a store.
    """

    @abstractmethod
    def save(self, document: OutputDocument, filename: Optional[str] = None) -> Path:
        """
        Persist an output document.

        Args:
            document: Finished crawl output.
            filename: Optional filename hint.

        Returns:
            Location the document was written to.
        """
        pass

    @abstractmethod
    def load(self, path: Path) -> OutputDocument:
        """Read a previously saved document back."""
        pass
