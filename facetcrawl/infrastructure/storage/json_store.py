"""JSON persistence for crawl output documents.

Documents are written as one pretty-printed JSON file per run:
- {directory}/{prefix}_{timestamp}.json
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from facetcrawl.domain.entities.product import OutputDocument
from facetcrawl.domain.interfaces.storage_interface import ResultStore
from facetcrawl.utils.exceptions import StorageError
from facetcrawl.utils.logger import get_logger

logger = get_logger(__name__)


def generate_filename(prefix: str, now: Optional[datetime] = None) -> str:
    """Build a timestamped filename safe on every filesystem.

    Returns:
        Filename like ``target_urls_2024-05-01T10-22-31-123456.json``
    """
    timestamp = (now or datetime.now()).isoformat().replace(":", "-").replace(".", "-")
    return f"{prefix}_{timestamp}.json"


class JsonResultStore(ResultStore):
    """Writes output documents as JSON files into one directory."""

    def __init__(self, directory: Path | str = "URL_scraper_output", filename_prefix: str = "target_urls"):
        """Initialize the store.

        Args:
            directory: Output directory, created on first save
            filename_prefix: Prefix for generated filenames
        """
        self.directory = Path(directory)
        self.filename_prefix = filename_prefix

    def save(self, document: OutputDocument, filename: Optional[str] = None) -> Path:
        """Save a document to disk.

        Args:
            document: OutputDocument to save
            filename: Optional filename; generated from the timestamp if None

        Returns:
            Path to the written file
        """
        path = self.directory / (filename or generate_filename(self.filename_prefix))

        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            with open(path, 'w', encoding='utf-8') as f:
                json.dump(document.to_json_dict(), f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise StorageError(f"Could not write output document: {e}", path=str(path)) from e

        logger.info(f"Saved {document.summary.total_products} products to {path}")
        return path

    def load(self, path: Path) -> OutputDocument:
        """Load a document saved by :meth:`save`.

        Raises:
            StorageError: If the file is missing or not a valid document
        """
        path = Path(path)
        if not path.exists():
            raise StorageError(f"Output document not found: {path}", path=str(path))

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            document = OutputDocument.model_validate(data)
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            raise StorageError(f"Could not read output document: {e}", path=str(path)) from e

        logger.debug(f"Loaded {document.summary.total_products} products from {path}")
        return document
