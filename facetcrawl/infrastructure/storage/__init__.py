# Storage Package
"""
Persistence of crawl output documents.
"""

from facetcrawl.infrastructure.storage.json_store import JsonResultStore, generate_filename

__all__ = ["JsonResultStore", "generate_filename"]
