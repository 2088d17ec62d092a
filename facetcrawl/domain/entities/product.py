"""
Product entities produced by a crawl and the output document they end up in.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterator, List
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

# Local wall-clock format used in the output summary
COLLECTED_AT_FORMAT = "%Y-%m-%d %H:%M:%S"


class Item(BaseModel):
    """A discovered product URL and the facet chips active when it was seen."""

    url: str = Field(..., description="Absolute product URL without query or fragment")
    tags: str = Field(default="", description="Sorted, comma-joined applied chip labels")

    @field_validator('url')
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Require an absolute URL stripped of query string and fragment."""
        parts = urlsplit(v)
        if parts.scheme not in ('http', 'https') or not parts.netloc:
            raise ValueError("URL must be absolute (http:// or https://)")
        if parts.query or parts.fragment or '?' in v or '#' in v:
            raise ValueError("URL must not carry a query string or fragment")
        return v


@dataclass
class RawBatch:
    """Items collected from one (facet, page) visit, in DOM order.

    May repeat URLs seen under another facet or page.
    """

    facet_label: str
    page_number: int
    items: List[Item] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.items)


class RunSummary(BaseModel):
    """Run metadata attached to the output document."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    total_products: int = Field(..., ge=0, alias="totalProducts")
    collected_at: datetime = Field(default_factory=datetime.now, alias="collectedAt")
    types_scraped: int = Field(..., ge=0, alias="typesScraped")

    @field_validator('collected_at', mode='before')
    @classmethod
    def parse_collected_at(cls, v: Any) -> Any:
        """Accept the summary's own wall-clock format when loading."""
        if isinstance(v, str):
            try:
                return datetime.strptime(v, COLLECTED_AT_FORMAT)
            except ValueError:
                return v
        return v

    @field_serializer('collected_at')
    def serialize_collected_at(self, v: datetime) -> str:
        return v.strftime(COLLECTED_AT_FORMAT)


class OutputDocument(BaseModel):
    """Deduplicated items split into fixed-size chunks plus a run summary.

    ``urls`` keys are ``array1``, ``array2``, ... in insertion order.
    """

    urls: Dict[str, List[Item]] = Field(default_factory=dict)
    summary: RunSummary

    def iter_items(self) -> Iterator[Item]:
        """Yield every item, chunk by chunk, in key order."""
        for chunk in self.urls.values():
            yield from chunk

    def flatten(self) -> List[Item]:
        """Concatenate all chunks back into the deduplicated list."""
        return list(self.iter_items())

    def to_json_dict(self) -> Dict[str, Any]:
        """Dump with camelCase summary keys, ready for ``json.dump``."""
        return self.model_dump(mode='json', by_alias=True)
