"""
Flipbook Backend — Image Document
===================================

What:  Shape of a document in the `images` collection.

Field notes:
    - pageIndex is the page a picture belongs to. It is indexed but NOT unique:
      duplicates are kept, and single-document operations pick the oldest
      (lowest _id) match.
    - metadata and filters are open mappings; clients may store any keys.
      Search reads metadata.description and metadata.tags.
    - textOverlays is an ordered list of opaque overlay records.
    - Documents created by the per-field upserts carry only pageIndex and the
      field that was set; url is absent on those.
    - Undeclared keys on bulk-inserted images are kept as sent; declared keys
      are converted to their types first ("3" → 3 for pageIndex).
"""

from datetime import datetime
from typing import Any, Dict, List

from pydantic import ConfigDict, Field

from flipbook.models.base import DocumentModel, utcnow


class ImageDocument(DocumentModel):
    # Bulk inserts keep whatever extra keys the client sent
    model_config = ConfigDict(extra="allow")

    url: str
    page_index: int
    page_name: str = ""
    uploaded_at: datetime = Field(default_factory=utcnow)
    metadata: Dict[str, Any] = Field(default_factory=dict)
    text_overlays: List[Any] = Field(default_factory=list)
    alt_text: str = ""
    filters: Dict[str, Any] = Field(default_factory=dict)
