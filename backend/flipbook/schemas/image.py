"""
Flipbook Backend — Image Schemas
==================================

What:  Request bodies and the response shape for /api/images and /api/search.

ImageResponse fields are all optional except the id because the collection
legitimately holds partial documents (per-field upserts create an image with
only pageIndex and one field). Image routes serialize with
response_model_exclude_unset so a client sees exactly what is stored.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import Field

from flipbook.schemas.common import CamelModel, StoredDocument


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class ImageCreate(CamelModel):
    url: str = Field(min_length=1, description="Where the page image is hosted")
    page_index: int = Field(strict=True, description="Zero-based page position")
    page_name: Optional[str] = Field(default=None, description="Display name of the page")


class ImageDelete(CamelModel):
    page_index: int = Field(strict=True)


class BulkImageCreate(CamelModel):
    """Image objects; the service converts each one before the batch insert."""
    images: List[Dict[str, Any]]


class BulkImageDelete(CamelModel):
    page_indexes: List[int]


class TextOverlaysUpdate(CamelModel):
    text_overlays: List[Any]


class MetadataUpdate(CamelModel):
    metadata: Dict[str, Any]


class AltTextUpdate(CamelModel):
    alt_text: str


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class ImageResponse(StoredDocument):
    url: Optional[str] = None
    page_index: Optional[int] = None
    page_name: Optional[str] = None
    uploaded_at: Optional[datetime] = None
    metadata: Optional[Dict[str, Any]] = None
    text_overlays: Optional[List[Any]] = None
    alt_text: Optional[str] = None
    filters: Optional[Dict[str, Any]] = None
