"""Flipbook Backend — Bookmark Schemas."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from flipbook.schemas.common import CamelModel, StoredDocument


class BookmarkCreate(CamelModel):
    page_index: int = Field(strict=True)
    title: Optional[str] = None


class BookmarkResponse(StoredDocument):
    page_index: int
    title: str = ""
    created_at: Optional[datetime] = None
