"""
Flipbook Backend — Bookmark Document
======================================

What:  Shape of a document in the `bookmarks` collection.

Several bookmarks may share a pageIndex; deleting by pageIndex removes the
oldest one.
"""

from datetime import datetime

from pydantic import Field

from flipbook.models.base import DocumentModel, utcnow


class BookmarkDocument(DocumentModel):
    page_index: int
    title: str = ""
    created_at: datetime = Field(default_factory=utcnow)
