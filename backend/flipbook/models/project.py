"""
Flipbook Backend — Project Document
=====================================

What:  Shape of a document in the `projects` collection.

Field notes:
    - shareId is assigned at insert time (see services/share_id.py) and is the
      only key clients use to address a project. Unique index.
    - password is stored in plaintext. The server never checks it; clients
      compare it. GET /api/projects strips it, GET /api/projects/{shareId}
      returns it.
    - images, textOverlays, pageMetadata, altTexts and settings are opaque to
      the server and stored as sent.
"""

from datetime import datetime
from typing import Any, Dict, List

from pydantic import Field

from flipbook.models.base import DocumentModel, utcnow


class ProjectDocument(DocumentModel):
    name: str
    description: str = ""
    settings: Dict[str, Any] = Field(default_factory=dict)
    is_public: bool = False
    password: str = ""
    images: List[Any] = Field(default_factory=list)
    text_overlays: Dict[str, Any] = Field(default_factory=dict)
    page_metadata: Dict[str, Any] = Field(default_factory=dict)
    alt_texts: Dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


def default_project_name(now: datetime) -> str:
    """'Flipbook 10/19/2026' style name for projects saved without one."""
    return f"Flipbook {now.month}/{now.day}/{now.year}"


def default_project_description(images: List[Any]) -> str:
    return f"Flipbook with {len(images)} pages"
