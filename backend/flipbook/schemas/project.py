"""
Flipbook Backend — Project Schemas
====================================

What:  Request/response shapes for /api/projects.

Response variants:
    ProjectResponse         full document, including password
    ProjectCreatedResponse  ProjectResponse + confirmation message (POST)
    ProjectSummary          public listing entry; the store query projects the
                            password away

Both keep top-level keys a client stored through PUT (extra="allow").
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import ConfigDict, Field

from flipbook.schemas.common import CamelModel, StoredDocument


class ProjectCreate(CamelModel):
    """Every field is optional; the server fills in defaults for what is missing."""
    name: Optional[str] = None
    description: Optional[str] = None
    settings: Optional[Dict[str, Any]] = None
    is_public: Optional[bool] = None
    password: Optional[str] = None
    images: Optional[List[Any]] = None
    text_overlays: Optional[Dict[str, Any]] = None
    page_metadata: Optional[Dict[str, Any]] = None
    alt_texts: Optional[Dict[str, Any]] = None


class ProjectSummary(StoredDocument):
    # Top-level keys stored through PUT are returned as they are
    model_config = ConfigDict(extra="allow")

    name: Optional[str] = None
    description: Optional[str] = None
    settings: Optional[Dict[str, Any]] = None
    is_public: bool = False
    share_id: str
    images: Optional[List[Any]] = None
    text_overlays: Optional[Dict[str, Any]] = None
    page_metadata: Optional[Dict[str, Any]] = None
    alt_texts: Optional[Dict[str, Any]] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProjectResponse(ProjectSummary):
    password: Optional[str] = ""


class ProjectCreatedResponse(ProjectResponse):
    message: str = Field(default="Project saved successfully")
