"""
Flipbook Backend — Project Route Handlers
===========================================

What:  Save, share, browse, edit and delete flipbook projects.
Who:   Called by the editor (save/update/delete), the share page (fetch by
       shareId) and the discovery page (public listing).

Route Inventory:
    POST   /api/projects                      save a new project (201)
    GET    /api/projects                      newest public projects, no passwords
    GET    /api/projects/{shareId}            full project; counts a view
    GET    /api/projects/{shareId}/analytics  view counter of a project
    PUT    /api/projects/{shareId}            overwrite supplied fields
    DELETE /api/projects/{shareId}            delete
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from flipbook.database import get_database
from flipbook.schemas.analytics import ProjectViewResponse
from flipbook.schemas.common import ErrorResponse, MessageResponse
from flipbook.schemas.project import (
    ProjectCreate,
    ProjectCreatedResponse,
    ProjectResponse,
    ProjectSummary,
)
from flipbook.services.project_service import project_service

router = APIRouter(prefix="/api/projects", tags=["Projects"])

_NOT_FOUND = {404: {"description": "Unknown shareId", "model": ErrorResponse}}
_SERVER_ERROR = {500: {"description": "Store error", "model": ErrorResponse}}


@router.post(
    "",
    status_code=201,
    response_model=ProjectCreatedResponse,
    responses={500: {"description": "Save failed; details.reason says why", "model": ErrorResponse}},
    summary="Save a project and get its shareId",
)
async def create_project(
    body: Optional[ProjectCreate] = None,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> ProjectCreatedResponse:
    return await project_service.create_project(db, body or ProjectCreate())


@router.get(
    "",
    response_model=List[ProjectSummary],
    responses=_SERVER_ERROR,
    summary="Browse public projects",
    description="Newest first, at most PUBLIC_PROJECTS_LIMIT entries. Passwords are never included.",
)
async def list_public_projects(
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> List[ProjectSummary]:
    return await project_service.list_public_projects(db)


@router.get(
    "/{share_id}",
    response_model=ProjectResponse,
    responses={**_NOT_FOUND, **_SERVER_ERROR},
    summary="Open a shared project",
)
async def get_project(
    share_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> ProjectResponse:
    return await project_service.get_project(db, share_id)


@router.get(
    "/{share_id}/analytics",
    response_model=ProjectViewResponse,
    responses={**_NOT_FOUND, **_SERVER_ERROR},
    summary="How often a shared project was opened",
)
async def get_project_views(
    share_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> ProjectViewResponse:
    return await project_service.get_project_views(db, share_id)


@router.put(
    "/{share_id}",
    response_model=ProjectResponse,
    responses={
        400: {"description": "A known field has the wrong type", "model": ErrorResponse},
        **_NOT_FOUND,
        **_SERVER_ERROR,
    },
    summary="Update a project",
)
async def update_project(
    share_id: str,
    updates: Dict[str, Any] = Body(...),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> ProjectResponse:
    return await project_service.update_project(db, share_id, updates)


@router.delete(
    "/{share_id}",
    response_model=MessageResponse,
    responses={**_NOT_FOUND, **_SERVER_ERROR},
    summary="Delete a project",
)
async def delete_project(
    share_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> MessageResponse:
    return await project_service.delete_project(db, share_id)
