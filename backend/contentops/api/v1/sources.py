"""Knowledge source API."""
import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from contentops.dependencies import get_current_user, get_db, require_role
from contentops.models.content_source import ContentSource
from contentops.models.user import User
from contentops.schemas.common import APIResponse, PaginationMeta
from contentops.schemas.source import SourceCreate, SourceResponse, SourceUpdate
from contentops.services import source_service, workspace_service

router = APIRouter()


async def _get_source_or_404(db: AsyncSession, source_id: uuid.UUID, user: User) -> ContentSource:
    source = await source_service.get_source(db, source_id)
    if not source:
        raise HTTPException(status_code=404, detail="Source not found")
    await workspace_service.get_accessible_workspace(db, source.workspace_id, user)
    return source


# GET /sources
@router.get("", response_model=APIResponse)
async def list_sources(
    workspace_id: uuid.UUID,
    search: str | None = None,
    page: int = Query(1, ge=1),
    per_page: int = Query(20, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await workspace_service.get_accessible_workspace(db, workspace_id, current_user)
    sources, total = await source_service.list_sources(
        db, workspace_id, search=search, page=page, per_page=per_page,
    )
    return APIResponse(
        status="success",
        data=[SourceResponse.model_validate(s).model_dump() for s in sources],
        pagination=PaginationMeta.for_page(total, page, per_page),
    )


# POST /sources - admin, editor, writer
@router.post("", response_model=APIResponse, status_code=status.HTTP_201_CREATED)
async def create_source(
    body: SourceCreate,
    caller: User = require_role("admin", "editor", "writer"),
    db: AsyncSession = Depends(get_db),
):
    await workspace_service.get_accessible_workspace(db, body.workspace_id, caller)
    source = await source_service.create_source(db, body, caller)
    return APIResponse(
        status="success",
        data=SourceResponse.model_validate(source).model_dump(),
        message="Source added",
    )


# GET /sources/{id}
@router.get("/{source_id}", response_model=APIResponse)
async def get_source(
    source_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    source = await _get_source_or_404(db, source_id, current_user)
    return APIResponse(status="success", data=SourceResponse.model_validate(source).model_dump())


# PUT /sources/{id} - admin, editor, writer
@router.put("/{source_id}", response_model=APIResponse)
async def update_source(
    source_id: uuid.UUID,
    body: SourceUpdate,
    caller: User = require_role("admin", "editor", "writer"),
    db: AsyncSession = Depends(get_db),
):
    source = await _get_source_or_404(db, source_id, caller)
    updated = await source_service.update_source(db, source, body, caller)
    return APIResponse(status="success", data=SourceResponse.model_validate(updated).model_dump())


# DELETE /sources/{id} - admin, editor, writer
@router.delete("/{source_id}", response_model=APIResponse)
async def delete_source(
    source_id: uuid.UUID,
    caller: User = require_role("admin", "editor", "writer"),
    db: AsyncSession = Depends(get_db),
):
    source = await _get_source_or_404(db, source_id, caller)
    await source_service.delete_source(db, source, caller)
    return APIResponse(status="success", message="Source deleted")
