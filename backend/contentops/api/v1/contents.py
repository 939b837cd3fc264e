"""Content pipeline API."""
import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from contentops.dependencies import get_current_user, get_db, require_role
from contentops.models.content import ContentPiece, ContentStatus
from contentops.models.user import User
from contentops.schemas.common import APIResponse, PaginationMeta
from contentops.schemas.content import (
    ContentApprovalResponse,
    ContentCreate,
    ContentFilter,
    ContentResponse,
    ContentUpdate,
    StatusChangeRequest,
)
from contentops.services import content_service, workspace_service

router = APIRouter()


async def _get_content_or_404(db: AsyncSession, content_id: uuid.UUID, user: User) -> ContentPiece:
    content = await content_service.get_content(db, content_id)
    if not content:
        raise HTTPException(status_code=404, detail="Content not found")
    await workspace_service.get_accessible_workspace(db, content.workspace_id, user)
    return content


# GET /contents
@router.get("", response_model=APIResponse)
async def list_contents(
    workspace_id: uuid.UUID,
    status_filter: ContentStatus | None = Query(None, alias="status"),
    platform: str | None = None,
    search: str | None = None,
    page: int = Query(1, ge=1),
    per_page: int = Query(20, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await workspace_service.get_accessible_workspace(db, workspace_id, current_user)
    filters = ContentFilter(
        workspace_id=workspace_id, status=status_filter, platform=platform,
        search=search, page=page, per_page=per_page,
    )
    contents, total = await content_service.list_contents(db, filters)
    return APIResponse(
        status="success",
        data=[ContentResponse.model_validate(c).model_dump() for c in contents],
        pagination=PaginationMeta.for_page(total, page, per_page),
    )


# POST /contents - admin, editor, writer
@router.post("", response_model=APIResponse, status_code=status.HTTP_201_CREATED)
async def create_content(
    body: ContentCreate,
    caller: User = require_role("admin", "editor", "writer"),
    db: AsyncSession = Depends(get_db),
):
    await workspace_service.get_accessible_workspace(db, body.workspace_id, caller)
    content = await content_service.create_content(db, body, caller)
    return APIResponse(
        status="success",
        data=ContentResponse.model_validate(content).model_dump(),
        message="Content created",
    )


# GET /contents/board
@router.get("/board", response_model=APIResponse)
async def content_board(
    workspace_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await workspace_service.get_accessible_workspace(db, workspace_id, current_user)
    columns = await content_service.get_board(db, workspace_id)
    return APIResponse(status="success", data=[c.model_dump() for c in columns])


# GET /contents/{id}
@router.get("/{content_id}", response_model=APIResponse)
async def get_content(
    content_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    content = await _get_content_or_404(db, content_id, current_user)
    return APIResponse(
        status="success",
        data=ContentResponse.model_validate(content).model_dump(),
    )


# PUT /contents/{id} - admin, editor, writer
@router.put("/{content_id}", response_model=APIResponse)
async def update_content(
    content_id: uuid.UUID,
    body: ContentUpdate,
    caller: User = require_role("admin", "editor", "writer"),
    db: AsyncSession = Depends(get_db),
):
    content = await _get_content_or_404(db, content_id, caller)
    updated = await content_service.update_content(db, content, body, caller)
    return APIResponse(
        status="success",
        data=ContentResponse.model_validate(updated).model_dump(),
    )


# DELETE /contents/{id} - admin, editor, writer (ideas and drafts only)
@router.delete("/{content_id}", response_model=APIResponse)
async def delete_content(
    content_id: uuid.UUID,
    caller: User = require_role("admin", "editor", "writer"),
    db: AsyncSession = Depends(get_db),
):
    content = await _get_content_or_404(db, content_id, caller)
    await content_service.delete_content(db, content, caller)
    return APIResponse(status="success", message="Content deleted")


# PATCH /contents/{id}/status - role-based
@router.patch("/{content_id}/status", response_model=APIResponse)
async def change_status(
    content_id: uuid.UUID,
    body: StatusChangeRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    content = await _get_content_or_404(db, content_id, current_user)
    updated = await content_service.change_status(db, content, body, current_user)
    return APIResponse(
        status="success",
        data=ContentResponse.model_validate(updated).model_dump(),
        message=f"Status changed to {body.to_status.value}",
    )


# GET /contents/{id}/approvals
@router.get("/{content_id}/approvals", response_model=APIResponse)
async def list_approvals(
    content_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await _get_content_or_404(db, content_id, current_user)
    approvals = await content_service.list_approvals(db, content_id)
    return APIResponse(
        status="success",
        data=[ContentApprovalResponse.model_validate(a).model_dump() for a in approvals],
    )
