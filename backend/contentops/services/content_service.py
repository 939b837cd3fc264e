"""Content pipeline business logic + workflow state machine."""
import uuid

import structlog
from fastapi import HTTPException
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from contentops.models.content import STATUS_FLOW, ContentPiece, ContentStatus
from contentops.models.content_approval import ContentApproval
from contentops.models.user import User
from contentops.schemas.content import (
    BoardColumn,
    ContentCreate,
    ContentFilter,
    ContentResponse,
    ContentUpdate,
    StatusChangeRequest,
)
from contentops.services import source_service
from contentops.utils.helpers import utc_now

logger = structlog.get_logger()

# --- Workflow transition rules ---

_WRITER_MOVES: dict[str, set[str]] = {
    "idea": {"draft"},
    "draft": {"idea", "review"},
}

_EDITOR_MOVES: dict[str, set[str]] = {
    **_WRITER_MOVES,
    "review": {"approved", "draft"},
    "approved": {"published", "review"},
}

TRANSITIONS: dict[str, dict[str, set[str]]] = {
    # role -> { from_status -> set(allowed_to_statuses) }
    "writer": _WRITER_MOVES,
    "editor": _EDITOR_MOVES,
    "admin": _EDITOR_MOVES,
    "viewer": {},
}

URGENT_ROLES = ("editor", "admin")
CREATABLE_STATUSES = (ContentStatus.IDEA, ContentStatus.DRAFT)
DELETABLE_STATUSES = (ContentStatus.IDEA, ContentStatus.DRAFT)


def _stage(status: ContentStatus) -> int:
    return STATUS_FLOW.index(status)


def validate_transition(
    role: str, from_status: ContentStatus, to_status: ContentStatus, is_urgent: bool = False,
) -> None:
    """Validate status transition for the given role."""
    if is_urgent and role in URGENT_ROLES and _stage(to_status) > _stage(from_status):
        # Urgent: editors may jump forward past intermediate stages
        return

    allowed = TRANSITIONS.get(role, {}).get(from_status.value, set())
    if to_status.value not in allowed:
        raise HTTPException(
            status_code=400,
            detail=f"Role '{role}' cannot transition from '{from_status.value}' to '{to_status.value}'",
        )


# --- CRUD ---

async def create_content(db: AsyncSession, data: ContentCreate, user: User) -> ContentPiece:
    if data.status not in CREATABLE_STATUSES:
        raise HTTPException(status_code=400, detail="New content must start as an idea or a draft")
    source_ids = await source_service.validate_source_ids(db, data.workspace_id, data.source_ids)
    content = ContentPiece(
        workspace_id=data.workspace_id,
        title=data.title,
        body=data.body,
        platform=data.platform,
        status=data.status,
        tags=data.tags,
        source_ids=source_ids,
        created_by=user.id,
    )
    db.add(content)
    await db.flush()
    logger.info("content_created", content_id=str(content.id), workspace_id=str(data.workspace_id))
    return content


async def get_content(db: AsyncSession, content_id: uuid.UUID) -> ContentPiece | None:
    return await db.get(ContentPiece, content_id)


async def list_contents(
    db: AsyncSession, filters: ContentFilter,
) -> tuple[list[ContentPiece], int]:
    query = select(ContentPiece).where(ContentPiece.workspace_id == filters.workspace_id)

    if filters.status:
        query = query.where(ContentPiece.status == filters.status)
    if filters.platform:
        query = query.where(ContentPiece.platform == filters.platform)
    if filters.search:
        search = f"%{filters.search}%"
        query = query.where(ContentPiece.title.ilike(search))

    count_q = select(func.count()).select_from(query.subquery())
    total = (await db.execute(count_q)).scalar() or 0

    offset = (filters.page - 1) * filters.per_page
    query = query.order_by(ContentPiece.created_at.desc()).offset(offset).limit(filters.per_page)
    result = await db.execute(query)

    return list(result.scalars().all()), total


async def update_content(db: AsyncSession, content: ContentPiece, data: ContentUpdate, user: User) -> ContentPiece:
    if content.status == ContentStatus.PUBLISHED:
        raise HTTPException(status_code=400, detail="Published content cannot be edited")
    updates = data.model_dump(exclude_unset=True)
    if "source_ids" in updates:
        updates["source_ids"] = await source_service.validate_source_ids(
            db, content.workspace_id, updates["source_ids"],
        )
    changed = []
    for key, value in updates.items():
        if getattr(content, key) != value:
            setattr(content, key, value)
            changed.append(key)
    if changed:
        logger.info("content_updated", content_id=str(content.id), fields=changed, user_id=str(user.id))
    return content


async def delete_content(db: AsyncSession, content: ContentPiece, user: User) -> None:
    if content.status not in DELETABLE_STATUSES:
        raise HTTPException(status_code=400, detail="Only ideas and drafts can be deleted")
    await db.delete(content)
    logger.info("content_deleted", content_id=str(content.id), user_id=str(user.id))


async def change_status(
    db: AsyncSession, content: ContentPiece, req: StatusChangeRequest, user: User,
) -> ContentPiece:
    validate_transition(user.role.value, content.status, req.to_status, req.is_urgent)

    old_status = content.status
    content.status = req.to_status

    now = utc_now()
    if req.to_status == ContentStatus.APPROVED or (
        req.to_status == ContentStatus.PUBLISHED and content.approved_at is None
    ):
        content.approved_at = now
        content.approved_by = user.id
    if req.to_status == ContentStatus.PUBLISHED:
        content.published_at = now

    db.add(ContentApproval(
        content_id=content.id,
        from_status=old_status,
        to_status=req.to_status,
        reviewer_id=user.id,
        comment=req.comment,
        is_urgent=req.is_urgent,
    ))
    logger.info(
        "content_status_changed",
        content_id=str(content.id),
        from_status=old_status.value,
        to_status=req.to_status.value,
        urgent=req.is_urgent,
    )
    return content


# --- Board ---

async def get_board(db: AsyncSession, workspace_id: uuid.UUID) -> list[BoardColumn]:
    """Group a workspace's pieces by stage, in flow order."""
    result = await db.execute(
        select(ContentPiece)
        .where(ContentPiece.workspace_id == workspace_id)
        .order_by(ContentPiece.updated_at.desc())
    )
    columns = {status: BoardColumn(status=status) for status in STATUS_FLOW}
    for piece in result.scalars().all():
        column = columns[piece.status]
        column.items.append(ContentResponse.model_validate(piece))
        column.count += 1
    return list(columns.values())


# --- Approval history ---

async def list_approvals(db: AsyncSession, content_id: uuid.UUID) -> list[ContentApproval]:
    result = await db.execute(
        select(ContentApproval)
        .where(ContentApproval.content_id == content_id)
        .order_by(ContentApproval.created_at.desc())
    )
    return list(result.scalars().all())
