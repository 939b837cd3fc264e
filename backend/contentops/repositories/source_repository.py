"""Knowledge source data access layer."""
import uuid as _uuid

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from contentops.models.content import ContentPiece
from contentops.models.content_source import ContentSource


async def get_by_id(db: AsyncSession, source_id: _uuid.UUID) -> ContentSource | None:
    return (await db.execute(select(ContentSource).where(ContentSource.id == source_id))).scalar_one_or_none()


async def list_sources(
    db: AsyncSession,
    *,
    workspace_id: _uuid.UUID,
    search: str | None = None,
    skip: int = 0,
    limit: int = 20,
) -> tuple[list[ContentSource], int]:
    q = select(ContentSource).where(ContentSource.workspace_id == workspace_id)
    if search:
        pattern = f"%{search}%"
        q = q.where(or_(ContentSource.title.ilike(pattern), ContentSource.content.ilike(pattern)))

    total = (await db.execute(select(func.count()).select_from(q.subquery()))).scalar() or 0
    rows = (await db.execute(q.order_by(ContentSource.created_at.desc()).offset(skip).limit(limit))).scalars().all()
    return list(rows), total


async def existing_ids(
    db: AsyncSession, *, workspace_id: _uuid.UUID, source_ids: list[_uuid.UUID],
) -> set[_uuid.UUID]:
    """The subset of ``source_ids`` that exist in the workspace."""
    if not source_ids:
        return set()
    q = select(ContentSource.id).where(
        ContentSource.workspace_id == workspace_id,
        ContentSource.id.in_(source_ids),
    )
    return set((await db.execute(q)).scalars().all())


async def list_citing_pieces(db: AsyncSession, *, workspace_id: _uuid.UUID) -> list[ContentPiece]:
    """Workspace pieces that cite at least one source."""
    q = select(ContentPiece).where(
        ContentPiece.workspace_id == workspace_id,
        ContentPiece.source_ids.is_not(None),
    )
    return list((await db.execute(q)).scalars().all())


async def create(db: AsyncSession, source: ContentSource) -> ContentSource:
    db.add(source)
    await db.flush()
    return source


async def update(db: AsyncSession, source: ContentSource) -> ContentSource:
    await db.flush()
    return source


async def delete(db: AsyncSession, source: ContentSource) -> None:
    await db.delete(source)
    await db.flush()
