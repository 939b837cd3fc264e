"""Knowledge source business logic."""
import uuid

import structlog
from fastapi import HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from contentops.models.content_source import ContentSource
from contentops.models.user import User
from contentops.repositories import source_repository
from contentops.schemas.source import SourceCreate, SourceUpdate

logger = structlog.get_logger()


async def create_source(db: AsyncSession, data: SourceCreate, user: User) -> ContentSource:
    source = ContentSource(**data.model_dump(), user_id=user.id)
    await source_repository.create(db, source)
    logger.info("source_created", source_id=str(source.id), workspace_id=str(data.workspace_id))
    return source


async def get_source(db: AsyncSession, source_id: uuid.UUID) -> ContentSource | None:
    return await source_repository.get_by_id(db, source_id)


async def list_sources(
    db: AsyncSession, workspace_id: uuid.UUID, *, search: str | None = None, page: int = 1, per_page: int = 20,
) -> tuple[list[ContentSource], int]:
    return await source_repository.list_sources(
        db, workspace_id=workspace_id, search=search, skip=(page - 1) * per_page, limit=per_page,
    )


async def update_source(db: AsyncSession, source: ContentSource, data: SourceUpdate, user: User) -> ContentSource:
    changed = []
    for key, value in data.model_dump(exclude_unset=True).items():
        if value is None and key in ("title", "content"):
            continue
        if getattr(source, key) != value:
            setattr(source, key, value)
            changed.append(key)
    if changed:
        await source_repository.update(db, source)
        logger.info("source_updated", source_id=str(source.id), fields=changed, user_id=str(user.id))
    return source


async def delete_source(db: AsyncSession, source: ContentSource, user: User) -> None:
    """Delete a source and drop it from every piece that cites it."""
    source_key = str(source.id)
    detached = 0
    for piece in await source_repository.list_citing_pieces(db, workspace_id=source.workspace_id):
        if piece.source_ids and source_key in piece.source_ids:
            piece.source_ids = [sid for sid in piece.source_ids if sid != source_key]
            detached += 1
    await source_repository.delete(db, source)
    logger.info("source_deleted", source_id=source_key, detached_from=detached, user_id=str(user.id))


async def validate_source_ids(
    db: AsyncSession, workspace_id: uuid.UUID, source_ids: list[str] | None,
) -> list[str] | None:
    """Check cited ids against the workspace's sources.

    Returns the ids in canonical UUID form with duplicates removed.
    """
    if source_ids is None:
        return None
    parsed: list[uuid.UUID] = []
    for raw in source_ids:
        try:
            parsed.append(uuid.UUID(str(raw)))
        except ValueError:
            raise HTTPException(status_code=400, detail=f"Invalid source id: {raw}")
    parsed = list(dict.fromkeys(parsed))

    found = await source_repository.existing_ids(db, workspace_id=workspace_id, source_ids=parsed)
    missing = [str(sid) for sid in parsed if sid not in found]
    if missing:
        raise HTTPException(status_code=400, detail=f"Unknown sources for this workspace: {', '.join(missing)}")
    return [str(sid) for sid in parsed]
