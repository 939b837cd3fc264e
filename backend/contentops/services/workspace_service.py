"""Workspace access checks."""
import uuid

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from contentops.models.user import User, UserRole
from contentops.models.workspace import Workspace
from contentops.models.workspace_member import WorkspaceMember


async def is_member(db: AsyncSession, workspace: Workspace, user: User) -> bool:
    if user.role == UserRole.ADMIN or workspace.owner_id == user.id:
        return True
    result = await db.execute(
        select(WorkspaceMember.id).where(
            WorkspaceMember.workspace_id == workspace.id,
            WorkspaceMember.user_id == user.id,
        )
    )
    return result.first() is not None


async def get_accessible_workspace(db: AsyncSession, workspace_id: uuid.UUID, user: User) -> Workspace:
    """Return the workspace if the user may work in it, else raise 404/403."""
    workspace = await db.get(Workspace, workspace_id)
    if workspace is None:
        raise HTTPException(status_code=404, detail="Workspace not found")
    if not await is_member(db, workspace, user):
        raise HTTPException(status_code=403, detail="Not a member of this workspace")
    return workspace
