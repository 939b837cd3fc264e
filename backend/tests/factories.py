"""Helpers that insert test rows directly through a session."""
import uuid
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from contentops.models.analytics import AnalyticsReport, ReportType
from contentops.models.content import ContentPiece, ContentStatus
from contentops.models.content_source import ContentSource
from contentops.models.user import User, UserRole
from contentops.models.workspace import Workspace
from contentops.models.workspace_member import WorkspaceMember
from contentops.services.auth_service import create_access_token, hash_password


def auth_headers(user: User) -> dict:
    token = create_access_token(str(user.id), user.role.value)
    return {"Authorization": f"Bearer {token}"}


async def create_user(
    db: AsyncSession, role: UserRole = UserRole.ADMIN, email: str | None = None,
) -> User:
    user = User(
        id=uuid.uuid4(),
        email=email or f"{role.value}_{uuid.uuid4().hex[:8]}@test.com",
        password_hash=hash_password("testpass123"),
        name=f"Test {role.value.title()}",
        role=role,
    )
    db.add(user)
    await db.commit()
    return user


async def create_workspace(db: AsyncSession, owner: User, *members: User) -> Workspace:
    workspace = Workspace(id=uuid.uuid4(), name="Acme Content", brand_name="Acme", owner_id=owner.id)
    db.add(workspace)
    await db.flush()
    for member in members:
        db.add(WorkspaceMember(user_id=member.id, workspace_id=workspace.id))
    await db.commit()
    return workspace


async def create_report(
    db: AsyncSession,
    workspace: Workspace,
    user: User,
    report_type: ReportType,
    rows: list,
    *,
    name: str = "Export",
    created_at: datetime | None = None,
) -> AnalyticsReport:
    report = AnalyticsReport(
        id=uuid.uuid4(),
        workspace_id=workspace.id,
        user_id=user.id,
        report_name=name,
        report_type=report_type,
        data_source="csv_upload",
        csv_data=rows,
        created_at=created_at or datetime.now(timezone.utc),
    )
    db.add(report)
    await db.commit()
    return report


async def create_content(
    db: AsyncSession,
    workspace: Workspace,
    creator: User,
    status: ContentStatus = ContentStatus.IDEA,
    platform: str = "linkedin",
) -> ContentPiece:
    content = ContentPiece(
        id=uuid.uuid4(),
        workspace_id=workspace.id,
        title=f"Test Content {uuid.uuid4().hex[:6]}",
        body="Test body",
        platform=platform,
        status=status,
        created_by=creator.id,
    )
    db.add(content)
    await db.commit()
    return content


async def create_source(
    db: AsyncSession,
    workspace: Workspace,
    user: User,
    *,
    title: str = "Interview notes",
    created_at: datetime | None = None,
) -> ContentSource:
    source = ContentSource(
        id=uuid.uuid4(),
        workspace_id=workspace.id,
        user_id=user.id,
        type="text",
        title=title,
        content="Customers care most about onboarding time.",
        tags=["research"],
        created_at=created_at or datetime.now(timezone.utc),
    )
    db.add(source)
    await db.commit()
    return source
