"""Seed a demo workspace with sample analytics reports, a knowledge source and content pieces.

Usage (from backend/ directory):
    python scripts/seed_test_data.py

Prerequisites:
    - DB is running and migrated (alembic upgrade head)
"""
import asyncio
import sys
from pathlib import Path

# Windows: asyncpg requires SelectorEventLoop
if sys.platform == "win32":
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

# Allow imports from backend/contentops/
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from contentops.config import settings
from contentops.models import Base  # noqa: F401 - ensures all models are registered
from contentops.models.analytics import AnalyticsReport, ReportType
from contentops.models.content import ContentPiece, ContentStatus
from contentops.models.content_source import ContentSource
from contentops.models.user import User, UserRole
from contentops.models.workspace import Workspace
from contentops.services import report_csv
from contentops.services.auth_service import hash_password

ADMIN_EMAIL = "admin@contentops.local"
WORKSPACE_NAME = "Demo Workspace"

SAMPLE_REPORTS: dict[ReportType, str] = {
    ReportType.LINKEDIN: (
        "Date,Update title,Impressions,Reactions,Comments,Shares,Clicks\n"
        "2024-01-08,Hiring our first designer,4200,120,34,12,88\n"
        "2024-01-15,What we learned shipping v2,6100,210,51,30,140\n"
    ),
    ReportType.YOUTUBE: (
        "Date,Video title,Views,Likes,Comments\n"
        "2024-01-10,Product walkthrough,1800,95,14\n"
        "2024-01-24,Customer story: Acme,950,40,6\n"
    ),
    ReportType.NEWSLETTER: (
        "Date,Subject,Sends,Opens,Clicks\n"
        "2024-01-05,January roundup,5000,2100,310\n"
    ),
    ReportType.LEAD_MAGNET: (
        "Magnet Title,Downloads,Email Signups\n"
        "Content calendar template,240,61\n"
    ),
}


async def _get_or_create_admin(session: AsyncSession) -> User:
    result = await session.execute(select(User).where(User.email == ADMIN_EMAIL))
    admin = result.scalars().first()
    if admin is None:
        admin = User(
            email=ADMIN_EMAIL,
            password_hash=hash_password("admin1234"),
            name="Admin",
            role=UserRole.ADMIN,
        )
        session.add(admin)
        await session.flush()
        print(f"Created admin: {ADMIN_EMAIL} / admin1234")
    return admin


async def seed(session: AsyncSession) -> None:
    admin = await _get_or_create_admin(session)

    result = await session.execute(select(Workspace).where(Workspace.name == WORKSPACE_NAME))
    workspace = result.scalars().first()
    if workspace is not None:
        print(f"Workspace already exists: {WORKSPACE_NAME} (id={workspace.id})")
        return

    workspace = Workspace(name=WORKSPACE_NAME, brand_name="Demo", owner_id=admin.id)
    session.add(workspace)
    await session.flush()

    for report_type, text in SAMPLE_REPORTS.items():
        headers, rows = report_csv.parse_csv_text(text)
        session.add(AnalyticsReport(
            workspace_id=workspace.id,
            user_id=admin.id,
            report_name=f"{report_type.value} sample export",
            report_type=report_type,
            csv_data=rows,
            raw_csv_text=text,
            report_metadata=report_csv.build_metadata(headers, rows),
        ))

    source = ContentSource(
        workspace_id=workspace.id,
        user_id=admin.id,
        title="Customer interview: Acme",
        content="Acme cut onboarding from three weeks to four days after switching.",
        summary="Faster onboarding is the headline benefit",
        tags=["customer-story"],
    )
    session.add(source)
    await session.flush()

    for title, status in [
        ("Five hooks that worked in Q1", ContentStatus.IDEA),
        ("Behind the scenes: release week", ContentStatus.DRAFT),
        ("Customer story: Acme", ContentStatus.REVIEW),
    ]:
        session.add(ContentPiece(
            workspace_id=workspace.id,
            title=title,
            platform="linkedin",
            status=status,
            source_ids=[str(source.id)] if "Acme" in title else None,
            created_by=admin.id,
        ))

    await session.commit()

    print()
    print("─" * 60)
    print("Seeded successfully!")
    print(f"  workspace_id = {workspace.id}")
    print(f"  reports      = {len(SAMPLE_REPORTS)}")
    print(f"  source_id    = {source.id}")
    print("─" * 60)


async def main() -> None:
    engine = create_async_engine(settings.DATABASE_URL, echo=False)
    async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with async_session() as session:
        await seed(session)
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
