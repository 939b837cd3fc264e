"""Analytics report data access layer."""
import uuid as _uuid
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from contentops.models.analytics import AnalyticsReport


async def get_by_id(
    db: AsyncSession, report_id: _uuid.UUID, *, user_id: _uuid.UUID,
) -> AnalyticsReport | None:
    """A report uploaded by `user_id`. Callers check workspace access."""
    q = select(AnalyticsReport).where(AnalyticsReport.id == report_id, AnalyticsReport.user_id == user_id)
    return (await db.execute(q)).scalar_one_or_none()


async def list_reports(
    db: AsyncSession,
    *,
    user_id: _uuid.UUID,
    workspace_id: _uuid.UUID,
    since: datetime | None = None,
) -> list[AnalyticsReport]:
    """All of a user's reports in a workspace, newest first."""
    q = select(AnalyticsReport).where(
        AnalyticsReport.user_id == user_id,
        AnalyticsReport.workspace_id == workspace_id,
    )
    if since:
        q = q.where(AnalyticsReport.created_at >= since)
    rows = (await db.execute(q.order_by(AnalyticsReport.created_at.desc()))).scalars().all()
    return list(rows)


async def create(db: AsyncSession, report: AnalyticsReport) -> AnalyticsReport:
    db.add(report)
    await db.flush()
    return report


async def delete(db: AsyncSession, report: AnalyticsReport) -> None:
    await db.delete(report)
    await db.flush()
