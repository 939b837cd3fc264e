"""Analytics business logic: load a workspace's reports and aggregate them."""
import uuid
from datetime import datetime, timedelta

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from contentops.middleware.error_handler import AppException
from contentops.middleware.metrics import record_aggregation
from contentops.models.analytics import AnalyticsReport
from contentops.models.user import User
from contentops.repositories import analytics_repository
from contentops.schemas.analytics import (
    AnalyticsDashboard,
    AnalyticsTotals,
    ChannelTotals,
    ChartPoint,
    ContentRanking,
    ReportCreate,
    ReportSummary,
)
from contentops.services import report_aggregator, report_csv
from contentops.utils.helpers import utc_now

logger = structlog.get_logger()

_PERIOD_DAYS = {"7d": 7, "30d": 30, "90d": 90, "365d": 365}


def _period_start(period: str) -> datetime | None:
    days = _PERIOD_DAYS.get(period)
    if days is None:
        return None
    return utc_now() - timedelta(days=days)


async def load_reports(
    db: AsyncSession, *, user_id: uuid.UUID, workspace_id: uuid.UUID, period: str = "all",
) -> list[AnalyticsReport]:
    try:
        reports = await analytics_repository.list_reports(
            db, user_id=user_id, workspace_id=workspace_id, since=_period_start(period),
        )
    except SQLAlchemyError as exc:
        logger.error(
            "analytics_load_failed",
            workspace_id=str(workspace_id),
            user_id=str(user_id),
            error=str(exc),
        )
        raise AppException(status_code=503, detail="Failed to load analytics data") from exc

    rows_total = report_aggregator.count_rows(reports)
    rows_resolved = sum(1 for _ in report_aggregator.resolve_rows(reports))
    record_aggregation(rows_processed=rows_resolved, rows_skipped=rows_total - rows_resolved)
    logger.info(
        "analytics_reports_loaded",
        workspace_id=str(workspace_id),
        reports=len(reports),
        rows=rows_total,
    )
    return reports


async def get_dashboard(
    db: AsyncSession, *, user_id: uuid.UUID, workspace_id: uuid.UUID, period: str = "all", limit: int | None = None,
) -> AnalyticsDashboard:
    reports = await load_reports(db, user_id=user_id, workspace_id=workspace_id, period=period)
    return report_aggregator.build_dashboard(reports, limit=limit)


async def get_timeline(
    db: AsyncSession, *, user_id: uuid.UUID, workspace_id: uuid.UUID, period: str = "all",
) -> list[ChartPoint]:
    reports = await load_reports(db, user_id=user_id, workspace_id=workspace_id, period=period)
    return report_aggregator.build_timeline(reports)


async def get_top_content(
    db: AsyncSession, *, user_id: uuid.UUID, workspace_id: uuid.UUID, period: str = "all", limit: int | None = None,
) -> list[ContentRanking]:
    reports = await load_reports(db, user_id=user_id, workspace_id=workspace_id, period=period)
    return report_aggregator.rank_top_content(reports, limit=limit)


async def get_channels(
    db: AsyncSession, *, user_id: uuid.UUID, workspace_id: uuid.UUID, period: str = "all",
) -> dict[str, ChannelTotals]:
    reports = await load_reports(db, user_id=user_id, workspace_id=workspace_id, period=period)
    return report_aggregator.channel_breakdown(reports)


async def get_totals(
    db: AsyncSession, *, user_id: uuid.UUID, workspace_id: uuid.UUID, period: str = "all",
) -> AnalyticsTotals:
    reports = await load_reports(db, user_id=user_id, workspace_id=workspace_id, period=period)
    return report_aggregator.aggregate_totals(reports)


# --- Reports ---

async def import_report(db: AsyncSession, data: ReportCreate, user: User) -> tuple[AnalyticsReport, list[str]]:
    """Parse uploaded CSV text and store it as a new report."""
    headers, rows = report_csv.parse_csv_text(data.csv_text)
    report = AnalyticsReport(
        workspace_id=data.workspace_id,
        user_id=user.id,
        report_name=data.report_name,
        report_type=data.report_type,
        data_source="csv_upload",
        csv_data=rows,
        raw_csv_text=data.csv_text,
        report_metadata=report_csv.build_metadata(headers, rows),
        date_range_start=data.date_range_start,
        date_range_end=data.date_range_end,
    )
    await analytics_repository.create(db, report)
    logger.info(
        "analytics_report_imported",
        report_id=str(report.id),
        report_type=data.report_type.value,
        rows=len(rows),
    )
    return report, headers


def summarize(report: AnalyticsReport) -> ReportSummary:
    rows = report.csv_data if isinstance(report.csv_data, list) else []
    return ReportSummary(
        id=report.id,
        workspace_id=report.workspace_id,
        report_name=report.report_name,
        report_type=report.report_type,
        data_source=report.data_source,
        row_count=len(rows),
        date_range_start=report.date_range_start,
        date_range_end=report.date_range_end,
        created_at=report.created_at,
    )


async def list_report_summaries(
    db: AsyncSession, *, user_id: uuid.UUID, workspace_id: uuid.UUID,
) -> list[ReportSummary]:
    reports = await analytics_repository.list_reports(db, user_id=user_id, workspace_id=workspace_id)
    return [summarize(r) for r in reports]


async def get_report(db: AsyncSession, report_id: uuid.UUID, user: User) -> AnalyticsReport | None:
    return await analytics_repository.get_by_id(db, report_id, user_id=user.id)


async def delete_report(db: AsyncSession, report: AnalyticsReport) -> None:
    await analytics_repository.delete(db, report)
    logger.info("analytics_report_deleted", report_id=str(report.id))


def export_report(report: AnalyticsReport) -> str:
    return report_csv.export_report_csv(report.raw_csv_text, report.csv_data)
