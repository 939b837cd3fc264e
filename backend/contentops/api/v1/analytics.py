"""Analytics API - dashboard views and uploaded reports."""
import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncSession

from contentops.dependencies import get_current_user, get_db, require_role
from contentops.models.user import User
from contentops.schemas.analytics import ReportCreate, ReportImportResult, ReportResponse
from contentops.schemas.common import APIResponse
from contentops.services import analytics_service, workspace_service

router = APIRouter()

PERIOD_PATTERN = "^(7d|30d|90d|365d|all)$"


# GET /analytics/dashboard
@router.get("/dashboard", response_model=APIResponse)
async def get_dashboard(
    workspace_id: uuid.UUID,
    period: str = Query("all", pattern=PERIOD_PATTERN),
    limit: int | None = Query(None, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await workspace_service.get_accessible_workspace(db, workspace_id, current_user)
    dashboard = await analytics_service.get_dashboard(
        db, user_id=current_user.id, workspace_id=workspace_id, period=period, limit=limit,
    )
    return APIResponse(status="success", data=dashboard.model_dump())


# GET /analytics/timeline
@router.get("/timeline", response_model=APIResponse)
async def get_timeline(
    workspace_id: uuid.UUID,
    period: str = Query("all", pattern=PERIOD_PATTERN),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await workspace_service.get_accessible_workspace(db, workspace_id, current_user)
    points = await analytics_service.get_timeline(
        db, user_id=current_user.id, workspace_id=workspace_id, period=period,
    )
    return APIResponse(status="success", data=[p.model_dump() for p in points])


# GET /analytics/top-content
@router.get("/top-content", response_model=APIResponse)
async def get_top_content(
    workspace_id: uuid.UUID,
    period: str = Query("all", pattern=PERIOD_PATTERN),
    limit: int | None = Query(None, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await workspace_service.get_accessible_workspace(db, workspace_id, current_user)
    ranking = await analytics_service.get_top_content(
        db, user_id=current_user.id, workspace_id=workspace_id, period=period, limit=limit,
    )
    return APIResponse(status="success", data=[r.model_dump() for r in ranking])


# GET /analytics/channels
@router.get("/channels", response_model=APIResponse)
async def get_channels(
    workspace_id: uuid.UUID,
    period: str = Query("all", pattern=PERIOD_PATTERN),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await workspace_service.get_accessible_workspace(db, workspace_id, current_user)
    channels = await analytics_service.get_channels(
        db, user_id=current_user.id, workspace_id=workspace_id, period=period,
    )
    return APIResponse(status="success", data={k: v.model_dump() for k, v in channels.items()})


# GET /analytics/totals
@router.get("/totals", response_model=APIResponse)
async def get_totals(
    workspace_id: uuid.UUID,
    period: str = Query("all", pattern=PERIOD_PATTERN),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await workspace_service.get_accessible_workspace(db, workspace_id, current_user)
    totals = await analytics_service.get_totals(
        db, user_id=current_user.id, workspace_id=workspace_id, period=period,
    )
    return APIResponse(status="success", data=totals.model_dump())


# GET /analytics/reports
@router.get("/reports", response_model=APIResponse)
async def list_reports(
    workspace_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await workspace_service.get_accessible_workspace(db, workspace_id, current_user)
    summaries = await analytics_service.list_report_summaries(
        db, user_id=current_user.id, workspace_id=workspace_id,
    )
    return APIResponse(status="success", data=[s.model_dump() for s in summaries])


# POST /analytics/reports - admin, editor, writer
@router.post("/reports", response_model=APIResponse, status_code=status.HTTP_201_CREATED)
async def import_report(
    body: ReportCreate,
    caller: User = require_role("admin", "editor", "writer"),
    db: AsyncSession = Depends(get_db),
):
    await workspace_service.get_accessible_workspace(db, body.workspace_id, caller)
    report, headers = await analytics_service.import_report(db, body, caller)
    result = ReportImportResult(report_id=report.id, rows_imported=len(report.csv_data), headers=headers)
    return APIResponse(
        status="success",
        data=result.model_dump(),
        message=f"{result.rows_imported} rows imported from {body.report_name}",
    )


async def _get_report_or_404(db: AsyncSession, report_id: uuid.UUID, user: User):
    report = await analytics_service.get_report(db, report_id, user)
    if not report:
        raise HTTPException(status_code=404, detail="Report not found")
    await workspace_service.get_accessible_workspace(db, report.workspace_id, user)
    return report


# GET /analytics/reports/{id}
@router.get("/reports/{report_id}", response_model=APIResponse)
async def get_report(
    report_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    report = await _get_report_or_404(db, report_id, current_user)
    return APIResponse(status="success", data=ReportResponse.model_validate(report).model_dump())


# GET /analytics/reports/{id}/export
@router.get("/reports/{report_id}/export", response_class=PlainTextResponse)
async def export_report(
    report_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    report = await _get_report_or_404(db, report_id, current_user)
    filename = f"{report.report_type.value}_export_{report.created_at.date().isoformat()}.csv"
    return PlainTextResponse(
        analytics_service.export_report(report),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


# DELETE /analytics/reports/{id}
@router.delete("/reports/{report_id}", response_model=APIResponse)
async def delete_report(
    report_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    report = await _get_report_or_404(db, report_id, current_user)
    await analytics_service.delete_report(db, report)
    return APIResponse(status="success", message="Report deleted")
