"""Analytics request/response schemas."""
import uuid
from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, Field

from contentops.models.analytics import ReportType

Period = Literal["7d", "30d", "90d", "365d", "all"]


class ChartPoint(BaseModel):
    date: str
    reach: int = 0
    engagement: int = 0
    platform: str


class ContentRanking(BaseModel):
    title: str
    platform: str
    reach: int = 0
    engagement: int = 0
    engagement_rate: str = "0.00"
    date: str


class ChannelTotals(BaseModel):
    reach: int = 0
    engagement: int = 0
    posts: int = 0


class AnalyticsTotals(BaseModel):
    total_reach: int = 0
    engagement: int = 0
    conversions: int = 0
    revenue: int = 0


class ChangeIndicator(BaseModel):
    percent_change: str = "0"
    is_positive: bool = True


class MetricWithChange(BaseModel):
    value: int
    previous: int
    change: ChangeIndicator


class DashboardTiles(BaseModel):
    total_reach: MetricWithChange
    engagement: MetricWithChange
    conversions: MetricWithChange
    revenue: MetricWithChange


class AnalyticsDashboard(BaseModel):
    totals: AnalyticsTotals
    tiles: DashboardTiles
    timeline: list[ChartPoint] = []
    top_content: list[ContentRanking] = []
    channels: dict[str, ChannelTotals] = {}
    report_count: int = 0


class ReportCreate(BaseModel):
    """CSV text produced by the upload pipeline, ready to be stored."""
    workspace_id: uuid.UUID
    report_name: str = Field(min_length=1, max_length=255)
    report_type: ReportType
    csv_text: str = Field(min_length=1)
    date_range_start: date | None = None
    date_range_end: date | None = None


class ReportSummary(BaseModel):
    id: uuid.UUID
    workspace_id: uuid.UUID
    report_name: str
    report_type: ReportType
    data_source: str
    row_count: int = 0
    date_range_start: date | None = None
    date_range_end: date | None = None
    created_at: datetime


class ReportResponse(BaseModel):
    id: uuid.UUID
    workspace_id: uuid.UUID
    user_id: uuid.UUID
    report_name: str
    report_type: ReportType
    data_source: str
    csv_data: list
    report_metadata: dict | None = None
    date_range_start: date | None = None
    date_range_end: date | None = None
    created_at: datetime

    model_config = {"from_attributes": True}


class ReportImportResult(BaseModel):
    report_id: uuid.UUID
    rows_imported: int
    headers: list[str]
