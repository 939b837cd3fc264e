"""Aggregation of uploaded CSV analytics reports into dashboard views.

Every uploaded report carries a platform tag and a list of loosely-typed
rows whose headers depend on the export that produced them. Rows are first
resolved into uniform (date, title, reach, engagement, impressions,
conversions) records using the per-platform column mapping, then folded into
four views: a timeline, a top-content ranking, per-channel totals and the
global totals behind the dashboard tiles.

Nothing here raises on bad input. Malformed rows are skipped, unparsable
numbers count as zero and rows with no metrics are left out of the views.
"""
import math
import re
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Protocol

from contentops.config import settings
from contentops.models.analytics import ReportType
from contentops.schemas.analytics import (
    AnalyticsDashboard,
    AnalyticsTotals,
    ChangeIndicator,
    ChannelTotals,
    ChartPoint,
    ContentRanking,
    DashboardTiles,
    MetricWithChange,
)
from contentops.services.column_mapping import PlatformColumns, columns_for
from contentops.utils.helpers import parse_int, truncate

_DMY = re.compile(r"^\d{1,2}/\d{1,2}/\d{4}$")
_YMD = re.compile(r"^\d{4}-\d{2}-\d{2}")
_NUMERIC = re.compile(r"^\s*\d+(\.\d+)?\s*$")

_DATE_KEY_HINTS = ("date", "time")
_TITLE_KEY_HINTS = ("title", "content", "post", "subject")

# Keys added by the CSV importer, never real columns
_ROW_INDEX_KEY = "row_index"
_DATE_MARKER_SUFFIX = "_is_date"


class ReportLike(Protocol):
    report_type: Any
    csv_data: Any
    created_at: Any


@dataclass(frozen=True)
class RowMetrics:
    reach: int = 0
    engagement: int = 0
    impressions: int = 0
    conversions: int = 0

    @property
    def qualifies(self) -> bool:
        return self.reach > 0 or self.engagement > 0 or self.impressions > 0

    @property
    def counts_as_post(self) -> bool:
        return self.reach != 0 or self.engagement != 0


@dataclass(frozen=True)
class ResolvedRow:
    platform: str
    date: str
    title: str
    metrics: RowMetrics


# ── Column resolution ───────────────────────────────────────────────────

def _platform_label(report_type: Any) -> str:
    if isinstance(report_type, ReportType):
        return report_type.value
    return str(report_type)


def _is_helper_key(key: Any) -> bool:
    text = str(key)
    return text == _ROW_INDEX_KEY or text.endswith(_DATE_MARKER_SUFFIX)


def _as_text(value: Any) -> str | None:
    """Stringify a cell usable as a label; booleans and blanks are not."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (dict, list)):
        return None
    text = str(value).strip()
    return text or None


def _date_portion(created_at: Any) -> str:
    if isinstance(created_at, datetime):
        return created_at.date().isoformat()
    if isinstance(created_at, date):
        return created_at.isoformat()
    if isinstance(created_at, str):
        return created_at.split("T", 1)[0]
    return ""


def resolve_date(row: Mapping, created_at: Any) -> str:
    """First column whose name or value looks like a date, else the upload date."""
    for key, value in row.items():
        if _is_helper_key(key):
            continue
        text = _as_text(value)
        if text is None:
            continue
        lowered = str(key).lower()
        if any(hint in lowered for hint in _DATE_KEY_HINTS) or _DMY.match(text) or _YMD.match(text):
            return text
    return _date_portion(created_at)


def resolve_title(row: Mapping, report_type: Any, index: int) -> str:
    for key, value in row.items():
        if _is_helper_key(key):
            continue
        lowered = str(key).lower()
        if any(hint in lowered for hint in _TITLE_KEY_HINTS):
            text = _as_text(value)
            if text is not None:
                return text

    columns = columns_for(report_type)
    if columns is not None:
        for name in columns.titles:
            text = _as_text(row.get(name))
            if text is not None:
                return text

    return f"{_platform_label(report_type)} content {index + 1}"


def _first_present(row: Mapping, candidates: Iterable[str]) -> Any:
    for name in candidates:
        value = row.get(name)
        if value is None or value is False or value == "" or value == 0:
            continue
        return value
    return None


def _metric(row: Mapping, candidates: Iterable[str]) -> int:
    return parse_int(_first_present(row, candidates))


def _follower_proxy(row: Mapping, columns: PlatformColumns) -> int:
    value = row.get(columns.follower_proxy_column)
    if isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)) or (isinstance(value, str) and _NUMERIC.match(value)):
        return parse_int(value)
    return 0


def resolve_metrics(row: Mapping, report_type: Any) -> RowMetrics:
    columns = columns_for(report_type)
    if columns is None:
        return RowMetrics()

    reach = _metric(row, columns.reach)
    impressions = _metric(row, columns.impressions)
    engagement = sum(_metric(row, component) for component in columns.engagement)
    conversions = _metric(row, columns.conversions)

    if columns.follower_proxy_column and impressions == 0:
        followers = _follower_proxy(row, columns)
        if followers > 0:
            reach = followers
            if engagement == 0:
                engagement = math.floor(followers * columns.follower_engagement_ratio)

    return RowMetrics(reach=reach, engagement=engagement, impressions=impressions, conversions=conversions)


# ── Row iteration ───────────────────────────────────────────────────────

def _rows_of(report: ReportLike) -> list:
    rows = report.csv_data
    return rows if isinstance(rows, list) else []


def count_rows(reports: Iterable[ReportLike]) -> int:
    """Raw row count, malformed entries included."""
    return sum(len(_rows_of(report)) for report in reports)


def resolve_rows(reports: Iterable[ReportLike]) -> Iterator[ResolvedRow]:
    """Resolve every well-formed row of every report, in encounter order."""
    for report in reports:
        platform = _platform_label(report.report_type)
        for index, row in enumerate(_rows_of(report)):
            if not isinstance(row, Mapping):
                continue
            yield ResolvedRow(
                platform=platform,
                date=resolve_date(row, report.created_at),
                title=resolve_title(row, report.report_type, index),
                metrics=resolve_metrics(row, report.report_type),
            )


def iter_qualifying_rows(reports: Iterable[ReportLike]) -> Iterator[ResolvedRow]:
    return (row for row in resolve_rows(reports) if row.metrics.qualifies)


# ── Views ───────────────────────────────────────────────────────────────

def _date_sort_key(text: str) -> tuple[int, date]:
    """Parsable dates first in calendar order; the rest keep encounter order."""
    parsed: date | None = None
    try:
        if _YMD.match(text):
            parsed = date.fromisoformat(text[:10])
        elif _DMY.match(text):
            parsed = datetime.strptime(text, "%d/%m/%Y").date()
        else:
            parsed = datetime.fromisoformat(text).date()
    except ValueError:
        parsed = None
    if parsed is None:
        return (1, date.max)
    return (0, parsed)


def _timeline(rows: list[ResolvedRow]) -> list[ChartPoint]:
    points = [
        ChartPoint(
            date=row.date,
            reach=row.metrics.reach,
            engagement=row.metrics.engagement,
            platform=row.platform,
        )
        for row in rows
        if row.metrics.qualifies
    ]
    return sorted(points, key=lambda point: _date_sort_key(point.date))


def _engagement_rate(engagement: int, reach: int) -> str:
    if reach > 0:
        return f"{engagement / reach * 100:.2f}"
    return "0.00"


def _top_content(rows: list[ResolvedRow], limit: int) -> list[ContentRanking]:
    qualifying = [row for row in rows if row.metrics.qualifies]
    ranked = sorted(qualifying, key=lambda row: row.metrics.engagement, reverse=True)
    return [
        ContentRanking(
            title=truncate(row.title, settings.TITLE_MAX_LENGTH),
            platform=row.platform,
            reach=row.metrics.reach,
            engagement=row.metrics.engagement,
            engagement_rate=_engagement_rate(row.metrics.engagement, row.metrics.reach),
            date=row.date,
        )
        for row in ranked[: max(limit, 0)]
    ]


def _channels(rows: list[ResolvedRow]) -> dict[str, ChannelTotals]:
    channels: dict[str, ChannelTotals] = {}
    for row in rows:
        if not row.metrics.qualifies:
            continue
        totals = channels.setdefault(row.platform, ChannelTotals())
        totals.reach += row.metrics.reach
        totals.engagement += row.metrics.engagement
        if row.metrics.counts_as_post:
            totals.posts += 1
    return channels


def _totals(rows: list[ResolvedRow]) -> AnalyticsTotals:
    totals = AnalyticsTotals()
    for row in rows:
        # Signups count even when the row has no reach of its own
        totals.conversions += row.metrics.conversions
        if not row.metrics.qualifies:
            continue
        totals.total_reach += row.metrics.reach
        totals.engagement += row.metrics.engagement
    totals.revenue = totals.conversions * settings.REVENUE_PER_CONVERSION
    return totals


def build_timeline(reports: Iterable[ReportLike]) -> list[ChartPoint]:
    """One point per qualifying row, ascending by date. No per-day merging."""
    return _timeline(list(resolve_rows(reports)))


def rank_top_content(reports: Iterable[ReportLike], limit: int | None = None) -> list[ContentRanking]:
    """Qualifying rows by engagement, highest first; ties keep encounter order."""
    if limit is None:
        limit = settings.TOP_CONTENT_LIMIT
    return _top_content(list(resolve_rows(reports)), limit)


def channel_breakdown(reports: Iterable[ReportLike]) -> dict[str, ChannelTotals]:
    return _channels(list(resolve_rows(reports)))


def aggregate_totals(reports: Iterable[ReportLike]) -> AnalyticsTotals:
    return _totals(list(resolve_rows(reports)))


# ── Period comparison ───────────────────────────────────────────────────

def previous_period(totals: AnalyticsTotals) -> AnalyticsTotals:
    """Synthetic prior-period figures derived from the current totals.

    There is no stored history to compare against, so each metric is scaled
    by a configured ratio.
    """
    return AnalyticsTotals(
        total_reach=math.floor(totals.total_reach * settings.PREVIOUS_PERIOD_REACH_RATIO),
        engagement=math.floor(totals.engagement * settings.PREVIOUS_PERIOD_ENGAGEMENT_RATIO),
        conversions=math.floor(totals.conversions * settings.PREVIOUS_PERIOD_CONVERSIONS_RATIO),
        revenue=math.floor(totals.revenue * settings.PREVIOUS_PERIOD_REVENUE_RATIO),
    )


def change_indicator(current: float, previous: float) -> ChangeIndicator:
    if previous == 0:
        return ChangeIndicator(percent_change="0", is_positive=True)
    change = (current - previous) / previous * 100
    return ChangeIndicator(percent_change=f"{abs(change):.1f}", is_positive=change > 0)


def _tile(current: int, previous: int) -> MetricWithChange:
    return MetricWithChange(value=current, previous=previous, change=change_indicator(current, previous))


def build_dashboard(reports: Iterable[ReportLike], limit: int | None = None) -> AnalyticsDashboard:
    """All dashboard views from a single resolution pass over the reports."""
    reports = list(reports)
    rows = list(resolve_rows(reports))
    totals = _totals(rows)
    previous = previous_period(totals)
    return AnalyticsDashboard(
        totals=totals,
        tiles=DashboardTiles(
            total_reach=_tile(totals.total_reach, previous.total_reach),
            engagement=_tile(totals.engagement, previous.engagement),
            conversions=_tile(totals.conversions, previous.conversions),
            revenue=_tile(totals.revenue, previous.revenue),
        ),
        timeline=_timeline(rows),
        top_content=_top_content(rows, settings.TOP_CONTENT_LIMIT if limit is None else limit),
        channels=_channels(rows),
        report_count=len(reports),
    )
