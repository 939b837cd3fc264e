"""Per-platform CSV column mapping.

Each uploaded export names its columns differently. Instead of inline
fallback chains, every metric lists the candidate headers to try, in order.
The first candidate holding a non-empty value wins.
"""
from dataclasses import dataclass

from contentops.models.analytics import ReportType


@dataclass(frozen=True)
class PlatformColumns:
    reach: tuple[str, ...] = ()
    impressions: tuple[str, ...] = ()
    # Each inner tuple is one engagement component; components are summed.
    engagement: tuple[tuple[str, ...], ...] = ()
    conversions: tuple[str, ...] = ()
    # Known title headers not caught by the generic keyword scan
    titles: tuple[str, ...] = ()
    # Reach proxy used only when the row carries no impressions at all
    follower_proxy_column: str | None = None
    follower_engagement_ratio: float = 0.0


_LINKEDIN_IMPRESSIONS = ("Impressions", "impressions", "Impressions ", "Total impressions", "Total Impressions")

PLATFORM_COLUMNS: dict[ReportType, PlatformColumns] = {
    ReportType.LINKEDIN: PlatformColumns(
        reach=_LINKEDIN_IMPRESSIONS,
        impressions=_LINKEDIN_IMPRESSIONS,
        engagement=(
            ("Reactions", "reactions", "Likes", "likes"),
            ("Comments", "comments"),
            ("Shares", "shares", "Reposts", "reposts"),
            ("Clicks", "clicks"),
        ),
        titles=("Update", "Update title", "Link", "URL"),
        # Numeric header emitted by one LinkedIn follower export; holds new followers.
        follower_proxy_column="32049",
        follower_engagement_ratio=0.1,
    ),
    ReportType.YOUTUBE: PlatformColumns(
        reach=("Views", "views", "Video views"),
        impressions=("Impressions", "impressions"),
        engagement=(
            ("Likes", "likes"),
            ("Comments", "comments", "Comments added"),
            ("Shares", "shares"),
        ),
        titles=("Video", "Video ID"),
    ),
    ReportType.NEWSLETTER: PlatformColumns(
        reach=("Opens", "opens", "Unique opens"),
        impressions=("Sends", "sends", "Delivered"),
        engagement=(
            ("Clicks", "clicks", "Unique clicks"),
        ),
        titles=("Campaign", "Campaign name", "Email name"),
    ),
    ReportType.LEAD_MAGNET: PlatformColumns(
        reach=("Downloads", "downloads"),
        conversions=("Email Signups", "email signups", "Signups", "signups"),
        titles=("Magnet", "Source", "Name"),
    ),
}


def columns_for(report_type: object) -> PlatformColumns | None:
    """Look up the mapping for a report type given as enum or raw string."""
    try:
        return PLATFORM_COLUMNS[ReportType(report_type)]
    except ValueError:
        return None
