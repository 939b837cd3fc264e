"""Analytics report ORM model."""
import enum
import uuid
from datetime import date

from sqlalchemy import Date, ForeignKey, String, Text
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from contentops.models.base import Base, TimestampMixin, UUIDMixin, WorkspaceScopedMixin, pg_enum


class ReportType(str, enum.Enum):
    LINKEDIN = "linkedin"
    YOUTUBE = "youtube"
    NEWSLETTER = "newsletter"
    LEAD_MAGNET = "lead-magnet"


class AnalyticsReport(Base, UUIDMixin, TimestampMixin, WorkspaceScopedMixin):
    """One uploaded CSV export; ``csv_data`` holds the parsed rows as-is."""

    __tablename__ = "analytics_reports"

    user_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=False)
    report_name: Mapped[str] = mapped_column(String(255), nullable=False)
    report_type: Mapped[ReportType] = mapped_column(pg_enum(ReportType, name="report_type"), nullable=False)
    data_source: Mapped[str] = mapped_column(String(50), nullable=False, default="csv_upload")
    csv_data: Mapped[list] = mapped_column(JSONB, nullable=False, default=list)
    raw_csv_text: Mapped[str | None] = mapped_column(Text, nullable=True)
    # "metadata" is reserved on declarative classes
    report_metadata: Mapped[dict | None] = mapped_column("metadata", JSONB, nullable=True)
    date_range_start: Mapped[date | None] = mapped_column(Date, nullable=True)
    date_range_end: Mapped[date | None] = mapped_column(Date, nullable=True)

    # Relationships
    workspace = relationship("Workspace", back_populates="reports")
    uploader = relationship("User", lazy="noload")
