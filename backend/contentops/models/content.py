"""Content piece ORM model."""
import enum
import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, Text
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from contentops.models.base import Base, TimestampMixin, UUIDMixin, WorkspaceScopedMixin, pg_enum


class ContentStatus(str, enum.Enum):
    IDEA = "idea"
    DRAFT = "draft"
    REVIEW = "review"
    APPROVED = "approved"
    PUBLISHED = "published"


# Board column order
STATUS_FLOW: tuple[ContentStatus, ...] = (
    ContentStatus.IDEA,
    ContentStatus.DRAFT,
    ContentStatus.REVIEW,
    ContentStatus.APPROVED,
    ContentStatus.PUBLISHED,
)


class ContentPiece(Base, UUIDMixin, TimestampMixin, WorkspaceScopedMixin):
    __tablename__ = "content_pieces"

    title: Mapped[str] = mapped_column(String(500), nullable=False)
    body: Mapped[str | None] = mapped_column(Text, nullable=True)
    platform: Mapped[str] = mapped_column(String(50), nullable=False)
    status: Mapped[ContentStatus] = mapped_column(
        pg_enum(ContentStatus, name="content_status"), nullable=False, default=ContentStatus.IDEA
    )
    tags: Mapped[list[str] | None] = mapped_column(JSONB, nullable=True)
    source_ids: Mapped[list[str] | None] = mapped_column(JSONB, nullable=True)
    approved_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    approved_by: Mapped[uuid.UUID | None] = mapped_column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=True)
    published_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_by: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=False)

    # Relationships
    workspace = relationship("Workspace", back_populates="content_pieces")
    creator = relationship("User", foreign_keys=[created_by], lazy="selectin")
    approver = relationship("User", foreign_keys=[approved_by], lazy="selectin")
    approvals = relationship("ContentApproval", back_populates="content", lazy="noload")
