"""Knowledge source ORM model."""
import uuid

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from contentops.models.base import Base, TimestampMixin, UUIDMixin, WorkspaceScopedMixin


class ContentSource(Base, UUIDMixin, TimestampMixin, WorkspaceScopedMixin):
    """Reference material that content pieces cite through ``source_ids``."""

    __tablename__ = "content_sources"

    user_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=False)
    type: Mapped[str] = mapped_column(String(50), nullable=False, default="text")
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    summary: Mapped[str | None] = mapped_column(Text, nullable=True)
    insights: Mapped[list | None] = mapped_column(JSONB, nullable=True)
    tags: Mapped[list | None] = mapped_column(JSONB, nullable=True)
    related_topics: Mapped[list | None] = mapped_column(JSONB, nullable=True)
    # Where the material came from (URL, book, interview...)
    source: Mapped[str | None] = mapped_column(String(1000), nullable=True)

    # Relationships
    workspace = relationship("Workspace", back_populates="sources")
    author = relationship("User", lazy="noload")
