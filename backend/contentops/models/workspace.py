"""Workspace ORM model."""
import uuid

from sqlalchemy import ForeignKey, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from contentops.models.base import Base, TimestampMixin, UUIDMixin


class Workspace(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "workspaces"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    brand_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    owner_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=False)

    # Relationships
    owner = relationship("User", back_populates="owned_workspaces", lazy="selectin")
    members = relationship("WorkspaceMember", back_populates="workspace", lazy="selectin")
    reports = relationship("AnalyticsReport", back_populates="workspace", lazy="noload")
    content_pieces = relationship("ContentPiece", back_populates="workspace", lazy="noload")
    sources = relationship("ContentSource", back_populates="workspace", lazy="noload")
