"""SQLAlchemy base model with UUID PK, timestamp and workspace mixins."""
import enum
import uuid
from datetime import datetime
from typing import Any, Type

from sqlalchemy import DateTime, Enum, ForeignKey, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import DeclarativeBase, Mapped, declared_attr, mapped_column


def pg_enum(enum_class: Type[enum.Enum], **kwargs: Any) -> Enum:
    """Create an SQLAlchemy Enum that stores enum VALUES (not names).

    Migrations store lowercase values such as 'lead-magnet', which are not
    valid Python identifiers, so the names can never be used as DB values.
    """
    return Enum(
        enum_class,
        values_callable=lambda obj: [e.value for e in obj],
        **kwargs,
    )


class Base(DeclarativeBase):
    pass


class UUIDMixin:
    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )


class TimestampMixin:
    # Server-generated timestamps are fetched on flush so async code never lazy-loads them
    __mapper_args__ = {"eager_defaults": True}

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )


class WorkspaceScopedMixin:
    """Rows that belong to exactly one workspace."""

    @declared_attr
    def workspace_id(cls) -> Mapped[uuid.UUID]:
        return mapped_column(
            UUID(as_uuid=True), ForeignKey("workspaces.id"), nullable=False, index=True
        )
