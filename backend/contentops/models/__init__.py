"""SQLAlchemy ORM models."""
from contentops.models.base import Base, TimestampMixin, UUIDMixin, WorkspaceScopedMixin
from contentops.models.user import User, UserRole
from contentops.models.workspace import Workspace
from contentops.models.workspace_member import WorkspaceMember
from contentops.models.analytics import AnalyticsReport, ReportType
from contentops.models.content import ContentPiece, ContentStatus, STATUS_FLOW
from contentops.models.content_approval import ContentApproval
from contentops.models.content_source import ContentSource

__all__ = [
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    "WorkspaceScopedMixin",
    "User",
    "UserRole",
    "Workspace",
    "WorkspaceMember",
    "AnalyticsReport",
    "ReportType",
    "ContentPiece",
    "ContentStatus",
    "STATUS_FLOW",
    "ContentApproval",
    "ContentSource",
]
