"""Content piece request/response schemas."""
import uuid
from datetime import datetime

from pydantic import BaseModel, Field

from contentops.models.content import ContentStatus


class ContentCreate(BaseModel):
    workspace_id: uuid.UUID
    title: str = Field(min_length=1, max_length=500)
    body: str | None = None
    platform: str = Field(min_length=1, max_length=50)
    status: ContentStatus = ContentStatus.IDEA
    tags: list[str] | None = None
    source_ids: list[str] | None = None


class ContentUpdate(BaseModel):
    title: str | None = Field(None, min_length=1, max_length=500)
    body: str | None = None
    platform: str | None = Field(None, min_length=1, max_length=50)
    tags: list[str] | None = None
    source_ids: list[str] | None = None


class StatusChangeRequest(BaseModel):
    to_status: ContentStatus
    comment: str | None = None
    is_urgent: bool = False


class ContentFilter(BaseModel):
    workspace_id: uuid.UUID
    status: ContentStatus | None = None
    platform: str | None = None
    search: str | None = None
    page: int = 1
    per_page: int = 20


class ContentResponse(BaseModel):
    id: uuid.UUID
    workspace_id: uuid.UUID
    title: str
    body: str | None = None
    platform: str
    status: ContentStatus
    tags: list[str] | None = None
    source_ids: list[str] | None = None
    approved_at: datetime | None = None
    approved_by: uuid.UUID | None = None
    published_at: datetime | None = None
    created_by: uuid.UUID
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ContentApprovalResponse(BaseModel):
    id: uuid.UUID
    content_id: uuid.UUID
    from_status: ContentStatus
    to_status: ContentStatus
    reviewer_id: uuid.UUID
    comment: str | None = None
    is_urgent: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class BoardColumn(BaseModel):
    status: ContentStatus
    count: int = 0
    items: list[ContentResponse] = []
