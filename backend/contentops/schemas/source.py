"""Knowledge source request/response schemas."""
import uuid
from datetime import datetime

from pydantic import BaseModel, Field


class SourceCreate(BaseModel):
    workspace_id: uuid.UUID
    type: str = Field("text", min_length=1, max_length=50)
    title: str = Field(min_length=1, max_length=500)
    content: str = Field(min_length=1)
    summary: str | None = None
    insights: list[str] | None = None
    tags: list[str] | None = None
    related_topics: list[str] | None = None
    source: str | None = Field(None, max_length=1000)


class SourceUpdate(BaseModel):
    title: str | None = Field(None, min_length=1, max_length=500)
    content: str | None = Field(None, min_length=1)
    summary: str | None = None
    insights: list[str] | None = None
    tags: list[str] | None = None
    related_topics: list[str] | None = None
    source: str | None = Field(None, max_length=1000)


class SourceResponse(BaseModel):
    id: uuid.UUID
    workspace_id: uuid.UUID
    user_id: uuid.UUID
    type: str
    title: str
    content: str
    summary: str | None = None
    insights: list[str] | None = None
    tags: list[str] | None = None
    related_topics: list[str] | None = None
    source: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
