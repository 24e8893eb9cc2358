from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field


class SummaryOut(BaseModel):
    note_id: UUID
    summary: Optional[str] = None
    bullets: list[str] = Field(default_factory=list)
    model: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class SummaryUpdate(BaseModel):
    # length limits are checked in the route (400)
    content: str


class TagsOut(BaseModel):
    note_id: UUID
    tags: list[str]


class TagsUpdate(BaseModel):
    tags: list[str]
