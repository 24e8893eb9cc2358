from typing import Optional

from pydantic import BaseModel, Field


class NoteCreate(BaseModel):
    title: str = Field(default="", max_length=200)
    content: Optional[str] = Field(default=None, max_length=50_000)


class NoteUpdate(BaseModel):
    title: str = Field(default="", max_length=200)
    content: Optional[str] = Field(default=None, max_length=50_000)


class NoteOut(BaseModel):
    id: str
    user_id: str
    title: str
    content: Optional[str]
    created_at: str
    updated_at: str


class NoteSummaryOut(BaseModel):
    id: str
    title: str
    preview: str
    modified_label: str
    created_label: Optional[str] = None
    is_markdown: bool = False


class PaginationOut(BaseModel):
    current_page: int
    total_pages: int
    total_count: int
    limit: int
    has_next_page: bool
    has_prev_page: bool


class SortOptionOut(BaseModel):
    value: str
    label: str


class NoteListOut(BaseModel):
    notes: list[NoteSummaryOut]
    pagination: PaginationOut
    search_query: str
    sort: str
    sort_options: list[SortOptionOut]
    page_numbers: list[int | str]
    prev_page_url: Optional[str] = None
    next_page_url: Optional[str] = None
