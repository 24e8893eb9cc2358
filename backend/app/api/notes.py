from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app import config
from app.models.notes import NoteCreate, NoteListOut, NoteOut, NoteSummaryOut, NoteUpdate
from app.storage.notes_store import NotesStore, query_notes
from app.storage.summaries_store import SummariesStore
from app.storage.tags_store import TagsStore
from app.utils.jwt_auth import get_user_id
from app.utils.list_params import (
    DEFAULT_SORT,
    build_list_query,
    page_numbers,
    parse_page,
    parse_sort,
    sort_options,
)
from app.utils.note_summary import summarize_note

router = APIRouter(prefix="/notes", tags=["notes"])

store = NotesStore(config.data_dir())
summaries = SummariesStore(config.data_dir())
tags = TagsStore(config.data_dir())

RECENT_LIMIT = 5


def _summaries(notes) -> list[NoteSummaryOut]:
    tz = config.display_timezone()
    return [NoteSummaryOut(**summarize_note(n, tz=tz).to_dict()) for n in notes]


def _drop_insights(user_id: str, note_id: UUID) -> None:
    summaries.delete_summary(user_id=user_id, note_id=note_id)
    tags.delete_tags(user_id=user_id, note_id=note_id)


@router.post("", response_model=NoteOut, status_code=status.HTTP_201_CREATED)
def create_note(payload: NoteCreate, user_id: str = Depends(get_user_id)) -> NoteOut:
    note = store.create_note(user_id=user_id, title=payload.title, content=payload.content)
    return NoteOut(**note.to_dict())


@router.get("", response_model=NoteListOut)
def list_notes(
    page: str | None = Query(default=None),
    sort: str | None = Query(default=None),
    search: str = Query(default=""),
    limit: int | None = Query(default=None, ge=1, le=100),
    user_id: str = Depends(get_user_id),
) -> NoteListOut:
    current_page = parse_page(page)
    sort_by, order = parse_sort(sort or DEFAULT_SORT.value)
    sort_key = f"{sort_by}_{order}"

    items, pagination = query_notes(
        store.list_notes(user_id=user_id),
        search=search,
        sort_by=sort_by,
        order=order,
        page=current_page,
        limit=limit or config.page_size(),
    )

    params = {"sort": sort_key, "page": str(pagination.current_page)}
    if search.strip():
        params["search"] = search.strip()

    return NoteListOut(
        notes=_summaries(items),
        pagination=pagination.to_dict(),
        search_query=search,
        sort=sort_key,
        sort_options=sort_options(),
        page_numbers=page_numbers(pagination.current_page, pagination.total_pages),
        prev_page_url=build_list_query(params, page=pagination.current_page - 1) if pagination.has_prev_page else None,
        next_page_url=build_list_query(params, page=pagination.current_page + 1) if pagination.has_next_page else None,
    )


@router.get("/recent", response_model=list[NoteSummaryOut])
def recent_notes(user_id: str = Depends(get_user_id)) -> list[NoteSummaryOut]:
    items, _ = query_notes(
        store.list_notes(user_id=user_id),
        sort_by="updated_at",
        order="desc",
        limit=RECENT_LIMIT,
    )
    return _summaries(items)


@router.get("/{note_id}", response_model=NoteOut)
def get_note(note_id: UUID, user_id: str = Depends(get_user_id)) -> NoteOut:
    note = store.get_note(user_id=user_id, note_id=note_id)
    if note is None:
        raise HTTPException(status_code=404, detail="Note not found")
    return NoteOut(**note.to_dict())


@router.put("/{note_id}", response_model=NoteOut)
def update_note(note_id: UUID, payload: NoteUpdate, user_id: str = Depends(get_user_id)) -> NoteOut:
    previous = store.get_note(user_id=user_id, note_id=note_id)
    updated = store.update_note(user_id=user_id, note_id=note_id, title=payload.title, content=payload.content)
    if previous is None or updated is None:
        raise HTTPException(status_code=404, detail="Note not found")
    # summary and tags describe the old content
    if updated.content != previous.content:
        _drop_insights(user_id, note_id)
    return NoteOut(**updated.to_dict())


@router.delete("/{note_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_note(note_id: UUID, user_id: str = Depends(get_user_id)) -> None:
    if store.delete_note(user_id=user_id, note_id=note_id) is None:
        raise HTTPException(status_code=404, detail="Note not found")
    _drop_insights(user_id, note_id)
    return None
