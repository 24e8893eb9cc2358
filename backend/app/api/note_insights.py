import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.ai.client import AIProvider, get_ai_provider
from app.ai.config import model_name
from app.ai.errors import GeminiError
from app.ai.note_insights import (
    MANUAL_MODEL,
    InsightInputError,
    check_manual_summary,
    clean_summary_text,
    normalize_manual_tags,
    parse_tags,
    require_summary_content,
    require_tag_content,
    summary_bullets,
)
from app.ai.prompts import build_summary_prompt, build_tags_prompt
from app.api.notes import store, summaries, tags
from app.models.note_insights import SummaryOut, SummaryUpdate, TagsOut, TagsUpdate
from app.storage.notes_store import Note
from app.storage.summaries_store import Summary
from app.utils.jwt_auth import get_user_id

log = logging.getLogger(__name__)

router = APIRouter(prefix="/notes", tags=["ai"])


def _owned_note(user_id: str, note_id: UUID) -> Note:
    # no leak: other users' notes look missing
    note = store.get_note(user_id=user_id, note_id=note_id)
    if note is None:
        raise HTTPException(status_code=404, detail="Note not found")
    return note


def _summary_out(note_id: UUID, summary: Optional[Summary]) -> SummaryOut:
    if summary is None:
        return SummaryOut(note_id=note_id)
    return SummaryOut(
        note_id=note_id,
        summary=summary.content,
        bullets=summary_bullets(summary.content),
        model=summary.model,
        created_at=summary.created_at,
        updated_at=summary.updated_at,
    )


def _generate(ai: AIProvider, prompt: str, failure: str, note_id: UUID) -> str:
    try:
        return ai().generate_text(prompt)
    except GeminiError as err:
        log.warning("note insight generation failed note=%s type=%s", note_id, err.type.value)
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=err.safe_message)
    except Exception:
        log.exception("note insight generation failed note=%s", note_id)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=failure)


@router.get("/{note_id}/summary", response_model=SummaryOut)
def get_summary(note_id: UUID, user_id: str = Depends(get_user_id)) -> SummaryOut:
    _owned_note(user_id, note_id)
    return _summary_out(note_id, summaries.get_summary(user_id=user_id, note_id=note_id))


@router.post("/{note_id}/summary", response_model=SummaryOut)
def generate_summary(
    note_id: UUID,
    force: bool = Query(default=False),
    user_id: str = Depends(get_user_id),
    ai: AIProvider = Depends(get_ai_provider),
) -> SummaryOut:
    note = _owned_note(user_id, note_id)

    existing = summaries.get_summary(user_id=user_id, note_id=note_id)
    if existing is not None and not force:
        return _summary_out(note_id, existing)

    try:
        content = require_summary_content(note.content)
    except InsightInputError as exc:
        raise HTTPException(status_code=400, detail=exc.message)

    text = clean_summary_text(_generate(ai, build_summary_prompt(content), "요약 생성에 실패했습니다.", note_id))
    if not text:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="요약 생성에 실패했습니다.")

    saved = summaries.save_summary(user_id=user_id, note_id=note_id, content=text, model=model_name())
    return _summary_out(note_id, saved)


@router.put("/{note_id}/summary", response_model=SummaryOut)
def update_summary(note_id: UUID, payload: SummaryUpdate, user_id: str = Depends(get_user_id)) -> SummaryOut:
    _owned_note(user_id, note_id)
    try:
        text = check_manual_summary(payload.content)
    except InsightInputError as exc:
        raise HTTPException(status_code=400, detail=exc.message)
    saved = summaries.save_summary(user_id=user_id, note_id=note_id, content=text, model=MANUAL_MODEL)
    return _summary_out(note_id, saved)


@router.delete("/{note_id}/summary", status_code=status.HTTP_204_NO_CONTENT)
def delete_summary(note_id: UUID, user_id: str = Depends(get_user_id)) -> None:
    _owned_note(user_id, note_id)
    summaries.delete_summary(user_id=user_id, note_id=note_id)
    return None


@router.get("/{note_id}/tags", response_model=TagsOut)
def get_tags(note_id: UUID, user_id: str = Depends(get_user_id)) -> TagsOut:
    _owned_note(user_id, note_id)
    return TagsOut(note_id=note_id, tags=tags.get_tags(user_id=user_id, note_id=note_id))


@router.post("/{note_id}/tags", response_model=TagsOut)
def generate_tags(
    note_id: UUID,
    force: bool = Query(default=False),
    user_id: str = Depends(get_user_id),
    ai: AIProvider = Depends(get_ai_provider),
) -> TagsOut:
    note = _owned_note(user_id, note_id)

    existing = tags.get_tags(user_id=user_id, note_id=note_id)
    if existing and not force:
        return TagsOut(note_id=note_id, tags=existing)

    try:
        content = require_tag_content(note.content)
    except InsightInputError as exc:
        raise HTTPException(status_code=400, detail=exc.message)

    generated = parse_tags(_generate(ai, build_tags_prompt(content), "태그 생성에 실패했습니다.", note_id))
    if not generated:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="유효한 태그를 생성할 수 없습니다.")

    if force:
        tags.delete_tags(user_id=user_id, note_id=note_id)
    return TagsOut(note_id=note_id, tags=tags.add_tags(user_id=user_id, note_id=note_id, tags=generated))


@router.put("/{note_id}/tags", response_model=TagsOut)
def update_tags(note_id: UUID, payload: TagsUpdate, user_id: str = Depends(get_user_id)) -> TagsOut:
    _owned_note(user_id, note_id)
    try:
        cleaned = normalize_manual_tags(payload.tags)
    except InsightInputError as exc:
        raise HTTPException(status_code=400, detail=exc.message)
    return TagsOut(note_id=note_id, tags=tags.replace_tags(user_id=user_id, note_id=note_id, tags=cleaned))


@router.delete("/{note_id}/tags", status_code=status.HTTP_204_NO_CONTENT)
def delete_tags(note_id: UUID, user_id: str = Depends(get_user_id)) -> None:
    _owned_note(user_id, note_id)
    tags.delete_tags(user_id=user_id, note_id=note_id)
    return None
