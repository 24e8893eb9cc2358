import json
import logging
import math
import os
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

log = logging.getLogger(__name__)

DEFAULT_TITLE = "제목 없음"


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _safe_user_dir(base_dir: Path, user_id: str) -> Path:
    # user ids end up in paths; no separators or dots
    if not user_id or any(ch in user_id for ch in "/\\."):
        raise ValueError("Invalid user_id")
    return base_dir / "users" / user_id / "notes"


def _note_path(base_dir: Path, user_id: str, note_id: uuid.UUID) -> Path:
    return _safe_user_dir(base_dir, user_id) / f"{note_id}.json"


def _atomic_write_json(path: Path, data: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    with tmp_path.open("w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)
        f.flush()
        os.fsync(f.fileno())
    tmp_path.replace(path)


@dataclass(frozen=True)
class Note:
    id: uuid.UUID
    user_id: str
    title: str
    content: Optional[str]
    created_at: str
    updated_at: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "user_id": self.user_id,
            "title": self.title,
            "content": self.content,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "Note":
        return cls(
            id=uuid.UUID(raw["id"]),
            user_id=raw["user_id"],
            title=raw["title"],
            content=raw.get("content"),
            created_at=raw["created_at"],
            updated_at=raw["updated_at"],
        )


@dataclass(frozen=True)
class Pagination:
    current_page: int
    total_pages: int
    total_count: int
    limit: int

    @property
    def has_next_page(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def has_prev_page(self) -> bool:
        return self.current_page > 1

    def to_dict(self) -> dict[str, Any]:
        return {
            "current_page": self.current_page,
            "total_pages": self.total_pages,
            "total_count": self.total_count,
            "limit": self.limit,
            "has_next_page": self.has_next_page,
            "has_prev_page": self.has_prev_page,
        }


class NotesStore:
    def __init__(self, base_dir: Path):
        self.base_dir = base_dir

    def create_note(self, user_id: str, title: str, content: Optional[str]) -> Note:
        note_id = uuid.uuid4()
        now = _utc_now_iso()
        note = Note(
            id=note_id,
            user_id=user_id,
            title=title or DEFAULT_TITLE,
            content=content,
            created_at=now,
            updated_at=now,
        )
        path = _note_path(self.base_dir, user_id, note_id)
        _atomic_write_json(path, note.to_dict())
        log.info("note created user=%s note=%s", user_id, note_id)
        return note

    def list_notes(self, user_id: str) -> list[Note]:
        notes_dir = _safe_user_dir(self.base_dir, user_id)
        if not notes_dir.exists():
            return []
        out: list[Note] = []
        for p in sorted(notes_dir.glob("*.json")):
            try:
                raw = json.loads(p.read_text(encoding="utf-8"))
                out.append(Note.from_dict(raw))
            except (OSError, ValueError, KeyError, TypeError) as exc:
                log.warning("skipping unreadable note file %s: %s", p.name, exc)
                continue
        return out

    def get_note(self, user_id: str, note_id: uuid.UUID) -> Note | None:
        path = _note_path(self.base_dir, user_id, note_id)
        if not path.exists():
            return None
        raw = json.loads(path.read_text(encoding="utf-8"))
        return Note.from_dict(raw)

    def update_note(self, user_id: str, note_id: uuid.UUID, title: str, content: Optional[str]) -> Note | None:
        path = _note_path(self.base_dir, user_id, note_id)
        if not path.exists():
            return None

        raw = json.loads(path.read_text(encoding="utf-8"))
        raw["title"] = title or DEFAULT_TITLE
        raw["content"] = content
        raw["updated_at"] = _utc_now_iso()

        _atomic_write_json(path, raw)
        log.info("note updated user=%s note=%s", user_id, note_id)
        return Note.from_dict(raw)

    def delete_note(self, user_id: str, note_id: uuid.UUID) -> Note | None:
        path = _note_path(self.base_dir, user_id, note_id)
        if not path.exists():
            return None

        note = Note.from_dict(json.loads(path.read_text(encoding="utf-8")))
        path.unlink()
        log.info("note deleted user=%s note=%s", user_id, note_id)
        return note


def _matches(note: Note, needle: str) -> bool:
    return needle in note.title.casefold() or needle in (note.content or "").casefold()


def query_notes(
    notes: list[Note],
    search: str = "",
    sort_by: str = "created_at",
    order: str = "desc",
    page: int = 1,
    limit: int = 10,
) -> tuple[list[Note], Pagination]:
    """Filter, order and slice an in-memory note list.

    ``search`` is a case-insensitive substring match on title or content.
    Titles sort case-insensitively; timestamps sort chronologically.
    """
    needle = search.strip().casefold()
    items = [n for n in notes if _matches(n, needle)] if needle else list(notes)

    if sort_by == "title":
        items.sort(key=lambda n: (n.title.casefold(), str(n.id)), reverse=order == "desc")
    else:
        field = "updated_at" if sort_by == "updated_at" else "created_at"
        items.sort(key=lambda n: (datetime.fromisoformat(getattr(n, field)), str(n.id)), reverse=order == "desc")

    total_count = len(items)
    total_pages = math.ceil(total_count / limit) if limit else 0
    offset = (page - 1) * limit
    return items[offset:offset + limit], Pagination(
        current_page=page,
        total_pages=total_pages,
        total_count=total_count,
        limit=limit,
    )
