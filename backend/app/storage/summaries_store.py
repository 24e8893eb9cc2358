import json
import logging
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from app.storage.notes_store import _atomic_write_json, _safe_user_dir, _utc_now_iso

log = logging.getLogger(__name__)


def _summaries_dir(base_dir: Path, user_id: str) -> Path:
    # data/users/<user>/summaries
    return _safe_user_dir(base_dir, user_id).parent / "summaries"


def _summary_path(base_dir: Path, user_id: str, note_id: uuid.UUID) -> Path:
    return _summaries_dir(base_dir, user_id) / f"{note_id}.json"


@dataclass(frozen=True)
class Summary:
    note_id: uuid.UUID
    model: str
    content: str
    created_at: str
    updated_at: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "note_id": str(self.note_id),
            "model": self.model,
            "content": self.content,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "Summary":
        return cls(
            note_id=uuid.UUID(raw["note_id"]),
            model=raw["model"],
            content=raw["content"],
            created_at=raw["created_at"],
            updated_at=raw["updated_at"],
        )


class SummariesStore:
    """One summary per note, kept beside the user's notes."""

    def __init__(self, base_dir: Path):
        self.base_dir = base_dir

    def get_summary(self, user_id: str, note_id: uuid.UUID) -> Optional[Summary]:
        path = _summary_path(self.base_dir, user_id, note_id)
        if not path.exists():
            return None
        return Summary.from_dict(json.loads(path.read_text(encoding="utf-8")))

    def save_summary(self, user_id: str, note_id: uuid.UUID, content: str, model: str) -> Summary:
        existing = self.get_summary(user_id, note_id)
        now = _utc_now_iso()
        summary = Summary(
            note_id=note_id,
            model=model,
            content=content,
            created_at=existing.created_at if existing else now,
            updated_at=now,
        )
        _atomic_write_json(_summary_path(self.base_dir, user_id, note_id), summary.to_dict())
        log.info("summary saved user=%s note=%s model=%s", user_id, note_id, model)
        return summary

    def delete_summary(self, user_id: str, note_id: uuid.UUID) -> bool:
        path = _summary_path(self.base_dir, user_id, note_id)
        if not path.exists():
            return False
        path.unlink()
        log.info("summary deleted user=%s note=%s", user_id, note_id)
        return True
