import json
import logging
import uuid
from pathlib import Path
from typing import Any

from app.storage.notes_store import _atomic_write_json, _safe_user_dir, _utc_now_iso

log = logging.getLogger(__name__)


def _tags_path(base_dir: Path, user_id: str, note_id: uuid.UUID) -> Path:
    # data/users/<user>/tags/<note>.json
    return _safe_user_dir(base_dir, user_id).parent / "tags" / f"{note_id}.json"


class TagsStore:
    """Tags per note, newest first. Tags are unique per note, ignoring case."""

    def __init__(self, base_dir: Path):
        self.base_dir = base_dir

    def _read(self, user_id: str, note_id: uuid.UUID) -> list[dict[str, Any]]:
        path = _tags_path(self.base_dir, user_id, note_id)
        if not path.exists():
            return []
        return json.loads(path.read_text(encoding="utf-8"))["tags"]

    def _write(self, user_id: str, note_id: uuid.UUID, entries: list[dict[str, Any]]) -> None:
        path = _tags_path(self.base_dir, user_id, note_id)
        _atomic_write_json(path, {"note_id": str(note_id), "tags": entries})

    def get_tags(self, user_id: str, note_id: uuid.UUID) -> list[str]:
        return [e["tag"] for e in self._read(user_id, note_id)]

    def add_tags(self, user_id: str, note_id: uuid.UUID, tags: list[str]) -> list[str]:
        entries = self._read(user_id, note_id)
        seen = {e["tag"].lower() for e in entries}
        now = _utc_now_iso()
        added = []
        for tag in tags:
            if tag.lower() in seen:
                continue
            seen.add(tag.lower())
            added.append({"tag": tag, "created_at": now})
        if added:
            self._write(user_id, note_id, added + entries)
            log.info("tags added user=%s note=%s count=%d", user_id, note_id, len(added))
        return [e["tag"] for e in added + entries]

    def replace_tags(self, user_id: str, note_id: uuid.UUID, tags: list[str]) -> list[str]:
        now = _utc_now_iso()
        self._write(user_id, note_id, [{"tag": t, "created_at": now} for t in tags])
        log.info("tags replaced user=%s note=%s count=%d", user_id, note_id, len(tags))
        return list(tags)

    def delete_tags(self, user_id: str, note_id: uuid.UUID) -> bool:
        path = _tags_path(self.base_dir, user_id, note_id)
        if not path.exists():
            return False
        path.unlink()
        log.info("tags deleted user=%s note=%s", user_id, note_id)
        return True
