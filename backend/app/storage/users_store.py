from __future__ import annotations

import hashlib
import json
import uuid
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional


def normalize_email(email: str) -> str:
    return email.strip().lower()


def _account_key(email: str) -> str:
    # emails are not path-safe; file names are a digest of the normalized address
    return hashlib.sha256(normalize_email(email).encode("utf-8")).hexdigest()


@dataclass(frozen=True)
class UserRecord:
    user_id: str
    email: str
    hashed_password: str
    created_at: str


class UsersStore:
    def __init__(self, base_dir: Path):
        self.base_dir = base_dir

    def _account_path(self, email: str) -> Path:
        return self.base_dir / "accounts" / f"{_account_key(email)}.json"

    def get_by_email(self, email: str) -> Optional[UserRecord]:
        p = self._account_path(email)
        if not p.exists():
            return None
        raw = json.loads(p.read_text(encoding="utf-8"))
        return UserRecord(
            user_id=raw["user_id"],
            email=raw["email"],
            hashed_password=raw["hashed_password"],
            created_at=raw["created_at"],
        )

    def create(self, email: str, hashed_password: str) -> UserRecord:
        p = self._account_path(email)
        if p.exists():
            raise FileExistsError("User exists")

        p.parent.mkdir(parents=True, exist_ok=True)
        rec = UserRecord(
            user_id=uuid.uuid4().hex,
            email=normalize_email(email),
            hashed_password=hashed_password,
            created_at=datetime.now(timezone.utc).isoformat(),
        )

        tmp = p.with_suffix(".tmp")
        tmp.write_text(json.dumps(asdict(rec), ensure_ascii=False, indent=2), encoding="utf-8")
        tmp.replace(p)
        return rec
