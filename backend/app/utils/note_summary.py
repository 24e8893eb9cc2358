"""Display helpers for note cards.

Turns a stored note into the strings a list/card view shows:
- format_preview(content, max_length) -> str
- format_timestamps(created_at, updated_at) -> TimestampLabels
- summarize_note(note) -> NoteSummary

Everything here is pure: no I/O, no shared state, no framework imports.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Any, Optional, Union

PREVIEW_MAX_LENGTH = 150
ELLIPSIS = "..."
EMPTY_CONTENT_FALLBACK = "내용이 없습니다."
UNKNOWN_DATE = "알 수 없음"

MODIFIED_LABEL = "수정일"
CREATED_LABEL = "생성일"

Timestamp = Union[datetime, str]

_MARKDOWN_PATTERNS = [
    re.compile(r"^#{1,6}\s"),  # heading
    re.compile(r"\*\*.*\*\*"),  # bold
    re.compile(r"\*.*\*"),  # italic
    re.compile(r"`.*`"),  # inline code
    re.compile(r"```[\s\S]*```"),  # fenced code
    re.compile(r"^\s*[-*+]\s"),  # bullet list
    re.compile(r"^\s*\d+\.\s"),  # numbered list
    re.compile(r"\[.*\]\(.*\)"),  # link
]


@dataclass(frozen=True)
class TimestampLabels:
    modified: str
    created: Optional[str] = None

    def as_list(self) -> list[str]:
        return [self.modified] if self.created is None else [self.modified, self.created]


@dataclass(frozen=True)
class NoteSummary:
    id: str
    title: str
    preview: str
    modified_label: str
    created_label: Optional[str]
    is_markdown: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "preview": self.preview,
            "modified_label": self.modified_label,
            "created_label": self.created_label,
            "is_markdown": self.is_markdown,
        }


def format_preview(content: Optional[str], max_length: int = PREVIEW_MAX_LENGTH) -> str:
    """Return a length-bounded preview of ``content``.

    Absent and empty content both map to the fallback text. The cut is a plain
    character count (code points), never moved to a word boundary.
    """
    if not content:
        return EMPTY_CONTENT_FALLBACK
    if len(content) <= max_length:
        return content
    return content[:max_length] + ELLIPSIS


def to_datetime(value: Timestamp) -> datetime:
    if isinstance(value, datetime):
        return value
    # fromisoformat only accepts a trailing "Z" from 3.11 on
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def format_date(value: Timestamp, tz: Optional[tzinfo] = None) -> str:
    """ko-KR long date with 2-digit 12h time, e.g. ``2024년 1월 15일 오후 12:00``."""
    dt = to_datetime(value)
    if tz is not None and dt.tzinfo is not None:
        dt = dt.astimezone(tz)
    meridiem = "오전" if dt.hour < 12 else "오후"
    hour = dt.hour % 12 or 12
    return f"{dt.year}년 {dt.month}월 {dt.day}일 {meridiem} {hour:02d}:{dt.minute:02d}"


def format_timestamps(
    created_at: Optional[Timestamp],
    updated_at: Optional[Timestamp],
    tz: Optional[tzinfo] = None,
) -> TimestampLabels:
    """Build the modified label, plus a created label when the note was edited.

    Timestamps are compared with full datetime equality, so any nonzero
    difference produces both labels.
    """
    if updated_at is None:
        modified = f"{MODIFIED_LABEL}: {UNKNOWN_DATE}"
    else:
        modified = f"{MODIFIED_LABEL}: {format_date(updated_at, tz)}"

    if created_at is None:
        return TimestampLabels(modified=modified)

    created_dt = to_datetime(created_at)
    if updated_at is not None and created_dt == to_datetime(updated_at):
        return TimestampLabels(modified=modified)

    return TimestampLabels(modified=modified, created=f"{CREATED_LABEL}: {format_date(created_dt, tz)}")


def is_markdown(content: Optional[str]) -> bool:
    if not content:
        return False
    return any(p.search(content) for p in _MARKDOWN_PATTERNS)


def summarize_note(note: Any, max_length: int = PREVIEW_MAX_LENGTH, tz: Optional[tzinfo] = None) -> NoteSummary:
    """Project a note (anything with id/title/content/created_at/updated_at) to its card strings."""
    labels = format_timestamps(note.created_at, note.updated_at, tz=tz)
    return NoteSummary(
        id=str(note.id),
        title=note.title,
        preview=format_preview(note.content, max_length),
        modified_label=labels.modified,
        created_label=labels.created,
        is_markdown=is_markdown(note.content),
    )
