"""Helpers for AI note summaries and tags.

Content checks raise ``InsightInputError`` with a user-facing message;
parsers turn raw model output into stored values.
"""
from __future__ import annotations

import re
from typing import Iterable, Optional

MIN_CONTENT_LENGTH = 100
MAX_SUMMARY_LENGTH = 500
MAX_TAGS = 6
MAX_TAG_LENGTH = 50
MANUAL_MODEL = "manual-edit"

_BULLET = re.compile(r"^[-•*]\s*")
_BLANK_LINES = re.compile(r"\n\s*\n")


class InsightInputError(ValueError):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def require_summary_content(content: Optional[str]) -> str:
    text = (content or "").strip()
    if not text:
        raise InsightInputError("노트 내용이 비어있습니다.")
    if len(text) < MIN_CONTENT_LENGTH:
        raise InsightInputError(f"노트 내용이 너무 짧습니다. 최소 {MIN_CONTENT_LENGTH}자 이상이 필요합니다.")
    return text


def require_tag_content(content: Optional[str]) -> str:
    text = (content or "").strip()
    if len(text) < MIN_CONTENT_LENGTH:
        raise InsightInputError(
            f"태그 생성을 위해서는 최소 {MIN_CONTENT_LENGTH}자 이상의 내용이 필요합니다. (현재: {len(text)}자)"
        )
    return text


def clean_summary_text(text: str) -> str:
    return _BLANK_LINES.sub("\n", text).strip()


def summary_bullets(text: str) -> list[str]:
    bullets = []
    for line in text.splitlines():
        line = _BULLET.sub("", line.strip())
        if line:
            bullets.append(line)
    return bullets


def parse_tags(text: str) -> list[str]:
    tags = [t.strip() for t in text.split(",")]
    tags = [t for t in tags if 0 < len(t) <= MAX_TAG_LENGTH]
    return [t.lower() for t in tags[:MAX_TAGS]]


def check_manual_summary(content: str) -> str:
    text = content.strip()
    if not text:
        raise InsightInputError("요약 내용을 입력해주세요.")
    if len(content) > MAX_SUMMARY_LENGTH:
        raise InsightInputError(f"요약은 최대 {MAX_SUMMARY_LENGTH}자까지 입력할 수 있습니다.")
    return text


def normalize_manual_tags(tags: Iterable[str]) -> list[str]:
    tags = list(tags)
    if len(tags) > MAX_TAGS:
        raise InsightInputError(f"태그는 최대 {MAX_TAGS}개까지 입력할 수 있습니다.")
    out: list[str] = []
    seen = set()
    for tag in tags:
        tag = tag.strip()
        if not tag or tag.lower() in seen:
            continue
        if len(tag) > MAX_TAG_LENGTH:
            raise InsightInputError(f"태그는 최대 {MAX_TAG_LENGTH}자까지 입력할 수 있습니다.")
        seen.add(tag.lower())
        out.append(tag)
    return out
