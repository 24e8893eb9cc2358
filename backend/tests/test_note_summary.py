from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional
from zoneinfo import ZoneInfo

import pytest

from app.utils.note_summary import (
    EMPTY_CONTENT_FALLBACK,
    format_date,
    format_preview,
    format_timestamps,
    is_markdown,
    summarize_note,
)


@dataclass
class FakeNote:
    id: str
    title: str
    content: Optional[str]
    created_at: str
    updated_at: str


@pytest.mark.parametrize("content", ["a", "hello world", "x" * 150])
def test_short_content_is_returned_unchanged(content):
    assert format_preview(content, 150) == content


@pytest.mark.parametrize("length", [151, 200, 1000])
def test_long_content_is_cut_and_marked(length):
    out = format_preview("b" * length, 150)
    assert len(out) == 153
    assert out.endswith("...")
    assert out[:150] == "b" * 150


def test_two_hundred_chars_scenario():
    assert format_preview("a" * 200, 150) == "a" * 150 + "..."


@pytest.mark.parametrize("content", [None, ""])
def test_absent_or_empty_content_uses_fallback(content):
    assert format_preview(content) == EMPTY_CONTENT_FALLBACK
    assert format_preview(content) == "내용이 없습니다."


def test_cut_counts_characters_not_bytes():
    text = "가" * 160
    out = format_preview(text, 150)
    assert out == "가" * 150 + "..."


def test_cut_is_not_word_aware():
    assert format_preview("hello world", 7) == "hello w..."


def test_format_date_ko_style():
    assert format_date("2024-01-15T12:00:00Z") == "2024년 1월 15일 오후 12:00"
    assert format_date("2024-01-15T10:05:00+00:00") == "2024년 1월 15일 오전 10:05"
    assert format_date(datetime(2024, 3, 2, 0, 30)) == "2024년 3월 2일 오전 12:30"
    assert format_date(datetime(2024, 3, 2, 21, 7)) == "2024년 3월 2일 오후 09:07"


def test_format_date_converts_to_display_zone():
    out = format_date("2024-01-15T12:00:00Z", tz=ZoneInfo("Asia/Seoul"))
    assert out == "2024년 1월 15일 오후 09:00"


def test_equal_timestamps_give_only_modified_label():
    ts = "2024-01-15T10:00:00+00:00"
    labels = format_timestamps(ts, ts)
    assert labels.modified == "수정일: 2024년 1월 15일 오전 10:00"
    assert labels.created is None
    assert labels.as_list() == [labels.modified]


def test_edited_note_gives_both_labels():
    labels = format_timestamps("2024-01-15T10:00:00Z", "2024-01-15T12:00:00Z")
    assert labels.modified == "수정일: 2024년 1월 15일 오후 12:00"
    assert labels.created == "생성일: 2024년 1월 15일 오전 10:00"


def test_any_nonzero_difference_counts_as_edited():
    created = datetime(2024, 1, 15, 10, 0, tzinfo=timezone.utc)
    labels = format_timestamps(created, created + timedelta(microseconds=1))
    assert labels.created is not None


def test_string_and_datetime_inputs_compare_equal():
    dt = datetime(2024, 1, 15, 10, 0, tzinfo=timezone.utc)
    assert format_timestamps(dt, "2024-01-15T10:00:00Z").created is None


def test_missing_updated_at_is_unknown():
    labels = format_timestamps(None, None)
    assert labels.modified == "수정일: 알 수 없음"
    assert labels.created is None


@pytest.mark.parametrize(
    "content, expected",
    [
        ("# Heading", True),
        ("some **bold** text", True),
        ("- item", True),
        ("1. first", True),
        ("see [docs](http://example.com)", True),
        ("use `code` here", True),
        ("plain text only", False),
        (None, False),
        ("", False),
    ],
)
def test_is_markdown(content, expected):
    assert is_markdown(content) is expected


def test_summarize_note_fallback_ignores_other_fields():
    note = FakeNote(
        id="n1",
        title="제목",
        content=None,
        created_at="2024-01-15T10:00:00Z",
        updated_at="2024-01-15T12:00:00Z",
    )
    summary = summarize_note(note)
    assert summary.to_dict() == {
        "id": "n1",
        "title": "제목",
        "preview": EMPTY_CONTENT_FALLBACK,
        "modified_label": "수정일: 2024년 1월 15일 오후 12:00",
        "created_label": "생성일: 2024년 1월 15일 오전 10:00",
        "is_markdown": False,
    }


def test_summarize_note_keeps_empty_title():
    note = FakeNote(id="n2", title="", content="x", created_at="2024-01-15T10:00:00Z", updated_at="2024-01-15T10:00:00Z")
    assert summarize_note(note).title == ""
