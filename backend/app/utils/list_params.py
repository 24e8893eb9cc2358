from __future__ import annotations

from enum import Enum
from typing import Mapping, Optional, Union
from urllib.parse import urlencode

NOTES_PATH = "/notes"
MAX_VISIBLE_PAGES = 5

SORT_FIELDS = ("created_at", "updated_at", "title")
SORT_ORDERS = ("asc", "desc")


class SortOption(str, Enum):
    CREATED_AT_DESC = "created_at_desc"
    CREATED_AT_ASC = "created_at_asc"
    TITLE_ASC = "title_asc"
    TITLE_DESC = "title_desc"
    UPDATED_AT_DESC = "updated_at_desc"
    UPDATED_AT_ASC = "updated_at_asc"


SORT_LABELS: dict[SortOption, str] = {
    SortOption.CREATED_AT_DESC: "최신순",
    SortOption.CREATED_AT_ASC: "오래된순",
    SortOption.TITLE_ASC: "제목순 A-Z",
    SortOption.TITLE_DESC: "제목순 Z-A",
    SortOption.UPDATED_AT_DESC: "수정일 최신순",
    SortOption.UPDATED_AT_ASC: "수정일 오래된순",
}

DEFAULT_SORT = SortOption.CREATED_AT_DESC


def sort_options() -> list[dict[str, str]]:
    return [{"value": opt.value, "label": SORT_LABELS[opt]} for opt in SortOption]


def parse_sort(value: Optional[str]) -> tuple[str, str]:
    """Split a sort key like ``updated_at_desc`` into (field, order).

    Unknown fields fall back to ``created_at`` and unknown orders to ``desc``.
    """
    raw = value or DEFAULT_SORT.value
    field, _, order = raw.rpartition("_")
    if field not in SORT_FIELDS:
        field = "created_at"
    if order not in SORT_ORDERS:
        order = "desc"
    return field, order


def parse_page(value: Union[str, int, None]) -> int:
    try:
        page = int(value) if value is not None else 1
    except (TypeError, ValueError):
        return 1
    return page if page >= 1 else 1


def build_list_query(
    params: Mapping[str, str],
    sort: Optional[str] = None,
    page: Optional[int] = None,
    search: Optional[str] = None,
) -> str:
    """Re-derive the notes list URL from the current query and one change.

    A new sort or search always sends the user back to page 1.
    """
    out = dict(params)
    if sort is not None:
        out["sort"] = sort
        out["page"] = "1"
    if search is not None:
        query = search.strip()
        if query:
            out["search"] = query
        else:
            out.pop("search", None)
        out["page"] = "1"
    if page is not None and sort is None and search is None:
        out["page"] = str(page)
    return f"{NOTES_PATH}?{urlencode(out)}"


def page_numbers(current: int, total: int, max_visible: int = MAX_VISIBLE_PAGES) -> list[Union[int, str]]:
    """Page buttons around ``current``; gaps are rendered as ``"..."``."""
    if total <= max_visible:
        return list(range(1, total + 1))

    start = max(1, current - 2)
    end = min(total, current + 2)
    pages: list[Union[int, str]] = []

    if start > 1:
        pages.append(1)
        if start > 2:
            pages.append("...")

    pages.extend(range(start, end + 1))

    if end < total:
        if end < total - 1:
            pages.append("...")
        pages.append(total)

    return pages
