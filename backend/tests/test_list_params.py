from urllib.parse import parse_qs, urlsplit

import pytest

from app.utils.list_params import build_list_query, page_numbers, parse_page, parse_sort, sort_options


def _query(url):
    parts = urlsplit(url)
    assert parts.path == "/notes"
    return {k: v[0] for k, v in parse_qs(parts.query).items()}


@pytest.mark.parametrize(
    "value, expected",
    [
        ("created_at_desc", ("created_at", "desc")),
        ("created_at_asc", ("created_at", "asc")),
        ("updated_at_desc", ("updated_at", "desc")),
        ("title_asc", ("title", "asc")),
        (None, ("created_at", "desc")),
        ("title_sideways", ("title", "desc")),
        ("color_asc", ("created_at", "asc")),
    ],
)
def test_parse_sort(value, expected):
    assert parse_sort(value) == expected


@pytest.mark.parametrize("value, expected", [("3", 3), (None, 1), ("", 1), ("abc", 1), ("0", 1), ("-2", 1), (4, 4)])
def test_parse_page(value, expected):
    assert parse_page(value) == expected


def test_sort_options_cover_every_key():
    values = [o["value"] for o in sort_options()]
    assert values == [
        "created_at_desc",
        "created_at_asc",
        "title_asc",
        "title_desc",
        "updated_at_desc",
        "updated_at_asc",
    ]
    assert sort_options()[0]["label"] == "최신순"


def test_changing_sort_resets_page():
    q = _query(build_list_query({"page": "4", "search": "x"}, sort="title_asc"))
    assert q == {"page": "1", "search": "x", "sort": "title_asc"}


def test_changing_page_keeps_other_params():
    q = _query(build_list_query({"sort": "title_desc", "page": "1"}, page=3))
    assert q == {"sort": "title_desc", "page": "3"}


def test_search_is_trimmed_and_blank_removes_it():
    q = _query(build_list_query({"page": "2"}, search="  memo "))
    assert q == {"page": "1", "search": "memo"}

    q = _query(build_list_query({"page": "2", "search": "memo"}, search="   "))
    assert q == {"page": "1"}


@pytest.mark.parametrize(
    "current, total, expected",
    [
        (1, 0, []),
        (2, 5, [1, 2, 3, 4, 5]),
        (1, 10, [1, 2, 3, "...", 10]),
        (3, 10, [1, 2, 3, 4, 5, "...", 10]),
        (5, 10, [1, "...", 3, 4, 5, 6, 7, "...", 10]),
        (6, 10, [1, "...", 4, 5, 6, 7, 8, "...", 10]),
        (10, 10, [1, "...", 8, 9, 10]),
        (4, 7, [1, 2, 3, 4, 5, 6, 7]),
    ],
)
def test_page_numbers(current, total, expected):
    assert page_numbers(current, total) == expected
