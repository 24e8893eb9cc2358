import importlib

from fastapi.testclient import TestClient

from app.utils.note_summary import EMPTY_CONTENT_FALLBACK

HEADERS = {"X-User-Id": "userA"}


def test_create_and_get_note(client):
    r = client.post("/notes", headers=HEADERS, json={"title": "t1", "content": "c1"})
    assert r.status_code == 201
    note = r.json()
    assert note["title"] == "t1"
    assert note["content"] == "c1"
    assert note["user_id"] == "userA"
    assert note["created_at"] == note["updated_at"]

    r = client.get(f"/notes/{note['id']}", headers=HEADERS)
    assert r.status_code == 200
    assert r.json() == note


def test_empty_title_gets_default_and_content_may_be_absent(client):
    r = client.post("/notes", headers=HEADERS, json={"title": ""})
    assert r.status_code == 201
    assert r.json()["title"] == "제목 없음"
    assert r.json()["content"] is None


def test_invalid_note_id_is_rejected(client):
    r = client.get("/notes/not-a-uuid", headers=HEADERS)
    assert r.status_code == 422


def test_update_bumps_updated_at(client, create_note):
    note = create_note(title="before", content="old")

    r = client.put(f"/notes/{note['id']}", headers=HEADERS, json={"title": "after", "content": "new"})
    assert r.status_code == 200
    updated = r.json()
    assert updated["title"] == "after"
    assert updated["content"] == "new"
    assert updated["created_at"] == note["created_at"]
    assert updated["updated_at"] > note["updated_at"]


def test_update_missing_note_is_404(client):
    r = client.put(
        "/notes/00000000-0000-0000-0000-000000000000",
        headers=HEADERS,
        json={"title": "x", "content": "y"},
    )
    assert r.status_code == 404


def test_delete_note(client, create_note):
    note = create_note()

    r = client.delete(f"/notes/{note['id']}", headers=HEADERS)
    assert r.status_code == 204

    assert client.get(f"/notes/{note['id']}", headers=HEADERS).status_code == 404
    assert client.delete(f"/notes/{note['id']}", headers=HEADERS).status_code == 404


def test_list_returns_card_summaries(client, create_note):
    create_note(title="long", content="a" * 200)
    create_note(title="empty", content="")

    r = client.get("/notes", headers=HEADERS)
    assert r.status_code == 200
    cards = {n["title"]: n for n in r.json()["notes"]}

    assert cards["long"]["preview"] == "a" * 150 + "..."
    assert cards["empty"]["preview"] == EMPTY_CONTENT_FALLBACK
    assert cards["long"]["modified_label"].startswith("수정일: ")
    # never edited: no separate creation label
    assert cards["long"]["created_label"] is None


def test_edited_note_shows_created_label(client, create_note):
    note = create_note(title="t", content="c")
    client.put(f"/notes/{note['id']}", headers=HEADERS, json={"title": "t", "content": "c2"})

    r = client.get("/notes", headers=HEADERS)
    card = r.json()["notes"][0]
    assert card["created_label"].startswith("생성일: ")


def test_list_search_sort_and_paginate(client, create_note):
    for title in ["banana", "Apple", "cherry", "apricot"]:
        create_note(title=title, content=f"about {title}")

    r = client.get("/notes", headers=HEADERS, params={"sort": "title_asc"})
    body = r.json()
    assert [n["title"] for n in body["notes"]] == ["Apple", "apricot", "banana", "cherry"]
    assert body["sort"] == "title_asc"

    r = client.get("/notes", headers=HEADERS, params={"search": "AP", "sort": "title_desc"})
    body = r.json()
    assert [n["title"] for n in body["notes"]] == ["apricot", "Apple"]
    assert body["search_query"] == "AP"
    assert body["pagination"]["total_count"] == 2

    r = client.get("/notes", headers=HEADERS, params={"limit": 3, "page": "2", "sort": "title_asc"})
    body = r.json()
    assert [n["title"] for n in body["notes"]] == ["cherry"]
    assert body["pagination"] == {
        "current_page": 2,
        "total_pages": 2,
        "total_count": 4,
        "limit": 3,
        "has_next_page": False,
        "has_prev_page": True,
    }
    assert body["page_numbers"] == [1, 2]
    assert body["prev_page_url"] == "/notes?sort=title_asc&page=1"
    assert body["next_page_url"] is None


def test_list_defaults_and_bad_params(client, create_note):
    create_note(title="first")
    create_note(title="second")

    r = client.get("/notes", headers=HEADERS, params={"page": "abc", "sort": "bogus"})
    assert r.status_code == 200
    body = r.json()
    assert body["pagination"]["current_page"] == 1
    # newest first
    assert [n["title"] for n in body["notes"]] == ["second", "first"]
    assert len(body["sort_options"]) == 6
    assert body["sort"] == "created_at_desc"


def test_unknown_sort_is_normalized_in_page_links(client, create_note):
    for i in range(3):
        create_note(title=f"n{i}")

    r = client.get("/notes", headers=HEADERS, params={"sort": "title_sideways", "limit": 1})
    body = r.json()
    assert body["sort"] == "title_desc"
    assert body["next_page_url"] == "/notes?sort=title_desc&page=2"


def test_recent_notes_limited_to_five(client, create_note):
    ids = [create_note(title=f"n{i}")["id"] for i in range(7)]

    r = client.get("/notes/recent", headers=HEADERS)
    assert r.status_code == 200
    assert [n["id"] for n in r.json()] == list(reversed(ids))[:5]


def test_debug_notes_dump(client, create_note):
    note = create_note(title="dbg")

    r = client.get("/debug/notes", headers=HEADERS)
    assert r.status_code == 200
    assert r.json() == {
        "user_id": "userA",
        "notes": [{"id": note["id"], "title": "dbg", "user_id": "userA"}],
    }


def test_debug_routes_absent_without_dev_env(client, monkeypatch):
    monkeypatch.delenv("ENV")
    import app.main

    importlib.reload(app.main)
    prod = TestClient(app.main.app)

    assert prod.get("/debug/notes", headers=HEADERS).status_code == 404
    assert prod.get("/health").status_code == 200
