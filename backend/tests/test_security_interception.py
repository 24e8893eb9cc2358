"""
Security tests for note isolation between users.

These tests ensure that:
1. Users cannot read other users' notes
2. Users cannot modify or delete other users' notes
3. Listings never include another user's notes
4. Requests without credentials are rejected
"""


def test_unauthorized_note_access(client, create_note):
    note_id = create_note("userB", "Private Note", "Secret content")["id"]

    response = client.get(f"/notes/{note_id}", headers={"X-User-Id": "userA"})
    assert response.status_code == 404


def test_unauthorized_note_modification(client, create_note):
    note_id = create_note("userB", "Original Title", "Original content")["id"]

    response = client.put(
        f"/notes/{note_id}",
        headers={"X-User-Id": "userA"},
        json={"title": "Hacked Title", "content": "Hacked content"},
    )
    assert response.status_code == 404

    r = client.get(f"/notes/{note_id}", headers={"X-User-Id": "userB"})
    assert r.status_code == 200
    assert r.json()["title"] == "Original Title"
    assert r.json()["content"] == "Original content"


def test_unauthorized_note_deletion(client, create_note):
    note_id = create_note("userB")["id"]

    response = client.delete(f"/notes/{note_id}", headers={"X-User-Id": "userA"})
    assert response.status_code == 404

    r = client.get(f"/notes/{note_id}", headers={"X-User-Id": "userB"})
    assert r.status_code == 200


def test_missing_credentials_rejected(client, create_note):
    note_id = create_note("userB")["id"]

    assert client.get(f"/notes/{note_id}").status_code == 401
    assert client.get("/notes").status_code == 401


def test_tampering_with_user_id_header(client, create_note):
    note_id = create_note("userB", "Secret", "Only for B")["id"]

    response = client.get(f"/notes/{note_id}", headers={"X-User-Id": "userA; userB"})
    assert response.status_code == 404

    response = client.get(f"/notes/{note_id}", headers={"X-User-Id": "userB"})
    assert response.status_code == 200


def test_note_list_isolation(client, create_note):
    b_ids = [create_note("userB", f"Note {i}", f"Content {i}")["id"] for i in range(3)]
    a_id = create_note("userA", "User A Note", "A's content")["id"]

    r = client.get("/notes", headers={"X-User-Id": "userA"})
    assert r.status_code == 200
    listed = [n["id"] for n in r.json()["notes"]]

    assert a_id in listed
    for note_id in b_ids:
        assert note_id not in listed


def test_header_fallback_can_be_disabled(client, monkeypatch):
    monkeypatch.setenv("ALLOW_USER_HEADER", "false")

    r = client.get("/notes", headers={"X-User-Id": "userA"})
    assert r.status_code == 401
