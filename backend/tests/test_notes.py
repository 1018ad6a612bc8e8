def _create_note(client, **overrides):
    body = {"title": "Groceries", "content": "milk, eggs", "tags": ["Home", " Errands "]}
    body.update(overrides)
    r = client.post("/api/notes", json=body)
    assert r.status_code == 201, r.text
    return r.json()["data"]


def test_create_then_get_returns_same_note(client):
    r = client.post(
        "/api/notes",
        json={"title": "Groceries", "content": "milk, eggs", "tags": ["Home", " Errands "], "isFavorite": True},
    )
    assert r.status_code == 201
    body = r.json()
    assert body["success"] is True
    created = body["data"]

    r = client.get(f"/api/notes/{created['id']}")
    assert r.status_code == 200
    fetched = r.json()["data"]
    assert fetched == created
    assert fetched["title"] == "Groceries"
    assert fetched["content"] == "milk, eggs"
    assert fetched["tags"] == ["home", "errands"]
    assert fetched["isFavorite"] is True
    assert fetched["createdAt"] == fetched["updatedAt"]


def test_is_favorite_defaults_to_false(client):
    note = _create_note(client, tags=[])
    assert note["isFavorite"] is False
    assert note["tags"] == []


def test_duplicate_tags_are_kept(client):
    note = _create_note(client, tags=["a", "A", "a"])
    assert note["tags"] == ["a", "a", "a"]


def test_get_unknown_note_is_404(client):
    r = client.get("/api/notes/00000000-0000-0000-0000-000000000000")
    assert r.status_code == 404
    assert r.json() == {"success": False, "error": "Note not found"}


def test_malformed_id_is_404_not_validation_error(client):
    r = client.get("/api/notes/not-a-uuid")
    assert r.status_code == 404

    r = client.delete("/api/notes/not-a-uuid")
    assert r.status_code == 404


def test_update_replaces_fields(client):
    note = _create_note(client)

    r = client.put(
        f"/api/notes/{note['id']}",
        json={"title": "Groceries v2", "content": "bread", "tags": ["Food"], "isFavorite": True},
    )
    assert r.status_code == 200
    updated = r.json()["data"]
    assert updated["id"] == note["id"]
    assert updated["title"] == "Groceries v2"
    assert updated["content"] == "bread"
    assert updated["tags"] == ["food"]
    assert updated["isFavorite"] is True
    assert updated["createdAt"] == note["createdAt"]
    assert updated["updatedAt"] >= note["updatedAt"]


def test_update_keeps_fields_not_sent(client):
    note = _create_note(client, isFavorite=True)

    r = client.put(f"/api/notes/{note['id']}", json={"title": "Renamed", "content": "same"})
    assert r.status_code == 200
    updated = r.json()["data"]
    assert updated["tags"] == ["home", "errands"]
    assert updated["isFavorite"] is True


def test_update_unknown_note_is_404(client):
    r = client.put(
        "/api/notes/00000000-0000-0000-0000-000000000000",
        json={"title": "t", "content": "c"},
    )
    assert r.status_code == 404


def test_update_is_validated(client):
    note = _create_note(client)
    r = client.put(f"/api/notes/{note['id']}", json={"title": "", "content": "c"})
    assert r.status_code == 400
    assert [d["field"] for d in r.json()["details"]] == ["title"]


def test_delete_is_not_idempotent(client):
    note = _create_note(client)

    r = client.delete(f"/api/notes/{note['id']}")
    assert r.status_code == 200
    assert r.json() == {"success": True, "message": "Note deleted successfully"}

    r = client.delete(f"/api/notes/{note['id']}")
    assert r.status_code == 404
    assert r.json()["success"] is False

    r = client.get(f"/api/notes/{note['id']}")
    assert r.status_code == 404


def test_content_too_long_is_rejected(client):
    r = client.post("/api/notes", json={"title": "t", "content": "x" * 5001})
    assert r.status_code == 400
    body = r.json()
    assert body["success"] is False
    assert body["error"] == "Validation failed"
    assert [d["field"] for d in body["details"]] == ["content"]
    assert body["details"][0]["location"] == "body"


def test_content_at_limit_is_accepted(client):
    r = client.post("/api/notes", json={"title": "t" * 200, "content": "x" * 5000})
    assert r.status_code == 201


def test_missing_required_fields_are_reported(client):
    r = client.post("/api/notes", json={"tags": ["a"]})
    assert r.status_code == 400
    fields = {d["field"] for d in r.json()["details"]}
    assert fields == {"title", "content"}


def test_blank_title_is_rejected_after_trimming(client):
    r = client.post("/api/notes", json={"title": "   ", "content": "c"})
    assert r.status_code == 400
    assert r.json()["details"][0]["field"] == "title"


def test_tags_must_be_a_list_of_short_strings(client):
    r = client.post("/api/notes", json={"title": "t", "content": "c", "tags": "a,b"})
    assert r.status_code == 400
    assert r.json()["details"][0]["field"] == "tags"

    r = client.post("/api/notes", json={"title": "t", "content": "c", "tags": ["ok", "x" * 51]})
    assert r.status_code == 400
    assert r.json()["details"][0]["field"] == "tags.1"

    r = client.post("/api/notes", json={"title": "t", "content": "c", "tags": ["x" * 50]})
    assert r.status_code == 201


def test_is_favorite_must_be_boolean(client):
    r = client.post("/api/notes", json={"title": "t", "content": "c", "isFavorite": "true"})
    assert r.status_code == 400
    assert r.json()["details"][0]["field"] == "isFavorite"


def test_notes_persist_on_disk(client, tmp_path):
    note = _create_note(client)
    assert (tmp_path / "notes" / f"{note['id']}.json").exists()
