import pytest

from notemarks.client import ApiError, NotemarksClient


@pytest.fixture()
def api(client):
    # TestClient is an httpx.Client, so the API client can ride on it
    return NotemarksClient(http_client=client)


def test_notes_roundtrip_through_client(api):
    created = api.notes.create({"title": "t", "content": "c", "tags": ["A"]})["data"]
    assert created["tags"] == ["a"]

    assert api.notes.get(created["id"])["data"] == created

    listed = api.notes.list(tags="a", q=None)
    assert listed["count"] == 1

    updated = api.notes.update(created["id"], {"title": "t2", "content": "c2"})["data"]
    assert updated["title"] == "t2"

    assert api.notes.delete(created["id"])["success"] is True


def test_client_raises_api_error_on_404(api):
    with pytest.raises(ApiError) as excinfo:
        api.bookmarks.get("00000000-0000-0000-0000-000000000000")
    assert excinfo.value.status_code == 404
    assert excinfo.value.message == "Bookmark not found"


def test_client_exposes_validation_details(api):
    with pytest.raises(ApiError) as excinfo:
        api.notes.create({"title": "t", "content": "x" * 5001})
    assert excinfo.value.status_code == 400
    assert [d["field"] for d in excinfo.value.details] == ["content"]


def test_client_does_not_close_borrowed_http_client(client):
    with NotemarksClient(http_client=client) as api:
        api.notes.list()
    assert client.get("/health").status_code == 200
