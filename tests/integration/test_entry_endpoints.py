"""
Entry endpoint tests through the HTTP API.
"""
from daydiary.models.enums import MOOD_GRADIENTS, Mood

ENTRY = {
    "date": "2025-01-05",
    "title": "Lake walk",
    "mood": "😌",
    "content": "Cold but bright.",
    "files": [
        "https://res.cloudinary.com/demo/image/upload/v1/lake.jpg",
        {"name": "ducks.mp4", "type": "video/mp4", "url": "https://res.cloudinary.com/demo/video/upload/v1/ducks.mp4", "progress": 100},
        {"name": "pending.jpg", "type": "image/jpeg", "uploading": True, "progress": 30},
    ],
}


def test_get_entry_for_empty_date_is_null(client):
    response = client.get("/api/entries", params={"date": "2025-01-05"})

    assert response.status_code == 200
    assert response.json() is None
    assert "x-request-id" in response.headers


def test_save_and_fetch_entry(client):
    response = client.post("/api/entries", json=ENTRY)

    assert response.status_code == 200
    saved = response.json()
    assert saved["date"] == "2025-01-05"
    assert saved["files"] == [
        {"name": "lake.jpg", "type": "image/jpeg", "url": "https://res.cloudinary.com/demo/image/upload/v1/lake.jpg"},
        {"name": "ducks.mp4", "type": "video/mp4", "url": "https://res.cloudinary.com/demo/video/upload/v1/ducks.mp4"},
    ]

    fetched = client.get("/api/entries", params={"date": "2025-01-05"}).json()
    assert fetched["id"] == saved["id"]
    assert fetched["title"] == "Lake walk"


def test_saving_same_date_twice_keeps_one_entry(client):
    client.post("/api/entries", json=ENTRY)
    client.post("/api/entries", json={"date": "2025-01-05", "title": "Rewritten"})

    entries = client.get("/api/entries").json()
    assert len(entries) == 1
    assert entries[0]["title"] == "Rewritten"
    assert entries[0]["files"] == []
    assert entries[0]["mood"] is None


def test_list_entries_newest_first(client):
    for entry_date in ("2025-01-03", "2025-01-10", "2024-12-25"):
        client.post("/api/entries", json={"date": entry_date, "title": "Day"})

    dates = [entry["date"] for entry in client.get("/api/entries").json()]
    assert dates == ["2025-01-10", "2025-01-03", "2024-12-25"]


def test_missing_date_is_client_error(client):
    response = client.post("/api/entries", json={"title": "Nowhere"})

    assert response.status_code == 400
    assert response.json()["error"] == "ValidationError"
    assert client.get("/api/entries").json() == []


def test_missing_title_is_client_error(client):
    response = client.post("/api/entries", json={"date": "2025-01-05"})

    assert response.status_code == 400


def test_overlong_title_is_client_error(client):
    response = client.post("/api/entries", json={"date": "2025-01-05", "title": "x" * 301})

    assert response.status_code == 400
    assert client.get("/api/entries").json() == []


def test_malformed_date_query_is_client_error(client):
    assert client.get("/api/entries", params={"date": "05/01/2025"}).status_code == 400


def test_entry_detail_includes_theme(client):
    client.post("/api/entries", json=ENTRY)

    response = client.get("/api/entries/2025-01-05/detail")

    assert response.status_code == 200
    assert response.json()["theme"] == MOOD_GRADIENTS[Mood.CALM]


def test_entry_detail_missing_is_not_found(client):
    response = client.get("/api/entries/2025-01-05/detail")

    assert response.status_code == 404
    assert response.json()["error"] == "EntryNotFoundError"
