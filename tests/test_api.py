"""Tests for API endpoints."""

import json
from datetime import datetime

import pytest
from fastapi import Request
from httpx import AsyncClient

from src.config import get_settings
from src.db.models import Translation, Video
from src.main import global_exception_handler, settings


@pytest.mark.asyncio
async def test_health_check(client: AsyncClient):
    """Test health check endpoint."""
    response = await client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["database"] == "ok"


@pytest.mark.asyncio
async def test_root_endpoint(client: AsyncClient):
    """Test root endpoint."""
    response = await client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["service"] == "Video Translation Service"


@pytest.mark.asyncio
async def test_languages_endpoint(client: AsyncClient):
    """Test languages listing endpoint."""
    response = await client.get("/v1/languages")
    assert response.status_code == 200
    data = response.json()
    assert len(data) == 12
    assert {"code": "es", "name": "Spanish"} in data


@pytest.mark.asyncio
async def test_info_endpoint(client: AsyncClient):
    response = await client.get("/v1/info")
    assert response.status_code == 200
    data = response.json()
    assert data["translation_statuses"] == ["pending", "processing", "completed", "failed"]


# ============== Videos ==============


@pytest.mark.asyncio
async def test_register_video(client: AsyncClient, video_payload: dict):
    """Test video registration."""
    response = await client.post("/v1/videos", json=video_payload)
    assert response.status_code == 201
    data = response.json()
    assert isinstance(data["id"], int)
    for field, value in video_payload.items():
        assert data[field] == value
    assert data["uploaded_at"] == data["updated_at"]


@pytest.mark.asyncio
async def test_register_video_rejects_invalid_metadata(
    client: AsyncClient, video_payload: dict
):
    """Malformed input is rejected before anything is stored."""
    for override in ({"file_size": 0}, {"duration": -5}, {"original_language": "xx"}):
        response = await client.post("/v1/videos", json={**video_payload, **override})
        assert response.status_code == 422

    response = await client.get("/v1/videos")
    assert response.json() == []


@pytest.mark.asyncio
async def test_list_videos(client: AsyncClient, video_payload: dict):
    """Test video listing, most recent first."""
    for name in ("first.mp4", "second.mp4"):
        await client.post("/v1/videos", json={**video_payload, "filename": name})

    response = await client.get("/v1/videos")
    assert response.status_code == 200
    data = response.json()
    assert len(data) == 2
    uploaded = [datetime.fromisoformat(v["uploaded_at"].replace("Z", "+00:00")) for v in data]
    assert uploaded == sorted(uploaded, reverse=True)
    assert data[0]["filename"] == "second.mp4"


@pytest.mark.asyncio
async def test_get_video(client: AsyncClient, video: Video):
    response = await client.get(f"/v1/videos/{video.id}")
    assert response.status_code == 200
    assert response.json()["original_filename"] == "original-test.mp4"


@pytest.mark.asyncio
async def test_get_nonexistent_video(client: AsyncClient):
    """Test getting a video that doesn't exist."""
    response = await client.get("/v1/videos/999")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_list_video_translations(client: AsyncClient, translation: Translation):
    response = await client.get(f"/v1/videos/{translation.video_id}/translations")
    assert response.status_code == 200
    data = response.json()
    assert [t["id"] for t in data] == [translation.id]
    assert "video" not in data[0]


@pytest.mark.asyncio
async def test_list_translations_of_unknown_video(client: AsyncClient):
    response = await client.get("/v1/videos/999/translations")
    assert response.status_code == 200
    assert response.json() == []


# ============== Translations ==============


@pytest.mark.asyncio
async def test_create_translation(client: AsyncClient, video: Video):
    """Test translation creation."""
    response = await client.post(
        "/v1/translations",
        json={"video_id": video.id, "target_language": "es"},
    )
    assert response.status_code == 201
    data = response.json()
    assert data["video_id"] == video.id
    assert data["target_language"] == "es"
    assert data["status"] == "pending"
    assert data["progress_percentage"] == 0
    assert data["translated_audio_path"] is None
    assert data["completed_at"] is None


@pytest.mark.asyncio
async def test_create_translation_for_missing_video(client: AsyncClient):
    response = await client.post(
        "/v1/translations",
        json={"video_id": 999, "target_language": "fr"},
    )
    assert response.status_code == 404
    assert "999" in response.json()["detail"]


@pytest.mark.asyncio
async def test_create_duplicate_translation(client: AsyncClient, translation: Translation):
    response = await client.post(
        "/v1/translations",
        json={"video_id": translation.video_id, "target_language": "es"},
    )
    assert response.status_code == 409
    assert "already exists" in response.json()["detail"]


@pytest.mark.asyncio
async def test_create_translation_rejects_unsupported_language(
    client: AsyncClient, video: Video
):
    response = await client.post(
        "/v1/translations",
        json={"video_id": video.id, "target_language": "tlh"},
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_get_translation_with_video(
    client: AsyncClient, translation: Translation, video: Video
):
    response = await client.get(f"/v1/translations/{translation.id}")
    assert response.status_code == 200
    data = response.json()
    assert data["id"] == translation.id
    assert data["video"]["id"] == video.id
    assert data["video"]["file_size"] == 1024000


@pytest.mark.asyncio
async def test_get_nonexistent_translation(client: AsyncClient):
    response = await client.get("/v1/translations/999")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_list_translations(client: AsyncClient, video: Video):
    for language in ("de", "ja"):
        await client.post(
            "/v1/translations",
            json={"video_id": video.id, "target_language": language},
        )

    response = await client.get("/v1/translations")
    assert response.status_code == 200
    data = response.json()
    assert [t["target_language"] for t in data] == ["ja", "de"]
    assert all(t["video"]["id"] == video.id for t in data)


# ============== Progress ==============


@pytest.mark.asyncio
async def test_progress_lifecycle(client: AsyncClient, translation: Translation):
    url = f"/v1/translations/{translation.id}/progress"

    response = await client.patch(
        url, json={"status": "processing", "progress_percentage": 50}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "processing"
    assert data["progress_percentage"] == 50
    assert data["error_message"] is None

    response = await client.patch(
        url,
        json={
            "status": "completed",
            "progress_percentage": 100,
            "translated_audio_path": "/translations/1-es.mp3",
            "completed_at": "2024-05-01T10:30:00Z",
        },
    )
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "completed"
    assert data["translated_audio_path"] == "/translations/1-es.mp3"
    assert datetime.fromisoformat(data["completed_at"].replace("Z", "+00:00")).year == 2024

    response = await client.post(
        "/v1/translations",
        json={"video_id": translation.video_id, "target_language": "es"},
    )
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_progress_omitted_and_null_fields(client: AsyncClient, translation: Translation):
    url = f"/v1/translations/{translation.id}/progress"
    await client.patch(
        url,
        json={"status": "processing", "transcript_original": "Hello", "error_message": "retrying"},
    )

    response = await client.patch(url, json={"error_message": None})
    assert response.status_code == 200
    data = response.json()
    assert data["error_message"] is None
    assert data["transcript_original"] == "Hello"
    assert data["status"] == "processing"


@pytest.mark.asyncio
async def test_progress_for_missing_translation(client: AsyncClient):
    response = await client.patch(
        "/v1/translations/999/progress", json={"progress_percentage": 10}
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_progress_rejects_invalid_values(client: AsyncClient, translation: Translation):
    url = f"/v1/translations/{translation.id}/progress"
    for body in (
        {"progress_percentage": 101},
        {"status": "cancelled"},
        {"status": None},
    ):
        response = await client.patch(url, json=body)
        assert response.status_code == 422


@pytest.mark.asyncio
async def test_progress_rejects_invalid_transition(
    client: AsyncClient, translation: Translation
):
    response = await client.patch(
        f"/v1/translations/{translation.id}/progress", json={"status": "completed"}
    )
    assert response.status_code == 409
    assert "pending" in response.json()["detail"]


@pytest.mark.asyncio
async def test_write_endpoints_are_rate_limited(client: AsyncClient, video_payload: dict):
    limit = get_settings().rate_limit_per_minute

    for _ in range(limit):
        response = await client.post("/v1/videos", json=video_payload)
        assert response.status_code == 201

    response = await client.post("/v1/videos", json=video_payload)
    assert response.status_code == 429


def _request(path: str = "/v1/videos") -> Request:
    return Request({"type": "http", "method": "GET", "path": path, "headers": []})


@pytest.mark.asyncio
async def test_unhandled_error_returns_error_response(monkeypatch):
    monkeypatch.setattr(settings, "debug", False)

    response = await global_exception_handler(_request(), RuntimeError("boom"))

    assert response.status_code == 500
    assert json.loads(response.body) == {
        "error": "Internal server error",
        "detail": "An unexpected error occurred",
    }


@pytest.mark.asyncio
async def test_unhandled_error_detail_shown_in_debug(monkeypatch):
    monkeypatch.setattr(settings, "debug", True)

    response = await global_exception_handler(_request(), RuntimeError("boom"))

    assert response.status_code == 500
    assert json.loads(response.body) == {"error": "Internal server error", "detail": "boom"}
