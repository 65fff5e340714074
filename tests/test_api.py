"""Tests for the HTTP API via FastAPI TestClient."""

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.services.session_service import get_session_store

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def auth(client):
    response = client.post("/api/sessions", json={"name": "Ada", "email": "ada@example.com"})
    assert response.status_code == 201
    body = response.json()
    return {"Authorization": f"Bearer {body['access_token']}"}


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_start_session(client):
    response = client.post("/api/sessions", json={"name": "Grace", "email": "grace@example.com"})
    body = response.json()
    assert body["portfolio_title"] == "Grace's Portfolio"
    assert get_session_store().get(body["session_id"]) is not None


def test_invalid_identity_rejected(client):
    response = client.post("/api/sessions", json={"name": "Grace", "email": "nope"})
    assert response.status_code == 422


def test_requires_token(client):
    assert client.get("/api/portfolio/blocks").status_code in (401, 403)
    bad = {"Authorization": "Bearer not-a-token"}
    assert client.get("/api/portfolio/blocks", headers=bad).status_code == 401


def test_admin_cannot_build_portfolio(client):
    token = client.post(
        "/api/sessions", json={"name": "Root", "email": "root@example.com", "role": "admin"}
    ).json()["access_token"]
    response = client.get("/api/portfolio/blocks", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 403


def test_block_lifecycle(client, auth):
    block = client.post("/api/portfolio/blocks", json={"kind": "skill"}, headers=auth).json()
    assert block["order"] == 0
    assert block["content"]["level"] == 80

    listing = client.patch(
        f"/api/portfolio/blocks/{block['id']}", json={"content": {"level": 120}}, headers=auth
    ).json()
    assert listing["selected_id"] == block["id"]
    assert listing["blocks"][0]["content"]["level"] == 100

    first = client.delete(f"/api/portfolio/blocks/{block['id']}", headers=auth)
    second = client.delete(f"/api/portfolio/blocks/{block['id']}", headers=auth)
    assert first.status_code == second.status_code == 200

    listing = client.get("/api/portfolio/blocks", headers=auth).json()
    assert listing["total"] == 0
    assert listing["selected_id"] is None


def test_unknown_kind_is_422(client, auth):
    response = client.post("/api/portfolio/blocks", json={"kind": "video"}, headers=auth)
    assert response.status_code == 422


def test_get_missing_block_404(client, auth):
    assert client.get("/api/portfolio/blocks/missing", headers=auth).status_code == 404


def test_array_rows(client, auth):
    block = client.post("/api/portfolio/blocks", json={"kind": "project"}, headers=auth).json()
    url = f"/api/portfolio/blocks/{block['id']}/arrays/tech"

    index = client.post(url, headers=auth).json()["index"]
    assert client.put(url, json={"index": index, "value": ""}, headers=auth).json() == []

    index = client.post(url, headers=auth).json()["index"]
    assert client.put(url, json={"index": index, "value": "FastAPI"}, headers=auth).json() == ["FastAPI"]


def test_image_upload(client, auth):
    block = client.post("/api/portfolio/blocks", json={"kind": "image"}, headers=auth).json()
    url = f"/api/portfolio/blocks/{block['id']}/image"

    ok = client.post(url, files={"file": ("me.png", PNG_BYTES, "image/png")}, headers=auth)
    assert ok.status_code == 200
    assert ok.json()["blocks"][0]["content"]["src"].startswith("data:image/png;base64,")

    bad = client.post(url, files={"file": ("cv.pdf", b"%PDF", "application/pdf")}, headers=auth)
    assert bad.status_code == 415


def test_generation_endpoint(client, auth):
    response = client.post("/api/generation/skill-roadmap", headers=auth)
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "succeeded"
    assert body["result"].startswith("Prioritized learning path: TypeScript")

    assert client.post("/api/generation/poetry", headers=auth).status_code == 422


def test_generation_into_block(client, auth):
    block = client.post("/api/portfolio/blocks", json={"kind": "text"}, headers=auth).json()
    client.post(
        "/api/generation/portfolio-summary",
        params={"block_id": block["id"], "field": "text"},
        headers=auth,
    )
    stored = client.get(f"/api/portfolio/blocks/{block['id']}", headers=auth).json()
    assert stored["content"]["text"].startswith("Dynamic aspiring full stack developer")


def test_assistant_endpoint(client, auth):
    response = client.post("/api/assistant/messages", json={"text": "what skill should I learn?"}, headers=auth)
    assert response.status_code == 200
    messages = response.json()["messages"]
    assert [m["role"] for m in messages] == ["user", "assistant"]
    assert "TypeScript" in messages[1]["text"]

    assert client.post("/api/assistant/messages", json={"text": "  "}, headers=auth).status_code == 400


def test_search_endpoint(client, auth):
    body = client.get("/api/search", params={"q": "python"}, headers=auth).json()
    assert [s["skill"] for s in body["skills"]] == ["Python"]
    assert [j["title"] for j in body["jobs"]] == ["Python Developer Intern"]
    assert [p["title"] for p in body["projects"]] == ["AI Chatbot"]


def test_profile_validation(client, auth):
    bad = client.put("/api/portfolio/profile", json={"data": {"email": "x", "fullName": "A"}}, headers=auth)
    assert bad.status_code == 400

    good = client.put(
        "/api/portfolio/profile", json={"data": {"email": "ada@example.com", "fullName": "Ada"}}, headers=auth
    )
    assert good.json()["is_valid"] is True


def test_notifications_drained(client, auth):
    client.post("/api/portfolio/blocks", json={"kind": "text"}, headers=auth)
    first = client.get("/api/notifications", headers=auth).json()["notifications"]
    assert first[-1]["message"] == "Text Block added successfully!"
    assert client.get("/api/notifications", headers=auth).json()["notifications"] == []


def test_end_session(client, auth):
    assert client.delete("/api/sessions/me", headers=auth).status_code == 200
    assert client.get("/api/portfolio/blocks", headers=auth).status_code == 404


def test_generation_notifications_exposed(client, auth):
    client.post("/api/generation/resume-tips", headers=auth)
    messages = [n["message"] for n in client.get("/api/notifications", headers=auth).json()["notifications"]]
    assert messages == [
        "AI is generating content...",
        "AI analyzed your profile and provided resume optimization tips!",
    ]
