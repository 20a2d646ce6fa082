import pytest
from fastapi.testclient import TestClient

from humandiff.rewrite.provider import StaticTransformationProvider, TransformationError
from humandiff.service import HumanizeService
from web import app, get_service


def _rewrite(request):
    if request.original_text == "fail":
        raise TransformationError("503: backend overloaded")
    return request.original_text.replace("quick", "quick brown")


@pytest.fixture
def client(history):
    service = HumanizeService(StaticTransformationProvider(_rewrite), history=history)
    app.dependency_overrides[get_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_index_page(client) -> None:
    response = client.get("/")

    assert response.status_code == 200
    assert "Humandiff" in response.text
    assert "diff-added" in response.text


def test_transform_returns_envelope_with_highlighted_changes(client) -> None:
    response = client.post(
        "/api/transform",
        json={
            "originalText": "The quick fox",
            "mode": "style",
            "formality": 20,
            "targetAudience": "casual",
            "verbosity": "concise",
            "deepHumanization": True,
        },
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    data = body["data"]
    assert data["humanizedText"] == "The quick brown fox"
    assert data["mode"] == "style"
    assert data["targetAudience"] == "casual"
    assert data["html"] == 'The quick <span class="diff-added">brown</span> fox'
    assert {"type": "added", "text": "brown"} in data["segments"]


def test_transform_blank_text_is_bad_request(client) -> None:
    response = client.post("/api/transform", json={"originalText": "   "})

    assert response.status_code == 400
    assert response.json()["detail"] == "Text cannot be empty"


def test_transform_invalid_settings_are_rejected(client) -> None:
    response = client.post("/api/transform", json={"originalText": "x", "formality": 150})

    assert response.status_code == 422


def test_transform_provider_failure_is_bad_gateway(client) -> None:
    response = client.post("/api/transform", json={"originalText": "fail"})

    assert response.status_code == 502
    assert "backend overloaded" in response.json()["detail"]
    assert client.get("/api/transformations").json() == []


def test_history_list_restore_and_delete(client) -> None:
    created = client.post("/api/transform", json={"originalText": "A quick note"}).json()["data"]

    listed = client.get("/api/transformations").json()
    assert [item["id"] for item in listed] == [created["id"]]
    assert listed[0]["originalText"] == "A quick note"

    restored = client.get(f"/api/transformations/{created['id']}")
    assert restored.status_code == 200
    assert restored.json()["data"]["transformation"]["humanizedText"] == "A quick brown note"

    assert client.delete(f"/api/transformations/{created['id']}").json() == {"success": True}
    assert client.get("/api/transformations").json() == []
    assert client.delete(f"/api/transformations/{created['id']}").status_code == 404
    assert client.get(f"/api/transformations/{created['id']}").status_code == 404


def test_diff_endpoint(client) -> None:
    response = client.post(
        "/api/diff", json={"original": "The quick brown fox", "transformed": "The quick fox"}
    )

    assert response.status_code == 200
    body = response.json()
    assert {"type": "removed", "text": "brown"} in body["segments"]
    assert body["html"] == "The quick fox"
    assert body["stats"]["removed_words"] == 1


def test_diff_endpoint_empty_side_yields_no_segments(client) -> None:
    response = client.post("/api/diff", json={"original": "", "transformed": "hello"})

    assert response.json()["segments"] == []


def test_diff_response_schema_is_typed() -> None:
    properties = app.openapi()["components"]["schemas"]["DiffResponse"]["properties"]

    assert properties["segments"]["type"] == "array"
    assert properties["segments"]["items"]["type"] == "object"
    assert properties["segments"]["items"]["additionalProperties"] == {"type": "string"}
    assert properties["stats"]["type"] == "object"
    assert properties["html"]["type"] == "string"
