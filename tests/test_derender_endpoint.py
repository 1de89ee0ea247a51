"""Tests for the derender endpoint."""

from fastapi.testclient import TestClient

from derender.api.app import create_app
from derender.domain.generations import ModelResponse, ResponsePart
from tests.conftest import ORIGINAL_IMAGE, PROCESSED_IMAGE


def test_derender_returns_image(container) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/api/derender", json={"image": ORIGINAL_IMAGE, "mimeType": "image/jpeg"}
    )

    assert response.status_code == 200
    assert response.json() == {"image": PROCESSED_IMAGE, "mimeType": "image/png"}


def test_derender_missing_image_returns_400(container, model_client) -> None:
    client = TestClient(create_app(container))

    response = client.post("/api/derender", json={"mimeType": "image/jpeg"})

    assert response.status_code == 400
    assert response.json() == {"error": "Image data is required"}
    assert model_client.calls == []


def test_derender_invalid_body_returns_400(container) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/api/derender",
        content=b"not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert "error" in response.json()


def test_derender_without_generated_image(container, model_client) -> None:
    model_client.response = ModelResponse()
    client = TestClient(create_app(container))

    response = client.post("/api/derender", json={"image": ORIGINAL_IMAGE})

    assert response.status_code == 200
    assert response.json() == {"error": "No image generated by model"}


def test_derender_returns_model_text_for_diagnostics(container, model_client) -> None:
    model_client.response = ModelResponse(parts=[ResponsePart(text="refused")])
    client = TestClient(create_app(container))

    response = client.post("/api/derender", json={"image": ORIGINAL_IMAGE})

    assert response.status_code == 200
    assert response.json() == {
        "error": "No image generated by model",
        "rawText": "refused",
    }


def test_derender_missing_credential_returns_500(container) -> None:
    container.generation_service.client = None
    client = TestClient(create_app(container))

    response = client.post("/api/derender", json={"image": ORIGINAL_IMAGE})

    assert response.status_code == 500
    assert response.json() == {"error": "GOOGLE_API_KEY is not set"}


def test_derender_model_failure_returns_details(container, model_client) -> None:
    model_client.error = RuntimeError("model timed out")
    client = TestClient(create_app(container))

    response = client.post("/api/derender", json={"image": ORIGINAL_IMAGE})

    assert response.status_code == 500
    assert response.json() == {
        "error": "Internal Server Error",
        "details": "model timed out",
    }


def test_derender_ignores_storage_failure(container, object_store) -> None:
    object_store.fail_uploads = True
    client = TestClient(create_app(container))

    response = client.post("/api/derender", json={"image": ORIGINAL_IMAGE})

    assert response.status_code == 200
    assert response.json()["image"] == PROCESSED_IMAGE


def test_health(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
