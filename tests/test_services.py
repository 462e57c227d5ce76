from datetime import datetime

import pytest

from easytech_api.models import Service

from conftest import SERVICE_PAYLOAD


def test_list_services_empty(client):
    response = client.get("/api/services")
    assert response.status_code == 200
    assert response.json() == []


def test_create_service_requires_login(client):
    response = client.post("/api/services", json=SERVICE_PAYLOAD)
    assert response.status_code == 401
    assert client.app.state.storage.count(Service) == 0


def test_create_service(auth_client):
    response = auth_client.post("/api/services", json=SERVICE_PAYLOAD)

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Service created successfully"
    service = body["service"]
    assert service["id"] == 1
    assert service["title"] == "Web Design"
    assert service["priceFrom"] == 149
    assert service["imageUrl"] == SERVICE_PAYLOAD["imageUrl"]
    assert service["features"] == ["Responsive layouts", "SEO basics"]
    assert service["createdAt"]


def test_create_service_ignores_client_created_at(auth_client):
    payload = {**SERVICE_PAYLOAD, "id": 77, "createdAt": "1999-01-01T00:00:00"}
    service = auth_client.post("/api/services", json=payload).json()["service"]
    assert service["id"] == 1
    assert not service["createdAt"].startswith("1999")


def test_created_service_ids_increase(auth_client):
    first = auth_client.post("/api/services", json=SERVICE_PAYLOAD).json()["service"]
    second = auth_client.post("/api/services", json=SERVICE_PAYLOAD).json()["service"]
    assert second["id"] > first["id"]
    assert len(auth_client.get("/api/services").json()) == 2


def test_create_service_validation_error(auth_client):
    payload = {**SERVICE_PAYLOAD, "priceFrom": -5}
    response = auth_client.post("/api/services", json=payload)

    assert response.status_code == 400
    assert response.json()["errors"][0]["loc"] == ["body", "priceFrom"]
    assert auth_client.app.state.storage.count(Service) == 0


def test_get_service_by_id(auth_client):
    auth_client.post("/api/services", json=SERVICE_PAYLOAD)
    response = auth_client.get("/api/services/1")
    assert response.status_code == 200
    assert response.json()["title"] == "Web Design"


def test_get_service_invalid_id(client):
    response = client.get("/api/services/abc")
    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid ID format"


def test_get_service_not_found(client):
    response = client.get("/api/services/9999")
    assert response.status_code == 404
    assert response.json()["detail"] == "Service not found"


def test_service_created_at_is_utc(auth_client):
    service = auth_client.post("/api/services", json=SERVICE_PAYLOAD).json()["service"]
    created_at = datetime.fromisoformat(service["createdAt"].replace("Z", "+00:00"))
    assert created_at.utcoffset().total_seconds() == 0

    listed = auth_client.get("/api/services").json()[0]
    assert listed["createdAt"] == service["createdAt"]


def test_create_service_rejects_price_sent_as_string(auth_client):
    response = auth_client.post("/api/services", json={**SERVICE_PAYLOAD, "priceFrom": "149"})

    assert response.status_code == 400
    assert response.json()["message"] == "Validation error"
    assert response.json()["errors"][0]["loc"] == ["body", "priceFrom"]
    assert auth_client.app.state.storage.count(Service) == 0


@pytest.mark.parametrize("image_url", [
    "https://example.com",
    "ftp://files.example.com/a.png",
    "HTTPS://Example.com/Images/A.jpg",
])
def test_create_service_stores_image_url_as_sent(auth_client, image_url):
    response = auth_client.post("/api/services", json={**SERVICE_PAYLOAD, "imageUrl": image_url})

    assert response.status_code == 201
    assert response.json()["service"]["imageUrl"] == image_url
    assert auth_client.get("/api/services/1").json()["imageUrl"] == image_url


@pytest.mark.parametrize("raw_id", ["1_0", " 1", "1.0", "+1", "١"])
def test_get_service_rejects_non_plain_integer_id(auth_client, raw_id):
    auth_client.post("/api/services", json=SERVICE_PAYLOAD)
    response = auth_client.get(f"/api/services/{raw_id}")
    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid ID format"


def test_not_found_body_carries_message(client):
    response = client.get("/api/services/9999")
    assert response.json() == {"detail": "Service not found", "message": "Service not found"}
