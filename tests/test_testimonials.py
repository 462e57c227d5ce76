from easytech_api.models import Testimonial

from conftest import TESTIMONIAL_PAYLOAD


def test_list_testimonials_empty(client):
    assert client.get("/api/testimonials").json() == []


def test_create_testimonial_requires_login(client):
    response = client.post("/api/testimonials", json=TESTIMONIAL_PAYLOAD)
    assert response.status_code == 401
    assert client.app.state.storage.count(Testimonial) == 0


def test_create_and_list_testimonials(auth_client):
    response = auth_client.post("/api/testimonials", json=TESTIMONIAL_PAYLOAD)

    assert response.status_code == 201
    testimonial = response.json()["testimonial"]
    assert testimonial["id"] == 1
    assert testimonial["rating"] == 4
    assert testimonial["initials"] == "AK"

    listed = auth_client.get("/api/testimonials").json()
    assert [t["name"] for t in listed] == ["Alex Kim"]


def test_create_testimonial_rejects_bad_rating(auth_client):
    response = auth_client.post("/api/testimonials", json={**TESTIMONIAL_PAYLOAD, "rating": 6})
    assert response.status_code == 400
    assert response.json()["errors"][0]["loc"] == ["body", "rating"]


def test_create_testimonial_rejects_rating_sent_as_string(auth_client):
    response = auth_client.post("/api/testimonials", json={**TESTIMONIAL_PAYLOAD, "rating": "4"})
    assert response.status_code == 400
    assert response.json()["errors"][0]["loc"] == ["body", "rating"]
    assert auth_client.app.state.storage.count(Testimonial) == 0


def test_create_testimonial_accepts_fractional_rating(auth_client):
    response = auth_client.post("/api/testimonials", json={**TESTIMONIAL_PAYLOAD, "rating": 4.5})
    assert response.status_code == 201
    assert response.json()["testimonial"]["rating"] == 4.5
