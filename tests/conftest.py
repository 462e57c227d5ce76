import pytest
from fastapi.testclient import TestClient

from easytech_api.config import Settings
from easytech_api.database import build_engine
from easytech_api.main import create_app
from easytech_api.storage import Storage


SERVICE_PAYLOAD = {
    "title": "Web Design",
    "description": "Modern responsive websites for small businesses.",
    "priceFrom": 149,
    "priceUnit": "project",
    "imageUrl": "https://example.com/images/web-design.jpg",
    "features": ["Responsive layouts", "SEO basics"],
}

BLOG_POST_PAYLOAD = {
    "title": "Backups That Actually Work",
    "excerpt": "A practical checklist for testing your backups.",
    "content": "Backups are only as good as your last successful restore. " * 2,
    "category": "Infrastructure",
    "authorName": "Michael Chen",
    "publishDate": "2024-02-01",
    "readTime": "4 min",
    "imageUrl": "https://example.com/images/backups.jpg",
}

TESTIMONIAL_PAYLOAD = {
    "name": "Alex Kim",
    "position": "COO, Northwind",
    "content": "Fast, friendly and thorough support every time.",
    "rating": 4,
    "initials": "AK",
}


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'test.db'}",
        session_secret="test-secret",
    )


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as c:
        yield c


@pytest.fixture
def storage(settings):
    storage = Storage(build_engine(settings.database_url))
    storage.init_schema()
    yield storage
    storage.close()


def register(client, username="bob", password="secret1", **extra):
    return client.post("/api/register", json={"username": username, "password": password, **extra})


def login(client, username="bob", password="secret1"):
    return client.post("/api/login", json={"username": username, "password": password})


@pytest.fixture
def auth_client(client):
    """Client with a registered and logged-in user 'bob'."""
    assert register(client).status_code == 201
    assert login(client).status_code == 200
    return client
