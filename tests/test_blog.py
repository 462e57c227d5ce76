import pytest

from easytech_api.models import BlogPost

from conftest import BLOG_POST_PAYLOAD


def create_post(client, **overrides):
    response = client.post("/api/blog-posts", json={**BLOG_POST_PAYLOAD, **overrides})
    assert response.status_code == 201
    return response.json()["blogPost"]


def test_create_blog_post_requires_login(client):
    response = client.post("/api/blog-posts", json=BLOG_POST_PAYLOAD)
    assert response.status_code == 401
    assert client.app.state.storage.count(BlogPost) == 0


def test_create_blog_post(auth_client):
    response = auth_client.post("/api/blog-posts", json=BLOG_POST_PAYLOAD)

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Blog post created successfully"
    post = body["blogPost"]
    assert post["id"] == 1
    assert post["authorName"] == "Michael Chen"
    assert post["authorAvatar"] is None
    assert post["publishDate"] == "2024-02-01"
    assert post["createdAt"]


def test_list_and_get_blog_posts(auth_client):
    create_post(auth_client)
    create_post(auth_client, title="Second post")

    posts = auth_client.get("/api/blog-posts").json()
    assert [p["id"] for p in posts] == [1, 2]

    response = auth_client.get("/api/blog-posts/2")
    assert response.status_code == 200
    assert response.json()["title"] == "Second post"


def test_get_blog_post_errors(client):
    assert client.get("/api/blog-posts/abc").status_code == 400
    response = client.get("/api/blog-posts/9999")
    assert response.status_code == 404
    assert response.json()["detail"] == "Blog post not found"


def test_related_posts(auth_client):
    source = create_post(auth_client, category="Cloud")
    for i in range(4):
        create_post(auth_client, title=f"Cloud post {i}", category="Cloud")
    create_post(auth_client, title="Security post", category="Security")

    response = auth_client.get(f"/api/blog-posts/related/{source['id']}")

    assert response.status_code == 200
    related = response.json()
    assert len(related) == 3
    assert all(p["category"] == "Cloud" for p in related)
    assert source["id"] not in [p["id"] for p in related]


def test_related_posts_for_missing_post_is_empty(client):
    response = client.get("/api/blog-posts/related/42")
    assert response.status_code == 200
    assert response.json() == []


def test_related_posts_invalid_id(client):
    response = client.get("/api/blog-posts/related/abc")
    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid ID format"


@pytest.mark.parametrize("path", ["/api/blog-posts/1_0", "/api/blog-posts/related/1_0"])
def test_underscored_id_is_rejected(auth_client, path):
    create_post(auth_client)
    response = auth_client.get(path)
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid ID format"


@pytest.mark.parametrize("image_url", ["https://example.com", "ftp://files.example.com/a.png"])
def test_blog_post_image_url_is_stored_as_sent(auth_client, image_url):
    post = create_post(auth_client, imageUrl=image_url)
    assert post["imageUrl"] == image_url
    assert auth_client.get(f"/api/blog-posts/{post['id']}").json()["imageUrl"] == image_url


def test_blog_post_rejects_malformed_image_url(auth_client):
    response = auth_client.post("/api/blog-posts", json={**BLOG_POST_PAYLOAD, "imageUrl": "not a url"})
    assert response.status_code == 400
    assert response.json()["errors"][0]["loc"] == ["body", "imageUrl"]
    assert auth_client.app.state.storage.count(BlogPost) == 0


def test_blog_post_created_at_has_utc_offset(auth_client):
    post = create_post(auth_client)
    assert post["createdAt"].endswith(("Z", "+00:00"))
