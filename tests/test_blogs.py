import pytest


def _create_blog(client, **overrides):
    body = {"title": "A", "description": "B", "body": "C"}
    body.update(overrides)
    response = client.post("/api/blogs", json=body)
    assert response.status_code == 200, response.text
    return response.json()["blog"]


def _listed_ids(client, **params):
    response = client.get("/api/blogs", params=params)
    assert response.status_code == 200
    return [blog["id"] for blog in response.json()["blogs"]]


def test_blog_lifecycle_with_soft_delete(client):
    blog = _create_blog(client)
    assert blog["isDeleted"] is False
    assert blog["isFeatured"] is False
    assert blog["imageUrl"] is None
    assert blog["deletedAt"] is None

    assert blog["id"] in _listed_ids(client)

    deleted = client.delete(f"/api/blogs/{blog['id']}")
    assert deleted.status_code == 200
    assert deleted.json()["message"] == "Blog deleted successfully"

    assert blog["id"] not in _listed_ids(client)

    response = client.get("/api/blogs", params={"deleted": "true"})
    listed = {item["id"]: item for item in response.json()["blogs"]}
    assert listed[blog["id"]]["isDeleted"] is True
    assert listed[blog["id"]]["deletedAt"] is not None


def test_deleting_twice_reports_not_found(client):
    blog = _create_blog(client)

    assert client.delete(f"/api/blogs/{blog['id']}").status_code == 200
    second = client.delete(f"/api/blogs/{blog['id']}")

    assert second.status_code == 404
    assert second.json() == {"success": False, "error": "Blog not found"}


def test_soft_deleted_blog_is_not_fetchable_or_editable(client):
    blog = _create_blog(client)
    client.delete(f"/api/blogs/{blog['id']}")

    assert client.get(f"/api/blogs/{blog['id']}").status_code == 404
    assert client.put(f"/api/blogs/{blog['id']}", json={"title": "New"}).status_code == 404


def test_list_is_newest_first(client):
    first = _create_blog(client, title="First")
    second = _create_blog(client, title="Second")

    assert _listed_ids(client) == [second["id"], first["id"]]


@pytest.mark.parametrize(
    "body",
    [
        {"description": "B", "body": "C"},
        {"title": "A", "body": "C"},
        {"title": "A", "description": "B", "body": ""},
    ],
)
def test_create_requires_title_description_and_body(client, body):
    response = client.post("/api/blogs", json=body)

    assert response.status_code == 400
    assert response.json()["error"] == "Title, description, and body are required"


def test_invalid_blog_id(client):
    response = client.get("/api/blogs/abc")

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid blog ID"


def test_missing_blog(client):
    response = client.get("/api/blogs/9999")

    assert response.status_code == 404
    assert response.json()["success"] is False


def test_update_with_only_featured_false(client):
    blog = _create_blog(client, imageUrl="https://cdn.example.test/a.png", isFeatured=True)

    response = client.put(f"/api/blogs/{blog['id']}", json={"isFeatured": False})

    assert response.status_code == 200
    updated = response.json()["blog"]
    assert updated["isFeatured"] is False
    assert updated["title"] == "A"
    assert updated["description"] == "B"
    assert updated["body"] == "C"
    assert updated["imageUrl"] == "https://cdn.example.test/a.png"
    assert updated["updatedAt"] >= blog["updatedAt"]


def test_update_blank_text_keeps_value_but_explicit_image_clears(client):
    blog = _create_blog(client, imageUrl="https://cdn.example.test/a.png")

    response = client.put(
        f"/api/blogs/{blog['id']}",
        json={"title": "", "body": "<p>New body</p>", "imageUrl": None},
    )

    updated = response.json()["blog"]
    assert updated["title"] == "A"
    assert updated["body"] == "<p>New body</p>"
    assert updated["imageUrl"] is None


def test_search_matches_any_text_column(client):
    by_title = _create_blog(client, title="Morning calm")
    by_body = _create_blog(client, body="<p>Try a calm walk</p>")
    _create_blog(client, title="Unrelated")

    assert set(_listed_ids(client, search="calm")) == {by_title["id"], by_body["id"]}


def test_featured_and_deleted_filters_compose(client):
    live_featured = _create_blog(client, isFeatured=True)
    deleted_featured = _create_blog(client, isFeatured=True)
    plain = _create_blog(client)
    client.delete(f"/api/blogs/{deleted_featured['id']}")

    assert _listed_ids(client, featured="true") == [live_featured["id"]]
    assert set(_listed_ids(client, featured="true", deleted="true")) == {
        live_featured["id"],
        deleted_featured["id"],
    }
    assert set(_listed_ids(client)) == {live_featured["id"], plain["id"]}


def test_schema_mismatch_is_a_validation_error(client):
    response = client.post(
        "/api/blogs",
        json={"title": "A", "description": "B", "body": "C", "isFeatured": "sometimes"},
    )

    assert response.status_code == 400
    payload = response.json()
    assert payload["error"] == "Validation failed"
    assert payload["details"]
