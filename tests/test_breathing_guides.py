from app.routers import breathing_guides


def _guide_body(serial, **overrides):
    body = {
        "serial": serial,
        "title": f"Guide {serial}",
        "guide": "Inhale for four, hold for four, exhale for four.",
        "description": "Box breathing",
    }
    body.update(overrides)
    return body


def _create_guide(client, serial, **overrides):
    response = client.post("/api/breathing-guides", json=_guide_body(serial, **overrides))
    assert response.status_code == 200, response.text
    return response.json()["guide"]


def _listed_ids(client, **params):
    response = client.get("/api/breathing-guides", params=params)
    assert response.status_code == 200
    return [guide["id"] for guide in response.json()["breathingGuides"]]


def test_create_and_fetch_guide(client):
    guide = _create_guide(client, 1, audioUrl="https://cdn.example.test/box.mp3", duration=95)

    response = client.get(f"/api/breathing-guides/{guide['id']}")

    assert response.status_code == 200
    fetched = response.json()["guide"]
    assert fetched["serial"] == 1
    assert fetched["audioUrl"] == "https://cdn.example.test/box.mp3"
    assert fetched["duration"] == 95
    assert fetched["isFeatured"] is False
    assert fetched["isDeleted"] is False


def test_create_requires_core_fields(client):
    response = client.post("/api/breathing-guides", json={"title": "No serial", "guide": "x", "description": "y"})

    assert response.status_code == 400
    assert response.json()["error"] == "Serial, title, guide, and description are required"


def test_create_rejects_serial_held_by_any_guide(client):
    live = _create_guide(client, 1)
    deleted = _create_guide(client, 2)
    client.delete(f"/api/breathing-guides/{deleted['id']}")

    for serial in (live["serial"], deleted["serial"]):
        response = client.post("/api/breathing-guides", json=_guide_body(serial))
        assert response.status_code == 400
        assert response.json()["error"] == "Serial number already exists. Please use a unique serial number."


def test_update_to_own_serial_skips_uniqueness_check(client):
    guide = _create_guide(client, 7)

    response = client.put(f"/api/breathing-guides/{guide['id']}", json={"serial": 7, "title": "Renamed"})

    assert response.status_code == 200
    assert response.json()["guide"]["title"] == "Renamed"
    assert response.json()["guide"]["serial"] == 7


def test_update_to_serial_of_live_guide_fails(client):
    _create_guide(client, 1)
    other = _create_guide(client, 2)

    response = client.put(f"/api/breathing-guides/{other['id']}", json={"serial": 1})

    assert response.status_code == 400
    assert "Serial number already exists" in response.json()["error"]


def test_update_to_serial_of_deleted_guide_succeeds(client):
    retired = _create_guide(client, 1)
    client.delete(f"/api/breathing-guides/{retired['id']}")
    other = _create_guide(client, 2)

    response = client.put(f"/api/breathing-guides/{other['id']}", json={"serial": 1})

    assert response.status_code == 200
    assert response.json()["guide"]["serial"] == 1


def test_partial_update_applies_explicit_values(client):
    guide = _create_guide(client, 3, audioUrl="https://cdn.example.test/a.mp3", duration=60, isFeatured=True)

    response = client.put(
        f"/api/breathing-guides/{guide['id']}",
        json={"duration": None, "isFeatured": False},
    )

    updated = response.json()["guide"]
    assert updated["duration"] is None
    assert updated["isFeatured"] is False
    assert updated["audioUrl"] == "https://cdn.example.test/a.mp3"
    assert updated["title"] == guide["title"]


def test_numeric_search_matches_serial_exactly(client):
    twelve = _create_guide(client, 12, title="Twelve")
    _create_guide(client, 120, title="Guide mentions 12 in the title")

    assert _listed_ids(client, search="12") == [twelve["id"]]


def test_text_search_covers_title_description_and_guide(client):
    by_title = _create_guide(client, 1, title="Ocean breath")
    by_guide = _create_guide(client, 2, guide="Breathe like the ocean")
    _create_guide(client, 3)

    assert set(_listed_ids(client, search="ocean")) == {by_title["id"], by_guide["id"]}


def test_featured_and_deleted_filters_are_independent(client):
    featured = _create_guide(client, 1, isFeatured=True)
    deleted_featured = _create_guide(client, 2, isFeatured=True)
    deleted_plain = _create_guide(client, 3)
    client.delete(f"/api/breathing-guides/{deleted_featured['id']}")
    client.delete(f"/api/breathing-guides/{deleted_plain['id']}")

    assert _listed_ids(client, featured="true") == [featured["id"]]
    assert set(_listed_ids(client, featured="true", deleted="true")) == {featured["id"], deleted_featured["id"]}
    assert len(_listed_ids(client, deleted="true")) == 3


def test_delete_guide_twice(client):
    guide = _create_guide(client, 1)

    first = client.delete(f"/api/breathing-guides/{guide['id']}")
    second = client.delete(f"/api/breathing-guides/{guide['id']}")

    assert first.status_code == 200
    assert first.json()["guide"]["isDeleted"] is True
    assert second.status_code == 404
    assert second.json()["error"] == "Breathing guide not found"


def test_invalid_guide_id(client):
    response = client.put("/api/breathing-guides/nope", json={"title": "x"})

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid guide ID"


def test_live_serial_index_backs_up_the_serial_checks(client, monkeypatch):
    first = _create_guide(client, 1)
    second = _create_guide(client, 2)
    monkeypatch.setattr(breathing_guides, "serial_taken", lambda *args, **kwargs: False)

    created = client.post("/api/breathing-guides", json=_guide_body(1))
    updated = client.put(f"/api/breathing-guides/{second['id']}", json={"serial": first["serial"]})

    for response in (created, updated):
        assert response.status_code == 400
        assert response.json()["error"] == "Serial number already exists. Please use a unique serial number."
    assert client.get(f"/api/breathing-guides/{second['id']}").json()["guide"]["serial"] == 2
    assert len(_listed_ids(client)) == 2


def test_search_only_treats_plain_digits_as_a_serial(client):
    _create_guide(client, 10)

    assert _listed_ids(client, search="1_0") == []
    assert _listed_ids(client, search="١٠") == []
