"""Tests for the /heroes endpoints."""
import pytest

TRACER = {
    "name": "Tracer",
    "role": "damage",
    "portrait": "https://example.com/tracer.png",
    "description": "Time-jumping adventurer.",
    "health": 175,
    "armor": 0,
    "shields": 0,
    "abilities": [
        {"name": "Blink", "description": "Zip horizontally.", "icon": "https://example.com/blink.png"},
        {"name": "Recall", "description": "Bound backward in time."},
    ],
}

REINHARDT = {
    "name": "Reinhardt",
    "role": "Tank",
    "health": 375,
    "armor": 250,
    "abilities": [{"name": "Barrier Field"}],
}


def create(client, headers, payload):
    response = client.post("/heroes", json=payload, headers=headers)
    assert response.status_code == 201, response.get_json()
    return response.get_json()["data"]


def test_list_empty(client):
    response = client.get("/heroes")
    assert response.status_code == 200
    assert response.get_json() == {"data": [], "meta": {"page": 1, "limit": 20, "total": 0}}


def test_create_requires_auth(client):
    assert client.post("/heroes", json=TRACER).status_code == 401


def test_create_and_get(client, auth_headers):
    hero = create(client, auth_headers, TRACER)
    assert hero["name"] == "Tracer"
    assert hero["health"] == 175
    assert sorted(a["name"] for a in hero["abilities"]) == ["Blink", "Recall"]

    response = client.get(f"/heroes/{hero['id']}")
    assert response.status_code == 200
    assert response.get_json()["data"]["id"] == hero["id"]


def test_create_normalizes_role_and_defaults_stats(client, auth_headers):
    hero = create(client, auth_headers, REINHARDT)
    assert hero["role"] == "tank"
    assert hero["shields"] == 0


@pytest.mark.parametrize(
    "payload",
    [
        {"role": "damage"},
        {"name": "Nobody", "role": "healer"},
        {"name": "   ", "role": "support"},
        {"name": "Ana", "role": "support", "health": -1},
        {"name": "Ana", "role": "support", "abilities": [{"description": "no name"}]},
    ],
)
def test_create_validation(client, auth_headers, payload):
    response = client.post("/heroes", json=payload, headers=auth_headers)
    assert response.status_code == 400
    assert response.get_json()["error"] == "VALIDATION_ERROR"


def test_get_missing_hero(client):
    response = client.get("/heroes/does-not-exist")
    assert response.status_code == 404
    assert response.get_json()["error"] == "NOT_FOUND"


def test_list_filters_by_role_and_name(client, auth_headers):
    create(client, auth_headers, TRACER)
    create(client, auth_headers, REINHARDT)

    tanks = client.get("/heroes?role=TANK").get_json()
    assert [h["name"] for h in tanks["data"]] == ["Reinhardt"]

    by_name = client.get("/heroes?name=race").get_json()
    assert [h["name"] for h in by_name["data"]] == ["Tracer"]

    everyone = client.get("/heroes").get_json()
    assert everyone["meta"]["total"] == 2
    assert [h["name"] for h in everyone["data"]] == ["Reinhardt", "Tracer"]


def test_list_pagination(client, auth_headers):
    create(client, auth_headers, TRACER)
    create(client, auth_headers, REINHARDT)

    page = client.get("/heroes?page=2&limit=1").get_json()
    assert page["meta"] == {"page": 2, "limit": 1, "total": 2}
    assert [h["name"] for h in page["data"]] == ["Tracer"]

    assert client.get("/heroes?page=x").status_code == 400


def test_update_replaces_hero_and_abilities(client, auth_headers):
    hero = create(client, auth_headers, TRACER)
    payload = dict(TRACER, id=hero["id"], health=200, abilities=[{"name": "Pulse Bomb"}])

    response = client.put(f"/heroes/{hero['id']}", json=payload, headers=auth_headers)
    assert response.status_code == 200
    updated = response.get_json()["data"]
    assert updated["health"] == 200
    assert [a["name"] for a in updated["abilities"]] == ["Pulse Bomb"]

    fetched = client.get(f"/heroes/{hero['id']}").get_json()["data"]
    assert [a["name"] for a in fetched["abilities"]] == ["Pulse Bomb"]


def test_update_id_mismatch(client, auth_headers):
    hero = create(client, auth_headers, TRACER)
    payload = dict(TRACER, id="some-other-id")
    response = client.put(f"/heroes/{hero['id']}", json=payload, headers=auth_headers)
    assert response.status_code == 400


def test_update_missing_hero(client, auth_headers):
    response = client.put("/heroes/does-not-exist", json=TRACER, headers=auth_headers)
    assert response.status_code == 404


def test_update_requires_auth(client, auth_headers):
    hero = create(client, auth_headers, TRACER)
    assert client.put(f"/heroes/{hero['id']}", json=TRACER).status_code == 401


def test_delete(client, auth_headers):
    hero = create(client, auth_headers, TRACER)

    assert client.delete(f"/heroes/{hero['id']}").status_code == 401
    assert client.delete(f"/heroes/{hero['id']}", headers=auth_headers).status_code == 204
    assert client.get(f"/heroes/{hero['id']}").status_code == 404
    assert client.delete(f"/heroes/{hero['id']}", headers=auth_headers).status_code == 404


@pytest.mark.parametrize("pattern", ["_", "%25", "T_acer", "%5C"])
def test_name_filter_treats_wildcards_literally(client, auth_headers, pattern):
    create(client, auth_headers, TRACER)
    create(client, auth_headers, REINHARDT)

    response = client.get(f"/heroes?name={pattern}")
    assert response.status_code == 200
    assert response.get_json()["data"] == []


def test_name_filter_matches_literal_underscore(client, auth_headers):
    create(client, auth_headers, TRACER)
    create(client, auth_headers, dict(REINHARDT, name="Soldier_76"))

    names = [h["name"] for h in client.get("/heroes?name=r_7").get_json()["data"]]
    assert names == ["Soldier_76"]
