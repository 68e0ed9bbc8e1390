from sqlalchemy import text

from conftest import auth_headers
from agroguide.db.models.favorite import Favorite


def _seed_catalog(make_plant):
    make_plant("Monstera", "home", scientific_name="Monstera deliciosa", images=["monstera.jpg", "leaf.jpg"])
    make_plant("Aloe Vera", "home", scientific_name="Aloe barbadensis", sunlight="Bright, indirect")
    make_plant("Fiddle Leaf Fig", "home", published=False)
    make_plant("Tomato", "agri", scientific_name="Solanum lycopersicum")


def test_catalog_lists_published_plants_of_mode_ordered_by_name(client, make_plant):
    _seed_catalog(make_plant)

    r = client.get("/plants", params={"mode": "home"})
    assert r.status_code == 200
    body = r.json()
    assert [p["name"] for p in body["plants"]] == ["Aloe Vera", "Monstera"]
    assert all(p["category"] == "home" for p in body["plants"])
    assert body["total"] == 2
    assert body["empty_message"] is None


def test_catalog_card_fields(client, make_plant):
    _seed_catalog(make_plant)

    cards = client.get("/plants", params={"q": "monstera"}).json()["plants"]
    assert len(cards) == 1
    assert cards[0]["scientific_name"] == "Monstera deliciosa"
    assert cards[0]["image"] == "monstera.jpg"
    assert cards[0]["is_favorite"] is False


def test_agriculture_mode_and_search(client, make_plant):
    _seed_catalog(make_plant)

    r = client.get("/plants", params={"mode": "agriculture", "q": "solanum"})
    assert [p["name"] for p in r.json()["plants"]] == ["Tomato"]
    assert r.json()["plants"][0]["category"] == "agriculture"


def test_search_without_match_returns_empty_state(client, make_plant):
    _seed_catalog(make_plant)

    body = client.get("/plants", params={"mode": "home", "q": "cactus"}).json()
    assert body["plants"] == []
    assert body["total"] == 0
    assert body["empty_message"] == "No plants found matching your search criteria."


def test_invalid_mode_is_rejected(client):
    r = client.get("/plants", params={"mode": "garden"})
    assert r.status_code == 422
    assert "mode" in r.json()["detail"]


def test_draft_detail_hidden_from_users_visible_to_admin(client, make_plant, user, admin):
    make_plant("Fiddle Leaf Fig", "home", published=False)

    assert client.get("/plants/fiddle-leaf-fig").status_code == 404
    assert client.get("/plants/fiddle-leaf-fig", headers=user["headers"]).status_code == 404

    r = client.get("/plants/fiddle-leaf-fig", headers=admin["headers"])
    assert r.status_code == 200
    assert r.json()["published"] is False


def test_plant_detail_and_care_plan(client, make_plant):
    make_plant(
        "Tomato", "agri",
        scientific_name="Solanum lycopersicum",
        watering_schedule="Daily",
        diseases=["Blight"],
        remedies=["Copper spray"],
    )

    detail = client.get("/plants/tomato").json()
    assert detail["common_name"] == "Tomato"
    assert detail["category"] == "agri"
    assert detail["diseases"] == ["Blight"]

    r = client.get("/plants/tomato/care-plan")
    assert r.status_code == 200
    assert r.json()["plant_id"] == detail["id"]
    assert "💧 Watering: Daily" in r.json()["care_plan"]


def test_invalid_token_is_rejected_even_on_public_routes(client):
    r = client.get("/plants", headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 401


def test_favorites_toggle_and_card_flag(client, make_plant, user):
    plant = make_plant("Monstera", "home")

    r = client.post(f"/favorites/{plant.id}", headers=user["headers"])
    assert r.status_code == 200
    assert r.json() == {"plant_id": plant.id, "is_favorite": True}

    cards = client.get("/plants", headers=user["headers"]).json()["plants"]
    assert cards[0]["is_favorite"] is True

    favorites = client.get("/favorites", headers=user["headers"]).json()
    assert [f["name"] for f in favorites] == ["Monstera"]

    r = client.post(f"/favorites/{plant.id}", headers=user["headers"])
    assert r.json()["is_favorite"] is False
    assert client.get("/favorites", headers=user["headers"]).json() == []


def test_favorites_are_per_user(client, make_plant, user, make_profile):
    plant = make_plant("Monstera", "home")
    other = make_profile(display_name="Someone Else")

    client.post(f"/favorites/{plant.id}", headers=user["headers"])
    other_cards = client.get("/plants", headers=auth_headers(other.user_id)).json()["plants"]
    assert other_cards[0]["is_favorite"] is False


def test_favorites_require_sign_in_and_published_plant(client, make_plant, user):
    draft = make_plant("Secret Orchid", "home", published=False)

    assert client.get("/favorites").status_code == 401
    assert client.post(f"/favorites/{draft.id}", headers=user["headers"]).status_code == 404


def test_deleting_a_plant_removes_it_from_favorites(client, make_plant, user, admin, db_session):
    plant = make_plant("Monstera", "home")
    client.post(f"/favorites/{plant.id}", headers=user["headers"])

    assert client.delete(f"/admin/plants/{plant.id}", headers=admin["headers"]).status_code == 204

    r = client.get("/favorites", headers=user["headers"])
    assert r.status_code == 200
    assert r.json() == []
    assert db_session.query(Favorite).count() == 0


def test_favorites_skip_rows_whose_plant_is_gone(client, make_plant, user, db_session):
    plant = make_plant("Monstera", "home")
    kept = make_plant("Aloe Vera", "home")
    client.post(f"/favorites/{plant.id}", headers=user["headers"])
    client.post(f"/favorites/{kept.id}", headers=user["headers"])

    db_session.execute(text("DELETE FROM plants WHERE id = :id"), {"id": plant.id})
    db_session.commit()

    r = client.get("/favorites", headers=user["headers"])
    assert r.status_code == 200
    assert [f["name"] for f in r.json()] == ["Aloe Vera"]


def test_unpublished_favorite_can_still_be_removed(client, make_plant, user, admin):
    plant = make_plant("Monstera", "home")
    client.post(f"/favorites/{plant.id}", headers=user["headers"])
    client.put(f"/admin/plants/{plant.id}/publish", json={"published": False}, headers=admin["headers"])

    assert client.get("/favorites", headers=user["headers"]).json() == []

    r = client.post(f"/favorites/{plant.id}", headers=user["headers"])
    assert r.status_code == 200
    assert r.json()["is_favorite"] is False

    assert client.post(f"/favorites/{plant.id}", headers=user["headers"]).status_code == 404
