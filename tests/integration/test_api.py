"""
Integration tests for the HTTP API.

Runs the FastAPI app (with its lifespan) against a temporary database
through the Starlette test client.
"""

import pytest
from fastapi.testclient import TestClient

from foodplanner.api.main import create_app
from foodplanner.recipe_import import NO_RECIPES_MESSAGE, UNREADABLE_FILE_MESSAGE


@pytest.fixture
def client(temp_db_dir):
    with TestClient(create_app(db_dir=temp_db_dir)) as test_client:
        yield test_client


@pytest.fixture
def imported(client, import_payload):
    """Client with the sample import file loaded; returns recipes by name."""
    client.post("/api/recipes/import", json=import_payload)
    return {recipe["name"]: recipe for recipe in client.get("/api/recipes").json()}


def recipe_body(**overrides):
    body = {
        "name": "Cheese Toast",
        "prep_time": "5 min",
        "meal": "lunch",
        "servings": "2",
        "ingredients_text": "2 slice bread\n50 g cheese",
        "instructions": "Grill until bubbling.",
    }
    body.update(overrides)
    return body


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


class TestRecipeEndpoints:
    """Test recipe CRUD."""

    def test_empty_collection(self, client):
        assert client.get("/api/recipes").json() == []

    def test_create(self, client):
        response = client.post("/api/recipes", json=recipe_body())

        assert response.status_code == 201
        recipe = response.json()
        assert recipe["servings"] == 2.0
        assert recipe["ingredients"] == ["2 slice bread", "50 g cheese"]
        assert client.get("/api/recipes").json() == [recipe]

    def test_create_invalid(self, client):
        response = client.post("/api/recipes", json=recipe_body(instructions="  "))

        assert response.status_code == 400
        assert response.json()["detail"] == "Include preparation instructions."

    def test_create_missing_field(self, client):
        body = recipe_body()
        del body["name"]

        assert client.post("/api/recipes", json=body).status_code == 422

    def test_update(self, client):
        recipe_id = client.post("/api/recipes", json=recipe_body()).json()["id"]

        response = client.put(f"/api/recipes/{recipe_id}", json=recipe_body(name="Cheese Melt"))

        assert response.status_code == 200
        assert response.json()["id"] == recipe_id
        assert response.json()["name"] == "Cheese Melt"

    def test_update_missing(self, client):
        assert client.put("/api/recipes/missing", json=recipe_body()).status_code == 404

    def test_duplicate(self, client):
        recipe_id = client.post("/api/recipes", json=recipe_body()).json()["id"]

        response = client.post(f"/api/recipes/{recipe_id}/duplicate")

        assert response.status_code == 201
        assert response.json()["name"] == "Cheese Toast (Copy)"
        assert client.post("/api/recipes/missing/duplicate").status_code == 404

    def test_delete(self, client, imported):
        chili_id = imported["Campfire Chili"]["id"]
        client.put("/api/plan/2025-10-20/dinner", json={"recipe_id": chili_id})

        response = client.delete(f"/api/recipes/{chili_id}")

        assert response.status_code == 204
        assert [r["name"] for r in client.get("/api/recipes").json()] == ["Overnight Oats"]
        assert client.get("/api/plan").json() == {}

    def test_delete_missing(self, client):
        assert client.delete("/api/recipes/missing").status_code == 404


class TestImportExport:
    """Test the import and export endpoints."""

    def test_import(self, client, import_payload):
        response = client.post(
            "/api/recipes/import",
            params={"filename": "cookbook.json"},
            json=import_payload,
        )

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "imported": 2,
            "total": 2,
            "message": "Imported 2 recipes from “cookbook.json”.",
        }

    def test_import_bare_list(self, client, import_payload):
        response = client.post("/api/recipes/import", json=import_payload["recipes"])

        assert response.json()["imported"] == 2

    def test_import_twice_is_idempotent(self, client, import_payload):
        client.post("/api/recipes/import", json=import_payload)
        before = client.get("/api/recipes").json()

        client.post("/api/recipes/import", json=import_payload)

        assert client.get("/api/recipes").json() == before

    def test_import_nothing_valid(self, client):
        response = client.post("/api/recipes/import", json={"recipes": [{"name": "Soup"}]})

        assert response.status_code == 422
        assert response.json()["detail"] == NO_RECIPES_MESSAGE

    def test_import_unreadable(self, client):
        response = client.post(
            "/api/recipes/import",
            content="{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["detail"] == UNREADABLE_FILE_MESSAGE

    def test_export(self, client, imported):
        payload = client.get("/api/recipes/export").json()

        assert [r["name"] for r in payload["recipes"]] == ["Overnight Oats", "Campfire Chili"]
        assert all("id" not in r for r in payload["recipes"])


class TestPlanEndpoints:
    """Test meal plan editing."""

    def test_assign(self, client, imported):
        oats_id = imported["Overnight Oats"]["id"]

        response = client.put("/api/plan/2025-10-20/breakfast", json={"recipe_id": oats_id})

        assert response.status_code == 200
        assert response.json() == {
            "2025-10-20": {"breakfast": oats_id, "lunch": None, "dinner": None, "snack": None}
        }

    def test_assign_unknown_recipe(self, client):
        response = client.put("/api/plan/2025-10-20/breakfast", json={"recipe_id": "missing"})

        assert response.status_code == 404

    def test_assign_invalid_date(self, client, imported):
        oats_id = imported["Overnight Oats"]["id"]

        response = client.put("/api/plan/banana/dinner", json={"recipe_id": oats_id})

        assert response.status_code == 400
        assert client.get("/api/plan").json() == {}

    def test_week(self, client, imported):
        oats_id = imported["Overnight Oats"]["id"]
        client.put("/api/plan/2025-10-21/breakfast", json={"recipe_id": oats_id})

        response = client.get("/api/plan/week", params={"anchor": "2025-10-20"})

        assert response.status_code == 200
        week = response.json()
        assert week["label"] == "20/10/2025–26/10/2025"
        assert len(week["days"]) == 7
        assert week["days"]["2025-10-21"]["breakfast"] == oats_id
        assert week["assigned"] == 1

    def test_week_invalid_anchor(self, client):
        response = client.get("/api/plan/week", params={"anchor": "soon"})

        assert response.status_code == 400

    def test_assign_invalid_meal(self, client, imported):
        oats_id = imported["Overnight Oats"]["id"]

        response = client.put("/api/plan/2025-10-20/brunch", json={"recipe_id": oats_id})

        assert response.status_code == 400

    def test_clear_slot(self, client, imported):
        oats_id = imported["Overnight Oats"]["id"]
        client.put("/api/plan/2025-10-20/breakfast", json={"recipe_id": oats_id})

        response = client.put("/api/plan/2025-10-20/breakfast", json={"recipe_id": None})

        assert response.json() == {}

    def test_clear_dates(self, client, imported):
        oats_id = imported["Overnight Oats"]["id"]
        for date in ["2025-10-20", "2025-10-21"]:
            client.put(f"/api/plan/{date}/breakfast", json={"recipe_id": oats_id})

        response = client.delete("/api/plan", params={"dates": ["2025-10-21"]})

        assert list(response.json()) == ["2025-10-20"]
        assert client.delete("/api/plan").json() == {}


class TestShopEndpoints:
    """Test shopping list outputs."""

    def plan_week(self, client, imported):
        oats_id = imported["Overnight Oats"]["id"]
        chili_id = imported["Campfire Chili"]["id"]
        client.put("/api/plan/2025-10-20/breakfast", json={"recipe_id": oats_id})
        client.put("/api/plan/2025-10-21/breakfast", json={"recipe_id": oats_id})
        client.put("/api/plan/2025-10-21/dinner", json={"recipe_id": chili_id})

    def test_outputs(self, client, imported):
        self.plan_week(client, imported)

        response = client.get("/api/shop", params={"start": "2025-10-20", "end": "2025-10-26"})

        assert response.status_code == 200
        outputs = response.json()
        assert outputs["planned_meals"] == 3
        assert [day["date"] for day in outputs["itinerary"]] == ["2025-10-20", "2025-10-21"]
        assert [r["name"] for r in outputs["recipes"]] == ["Campfire Chili", "Overnight Oats"]
        rows = {(row["ingredient"], row["unit"]): row["quantity"] for row in outputs["shopping_list"]}
        assert rows == {
            ("Beans", "can"): 1.0,
            ("Beef", "g"): 500.0,
            ("Honey", "tbsp"): 2.0,
            ("Milk", "cup"): 2.0,
            ("Oats", "cup"): 2.0,
            ("Onion", None): 1.0,
        }

    def test_nothing_planned(self, client):
        response = client.get("/api/shop", params={"start": "2025-10-20", "end": "2025-10-26"})

        assert response.status_code == 404

    def test_text(self, client, imported):
        self.plan_week(client, imported)

        response = client.get("/api/shop/text", params={"start": "2025-10-20", "end": "2025-10-20"})

        assert response.status_code == 200
        assert response.text == "Ingredient\tQuantity\nHoney\t1 tbsp\nMilk\t1 cup\nOats\t1 cup"
