"""End-to-end tests through the HTTP layer using FastAPI's TestClient."""
from datetime import date

import pytest
from fastapi.testclient import TestClient

from main import app
from services.grocery_aggregator import format_date
from services.meal_planning import week_start

client = TestClient(app)


@pytest.fixture()
def catalog(db):
    """A vegetarian bread recipe and a keto steak, created over the API."""
    flour = client.post("/api/ingredients", json={"name": "Flour", "category": "Baking", "unit": "cups"}).json()
    steak = client.post("/api/ingredients", json={"name": "Steak", "category": "Meat"}).json()

    bread = client.post("/api/meals", json={"name": "Bread", "dietary_tags": ["vegetarian"], "servings": 4}).json()
    ribeye = client.post("/api/meals", json={"name": "Ribeye", "dietary_tags": ["keto"], "servings": 2}).json()
    client.post(f"/api/meals/{bread['id']}/ingredients", json={"ingredient_id": flour["id"], "amount": 2, "unit": "cups"})
    client.post(f"/api/meals/{ribeye['id']}/ingredients", json={"ingredient_id": steak["id"], "amount": 1})
    return {"bread": bread, "ribeye": ribeye}


def test_health_endpoint(db):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "database": "connected"}


def test_profile_round_trip(db):
    response = client.put("/api/users/u1/profile", json={"dietary_preferences": ["vegetarian"], "household_size": 2})
    assert response.status_code == 200

    body = client.get("/api/users/u1/profile").json()
    assert body["dietary_preferences"] == ["vegetarian"]
    assert body["household_size"] == 2
    assert body["cooking_skill_level"] == "beginner"


def test_meal_detail_includes_recipe_lines(catalog):
    body = client.get(f"/api/meals/{catalog['bread']['id']}").json()
    assert [(line["ingredient"]["name"], line["amount"], line["unit"]) for line in body["ingredients"]] == [
        ("Flour", 2.0, "cups"),
    ]
    assert [m["name"] for m in client.get("/api/meals").json()] == ["Bread", "Ribeye"]
    assert [i["name"] for i in client.get("/api/ingredients").json()] == ["Flour", "Steak"]


def test_generate_plan_then_grocery_list_then_export(catalog):
    client.put("/api/users/u1/profile", json={"dietary_preferences": ["vegetarian"], "household_size": 2})

    response = client.post("/api/users/u1/meal-plans/generate")
    assert response.status_code == 201
    generated = response.json()
    assert generated["nothing_to_plan"] is False
    assert [(i["meal_id"], i["day_of_week"], i["meal_type"], i["servings"]) for i in generated["items"]] == [
        (catalog["bread"]["id"], 0, "dinner", 2),
    ]

    current = client.get("/api/users/u1/meal-plans/current").json()
    assert current["id"] == generated["plan"]["id"]
    assert current["items"][0]["meal"]["name"] == "Bread"

    response = client.post("/api/users/u1/grocery-lists")
    assert response.status_code == 201
    view = response.json()
    title = f"Grocery List - Week of {format_date(week_start(date.today()))}"
    assert view["grocery_list"]["title"] == title
    assert list(view["groups"]) == ["Baking"]
    assert view["summary"] == {"remaining": 1, "completed": 0}

    list_id = view["grocery_list"]["id"]
    export = client.get(f"/api/grocery-lists/{list_id}/export")
    assert export.status_code == 200
    assert export.headers["content-type"].startswith("text/plain")
    assert export.headers["content-disposition"].startswith('attachment; filename="grocery_list___week_of_')
    assert export.text == f"{title}\n\nGenerated on: {format_date(date.today())}\n\n• Flour 2 cups"

    item_id = view["items"][0]["id"]
    toggled = client.patch(f"/api/grocery-list-items/{item_id}", json={"is_checked": True})
    assert toggled.status_code == 200
    assert toggled.json()["is_checked"] is True
    assert client.get(f"/api/grocery-lists/{list_id}").json()["summary"] == {"remaining": 0, "completed": 1}
    assert client.get(f"/api/grocery-lists/{list_id}/export").text.endswith("\n\n")


def test_generate_with_no_matching_meals_reports_nothing_to_plan(catalog):
    client.put("/api/users/u2/profile", json={"dietary_preferences": ["paleo"]})
    body = client.post("/api/users/u2/meal-plans/generate").json()
    assert body["nothing_to_plan"] is True
    assert body["items"] == []


def test_manual_schedule_and_list_generation_for_a_plan(catalog):
    plan = client.post("/api/users/u3/meal-plans", json={"title": "Camping"}).json()
    response = client.post(f"/api/meal-plans/{plan['id']}/items", json={"meal_id": catalog["ribeye"]["id"], "day_of_week": 6})
    assert response.status_code == 201
    assert response.json()["servings"] == 2

    view = client.post("/api/users/u3/grocery-lists", json={"meal_plan_id": plan["id"]}).json()
    assert view["grocery_list"]["title"] == "Grocery List - Camping"
    assert [i["ingredient"]["name"] for i in view["items"]] == ["Steak"]
    assert view["items"][0]["amount"] == 1.0

    assert [g["id"] for g in client.get("/api/users/u3/grocery-lists").json()] == [view["grocery_list"]["id"]]


def test_delete_list_and_item(catalog):
    plan = client.post("/api/users/u4/meal-plans").json()
    client.post(f"/api/meal-plans/{plan['id']}/items", json={"meal_id": catalog["bread"]["id"]})
    view = client.post("/api/users/u4/grocery-lists").json()
    list_id = view["grocery_list"]["id"]

    assert client.delete(f"/api/grocery-list-items/{view['items'][0]['id']}").status_code == 204
    assert client.get(f"/api/grocery-lists/{list_id}").json()["items"] == []
    assert client.delete(f"/api/grocery-lists/{list_id}").status_code == 204
    assert client.get(f"/api/grocery-lists/{list_id}").status_code == 404


def test_missing_profile_returns_400_envelope(db):
    response = client.post("/api/users/ghost/meal-plans/generate")
    assert response.status_code == 400
    assert response.json() == {
        "error": {"message": "profile required", "status_code": 400, "details": {"field": "profile"}},
    }


def test_grocery_list_for_empty_plan_returns_400(db):
    client.post("/api/users/u5/meal-plans")
    response = client.post("/api/users/u5/grocery-lists")
    assert response.status_code == 400
    assert response.json()["error"]["message"].startswith("No meal plan found")


def test_out_of_range_day_returns_422_envelope(catalog):
    plan = client.post("/api/users/u6/meal-plans").json()
    response = client.post(f"/api/meal-plans/{plan['id']}/items", json={"meal_id": catalog["bread"]["id"], "day_of_week": 7})
    assert response.status_code == 422
    error = response.json()["error"]
    assert error["message"] == "Validation error"
    assert error["details"]["validation_errors"][0]["field"] == "body.day_of_week"


def test_unknown_grocery_list_returns_404_envelope(db):
    response = client.get("/api/grocery-lists/999")
    assert response.status_code == 404
    assert response.json()["error"]["details"] == {"resource": "GroceryList", "id": 999}
