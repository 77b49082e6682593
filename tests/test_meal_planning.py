"""Workflow tests for plans and grocery lists against a SQLite store."""
from datetime import date

import pytest
from sqlalchemy.exc import OperationalError

from core.exceptions import NotFoundError, StoreError, ValidationError
from core.repository import BaseRepository
from database import models
from database.database import WriteSessionLocal
from schemas import MealPlanItemCreateRequest, ProfileUpdateRequest
from services.meal_planning import meal_planning_service, week_start

USER = "user-1"


def add_meal(db, name, tags, servings=4, ingredients=()):
    """Insert a meal with recipe lines given as (ingredient, amount, unit)."""
    meal = models.Meal(name=name, dietary_tags=list(tags), servings=servings)
    for ingredient, amount, unit in ingredients:
        meal.ingredients.append(models.MealIngredient(ingredient=ingredient, amount=amount, unit=unit))
    db.add(meal)
    db.commit()
    return meal


def add_ingredient(db, name, category=None):
    ingredient = models.Ingredient(name=name, category=category)
    db.add(ingredient)
    db.commit()
    return ingredient


def save_profile(db, preferences=(), household_size=4, user_id=USER):
    payload = ProfileUpdateRequest(dietary_preferences=list(preferences), household_size=household_size)
    return meal_planning_service.upsert_profile(db, user_id, payload)


def fail_inserts_of(monkeypatch, model):
    original_insert = BaseRepository.insert

    def failing_insert(self, objects):
        if self.model is model:
            raise StoreError("insert rejected by store", operation="insert", table=self.table)
        return original_insert(self, objects)

    monkeypatch.setattr(BaseRepository, "insert", failing_insert)


@pytest.mark.parametrize("today,expected", [
    (date(2025, 2, 5), date(2025, 2, 2)),
    (date(2025, 2, 2), date(2025, 2, 2)),
    (date(2025, 2, 8), date(2025, 2, 2)),
])
def test_week_start_is_the_previous_sunday(today, expected):
    assert week_start(today) == expected


def test_upsert_profile_creates_then_updates(db):
    created = save_profile(db, ["vegan"], household_size=2)
    updated = save_profile(db, ["keto"], household_size=5)

    assert created.id == updated.id
    assert updated.dietary_preferences == ["keto"]
    assert updated.household_size == 5
    assert BaseRepository(models.Profile, db).count() == 1


def test_create_meal_plan_uses_week_start_title(db):
    plan = meal_planning_service.create_meal_plan(db, USER, today=date(2025, 2, 5))
    assert plan.week_start_date == date(2025, 2, 2)
    assert plan.title == "Week of 2/2/2025"


def test_current_plan_is_the_most_recently_created(db):
    first = meal_planning_service.create_meal_plan(db, USER)
    second = meal_planning_service.create_meal_plan(db, USER)
    meal_planning_service.create_meal_plan(db, "someone-else")

    assert meal_planning_service.get_current_meal_plan(db, USER).id == second.id
    assert [p.id for p in meal_planning_service.list_meal_plans(db, USER)] == [second.id, first.id]


def test_current_plan_missing_raises_not_found(db):
    with pytest.raises(NotFoundError):
        meal_planning_service.get_current_meal_plan(db, USER)


def test_generate_without_profile_fails_and_creates_nothing(db):
    add_meal(db, "Salad", ["vegan"])
    with pytest.raises(ValidationError) as exc_info:
        meal_planning_service.generate_meal_plan(db, USER)
    assert exc_info.value.message == "profile required"
    assert BaseRepository(models.MealPlan, db).count() == 0


def test_generate_meal_plan_persists_matching_dinners(db):
    save_profile(db, ["vegetarian"], household_size=2)
    meal_a = add_meal(db, "Meal A", ["vegetarian"], servings=4)
    add_meal(db, "Meal B", ["keto"])
    meal_c = add_meal(db, "Meal C", ["vegetarian", "gluten-free"], servings=1)

    plan, items = meal_planning_service.generate_meal_plan(db, USER)

    stored = meal_planning_service.list_plan_items(db, plan.id)
    assert [(i.meal_id, i.day_of_week, i.meal_type, i.servings) for i in stored] == [
        (meal_a.id, 0, "dinner", 2),
        (meal_c.id, 1, "dinner", 1),
    ]
    assert len(items) == 2
    assert meal_planning_service.get_current_meal_plan(db, USER).id == plan.id


def test_generate_with_nothing_to_plan_keeps_empty_plan(db):
    save_profile(db, ["paleo"])
    add_meal(db, "Pasta", ["vegetarian"])

    plan, items = meal_planning_service.generate_meal_plan(db, USER)

    assert items == []
    assert meal_planning_service.list_plan_items(db, plan.id) == []


def test_failed_plan_item_insert_deletes_the_new_plan(db, monkeypatch):
    save_profile(db, [])
    add_meal(db, "Soup", [])
    fail_inserts_of(monkeypatch, models.MealPlanItem)

    with pytest.raises(StoreError) as exc_info:
        meal_planning_service.generate_meal_plan(db, USER)

    assert exc_info.value.message == "insert rejected by store"
    assert BaseRepository(models.MealPlan, db).count() == 0


def test_failed_catalog_read_creates_no_plan(db, monkeypatch):
    save_profile(db, ["vegan"])
    add_meal(db, "Salad", ["vegan"])
    original_query = db.query

    def failing_query(*entities):
        if entities and entities[0] is models.Meal:
            raise OperationalError("SELECT meals", {}, Exception("connection reset"))
        return original_query(*entities)

    monkeypatch.setattr(db, "query", failing_query)
    with pytest.raises(StoreError) as exc_info:
        meal_planning_service.generate_meal_plan(db, USER)
    monkeypatch.undo()

    assert exc_info.value.message == "connection reset"
    assert BaseRepository(models.MealPlan, db).count() == 0


def test_candidate_meals_are_narrowed_by_the_store_in_catalog_order(db):
    soup = add_meal(db, "Soup", ["vegan", "gluten-free"])
    add_meal(db, "Steak", ["keto"])
    add_meal(db, "Toast", [])
    curry = add_meal(db, "Curry", ["vegetarian"])

    matched = meal_planning_service.load_candidate_meals(db, ["vegetarian", "vegan"])
    assert [m.id for m in matched] == [soup.id, curry.id]
    assert len(meal_planning_service.load_candidate_meals(db, [])) == 4

    repo = BaseRepository(models.Meal, db)
    assert [m.name for m in repo.select_overlapping("dietary_tags", ["keto", "vegan"], limit=1)] == ["Soup"]
    assert repo.select_overlapping("dietary_tags", []) == []


def test_add_meal_to_plan_defaults_servings_to_the_meal(db):
    meal = add_meal(db, "Tacos", [], servings=6)
    plan = meal_planning_service.create_meal_plan(db, USER)

    item = meal_planning_service.add_meal_to_plan(db, plan.id, MealPlanItemCreateRequest(meal_id=meal.id, day_of_week=3, meal_type="lunch"))

    assert (item.day_of_week, item.meal_type, item.servings) == (3, "lunch", 6)


def test_add_missing_meal_to_plan_raises_not_found(db):
    plan = meal_planning_service.create_meal_plan(db, USER)
    with pytest.raises(NotFoundError) as exc_info:
        meal_planning_service.add_meal_to_plan(db, plan.id, MealPlanItemCreateRequest(meal_id=404))
    assert "Meal" in exc_info.value.message


def _plan_with_flour_meals(db):
    flour = add_ingredient(db, "Flour", "Baking")
    milk = add_ingredient(db, "Milk", None)
    bread = add_meal(db, "Bread", [], ingredients=[(flour, 2, "cups"), (milk, 1, "cup")])
    pancakes = add_meal(db, "Pancakes", [], ingredients=[(flour, 1, "cup")])
    plan = meal_planning_service.create_meal_plan(db, USER, today=date(2025, 2, 5))
    for day, meal in enumerate([bread, pancakes]):
        meal_planning_service.add_meal_to_plan(db, plan.id, MealPlanItemCreateRequest(meal_id=meal.id, day_of_week=day))
    return plan


def test_generate_grocery_list_from_current_plan(db):
    plan = _plan_with_flour_meals(db)

    grocery_list, items = meal_planning_service.generate_grocery_list(db, USER)

    assert grocery_list.title == "Grocery List - Week of 2/2/2025"
    assert grocery_list.meal_plan_id == plan.id
    assert [(i.ingredient.name, i.amount, i.unit) for i in items] == [
        ("Flour", 2, "cups"), ("Milk", 1, "cup"), ("Flour", 1, "cup"),
    ]

    view = meal_planning_service.get_grocery_list_view(db, grocery_list.id)
    assert list(view["groups"]) == ["Baking", "Other"]
    assert len(view["groups"]["Baking"]) == 2
    assert view["summary"] == {"remaining": 3, "completed": 0}


def test_grocery_list_for_plan_without_items_is_rejected(db):
    plan = meal_planning_service.create_meal_plan(db, USER)
    with pytest.raises(ValidationError):
        meal_planning_service.generate_grocery_list(db, USER, plan_id=plan.id)
    assert BaseRepository(models.GroceryList, db).count() == 0


def test_grocery_list_for_another_users_plan_is_not_found(db):
    plan = _plan_with_flour_meals(db)
    with pytest.raises(NotFoundError):
        meal_planning_service.generate_grocery_list(db, "intruder", plan_id=plan.id)


def test_failed_grocery_item_insert_deletes_the_new_list(db, monkeypatch):
    _plan_with_flour_meals(db)
    fail_inserts_of(monkeypatch, models.GroceryListItem)

    with pytest.raises(StoreError):
        meal_planning_service.generate_grocery_list(db, USER)

    assert BaseRepository(models.GroceryList, db).count() == 0


def test_toggle_item_is_persisted_both_ways(db):
    _plan_with_flour_meals(db)
    _, items = meal_planning_service.generate_grocery_list(db, USER)
    item_id = items[0].id

    assert meal_planning_service.set_item_checked(db, item_id, True).is_checked is True
    other = WriteSessionLocal()
    try:
        assert other.get(models.GroceryListItem, item_id).is_checked is True
    finally:
        other.close()

    assert meal_planning_service.set_item_checked(db, item_id, False).is_checked is False
    assert db.get(models.GroceryListItem, item_id).is_checked is False


def test_toggle_rolls_back_when_the_store_fails(db, monkeypatch):
    _plan_with_flour_meals(db)
    _, items = meal_planning_service.generate_grocery_list(db, USER)
    item = items[0]

    def failing_commit():
        raise OperationalError("UPDATE grocery_list_items", {}, Exception("database is locked"))

    monkeypatch.setattr(db, "commit", failing_commit)
    with pytest.raises(StoreError) as exc_info:
        meal_planning_service.set_item_checked(db, item.id, True)
    monkeypatch.undo()

    assert exc_info.value.message == "database is locked"
    assert item.is_checked is False
    other = WriteSessionLocal()
    try:
        assert other.get(models.GroceryListItem, item.id).is_checked is False
    finally:
        other.close()


def test_delete_item_and_list_are_terminal(db):
    _plan_with_flour_meals(db)
    grocery_list, items = meal_planning_service.generate_grocery_list(db, USER)

    meal_planning_service.delete_grocery_item(db, items[0].id)
    assert len(meal_planning_service.get_grocery_items(db, grocery_list.id)) == 2
    with pytest.raises(NotFoundError):
        meal_planning_service.delete_grocery_item(db, items[0].id)

    meal_planning_service.delete_grocery_list(db, grocery_list.id)
    assert BaseRepository(models.GroceryListItem, db).count() == 0
    with pytest.raises(NotFoundError):
        meal_planning_service.get_grocery_list(db, grocery_list.id)


def test_export_grocery_list_leaves_out_checked_items(db):
    _plan_with_flour_meals(db)
    grocery_list, items = meal_planning_service.generate_grocery_list(db, USER)
    meal_planning_service.set_item_checked(db, items[1].id, True)

    filename, text = meal_planning_service.export_grocery_list(db, grocery_list.id, generated_on=date(2025, 2, 3))

    assert filename == "grocery_list___week_of_2_2_2025.txt"
    assert text == (
        "Grocery List - Week of 2/2/2025\n\nGenerated on: 2/3/2025\n\n"
        "• Flour 2 cups\n• Flour 1 cup"
    )
