"""Unit tests for weekly plan generation."""
import random

import pytest

from core.exceptions import ValidationError
from services.plan_generator import PlanGenerator, plan_generator


class DummyMeal:
    """Stand-in for the Meal ORM fields read by the generator."""
    def __init__(self, id, tags, servings=4, name=None):
        self.id = id
        self.name = name or f"Meal {id}"
        self.dietary_tags = tags
        self.servings = servings


class DummyProfile:
    def __init__(self, preferences=None, household_size=4):
        self.dietary_preferences = preferences or []
        self.household_size = household_size


def test_vegetarian_profile_picks_matching_meals_in_catalog_order():
    meal_a = DummyMeal(1, ["vegetarian"])
    meal_b = DummyMeal(2, ["keto"])
    meal_c = DummyMeal(3, ["vegetarian", "gluten-free"])

    drafts = plan_generator.generate(DummyProfile(["vegetarian"]), [meal_a, meal_b, meal_c], target_plan_id=10)

    assert [(d.meal_id, d.day_of_week) for d in drafts] == [(1, 0), (3, 1)]
    assert all(d.meal_type == "dinner" for d in drafts)
    assert all(d.meal_plan_id == 10 for d in drafts)


def test_any_shared_tag_qualifies():
    meals = [DummyMeal(1, ["vegan", "dairy-free"]), DummyMeal(2, ["paleo"])]
    drafts = plan_generator.generate(DummyProfile(["keto", "dairy-free"]), meals, 1)
    assert [d.meal_id for d in drafts] == [1]


def test_no_preferences_keeps_every_meal_and_caps_at_seven_days():
    meals = [DummyMeal(i, []) for i in range(1, 11)]
    drafts = plan_generator.generate(DummyProfile([]), meals, 1)
    assert [d.meal_id for d in drafts] == [1, 2, 3, 4, 5, 6, 7]
    assert [d.day_of_week for d in drafts] == list(range(7))


def test_meals_without_tags_never_match_preferences():
    meals = [DummyMeal(1, None), DummyMeal(2, [])]
    assert plan_generator.generate(DummyProfile(["vegan"]), meals, 1) == []


def test_zero_qualifying_meals_returns_empty_list():
    assert plan_generator.generate(DummyProfile(["vegan"]), [DummyMeal(1, ["keto"])], 1) == []
    assert plan_generator.generate(DummyProfile(["vegan"]), [], 1) == []


def test_missing_profile_raises_validation_error():
    with pytest.raises(ValidationError) as exc_info:
        plan_generator.generate(None, [DummyMeal(1, [])], 1)
    assert exc_info.value.message == "profile required"
    assert exc_info.value.status_code == 400
    assert exc_info.value.details == {"field": "profile"}


@pytest.mark.parametrize("meal_servings,household,expected", [
    (6, 2, 2),
    (2, 5, 2),
    (4, 4, 4),
    (None, 3, 3),
    (0, 3, 3),
    (6, None, 4),
])
def test_servings_are_capped_by_recipe_and_household(meal_servings, household, expected):
    drafts = plan_generator.generate(
        DummyProfile([], household_size=household), [DummyMeal(1, [], servings=meal_servings)], 1
    )
    assert drafts[0].servings == expected


def test_custom_generator_settings():
    generator = PlanGenerator(days=3, meal_type="lunch", default_household_size=2)
    drafts = generator.generate(DummyProfile([], household_size=None), [DummyMeal(i, [], servings=8) for i in range(5)], 1)
    assert len(drafts) == 3
    assert {d.meal_type for d in drafts} == {"lunch"}
    assert {d.servings for d in drafts} == {2}


def test_generated_plans_hold_their_invariants_over_random_catalogs():
    tags = ["vegan", "vegetarian", "keto", "paleo", "gluten-free"]
    rng = random.Random(7)
    for _ in range(50):
        catalog = [
            DummyMeal(i, rng.sample(tags, rng.randint(0, 3)), servings=rng.randint(1, 8))
            for i in range(rng.randint(0, 15))
        ]
        profile = DummyProfile(rng.sample(tags, rng.randint(0, 2)), household_size=rng.randint(1, 6))
        by_id = {m.id: m for m in catalog}

        drafts = plan_generator.generate(profile, catalog, 1)

        assert len(drafts) <= 7
        assert [d.day_of_week for d in drafts] == list(range(len(drafts)))
        for d in drafts:
            meal = by_id[d.meal_id]
            if profile.dietary_preferences:
                assert set(meal.dietary_tags) & set(profile.dietary_preferences)
            assert 1 <= d.servings <= min(meal.servings, profile.household_size)
