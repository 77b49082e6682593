"""Pydantic schema package for request and response models."""

from .profile_schema import ProfileUpdateRequest, ProfileResponse
from .meal_schema import (
    IngredientCreateRequest,
    IngredientDetail,
    MealCreateRequest,
    MealDetail,
    MealIngredientCreateRequest,
    MealIngredientDetail,
    MealWithIngredients,
)
from .plan_schema import (
    GeneratedMealPlanResponse,
    MealPlanCreateRequest,
    MealPlanDetail,
    MealPlanItemCreateRequest,
    MealPlanItemDetail,
    MealPlanItemDraft,
    MealPlanWithItems,
)
from .grocery_schema import (
    GroceryListCreateRequest,
    GroceryListDetail,
    GroceryListItemDetail,
    GroceryListItemDraft,
    GroceryListItemPatch,
    GroceryListSummary,
    GroceryListView,
)

__all__ = [
    "ProfileUpdateRequest",
    "ProfileResponse",
    "IngredientCreateRequest",
    "IngredientDetail",
    "MealCreateRequest",
    "MealDetail",
    "MealIngredientCreateRequest",
    "MealIngredientDetail",
    "MealWithIngredients",
    "GeneratedMealPlanResponse",
    "MealPlanCreateRequest",
    "MealPlanDetail",
    "MealPlanItemCreateRequest",
    "MealPlanItemDetail",
    "MealPlanItemDraft",
    "MealPlanWithItems",
    "GroceryListCreateRequest",
    "GroceryListDetail",
    "GroceryListItemDetail",
    "GroceryListItemDraft",
    "GroceryListItemPatch",
    "GroceryListSummary",
    "GroceryListView",
]
