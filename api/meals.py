"""Meals API router.

Exposes the meal catalog, user-created meals, the shared ingredient table
and recipe lines (meal ingredients) used to derive grocery lists.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from core.config import MEAL_CATALOG_LIMIT
from core.logger import get_logger
from core.repository import BaseRepository
from database.deps import get_db_read, get_db_write
from database import models
from schemas import (
    IngredientCreateRequest,
    IngredientDetail,
    MealCreateRequest,
    MealDetail,
    MealIngredientCreateRequest,
    MealIngredientDetail,
    MealWithIngredients,
)

logger = get_logger("api.meals")
router = APIRouter(prefix="/api", tags=["meals"])


@router.get("/meals", response_model=List[MealDetail])
def list_meals(limit: int = MEAL_CATALOG_LIMIT, skip: int = 0, db: Session = Depends(get_db_read)):
    """Return a page of the catalog in catalog (id) order."""
    return BaseRepository(models.Meal, db).select(limit=limit, offset=skip)


@router.get("/meals/{meal_id}", response_model=MealWithIngredients)
def get_meal(meal_id: int, db: Session = Depends(get_db_read)):
    """Return one meal with its recipe lines.

    Raises:
        NotFoundError: If the meal does not exist.
    """
    return BaseRepository(models.Meal, db).get_required(meal_id)


@router.post("/meals", response_model=MealDetail, status_code=201)
def create_meal(payload: MealCreateRequest, db: Session = Depends(get_db_write)):
    """Add a custom meal to the catalog."""
    meal = BaseRepository(models.Meal, db).insert_one(models.Meal(**payload.model_dump()))
    logger.info("Meal created: %s (id=%s, tags=%s)", meal.name, meal.id, meal.dietary_tags)
    return meal


@router.post("/meals/{meal_id}/ingredients", response_model=MealIngredientDetail, status_code=201)
def add_meal_ingredient(meal_id: int, payload: MealIngredientCreateRequest, db: Session = Depends(get_db_write)):
    """Attach an ingredient line to a meal's recipe.

    Raises:
        NotFoundError: If the meal or the ingredient does not exist.
    """
    BaseRepository(models.Meal, db).get_required(meal_id)
    BaseRepository(models.Ingredient, db).get_required(payload.ingredient_id)
    line = models.MealIngredient(meal_id=meal_id, **payload.model_dump())
    return BaseRepository(models.MealIngredient, db).insert_one(line)


@router.get("/ingredients", response_model=List[IngredientDetail])
def list_ingredients(db: Session = Depends(get_db_read)):
    return BaseRepository(models.Ingredient, db).select(order_by=models.Ingredient.name)


@router.post("/ingredients", response_model=IngredientDetail, status_code=201)
def create_ingredient(payload: IngredientCreateRequest, db: Session = Depends(get_db_write)):
    ingredient = BaseRepository(models.Ingredient, db).insert_one(models.Ingredient(**payload.model_dump()))
    logger.info("Ingredient created: %s (category=%s)", ingredient.name, ingredient.category)
    return ingredient
