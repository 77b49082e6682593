"""Meal plan API router.

Endpoints to create weekly plans, resolve the user's current plan, schedule
meals by hand and generate a full week from the user's profile.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional

from core.logger import get_logger
from database.deps import get_db_read, get_db_write
from schemas import (
    GeneratedMealPlanResponse,
    MealPlanCreateRequest,
    MealPlanDetail,
    MealPlanItemCreateRequest,
    MealPlanItemDetail,
    MealPlanWithItems,
)
from services.meal_planning import meal_planning_service

logger = get_logger("api.meal_plans")
router = APIRouter(prefix="/api", tags=["meal-plans"])


@router.get("/users/{user_id}/meal-plans", response_model=List[MealPlanDetail])
def list_meal_plans(user_id: str, db: Session = Depends(get_db_read)):
    """Return the user's plans, newest first."""
    return meal_planning_service.list_meal_plans(db, user_id)


@router.post("/users/{user_id}/meal-plans", response_model=MealPlanDetail, status_code=201)
def create_meal_plan(user_id: str, payload: Optional[MealPlanCreateRequest] = None, db: Session = Depends(get_db_write)):
    """Create an empty plan, by default for the current week starting Sunday."""
    payload = payload or MealPlanCreateRequest()
    return meal_planning_service.create_meal_plan(
        db, user_id, week_start_date=payload.week_start_date, title=payload.title
    )


@router.get("/users/{user_id}/meal-plans/current", response_model=MealPlanWithItems)
def get_current_meal_plan(user_id: str, db: Session = Depends(get_db_read)):
    """Return the most recently created plan with its scheduled meals.

    Raises:
        NotFoundError: If the user has no plan.
    """
    return meal_planning_service.get_current_meal_plan(db, user_id)


@router.post("/users/{user_id}/meal-plans/generate", response_model=GeneratedMealPlanResponse, status_code=201)
def generate_meal_plan(user_id: str, db: Session = Depends(get_db_write)):
    """Create a new plan and fill it with up to seven dinners matching the profile.

    Raises:
        ValidationError: If the user has no profile.
        StoreError: If the plan or its items cannot be stored.
    """
    plan, items = meal_planning_service.generate_meal_plan(db, user_id)
    if items:
        message = f"Your personalized weekly meal plan is ready with {len(items)} meals."
    else:
        message = "No meals match your dietary preferences yet; nothing to plan."
    return GeneratedMealPlanResponse(
        plan=MealPlanDetail.model_validate(plan),
        items=[MealPlanItemDetail.model_validate(i) for i in items],
        nothing_to_plan=not items,
        message=message,
    )


@router.get("/meal-plans/{plan_id}/items", response_model=List[MealPlanItemDetail])
def list_plan_items(plan_id: int, db: Session = Depends(get_db_read)):
    return meal_planning_service.list_plan_items(db, plan_id)


@router.post("/meal-plans/{plan_id}/items", response_model=MealPlanItemDetail, status_code=201)
def add_meal_to_plan(plan_id: int, payload: MealPlanItemCreateRequest, db: Session = Depends(get_db_write)):
    """Schedule a meal on a day of the week and meal type.

    Raises:
        NotFoundError: If the plan or the meal does not exist.
    """
    return meal_planning_service.add_meal_to_plan(db, plan_id, payload)
