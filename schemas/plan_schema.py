"""Schemas for meal plans and their scheduled items."""

from datetime import date, datetime
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Literal, Optional

from .meal_schema import MealDetail

MealType = Literal["breakfast", "lunch", "dinner", "snack"]


class MealPlanCreateRequest(BaseModel):
    """Optional overrides when creating a plan; defaults to the current week."""

    week_start_date: Optional[date] = Field(None, examples=["2025-02-02"])
    title: Optional[str] = Field(None, examples=["Week of 2/2/2025"])


class MealPlanDetail(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    week_start_date: date
    title: Optional[str] = None
    created_at: Optional[datetime] = None


class MealPlanItemCreateRequest(BaseModel):
    """Payload for scheduling one meal on a day of the week."""

    meal_id: int = Field(..., examples=[1])
    day_of_week: int = Field(1, ge=0, le=6, description="0 = Sunday ... 6 = Saturday")
    meal_type: MealType = "dinner"
    servings: Optional[int] = Field(None, ge=1, le=20, description="Defaults to the meal's servings")
    notes: Optional[str] = None


class MealPlanItemDraft(BaseModel):
    """A plan item that has not been persisted yet."""

    meal_plan_id: int
    meal_id: int
    day_of_week: int = Field(..., ge=0, le=6)
    meal_type: MealType = "dinner"
    servings: int = Field(..., ge=1)
    notes: Optional[str] = None


class MealPlanItemDetail(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    meal_plan_id: int
    meal_id: int
    day_of_week: int
    meal_type: str
    servings: int
    notes: Optional[str] = None
    meal: Optional[MealDetail] = None


class MealPlanWithItems(MealPlanDetail):
    items: List[MealPlanItemDetail] = []


class GeneratedMealPlanResponse(BaseModel):
    """Result of generating a plan from the user's profile."""

    plan: MealPlanDetail
    items: List[MealPlanItemDetail]
    nothing_to_plan: bool
    message: str
