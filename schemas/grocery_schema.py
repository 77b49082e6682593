"""Schemas for grocery lists and their items."""

from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional

from .meal_schema import IngredientDetail


class GroceryListItemDraft(BaseModel):
    """A grocery line derived from a recipe line, not yet tied to a list."""

    ingredient_id: int
    amount: Optional[float] = None
    unit: Optional[str] = None
    is_checked: bool = False
    notes: Optional[str] = None
    ingredient: IngredientDetail


class GroceryListItemDetail(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    grocery_list_id: int
    ingredient_id: int
    amount: Optional[float] = None
    unit: Optional[str] = None
    is_checked: bool = False
    notes: Optional[str] = None
    estimated_price: Optional[float] = None
    ingredient: IngredientDetail


class GroceryListItemPatch(BaseModel):
    is_checked: bool = Field(..., examples=[True])


class GroceryListCreateRequest(BaseModel):
    """Generate a list from this plan, or from the user's current plan when omitted."""

    meal_plan_id: Optional[int] = Field(None, examples=[1])


class GroceryListDetail(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    meal_plan_id: Optional[int] = None
    title: str
    is_completed: bool = False
    created_at: Optional[datetime] = None


class GroceryListSummary(BaseModel):
    remaining: int
    completed: int


class GroceryListView(BaseModel):
    """A list with its items, the items grouped by category, and counts."""

    grocery_list: GroceryListDetail
    items: List[GroceryListItemDetail]
    groups: Dict[str, List[GroceryListItemDetail]]
    summary: GroceryListSummary
