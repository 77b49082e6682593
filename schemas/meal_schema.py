"""Schemas for meals, ingredients and recipe lines."""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Literal, Optional

DifficultyLevel = Literal["easy", "medium", "hard"]


class IngredientCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, examples=["Flour"])
    category: Optional[str] = Field(None, examples=["Baking"], description="Grocery list grouping key")
    unit: Optional[str] = Field(None, examples=["cups"])


class IngredientDetail(BaseModel):
    """Representation of an ingredient in responses and grocery drafts."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    category: Optional[str] = None
    unit: Optional[str] = None


class MealIngredientCreateRequest(BaseModel):
    """Payload for attaching an ingredient line to a meal's recipe."""

    ingredient_id: int = Field(..., examples=[3])
    amount: Optional[float] = Field(None, ge=0, examples=[2])
    unit: Optional[str] = Field(None, examples=["cups"])
    notes: Optional[str] = None


class MealIngredientDetail(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    meal_id: int
    ingredient_id: int
    amount: Optional[float] = None
    unit: Optional[str] = None
    notes: Optional[str] = None
    ingredient: IngredientDetail


class MealCreateRequest(BaseModel):
    """Payload for adding a custom meal to the catalog."""

    name: str = Field(..., min_length=1, examples=["Lentil Soup"])
    description: Optional[str] = Field(None, examples=["Hearty red lentil soup"])
    prep_time: int = Field(15, ge=0, description="Minutes")
    cook_time: int = Field(30, ge=0, description="Minutes")
    servings: int = Field(4, ge=1)
    cuisine_type: Optional[str] = Field(None, examples=["indian"])
    difficulty_level: DifficultyLevel = "easy"
    dietary_tags: List[str] = Field(default_factory=list, examples=[["vegan", "gluten-free"]])
    image_url: Optional[str] = None
    user_id: Optional[str] = Field(None, description="Owner of a user-created meal")


class MealDetail(BaseModel):
    """Representation of a meal in responses."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: Optional[str] = None
    prep_time: Optional[int] = None
    cook_time: Optional[int] = None
    servings: Optional[int] = None
    dietary_tags: List[str] = []
    cuisine_type: Optional[str] = None
    difficulty_level: Optional[str] = None
    image_url: Optional[str] = None
    user_id: Optional[str] = None


class MealWithIngredients(MealDetail):
    ingredients: List[MealIngredientDetail] = []
