"""Schemas for profile requests and responses."""

from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Literal, Optional

CookingSkillLevel = Literal["beginner", "intermediate", "advanced"]


class ProfileUpdateRequest(BaseModel):
    """Payload for creating or replacing a user's profile."""

    full_name: Optional[str] = Field(None, examples=["Jane Doe"])
    email: Optional[str] = Field(None, examples=["jane@example.com"])
    dietary_preferences: List[str] = Field(default_factory=list, examples=[["vegetarian", "gluten-free"]], description="Tags matched against meal dietary tags")
    allergies: List[str] = Field(default_factory=list, examples=[["nuts"]])
    cooking_skill_level: CookingSkillLevel = Field("beginner", examples=["intermediate"])
    household_size: int = Field(1, ge=1, le=20, examples=[4], description="Number of people cooked for")


class ProfileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    full_name: Optional[str] = None
    email: Optional[str] = None
    dietary_preferences: List[str] = []
    allergies: List[str] = []
    cooking_skill_level: str
    household_size: int
    updated_at: Optional[datetime] = None
