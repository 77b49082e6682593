"""SQLAlchemy ORM models for the meal planner.

Tables mirror the hosted schema the UI was built against: profiles, meals,
ingredients, meal_ingredients, meal_plans, meal_plan_items, grocery_lists
and grocery_list_items. Models carry no business logic. List-valued columns
(dietary tags, preferences, allergies) are stored as JSON arrays.
"""

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    JSON,
    String,
    Text,
)
from sqlalchemy.orm import declarative_base, relationship
from datetime import datetime

Base = declarative_base()


class Profile(Base):
    """Per-user profile; `user_id` is the identity issued by the auth provider."""

    __tablename__ = "profiles"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, nullable=False, unique=True, index=True)
    full_name = Column(String, nullable=True)
    email = Column(String, nullable=True)
    dietary_preferences = Column(JSON, nullable=False, default=list)
    allergies = Column(JSON, nullable=False, default=list)
    cooking_skill_level = Column(String, nullable=False, default="beginner")
    household_size = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class Meal(Base):
    """A meal in the catalog. `user_id` is set for user-created meals."""

    __tablename__ = "meals"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    prep_time = Column(Integer, nullable=True)
    cook_time = Column(Integer, nullable=True)
    servings = Column(Integer, nullable=True, default=4)
    dietary_tags = Column(JSON, nullable=False, default=list)
    cuisine_type = Column(String, nullable=True)
    difficulty_level = Column(String, nullable=True, default="easy")
    image_url = Column(String, nullable=True)
    user_id = Column(String, nullable=True, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    ingredients = relationship(
        "MealIngredient",
        back_populates="meal",
        cascade="all, delete-orphan",
        order_by="MealIngredient.id",
    )


class Ingredient(Base):
    """A shoppable ingredient; `category` groups grocery list lines."""

    __tablename__ = "ingredients"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    category = Column(String, nullable=True)
    unit = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)


class MealIngredient(Base):
    """Recipe line joining a meal to an ingredient with an optional quantity."""

    __tablename__ = "meal_ingredients"
    id = Column(Integer, primary_key=True, index=True)
    meal_id = Column(Integer, ForeignKey("meals.id"), nullable=False, index=True)
    ingredient_id = Column(Integer, ForeignKey("ingredients.id"), nullable=False)
    amount = Column(Float, nullable=True)
    unit = Column(String, nullable=True)
    notes = Column(Text, nullable=True)

    meal = relationship("Meal", back_populates="ingredients")
    ingredient = relationship("Ingredient", lazy="joined")


class MealPlan(Base):
    """A weekly plan owned by a user."""

    __tablename__ = "meal_plans"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, nullable=False, index=True)
    week_start_date = Column(Date, nullable=False)
    title = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    items = relationship(
        "MealPlanItem",
        back_populates="meal_plan",
        cascade="all, delete-orphan",
        order_by="MealPlanItem.id",
    )


class MealPlanItem(Base):
    """One scheduled meal: day_of_week 0-6 with Sunday = 0."""

    __tablename__ = "meal_plan_items"
    id = Column(Integer, primary_key=True, index=True)
    meal_plan_id = Column(Integer, ForeignKey("meal_plans.id"), nullable=False, index=True)
    meal_id = Column(Integer, ForeignKey("meals.id"), nullable=False)
    day_of_week = Column(Integer, nullable=False)
    meal_type = Column(String, nullable=False, default="dinner")
    servings = Column(Integer, nullable=False, default=1)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    meal_plan = relationship("MealPlan", back_populates="items")
    meal = relationship("Meal", lazy="joined")


class GroceryList(Base):
    """A shopping list, usually derived from a meal plan."""

    __tablename__ = "grocery_lists"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, nullable=False, index=True)
    meal_plan_id = Column(Integer, ForeignKey("meal_plans.id"), nullable=True)
    title = Column(String, nullable=False)
    is_completed = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    items = relationship(
        "GroceryListItem",
        back_populates="grocery_list",
        cascade="all, delete-orphan",
        order_by="GroceryListItem.id",
    )


class GroceryListItem(Base):
    """One ingredient line of a grocery list."""

    __tablename__ = "grocery_list_items"
    id = Column(Integer, primary_key=True, index=True)
    grocery_list_id = Column(Integer, ForeignKey("grocery_lists.id"), nullable=False, index=True)
    ingredient_id = Column(Integer, ForeignKey("ingredients.id"), nullable=False)
    amount = Column(Float, nullable=True)
    unit = Column(String, nullable=True)
    is_checked = Column(Boolean, nullable=False, default=False)
    notes = Column(Text, nullable=True)
    estimated_price = Column(Float, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    grocery_list = relationship("GroceryList", back_populates="items")
    ingredient = relationship("Ingredient", lazy="joined")
