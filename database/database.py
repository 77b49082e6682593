"""Database helpers: engines, session factories and DB initialization.

Provides read/write session factories and a simple `init_db` helper that
creates tables and seeds the demo meal catalog when the DB is empty.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from core.config import READ_DATABASE_URL, SEED_DEMO_DATA, WRITE_DATABASE_URL
from core.logger import get_logger
from .models import Base, Ingredient, Meal, MealIngredient
from data.meals_dataset import MEALS_DATA

logger = get_logger("database")


def _engine_for(url: str):
    # SQLite connections are shared across FastAPI's threadpool workers.
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, connect_args=connect_args)


# Engines
write_engine = _engine_for(WRITE_DATABASE_URL)
read_engine = _engine_for(READ_DATABASE_URL)

# Session factories
WriteSessionLocal = sessionmaker(bind=write_engine)
ReadSessionLocal = sessionmaker(bind=read_engine)


def seed_demo_catalog(session) -> int:
    """Insert the demo meals, their ingredients and recipe lines.

    Ingredients are shared between meals by name. Returns the number of
    meals added.
    """
    ingredients_by_name = {i.name.lower(): i for i in session.query(Ingredient).all()}
    added = 0
    for item in MEALS_DATA:
        meal = Meal(
            name=item["name"],
            description=item.get("description"),
            prep_time=item.get("prep_time"),
            cook_time=item.get("cook_time"),
            servings=item.get("servings", 4),
            dietary_tags=list(item.get("dietary_tags", [])),
            cuisine_type=item.get("cuisine_type"),
            difficulty_level=item.get("difficulty_level", "easy"),
        )
        for name, category, amount, unit in item.get("ingredients", []):
            ingredient = ingredients_by_name.get(name.lower())
            if ingredient is None:
                ingredient = Ingredient(name=name, category=category, unit=unit)
                session.add(ingredient)
                ingredients_by_name[name.lower()] = ingredient
            meal.ingredients.append(MealIngredient(ingredient=ingredient, amount=amount, unit=unit))
        session.add(meal)
        added += 1
    session.commit()
    return added


def init_db(seed: bool = SEED_DEMO_DATA):
    """Initialize database schema and seed the demo catalog.

    Creates all tables using SQLAlchemy models and populates the meals
    table with the demo dataset if the table is empty and `seed` is set.
    """
    Base.metadata.create_all(bind=write_engine)
    if not seed:
        return
    session = WriteSessionLocal()
    try:
        if session.query(Meal).count() == 0:
            added = seed_demo_catalog(session)
            logger.info("Seeded %s demo meals", added)
    finally:
        session.close()


# Convenience generators for dependency injection
def get_write_session():
    """Yield a write-enabled SQLAlchemy session for the request scope."""
    db = WriteSessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_read_session():
    """Yield a read-only SQLAlchemy session for the request scope.

    Used for read endpoints where routing reads to a replica may be desired.
    """
    db = ReadSessionLocal()
    try:
        yield db
    finally:
        db.close()
