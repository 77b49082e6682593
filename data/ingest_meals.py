"""Utilities to ingest meal catalog CSV files into the database.

This module provides:
- parse_meals_csv(csv_path): returns a list of normalized meal dicts
- seed_meals_from_csv(csv_path, session): idempotently seeds the meals table

Expected columns are `name` (or `meal_name`), `description`, `prep_time`,
`cook_time`, `servings`, `cuisine_type`, `difficulty_level` and
`dietary_tags`, the latter holding `;`-separated tags such as
`vegan;gluten-free`. Only `name` is required.
"""
from __future__ import annotations

import math
from typing import Dict, List, Optional

import pandas as pd

from core.logger import get_logger
from core.repository import BaseRepository
from database.database import WriteSessionLocal
from database import models

logger = get_logger("data.ingest_meals")

DIFFICULTY_LEVELS = {"easy", "medium", "hard"}


def _is_blank(val) -> bool:
    if val is None:
        return True
    if isinstance(val, float) and math.isnan(val):
        return True
    return str(val).strip() == ""


def _int_or(val, default: Optional[int], minimum: int = 0) -> Optional[int]:
    """Parse a whole number cell, falling back to `default` when blank or invalid."""
    if _is_blank(val):
        return default
    try:
        number = int(float(val))
    except (TypeError, ValueError):
        return default
    return number if number >= minimum else default


def _text_or_none(val) -> Optional[str]:
    return None if _is_blank(val) else str(val).strip()


def parse_tags(raw) -> List[str]:
    """Split a `;` or `,` separated tag cell into lower-case tags, keeping order."""
    if _is_blank(raw):
        return []
    tags = []
    for part in str(raw).replace(",", ";").split(";"):
        tag = part.strip().lower()
        if tag and tag not in tags:
            tags.append(tag)
    return tags


def parse_meals_csv(csv_path: str) -> List[Dict]:
    """Parse the CSV and return a list of normalized meal dictionaries.

    Rows without a name are skipped. Servings default to 4, and a difficulty
    outside easy/medium/hard falls back to easy.
    """
    logger.info("Parsing meals CSV: %s", csv_path)
    df = pd.read_csv(csv_path, encoding="utf-8")
    df = df.rename(columns=lambda s: s.strip().lower())

    meals = []
    for _, row in df.iterrows():
        name = row.get("name")
        if _is_blank(name):
            name = row.get("meal_name")
        if _is_blank(name):
            continue

        difficulty = (_text_or_none(row.get("difficulty_level")) or "easy").lower()
        if difficulty not in DIFFICULTY_LEVELS:
            difficulty = "easy"

        meals.append({
            "name": str(name).strip(),
            "description": _text_or_none(row.get("description")),
            "prep_time": _int_or(row.get("prep_time"), None),
            "cook_time": _int_or(row.get("cook_time"), None),
            "servings": _int_or(row.get("servings"), 4, minimum=1),
            "cuisine_type": _text_or_none(row.get("cuisine_type")),
            "difficulty_level": difficulty,
            "dietary_tags": parse_tags(row.get("dietary_tags")),
        })

    logger.info("Parsed %s meals from CSV", len(meals))
    return meals


def seed_meals_from_csv(csv_path: str, session=None) -> int:
    """Idempotently seed the meals table from the CSV file.

    If `session` is not supplied, a `WriteSessionLocal` session is used.
    Existing meals are matched by name and skipped to avoid duplicates.

    Returns:
        Number of meals added.
    """
    close_session = False
    if session is None:
        session = WriteSessionLocal()
        close_session = True
    try:
        repo = BaseRepository(models.Meal, session)
        existing = {m.name for m in repo.select()}
        new_meals = []
        for item in parse_meals_csv(csv_path):
            if item["name"] in existing:
                continue
            existing.add(item["name"])
            new_meals.append(models.Meal(**item))
        if new_meals:
            repo.insert(new_meals)
        logger.info("Seeded %s new meals into DB", len(new_meals))
        return len(new_meals)
    finally:
        if close_session:
            session.close()


if __name__ == "__main__":
    import argparse

    p = argparse.ArgumentParser("Seed meals from CSV into the DB")
    p.add_argument("csv_path", nargs="?", default="data/fixtures/meals.csv")
    args = p.parse_args()
    added = seed_meals_from_csv(args.csv_path)
    print(f"Done: {added} meals added")
