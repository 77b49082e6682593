"""Grocery list API router.

Generates lists from meal plans, shows them grouped by ingredient category,
checks items off, deletes items or whole lists and exports the unchecked
items as a downloadable text file.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session
from typing import List, Optional

from core.logger import get_logger
from database.deps import get_db_read, get_db_write
from schemas import (
    GroceryListCreateRequest,
    GroceryListDetail,
    GroceryListItemDetail,
    GroceryListItemPatch,
    GroceryListView,
)
from services.meal_planning import meal_planning_service

logger = get_logger("api.grocery_lists")
router = APIRouter(prefix="/api", tags=["grocery-lists"])


@router.get("/users/{user_id}/grocery-lists", response_model=List[GroceryListDetail])
def list_grocery_lists(user_id: str, db: Session = Depends(get_db_read)):
    """Return the user's grocery lists, newest first."""
    return meal_planning_service.list_grocery_lists(db, user_id)


@router.post("/users/{user_id}/grocery-lists", response_model=GroceryListView, status_code=201)
def generate_grocery_list(user_id: str, payload: Optional[GroceryListCreateRequest] = None, db: Session = Depends(get_db_write)):
    """Create a grocery list from a plan (the current plan when none is given).

    Raises:
        NotFoundError: If the plan does not exist.
        ValidationError: If the plan has no scheduled meals.
        StoreError: If the list or its items cannot be stored.
    """
    payload = payload or GroceryListCreateRequest()
    grocery_list, _ = meal_planning_service.generate_grocery_list(db, user_id, plan_id=payload.meal_plan_id)
    return meal_planning_service.get_grocery_list_view(db, grocery_list.id)


@router.get("/grocery-lists/{list_id}", response_model=GroceryListView)
def get_grocery_list(list_id: int, db: Session = Depends(get_db_read)):
    return meal_planning_service.get_grocery_list_view(db, list_id)


@router.delete("/grocery-lists/{list_id}", status_code=204)
def delete_grocery_list(list_id: int, db: Session = Depends(get_db_write)):
    meal_planning_service.delete_grocery_list(db, list_id)


@router.patch("/grocery-list-items/{item_id}", response_model=GroceryListItemDetail)
def toggle_grocery_item(item_id: int, payload: GroceryListItemPatch, db: Session = Depends(get_db_write)):
    """Check or uncheck an item. The response reflects the committed state."""
    return meal_planning_service.set_item_checked(db, item_id, payload.is_checked)


@router.delete("/grocery-list-items/{item_id}", status_code=204)
def delete_grocery_item(item_id: int, db: Session = Depends(get_db_write)):
    meal_planning_service.delete_grocery_item(db, item_id)


@router.get("/grocery-lists/{list_id}/export", response_class=PlainTextResponse)
def export_grocery_list(list_id: int, db: Session = Depends(get_db_read)):
    """Download the unchecked items as `<slugified title>.txt`."""
    filename, text = meal_planning_service.export_grocery_list(db, list_id)
    logger.info("Exported grocery list %s as %s", list_id, filename)
    return PlainTextResponse(
        content=text,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
