"""Grocery list derivation, grouping, check-off and text export.

Every function here is pure: it works on plan items, recipe lines and grocery
items already loaded from the store and never writes to it.

Lines are not merged across meals. Two meals that both need flour yield two
flour lines, each with its own amount and unit.
"""

import re
from datetime import date
from typing import Dict, Iterable, List, Mapping, Optional

from core.exceptions import NotFoundError
from core.logger import get_logger
from schemas.grocery_schema import GroceryListItemDraft
from schemas.meal_schema import IngredientDetail

logger = get_logger("services.grocery_aggregator")

DEFAULT_CATEGORY = "Other"
BULLET = "•"


def format_amount(amount) -> str:
    """Render 1.0 as '1' and 0.5 as '0.5'."""
    if isinstance(amount, float) and amount.is_integer():
        return str(int(amount))
    return str(amount)


def format_date(day: date) -> str:
    """US short date without zero padding, e.g. 2/3/2025."""
    return f"{day.month}/{day.day}/{day.year}"


class GroceryAggregator:
    """Derives and presents grocery list items."""

    def build(self, plan_items: Iterable, meal_ingredients_by_meal_id: Mapping[int, Iterable]) -> List[GroceryListItemDraft]:
        """Emit one draft per (plan item, recipe line) pair.

        Order follows the plan items, then each meal's recipe order. A meal
        scheduled twice contributes its lines twice.

        Args:
            plan_items: Objects with a `meal_id`.
            meal_ingredients_by_meal_id: meal id -> recipe lines, each with
                `ingredient_id`, `amount`, `unit` and a loaded `ingredient`.

        Raises:
            NotFoundError: If a recipe line's ingredient is missing.
        """
        plan_items = list(plan_items)
        drafts = []
        for item in plan_items:
            for line in meal_ingredients_by_meal_id.get(item.meal_id, ()):
                ingredient = getattr(line, "ingredient", None)
                if ingredient is None:
                    raise NotFoundError("Ingredient", line.ingredient_id)
                drafts.append(GroceryListItemDraft(
                    ingredient_id=line.ingredient_id,
                    amount=line.amount,
                    unit=line.unit,
                    ingredient=IngredientDetail.model_validate(ingredient),
                ))
        logger.debug("Built %s grocery lines from %s plan items", len(drafts), len(plan_items))
        return drafts

    def group_by_category(self, items: Iterable) -> Dict[str, List]:
        """Partition items by ingredient category, first-seen category first."""
        groups: Dict[str, List] = {}
        for item in items:
            category = getattr(item.ingredient, "category", None) or DEFAULT_CATEGORY
            groups.setdefault(category, []).append(item)
        return groups

    def toggle(self, item, checked: bool):
        """Return a copy of `item` with only `is_checked` changed."""
        return item.model_copy(update={"is_checked": checked})

    def summarize(self, items: Iterable) -> Dict[str, int]:
        """Count unchecked ('remaining') and checked ('completed') items."""
        remaining = completed = 0
        for item in items:
            if item.is_checked:
                completed += 1
            else:
                remaining += 1
        return {"remaining": remaining, "completed": completed}

    def format_line(self, item) -> str:
        quantity = ""
        if item.amount:
            quantity = f"{format_amount(item.amount)} {item.unit or ''}"
        return f"{BULLET} {item.ingredient.name} {quantity}".strip()

    def export_text(self, items: Iterable, list_title: str, generated_on: Optional[date] = None) -> str:
        """Render the unchecked items as a plain-text shopping list.

        Layout is the title, a blank line, `Generated on: <date>`, a blank
        line, then one bullet per unchecked item in the given order.
        """
        generated_on = generated_on or date.today()
        lines = [self.format_line(item) for item in items if not item.is_checked]
        return f"{list_title}\n\nGenerated on: {format_date(generated_on)}\n\n" + "\n".join(lines)

    def export_filename(self, list_title: str) -> str:
        """Slugify the title: non-alphanumerics become '_', lower-cased, '.txt'."""
        return re.sub(r"[^a-z0-9]", "_", list_title, flags=re.IGNORECASE).lower() + ".txt"


grocery_aggregator = GroceryAggregator()
__all__ = ["GroceryAggregator", "grocery_aggregator", "DEFAULT_CATEGORY"]
