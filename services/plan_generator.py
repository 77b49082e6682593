"""Weekly plan generation from a user's dietary preferences.

Selection is a first-match policy over the catalog order: no scoring, no
shuffling. The i-th qualifying meal is served as dinner on day i (Sunday = 0).
"""

from typing import Iterable, List, Optional

from core.config import DEFAULT_HOUSEHOLD_SIZE
from core.exceptions import ValidationError
from core.logger import get_logger
from core.repository import overlaps
from schemas.plan_schema import MealPlanItemDraft

logger = get_logger("services.plan_generator")


class PlanGenerator:
    """Turns a profile and a meal catalog into plan item drafts."""

    def __init__(self, days: int = 7, meal_type: str = "dinner", default_household_size: int = DEFAULT_HOUSEHOLD_SIZE):
        """Initialize the generator.

        Parameters
        ----------
        days: int
            Maximum number of days to plan, one meal per day.
        meal_type: str
            Meal type assigned to every generated item.
        default_household_size: int
            Used when the profile does not state a household size.
        """
        self.days = days
        self.meal_type = meal_type
        self.default_household_size = default_household_size

    def filter_meals(self, candidate_meals: Iterable, dietary_preferences: Optional[Iterable[str]]) -> List:
        """Keep meals sharing at least one tag with the preferences.

        With no preferences every candidate qualifies. Catalog order is kept.
        """
        preferences = set(dietary_preferences or ())
        meals = list(candidate_meals)
        if not preferences:
            return meals
        out = [m for m in meals if overlaps(getattr(m, "dietary_tags", None), preferences)]
        logger.debug("Filtered meals by %s: %s -> %s", sorted(preferences), len(meals), len(out))
        return out

    def servings_for(self, meal, household_size: Optional[int]) -> int:
        """Serve the smaller of the recipe yield and the household, never below 1."""
        household = household_size or self.default_household_size
        meal_servings = getattr(meal, "servings", None) or household
        return max(1, min(meal_servings, household))

    def generate(self, profile, candidate_meals: Iterable, target_plan_id: int) -> List[MealPlanItemDraft]:
        """Build up to `days` dinner drafts for the plan `target_plan_id`.

        Args:
            profile: Object with `dietary_preferences` and `household_size`.
            candidate_meals: Meals in catalog order.
            target_plan_id: Plan the drafts will be inserted into.

        Returns:
            Drafts with day_of_week 0..k-1; empty when nothing qualifies.

        Raises:
            ValidationError: If `profile` is None.
        """
        if profile is None:
            raise ValidationError("profile required", field="profile")

        selected = self.filter_meals(candidate_meals, getattr(profile, "dietary_preferences", None))[: self.days]
        household_size = getattr(profile, "household_size", None)

        drafts = [
            MealPlanItemDraft(
                meal_plan_id=target_plan_id,
                meal_id=meal.id,
                day_of_week=day,
                meal_type=self.meal_type,
                servings=self.servings_for(meal, household_size),
            )
            for day, meal in enumerate(selected)
        ]
        logger.info("Generated %s plan items for plan %s", len(drafts), target_plan_id)
        return drafts


# export a default instance
plan_generator = PlanGenerator()
__all__ = ["PlanGenerator", "plan_generator"]
