"""Meal planning workflows.

Each public method is one user action: it reads what it needs through the
repositories, runs `PlanGenerator` or `GroceryAggregator`, and writes the
result back. Plan and list identities are always passed in explicitly; the
"current" plan is resolved by query on every call.

Creating a parent row and then its children takes two commits. If the
children fail to insert, the parent is deleted again (compensating delete)
and the original `StoreError` is re-raised, so a failed action leaves no
empty plan or list behind.
"""

from collections import defaultdict
from datetime import date, timedelta
from typing import Dict, List, Optional, Tuple

from sqlalchemy.orm.attributes import set_committed_value

from core.config import DEFAULT_HOUSEHOLD_SIZE
from core.exceptions import AppException, NotFoundError, StoreError, ValidationError
from core.logger import get_logger
from core.repository import BaseRepository
from database import models
from schemas.grocery_schema import GroceryListDetail, GroceryListItemDetail
from schemas.plan_schema import MealPlanItemCreateRequest
from schemas.profile_schema import ProfileUpdateRequest
from services.grocery_aggregator import GroceryAggregator, format_date, grocery_aggregator
from services.plan_generator import PlanGenerator, plan_generator

logger = get_logger("services.meal_planning")


def week_start(today: date) -> date:
    """Return the Sunday on or before `today`."""
    return today - timedelta(days=(today.weekday() + 1) % 7)


class MealPlanningService:
    """Action-boundary workflows over plans, profiles and grocery lists."""

    def __init__(self, generator: PlanGenerator = plan_generator, aggregator: GroceryAggregator = grocery_aggregator):
        self.generator = generator
        self.aggregator = aggregator

    def _insert_children(self, db, parent_model, parent_id: int, children: List) -> List:
        """Insert `children` in one batch, deleting the parent if that fails."""
        try:
            return BaseRepository(type(children[0]), db).insert(children)
        except StoreError:
            logger.warning("Inserting %s children of %s %s failed; deleting parent", len(children), parent_model.__name__, parent_id)
            try:
                BaseRepository(parent_model, db).delete(parent_id)
            except AppException as cleanup_exc:
                logger.error("Compensating delete of %s %s failed: %s", parent_model.__name__, parent_id, cleanup_exc.message)
            raise

    # profiles

    def get_profile(self, db, user_id: str) -> Optional[models.Profile]:
        return BaseRepository(models.Profile, db).first(user_id=user_id)

    def require_profile(self, db, user_id: str) -> models.Profile:
        profile = self.get_profile(db, user_id)
        if profile is None:
            raise NotFoundError("Profile", user_id)
        return profile

    def upsert_profile(self, db, user_id: str, payload: ProfileUpdateRequest) -> models.Profile:
        """Create the user's profile on first save, replace its fields afterwards."""
        repo = BaseRepository(models.Profile, db)
        data = payload.model_dump()
        existing = repo.first(user_id=user_id)
        if existing is None:
            profile = repo.insert_one(models.Profile(user_id=user_id, **data))
            logger.info("Created profile for user %s", user_id)
            return profile
        return repo.update(existing.id, data)

    # meal plans

    def create_meal_plan(self, db, user_id: str, today: Optional[date] = None,
                         week_start_date: Optional[date] = None, title: Optional[str] = None) -> models.MealPlan:
        """Create an empty plan for the week containing `today`."""
        start = week_start_date or week_start(today or date.today())
        plan = models.MealPlan(
            user_id=user_id,
            week_start_date=start,
            title=title or f"Week of {format_date(start)}",
        )
        plan = BaseRepository(models.MealPlan, db).insert_one(plan)
        logger.info("Created meal plan %s for user %s", plan.id, user_id)
        return plan

    def list_meal_plans(self, db, user_id: str) -> List[models.MealPlan]:
        """Return the user's plans, newest first."""
        return BaseRepository(models.MealPlan, db).select(
            order_by=(models.MealPlan.created_at.desc(), models.MealPlan.id.desc()),
            user_id=user_id,
        )

    def get_current_meal_plan(self, db, user_id: str) -> models.MealPlan:
        """Return the most recently created plan.

        Raises:
            NotFoundError: If the user has no plan.
        """
        plan = BaseRepository(models.MealPlan, db).first(
            order_by=(models.MealPlan.created_at.desc(), models.MealPlan.id.desc()),
            user_id=user_id,
        )
        if plan is None:
            raise NotFoundError("MealPlan", "current")
        return plan

    def get_meal_plan(self, db, plan_id: int) -> models.MealPlan:
        return BaseRepository(models.MealPlan, db).get_required(plan_id)

    def list_plan_items(self, db, plan_id: int) -> List[models.MealPlanItem]:
        self.get_meal_plan(db, plan_id)
        return BaseRepository(models.MealPlanItem, db).select(meal_plan_id=plan_id)

    def add_meal_to_plan(self, db, plan_id: int, payload: MealPlanItemCreateRequest) -> models.MealPlanItem:
        """Schedule one meal on a day and meal type of an existing plan."""
        self.get_meal_plan(db, plan_id)
        meal = BaseRepository(models.Meal, db).get_required(payload.meal_id)
        item = models.MealPlanItem(
            meal_plan_id=plan_id,
            meal_id=meal.id,
            day_of_week=payload.day_of_week,
            meal_type=payload.meal_type,
            servings=payload.servings or meal.servings or DEFAULT_HOUSEHOLD_SIZE,
            notes=payload.notes,
        )
        item = BaseRepository(models.MealPlanItem, db).insert_one(item)
        logger.info("Scheduled meal %s on day %s (%s) in plan %s", meal.id, item.day_of_week, item.meal_type, plan_id)
        return item

    def load_candidate_meals(self, db, dietary_preferences: Optional[List[str]]) -> List[models.Meal]:
        """Return catalog meals in id order, narrowed by tag overlap when preferences are set."""
        repo = BaseRepository(models.Meal, db)
        if not dietary_preferences:
            return repo.select()
        return repo.select_overlapping("dietary_tags", dietary_preferences)

    def generate_meal_plan(self, db, user_id: str, today: Optional[date] = None) -> Tuple[models.MealPlan, List[models.MealPlanItem]]:
        """Create a new plan and fill it from the profile's preferences.

        Returns the plan and its inserted items. An empty item list means no
        catalog meal matched; the empty plan is kept for manual scheduling.

        The catalog is read before the plan row is written, so a failed
        read leaves nothing behind.

        Raises:
            ValidationError: If the user has no profile.
            StoreError: If a read or write fails; a plan whose items failed
                to insert is deleted again.
        """
        profile = self.get_profile(db, user_id)
        if profile is None:
            raise ValidationError("profile required", field="profile")

        catalog = self.load_candidate_meals(db, profile.dietary_preferences)
        plan = self.create_meal_plan(db, user_id, today=today)
        plan_id = plan.id
        drafts = self.generator.generate(profile, catalog, plan_id)
        if not drafts:
            logger.info("Nothing to plan for user %s: no meal matches %s", user_id, profile.dietary_preferences)
            return plan, []

        items = self._insert_children(
            db, models.MealPlan, plan_id,
            [models.MealPlanItem(**draft.model_dump()) for draft in drafts],
        )
        return plan, items

    # grocery lists

    def generate_grocery_list(self, db, user_id: str, plan_id: Optional[int] = None) -> Tuple[models.GroceryList, List[models.GroceryListItem]]:
        """Create a grocery list from a plan's scheduled meals.

        Uses the user's current plan when `plan_id` is omitted.

        Raises:
            NotFoundError: If the plan does not exist or belongs to someone else.
            ValidationError: If the plan has no scheduled meals.
            StoreError: If a write fails; a list whose items failed to
                insert is deleted again.
        """
        if plan_id is None:
            plan = self.get_current_meal_plan(db, user_id)
        else:
            plan = self.get_meal_plan(db, plan_id)
            if plan.user_id != user_id:
                raise NotFoundError("MealPlan", plan_id)

        plan_items = BaseRepository(models.MealPlanItem, db).select(meal_plan_id=plan.id)
        if not plan_items:
            raise ValidationError("No meal plan found: schedule meals before generating a grocery list", field="meal_plan_id")

        recipe_lines = BaseRepository(models.MealIngredient, db).select_in("meal_id", {i.meal_id for i in plan_items})
        lines_by_meal: Dict[int, List[models.MealIngredient]] = defaultdict(list)
        for line in recipe_lines:
            lines_by_meal[line.meal_id].append(line)
        drafts = self.aggregator.build(plan_items, lines_by_meal)

        grocery_list = BaseRepository(models.GroceryList, db).insert_one(models.GroceryList(
            user_id=user_id,
            meal_plan_id=plan.id,
            title=f"Grocery List - {plan.title}",
        ))
        list_id = grocery_list.id
        if not drafts:
            logger.info("Grocery list %s created without items: plan %s meals have no ingredients", list_id, plan.id)
            return grocery_list, []

        items = self._insert_children(
            db, models.GroceryList, list_id,
            [models.GroceryListItem(grocery_list_id=list_id, **draft.model_dump(exclude={"ingredient"})) for draft in drafts],
        )
        logger.info("Grocery list %s created with %s items from plan %s", list_id, len(items), plan.id)
        return grocery_list, items

    def list_grocery_lists(self, db, user_id: str) -> List[models.GroceryList]:
        return BaseRepository(models.GroceryList, db).select(
            order_by=(models.GroceryList.created_at.desc(), models.GroceryList.id.desc()),
            user_id=user_id,
        )

    def get_grocery_list(self, db, list_id: int) -> models.GroceryList:
        return BaseRepository(models.GroceryList, db).get_required(list_id)

    def get_grocery_items(self, db, list_id: int) -> List[GroceryListItemDetail]:
        self.get_grocery_list(db, list_id)
        rows = BaseRepository(models.GroceryListItem, db).select(grocery_list_id=list_id)
        return [GroceryListItemDetail.model_validate(row) for row in rows]

    def get_grocery_list_view(self, db, list_id: int) -> dict:
        """Return the list, its items, the items by category and the counts."""
        grocery_list = self.get_grocery_list(db, list_id)
        items = self.get_grocery_items(db, list_id)
        return {
            "grocery_list": GroceryListDetail.model_validate(grocery_list),
            "items": items,
            "groups": self.aggregator.group_by_category(items),
            "summary": self.aggregator.summarize(items),
        }

    def set_item_checked(self, db, item_id: int, checked: bool) -> GroceryListItemDetail:
        """Check or uncheck a grocery item.

        The new state is applied in memory, then committed. If the commit
        fails the in-memory flag is put back to its previous value and the
        `StoreError` propagates, so no caller ever sees an unconfirmed state.
        """
        repo = BaseRepository(models.GroceryListItem, db)
        item = repo.get_required(item_id)
        previous = item.is_checked
        toggled = self.aggregator.toggle(GroceryListItemDetail.model_validate(item), checked)

        item.is_checked = toggled.is_checked
        try:
            repo.commit(item)
        except StoreError:
            set_committed_value(item, "is_checked", previous)
            raise
        logger.info("Grocery item %s checked=%s", item_id, checked)
        return toggled

    def delete_grocery_item(self, db, item_id: int) -> None:
        BaseRepository(models.GroceryListItem, db).delete(item_id)
        logger.info("Deleted grocery item %s", item_id)

    def delete_grocery_list(self, db, list_id: int) -> None:
        BaseRepository(models.GroceryList, db).delete(list_id)
        logger.info("Deleted grocery list %s", list_id)

    def export_grocery_list(self, db, list_id: int, generated_on: Optional[date] = None) -> Tuple[str, str]:
        """Return `(filename, text)` for the list's unchecked items."""
        grocery_list = self.get_grocery_list(db, list_id)
        items = self.get_grocery_items(db, list_id)
        text = self.aggregator.export_text(items, grocery_list.title, generated_on=generated_on)
        return self.aggregator.export_filename(grocery_list.title), text


meal_planning_service = MealPlanningService()
__all__ = ["MealPlanningService", "meal_planning_service", "week_start"]
