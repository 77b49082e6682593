"""Profile API router.

A profile holds the dietary preferences and household size that drive plan
generation. It is created on the first PUT for a user.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.logger import get_logger
from database.deps import get_db_read, get_db_write
from schemas import ProfileResponse, ProfileUpdateRequest
from services.meal_planning import meal_planning_service

logger = get_logger("api.profiles")
router = APIRouter(prefix="/api/users", tags=["profiles"])


@router.get("/{user_id}/profile", response_model=ProfileResponse)
def get_profile(user_id: str, db: Session = Depends(get_db_read)):
    """Return the user's profile.

    Raises:
        NotFoundError: If the user has not saved a profile yet.
    """
    return meal_planning_service.require_profile(db, user_id)


@router.put("/{user_id}/profile", response_model=ProfileResponse)
def update_profile(user_id: str, payload: ProfileUpdateRequest, db: Session = Depends(get_db_write)):
    """Create or replace the user's profile."""
    profile = meal_planning_service.upsert_profile(db, user_id, payload)
    logger.info("Profile saved for user %s (preferences=%s, household=%s)", user_id, profile.dietary_preferences, profile.household_size)
    return profile
