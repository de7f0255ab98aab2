# dayflow/api/routers/activities.py
from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from dayflow.core.config import get_db
from dayflow.core.security import get_current_user
from dayflow.models.user import User
from dayflow.schemas.activities import DefaultActivity, SavedActivityCreate, SavedActivityOut
from dayflow.services.activities import activity_service

router = APIRouter(prefix="/activities", tags=["Activities"])


@router.get(
    "/defaults",
    response_model=List[DefaultActivity],
    summary="Built-in activity catalogue"
)
def list_default_activities():
    """Activities offered during onboarding."""
    return activity_service.list_default_activities()


@router.get(
    "/saved",
    response_model=List[SavedActivityOut],
    summary="Activities the user tracks"
)
def list_saved(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return activity_service.list_saved(db, current_user)


@router.post(
    "/saved",
    response_model=SavedActivityOut,
    status_code=status.HTTP_201_CREATED,
    summary="Start tracking an activity"
)
def add_saved(
    data: SavedActivityCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    - **name**: Activity name; surrounding spaces are trimmed

    Returns 409 when the activity is already tracked.
    """
    return activity_service.add_saved(db, current_user, data.name)


@router.delete(
    "/saved/{activity_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Stop tracking an activity"
)
def remove_saved(
    activity_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    activity_service.remove_saved(db, current_user, activity_id)
