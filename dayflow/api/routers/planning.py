# dayflow/api/routers/planning.py
from datetime import date
from typing import List, Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from dayflow.core.clock import local_today
from dayflow.core.config import get_db
from dayflow.core.security import get_current_user
from dayflow.models.user import User
from dayflow.schemas.planning import PlannedActivityCreate, PlannedActivityOut
from dayflow.services.planning import planning_service

router = APIRouter(prefix="/planning", tags=["Planning"])


@router.post(
    "",
    response_model=PlannedActivityOut,
    status_code=status.HTTP_201_CREATED,
    summary="Plan an activity"
)
def plan_activity(
    data: PlannedActivityCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    - **activity_name**: what to do
    - **date**: YYYY-MM-DD
    - **time**: optional HH:mm
    """
    return planning_service.plan(db, current_user, data)


@router.get(
    "",
    response_model=List[PlannedActivityOut],
    summary="Planned activities of a day or a date range"
)
def list_planned(
    day: Optional[date] = Query(None, alias="date"),
    start: Optional[date] = None,
    end: Optional[date] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Pass `date` for one day, or `start` and `end` (inclusive) for a range."""
    if start or end:
        return planning_service.list_range(db, current_user, start or end, end or start)
    return planning_service.list_for_date(db, current_user, day or local_today(current_user))


@router.delete(
    "/{planned_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove a planned activity"
)
def delete_planned(
    planned_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    planning_service.delete(db, current_user, planned_id)
