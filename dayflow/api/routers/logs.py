# dayflow/api/routers/logs.py
from datetime import date
from typing import List, Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from dayflow.core.config import get_db
from dayflow.core.security import get_current_user
from dayflow.models.user import User
from dayflow.schemas.ai import UnloggedTimeRequest, UnloggedTimeSuggestion
from dayflow.schemas.logs import (
    ActivityLogOut,
    ExportResult,
    MoodLogCreate,
    MoodLogOut,
    SaveDayLogRequest,
    SaveDayLogResponse,
)
from dayflow.services.daily_log import daily_log_service

router = APIRouter(prefix="/logs", tags=["Daily Logs"])


# =====================================================================
# ACTIVITY LOGS
# =====================================================================

@router.post(
    "/activities",
    response_model=SaveDayLogResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Save the day's activity minutes"
)
def save_day_log(
    data: SaveDayLogRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Save one log entry per activity with a positive duration.

    - **activities**: list of `{name, duration}` (minutes)
    - **date**: defaults to today in the user's timezone
    - **export_to_airtable**: also mirror the entries to Airtable

    Returns 422 "No activities to save." when every duration is zero.
    """
    return daily_log_service.save_day_log(db, current_user, data)


@router.get(
    "/activities",
    response_model=List[ActivityLogOut],
    summary="Activity logs of a day"
)
def list_activity_logs(
    day: Optional[date] = Query(None, alias="date"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return daily_log_service.list_activity_logs(db, current_user, day)


@router.delete(
    "/activities/{log_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete an activity log entry"
)
def delete_activity_log(
    log_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    daily_log_service.delete_activity_log(db, current_user, log_id)


@router.post(
    "/export/airtable",
    response_model=ExportResult,
    summary="Export a day's activity logs to Airtable"
)
def export_to_airtable(
    day: Optional[date] = Query(None, alias="date"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Failures are reported in the body (`success: false`), not as HTTP errors."""
    return daily_log_service.export_to_airtable(db, current_user, day)


# =====================================================================
# MOOD LOGS
# =====================================================================

@router.post(
    "/mood",
    response_model=MoodLogOut,
    status_code=status.HTTP_201_CREATED,
    summary="Log energy, focus and mood"
)
def save_mood(
    data: MoodLogCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    - **energy**, **focus**, **mood**: integers from 0 to 10
    - **context**: optional note
    """
    return daily_log_service.save_mood(db, current_user, data)


@router.get(
    "/mood",
    response_model=List[MoodLogOut],
    summary="Mood check-ins of a day"
)
def list_mood_logs(
    day: Optional[date] = Query(None, alias="date"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return daily_log_service.list_mood_logs(db, current_user, day)


# =====================================================================
# AI SUGGESTIONS
# =====================================================================

@router.post(
    "/unlogged-time/suggestions",
    response_model=List[UnloggedTimeSuggestion],
    summary="Suggest activities for an unlogged gap"
)
def suggest_unlogged_time(
    data: UnloggedTimeRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    - **start**, **end**: HH:mm bounds of the gap
    - **date**: day of the gap, defaults to today
    """
    return daily_log_service.suggest_unlogged_time(db, current_user, data)
