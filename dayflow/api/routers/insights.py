# dayflow/api/routers/insights.py
from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from dayflow.core.config import get_db
from dayflow.core.security import get_current_user
from dayflow.models.user import User
from dayflow.schemas.insights import DaySummary, WeeklyAnalysis
from dayflow.services.insights import insight_service

router = APIRouter(prefix="/insights", tags=["Insights"])


@router.get(
    "/dashboard",
    response_model=DaySummary,
    summary="Today's activity breakdown"
)
def dashboard(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Time per activity for today, most time first, with each share of the day."""
    return insight_service.dashboard(db, current_user)


@router.get(
    "/day/{day}",
    response_model=DaySummary,
    summary="Logged and planned activities of a day"
)
def day_view(
    day: date,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return insight_service.day_view(db, current_user, day)


@router.get(
    "/weekly",
    response_model=WeeklyAnalysis,
    summary="Hours per activity across the week"
)
def weekly_analysis(
    reference: Optional[date] = Query(None, alias="date", description="Any day of the week"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Monday to Sunday breakdown for stacked bar charts.

    Each activity comes with a colour that stays the same across weeks.
    """
    return insight_service.weekly_analysis(db, current_user, reference)
