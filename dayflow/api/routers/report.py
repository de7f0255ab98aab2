# dayflow/api/routers/report.py
from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from dayflow.core.config import get_db
from dayflow.core.security import get_current_user
from dayflow.models.user import User
from dayflow.schemas.ai import DailySummary, EmailResult, SendSummaryEmailRequest
from dayflow.services.report import report_service

router = APIRouter(prefix="/report", tags=["AI Report"])


@router.get(
    "/daily",
    response_model=DailySummary,
    summary="AI summary of a day"
)
def daily_summary(
    day: Optional[date] = Query(None, alias="date"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Ask the AI coach for a summary of the day's activities and mood check-ins,
    read against the goals in the user's profile.

    Returns 502 when the AI gives no usable answer and 503 when it is not configured.
    """
    return report_service.daily_summary(db, current_user, day)


@router.post(
    "/daily/email",
    response_model=EmailResult,
    summary="E-mail the daily summary"
)
def email_daily_summary(
    data: SendSummaryEmailRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    - **summary**: the summary already on screen; generated when omitted
    - **date**: day to summarise when no summary is sent

    Delivery problems are reported in the body (`success: false`).
    """
    return report_service.email_summary(db, current_user, data)
